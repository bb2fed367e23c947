"""Per-flight passenger series and multi-flight presence grids."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from datetime import datetime, timezone

from pax_presence.config import PresenceConfig
from pax_presence.curves import PresenceCurve, build_curve
from pax_presence.models import (
    ChartPoint,
    ChartSeries,
    Flight,
    GridColumn,
    PassengerGridRow,
    PassengerTimePoint,
    PresenceGrid,
)

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for non-negative input."""
    return math.floor(value + 0.5)


def format_time(t: int) -> str:
    """24-hour ``HH:MM`` label of an epoch instant, in UTC."""
    return datetime.fromtimestamp(t, tz=timezone.utc).strftime("%H:%M")


def passenger_distribution(
    flight: Flight, config: PresenceConfig | None = None
) -> list[PassengerTimePoint]:
    """Sample one flight's presence curve every step across its window.

    Arrivals start at the first step-aligned instant at/after landing and
    run through the end of the dissipation window.  Departures start at the
    hour-floored terminal opening and end exactly at departure with the full
    cohort.  Flights without a usable type or time yield an empty list.
    """
    if config is None:
        config = PresenceConfig()

    curve = build_curve(flight, config)
    if curve is None:
        return []

    return [
        PassengerTimePoint(
            flight_id=flight.flight_number,
            flight_type=flight.flight_type,
            time=t,
            time_formatted=format_time(t),
            passenger_count=round_half_up(curve.value(t)),
        )
        for t in curve.sample_times(config.step_seconds)
    ]


def _usable_curves(
    flights: Iterable[Flight], config: PresenceConfig
) -> list[tuple[GridColumn, PresenceCurve]]:
    usable: list[tuple[GridColumn, PresenceCurve]] = []
    for index, flight in enumerate(flights):
        curve = build_curve(flight, config)
        if curve is None:
            logger.warning(
                "Flight %s left out of grid (type=%r, no usable time or type)",
                flight.flight_number,
                flight.flight_type,
            )
            continue
        column = GridColumn(
            key=f"flight_{index}",
            flight_number=flight.flight_number,
            flight_type=curve.flight_type,
        )
        usable.append((column, curve))
    return usable


def passenger_grid(
    flights: Iterable[Flight], config: PresenceConfig | None = None
) -> PresenceGrid:
    """Combine several flights into one step-bucketed presence table.

    The axis runs from the earliest window start (floored to the step) to
    the latest window end plus the trailing buffer.  Every cell is evaluated
    analytically at its instant: arrivals count nobody before landing and
    departures count nobody after take-off.  ``total`` is the sum of the
    rounded cells of its row.
    """
    if config is None:
        config = PresenceConfig()

    usable = _usable_curves(flights, config)
    if not usable:
        return PresenceGrid()

    step = config.step_seconds
    min_time = min(curve.window_start for _, curve in usable)
    max_time = max(curve.window_end for _, curve in usable) + config.grid_buffer_seconds
    start_time = min_time // step * step

    rows: list[PassengerGridRow] = []
    for t in range(start_time, max_time + 1, step):
        counts = {
            column.key: round_half_up(curve.presence(t)) for column, curve in usable
        }
        rows.append(
            PassengerGridRow(
                time=t,
                time_formatted=format_time(t),
                counts=counts,
                total=sum(counts.values()),
            )
        )

    logger.debug(
        "Grid: %d flights x %d rows (%s to %s)",
        len(usable),
        len(rows),
        rows[0].time_formatted,
        rows[-1].time_formatted,
    )
    return PresenceGrid(columns=[column for column, _ in usable], rows=rows)


def passenger_grid_rows(
    flights: Iterable[Flight], config: PresenceConfig | None = None
) -> list[PassengerGridRow]:
    """Rows of passenger_grid() without the column metadata."""
    return passenger_grid(flights, config).rows


def to_chart_series(grid: PresenceGrid) -> list[ChartSeries]:
    """One stacked-chart series per grid column, in column order."""
    if not grid.rows:
        return []

    return [
        ChartSeries(
            id=column.flight_number,
            data=[
                ChartPoint(x=row.time_formatted, y=row.counts.get(column.key, 0))
                for row in grid.rows
            ],
        )
        for column in grid.columns
    ]
