"""Data models for passenger presence estimation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal


class UnknownFlightTypeError(ValueError):
    """Raised in strict mode when a flight type is neither arrival nor departure."""


class FlightType(str, Enum):
    """Direction of a flight relative to the terminal."""

    ARRIVAL = "arrival"
    DEPARTURE = "departure"

    @classmethod
    def parse(cls, value: str | None) -> FlightType | None:
        """Match a raw backend flight type, case-insensitively.

        Accepts ``arrival``/``arr`` and ``departure``/``dep``; returns None
        for anything else, including None.  Surrounding whitespace is
        stripped first, so ``" Arrival "`` matches too.
        """
        if value is None:
            return None
        return _FLIGHT_TYPE_ALIASES.get(str(value).strip().lower())


_FLIGHT_TYPE_ALIASES: dict[str, FlightType] = {
    "arrival": FlightType.ARRIVAL,
    "arr": FlightType.ARRIVAL,
    "departure": FlightType.DEPARTURE,
    "dep": FlightType.DEPARTURE,
}


@dataclass(frozen=True)
class Flight:
    """A flight row as delivered by the backend. Times are epoch seconds."""

    flight_number: str
    flight_type: str
    scheduled_time: int | None = None
    actual_time: int | None = None
    avg_pax_est: int | None = None
    airport_iata: str = ""
    target_airport_iata: str = ""
    flight_status: str = ""

    @property
    def anchor_time(self) -> int | None:
        """Actual time when known, else scheduled time."""
        if self.actual_time is not None:
            return self.actual_time
        return self.scheduled_time

    @property
    def kind(self) -> FlightType | None:
        return FlightType.parse(self.flight_type)

    def passengers(self, default: int = 100) -> int:
        """Estimated cohort size; a missing or zero estimate falls back to *default*."""
        return self.avg_pax_est or default


@dataclass(frozen=True)
class PassengerTimePoint:
    """Expected passengers in the terminal for one flight at one instant."""

    flight_id: str
    flight_type: str
    time: int
    time_formatted: str
    passenger_count: int


@dataclass(frozen=True)
class GridColumn:
    """One per-flight column of a presence grid."""

    key: str
    flight_number: str
    flight_type: FlightType


@dataclass
class PassengerGridRow:
    """One 5-minute bucket of the multi-flight presence grid."""

    time: int
    time_formatted: str
    counts: dict[str, int] = field(default_factory=dict)
    total: int = 0

    def as_dict(self) -> dict[str, int | str]:
        """Flatten to ``{time, time_formatted, <column keys>, total}``."""
        row: dict[str, int | str] = {
            "time": self.time,
            "time_formatted": self.time_formatted,
        }
        row.update(self.counts)
        row["total"] = self.total
        return row


@dataclass
class PresenceGrid:
    """Time-indexed table of per-flight and total passenger counts."""

    columns: list[GridColumn] = field(default_factory=list)
    rows: list[PassengerGridRow] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.rows)

    @property
    def peak(self) -> PassengerGridRow | None:
        """Row with the highest total (earliest on ties)."""
        if not self.rows:
            return None
        return max(self.rows, key=lambda r: r.total)


@dataclass(frozen=True)
class ChartPoint:
    x: str
    y: int


@dataclass
class ChartSeries:
    """One stacked time-series layer, keyed by flight number."""

    id: str
    data: list[ChartPoint] = field(default_factory=list)


Period = Literal[
    "today",
    "this_week",
    "this_month",
    "last_month",
    "last_3_months",
    "this_year",
    "all_time",
]


@dataclass(frozen=True)
class FunnelRow:
    """Per-period counts returned by the funnel summary RPC."""

    period: Period
    flights_count: int
    disrupted_count: int
    campaigns_count: int


@dataclass(frozen=True)
class FunnelData:
    """Funnel counts of one period, with its display label."""

    label: str = ""
    flights: int = 0
    disrupted_flights: int = 0
    campaigns: int = 0


@dataclass(frozen=True)
class UnknownFlight:
    """A disrupted flight still waiting for a cause code."""

    flight_number: str
    d_scheduled_time_utc: str
    created_at: str
    cause_code: str = "UNKNOWN"
    d_airport_iata: str | None = None
    a_airport_iata: str | None = None


@dataclass(frozen=True)
class ResolvedFlight:
    """A disrupted flight whose cause code moved away from UNKNOWN."""

    flight_number: str
    d_scheduled_time_utc: str
    created_at: str
    resolved_at: str
    old_cause_code: str
    new_cause_code: str
    resolution_time_hours: float
    d_airport_iata: str | None = None
    a_airport_iata: str | None = None


@dataclass
class CauseCodeSummary:
    """Aggregate cause-code investigation metrics."""

    unknown_count: int = 0
    resolved_count: int = 0
    created_on_time_rate: float = 0.0
    resolved_on_time_rate: float = 0.0
    avg_resolution_hours: float = 0.0
    max_waiting_hours: float = 0.0
    resolved_by_cause: dict[str, int] = field(default_factory=dict)
