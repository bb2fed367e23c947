"""FastAPI wrapper for presence estimation."""

from __future__ import annotations

import logging
import tempfile
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated, Any

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from pax_presence import __version__
from pax_presence.config import OutputFormat, PresenceConfig
from pax_presence.exporters import export_csv, export_markdown
from pax_presence.exporters.json_export import grid_to_dict
from pax_presence.models import Flight, PresenceGrid, UnknownFlightTypeError
from pax_presence.presence import passenger_distribution, passenger_grid

logger = logging.getLogger(__name__)

_CONTENT_TYPES: dict[str, str] = {
    "csv": "text/csv; charset=utf-8",
    "markdown": "text/markdown; charset=utf-8",
}

_SUFFIX: dict[str, str] = {
    "csv": ".csv",
    "markdown": ".md",
}

_EXPORTERS: dict[str, Any] = {
    "csv": export_csv,
    "markdown": export_markdown,
}


class FlightIn(BaseModel):
    """A flight row as posted by the dashboard."""

    flight_number: str
    flight_type: str
    scheduled_time_utc: datetime | None = None
    actual_time_utc: datetime | None = None
    avg_pax_est: int | None = Field(default=None, ge=0)
    airport_iata: str = ""
    target_airport_iata: str = ""
    flight_status: str = ""

    def to_flight(self) -> Flight:
        return Flight(
            flight_number=self.flight_number,
            flight_type=self.flight_type,
            scheduled_time=_epoch(self.scheduled_time_utc),
            actual_time=_epoch(self.actual_time_utc),
            avg_pax_est=self.avg_pax_est,
            airport_iata=self.airport_iata,
            target_airport_iata=self.target_airport_iata,
            flight_status=self.flight_status,
        )


class SeriesRequest(BaseModel):
    flight: FlightIn


class GridRequest(BaseModel):
    flights: list[FlightIn] = Field(default_factory=list)


def _epoch(value: datetime | None) -> int | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp())


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncGenerator[None, None]:
    """Store startup state for the /health endpoint."""
    application.state.start_time = datetime.now(tz=timezone.utc)
    application.state.last_run = None
    application.state.run_count = 0
    yield


app = FastAPI(
    title="Pax Presence API",
    description="Terminal passenger presence estimates around flight times.",
    version=__version__,
    lifespan=lifespan,
)


def _record_run() -> None:
    app.state.last_run = datetime.now(tz=timezone.utc)
    app.state.run_count += 1


def _export(grid: PresenceGrid, fmt: OutputFormat) -> Response:
    """Serialize a grid into the requested format."""
    if fmt == "json":
        return JSONResponse(content=grid_to_dict(grid))

    exporter = _EXPORTERS[fmt]
    suffix = _SUFFIX[fmt]

    with tempfile.NamedTemporaryFile(suffix=suffix, delete=False) as tmp:
        tmp_path = Path(tmp.name)
    try:
        exporter(grid, tmp_path)
        content = tmp_path.read_text(encoding="utf-8")
    finally:
        tmp_path.unlink(missing_ok=True)

    return Response(content=content, media_type=_CONTENT_TYPES[fmt])


@app.get("/health")
def health() -> dict[str, Any]:
    """Server health check with uptime, version, and run count."""
    now = datetime.now(tz=timezone.utc)
    return {
        "status": "ok",
        "version": __version__,
        "uptime_seconds": round((now - app.state.start_time).total_seconds(), 1),
        "last_run": app.state.last_run.isoformat() if app.state.last_run else None,
        "run_count": app.state.run_count,
    }


@app.post("/presence/series")
def post_series(
    body: SeriesRequest,
    strict: Annotated[
        bool | None, Query(description="Reject unrecognized flight types."),
    ] = None,
) -> list[dict[str, Any]]:
    """Passenger series of a single flight; empty when it has no usable type or time."""
    config = PresenceConfig.from_overrides(strict_flight_types=strict)
    try:
        points = passenger_distribution(body.flight.to_flight(), config)
    except UnknownFlightTypeError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from None

    _record_run()
    return [asdict(p) for p in points]


@app.post("/presence/grid")
def post_grid(
    body: GridRequest,
    format: Annotated[
        OutputFormat, Query(description="Output format."),
    ] = "json",
    buffer_hours: Annotated[
        int | None,
        Query(ge=0, le=24, description="Trailing hours after the last window."),
    ] = None,
    strict: Annotated[
        bool | None, Query(description="Reject unrecognized flight types."),
    ] = None,
) -> Response:
    """Combined presence grid of the posted flights.

    The ``format`` param controls the response content type (json, csv,
    markdown).  JSON responses carry columns, rows and chart series.
    """
    config = PresenceConfig.from_overrides(
        grid_buffer_hours=buffer_hours, strict_flight_types=strict
    )
    flights = [f.to_flight() for f in body.flights]
    try:
        grid = passenger_grid(flights, config)
    except UnknownFlightTypeError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from None

    _record_run()
    logger.info("Grid computed for %d flights (%d rows)", len(flights), len(grid.rows))
    return _export(grid, format)
