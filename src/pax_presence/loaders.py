"""Load flight rows from JSON or CSV exports of the flights table."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pandas as pd

from pax_presence.models import Flight

logger = logging.getLogger(__name__)


def _missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return bool(pd.isna(value))


def parse_timestamp(value: Any) -> int | None:
    """Convert an ISO-8601 string or epoch number to epoch seconds.

    A trailing ``Z`` is accepted and naive timestamps are read as UTC.
    Empty values give None; anything unparseable raises ValueError.
    """
    if _missing(value):
        return None
    if isinstance(value, bool):
        raise ValueError(f"Invalid timestamp: {value!r}")
    if isinstance(value, (int, float)):
        return int(value)

    text = str(value).strip()
    if text.lstrip("-").isdigit():
        return int(text)
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        raise ValueError(f"Invalid timestamp: {value!r}") from None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp())


def _parse_passengers(value: Any) -> int | None:
    if _missing(value):
        return None
    try:
        passengers = int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"Invalid passenger estimate: {value!r}") from None
    if passengers < 0:
        raise ValueError(f"Negative passenger estimate: {value!r}")
    return passengers


def _text(value: Any) -> str:
    return "" if _missing(value) else str(value).strip()


def flight_from_record(record: Mapping[str, Any]) -> Flight:
    """Build a Flight from one backend row (``*_time_utc`` column names)."""
    flight_number = _text(record.get("flight_number"))
    if not flight_number:
        raise ValueError(f"Flight row without flight_number: {dict(record)!r}")

    return Flight(
        flight_number=flight_number,
        flight_type=_text(record.get("flight_type")),
        scheduled_time=parse_timestamp(record.get("scheduled_time_utc")),
        actual_time=parse_timestamp(record.get("actual_time_utc")),
        avg_pax_est=_parse_passengers(record.get("avg_pax_est")),
        airport_iata=_text(record.get("airport_iata")),
        target_airport_iata=_text(record.get("target_airport_iata")),
        flight_status=_text(record.get("flight_status")),
    )


def _read_json_records(path: Path) -> list[dict[str, Any]]:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("flights", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of flights")
    return data


def _read_csv_records(path: Path) -> list[dict[str, Any]]:
    df = pd.read_csv(path, dtype={"flight_number": str})
    return df.to_dict(orient="records")


def load_flights(path: Path) -> list[Flight]:
    """Read flights from a ``.json`` or ``.csv`` file."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".json":
        records = _read_json_records(path)
    elif suffix == ".csv":
        records = _read_csv_records(path)
    else:
        raise ValueError(f"Unsupported flights file type: {path.suffix or path.name}")

    flights = [flight_from_record(r) for r in records]
    logger.info("Loaded %d flights from %s", len(flights), path)
    return flights
