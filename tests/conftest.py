"""Shared fixtures for pax_presence tests."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from pax_presence.config import PresenceConfig
from pax_presence.models import Flight

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def utc(hour: int, minute: int = 0, day: int = 10) -> int:
    """Epoch seconds for 2025-03-<day> hour:minute UTC."""
    return int(datetime(2025, 3, day, hour, minute, tzinfo=timezone.utc).timestamp())


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def sample_json_path() -> Path:
    return FIXTURES_DIR / "flights_sample.json"


@pytest.fixture
def sample_csv_path() -> Path:
    return FIXTURES_DIR / "flights_sample.csv"


@pytest.fixture
def config() -> PresenceConfig:
    return PresenceConfig()


@pytest.fixture
def arrival_flight() -> Flight:
    """80 passengers landing exactly at 10:00 UTC."""
    return Flight(
        flight_number="BA117",
        flight_type="arrival",
        scheduled_time=utc(9, 50),
        actual_time=utc(10, 0),
        avg_pax_est=80,
    )


@pytest.fixture
def departure_flight() -> Flight:
    """150 passengers departing exactly at 10:00 UTC."""
    return Flight(
        flight_number="LH401",
        flight_type="departure",
        scheduled_time=utc(10, 0),
        avg_pax_est=150,
    )


@pytest.fixture
def mixed_flights() -> list[Flight]:
    """Arrival of 50 at 10:00 and departure of 60 at 11:00."""
    return [
        Flight(
            flight_number="BA117",
            flight_type="arrival",
            actual_time=utc(10, 0),
            avg_pax_est=50,
        ),
        Flight(
            flight_number="LH401",
            flight_type="departure",
            scheduled_time=utc(11, 0),
            avg_pax_est=60,
        ),
    ]
