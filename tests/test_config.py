"""Tests for configuration loading and validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pax_presence.config import PresenceConfig


class TestPresenceConfig:
    def test_defaults(self):
        config = PresenceConfig()
        assert config.step_seconds == 300
        assert config.arrival_window_seconds == 90 * 60
        assert config.departure_lead_seconds == 3 * 3600
        assert config.grid_buffer_seconds == 2 * 3600
        assert config.arrival_sigma == 0.3
        assert config.departure_median_fraction == 0.7
        assert config.default_passengers == 100
        assert config.strict_flight_types is False

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("PAX_PRESENCE_ARRIVAL_WINDOW_MINUTES", "120")
        monkeypatch.setenv("PAX_PRESENCE_STRICT_FLIGHT_TYPES", "true")
        config = PresenceConfig()
        assert config.arrival_window_minutes == 120
        assert config.strict_flight_types is True

    @pytest.mark.parametrize(
        "field,value",
        [
            ("arrival_sigma", 0.0),
            ("departure_median_fraction", 1.5),
            ("step_minutes", 0),
            ("default_passengers", -1),
        ],
    )
    def test_rejects_out_of_range(self, field, value):
        with pytest.raises(ValidationError):
            PresenceConfig(**{field: value})

    def test_overrides_skip_none(self, monkeypatch):
        monkeypatch.setenv("PAX_PRESENCE_GRID_BUFFER_HOURS", "5")
        config = PresenceConfig.from_overrides(grid_buffer_hours=None, strict_flight_types=True)
        assert config.grid_buffer_hours == 5
        assert config.strict_flight_types is True

    def test_overrides_beat_env(self, monkeypatch):
        monkeypatch.setenv("PAX_PRESENCE_GRID_BUFFER_HOURS", "5")
        assert PresenceConfig.from_overrides(grid_buffer_hours=0).grid_buffer_hours == 0
