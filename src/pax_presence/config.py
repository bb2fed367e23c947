"""Configuration model for passenger presence estimation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings

OutputFormat = Literal["json", "csv", "markdown"]


class PresenceConfig(BaseSettings):
    """Model and output parameters for presence estimation.

    Values can be set via constructor arguments, environment variables
    prefixed with PAX_PRESENCE_, or defaults.
    """

    model_config = {"env_prefix": "PAX_PRESENCE_"}

    step_minutes: int = Field(
        default=5, ge=1, le=60, description="Sampling step of series and grids."
    )
    arrival_window_minutes: int = Field(
        default=90, ge=1, description="Minutes for an arriving cohort to leave the terminal."
    )
    departure_lead_hours: int = Field(
        default=3, ge=1, le=24, description="Hours before departure the terminal window opens."
    )
    grid_buffer_hours: int = Field(
        default=2, ge=0, le=24, description="Trailing buffer after the latest window end."
    )
    arrival_sigma: float = Field(
        default=0.3, gt=0.0, description="Log-normal shape of terminal exits."
    )
    arrival_median_fraction: float = Field(
        default=0.3, gt=0.0, le=1.0,
        description="Window fraction at which half the arriving cohort has left.",
    )
    departure_sigma: float = Field(
        default=0.5, gt=0.0, description="Log-normal shape of terminal show-ups."
    )
    departure_median_fraction: float = Field(
        default=0.7, gt=0.0, le=1.0,
        description="Window fraction at which half the departing cohort has arrived.",
    )
    default_passengers: int = Field(
        default=100, ge=0, description="Cohort size when a flight has no estimate."
    )
    strict_flight_types: bool = Field(
        default=False,
        description="Raise on unrecognized flight types instead of skipping them.",
    )
    output_file: Path = Field(
        default=Path("passenger_grid.json"), description="Output file path."
    )
    output_format: OutputFormat = Field(
        default="json", description="Output format: json, csv, or markdown."
    )

    @classmethod
    def from_overrides(cls, **overrides: Any) -> PresenceConfig:
        """Build a config, applying only the overrides that are not None.

        Unset CLI options and query parameters arrive as None, so they fall
        through to PAX_PRESENCE_* environment variables and defaults.
        """
        return cls(**{k: v for k, v in overrides.items() if v is not None})

    @property
    def step_seconds(self) -> int:
        return self.step_minutes * 60

    @property
    def arrival_window_seconds(self) -> int:
        return self.arrival_window_minutes * 60

    @property
    def departure_lead_seconds(self) -> int:
        return self.departure_lead_hours * 3600

    @property
    def grid_buffer_seconds(self) -> int:
        return self.grid_buffer_hours * 3600
