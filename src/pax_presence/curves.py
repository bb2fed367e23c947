"""Presence curves: passengers in the terminal over time for one flight.

Arrivals dissipate from N to 0 after landing; departures accumulate from
0 to N before take-off.  Both curves are a log-normal CDF over the elapsed
fraction of a bounded window, normalised so they hit their boundary value
exactly at the window end.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pax_presence.config import PresenceConfig
from pax_presence.distributions import lognorm_cdf
from pax_presence.models import Flight, FlightType, UnknownFlightTypeError

logger = logging.getLogger(__name__)

_HOUR = 3600


def _normalized_cdf(fraction: float, sigma: float, median_fraction: float) -> float:
    return lognorm_cdf(fraction, sigma, median_fraction) / lognorm_cdf(
        1.0, sigma, median_fraction
    )


def arrival_remaining(
    t: float,
    n: float,
    t_land: float,
    t_end: float,
    sigma: float = 0.3,
    median_fraction: float = 0.3,
) -> float:
    """Passengers of a landed cohort still in the terminal at time *t*.

    N up to landing, 0 from *t_end* on, log-normal exits in between.
    """
    if t <= t_land:
        return n
    if t >= t_end:
        return 0.0

    fraction = (t - t_land) / (t_end - t_land)
    return n * (1.0 - _normalized_cdf(fraction, sigma, median_fraction))


def departure_accumulated(
    t: float,
    n: float,
    t_open: float,
    t_dep: float,
    sigma: float = 0.5,
    median_fraction: float = 0.7,
) -> float:
    """Passengers of a departing cohort already in the terminal at time *t*.

    0 up to *t_open*, N from departure on, log-normal show-ups in between.
    """
    if t <= t_open:
        return 0.0
    if t >= t_dep:
        return n

    fraction = (t - t_open) / (t_dep - t_open)
    return n * _normalized_cdf(fraction, sigma, median_fraction)


def terminal_open_time(t_dep: int, lead_seconds: int) -> int:
    """Start of a departure window: *lead_seconds* before departure, floored to the hour."""
    raw_start = t_dep - lead_seconds
    return raw_start - raw_start % _HOUR


@dataclass(frozen=True)
class ArrivalCurve:
    """Dissipation curve of one arriving flight."""

    passengers: int
    t_land: int
    t_end: int
    sigma: float = 0.3
    median_fraction: float = 0.3

    flight_type = FlightType.ARRIVAL

    @property
    def window_start(self) -> int:
        return self.t_land

    @property
    def window_end(self) -> int:
        return self.t_end

    def value(self, t: float) -> float:
        return arrival_remaining(
            t, self.passengers, self.t_land, self.t_end, self.sigma, self.median_fraction
        )

    def presence(self, t: float) -> float:
        """Like value(), but a flight that has not landed contributes nobody."""
        if t < self.t_land:
            return 0.0
        return self.value(t)

    def sample_times(self, step: int) -> list[int]:
        """Step-aligned instants from the first one at/after landing through t_end."""
        first = -(-self.t_land // step) * step
        return list(range(first, self.t_end + 1, step))


@dataclass(frozen=True)
class DepartureCurve:
    """Accumulation curve of one departing flight."""

    passengers: int
    t_open: int
    t_dep: int
    sigma: float = 0.5
    median_fraction: float = 0.7

    flight_type = FlightType.DEPARTURE

    @property
    def window_start(self) -> int:
        return self.t_open

    @property
    def window_end(self) -> int:
        return self.t_dep

    def value(self, t: float) -> float:
        return departure_accumulated(
            t, self.passengers, self.t_open, self.t_dep, self.sigma, self.median_fraction
        )

    def presence(self, t: float) -> float:
        """Like value(), but a departed flight no longer occupies the terminal."""
        if t > self.t_dep:
            return 0.0
        return self.value(t)

    def sample_times(self, step: int) -> list[int]:
        """Instants from t_open every *step*, always ending exactly at departure."""
        times = list(range(self.t_open, self.t_dep + 1, step))
        if not times or times[-1] < self.t_dep:
            times.append(self.t_dep)
        return times


PresenceCurve = ArrivalCurve | DepartureCurve


def build_curve(
    flight: Flight, config: PresenceConfig | None = None
) -> PresenceCurve | None:
    """Build the presence curve for *flight*, or None when it has none.

    A flight without actual or scheduled time has no curve.  An unrecognized
    flight type has no curve either, unless ``config.strict_flight_types``
    is set, in which case UnknownFlightTypeError is raised.
    """
    if config is None:
        config = PresenceConfig()

    kind = flight.kind
    if kind is None:
        if config.strict_flight_types:
            raise UnknownFlightTypeError(
                f"Flight {flight.flight_number}: unrecognized flight type "
                f"{flight.flight_type!r}"
            )
        logger.debug(
            "Skipping %s: unrecognized flight type %r",
            flight.flight_number,
            flight.flight_type,
        )
        return None

    anchor = flight.anchor_time
    if anchor is None:
        logger.debug("Skipping %s: no actual or scheduled time", flight.flight_number)
        return None

    n = flight.passengers(config.default_passengers)

    if kind is FlightType.ARRIVAL:
        return ArrivalCurve(
            passengers=n,
            t_land=anchor,
            t_end=anchor + config.arrival_window_seconds,
            sigma=config.arrival_sigma,
            median_fraction=config.arrival_median_fraction,
        )

    return DepartureCurve(
        passengers=n,
        t_open=terminal_open_time(anchor, config.departure_lead_seconds),
        t_dep=anchor,
        sigma=config.departure_sigma,
        median_fraction=config.departure_median_fraction,
    )
