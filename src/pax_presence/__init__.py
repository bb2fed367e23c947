"""Passenger presence estimation for airport terminals."""

from pax_presence.curves import (
    ArrivalCurve,
    DepartureCurve,
    arrival_remaining,
    build_curve,
    departure_accumulated,
)
from pax_presence.distributions import lognorm_cdf, normal_cdf
from pax_presence.models import Flight, FlightType, UnknownFlightTypeError
from pax_presence.presence import (
    passenger_distribution,
    passenger_grid,
    passenger_grid_rows,
    to_chart_series,
)

__version__ = "0.1.0"

__all__ = [
    "ArrivalCurve",
    "DepartureCurve",
    "Flight",
    "FlightType",
    "UnknownFlightTypeError",
    "arrival_remaining",
    "build_curve",
    "departure_accumulated",
    "lognorm_cdf",
    "normal_cdf",
    "passenger_distribution",
    "passenger_grid",
    "passenger_grid_rows",
    "to_chart_series",
]
