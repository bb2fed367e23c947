"""Closed-form normal and log-normal cumulative distribution functions."""

from __future__ import annotations

import math

# Abramowitz & Stegun 7.1.26 coefficients for erf(x), |error| < 1.5e-7
_A1 = 0.254829592
_A2 = -0.284496736
_A3 = 1.421413741
_A4 = -1.453152027
_A5 = 1.061405429
_P = 0.3275911


def normal_cdf(x: float) -> float:
    """Standard normal CDF via the Abramowitz & Stegun rational approximation.

    Phi(x) = 0.5 * (1 + erf(x / sqrt(2))), with erf evaluated by the
    five-term polynomial in t = 1 / (1 + p*|z|).  Deterministic, no iteration.
    """
    sign = -1.0 if x < 0 else 1.0
    z = abs(x) / math.sqrt(2.0)

    t = 1.0 / (1.0 + _P * z)
    poly = ((((_A5 * t + _A4) * t + _A3) * t + _A2) * t + _A1) * t
    erf = 1.0 - poly * math.exp(-z * z)

    return 0.5 * (1.0 + sign * erf)


def lognorm_cdf(x: float, sigma: float, scale: float) -> float:
    """Log-normal CDF with shape *sigma* and median *scale*.

    Same parameterisation as ``scipy.stats.lognorm.cdf(x, s=sigma, scale=scale)``:
        CDF(x) = Phi((ln(x) - ln(scale)) / sigma)

    Returns exactly 0.0 for x <= 0.
    """
    if x <= 0:
        return 0.0
    return normal_cdf((math.log(x) - math.log(scale)) / sigma)
