"""
lunarcal.reference.deltat

ΔT (= TT − UT) from the Espenak–Meeus (NASA) piecewise polynomials.

Only the branches covering the supported calendar span (and a margin on both
sides) are kept; outside them the long-term parabola is used.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Tuple


def _poly(u: float, coeffs: Tuple[float, ...]) -> float:
    """Horner evaluation for Σ coeffs[k] u^k."""
    acc = 0.0
    for c in reversed(coeffs):
        acc = acc * u + c
    return acc


def _parabola(y: float) -> float:
    u = (y - 1820.0) / 100.0
    return -20.0 + 32.0 * u * u


def delta_t_seconds(y: float) -> float:
    """ΔT(y) in seconds, where y is a decimal year."""
    if y < 1860.0 or y >= 2150.0:
        return _parabola(y)
    if y < 1900.0:
        t = y - 1860.0
        return 7.62 + 0.5737 * t - 0.251754 * (t ** 2) + 0.01680668 * (t ** 3) - 0.0004473624 * (t ** 4) + (t ** 5) / 233174.0
    if y < 1920.0:
        t = y - 1900.0
        return -2.79 + 1.494119 * t - 0.0598939 * (t ** 2) + 0.0061966 * (t ** 3) - 0.000197 * (t ** 4)
    if y < 1941.0:
        t = y - 1920.0
        return 21.20 + 0.84493 * t - 0.076100 * (t ** 2) + 0.0020936 * (t ** 3)
    if y < 1961.0:
        t = y - 1950.0
        return 29.07 + 0.407 * t - (t ** 2) / 233.0 + (t ** 3) / 2547.0
    if y < 1986.0:
        t = y - 1975.0
        return 45.45 + 1.067 * t - (t ** 2) / 260.0 - (t ** 3) / 718.0
    if y < 2005.0:
        t = y - 2000.0
        return _poly(t, (63.86, 0.3345, -0.060374, 0.0017275, 0.000651814, 0.00002373599))
    if y < 2050.0:
        t = y - 2000.0
        return 62.92 + 0.32217 * t + 0.005589 * (t ** 2)
    # discontinuity-fix term towards the parabola at 2150
    return _parabola(y) - 0.5628 * (2150.0 - y)


@lru_cache(maxsize=4096)
def delta_t_days(year_tenths: int) -> float:
    """ΔT in days, sampled on a 0.1-year grid (ΔT varies slowly)."""
    return delta_t_seconds(year_tenths / 10.0) / 86400.0
