# reference/solar.py

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

from scipy.optimize import brentq

from . import astro_args as aa
from . import vsop87
from .time_scales import civil_jdn


FK5_CORRECTION_ARCSEC = 0.09033
ABERRATION_ARCSEC = 20.4898


@dataclass(frozen=True)
class SolarCoordinates:
    """True and apparent solar coordinates (degrees)."""
    L_true_deg: float
    L_app_deg: float


def solar_longitude(jd_tt: float) -> SolarCoordinates:
    """
    Computes true and apparent geocentric solar longitude for a given JD(TT)
    from the VSOP87 Earth series (Meeus ch. 25, higher accuracy method),
    good to about one arcsecond.
    """
    theta = math.degrees(vsop87.earth_longitude_rad(jd_tt)) + 180.0

    # VSOP87 dynamical ecliptic -> FK5
    L_true = aa.wrap_deg(theta - FK5_CORRECTION_ARCSEC / 3600.0)

    T = aa.T_centuries(jd_tt)
    R = vsop87.earth_radius_au(jd_tt)
    L_app = aa.wrap_deg(
        L_true + (aa.nutation_longitude_arcsec(T) - ABERRATION_ARCSEC / R) / 3600.0
    )

    return SolarCoordinates(L_true_deg=L_true, L_app_deg=L_app)


# ------------------------------------------------------------
# Solar terms (jieqi): crossings of multiples of 15 deg
# ------------------------------------------------------------

# Terms are indexed in Gregorian order within a year, starting with
# Minor Cold (285 deg, early January). Odd indices are the principal
# terms (zhongqi), whose longitudes are multiples of 30 deg.
TERMS_PER_YEAR = 24
FIRST_TERM_LONGITUDE = 285.0


def term_longitude(index: int) -> float:
    return aa.wrap_deg(FIRST_TERM_LONGITUDE + 15.0 * index)


def is_principal_term(index: int) -> bool:
    return index % 2 == 1


def solar_term_jde(year: int, index: int) -> float:
    """
    JD(TT) when the apparent solar longitude reaches term `index` of `year`.

    The mean motion gives a guess within ~2 days; the exact crossing is
    bracketed +/- 5 days around it and refined with Brent's method.
    """
    if not 0 <= index < TERMS_PER_YEAR:
        raise ValueError(f"term index must be in [0, {TERMS_PER_YEAR}), got {index}")
    target = term_longitude(index)
    # 2000-01-06 is within a day of Minor Cold; advance by mean term spacing.
    guess = 2451550.0 + (year - 2000) * aa.MEAN_TROPICAL_YEAR + index * aa.MEAN_TROPICAL_YEAR / TERMS_PER_YEAR

    def f(jd: float) -> float:
        return aa.wrap180(solar_longitude(jd).L_app_deg - target)

    return brentq(f, guess - 5.0, guess + 5.0, xtol=1e-7)


@lru_cache(maxsize=512)
def solar_term_jdns(year: int) -> Tuple[int, ...]:
    """Civil day numbers of the 24 solar terms of a Gregorian year, in order."""
    return tuple(civil_jdn(solar_term_jde(year, i)) for i in range(TERMS_PER_YEAR))
