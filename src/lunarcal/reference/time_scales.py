from __future__ import annotations

import math

from .astro_args import J2000_TT
from .deltat import delta_t_days


# ============================================================
# TT -> UT (via ΔT)
# ============================================================

def decimal_year_from_jd(jd: float) -> float:
    return 2000.0 + (jd - J2000_TT) / 365.25


def jd_tt_to_jd_ut(jd_tt: float) -> float:
    """
    Convert JD(TT) to JD(UT):
      UT = TT − ΔT
    ΔT changes slowly, so evaluating it at TT instead of UT is harmless.
    """
    return jd_tt - delta_t_days(round(decimal_year_from_jd(jd_tt) * 10.0))


# ============================================================
# Civil time of the Chinese calendar
# ============================================================

# China Standard Time (120° E) for every year, as in the published tables.
STANDARD_TIME_HOURS = 8.0


def civil_offset_hours(jd_ut: float) -> float:
    """Offset (hours) from UT of the civil clock used by the calendar at jd_ut."""
    return STANDARD_TIME_HOURS


def civil_jdn(jd_tt: float) -> int:
    """Julian Day Number of the civil day (Chinese local time) containing jd_tt."""
    jd_ut = jd_tt_to_jd_ut(jd_tt)
    return int(math.floor(jd_ut + civil_offset_hours(jd_ut) / 24.0 + 0.5))
