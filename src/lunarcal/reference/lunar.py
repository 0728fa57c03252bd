# reference/lunar.py

from __future__ import annotations

import math
from functools import lru_cache

from . import astro_args as aa
from .time_scales import civil_jdn


# Periodic terms of the true new moon (Meeus, Astronomical Algorithms, ch. 49).
# (coefficient in days, power of E, multiples of M, M', F, Omega)
NEW_MOON_TERMS = (
    (-0.40720, 0, 0, 1, 0, 0),
    (0.17241, 1, 1, 0, 0, 0),
    (0.01608, 0, 0, 2, 0, 0),
    (0.01039, 0, 0, 0, 2, 0),
    (0.00739, 1, -1, 1, 0, 0),
    (-0.00514, 1, 1, 1, 0, 0),
    (0.00208, 2, 2, 0, 0, 0),
    (-0.00111, 0, 0, 1, -2, 0),
    (-0.00057, 0, 0, 1, 2, 0),
    (0.00056, 1, 1, 2, 0, 0),
    (-0.00042, 0, 0, 3, 0, 0),
    (0.00042, 1, 1, 0, 2, 0),
    (0.00038, 1, 1, 0, -2, 0),
    (-0.00024, 1, -1, 2, 0, 0),
    (-0.00017, 0, 0, 0, 0, 1),
    (-0.00007, 0, 2, 1, 0, 0),
    (0.00004, 0, 0, 2, -2, 0),
    (0.00004, 0, 3, 0, 0, 0),
    (0.00003, 0, 1, 1, -2, 0),
    (0.00003, 0, 0, 2, 2, 0),
    (-0.00003, 0, 1, 1, 2, 0),
    (0.00003, 0, -1, 1, 2, 0),
    (-0.00002, 0, -1, 1, -2, 0),
    (-0.00002, 0, 1, 3, 0, 0),
    (0.00002, 0, 0, 4, 0, 0),
)

# Planetary arguments: (coefficient in days, A0 deg, rate deg per lunation)
PLANETARY_TERMS = (
    (0.000325, 299.77, 0.107408),
    (0.000165, 251.88, 0.016321),
    (0.000164, 251.83, 26.651886),
    (0.000126, 349.42, 36.412478),
    (0.000110, 84.66, 18.206239),
    (0.000062, 141.74, 53.303771),
    (0.000060, 207.14, 2.453732),
    (0.000056, 154.84, 7.306860),
    (0.000047, 34.52, 27.261239),
    (0.000042, 207.19, 0.121824),
    (0.000040, 291.34, 1.844379),
    (0.000037, 161.72, 24.198154),
    (0.000035, 239.56, 25.513099),
    (0.000023, 331.55, 3.592518),
)


def true_new_moon_jde(k: int) -> float:
    """
    JD(TT) of the k-th true new moon (k = 0 is 2000-01-06).
    Accurate to well under a minute over 1900..2100.
    """
    T = aa.lunation_T(k)
    T2 = T * T
    T3 = T2 * T
    T4 = T2 * T2
    E = aa.eccentricity_factor(T)

    M = math.radians(2.5534 + 29.10535670 * k - 0.0000014 * T2 - 0.00000011 * T3)
    Mp = math.radians(201.5643 + 385.81693528 * k + 0.0107582 * T2 + 0.00001238 * T3 - 0.000000058 * T4)
    F = math.radians(160.7108 + 390.67050284 * k - 0.0016118 * T2 - 0.00000227 * T3 + 0.000000011 * T4)
    Omega = math.radians(124.7746 - 1.56375588 * k + 0.0020672 * T2 + 0.00000215 * T3)

    corr = 0.0
    for coef, e_pow, m, mp, f, om in NEW_MOON_TERMS:
        corr += coef * (E ** e_pow) * math.sin(m * M + mp * Mp + f * F + om * Omega)

    A1_extra = -0.009173 * T2
    for i, (coef, a0, rate) in enumerate(PLANETARY_TERMS):
        arg = a0 + rate * k + (A1_extra if i == 0 else 0.0)
        corr += coef * math.sin(math.radians(arg))

    return aa.jde_mean_new_moon(k) + corr


@lru_cache(maxsize=4096)
def new_moon_jdn(k: int) -> int:
    """Civil day number (Chinese local time) of the k-th true new moon."""
    return civil_jdn(true_new_moon_jde(k))


def lunation_on_or_before(jdn: int) -> int:
    """Index k of the last new moon whose civil day is on or before jdn."""
    k = aa.lunation_from_jd(jdn) + 1
    while new_moon_jdn(k) > jdn:
        k -= 1
    while new_moon_jdn(k + 1) <= jdn:
        k += 1
    return k
