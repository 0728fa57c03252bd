# reference/astro_args.py

from __future__ import annotations

from math import fmod, radians, sin


# ------------------------------------------------------------
# Units & helpers
# ------------------------------------------------------------

def wrap_deg(x_deg: float) -> float:
    """Wrap degrees to [0,360)."""
    y = fmod(x_deg, 360.0)
    if y < 0:
        y += 360.0
    return y

def wrap180(deg: float) -> float:
    """Wraps an angle in degrees to the range [-180.0, 180.0)."""
    return (deg + 180.0) % 360.0 - 180.0

# ------------------------------------------------------------
# Time variable (TT)
# ------------------------------------------------------------

J2000_TT = 2451545.0  # JD(TT) at J2000.0
MEAN_SYNODIC_MONTH = 29.530588861
MEAN_TROPICAL_YEAR = 365.242189


def T_centuries(jd_tt: float) -> float:
    """Julian centuries from J2000.0 in TT."""
    return (jd_tt - J2000_TT) / 36525.0


def lunar_node_deg(T: float) -> float:
    """Longitude of the Moon's mean ascending node, wrapped to [0,360)."""
    return wrap_deg(125.04452 - 1934.136261 * T + 0.0020708 * T * T + (T * T * T) / 450000.0)


# ------------------------------------------------------------
# Mean new moon (Meeus ch. 49)
# ------------------------------------------------------------

def lunation_T(k: float) -> float:
    """Julian centuries from J2000.0 as used by the lunation series."""
    return k / 1236.85


def jde_mean_new_moon(k: float) -> float:
    """
    Mean Julian Ephemeris Day (TT) of the k-th new moon relative to 2000.

      JDE = 2451550.09766 + 29.530588861 k
            + 0.00015437 T^2 - 0.000000150 T^3 + 0.00000000073 T^4,
      T = k / 1236.85.
    """
    T = lunation_T(k)
    T2 = T * T
    return (
        2451550.09766
        + MEAN_SYNODIC_MONTH * k
        + 0.00015437 * T2
        - 0.000000150 * T2 * T
        + 0.00000000073 * T2 * T2
    )


def lunation_from_jd(jd: float) -> int:
    """Index k of the mean new moon at or just before jd."""
    return int((jd - 2451550.09766) // MEAN_SYNODIC_MONTH)


def eccentricity_factor(T: float) -> float:
    """
    Eccentricity factor E for the Earth's orbit.
    Scales periodic terms that depend on the Sun's mean anomaly.
    """
    return 1.0 - 0.002516 * T - 0.0000074 * (T * T)


# ------------------------------------------------------------
# Nutation in longitude (Meeus ch. 22, IAU 1980 leading terms)
# ------------------------------------------------------------

# (D, M, M', F, Omega multipliers, coefficient, T rate), units 0.0001 arcsec
_NUTATION_LON = (
    (0, 0, 0, 0, 1, -171996.0, -174.2),
    (-2, 0, 0, 2, 2, -13187.0, -1.6),
    (0, 0, 0, 2, 2, -2274.0, -0.2),
    (0, 0, 0, 0, 2, 2062.0, 0.2),
    (0, 1, 0, 0, 0, 1426.0, -3.4),
    (0, 0, 1, 0, 0, 712.0, 0.1),
    (-2, 1, 0, 2, 2, -517.0, 1.2),
    (0, 0, 0, 2, 1, -386.0, -0.4),
    (0, 0, 1, 2, 2, -301.0, 0.0),
    (-2, -1, 0, 2, 2, 217.0, -0.5),
    (-2, 0, 1, 0, 0, -158.0, 0.0),
    (-2, 0, 0, 2, 1, 129.0, 0.1),
    (0, 0, -1, 2, 2, 123.0, 0.0),
    (2, 0, 0, 0, 0, 63.0, 0.0),
    (0, 0, 1, 0, 1, 63.0, 0.1),
    (2, 0, -1, 2, 2, -59.0, 0.0),
    (0, 0, -1, 0, 1, -58.0, -0.1),
    (0, 0, 1, 2, 1, -51.0, 0.0),
)


def nutation_longitude_arcsec(T: float) -> float:
    """Nutation in longitude (arcsec); the terms kept here are good to ~0.1 arcsec."""
    T2 = T * T
    T3 = T2 * T
    D = radians(297.85036 + 445267.111480 * T - 0.0019142 * T2 + T3 / 189474.0)
    M = radians(357.52772 + 35999.050340 * T - 0.0001603 * T2 - T3 / 300000.0)
    Mp = radians(134.96298 + 477198.867398 * T + 0.0086972 * T2 + T3 / 56250.0)
    F = radians(93.27191 + 483202.017538 * T - 0.0036825 * T2 + T3 / 327270.0)
    Om = radians(lunar_node_deg(T))

    total = 0.0
    for d, m, mp, f, om, c, rate in _NUTATION_LON:
        total += (c + rate * T) * sin(d * D + m * M + mp * Mp + f * F + om * Om)
    return total * 1e-4
