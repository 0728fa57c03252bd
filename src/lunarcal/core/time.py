from __future__ import annotations
from datetime import date, datetime

from .errors import ConversionError


def as_date(d: date | datetime) -> date:
    """Reduce a date or datetime to its civil day."""
    if isinstance(d, datetime):
        return d.date()
    if isinstance(d, date):
        return d
    raise ConversionError(f"Not a date: {d!r}")


def to_jdn(d: date) -> int:
    """Convert Gregorian date to Julian Day Number (JDN)."""
    y, m, day = d.year, d.month, d.day
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    jdn = day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045
    return jdn

def from_jdn(jdn: int) -> date:
    """Fliegel-Van Flandern inverse of to_jdn (Gregorian)."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return date(year, month, day)

def days_between(a: date | datetime, b: date | datetime) -> int:
    """Signed day count from a to b; time of day is ignored."""
    return to_jdn(as_date(b)) - to_jdn(as_date(a))

def mmdd(d: date) -> str:
    """Four-digit month-day key, e.g. '0105'."""
    return f"{d.month:02d}{d.day:02d}"
