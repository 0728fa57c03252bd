"""
lunarcal.engines.converter
--------------------------
Solar <-> lunar conversion for the Chinese lunisolar calendar.

Months start on the civil day of the true new moon; the year is organised in
"sui" running from the month containing one winter solstice (month 11) to the
month containing the next. A sui with 13 months inserts a leap month at the
first month without a principal term.
"""

from __future__ import annotations

import logging
import threading
from bisect import bisect_right
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, List, Optional, Tuple

from lunarcal.core.errors import ConversionError, MissingComponentError
from lunarcal.core.time import as_date, days_between, from_jdn, to_jdn
from lunarcal.core.types import LunarDate, LunarMonth
from lunarcal.reference.lunar import lunation_on_or_before, new_moon_jdn
from lunarcal.reference.solar import TERMS_PER_YEAR, is_principal_term, solar_term_jdns

logger = logging.getLogger(__name__)

WINTER_SOLSTICE = TERMS_PER_YEAR - 1


@dataclass(frozen=True)
class Sui:
    """Months from the one containing the winter solstice of year-1 up to (excluding) the next."""
    year: int
    months: Tuple[LunarMonth, ...]

    @property
    def first_jdn(self) -> int:
        return self.months[0].first_jdn

    @property
    def last_jdn(self) -> int:
        return self.months[-1].last_jdn


def _principal_term_jdns(year: int) -> List[int]:
    prev = solar_term_jdns(year - 1)
    cur = solar_term_jdns(year)
    out = [prev[WINTER_SOLSTICE]]
    out.extend(j for i, j in enumerate(cur) if is_principal_term(i))
    return out


def build_sui(year: int) -> Sui:
    ws_prev = solar_term_jdns(year - 1)[WINTER_SOLSTICE]
    ws = solar_term_jdns(year)[WINTER_SOLSTICE]
    k0 = lunation_on_or_before(ws_prev)
    k1 = lunation_on_or_before(ws)
    starts = [new_moon_jdn(k) for k in range(k0, k1 + 1)]
    n_months = k1 - k0

    leap_index: Optional[int] = None
    if n_months == 13:
        principal = _principal_term_jdns(year)
        for i in range(1, n_months):
            s, e = starts[i], starts[i + 1]
            if not any(s <= p < e for p in principal):
                leap_index = i
                break
        if leap_index is None:
            logger.error("sui %d has 13 months but every month holds a principal term", year)

    months: List[LunarMonth] = []
    number = 11
    year_label = year - 1
    for i in range(n_months):
        is_leap = False
        if i > 0:
            if i == leap_index:
                is_leap = True
            else:
                number = number % 12 + 1
            if number == 1 and not is_leap:
                year_label = year
        months.append(LunarMonth(
            year=year_label,
            month=number,
            is_leap_month=is_leap,
            first_jdn=starts[i],
            last_jdn=starts[i + 1] - 1,
        ))
    return Sui(year=year, months=tuple(months))


class LunarSolarConverter:
    """
    Converts Gregorian days to lunar dates and back within a bounded range.

    Sui tables are computed on first use and kept for the lifetime of the
    converter. Concurrent first access may compute a table twice; the first
    stored result wins and both are identical.
    """

    MIN_DATE = date(1900, 1, 1)
    MAX_DATE = date(2100, 12, 31)

    def __init__(self, *, min_date: date = MIN_DATE, max_date: date = MAX_DATE):
        if max_date < min_date:
            raise ValueError("max_date must be >= min_date")
        self.min_date = min_date
        self.max_date = max_date
        self._suis: Dict[int, Sui] = {}
        self._lock = threading.Lock()

    def info(self) -> Dict[str, str]:
        return {"min_date": self.min_date.isoformat(), "max_date": self.max_date.isoformat()}

    # ---------------------------------------------------------
    # Tables
    # ---------------------------------------------------------

    def sui(self, year: int) -> Sui:
        cached = self._suis.get(year)
        if cached is not None:
            return cached
        built = build_sui(year)
        with self._lock:
            stored = self._suis.setdefault(year, built)
        if stored is built:
            logger.debug("computed sui %d (%d months)", year, len(built.months))
        return stored

    def _check_range(self, d: date | datetime) -> date:
        day = as_date(d)
        if not (self.min_date <= day <= self.max_date):
            raise ConversionError(
                f"{day.isoformat()} is outside the supported range "
                f"[{self.min_date.isoformat()}, {self.max_date.isoformat()}]"
            )
        return day

    def _month_at_jdn(self, jdn: int, year: int) -> LunarMonth:
        sui = self.sui(year)
        if jdn > sui.last_jdn:
            sui = self.sui(year + 1)
        idx = bisect_right([m.first_jdn for m in sui.months], jdn) - 1
        if idx < 0:
            raise MissingComponentError(f"JDN {jdn} precedes sui {sui.year}")
        return sui.months[idx]

    # ---------------------------------------------------------
    # Forward: solar -> lunar
    # ---------------------------------------------------------

    def month_of(self, d: date | datetime) -> LunarMonth:
        day = self._check_range(d)
        return self._month_at_jdn(to_jdn(day), day.year)

    def to_lunar(self, d: date | datetime) -> LunarDate:
        day = self._check_range(d)
        jdn = to_jdn(day)
        m = self._month_at_jdn(jdn, day.year)
        return LunarDate(
            year=m.year,
            month=m.month,
            day=jdn - m.first_jdn + 1,
            is_leap_month=m.is_leap_month,
        )

    def is_leap_month(self, d: date | datetime) -> bool:
        return self.month_of(d).is_leap_month

    # ---------------------------------------------------------
    # Year structure
    # ---------------------------------------------------------

    def new_year_jdn(self, year: int) -> int:
        for m in self.sui(year).months:
            if m.month == 1 and not m.is_leap_month:
                return m.first_jdn
        raise MissingComponentError(f"sui {year} has no first month")

    def new_year_day(self, year: int) -> date:
        """Solar date of the first day of lunar year `year`."""
        return from_jdn(self.new_year_jdn(year))

    def last_day_of_lunar_year(self, d: date | datetime) -> date:
        """Eve of the lunar new year that ends the lunar year containing d."""
        lunar = self.to_lunar(d)
        return from_jdn(self.new_year_jdn(lunar.year + 1) - 1)

    def months_in_year(self, year: int) -> List[LunarMonth]:
        months = [m for m in self.sui(year).months if m.year == year]
        months += [m for m in self.sui(year + 1).months if m.year == year]
        return months

    # ---------------------------------------------------------
    # Inverse: lunar -> solar
    # ---------------------------------------------------------

    def to_solar(self, year: int, month: int, day: int, is_leap_month: bool = False) -> date:
        if not (1 <= month <= 12 and 1 <= day <= 30):
            raise ConversionError(f"Invalid lunar date {year}-{month}-{day}")
        for m in self.months_in_year(year):
            if m.month == month and m.is_leap_month == is_leap_month:
                if day > m.length:
                    raise ConversionError(f"Lunar month {year}-{month} has only {m.length} days")
                return self._check_range(from_jdn(m.first_jdn + day - 1))
        leap = "leap " if is_leap_month else ""
        raise ConversionError(f"Lunar year {year} has no {leap}month {month}")

    # ---------------------------------------------------------
    # Day arithmetic
    # ---------------------------------------------------------

    @staticmethod
    def days_between(a: date | datetime, b: date | datetime) -> int:
        return days_between(a, b)
