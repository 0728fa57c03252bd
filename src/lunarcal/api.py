from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .annotate import CellAnnotator
from .config import Settings
from .core.types import CalendarItem, CellAnnotation, DaysBetweenResult, HolidayType, LunarDate, LunarMonth
from .day_counter import transition, Armed, Pick
from .engines.converter import LunarSolarConverter
from .engines.terms import SolarTermTable
from .holidays import HolidayManager
from .tables.festivals import FestivalTable


@dataclass(frozen=True)
class Services:
    """The collaborators a CellAnnotator is built from."""
    converter: LunarSolarConverter
    terms: SolarTermTable
    festivals: FestivalTable
    holidays: HolidayManager

    @classmethod
    def build(cls, settings: Optional[Settings] = None) -> "Services":
        converter = LunarSolarConverter()
        return cls(
            converter=converter,
            terms=SolarTermTable(converter),
            festivals=FestivalTable(),
            holidays=HolidayManager.from_settings(settings),
        )

    def annotator(self) -> CellAnnotator:
        return CellAnnotator(
            converter=self.converter,
            terms=self.terms,
            festivals=self.festivals,
            holidays=self.holidays,
        )


_services: Optional[Services] = None
_lock = threading.Lock()


def set_services(services: Optional[Services]) -> None:
    global _services
    with _lock:
        _services = services


def services() -> Services:
    global _services
    if _services is None:
        built = Services.build()
        with _lock:
            if _services is None:
                _services = built
    return _services


# ============================================================
# Conversion
# ============================================================

def to_lunar(d: date | datetime) -> LunarDate:
    return services().converter.to_lunar(d)


def to_solar(year: int, month: int, day: int, is_leap_month: bool = False) -> date:
    return services().converter.to_solar(year, month, day, is_leap_month)


def is_leap_month(d: date | datetime) -> bool:
    return services().converter.is_leap_month(d)


def last_day_of_lunar_year(d: date | datetime) -> date:
    return services().converter.last_day_of_lunar_year(d)


def new_year_day(year: int) -> date:
    return services().converter.new_year_day(year)


def months_in_year(year: int) -> List[LunarMonth]:
    return services().converter.months_in_year(year)


def days_between(a: date | datetime, b: date | datetime) -> int:
    return LunarSolarConverter.days_between(a, b)


def count_days(a: date, b: date) -> Optional[DaysBetweenResult]:
    """Both picks of the day counter at once."""
    _, result = transition(Armed(a), Pick(b))
    return result


# ============================================================
# Tables
# ============================================================

def terms_for(lunar_year: int) -> Mapping[str, str]:
    return services().terms.terms_for(lunar_year)


def festival_for(lunar_mmdd: str) -> Optional[str]:
    return services().festivals.festival_for(lunar_mmdd)


def holiday_type(year: int, solar_mmdd: str) -> HolidayType:
    return services().holidays.type_of(year, solar_mmdd)


# ============================================================
# Annotation
# ============================================================

def annotate(
    d: date | datetime,
    events: Sequence[CalendarItem] = (),
    month_context: Optional[date] = None,
    *,
    now: Optional[date | datetime] = None,
) -> CellAnnotation:
    return services().annotator().annotate(d, events, month_context, now=now)


def annotate_month(
    year: int, month: int, *, first_weekday: int = 0, now: Optional[date | datetime] = None
) -> List[CellAnnotation]:
    return services().annotator().annotate_month(year, month, first_weekday=first_weekday, now=now)


def info() -> Dict[str, Any]:
    s = services()
    return {
        "converter": s.converter.info(),
        "festivals": len(s.festivals.items()),
        "holiday_entries": len(s.holidays.snapshot()),
    }
