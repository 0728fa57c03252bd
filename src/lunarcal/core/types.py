from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal, Optional, Protocol

HolidayType = Literal["none", "workday", "holiday"]
Emphasis = Literal["primary", "secondary", "tertiary"]

@dataclass(frozen=True)
class LunarDate:
    year: int
    month: int
    day: int
    is_leap_month: bool = False

    @property
    def month_day(self) -> str:
        return f"{self.month:02d}{self.day:02d}"

@dataclass(frozen=True)
class LunarMonth:
    """Civil bounds (inclusive JDNs) of one lunar month."""
    year: int
    month: int
    is_leap_month: bool
    first_jdn: int
    last_jdn: int

    @property
    def length(self) -> int:
        return self.last_jdn - self.first_jdn + 1

class CalendarItem(Protocol):
    title: Optional[str]
    start: Optional[datetime]
    end: Optional[datetime]
    all_day: bool
    completed: bool

@dataclass(frozen=True)
class EventItem:
    title: Optional[str]
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    all_day: bool = False
    completed: bool = False

@dataclass(frozen=True)
class CellAnnotation:
    solar_day: str
    lunar_label: str
    holiday_type: HolidayType
    is_today: bool
    is_cny_eve: bool
    day_offset_phrase: str
    main_info: str
    accessibility_text: str
    emphasis: Emphasis = "primary"

@dataclass(frozen=True)
class DaysBetweenResult:
    start: date
    end: date
    days: int
