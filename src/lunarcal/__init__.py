"""lunarcal public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

from .api import (
    Services,
    annotate,
    annotate_month,
    count_days,
    days_between,
    festival_for,
    holiday_type,
    info,
    is_leap_month,
    last_day_of_lunar_year,
    months_in_year,
    new_year_day,
    services,
    set_services,
    terms_for,
    to_lunar,
    to_solar,
)
from .annotate import CellAnnotator
from .core.errors import ConversionError, FetchError, LunarCalError, MissingComponentError
from .core.types import CellAnnotation, DaysBetweenResult, EventItem, LunarDate, LunarMonth
from .day_counter import DayCounter
from .engines.converter import LunarSolarConverter
from .engines.terms import SolarTermTable
from .holidays import HolidayManager
from .tables.festivals import FestivalTable

__all__ = [
    "Services",
    "annotate",
    "annotate_month",
    "count_days",
    "days_between",
    "festival_for",
    "holiday_type",
    "info",
    "is_leap_month",
    "last_day_of_lunar_year",
    "months_in_year",
    "new_year_day",
    "services",
    "set_services",
    "terms_for",
    "to_lunar",
    "to_solar",
    "CellAnnotator",
    "CellAnnotation",
    "ConversionError",
    "DayCounter",
    "DaysBetweenResult",
    "EventItem",
    "FestivalTable",
    "FetchError",
    "HolidayManager",
    "LunarCalError",
    "LunarDate",
    "LunarMonth",
    "LunarSolarConverter",
    "MissingComponentError",
    "SolarTermTable",
]
