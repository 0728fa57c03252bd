from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Iterable, List

from .core.types import CalendarItem, DaysBetweenResult, LunarDate
from .tables import names

logger = logging.getLogger(__name__)

_LEADING_DIGITS_RE = re.compile(r"^\d+")


def lunar_month_label(lunar: LunarDate) -> str:
    return names.MONTH_LABEL_PREFIX + names.month_name(lunar.month - 1, is_leap=lunar.is_leap_month)


def lunar_day_label(lunar: LunarDate) -> str:
    return names.day_name(lunar.day - 1)


def default_lunar_label(lunar: LunarDate) -> str:
    """Month name on the first day of a month, day name otherwise."""
    if lunar.day == 1:
        return lunar_month_label(lunar)
    return lunar_day_label(lunar)


def format_lunar_date(lunar: LunarDate) -> str:
    """Long lunar date, e.g. '2023癸卯年冬月十五'."""
    return (
        f"{lunar.year}{names.sexagenary_year(lunar.year)}年"
        f"{names.month_name(lunar.month - 1, is_leap=lunar.is_leap_month)}"
        f"{names.day_name(lunar.day - 1)}"
    )


def removing_leading_digits(s: str) -> str:
    return _LEADING_DIGITS_RE.sub("", s)


def day_offset_phrase(n: int) -> str:
    if n == 0:
        return names.TODAY_LABEL
    fmt = names.DAYS_LATER_FORMAT if n > 0 else names.DAYS_AGO_FORMAT
    return fmt.format(abs(n))


# ------------------------------------------------------------
# Solar dates
# ------------------------------------------------------------

def medium_date(d: date) -> str:
    return f"{d.year}年{d.month}月{d.day}日"


def full_date(d: date) -> str:
    return f"{medium_date(d)} {names.WEEKDAY_LONG[d.weekday()]}"


def menu_bar_title(d: date) -> str:
    """Compact status text, e.g. '10月25日 周六'."""
    return f"{d.month}月{d.day}日 {names.WEEKDAY_SHORT[d.weekday()]}"


def tooltip(d: date, lunar: LunarDate) -> str:
    return "\n\n".join([full_date(d), removing_leading_digits(format_lunar_date(lunar))])


def days_between_message(result: DaysBetweenResult) -> str:
    return names.DAYS_BETWEEN_TEMPLATE.format(
        medium_date(result.start), medium_date(result.end), result.days
    )


# ------------------------------------------------------------
# Calendar items
# ------------------------------------------------------------

def _clock(t: datetime) -> str:
    return t.strftime("%H:%M")


def event_time_label(item: CalendarItem) -> str:
    """'全天' for all-day items, otherwise 'HH:MM' or 'HH:MM–HH:MM'."""
    if item.all_day:
        return names.ALL_DAY_LABEL
    if item.start is None or item.end is None:
        logger.error("assertion failed: calendar item %r has no start or end", item.title)
        return ""
    if item.start == item.end:
        return _clock(item.start)
    return f"{_clock(item.start)}–{_clock(item.end)}"


def oldest_to_newest(items: Iterable[CalendarItem]) -> List[CalendarItem]:
    """Items ordered by start; items without a start come last, stable otherwise."""
    items = list(items)
    timed = sorted((i for i in items if i.start is not None), key=lambda i: i.start)
    return timed + [i for i in items if i.start is None]
