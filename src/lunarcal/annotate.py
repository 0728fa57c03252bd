"""
Per-day annotation consumed by a calendar grid.

Label precedence is an ordered list of rules; each rule returns a label or
None and the first label wins. The default lunar label applies when no rule
fires.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional, Sequence, Tuple

from .core.errors import MissingComponentError
from .core.time import as_date, days_between, mmdd
from .core.types import CalendarItem, CellAnnotation, Emphasis, HolidayType, LunarDate
from .engines.converter import LunarSolarConverter
from .engines.terms import SolarTermTable
from .formatting import (
    day_offset_phrase,
    default_lunar_label,
    format_lunar_date,
    removing_leading_digits,
)
from .holidays import HolidayManager
from .tables.festivals import FestivalTable
from .tables.names import CNY_EVE_LABEL, HOLIDAY_LABELS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LabelContext:
    day: date
    solar_mmdd: str
    lunar: Optional[LunarDate]
    is_cny_eve: bool


LabelRule = Callable[["CellAnnotator", LabelContext], Optional[str]]


def cny_eve_rule(annotator: "CellAnnotator", ctx: LabelContext) -> Optional[str]:
    return CNY_EVE_LABEL if ctx.is_cny_eve else None


def festival_rule(annotator: "CellAnnotator", ctx: LabelContext) -> Optional[str]:
    if ctx.lunar is None:
        return None
    return annotator.festivals.festival_for(ctx.lunar.month_day)


def solar_term_rule(annotator: "CellAnnotator", ctx: LabelContext) -> Optional[str]:
    if ctx.lunar is None:
        return None
    return annotator.terms.terms_for(ctx.lunar.year).get(ctx.solar_mmdd)


# Highest precedence first.
DEFAULT_RULES: Tuple[Tuple[str, LabelRule], ...] = (
    ("cny_eve", cny_eve_rule),
    ("festival", festival_rule),
    ("solar_term", solar_term_rule),
)


def resolve_label(
    annotator: "CellAnnotator",
    ctx: LabelContext,
    rules: Sequence[Tuple[str, LabelRule]] = DEFAULT_RULES,
) -> Tuple[Optional[str], Optional[str]]:
    """Return (label, rule name) of the first rule that fires, or (None, None)."""
    for name, rule in rules:
        label = rule(annotator, ctx)
        if label:
            return label, name
    return None, None


def emphasis_for(day: date, month_context: Optional[date], is_today: bool) -> Emphasis:
    if month_context is None:
        return "primary"
    if day.month != month_context.month:
        return "tertiary"
    if day.weekday() >= 5 and not is_today:
        return "secondary"
    return "primary"


def visible_dates(year: int, month: int, *, first_weekday: int = 0, weeks: int = 6) -> List[date]:
    """Dates shown by a month grid starting on `first_weekday` (0=Monday)."""
    first = date(year, month, 1)
    start = first - timedelta(days=(first.weekday() - first_weekday) % 7)
    return [start + timedelta(days=i) for i in range(7 * weeks)]


class CellAnnotator:
    def __init__(
        self,
        *,
        converter: Optional[LunarSolarConverter] = None,
        terms: Optional[SolarTermTable] = None,
        festivals: Optional[FestivalTable] = None,
        holidays: Optional[HolidayManager] = None,
        rules: Sequence[Tuple[str, LabelRule]] = DEFAULT_RULES,
        clock: Callable[[], date] = date.today,
    ):
        self.converter = converter if converter is not None else LunarSolarConverter()
        self.terms = terms if terms is not None else SolarTermTable(self.converter)
        self.festivals = festivals if festivals is not None else FestivalTable()
        self.holidays = holidays if holidays is not None else HolidayManager()
        self.rules = tuple(rules)
        self.clock = clock

    def _decompose(self, day: date) -> Tuple[Optional[LunarDate], bool]:
        try:
            lunar = self.converter.to_lunar(day)
            is_eve = self.converter.last_day_of_lunar_year(day) == day
        except MissingComponentError as e:
            logger.error("assertion failed: cannot decompose %s into lunar components: %s", day, e)
            return None, False
        return lunar, is_eve

    def annotate(
        self,
        d: date | datetime,
        events: Sequence[CalendarItem] = (),
        month_context: Optional[date] = None,
        holiday_type: Optional[HolidayType] = None,
        *,
        now: Optional[date | datetime] = None,
    ) -> CellAnnotation:
        day = as_date(d)
        today = as_date(now) if now is not None else self.clock()
        solar_mmdd = mmdd(day)

        lunar, is_cny_eve = self._decompose(day)
        ctx = LabelContext(day=day, solar_mmdd=solar_mmdd, lunar=lunar, is_cny_eve=is_cny_eve)

        label, _ = resolve_label(self, ctx, self.rules)
        if label is None:
            label = default_lunar_label(lunar) if lunar is not None else ""

        if holiday_type is None:
            holiday_type = self.holidays.type_of(day.year, solar_mmdd)

        is_today = day == today
        offset = day_offset_phrase(days_between(today, day))

        components: List[str] = []
        holiday_label = HOLIDAY_LABELS.get(holiday_type)
        if holiday_label:
            components.append(holiday_label)
        if lunar is not None:
            components.append(removing_leading_digits(format_lunar_date(lunar)))
        components.append(offset)
        main_info = "".join(components)

        titles = [e.title for e in events if e.title is not None]
        if titles:
            details = "\n\n".join([main_info, "\n".join(titles)])
        else:
            details = main_info

        return CellAnnotation(
            solar_day=str(day.day),
            lunar_label=label,
            holiday_type=holiday_type,
            is_today=is_today,
            is_cny_eve=is_cny_eve,
            day_offset_phrase=offset,
            main_info=main_info,
            accessibility_text=" ".join([str(day.day), label, details]),
            emphasis=emphasis_for(day, month_context, is_today),
        )

    def annotate_month(
        self,
        year: int,
        month: int,
        *,
        first_weekday: int = 0,
        now: Optional[date | datetime] = None,
    ) -> List[CellAnnotation]:
        ctx = date(year, month, 1)
        return [
            self.annotate(d, month_context=ctx, now=now)
            for d in visible_dates(year, month, first_weekday=first_weekday)
        ]
