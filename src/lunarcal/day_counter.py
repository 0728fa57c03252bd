"""
Two-tap "days between" interaction.

The first pick arms the counter, a second different pick produces a result
and disarms it. Picking the armed date again keeps it armed; closing the
session always returns to idle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple, Union

from .core.errors import ConversionError
from .core.time import as_date, days_between
from .core.types import DaysBetweenResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Armed:
    first: date


DayCounterState = Union[Idle, Armed]


@dataclass(frozen=True)
class Pick:
    day: date


@dataclass(frozen=True)
class SessionClosed:
    pass


DayCounterEvent = Union[Pick, SessionClosed]

IDLE = Idle()


def transition(
    state: DayCounterState, event: DayCounterEvent
) -> Tuple[DayCounterState, Optional[DaysBetweenResult]]:
    if isinstance(event, SessionClosed):
        return IDLE, None
    if not isinstance(event, Pick):
        raise TypeError(f"Unknown day counter event: {event!r}")

    try:
        day = as_date(event.day)
        if isinstance(state, Idle):
            return Armed(day), None
        first = as_date(state.first)
        if day == first:
            return Armed(day), None
        days = days_between(first, day)
    except ConversionError as e:
        logger.error("assertion failed: cannot count days: %s", e)
        return IDLE, None
    start, end = sorted((first, day))
    return IDLE, DaysBetweenResult(start=start, end=end, days=abs(days))


class DayCounter:
    """Holds the state of one presentation session."""

    def __init__(self) -> None:
        self.state: DayCounterState = IDLE

    @property
    def armed(self) -> bool:
        return isinstance(self.state, Armed)

    def _apply(self, event: DayCounterEvent) -> Optional[DaysBetweenResult]:
        before = self.state
        self.state, result = transition(before, event)
        logger.debug("day counter %s --%s--> %s", before, event, self.state)
        return result

    def pick(self, day: date) -> Optional[DaysBetweenResult]:
        return self._apply(Pick(day))

    def close_session(self) -> None:
        self._apply(SessionClosed())
