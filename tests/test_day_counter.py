# tests/test_day_counter.py

import logging
from datetime import date, datetime

from lunarcal.core.types import DaysBetweenResult
from lunarcal.day_counter import IDLE, Armed, DayCounter, Idle, Pick, SessionClosed, transition


def test_first_pick_arms():
    state, result = transition(IDLE, Pick(date(2024, 1, 1)))
    assert state == Armed(date(2024, 1, 1))
    assert result is None


def test_second_pick_counts_and_resets():
    state, result = transition(Armed(date(2024, 3, 1)), Pick(date(2024, 1, 1)))
    assert isinstance(state, Idle)
    assert result == DaysBetweenResult(start=date(2024, 1, 1), end=date(2024, 3, 1), days=60)


def test_repicking_same_date_rearms():
    state, result = transition(Armed(date(2024, 1, 1)), Pick(date(2024, 1, 1)))
    assert state == Armed(date(2024, 1, 1))
    assert result is None


def test_session_closed_resets():
    assert transition(Armed(date(2024, 1, 1)), SessionClosed()) == (IDLE, None)
    assert transition(IDLE, SessionClosed()) == (IDLE, None)


def test_bad_pick_resets_without_result(caplog):
    with caplog.at_level(logging.ERROR, logger="lunarcal.day_counter"):
        state, result = transition(Armed(date(2024, 1, 1)), Pick("2024-02-01"))
    assert state == IDLE
    assert result is None
    assert "assertion failed" in caplog.text


def test_counter_session():
    counter = DayCounter()
    assert not counter.armed
    assert counter.pick(date(2024, 1, 1)) is None
    assert counter.armed
    assert counter.pick(date(2024, 1, 1)) is None
    assert counter.armed

    result = counter.pick(date(2024, 1, 11))
    assert result == DaysBetweenResult(start=date(2024, 1, 1), end=date(2024, 1, 11), days=10)
    assert not counter.armed

    counter.pick(date(2024, 5, 1))
    counter.close_session()
    assert counter.state == IDLE
    assert counter.pick(date(2024, 5, 2)) is None


def test_same_day_at_different_times_rearms():
    state, result = transition(Armed(datetime(2024, 3, 1, 9)), Pick(datetime(2024, 3, 1, 17)))
    assert state == Armed(date(2024, 3, 1))
    assert result is None


def test_datetime_pick_is_reduced_to_its_date():
    counter = DayCounter()
    counter.pick(date(2024, 3, 1))
    result = counter.pick(datetime(2024, 3, 10, 8))
    assert result == DaysBetweenResult(start=date(2024, 3, 1), end=date(2024, 3, 10), days=9)

    counter.pick(datetime(2024, 3, 10, 23, 30))
    assert counter.state == Armed(date(2024, 3, 10))
    assert type(counter.state.first) is date


def test_closing_session_discards_anchor():
    counter = DayCounter()
    assert counter.pick(date(2024, 3, 1)) is None
    counter.close_session()
    assert counter.pick(date(2024, 3, 1)) is None
    assert counter.state == Armed(date(2024, 3, 1))


def test_three_picks():
    counter = DayCounter()
    assert counter.pick(date(2024, 3, 1)) is None
    result = counter.pick(date(2024, 3, 10))
    assert result == DaysBetweenResult(start=date(2024, 3, 1), end=date(2024, 3, 10), days=9)
    assert counter.pick(date(2024, 3, 1)) is None
    assert counter.state == Armed(date(2024, 3, 1))
