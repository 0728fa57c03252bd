# tests/test_converter.py

import threading
from datetime import date, datetime, timedelta

import pytest

from lunarcal.core.errors import ConversionError
from lunarcal.core.types import LunarDate
from lunarcal.engines.converter import LunarSolarConverter, build_sui


@pytest.mark.parametrize(
    "year, expected",
    [
        (1900, date(1900, 1, 31)),
        (1977, date(1977, 2, 18)),
        (2000, date(2000, 2, 5)),
        (2020, date(2020, 1, 25)),
        (2023, date(2023, 1, 22)),
        (2024, date(2024, 2, 10)),
        (2025, date(2025, 1, 29)),
    ],
)
def test_new_year_days(converter, year, expected):
    assert converter.new_year_day(year) == expected
    assert converter.to_lunar(expected) == LunarDate(year, 1, 1)


def test_new_years_eve(converter):
    assert converter.to_lunar(date(2024, 2, 9)) == LunarDate(2023, 12, 30)
    assert converter.to_lunar(date(2025, 1, 28)) == LunarDate(2024, 12, 29)
    assert converter.last_day_of_lunar_year(date(2024, 6, 1)) == date(2025, 1, 28)
    assert converter.last_day_of_lunar_year(date(2024, 2, 9)) == date(2024, 2, 9)
    assert converter.last_day_of_lunar_year(date(2024, 2, 10)) == date(2025, 1, 28)


def test_festival_days(converter):
    assert converter.to_lunar(date(2024, 6, 10)) == LunarDate(2024, 5, 5)
    assert converter.to_lunar(date(2024, 9, 17)) == LunarDate(2024, 8, 15)


@pytest.mark.parametrize(
    "first_day, year, month",
    [
        (date(1917, 3, 23), 1917, 2),
        (date(1922, 6, 25), 1922, 5),
        (date(2020, 5, 23), 2020, 4),
        (date(2023, 3, 22), 2023, 2),
        (date(2025, 7, 25), 2025, 6),
    ],
)
def test_leap_months(converter, first_day, year, month):
    assert converter.to_lunar(first_day) == LunarDate(year, month, 1, is_leap_month=True)
    assert converter.is_leap_month(first_day)
    assert not converter.is_leap_month(first_day - timedelta(days=1))
    leap = [m for m in converter.months_in_year(year) if m.is_leap_month]
    assert [m.month for m in leap] == [month]


def test_early_years_use_standard_time(converter):
    assert converter.to_lunar(date(1906, 5, 1)) == LunarDate(1906, 4, 8)


def test_month_after_leap(converter):
    assert converter.to_lunar(date(2023, 4, 20)) == LunarDate(2023, 3, 1)
    assert converter.to_lunar(date(2023, 2, 20)) == LunarDate(2023, 2, 1)


def test_months_in_year(converter):
    months_2023 = converter.months_in_year(2023)
    months_2024 = converter.months_in_year(2024)
    assert len(months_2023) == 13
    assert len(months_2024) == 12
    assert [m.month for m in months_2024] == list(range(1, 13))
    assert months_2024[0].first_jdn == months_2023[-1].last_jdn + 1
    assert sum(m.length for m in months_2024) == (date(2025, 1, 29) - date(2024, 2, 10)).days
    assert all(m.length in (29, 30) for m in months_2023 + months_2024)


def test_sui_structure():
    sui = build_sui(2023)
    assert sui.months[0].month == 11
    assert sui.months[0].year == 2022
    assert len(sui.months) == 13
    assert [m.month for m in sui.months if m.is_leap_month] == [2]


def test_to_solar(converter):
    assert converter.to_solar(2024, 1, 1) == date(2024, 2, 10)
    assert converter.to_solar(2023, 2, 1, is_leap_month=True) == date(2023, 3, 22)
    assert converter.to_solar(2023, 2, 1) == date(2023, 2, 20)
    assert converter.to_solar(2023, 12, 30) == date(2024, 2, 9)


def test_to_solar_rejects_missing_dates(converter):
    with pytest.raises(ConversionError):
        converter.to_solar(2024, 2, 1, is_leap_month=True)
    with pytest.raises(ConversionError):
        converter.to_solar(2024, 13, 1)
    with pytest.raises(ConversionError):
        converter.to_solar(2024, 12, 30)  # 2024 腊月 has 29 days


def test_round_trip_samples(converter):
    d = date(1900, 3, 1)
    while d < date(2100, 10, 1):
        lunar = converter.to_lunar(d)
        assert converter.to_solar(lunar.year, lunar.month, lunar.day, lunar.is_leap_month) == d
        d += timedelta(days=97)


def test_consecutive_days_advance(converter):
    prev = converter.to_lunar(date(2024, 1, 1))
    d = date(2024, 1, 2)
    while d <= date(2024, 12, 31):
        cur = converter.to_lunar(d)
        if cur.day == 1:
            assert prev.day in (29, 30)
        else:
            assert cur.day == prev.day + 1
            assert (cur.year, cur.month, cur.is_leap_month) == (prev.year, prev.month, prev.is_leap_month)
        prev = cur
        d += timedelta(days=1)


def test_supported_range(converter):
    assert converter.to_lunar(date(1900, 1, 1)).year == 1899
    assert converter.to_lunar(date(2100, 12, 31)).year == 2100
    with pytest.raises(ConversionError):
        converter.to_lunar(date(1899, 12, 31))
    with pytest.raises(ValueError):
        converter.to_lunar(date(2101, 1, 1))


def test_datetime_input_uses_its_date(converter):
    assert converter.to_lunar(datetime(2024, 2, 10, 23, 59)) == LunarDate(2024, 1, 1)


def test_days_between(converter):
    assert LunarSolarConverter.days_between(date(2024, 1, 1), date(2024, 3, 1)) == 60
    assert converter.days_between(datetime(2024, 3, 1, 12), date(2024, 1, 1)) == -60
    with pytest.raises(ConversionError):
        converter.days_between(date(2024, 1, 1), 5)


def test_concurrent_first_access_is_idempotent():
    conv = LunarSolarConverter()
    results = []

    def work():
        results.append(conv.sui(2031))

    threads = [threading.Thread(target=work) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert all(r is results[0] for r in results)
    assert conv.sui(2031) is results[0]


def test_custom_range():
    conv = LunarSolarConverter(min_date=date(2000, 1, 1), max_date=date(2000, 12, 31))
    assert conv.info() == {"min_date": "2000-01-01", "max_date": "2000-12-31"}
    with pytest.raises(ConversionError):
        conv.to_lunar(date(2001, 1, 1))
    with pytest.raises(ValueError):
        LunarSolarConverter(min_date=date(2001, 1, 1), max_date=date(2000, 1, 1))
