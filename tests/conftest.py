from __future__ import annotations

from datetime import date

import pytest

from lunarcal.annotate import CellAnnotator
from lunarcal.engines.converter import LunarSolarConverter
from lunarcal.engines.terms import SolarTermTable
from lunarcal.holidays import HolidayManager
from lunarcal.tables.festivals import FestivalTable


@pytest.fixture(scope="session")
def converter() -> LunarSolarConverter:
    return LunarSolarConverter()


@pytest.fixture(scope="session")
def terms(converter) -> SolarTermTable:
    return SolarTermTable(converter)


@pytest.fixture
def holidays() -> HolidayManager:
    return HolidayManager(default=[
        {"year": 2024, "monthDay": "0204", "type": "workday"},
        {"year": 2024, "monthDay": "0210", "type": "holiday"},
        {"year": 2024, "monthDay": "0211", "type": "holiday"},
    ])


@pytest.fixture
def annotator(converter, terms, holidays) -> CellAnnotator:
    return CellAnnotator(
        converter=converter,
        terms=terms,
        festivals=FestivalTable(),
        holidays=holidays,
        clock=lambda: date(2024, 2, 10),
    )
