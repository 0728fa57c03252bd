# tests/test_terms.py

from concurrent.futures import ThreadPoolExecutor

import pytest

from lunarcal.engines.terms import SolarTermTable
from lunarcal.tables.festivals import DEFAULT_FESTIVALS, FestivalTable


def test_terms_of_lunar_year_2024(terms):
    t = terms.terms_for(2024)
    assert t["0219"] == "雨水"
    assert t["0404"] == "清明"
    assert t["0621"] == "夏至"
    assert t["1221"] == "冬至"
    # January 2025 still belongs to lunar year 2024
    assert t["0105"] == "小寒"
    assert t["0120"] == "大寒"
    # Start of Spring 2024 precedes the new year day
    assert "0204" not in t
    assert terms.term_for(2023, "0204") == "立春"
    assert terms.term_for(2024, "0101") is None


def test_term_counts(terms):
    # a 13-month year can see the same term twice
    assert len(terms.terms_for(2024)) == 23
    assert len(terms.terms_for(2023)) == 24
    assert list(terms.terms_for(2025).values()).count("立春") == 2


def test_terms_are_cached_and_read_only(terms):
    t = terms.terms_for(2024)
    assert terms.terms_for(2024) is t
    with pytest.raises(TypeError):
        t["0101"] = "x"


def test_concurrent_first_access(converter):
    table = SolarTermTable(converter)
    with ThreadPoolExecutor(max_workers=8) as ex:
        results = list(ex.map(lambda _: table.terms_for(2030), range(16)))
    assert all(r is results[0] for r in results)


def test_default_festivals():
    f = FestivalTable()
    assert f.festival_for("0101") == "春节"
    assert f.festival_for("0815") == "中秋节"
    assert f.festival_for("1223") == "小年"
    assert f.festival_for("0102") is None
    assert len(DEFAULT_FESTIVALS) == 10


def test_custom_festivals_are_copied():
    src = {"0303": "上巳节"}
    f = FestivalTable(src)
    src["0303"] = "changed"
    assert f.festival_for("0303") == "上巳节"
    assert f.festival_for("0101") is None
