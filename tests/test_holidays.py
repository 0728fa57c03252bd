# tests/test_holidays.py

import json
import logging

import pytest

from lunarcal.config import Settings
from lunarcal.core.errors import FetchError
from lunarcal.holidays import (
    HolidayManager,
    find_external_dataset,
    load_bundled_dataset,
    load_dataset_file,
    parse_dataset,
    save_dataset,
)


def test_bundled_dataset():
    m = HolidayManager()
    assert m.type_of(2024, "0204") == "workday"
    assert m.type_of(2024, "0210") == "holiday"
    assert m.type_of(2024, "1001") == "holiday"
    assert m.type_of(2024, "0305") == "none"
    assert m.type_of(1999, "0101") == "none"
    assert len(load_bundled_dataset()) == len(m.snapshot())


def test_parse_accepts_records_and_triples():
    table = parse_dataset([
        {"year": "2024", "monthDay": "0101", "type": "holiday"},
        (2024, "0204", "workday"),
    ])
    assert table == {(2024, "0101"): "holiday", (2024, "0204"): "workday"}


@pytest.mark.parametrize(
    "record",
    [
        {"year": 2024, "monthDay": "101", "type": "holiday"},
        {"year": 2024, "monthDay": "0230", "type": "holiday"},
        {"year": 2024, "monthDay": "0101", "type": "vacation"},
        {"year": 2024, "monthDay": "0101"},
        (2024, "0101"),
    ],
)
def test_malformed_records_reject_the_dataset(record):
    with pytest.raises(FetchError):
        parse_dataset([(2024, "0102", "holiday"), record])


def test_external_layer_wins_per_key(holidays):
    holidays.refresh([(2024, "0210", "workday"), (2024, "0305", "holiday")])
    assert holidays.type_of(2024, "0210") == "workday"
    assert holidays.type_of(2024, "0305") == "holiday"
    assert holidays.type_of(2024, "0204") == "workday"


def test_refresh_replaces_the_external_layer(holidays):
    holidays.refresh([(2024, "0210", "workday")])
    holidays.refresh([(2024, "0305", "holiday")])
    assert holidays.type_of(2024, "0210") == "holiday"
    assert holidays.type_of(2024, "0305") == "holiday"


def test_failed_refresh_keeps_the_table(holidays):
    before = holidays.snapshot()
    with pytest.raises(FetchError):
        holidays.refresh([(2024, "0305", "holiday"), (2024, "bad", "holiday")])
    assert holidays.snapshot() is before
    assert holidays.type_of(2024, "0305") == "none"


def test_snapshot_is_stable_across_refresh(holidays):
    before = holidays.snapshot()
    holidays.refresh([(2024, "0305", "holiday")])
    assert (2024, "0305") not in before
    assert holidays.snapshot()[(2024, "0305")] == "holiday"
    with pytest.raises(TypeError):
        before[(2024, "0101")] = "holiday"


def test_refresh_from_swallows_fetch_errors(holidays, caplog):
    def broken():
        raise FetchError("network down")

    with caplog.at_level(logging.WARNING, logger="lunarcal.holidays"):
        assert holidays.refresh_from(broken) is False
    assert "network down" in caplog.text
    assert holidays.type_of(2024, "0210") == "holiday"

    assert holidays.refresh_from(lambda: [(2024, "0305", "holiday")]) is True
    assert holidays.type_of(2024, "0305") == "holiday"


def test_refresh_from_swallows_io_errors(holidays, caplog):
    def offline():
        raise ConnectionError("connection refused")

    with caplog.at_level(logging.WARNING, logger="lunarcal.holidays"):
        assert holidays.refresh_from(offline) is False
    assert "connection refused" in caplog.text
    assert holidays.type_of(2024, "0211") == "holiday"


def test_entries_for(holidays):
    assert holidays.entries_for(2024) == [("0204", "workday"), ("0210", "holiday"), ("0211", "holiday")]
    assert holidays.entries_for(2030) == []


def test_load_json_and_csv(tmp_path):
    js = tmp_path / "h.json"
    js.write_text(json.dumps([{"year": 2030, "monthDay": "0101", "type": "holiday"}]), encoding="utf-8")
    csv_path = tmp_path / "h.csv"
    csv_path.write_text("year,monthDay,type\n2030,0105,workday\n", encoding="utf-8")

    assert parse_dataset(load_dataset_file(js)) == {(2030, "0101"): "holiday"}
    assert parse_dataset(load_dataset_file(csv_path)) == {(2030, "0105"): "workday"}


def test_load_rejects_unreadable_files(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    obj = tmp_path / "obj.json"
    obj.write_text("{}", encoding="utf-8")
    with pytest.raises(FetchError):
        load_dataset_file(bad)
    with pytest.raises(FetchError):
        load_dataset_file(obj)
    with pytest.raises(FetchError):
        load_dataset_file(tmp_path / "missing.json")


def test_save_dataset_round_trip(tmp_path):
    path = tmp_path / "cache" / "holidays.json"
    n = save_dataset(path, [(2030, "0102", "holiday"), (2030, "0101", "holiday")])
    assert n == 2
    assert json.loads(path.read_text(encoding="utf-8"))[0] == {"year": 2030, "monthDay": "0101", "type": "holiday"}
    assert not (path.parent / "holidays.json.tmp").exists()


def test_find_external_dataset_order(tmp_path, caplog):
    bad = tmp_path / "bad.json"
    bad.write_text("[", encoding="utf-8")
    settings = Settings(holidays_path=bad, cache_dir=tmp_path / "cache")
    save_dataset(settings.cached_holidays_path, [(2030, "0101", "holiday")])

    with caplog.at_level(logging.WARNING, logger="lunarcal.holidays"):
        records = find_external_dataset(settings)
    assert parse_dataset(records) == {(2030, "0101"): "holiday"}
    assert "skipping" in caplog.text

    assert find_external_dataset(Settings(cache_dir=tmp_path / "empty")) is None


def test_from_settings_applies_external_dataset(tmp_path):
    settings = Settings(cache_dir=tmp_path)
    save_dataset(settings.cached_holidays_path, [(2024, "0210", "workday")])
    m = HolidayManager.from_settings(settings)
    assert m.type_of(2024, "0210") == "workday"
    assert m.type_of(2024, "0204") == "workday"
