# tests/test_config.py

from pathlib import Path

from lunarcal.config import Settings


def test_defaults_from_empty_environment():
    s = Settings.from_env({})
    assert s.holidays_path is None
    assert s.cache_dir == Path.home() / ".cache" / "lunarcal"
    assert s.log_level == "WARNING"
    assert s.holiday_search_paths() == [s.cache_dir / "holidays.json"]


def test_environment_overrides(tmp_path):
    s = Settings.from_env({
        "LUNARCAL_HOLIDAYS": str(tmp_path / "h.csv"),
        "XDG_CACHE_HOME": str(tmp_path / "xdg"),
        "LUNARCAL_LOG_LEVEL": "debug",
    })
    assert s.holidays_path == tmp_path / "h.csv"
    assert s.cached_holidays_path == tmp_path / "xdg" / "lunarcal" / "holidays.json"
    assert s.log_level == "DEBUG"
    assert s.holiday_search_paths() == [tmp_path / "h.csv", s.cached_holidays_path]
