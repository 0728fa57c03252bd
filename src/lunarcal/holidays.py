"""
Statutory workday/holiday adjustments keyed by (year, solar MMDD).

The merged table is the bundled default dataset overlaid with an optional
external dataset; the external layer wins per key. A refresh builds a new
immutable table and rebinds it in one assignment, so readers see either the
old or the new table, never a mixture.
"""

from __future__ import annotations

import csv
import importlib.resources
import json
import logging
import re
import threading
from datetime import date
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from .config import Settings
from .core.errors import FetchError
from .core.types import HolidayType

logger = logging.getLogger(__name__)

HolidayKey = Tuple[int, str]
Record = Mapping[str, Any]

_MMDD_RE = re.compile(r"^\d{4}$")
_TYPES = ("workday", "holiday")


# ============================================================
# Dataset parsing
# ============================================================

def _parse_one(rec: Any) -> Tuple[HolidayKey, HolidayType]:
    if isinstance(rec, Mapping):
        year, month_day, kind = rec["year"], rec["monthDay"], rec["type"]
    else:
        year, month_day, kind = rec
    year = int(year)
    month_day = str(month_day)
    if not _MMDD_RE.match(month_day):
        raise ValueError(f"monthDay must be 4 digits, got {month_day!r}")
    date(year, int(month_day[:2]), int(month_day[2:]))  # validates the day
    if kind not in _TYPES:
        raise ValueError(f"type must be one of {_TYPES}, got {kind!r}")
    return (year, month_day), kind


def parse_dataset(records: Iterable[Any]) -> Dict[HolidayKey, HolidayType]:
    """
    Parse `{year, monthDay, type}` records (or `(year, monthDay, type)` triples).
    Any malformed record rejects the whole dataset.
    """
    out: Dict[HolidayKey, HolidayType] = {}
    try:
        for rec in records:
            key, kind = _parse_one(rec)
            out[key] = kind
    except (KeyError, TypeError, ValueError) as e:
        raise FetchError(f"Malformed holiday dataset: {e}") from e
    return out


def to_records(table: Mapping[HolidayKey, HolidayType]) -> List[Dict[str, Any]]:
    return [
        {"year": y, "monthDay": md, "type": kind}
        for (y, md), kind in sorted(table.items())
    ]


# ============================================================
# Loaders
# ============================================================

def load_dataset_file(path: Path) -> List[Record]:
    """Read records from a CSV (year,monthDay,type header) or JSON list file."""
    try:
        with path.open("r", encoding="utf-8", newline="") as f:
            if path.suffix.lower() == ".csv":
                return list(csv.DictReader(f))
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise FetchError(f"Cannot read holiday dataset {path}: {e}") from e
    if not isinstance(data, list):
        raise FetchError(f"Holiday dataset {path} must be a JSON list of records")
    return data


def load_bundled_dataset() -> List[Record]:
    """The default dataset shipped as package data."""
    res = importlib.resources.files("lunarcal").joinpath("data/holidays.csv")
    with res.open("r", encoding="utf-8", newline="") as f:
        return list(csv.DictReader(f))


def find_external_dataset(settings: Settings) -> Optional[List[Record]]:
    """
    Search order:
      1) LUNARCAL_HOLIDAYS
      2) user cache ($XDG_CACHE_HOME/lunarcal/holidays.json)
    An unreadable candidate is logged and skipped.
    """
    for path in settings.holiday_search_paths():
        if not path.is_file():
            continue
        try:
            return load_dataset_file(path)
        except FetchError as e:
            logger.warning("skipping external holiday dataset: %s", e)
    return None


def save_dataset(path: Path, records: Iterable[Any]) -> int:
    """Validate and store a dataset as JSON; returns the number of entries."""
    table = parse_dataset(records)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    with tmp.open("w", encoding="utf-8") as f:
        json.dump(to_records(table), f, ensure_ascii=False, indent=1)
    tmp.replace(path)
    return len(table)


# ============================================================
# Manager
# ============================================================

class HolidayManager:
    """Lookup of holiday adjustments over a default and an external layer."""

    def __init__(
        self,
        default: Optional[Iterable[Any]] = None,
        external: Optional[Iterable[Any]] = None,
    ):
        records = load_bundled_dataset() if default is None else default
        self._default: Mapping[HolidayKey, HolidayType] = MappingProxyType(parse_dataset(records))
        self._external: Mapping[HolidayKey, HolidayType] = MappingProxyType(
            parse_dataset(external) if external is not None else {}
        )
        self._write_lock = threading.Lock()
        self._table: Mapping[HolidayKey, HolidayType] = self._merge(self._external)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "HolidayManager":
        settings = settings if settings is not None else Settings.from_env()
        manager = cls()
        external = find_external_dataset(settings)
        if external is not None:
            manager.refresh_from(lambda: external)
        return manager

    def _merge(self, external: Mapping[HolidayKey, HolidayType]) -> Mapping[HolidayKey, HolidayType]:
        merged = dict(self._default)
        merged.update(external)
        return MappingProxyType(merged)

    def type_of(self, year: int, month_day: str) -> HolidayType:
        return self._table.get((year, month_day), "none")

    def snapshot(self) -> Mapping[HolidayKey, HolidayType]:
        """The complete merged table currently in effect."""
        return self._table

    def entries_for(self, year: int) -> List[Tuple[str, HolidayType]]:
        table = self._table
        return sorted((md, kind) for (y, md), kind in table.items() if y == year)

    def refresh(self, dataset: Iterable[Any]) -> None:
        """Replace the external layer as a whole. Raises FetchError on a malformed dataset."""
        external = MappingProxyType(parse_dataset(dataset))
        with self._write_lock:
            merged = self._merge(external)
            self._external = external
            self._table = merged
        logger.info("holiday table refreshed: %d external entries, %d total", len(external), len(merged))

    def refresh_from(self, fetch: Callable[[], Iterable[Any]]) -> bool:
        """
        Fetch a dataset and refresh with it. Fetch or parse failures are logged
        and leave the current table in place.
        """
        try:
            self.refresh(fetch())
        except (FetchError, OSError) as e:
            logger.warning("holiday refresh skipped: %s", e)
            return False
        return True
