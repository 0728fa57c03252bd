"""
lunarcal.engines.terms
----------------------
Per lunar year table of solar terms keyed by solar MMDD.
"""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from lunarcal.core.time import from_jdn, mmdd
from lunarcal.engines.converter import LunarSolarConverter
from lunarcal.reference.solar import solar_term_jdns
from lunarcal.tables.names import TERM_NAMES

logger = logging.getLogger(__name__)


class SolarTermTable:
    """
    Lazily computed, indefinitely cached solar terms per lunar year.

    A lunar year spans the new year day up to its eve, so its terms come from
    two consecutive Gregorian years. Within one lunar year a given MMDD always
    names the same term.
    """

    def __init__(self, converter: Optional[LunarSolarConverter] = None):
        self.converter = converter if converter is not None else LunarSolarConverter()
        self._years: Dict[int, Mapping[str, str]] = {}
        self._lock = threading.Lock()

    def _compute(self, lunar_year: int) -> Mapping[str, str]:
        first = self.converter.new_year_jdn(lunar_year)
        last = self.converter.new_year_jdn(lunar_year + 1) - 1
        out: Dict[str, str] = {}
        for gy in (lunar_year, lunar_year + 1):
            for i, jdn in enumerate(solar_term_jdns(gy)):
                if first <= jdn <= last:
                    out[mmdd(from_jdn(jdn))] = TERM_NAMES[i]
        return MappingProxyType(out)

    def terms_for(self, lunar_year: int) -> Mapping[str, str]:
        cached = self._years.get(lunar_year)
        if cached is not None:
            return cached
        computed = self._compute(lunar_year)
        with self._lock:
            stored = self._years.setdefault(lunar_year, computed)
        if stored is computed:
            logger.debug("cached %d solar terms for lunar year %d", len(computed), lunar_year)
        return stored

    def term_for(self, lunar_year: int, solar_mmdd: str) -> Optional[str]:
        return self.terms_for(lunar_year).get(solar_mmdd)
