from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

# Keyed by lunar MMDD; the leap flag of the month is not part of the key.
DEFAULT_FESTIVALS: Mapping[str, str] = MappingProxyType({
    "0101": "春节",
    "0115": "元宵节",
    "0202": "龙抬头",
    "0505": "端午节",
    "0707": "七夕节",
    "0715": "中元节",
    "0815": "中秋节",
    "0909": "重阳节",
    "1208": "腊八节",
    "1223": "小年",
})


class FestivalTable:
    """Static lunar month-day -> festival name lookup."""

    def __init__(self, festivals: Optional[Mapping[str, str]] = None):
        self._festivals: Mapping[str, str] = (
            DEFAULT_FESTIVALS if festivals is None else MappingProxyType(dict(festivals))
        )

    def festival_for(self, lunar_mmdd: str) -> Optional[str]:
        return self._festivals.get(lunar_mmdd)

    def items(self):
        return self._festivals.items()
