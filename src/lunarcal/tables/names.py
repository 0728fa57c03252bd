"""Display names for lunar calendar labels (Simplified Chinese)."""

from __future__ import annotations

from typing import Tuple

# Indexed by month - 1.
MONTH_NAMES: Tuple[str, ...] = (
    "正月", "二月", "三月", "四月", "五月", "六月",
    "七月", "八月", "九月", "十月", "冬月", "腊月",
)

# Indexed by day - 1.
DAY_NAMES: Tuple[str, ...] = (
    "初一", "初二", "初三", "初四", "初五", "初六", "初七", "初八", "初九", "初十",
    "十一", "十二", "十三", "十四", "十五", "十六", "十七", "十八", "十九", "二十",
    "廿一", "廿二", "廿三", "廿四", "廿五", "廿六", "廿七", "廿八", "廿九", "三十",
)

LEAP_MARKER = "闰"

# The character 月 shifts the label optically; a thin space recentres it.
MONTH_LABEL_PREFIX = "\u2009"

# Gregorian order, index 0 = Minor Cold (285 deg).
TERM_NAMES: Tuple[str, ...] = (
    "小寒", "大寒", "立春", "雨水", "惊蛰", "春分",
    "清明", "谷雨", "立夏", "小满", "芒种", "夏至",
    "小暑", "大暑", "立秋", "处暑", "白露", "秋分",
    "寒露", "霜降", "立冬", "小雪", "大雪", "冬至",
)

HEAVENLY_STEMS: Tuple[str, ...] = ("甲", "乙", "丙", "丁", "戊", "己", "庚", "辛", "壬", "癸")
EARTHLY_BRANCHES: Tuple[str, ...] = ("子", "丑", "寅", "卯", "辰", "巳", "午", "未", "申", "酉", "戌", "亥")
ZODIAC_ANIMALS: Tuple[str, ...] = ("鼠", "牛", "虎", "兔", "龙", "蛇", "马", "羊", "猴", "鸡", "狗", "猪")

WEEKDAY_SHORT: Tuple[str, ...] = ("周一", "周二", "周三", "周四", "周五", "周六", "周日")
WEEKDAY_LONG: Tuple[str, ...] = ("星期一", "星期二", "星期三", "星期四", "星期五", "星期六", "星期日")

CNY_EVE_LABEL = "除夕"
HOLIDAY_LABELS = {"holiday": "（休）", "workday": "（班）"}
TODAY_LABEL = "（今天）"
DAYS_LATER_FORMAT = "（{}天后）"
DAYS_AGO_FORMAT = "（{}天前）"
ALL_DAY_LABEL = "全天"
DAYS_BETWEEN_TEMPLATE = "{} 与 {} 相隔 {} 天"


def month_name(index: int, is_leap: bool = False) -> str:
    """Month name for a 0-based month index."""
    return (LEAP_MARKER if is_leap else "") + MONTH_NAMES[index]


def day_name(index: int) -> str:
    """Day name for a 0-based day index."""
    return DAY_NAMES[index]


def sexagenary_year(year: int) -> str:
    """Stem-branch name of a lunar year, e.g. 2024 -> 甲辰."""
    return HEAVENLY_STEMS[(year - 4) % 10] + EARTHLY_BRANCHES[(year - 4) % 12]


def zodiac_animal(year: int) -> str:
    return ZODIAC_ANIMALS[(year - 4) % 12]
