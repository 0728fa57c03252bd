from __future__ import annotations

import argparse
from datetime import date

import lunarcal
from lunarcal.annotate import visible_dates
from lunarcal.tables.names import WEEKDAY_SHORT

_MARKS = {"holiday": "休", "workday": "班"}


def _width(s: str) -> int:
    # CJK glyphs take two terminal columns
    return sum(2 if ord(c) >= 0x2E80 else 1 for c in s)


def _pad(s: str, w: int) -> str:
    while _width(s) > w:
        s = s[:-1]
    return s + " " * (w - _width(s))


def cell(top: str, bot: str, w: int = 6) -> tuple[str, str]:
    return (_pad(top, w), _pad(bot, w))


def dow_header(first_weekday: int = 0, w: int = 6) -> str:
    names = [WEEKDAY_SHORT[(first_weekday + i) % 7] for i in range(7)]
    return " ".join(_pad(n, w) for n in names)


def print_grid(title: str, header: str, weeks: list[list[tuple[str, str]]]) -> None:
    print(title)
    print(header)
    print("-" * len(header))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    print()


def gregorian_month_calendar(gy: int, gm: int, *, first_weekday: int = 0, now: date | None = None) -> None:
    days = visible_dates(gy, gm, first_weekday=first_weekday)
    cells = lunarcal.annotate_month(gy, gm, first_weekday=first_weekday, now=now)

    weeks: list[list[tuple[str, str]]] = []
    wk: list[tuple[str, str]] = []
    for d, a in zip(days, cells):
        if a.emphasis == "tertiary":
            wk.append(cell("", ""))
        else:
            mark = _MARKS.get(a.holiday_type, "")
            today = "*" if a.is_today else ""
            wk.append(cell(f"{a.solar_day:>2}{mark}{today}", a.lunar_label.strip()))
        if len(wk) == 7:
            weeks.append(wk)
            wk = []

    lunar = lunarcal.to_lunar(date(gy, gm, 15))
    title = f"{gy}-{gm:02d}   lunar year {lunar.year}"
    print_grid(title, dow_header(first_weekday), weeks)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print a Gregorian month grid with lunar labels, festivals, solar terms and holidays."
    )
    p.add_argument("--greg", nargs=2, type=int, metavar=("GY", "GM"),
                   help="Gregorian month to print: GY GM (e.g. 2024 2)")
    p.add_argument("--first-weekday", type=int, default=0, help="0=Monday .. 6=Sunday (default: 0)")
    args = p.parse_args(argv)

    if not args.greg:
        today = date.today()
        gregorian_month_calendar(today.year, today.month, first_weekday=args.first_weekday)
        return 0

    gy, gm = args.greg
    gregorian_month_calendar(gy, gm, first_weekday=args.first_weekday)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
