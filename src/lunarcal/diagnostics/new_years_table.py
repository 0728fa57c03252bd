from __future__ import annotations

import argparse
from datetime import date

import lunarcal
from lunarcal.core.time import days_between
from lunarcal.tables.names import sexagenary_year, zodiac_animal


def mmdd(d: date) -> str:
    return f"{d.month:02d}-{d.day:02d}"


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Print the lunar New Year table.")
    p.add_argument("--from-year", type=int, default=2000)
    p.add_argument("--to-year", type=int, default=2030)
    p.add_argument(
        "--dates",
        choices=("mmdd", "iso"),
        default="mmdd",
        help="Display format in table columns (default: mmdd).",
    )
    args = p.parse_args(argv)

    def fmt(d: date) -> str:
        return mmdd(d) if args.dates == "mmdd" else d.isoformat()

    Y0, Y1 = args.from_year, args.to_year
    if Y1 < Y0:
        raise SystemExit("--to-year must be >= --from-year")

    headers = ["Year", "New Year", "Eve", "Days", "Leap", "Name"]
    colw = [5, 10, 10, 5, 5, 4]
    line = "  ".join(h.ljust(w) for h, w in zip(headers, colw))
    print(line)
    print("-" * len(line))

    for Y in range(Y0, Y1 + 1):
        ny = lunarcal.new_year_day(Y)
        nxt = lunarcal.new_year_day(Y + 1)
        eve = lunarcal.last_day_of_lunar_year(ny)
        leap = [m.month for m in lunarcal.months_in_year(Y) if m.is_leap_month]
        row = [
            str(Y),
            fmt(ny),
            fmt(eve),
            str(days_between(ny, nxt)),
            str(leap[0]) if leap else "-",
            f"{sexagenary_year(Y)}{zodiac_animal(Y)}",
        ]
        print("  ".join(c.ljust(w) for c, w in zip(row, colw)).rstrip())

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
