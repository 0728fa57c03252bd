from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import re
import sys
from datetime import date

from lunarcal.config import Settings
from lunarcal.core.errors import LunarCalError

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _parse_ymd(s: str) -> date:
    try:
        y, m, d = map(int, s.split("-"))
        return date(y, m, d)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {s!r}") from e


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def cmd_day(argv: list[str]) -> int:
    import lunarcal
    from lunarcal.formatting import format_lunar_date, full_date

    p = argparse.ArgumentParser(prog="lunarcal day", description="Gregorian -> lunar day annotation")
    p.add_argument("date", type=_parse_ymd, help="YYYY-MM-DD")
    p.add_argument("--now", type=_parse_ymd, default=None, help="Reference 'today' (default: system date)")
    args = p.parse_args(argv)

    lunar = lunarcal.to_lunar(args.date)
    a = lunarcal.annotate(args.date, now=args.now)
    print(full_date(args.date))
    print(f"  lunar     : {format_lunar_date(lunar)}")
    print(f"  label     : {a.lunar_label.strip()}")
    print(f"  holiday   : {a.holiday_type}")
    print(f"  main info : {a.main_info}")
    if a.is_cny_eve:
        print("  new year's eve")
    return 0


def cmd_month(argv: list[str]) -> int:
    return _run_module_main("lunarcal.diagnostics.pretty_month", argv)


def cmd_terms(argv: list[str]) -> int:
    import lunarcal
    from lunarcal.core.time import mmdd

    p = argparse.ArgumentParser(prog="lunarcal terms", description="Solar terms of a lunar year")
    p.add_argument("year", type=int, help="Lunar year")
    args = p.parse_args(argv)

    # Terms after the new year day come first; the rest fall in January of the next year.
    ny = mmdd(lunarcal.new_year_day(args.year))
    for md, name in sorted(lunarcal.terms_for(args.year).items(), key=lambda kv: (kv[0] < ny, kv[0])):
        print(f"{md[:2]}-{md[2:]}  {name}")
    return 0


def cmd_between(argv: list[str]) -> int:
    import lunarcal
    from lunarcal.core.types import DaysBetweenResult
    from lunarcal.formatting import days_between_message

    p = argparse.ArgumentParser(prog="lunarcal between", description="Days between two dates")
    p.add_argument("first", type=_parse_ymd, help="YYYY-MM-DD")
    p.add_argument("second", type=_parse_ymd, help="YYYY-MM-DD")
    args = p.parse_args(argv)

    result = lunarcal.count_days(args.first, args.second)
    if result is None:
        result = DaysBetweenResult(start=args.first, end=args.first, days=0)
    print(days_between_message(result))
    return 0


def cmd_today(argv: list[str]) -> int:
    import lunarcal
    from lunarcal.formatting import menu_bar_title, tooltip

    p = argparse.ArgumentParser(prog="lunarcal today", description="Menu-bar title and tooltip for today")
    p.add_argument("--date", type=_parse_ymd, default=None, help="Use this date instead of today")
    args = p.parse_args(argv)

    d = args.date or date.today()
    print(menu_bar_title(d))
    print()
    print(tooltip(d, lunarcal.to_lunar(d)))
    return 0


def cmd_holidays(argv: list[str]) -> int:
    from lunarcal import holidays as hol

    p = argparse.ArgumentParser(prog="lunarcal holidays", description="Statutory holiday adjustments")
    sub = p.add_subparsers(dest="action", required=True)
    p_list = sub.add_parser("list", help="List entries of a year")
    p_list.add_argument("year", type=int)
    p_imp = sub.add_parser("import", help="Validate a dataset file and store it in the user cache")
    p_imp.add_argument("path", help="CSV (year,monthDay,type) or JSON list of records")
    args = p.parse_args(argv)

    settings = Settings.from_env()

    if args.action == "list":
        manager = hol.HolidayManager.from_settings(settings)
        for md, kind in manager.entries_for(args.year):
            print(f"{args.year}-{md[:2]}-{md[2:]}  {kind}")
        return 0

    from pathlib import Path

    records = hol.load_dataset_file(Path(args.path))
    n = hol.save_dataset(settings.cached_holidays_path, records)
    print(f"Stored {n} entries in {settings.cached_holidays_path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Shorthand: `lunarcal YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        argv = ["day"] + list(argv)

    settings = Settings.from_env()

    p = argparse.ArgumentParser(prog="lunarcal", description="Chinese lunar calendar toolkit CLI.")
    p.add_argument("--log-level", default=settings.log_level, help="Logging level (default: %(default)s)")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("day", help="Gregorian -> lunar day annotation")
    sub.add_parser("month", help="Print a Gregorian month grid with lunar labels")
    sub.add_parser("terms", help="Solar terms of a lunar year")
    sub.add_parser("between", help="Days between two dates")
    sub.add_parser("new-years", help="Print lunar New Year table (diagnostics)")
    sub.add_parser("holidays", help="List or import statutory holiday adjustments")
    sub.add_parser("today", help="Menu-bar title and tooltip for today")

    p_diag = sub.add_parser("diag", help="Diagnostics tools (no ephemeris required)")
    p_diag.add_argument("tool", choices=["leap-months"], help="Which diagnostic to run")

    p_ephem = sub.add_parser("ephem", help="Ephemeris-based diagnostics")
    p_ephem.add_argument("tool", choices=["validate-terms"], help="Which ephemeris diagnostic to run")

    args, rest = p.parse_known_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "day": cmd_day,
        "month": cmd_month,
        "terms": cmd_terms,
        "between": cmd_between,
        "holidays": cmd_holidays,
        "today": cmd_today,
    }

    try:
        if args.cmd in commands:
            return commands[args.cmd](rest)

        if args.cmd == "new-years":
            return _run_module_main("lunarcal.diagnostics.new_years_table", rest)

        if args.cmd == "diag":
            tool_map = {
                "leap-months": "lunarcal.diagnostics.leap_months",
            }
            return _run_module_main(tool_map[args.tool], rest)

        if args.cmd == "ephem":
            tool_map = {
                "validate-terms": "lunarcal.diagnostics.ephem.validate_terms",
            }
            return _run_module_main(tool_map[args.tool], rest)
    except LunarCalError as e:
        raise SystemExit(f"lunarcal: {e}") from e

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
