from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import re
import sys

from realmcal.core.errors import RealmcalError

_DAY_RE = re.compile(r"^-?\d+$")


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


def _add_source_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--calendar", default="harptos", help="registered calendar name (default: harptos)")
    p.add_argument("--file", help="calendar definition file (.json/.yaml); overrides --calendar")
    p.add_argument("--origin-year", type=int, help="year of absolute day 0 (default: the calendar's starting year)")


def _driver(args: argparse.Namespace):
    import realmcal

    origin = realmcal.CalendarOrigin(year=args.origin_year) if args.origin_year is not None else None
    if args.file:
        return realmcal.make_driver(realmcal.load_definition(args.file), origin)
    return realmcal.get_driver(args.calendar, origin)


def cmd_date(argv: list[str]) -> int:
    import realmcal
    from realmcal.core.time import format_hhmm, parse_hhmm

    p = argparse.ArgumentParser(prog="realmcal date", description="Absolute day -> calendar date")
    p.add_argument("day", type=int, help="absolute day number (day 0 is the first day of the origin year)")
    _add_source_args(p)
    p.add_argument("--region", help="use region-specific seasons")
    p.add_argument("--time", help="time of day HH:MM for sun state and light level")
    args = p.parse_args(argv)

    drv = _driver(args)
    d = drv.get_date(args.day)
    print(realmcal.format_date(d, drv))

    if d.is_simple_counter:
        return 0
    era = drv.get_era(d.year)
    season = drv.get_season(args.day, args.region)
    solar = drv.get_solar_times(args.day, args.region)
    print(f"  year:     {drv.format_year(d.year)}{'  (leap year)' if drv.is_leap_year(d.year) else ''}")
    print(f"  month:    {d.month_name} (index {d.month_index}){'  [intercalary]' if d.is_intercalary else ''}")
    print(f"  day:      {d.day_of_month}  (day {d.day_of_year} of {drv.get_days_in_year(d.year)})")
    if d.day_of_week:
        print(f"  weekday:  {d.day_of_week}")
    if era is not None:
        print(f"  era:      {era.name}")
    if season is not None:
        print(f"  season:   {season.name}")
    print(f"  sun:      {format_hhmm(solar.sunrise)} - {format_hhmm(solar.sunset)}")
    holidays = drv.get_holidays(args.day)
    if holidays:
        print(f"  holidays: {', '.join(h.name for h in holidays)}")
    if args.time:
        minutes = parse_hhmm(args.time)
        state = drv.get_sun_state(args.day, minutes, args.region)
        print(f"  at {format_hhmm(minutes)}: {state}, {drv.get_light_level(args.day, minutes, args.region)}")
    return 0


def cmd_day(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="realmcal day", description="Calendar date -> absolute day")
    p.add_argument("year", type=int)
    p.add_argument("month", type=int, help="0-based month index")
    p.add_argument("day", type=int, help="1-based day of month")
    _add_source_args(p)
    p.add_argument("--strict", action="store_true", help="reject days past the end of the month")
    args = p.parse_args(argv)

    drv = _driver(args)
    print(drv.get_absolute_day(args.year, args.month, args.day, strict=args.strict))
    return 0


def cmd_list(argv: list[str]) -> int:
    import realmcal

    p = argparse.ArgumentParser(prog="realmcal list", description="List registered calendars")
    p.parse_args(argv)

    for name in realmcal.list_calendars():
        info = realmcal.calendar_info(name)
        print(f"{name:16s} {info['mode']:15s} {info['days_in_year']:4d} days  {info['name']}")
    return 0


def cmd_validate(argv: list[str]) -> int:
    import realmcal
    from realmcal.config.loader import read_mapping
    from realmcal.validation.validator import validation_messages

    p = argparse.ArgumentParser(prog="realmcal validate", description="Validate a calendar definition file")
    p.add_argument("path")
    p.add_argument("--quiet", action="store_true", help="only print errors")
    args = p.parse_args(argv)

    result = realmcal.validate(read_mapping(args.path))
    for line in validation_messages(result):
        if args.quiet and not line.startswith("[ERROR]"):
            continue
        print(line)
    print("valid" if result.valid else f"invalid ({len(result.errors)} errors)")
    return 0 if result.valid else 1


def cmd_advance(argv: list[str]) -> int:
    import realmcal
    from realmcal.core.time import format_hhmm, parse_hhmm

    p = argparse.ArgumentParser(prog="realmcal advance", description="Advance the clock and report the new day")
    p.add_argument("--day", type=int, default=0, help="current absolute day")
    p.add_argument("--time", default="00:00", help="current time of day HH:MM")
    p.add_argument("--minutes", type=int, required=True, help="minutes to advance (>= 0)")
    _add_source_args(p)
    args = p.parse_args(argv)

    drv = _driver(args)
    drv.set_time_of_day(parse_hhmm(args.time))
    rolled = drv.advance_time(args.minutes)
    day = args.day + rolled
    print(f"{realmcal.format_date(drv.get_date(day), drv)} {format_hhmm(drv.get_time_of_day())}")
    print(f"  day {day} (+{rolled})")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Shorthand: `realmcal 1234 ...`
    if argv and _DAY_RE.match(argv[0]):
        argv = ["date"] + argv

    p = argparse.ArgumentParser(prog="realmcal", description="Campaign calendar toolkit CLI.")
    p.add_argument("--log-level", default="WARNING", help="logging level (default: WARNING)")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("date", help="Absolute day -> calendar date", add_help=False)
    sub.add_parser("day", help="Calendar date -> absolute day", add_help=False)
    sub.add_parser("list", help="List registered calendars", add_help=False)
    sub.add_parser("validate", help="Validate a calendar definition file", add_help=False)
    sub.add_parser("advance", help="Advance the time of day with day rollover", add_help=False)

    # diagnostics
    sub.add_parser("pretty-month", help="Print a month grid (diagnostics)", add_help=False)
    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument(
        "tool",
        choices=["round-trip", "leap-years"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "date": cmd_date,
        "day": cmd_day,
        "list": cmd_list,
        "validate": cmd_validate,
        "advance": cmd_advance,
    }
    try:
        if args.cmd in commands:
            return commands[args.cmd](rest)

        if args.cmd == "pretty-month":
            return _run_module_main("realmcal.diagnostics.pretty_month", rest)

        if args.cmd == "diag":
            tool_map = {
                "round-trip": "realmcal.diagnostics.round_trip",
                "leap-years": "realmcal.diagnostics.leap_years",
            }
            return _run_module_main(tool_map[args.tool], rest)
    except (RealmcalError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
