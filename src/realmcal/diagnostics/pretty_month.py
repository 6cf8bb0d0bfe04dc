from __future__ import annotations

import argparse
from typing import List, Optional

import realmcal
from realmcal.core.types import CalendarDate
from realmcal.engines.driver import CalendarDriver


def cell(text: str, w: int) -> str:
    return text[: w - 1].rjust(w - 1) + " "


def weekday_header(drv: CalendarDriver, w: int) -> str:
    return "".join(cell(name, w) for name in drv.definition.weekdays).rstrip()


def month_dates(drv: CalendarDriver, year: int, month_index: int) -> List[CalendarDate]:
    first = drv.get_absolute_day(year, month_index, 1, strict=True)
    return [drv.get_date(first + i) for i in range(drv.get_days_in_month(year, month_index))]


def month_lines(drv: CalendarDriver, year: int, month_index: int, w: int = 5) -> List[str]:
    """
    A month laid out in weekday columns. Intercalary months are listed one
    day per line since they sit outside the week.
    """
    dates = month_dates(drv, year, month_index)
    month = drv.definition.months[month_index]
    lines = [f"{month.name} {drv.format_year(year)}  (days {dates[0].absolute_day}..{dates[-1].absolute_day})"]

    if month.is_intercalary or not drv.has_weekdays():
        for d in dates:
            lines.append("  " + realmcal.format_date(d, drv))
    else:
        cols = drv.get_week_length()
        header = weekday_header(drv, w)
        lines.append(header)
        lines.append("-" * len(header))
        row = [" " * w] * dates[0].day_of_week_index
        for d in dates:
            row.append(cell(str(d.day_of_month), w))
            if len(row) == cols:
                lines.append("".join(row).rstrip())
                row = []
        if row:
            lines.append("".join(row).rstrip())

    for d in dates:
        names = [h.name for h in drv.get_holidays(d.absolute_day)]
        if names:
            lines.append(f"  * {d.day_of_month:>2}: {', '.join(names)}")

    months = drv.definition.months
    if month_index + 1 < len(months) and months[month_index + 1].is_intercalary:
        nxt = months[month_index + 1]
        n = drv.get_days_in_month(year, month_index + 1)
        lines.append(f"  + followed by {nxt.name} ({n} day{'s' if n != 1 else ''} outside the week)")
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Print one month of a calendar laid out by weekday.")
    p.add_argument("year", type=int)
    p.add_argument("month", type=int, help="0-based month index")
    p.add_argument("--calendar", default="harptos", help="registered calendar name (default: harptos)")
    p.add_argument("--file", help="calendar definition file (.json/.yaml) instead of --calendar")
    p.add_argument("--width", type=int, default=5, help="column width (default: 5)")
    args = p.parse_args(argv)

    drv = realmcal.make_driver(args.file) if args.file else realmcal.get_driver(args.calendar)
    if not drv.has_months():
        raise SystemExit(f"Calendar '{drv.definition.id}' has no months")

    for line in month_lines(drv, args.year, args.month, w=args.width):
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
