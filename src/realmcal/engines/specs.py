"""
realmcal.engines.specs
----------------------
Preset calendar definitions. Pure data; drivers are built from these by the
registry bootstrap.
"""

from __future__ import annotations

from typing import Dict, Tuple

from realmcal.core.types import CalendarDefinition, Era, Holiday, Month, Season

from .leap import gregorian_leap_rules, simple_leap_rule


def _h(hours: int, minutes: int = 0) -> int:
    return hours * 60 + minutes


def _months(*pairs: Tuple[str, int], intercalary: Tuple[str, ...] = ()) -> Tuple[Month, ...]:
    return tuple(
        Month(name=name, days=days, order=i, type="intercalary" if name in intercalary else "standard")
        for i, (name, days) in enumerate(pairs)
    )


# ============================================================
# GREGORIAN (as user data: no real-world epoch alignment)
# ============================================================

GREGORIAN_MONTHS = _months(
    ("January", 31), ("February", 28), ("March", 31), ("April", 30),
    ("May", 31), ("June", 30), ("July", 31), ("August", 31),
    ("September", 30), ("October", 31), ("November", 30), ("December", 31),
)

GREGORIAN = CalendarDefinition(
    id="gregorian",
    name="Gregorian Calendar",
    description="Twelve months with the 4/100/400 leap rule; leap day in February",
    months=GREGORIAN_MONTHS,
    weekdays=("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"),
    starting_year=2000,
    year_suffix="AD",
    leap_rules=gregorian_leap_rules(target_month=1),
    eras=(
        Era(name="Before Christ", abbrev="BC", start_year=None, end_year=1, direction=-1),
        Era(name="Anno Domini", abbrev="AD", start_year=1),
    ),
    seasons=(
        Season("Spring", start_month=2, start_day=20, sunrise=_h(6), sunset=_h(18)),
        Season("Summer", start_month=5, start_day=21, sunrise=_h(5), sunset=_h(20)),
        Season("Fall", start_month=8, start_day=23, sunrise=_h(6, 30), sunset=_h(18, 30)),
        Season("Winter", start_month=11, start_day=21, sunrise=_h(7), sunset=_h(17)),
    ),
)


# ============================================================
# HARPTOS (Forgotten Realms)
# ============================================================

# 12 x 30-day months, 5 festival days outside the tenday, Shieldmeet
# every 4 years attached to Midsummer.
HARPTOS_FESTIVALS = ("Midwinter", "Greengrass", "Midsummer", "Highharvestide", "Feast of the Moon")

HARPTOS_MONTHS = _months(
    ("Hammer", 30), ("Midwinter", 1), ("Alturiak", 30), ("Ches", 30), ("Tarsakh", 30),
    ("Greengrass", 1), ("Mirtul", 30), ("Kythorn", 30), ("Flamerule", 30), ("Midsummer", 1),
    ("Eleasis", 30), ("Eleint", 30), ("Highharvestide", 1), ("Marpenoth", 30), ("Uktar", 30),
    ("Feast of the Moon", 1), ("Nightal", 30),
    intercalary=HARPTOS_FESTIVALS,
)

HARPTOS_MIDSUMMER = 9

HARPTOS = CalendarDefinition(
    id="harptos",
    name="Calendar of Harptos",
    description="The calendar of Faerun with intercalary festival days",
    months=HARPTOS_MONTHS,
    weekdays=tuple(f"{n} Day" for n in ("1st", "2nd", "3rd", "4th", "5th", "6th", "7th", "8th", "9th", "10th")),
    holidays=(
        Holiday("Midwinter", "Festival day between Hammer and Alturiak", month=1, day=1, notify_on_arrival=True),
        Holiday("Greengrass", "Festival day between Tarsakh and Mirtul", month=5, day=1, notify_on_arrival=True),
        Holiday("Midsummer", "Festival day between Flamerule and Eleasis", month=9, day=1, notify_on_arrival=True),
        Holiday("Shieldmeet", "Leap day following Midsummer", month=9, day=2, notify_on_arrival=True),
        Holiday("Highharvestide", "Festival day between Eleint and Marpenoth", month=12, day=1, notify_on_arrival=True),
        Holiday("Feast of the Moon", "Festival day between Uktar and Nightal", month=15, day=1, notify_on_arrival=True),
    ),
    starting_year=1492,
    year_suffix="DR",
    leap_rules=simple_leap_rule(4, target_month=HARPTOS_MIDSUMMER),
    eras=(
        Era(name="Before Dalereckoning", abbrev="BD", start_year=-10000, end_year=1, direction=-1),
        Era(name="Dalereckoning", abbrev="DR", start_year=1),
    ),
    seasons=(
        Season("Spring", start_month=3, start_day=1, sunrise=_h(6), sunset=_h(18)),
        Season("Summer", start_month=7, start_day=1, sunrise=_h(5), sunset=_h(19)),
        Season("Fall", start_month=11, start_day=1, sunrise=_h(6, 30), sunset=_h(17, 30)),
        Season("Winter", start_month=16, start_day=1, sunrise=_h(7, 30), sunset=_h(16, 30)),
        Season("Polar Summer", start_month=7, start_day=1, sunrise=0, sunset=1439, region="polar"),
        Season("Polar Winter", start_month=16, start_day=1, sunrise=_h(11), sunset=_h(13), region="polar"),
    ),
)


# ============================================================
# ABSALOM RECKONING (Pathfinder)
# ============================================================

ABSALOM = CalendarDefinition(
    id="absalom",
    name="Absalom Reckoning",
    months=_months(
        ("Abadius", 31), ("Calistril", 28), ("Pharast", 31), ("Gozran", 30),
        ("Desnus", 31), ("Sarenith", 30), ("Erastus", 31), ("Arodus", 31),
        ("Rova", 30), ("Lamashan", 31), ("Neth", 30), ("Kuthona", 31),
    ),
    weekdays=("Moonday", "Toilday", "Wealday", "Oathday", "Fireday", "Starday", "Sunday"),
    starting_year=4724,
    year_suffix="AR",
)


# ============================================================
# SIMPLE COUNTER
# ============================================================

SIMPLE_COUNTER = CalendarDefinition(
    id="simple-counter",
    name="Simple Day Counter",
    description="No months or weekdays; dates are plain day numbers",
)


ALL_SPECS: Dict[str, CalendarDefinition] = {
    spec.id: spec for spec in (GREGORIAN, HARPTOS, ABSALOM, SIMPLE_COUNTER)
}
