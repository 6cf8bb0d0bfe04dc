from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from .core.engine import CalendarRegistry
from .core.time import format_hhmm
from .core.types import CalendarDate, CalendarDefinition, CalendarOrigin
from .engines.driver import CalendarDriver
from .engines.factory import DriverSource, build_definition
from .engines.factory import make_driver as _make_driver

DateStyle = Literal["default", "long", "compact"]

_registry: Optional[CalendarRegistry] = None
# Read-only drivers for the query helpers below; never handed out, so their
# clocks are never touched.
_drivers: Dict[str, CalendarDriver] = {}


def set_registry(reg: CalendarRegistry) -> None:
    global _registry
    _registry = reg
    _drivers.clear()


def _reg() -> CalendarRegistry:
    if _registry is None:
        raise RuntimeError("Calendar registry not initialized")
    return _registry


def _query_driver(calendar: str) -> CalendarDriver:
    if calendar not in _drivers:
        _drivers[calendar] = CalendarDriver(_reg().get(calendar))
    return _drivers[calendar]


def list_calendars() -> List[str]:
    return _reg().list()


def calendar_info(name: str) -> Dict[str, Any]:
    drv = _query_driver(name)
    defn = drv.definition
    return {
        "id": defn.id,
        "name": defn.name,
        "description": defn.description,
        "mode": drv.mode.value,
        "months": [m.name for m in defn.months],
        "intercalary_months": [m.name for m in defn.months if m.is_intercalary],
        "weekdays": list(defn.weekdays),
        "days_in_year": drv.get_total_days_in_year(),
        "week_counting_days_in_year": drv.get_week_counting_days_in_year(),
        "has_leap_rules": drv.has_leap_rules(),
        "starting_year": defn.starting_year,
        "eras": [e.abbrev for e in defn.eras],
        "seasons": [s.name for s in defn.seasons],
    }


def get_driver(name: str, origin: Optional[CalendarOrigin] = None) -> CalendarDriver:
    """A fresh driver (with its own clock) for a registered calendar."""
    return CalendarDriver(_reg().get(name), origin)


def make_driver(definition: DriverSource, origin: Optional[CalendarOrigin] = None) -> CalendarDriver:
    return _make_driver(definition, origin)


def register_calendar(name: str, definition: DriverSource, *, overwrite: bool = False) -> None:
    _reg().register(name, build_definition(definition), overwrite=overwrite)
    _drivers.pop(name, None)


# ============================================================
# Formatting
# ============================================================

def ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def format_date(date: CalendarDate, driver: CalendarDriver, *, style: DateStyle = "default") -> str:
    """
    default: "Hammer 1, 1492 DR (1st Day)"
    long:    "1st Day, 1st of Hammer, 1492 DR"
    compact: "1 Hammer 1492"
    Intercalary days render as just the month name and year; simple-counter
    dates as "Day N".
    """
    if date.is_simple_counter:
        return f"Day {date.absolute_day}"

    single_day = date.is_intercalary and driver.get_days_in_month(date.year, date.month_index) == 1
    if style == "compact":
        if single_day:
            return f"{date.month_name} {date.year}"
        return f"{date.day_of_month} {date.month_name} {date.year}"

    year = driver.format_year(date.year)
    if single_day:
        day_part = date.month_name
    elif style == "long":
        day_part = f"{ordinal(date.day_of_month)} of {date.month_name}"
    else:
        day_part = f"{date.month_name} {date.day_of_month}"

    if style == "long":
        prefix = f"{date.day_of_week}, " if date.day_of_week else ""
        return f"{prefix}{day_part}, {year}"
    suffix = f" ({date.day_of_week})" if date.day_of_week else ""
    return f"{day_part}, {year}{suffix}"


# ============================================================
# Queries on registered calendars
# ============================================================

def date_info(
    absolute_day: int,
    calendar: str = "harptos",
    *,
    region: Optional[str] = None,
    time_of_day: Optional[int] = None,
) -> Dict[str, Any]:
    drv = _query_driver(calendar)
    date = drv.get_date(absolute_day)
    season = drv.get_season(absolute_day, region)
    solar = drv.get_solar_times(absolute_day, region)
    era = drv.get_era(date.year)
    info: Dict[str, Any] = {
        "calendar": calendar,
        "date": date,
        "formatted": format_date(date, drv),
        "era": era.name if era is not None else None,
        "season": season.name if season is not None else None,
        "sunrise": format_hhmm(solar.sunrise),
        "sunset": format_hhmm(solar.sunset),
        "daylight_minutes": solar.daylight_minutes,
        "holidays": [h.name for h in drv.get_holidays(absolute_day)],
        "is_leap_year": drv.is_leap_year(date.year) if not date.is_simple_counter else False,
    }
    if time_of_day is not None:
        info["time"] = format_hhmm(time_of_day)
        info["sun_state"] = drv.get_sun_state(absolute_day, time_of_day, region)
        info["light_level"] = drv.get_light_level(absolute_day, time_of_day, region)
    return info


def to_absolute_day(
    year: int,
    month_index: int,
    day_of_month: int,
    calendar: str = "harptos",
    *,
    strict: bool = False,
) -> int:
    return _query_driver(calendar).get_absolute_day(year, month_index, day_of_month, strict=strict)


def month_days(year: int, month_index: int, calendar: str = "harptos") -> List[CalendarDate]:
    """Every date of one month, in order."""
    drv = _query_driver(calendar)
    if not drv.has_months():
        return []
    first = drv.get_absolute_day(year, month_index, 1, strict=True)
    return [drv.get_date(first + i) for i in range(drv.get_days_in_month(year, month_index))]


def year_summary(year: int, calendar: str = "harptos") -> Dict[str, Any]:
    drv = _query_driver(calendar)
    defn: CalendarDefinition = drv.definition
    months = [
        {
            "index": i,
            "name": m.name,
            "type": m.type,
            "days": drv.get_days_in_month(year, i),
            "first_day": drv.get_absolute_day(year, i, 1),
        }
        for i, m in enumerate(defn.months)
    ]
    return {
        "calendar": calendar,
        "year": year,
        "label": drv.format_year(year),
        "is_leap_year": drv.is_leap_year(year),
        "leap_day_month": drv.get_leap_day_target_month(year),
        "days": drv.get_days_in_year(year),
        "first_day": drv.get_year_start(year),
        "months": months,
    }
