from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional, Tuple

MonthType = Literal["standard", "intercalary"]
SunState = Literal["dawn", "day", "dusk", "night"]
LightLevel = Literal["bright", "dim", "dark"]


class CalendarMode(str, Enum):
    """How a driver resolves dates; decided once per definition."""
    SIMPLE_COUNTER = "simple_counter"
    FIXED_YEAR = "fixed_year"
    LEAP_YEAR = "leap_year"


@dataclass(frozen=True)
class Month:
    name: str
    days: int
    order: Optional[int] = None
    type: MonthType = "standard"

    @property
    def is_intercalary(self) -> bool:
        return self.type == "intercalary"


@dataclass(frozen=True)
class LeapRule:
    """
    A year is matched when (year - offset) % interval == 0 and no nested
    exclude rule matches it. target_month=None sends the leap day to the
    last month of the year.
    """
    interval: int
    offset: int = 0
    target_month: Optional[int] = None
    exclude: Tuple["LeapRule", ...] = ()


@dataclass(frozen=True)
class Era:
    name: str
    abbrev: str
    start_year: Optional[int] = None  # None = unbounded in the past
    end_year: Optional[int] = None    # exclusive; None = current era
    direction: Literal[1, -1] = 1

    def contains(self, year: int) -> bool:
        if self.start_year is not None and year < self.start_year:
            return False
        return self.end_year is None or year < self.end_year


@dataclass(frozen=True)
class Season:
    name: str
    start_month: int  # 0-indexed
    start_day: int    # 1-indexed
    sunrise: int      # minutes from midnight
    sunset: int
    region: Optional[str] = None


@dataclass(frozen=True)
class Holiday:
    name: str
    description: str = ""
    day_of_year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    notify_on_arrival: bool = False


@dataclass(frozen=True)
class CalendarDefinition:
    """Pure data payload describing one user-defined calendar."""
    id: str
    name: str
    months: Tuple[Month, ...] = ()
    weekdays: Tuple[str, ...] = ()
    holidays: Tuple[Holiday, ...] = ()
    starting_year: int = 0
    year_suffix: str = ""
    leap_rules: Tuple[LeapRule, ...] = ()
    eras: Tuple[Era, ...] = ()
    seasons: Tuple[Season, ...] = ()
    description: str = ""


@dataclass(frozen=True)
class CalendarOrigin:
    year: int
    month: int = 0
    day: int = 1
    description: str = ""


@dataclass(frozen=True)
class CalendarDate:
    absolute_day: int
    year: int
    month_index: int
    day_of_month: int
    month_name: str
    day_of_week: str
    day_of_week_index: int
    day_of_year: int
    year_suffix: str
    is_simple_counter: bool
    is_intercalary: bool

    @property
    def triple(self) -> Tuple[int, int, int]:
        return (self.year, self.month_index, self.day_of_month)


@dataclass(frozen=True)
class SolarTimes:
    sunrise: int
    sunset: int

    @property
    def daylight_minutes(self) -> int:
        return max(0, self.sunset - self.sunrise)


@dataclass(frozen=True)
class ClockSnapshot:
    """The persisted (absolute_day, time_of_day) pair."""
    absolute_day: int
    time_of_day: int = 0


@dataclass(frozen=True)
class ValidationIssue:
    severity: Literal["error", "warning", "info"]
    field: str
    message: str
    suggestion: Optional[str] = None


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: Tuple[ValidationIssue, ...] = ()
    warnings: Tuple[ValidationIssue, ...] = ()
    info: Tuple[ValidationIssue, ...] = ()
