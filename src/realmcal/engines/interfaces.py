"""
realmcal.engines.interfaces
---------------------------
Defines the boundaries between the leap-rule evaluator (Leap), the year and
month resolution strategies (Lookup), the weekday cycle (Weekday), and the
orchestrator (CalendarDriver).

Standard Reference Frame:
All day arguments are absolute days: integers counted from day 0, the first
day of the driver's base year. Negative days are valid and precede it.
"""

from __future__ import annotations

from typing import Iterable, Optional, Protocol, Tuple

from realmcal.core.types import LeapRule


class LeapEngineProtocol(Protocol):
    """
    Pure, deterministic leap-year evaluator. The month lengths implied by
    leap_day_target_month must sum to days_in_year.
    """

    rules: Tuple[LeapRule, ...]

    @property
    def has_rules(self) -> bool:
        ...

    def is_leap_year(self, year: int) -> bool:
        ...

    def leap_days_before(self, target_year: int, base_year: int) -> int:
        """
        Leap days in [base_year, target_year) when target_year >= base_year,
        and the negated count of [target_year, base_year) otherwise.
        """
        ...

    def leap_day_target_month(self, year: int) -> Optional[int]:
        """Month index absorbing the extra day, None for 'last month'."""
        ...

    def count_first_matches(self, indices: Iterable[int], start_year: int, end_year: int) -> int:
        """Leap years in [start_year, end_year) whose first matching rule is in `indices`."""
        ...

    def mean_leap_ratio(self) -> Tuple[int, int]:
        """(leap years, years) over one full cycle."""
        ...

    def month_days(self, year: int, month_index: int, base_days: int) -> int:
        ...

    def days_in_year(self, year: int, base_days: int) -> int:
        ...


class YearLookupProtocol(Protocol):
    """
    Maps absolute days to (year, day_of_year) and years to the absolute day
    on which they start.
    """

    def year_and_day(self, absolute_day: int) -> Tuple[int, int]:
        ...

    def days_to_year(self, year: int) -> int:
        ...

    def days_in_year(self, year: int) -> int:
        ...


class MonthLookupProtocol(Protocol):
    """
    Maps a day of year to (month_index, day_of_month) and back, for a given
    year. month_index is 0-based, day_of_month 1-based.
    """

    def month_and_day(self, day_of_year: int, year: int) -> Tuple[int, int]:
        ...

    def days_before_month(self, month_index: int, year: int) -> int:
        ...

    def month_length(self, month_index: int, year: int) -> int:
        ...


class WeekdayResolverProtocol(Protocol):
    """Weekday index for a resolved date; -1 when the day has no weekday."""

    def weekday_index(self, absolute_day: int, year: int, month_index: int, day_of_month: int) -> int:
        ...
