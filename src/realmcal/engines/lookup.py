"""
realmcal.engines.lookup
-----------------------
Year and month resolution strategies. A driver picks one year strategy and
one month strategy from its CalendarMode at construction:

  FIXED_YEAR -> FixedYearLookup + BisectMonthLookup   (O(1) / O(log n))
  LEAP_YEAR  -> LeapYearLookup  + ScanMonthLookup     (month lengths vary per year)
"""

from __future__ import annotations

from bisect import bisect_right
from typing import Optional, Tuple

from realmcal.core.types import CalendarMode

from .interfaces import LeapEngineProtocol, MonthLookupProtocol, YearLookupProtocol
from .layout import YearLayout


def effective_leap_month(leap: LeapEngineProtocol, year: int, month_count: int) -> Optional[int]:
    """
    Month index receiving the leap day of `year`, or None in a common year.
    A rule without a (valid) target month gives the day to the last month.
    """
    if month_count == 0 or not leap.is_leap_year(year):
        return None
    target = leap.leap_day_target_month(year)
    if target is None or not (0 <= target < month_count):
        return month_count - 1
    return target


# ---------------------------------------------------------
# Year strategies
# ---------------------------------------------------------

class FixedYearLookup:
    """Every year has the same length."""
    def __init__(self, layout: YearLayout, base_year: int):
        self.layout = layout
        self.base_year = base_year

    def year_and_day(self, absolute_day: int) -> Tuple[int, int]:
        elapsed, day_of_year = divmod(absolute_day, self.layout.total_days_in_year)
        return self.base_year + elapsed, day_of_year

    def days_to_year(self, year: int) -> int:
        return (year - self.base_year) * self.layout.total_days_in_year

    def days_in_year(self, year: int) -> int:
        return self.layout.total_days_in_year


class LeapYearLookup:
    """
    Year lengths vary with the leap rules. The year is estimated from the
    mean year length of one leap cycle, in exact integer arithmetic, and then
    corrected by walking one year at a time until
        days_to_year(y) <= absolute_day < days_to_year(y) + days_in_year(y).
    """
    def __init__(self, layout: YearLayout, base_year: int, leap: LeapEngineProtocol):
        self.layout = layout
        self.base_year = base_year
        self.leap = leap

        self._leaps, self._cycle = leap.mean_leap_ratio()

    def estimate_year(self, absolute_day: int) -> int:
        # absolute_day / (total + leaps/cycle), floored
        total = self.layout.total_days_in_year
        return self.base_year + (absolute_day * self._cycle) // (total * self._cycle + self._leaps)

    def year_and_day(self, absolute_day: int) -> Tuple[int, int]:
        year = self.estimate_year(absolute_day)
        start = self.days_to_year(year)

        while start > absolute_day:
            year -= 1
            start -= self.days_in_year(year)

        length = self.days_in_year(year)
        while start + length <= absolute_day:
            start += length
            year += 1
            length = self.days_in_year(year)

        return year, absolute_day - start

    def days_to_year(self, year: int) -> int:
        if year == self.base_year:
            return 0
        base_days = (year - self.base_year) * self.layout.total_days_in_year
        return base_days + self.leap.leap_days_before(year, self.base_year)

    def days_in_year(self, year: int) -> int:
        return self.leap.days_in_year(year, self.layout.total_days_in_year)


# ---------------------------------------------------------
# Month strategies
# ---------------------------------------------------------

class BisectMonthLookup:
    """Binary search over the cached month start days."""
    def __init__(self, layout: YearLayout):
        self.layout = layout

    def month_and_day(self, day_of_year: int, year: int) -> Tuple[int, int]:
        starts = self.layout.month_start_days
        m = bisect_right(starts, day_of_year) - 1
        m = min(max(m, 0), len(starts) - 1)
        return m, day_of_year - starts[m] + 1

    def days_before_month(self, month_index: int, year: int) -> int:
        return self.layout.month_start_days[month_index]

    def month_length(self, month_index: int, year: int) -> int:
        return self.layout.month_days[month_index]


class ScanMonthLookup:
    """Linear scan over the month lengths of one specific year."""
    def __init__(self, layout: YearLayout, leap: LeapEngineProtocol):
        self.layout = layout
        self.leap = leap

    def lengths(self, year: int) -> Tuple[int, ...]:
        target = effective_leap_month(self.leap, year, self.layout.month_count)
        if target is None:
            return self.layout.month_days
        return tuple(d + 1 if i == target else d for i, d in enumerate(self.layout.month_days))

    def month_and_day(self, day_of_year: int, year: int) -> Tuple[int, int]:
        cumulative = 0
        lengths = self.lengths(year)
        for i, days in enumerate(lengths):
            if day_of_year < cumulative + days:
                return i, day_of_year - cumulative + 1
            cumulative += days
        # Only reachable for a day_of_year past the end of the year
        last = len(lengths) - 1
        return last, day_of_year - (cumulative - lengths[last]) + 1

    def days_before_month(self, month_index: int, year: int) -> int:
        return sum(self.lengths(year)[:month_index])

    def month_length(self, month_index: int, year: int) -> int:
        return self.lengths(year)[month_index]


def make_lookups(
    layout: YearLayout,
    mode: CalendarMode,
    base_year: int,
    leap: LeapEngineProtocol,
) -> Tuple[Optional[YearLookupProtocol], Optional[MonthLookupProtocol]]:
    """Year and month strategies for a CalendarMode; None for the simple counter."""
    if mode is CalendarMode.LEAP_YEAR:
        return LeapYearLookup(layout, base_year, leap), ScanMonthLookup(layout, leap)
    if mode is CalendarMode.FIXED_YEAR:
        return FixedYearLookup(layout, base_year), BisectMonthLookup(layout)
    return None, None
