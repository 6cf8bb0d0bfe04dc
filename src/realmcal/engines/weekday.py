"""
realmcal.engines.weekday
------------------------
Weekday cycle resolvers.

With intercalary months the weekly cycle runs over "week-counting" days
only: an intercalary day has no weekday and does not advance the cycle, so
the day after it continues where the day before it left off.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from .interfaces import LeapEngineProtocol, WeekdayResolverProtocol
from .layout import YearLayout
from .lookup import effective_leap_month


class NoWeekdays:
    def weekday_index(self, absolute_day: int, year: int, month_index: int, day_of_month: int) -> int:
        return -1


class ModuloWeekdays:
    """Every day participates in the cycle."""
    def __init__(self, week_length: int):
        self.week_length = week_length

    def weekday_index(self, absolute_day: int, year: int, month_index: int, day_of_month: int) -> int:
        return absolute_day % self.week_length


class IntercalaryWeekdays:
    """
    Counts week-counting days elapsed since day 0:
      (year - base) * week_counting_days_in_year
      + non-intercalary days in months before month_index
      + (day_of_month - 1) if month_index is not intercalary
    plus every leap day that fell into a non-intercalary month in between.
    A leap day in an intercalary month stays outside the week like the rest
    of that month.
    """
    def __init__(
        self,
        layout: YearLayout,
        base_year: int,
        week_length: int,
        leap: Optional[LeapEngineProtocol] = None,
    ):
        self.layout = layout
        self.base_year = base_year
        self.week_length = week_length
        self.leap = leap if leap is not None and leap.has_rules else None

        # Which leap days advance the week: "none", "all", or "some" when the
        # rules disagree; then only the rules listed in _counted_rules count.
        self._leap_policy = "none"
        self._counted_rules: Tuple[int, ...] = ()
        if self.leap is not None:
            n = layout.month_count
            live = [
                (i, rule.target_month if rule.target_month is not None and 0 <= rule.target_month < n else n - 1)
                for i, rule in enumerate(self.leap.rules)
                if rule.interval >= 1
            ]
            self._counted_rules = tuple(i for i, t in live if not layout.intercalary[t])
            if len(self._counted_rules) == len(live):
                self._leap_policy = "all"
            elif self._counted_rules:
                self._leap_policy = "some"

    def week_counting_day(self, year: int, month_index: int, day_of_month: int) -> int:
        layout = self.layout
        count = (year - self.base_year) * layout.week_counting_days_in_year
        count += layout.week_counting_days_before_month[month_index]
        if not layout.intercalary[month_index]:
            count += day_of_month - 1
        if self.leap is not None:
            count += self._counted_leap_days_before(year)
            target = effective_leap_month(self.leap, year, layout.month_count)
            if target is not None and target < month_index and not layout.intercalary[target]:
                count += 1
        return count

    def weekday_index(self, absolute_day: int, year: int, month_index: int, day_of_month: int) -> int:
        if self.layout.intercalary[month_index]:
            return -1
        return self.week_counting_day(year, month_index, day_of_month) % self.week_length

    def _counted_leap_days_before(self, year: int) -> int:
        """Signed count of leap days in [base, year) landing in non-intercalary months."""
        if self._leap_policy == "none":
            return 0
        if self._leap_policy == "all":
            return self.leap.leap_days_before(year, self.base_year)
        if year >= self.base_year:
            return self.leap.count_first_matches(self._counted_rules, self.base_year, year)
        return -self.leap.count_first_matches(self._counted_rules, year, self.base_year)


def make_weekday_resolver(
    layout: YearLayout,
    base_year: int,
    weekdays: Sequence[str],
    leap: Optional[LeapEngineProtocol] = None,
) -> WeekdayResolverProtocol:
    if not weekdays:
        return NoWeekdays()
    if layout.has_intercalary and layout.week_counting_days_in_year > 0:
        return IntercalaryWeekdays(layout, base_year, len(weekdays), leap)
    return ModuloWeekdays(len(weekdays))
