"""
realmcal.engines.layout
-----------------------
Construction-time preprocessing of a CalendarDefinition. Everything the
converters need per year is derived here once and never recomputed.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import accumulate
from typing import Tuple

from realmcal.core.types import CalendarDefinition, CalendarMode


def _starts(lengths: Tuple[int, ...]) -> Tuple[int, ...]:
    """Cumulative totals before each position: (0, l0, l0+l1, ...), one per entry."""
    return tuple(accumulate(lengths[:-1], initial=0)) if lengths else ()


@dataclass(frozen=True)
class YearLayout:
    month_days: Tuple[int, ...]
    intercalary: Tuple[bool, ...]

    total_days_in_year: int
    month_start_days: Tuple[int, ...]
    week_counting_days_in_year: int
    intercalary_days_before_month: Tuple[int, ...]
    week_counting_days_before_month: Tuple[int, ...]

    @classmethod
    def from_definition(cls, definition: CalendarDefinition) -> "YearLayout":
        days = tuple(m.days for m in definition.months)
        inter = tuple(m.is_intercalary for m in definition.months)
        inter_days = tuple(d if i else 0 for d, i in zip(days, inter))
        week_days = tuple(0 if i else d for d, i in zip(days, inter))

        return cls(
            month_days=days,
            intercalary=inter,
            total_days_in_year=sum(days),
            month_start_days=_starts(days),
            week_counting_days_in_year=sum(week_days),
            intercalary_days_before_month=_starts(inter_days),
            week_counting_days_before_month=_starts(week_days),
        )

    @property
    def month_count(self) -> int:
        return len(self.month_days)

    @property
    def has_months(self) -> bool:
        return bool(self.month_days)

    @property
    def has_intercalary(self) -> bool:
        return any(self.intercalary)

    def mode(self, has_leap_rules: bool) -> CalendarMode:
        if not self.has_months or self.total_days_in_year <= 0:
            return CalendarMode.SIMPLE_COUNTER
        if has_leap_rules:
            return CalendarMode.LEAP_YEAR
        return CalendarMode.FIXED_YEAR
