# tests/conftest.py

import pytest
from dataclasses import replace

from realmcal.core.types import CalendarDefinition, LeapRule, Month
from realmcal.engines.driver import CalendarDriver
from realmcal.engines.specs import HARPTOS


def _months(*pairs):
    return tuple(
        Month(name=name, days=days, type="intercalary" if name.startswith("*") else "standard")
        for name, days in pairs
    )


@pytest.fixture
def harptos_1493():
    """Harptos with 1493 DR (a common year) as day 0."""
    return CalendarDriver(replace(HARPTOS, starting_year=1493))


@pytest.fixture
def fixed_def():
    # 3 x 30 days, 5-day week, no leap years
    return CalendarDefinition(
        id="fixed",
        name="Fixed",
        months=_months(("First", 30), ("Second", 30), ("Third", 30)),
        weekdays=("A", "B", "C", "D", "E"),
    )


@pytest.fixture
def simple_leap_def(fixed_def):
    # leap day every 4 years, added to "Second"
    return replace(fixed_def, id="simple-leap", leap_rules=(LeapRule(interval=4, target_month=1),))


@pytest.fixture
def festival_def():
    """Intercalary festival between two months; leap day lands in a standard month."""
    return CalendarDefinition(
        id="festival",
        name="Festival",
        months=_months(("Early", 10), ("*Fest", 1), ("Late", 10)),
        weekdays=("Mo", "Tu", "We", "Th", "Fr", "Sa", "Su"),
        leap_rules=(LeapRule(interval=2, target_month=0),),
    )


@pytest.fixture
def counter_def():
    return CalendarDefinition(id="counter", name="Counter")


@pytest.fixture
def mixed_leap_def(festival_def):
    """Leap days alternate between a standard month and the intercalary festival."""
    return replace(
        festival_def,
        id="mixed-leap",
        leap_rules=(LeapRule(interval=2, target_month=0), LeapRule(interval=3, target_month=1)),
    )
