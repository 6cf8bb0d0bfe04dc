# tests/test_gregorian.py

import random
from datetime import date, timedelta

from realmcal.engines.driver import CalendarDriver
from realmcal.engines.specs import GREGORIAN

EPOCH = date(2000, 1, 1)  # absolute day 0 of the preset


def test_against_datetime():
    random.seed(42)
    drv = CalendarDriver(GREGORIAN)
    # stay inside datetime's year 1..9999
    for _ in range(5000):
        day = random.randint(-700_000, 2_900_000)
        ref = EPOCH + timedelta(days=day)
        d = drv.get_date(day)
        assert (d.year, d.month_index + 1, d.day_of_month) == (ref.year, ref.month, ref.day)
        assert d.day_of_year == ref.timetuple().tm_yday - 1
        assert drv.get_absolute_day(ref.year, ref.month - 1, ref.day) == day


def test_year_lengths_against_datetime():
    drv = CalendarDriver(GREGORIAN)
    for year in range(1590, 2410):
        expected = (date(year + 1, 1, 1) - date(year, 1, 1)).days
        assert drv.get_days_in_year(year) == expected
        assert drv.get_year_start(year) == (date(year, 1, 1) - EPOCH).days


def test_february():
    drv = CalendarDriver(GREGORIAN)
    assert drv.get_days_in_month(1900, 1) == 28
    assert drv.get_days_in_month(2000, 1) == 29
    assert drv.get_days_in_month(2024, 1) == 29
    assert drv.get_date(59).triple == (2000, 1, 29)
    assert drv.get_date(60).triple == (2000, 2, 1)
