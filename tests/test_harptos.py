# tests/test_harptos.py

import random
from dataclasses import replace

import pytest

from realmcal.core.types import CalendarOrigin
from realmcal.engines.driver import CalendarDriver
from realmcal.engines.specs import HARPTOS

FESTIVAL_DAYS_1493 = [30, 121, 212, 273, 334]


def test_year_shape(harptos_1493):
    drv = harptos_1493
    assert drv.get_total_days_in_year() == 365
    assert drv.get_week_counting_days_in_year() == 360
    assert drv.has_intercalary_months()


@pytest.mark.parametrize("day", FESTIVAL_DAYS_1493)
def test_festival_days_have_no_weekday(harptos_1493, day):
    d = harptos_1493.get_date(day)
    assert d.is_intercalary
    assert harptos_1493.is_intercalary_day(day)
    assert not harptos_1493.is_intercalary_day(day - 1)
    assert d.day_of_week == ""
    assert d.day_of_week_index == -1
    assert d.day_of_month == 1


def test_known_dates(harptos_1493):
    drv = harptos_1493
    d = drv.get_date(0)
    assert (d.month_name, d.day_of_month, d.year, d.day_of_week) == ("Hammer", 1, 1493, "1st Day")
    assert drv.get_date(29).day_of_week == "10th Day"
    assert drv.get_date(30).month_name == "Midwinter"
    assert drv.get_date(212).month_name == "Midsummer"

    d = drv.get_date(364)
    assert (d.month_name, d.day_of_month, d.year) == ("Nightal", 30, 1493)
    d = drv.get_date(365)
    assert (d.month_name, d.day_of_month, d.year) == ("Hammer", 1, 1494)

    # 1493..1502 holds two leap years (1496, 1500)
    d = drv.get_date(3652)
    assert (d.month_name, d.day_of_month, d.year) == ("Hammer", 1, 1503)


def test_weekdays_skip_festivals(harptos_1493):
    drv = harptos_1493
    # Hammer 30 is the 10th day; Alturiak 1 resumes at the 1st
    assert drv.get_date(29).day_of_week_index == 9
    assert drv.get_date(31).day_of_week_index == 0


def test_weekday_continuity_across_years(harptos_1493, festival_def):
    for drv in (harptos_1493, CalendarDriver(festival_def)):
        n = drv.get_week_length()
        prev = None
        for day in range(-3000, 3000):
            d = drv.get_date(day)
            if d.is_intercalary:
                continue
            if prev is not None:
                assert d.day_of_week_index == (prev + 1) % n, (drv.definition.id, day, d)
            prev = d.day_of_week_index


def test_every_year_starts_on_first_day(harptos_1493):
    drv = harptos_1493
    for year in range(1480, 1520):
        day = drv.get_year_start(year)
        assert drv.get_date(day).day_of_week == "1st Day"


def test_shieldmeet(harptos_1493):
    drv = harptos_1493
    assert drv.get_leap_day_target_month(1492) == 9
    assert drv.get_leap_day_target_month(1493) is None
    assert drv.get_days_in_month(1496, 9) == 2
    assert drv.get_days_in_year(1496) == 366

    start = drv.get_year_start(1496)
    midsummer = drv.get_date(start + 212)
    shieldmeet = drv.get_date(start + 213)
    assert (midsummer.month_name, midsummer.day_of_month) == ("Midsummer", 1)
    assert (shieldmeet.month_name, shieldmeet.day_of_month) == ("Midsummer", 2)
    assert shieldmeet.is_intercalary and shieldmeet.day_of_week == ""
    assert drv.get_date(start + 214).triple == (1496, 10, 1)


def test_origin_year_zero():
    drv = CalendarDriver(HARPTOS, CalendarOrigin(year=0))
    assert drv.is_leap_year(0)
    assert drv.get_date(365).year == 0
    d = drv.get_date(366)
    assert (d.year, d.month_index, d.day_of_month) == (1, 0, 1)
    assert drv.get_year_suffix(0) == "BD"
    assert drv.get_year_suffix(1) == "DR"


def test_round_trip_far_future(harptos_1493):
    drv = harptos_1493
    for day in (999_999_999, -999_999_999, 0, 365, 3652):
        d = drv.get_date(day)
        assert drv.get_absolute_day(d.year, d.month_index, d.day_of_month) == day


def test_random_round_trip(harptos_1493):
    random.seed(42)
    drv = harptos_1493
    for _ in range(3000):
        day = random.randint(-5_000_000, 5_000_000)
        d = drv.get_date(day)
        assert drv.get_absolute_day_for(d) == day


def test_holidays_follow_leap_day():
    drv = CalendarDriver(HARPTOS)  # 1492 is a leap year
    assert [h.name for h in drv.get_holidays(212)] == ["Midsummer"]
    assert [h.name for h in drv.get_holidays(213)] == ["Shieldmeet"]
    assert [h.name for h in drv.get_holidays(274)] == ["Highharvestide"]
    assert drv.get_holidays(0) == ()


def test_custom_starting_year_changes_nothing_but_labels():
    a = CalendarDriver(replace(HARPTOS, starting_year=1493))
    b = CalendarDriver(HARPTOS, CalendarOrigin(year=1493))
    for day in (0, 100, 365, 5000):
        assert a.get_date(day) == b.get_date(day)
