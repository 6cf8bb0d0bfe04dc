# tests/test_leap.py

import logging
import random

import pytest

from realmcal.core.types import LeapRule
from realmcal.engines import leap as lp
from realmcal.engines.leap import RuleLeapEngine, gregorian_leap_rules, simple_leap_rule

GREGORIAN = gregorian_leap_rules()


@pytest.mark.parametrize("year,expected", [
    (1900, False),
    (1996, True),
    (2000, True),
    (2100, False),
    (2400, True),
    (2023, False),
    (-4, True),
    (-100, False),
    (-400, True),
])
def test_gregorian_rule(year, expected):
    assert lp.is_leap_year(year, GREGORIAN) is expected


def test_no_rules_never_leap():
    assert not lp.is_leap_year(2000, ())
    assert not lp.is_leap_year(0, None)
    assert lp.count_leap_years(0, 1000, ()) == 0


def test_offset_rule():
    rules = simple_leap_rule(4, offset=2)
    assert [y for y in range(0, 12) if lp.is_leap_year(y, rules)] == [2, 6, 10]


def test_rules_are_ored():
    rules = (LeapRule(interval=5), LeapRule(interval=7))
    assert lp.is_leap_year(35, rules)
    assert lp.is_leap_year(14, rules)
    assert not lp.is_leap_year(12, rules)


def test_count_leap_years_known_ranges():
    assert lp.count_leap_years(1896, 1905, GREGORIAN) == 2
    assert lp.count_leap_years(1996, 2005, GREGORIAN) == 3
    assert lp.count_leap_years(2000, 2000, GREGORIAN) == 0
    assert lp.count_leap_years(2005, 1996, GREGORIAN) == 0


def test_leap_days_before_is_signed():
    assert lp.get_leap_days_before(2004, 2000, GREGORIAN) == 1
    assert lp.get_leap_days_before(2000, 2000, GREGORIAN) == 0
    assert lp.get_leap_days_before(1990, 2000, GREGORIAN) == -2


def test_prefix_table_matches_scan():
    random.seed(42)
    eng = RuleLeapEngine(GREGORIAN)
    assert eng.cycle == 400
    for _ in range(500):
        a = random.randint(-3000, 3000)
        b = random.randint(a, a + 1200)
        brute = sum(1 for y in range(a, b) if eng.is_leap_year(y))
        assert eng.count_leap_years(a, b) == brute


LONG_CYCLE = (LeapRule(interval=997), LeapRule(interval=1009))


def test_long_cycle_counts_in_closed_form():
    eng = RuleLeapEngine(LONG_CYCLE)
    assert eng.cycle > lp.MAX_CYCLE
    assert not eng.tabulated
    assert eng.count_leap_years(0, 2000) == 4  # 0, 997, 1009, 1994
    # 1009 multiples of 997 plus 997 multiples of 1009, year 0 counted once
    assert eng.mean_leap_ratio() == (2005, 997 * 1009)
    k = 10**6
    assert eng.count_leap_years(0, eng.cycle * k) == 2005 * k
    assert eng.count_leap_years(-eng.cycle * k, 0) == 2005 * k


def test_closed_form_matches_scan_with_excludes_and_offsets():
    random.seed(7)
    rules = (
        LeapRule(interval=997, offset=3, exclude=(LeapRule(interval=2),)),
        LeapRule(interval=211, offset=5, exclude=(LeapRule(interval=6, offset=1, exclude=(LeapRule(interval=4),)),)),
        LeapRule(interval=1009),
    )
    eng = RuleLeapEngine(rules)
    assert not eng.tabulated
    for _ in range(200):
        a = random.randint(-6000, 6000)
        b = random.randint(a, a + 3000)
        brute = sum(1 for y in range(a, b) if eng.is_leap_year(y))
        assert eng.count_leap_years(a, b) == brute


def test_closed_form_agrees_with_prefix_table(monkeypatch):
    tabulated = RuleLeapEngine(GREGORIAN)
    monkeypatch.setattr(lp, "MAX_CYCLE", 0)
    closed = RuleLeapEngine(GREGORIAN)
    assert tabulated.tabulated and not closed.tabulated
    assert closed.mean_leap_ratio() == (97, 400)
    for a, b in [(0, 400), (-1234, 5678), (-10**9, 10**9), (1896, 1905)]:
        assert closed.count_leap_years(a, b) == tabulated.count_leap_years(a, b)


@pytest.mark.parametrize("max_cycle", [lp.MAX_CYCLE, 0])
def test_count_first_matches(monkeypatch, max_cycle):
    monkeypatch.setattr(lp, "MAX_CYCLE", max_cycle)
    eng = RuleLeapEngine((LeapRule(interval=2, target_month=0), LeapRule(interval=3, target_month=1)))
    # leap years in [0, 12): 0 2 3 4 6 8 9 10; only 3 and 9 fall to the second rule
    assert eng.count_first_matches([0], 0, 12) == 6
    assert eng.count_first_matches([1], 0, 12) == 2
    assert eng.count_first_matches([0, 1], 0, 12) == eng.count_leap_years(0, 12)
    assert eng.count_first_matches([1], -12, 0) == 2
    assert eng.count_first_matches([], 0, 12) == 0
    assert eng.count_first_matches([1], 0, 6 * 10**9) == 10**9


def test_mean_leap_ratio():
    assert RuleLeapEngine(GREGORIAN).mean_leap_ratio() == (97, 400)
    assert RuleLeapEngine(simple_leap_rule(4)).mean_leap_ratio() == (1, 4)


def test_target_month():
    rules = (LeapRule(interval=4, target_month=9),)
    assert lp.get_leap_day_target_month(1492, rules) == 9
    assert lp.get_leap_day_target_month(1493, rules) is None
    assert lp.get_leap_day_target_month(1492, simple_leap_rule(4)) is None


def test_month_days():
    rules = (LeapRule(interval=4, target_month=1),)
    assert lp.get_month_days(2000, 1, 28, rules) == 29
    assert lp.get_month_days(2000, 0, 31, rules) == 31
    assert lp.get_month_days(2001, 1, 28, rules) == 28


def test_non_positive_interval_never_matches(caplog):
    with caplog.at_level(logging.WARNING, logger="realmcal.engines.leap"):
        eng = RuleLeapEngine((LeapRule(interval=0),))
    assert not any(eng.is_leap_year(y) for y in range(-10, 10))
    assert "non-positive interval" in caplog.text
