"""
realmcal.engines.leap
---------------------
Data-driven leap-year evaluator.

A year is a leap year when ANY rule matches; a rule matches when
(year - offset) % interval == 0 and none of its nested exclude rules match.
The whole rule set is periodic in the year with period lcm(all intervals),
so leap-year counts over arbitrary ranges reduce to a prefix table over one
cycle and stay O(1) for any year distance. Cycles too long to tabulate are
counted by inclusion-exclusion over the rules' arithmetic progressions.
"""

from __future__ import annotations

import logging
import math
from functools import lru_cache, reduce
from itertools import combinations
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from realmcal.core.types import LeapRule

logger = logging.getLogger(__name__)

# Cycles longer than this are counted in closed form instead of tabulated.
MAX_CYCLE = 100_000

# (residue, modulus): the years congruent to residue mod modulus
Progression = Tuple[int, int]


def _matches(year: int, rule: LeapRule) -> bool:
    if rule.interval < 1:
        return False
    if (year - rule.offset) % rule.interval != 0:
        return False
    return not any(_matches(year, ex) for ex in rule.exclude)


def _intervals(rules: Iterable[LeapRule]) -> List[int]:
    out: List[int] = []
    for rule in rules:
        if rule.interval >= 1:
            out.append(rule.interval)
        out.extend(_intervals(rule.exclude))
    return out


# ---------------------------------------------------------
# Periodic counting
# ---------------------------------------------------------

def _tabulate(pred: Callable[[int], bool], cycle: int) -> List[int]:
    """prefix[r] = residues 0..r-1 satisfying pred."""
    prefix = [0]
    for r in range(cycle):
        prefix.append(prefix[-1] + (1 if pred(r) else 0))
    return prefix


def _cycle_count(prefix: List[int], cycle: int, n: int) -> int:
    """
    Signed count from year 0 to n:
      n >= 0 -> hits in [0, n);  n < 0 -> -(hits in [n, 0)).
    Both cases collapse to q*per_cycle + prefix[r] with (q, r) = divmod(n, cycle).
    """
    q, r = divmod(n, cycle)
    return q * prefix[-1] + prefix[r]


def _progression(rule: LeapRule) -> Progression:
    return rule.offset % rule.interval, rule.interval


def _meet(p: Progression, q: Progression) -> Optional[Progression]:
    """Intersection of two progressions (Chinese remainder), None if disjoint."""
    a1, m1 = p
    a2, m2 = q
    g = math.gcd(m1, m2)
    if (a2 - a1) % g:
        return None
    step = m2 // g
    k = (a2 - a1) // g * pow(m1 // g, -1, step) % step if step > 1 else 0
    modulus = m1 * step
    return (a1 + m1 * k) % modulus, modulus


def _progression_count(p: Progression, n: int) -> int:
    """Signed count of p's members from 0 to n, as in _cycle_count."""
    a, m = p
    return a // m - (a - n) // m


def _count_inside(p: Progression, rules: Sequence[LeapRule], n: int) -> int:
    """Members of p matched by at least one rule."""
    live = [rule for rule in rules if rule.interval >= 1]
    total = 0
    for size in range(1, len(live) + 1):
        sign = 1 if size % 2 else -1
        for group in combinations(live, size):
            q: Optional[Progression] = p
            for rule in group:
                q = _meet(q, _progression(rule))
                if q is None:
                    break
            else:
                excluded = [ex for rule in group for ex in rule.exclude]
                total += sign * _count_outside(q, excluded, n)
    return total


def _count_outside(p: Progression, rules: Sequence[LeapRule], n: int) -> int:
    """Members of p matched by none of the rules."""
    return _progression_count(p, n) - _count_inside(p, rules, n)


class RuleLeapEngine:
    """
    Evaluates a tuple of LeapRule. Fully implements LeapEngineProtocol.
    """
    def __init__(self, rules: Sequence[LeapRule] = ()):
        self.rules: Tuple[LeapRule, ...] = tuple(rules)
        for rule in self.rules:
            if rule.interval < 1:
                logger.warning("Ignoring leap rule with non-positive interval %r", rule.interval)

        intervals = _intervals(self.rules)
        self.cycle = reduce(math.lcm, intervals, 1) if intervals else 1
        self.tabulated = self.cycle <= MAX_CYCLE

        self._prefix: Optional[List[int]] = None
        # first-matching-rule index sets -> prefix table over one cycle
        self._first_tables: Dict[Tuple[int, ...], List[int]] = {}
        if self.rules and self.tabulated:
            self._prefix = _tabulate(self.is_leap_year, self.cycle)
        elif self.rules:
            logger.debug("Leap cycle %d exceeds %d; counting in closed form", self.cycle, MAX_CYCLE)

    # ---------------------------------------------------------
    # Protocol Properties
    # ---------------------------------------------------------

    @property
    def has_rules(self) -> bool:
        return bool(self.rules)

    def mean_leap_ratio(self) -> Tuple[int, int]:
        """(leap years, years) over one full cycle of the rule set."""
        return self._count_from_zero(self.cycle), self.cycle

    # ---------------------------------------------------------
    # Protocol Methods
    # ---------------------------------------------------------

    def is_leap_year(self, year: int) -> bool:
        return any(_matches(year, rule) for rule in self.rules)

    def first_matching_rule(self, year: int) -> Optional[int]:
        for i, rule in enumerate(self.rules):
            if _matches(year, rule):
                return i
        return None

    def leap_day_target_month(self, year: int) -> Optional[int]:
        """Target month of the first matching rule; None if none matches or it names no month."""
        i = self.first_matching_rule(year)
        return None if i is None else self.rules[i].target_month

    def count_leap_years(self, start_year: int, end_year: int) -> int:
        """Leap years in [start_year, end_year)."""
        if not self.rules or end_year <= start_year:
            return 0
        return self._count_from_zero(end_year) - self._count_from_zero(start_year)

    def count_first_matches(self, indices: Iterable[int], start_year: int, end_year: int) -> int:
        """Leap years in [start_year, end_year) whose first matching rule is one of `indices`."""
        key = tuple(sorted(set(indices)))
        if not key or end_year <= start_year:
            return 0
        return self._first_from_zero(key, end_year) - self._first_from_zero(key, start_year)

    def leap_days_before(self, target_year: int, base_year: int) -> int:
        if target_year >= base_year:
            return self.count_leap_years(base_year, target_year)
        return -self.count_leap_years(target_year, base_year)

    def month_days(self, year: int, month_index: int, base_days: int) -> int:
        if self.is_leap_year(year) and self.leap_day_target_month(year) == month_index:
            return base_days + 1
        return base_days

    def days_in_year(self, year: int, base_days: int) -> int:
        return base_days + 1 if self.is_leap_year(year) else base_days

    # ---------------------------------------------------------
    # Internal
    # ---------------------------------------------------------

    def _count_from_zero(self, n: int) -> int:
        if not self.rules:
            return 0
        if self._prefix is not None:
            return _cycle_count(self._prefix, self.cycle, n)
        return _count_inside((0, 1), self.rules, n)

    def _first_from_zero(self, key: Tuple[int, ...], n: int) -> int:
        if self.tabulated:
            table = self._first_tables.get(key)
            if table is None:
                wanted = set(key)
                table = _tabulate(lambda y: self.first_matching_rule(y) in wanted, self.cycle)
                self._first_tables[key] = table
            return _cycle_count(table, self.cycle, n)

        # Rule i matches first when it matches and no earlier rule does
        total = 0
        for i in key:
            rule = self.rules[i]
            if rule.interval >= 1:
                total += _count_outside(_progression(rule), list(rule.exclude) + list(self.rules[:i]), n)
        return total


# ============================================================
# Rule constructors
# ============================================================

def gregorian_leap_rules(target_month: int = 1) -> Tuple[LeapRule, ...]:
    """Every 4 years, except centuries, except every 400 years."""
    return (
        LeapRule(
            interval=4,
            target_month=target_month,
            exclude=(LeapRule(interval=100, exclude=(LeapRule(interval=400),)),),
        ),
    )


def simple_leap_rule(interval: int, target_month: Optional[int] = None, offset: int = 0) -> Tuple[LeapRule, ...]:
    return (LeapRule(interval=interval, offset=offset, target_month=target_month),)


# ============================================================
# Functional facade
# ============================================================

@lru_cache(maxsize=64)
def _engine(rules: Tuple[LeapRule, ...]) -> RuleLeapEngine:
    return RuleLeapEngine(rules)


def leap_engine(rules: Optional[Sequence[LeapRule]]) -> RuleLeapEngine:
    """Shared engine for a rule set; engines are immutable so they are cached."""
    return _engine(tuple(rules or ()))


def is_leap_year(year: int, rules: Optional[Sequence[LeapRule]]) -> bool:
    return leap_engine(rules).is_leap_year(year)


def count_leap_years(start_year: int, end_year: int, rules: Optional[Sequence[LeapRule]]) -> int:
    return leap_engine(rules).count_leap_years(start_year, end_year)


def get_leap_days_before(year: int, base_year: int, rules: Optional[Sequence[LeapRule]]) -> int:
    return leap_engine(rules).leap_days_before(year, base_year)


def get_leap_day_target_month(year: int, rules: Optional[Sequence[LeapRule]]) -> Optional[int]:
    return leap_engine(rules).leap_day_target_month(year)


def get_month_days(year: int, month_index: int, base_month_days: int, rules: Optional[Sequence[LeapRule]]) -> int:
    return leap_engine(rules).month_days(year, month_index, base_month_days)
