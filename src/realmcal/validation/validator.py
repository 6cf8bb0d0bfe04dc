"""
realmcal.validation.validator
-----------------------------
Checks a calendar definition before it is handed to a driver.

Three passes, each appending ValidationIssue records:
  1. structure: field presence and types on the raw mapping,
  2. logic: cross-field consistency (leap targets, season anchors, year length),
  3. arithmetic: builds a CalendarDriver and converts a handful of days both ways.
Passes 2 and 3 only run when the previous pass found no errors.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence, Union

from realmcal.config.loader import definition_from_dict, definition_to_dict
from realmcal.core.errors import CalendarValidationError, RealmcalError
from realmcal.core.time import LAST_MINUTE
from realmcal.core.types import CalendarDefinition, ValidationIssue, ValidationResult

logger = logging.getLogger(__name__)

COMMON_WEEK_LENGTHS = (1, 5, 6, 7, 8, 10)
LONG_MONTH_DAYS = 100
LONG_INTERCALARY_DAYS = 5
SHORT_YEAR_DAYS = 200
LONG_YEAR_DAYS = 500
CRASH_TEST_DAYS = (0, 1, 365, 1000, 10000, 100000)

DefinitionLike = Union[CalendarDefinition, Mapping[str, Any]]


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def _is_name(v: Any) -> bool:
    return isinstance(v, str) and bool(v.strip())


def _pick(d: Mapping[str, Any], snake: str, camel: str) -> Any:
    return d[snake] if snake in d else d.get(camel)


class _Collector:
    def __init__(self) -> None:
        self.errors: List[ValidationIssue] = []
        self.warnings: List[ValidationIssue] = []
        self.info: List[ValidationIssue] = []

    def error(self, field: str, message: str, suggestion: Optional[str] = None) -> None:
        self.errors.append(ValidationIssue("error", field, message, suggestion))

    def warn(self, field: str, message: str, suggestion: Optional[str] = None) -> None:
        self.warnings.append(ValidationIssue("warning", field, message, suggestion))

    def note(self, field: str, message: str, suggestion: Optional[str] = None) -> None:
        self.info.append(ValidationIssue("info", field, message, suggestion))

    def result(self) -> ValidationResult:
        return ValidationResult(
            valid=not self.errors,
            errors=tuple(self.errors),
            warnings=tuple(self.warnings),
            info=tuple(self.info),
        )


# ---------------------------------------------------------
# Pass 1: structure
# ---------------------------------------------------------

def _check_header(data: Mapping[str, Any], out: _Collector) -> None:
    for key, label in (("id", "Calendar ID"), ("name", "Calendar name")):
        if key not in data or data[key] is None:
            out.error(key, f"{label} is required")
        elif not _is_name(data[key]):
            out.error(key, f"{label} must be a non-empty string")

    starting_year = _pick(data, "starting_year", "startingYear")
    if starting_year is not None and not _is_int(starting_year):
        out.error("startingYear", "Starting year must be an integer if provided")

    suffix = _pick(data, "year_suffix", "yearSuffix")
    if suffix is not None and not isinstance(suffix, str):
        out.error("yearSuffix", "Year suffix must be a string if provided")
    elif suffix and data.get("eras"):
        out.warn(
            "yearSuffix",
            "yearSuffix is ignored for years covered by an era",
            "Put the suffix on the eras instead",
        )

    for key in ("holidays", "eras", "seasons"):
        if data.get(key) is not None and not isinstance(data[key], (list, tuple)):
            out.error(key, f"{key.title()} must be a list if provided")
    rules = _pick(data, "leap_rules", "leapRules")
    if rules is not None and not isinstance(rules, (list, tuple)):
        out.error("leapRules", "Leap rules must be a list if provided")


def _check_weekdays(data: Mapping[str, Any], out: _Collector) -> None:
    weekdays = data.get("weekdays")
    if weekdays is None or (isinstance(weekdays, (list, tuple)) and not weekdays):
        out.warn("weekdays", "No weekdays defined", "Dates will carry no day of week")
        return
    if not isinstance(weekdays, (list, tuple)):
        out.error("weekdays", "Weekdays must be a list")
        return

    for i, name in enumerate(weekdays):
        if not _is_name(name):
            out.error(f"weekdays[{i}]", "Weekday name must be a non-empty string")
    names = [w for w in weekdays if isinstance(w, str)]
    if len(set(names)) != len(names):
        out.error("weekdays", "Duplicate weekday names found", "Each weekday must have a unique name")
    if len(weekdays) not in COMMON_WEEK_LENGTHS:
        out.note(
            "weekdays",
            f"Unusual week length: {len(weekdays)} days",
            "Common week lengths are 1, 5-8, or 10 days",
        )


def _check_months(data: Mapping[str, Any], out: _Collector) -> None:
    months = data.get("months")
    if months is None or (isinstance(months, (list, tuple)) and not months):
        out.warn("months", "No months defined (simple day counter mode)")
        return
    if not isinstance(months, (list, tuple)):
        out.error("months", "Months must be a list")
        return

    seen = set()
    for i, month in enumerate(months):
        where = f"months[{i}]"
        if not isinstance(month, Mapping):
            out.error(where, "Month must be an object")
            continue

        name = month.get("name")
        if not _is_name(name):
            out.error(f"{where}.name", "Month name is required and must be a non-empty string")
        elif name in seen:
            out.error(f"{where}.name", f'Duplicate month name: "{name}"', "Each month must have a unique name")
        else:
            seen.add(name)

        days = month.get("days")
        if days is None:
            out.error(f"{where}.days", "Month days is required")
        elif not _is_int(days):
            out.error(f"{where}.days", "Month days must be an integer")
        elif days < 1:
            out.error(f"{where}.days", f'Month "{name or i}" has {days} days (must be >= 1)')
        elif days > LONG_MONTH_DAYS:
            out.warn(f"{where}.days", f'Month "{name}" has {days} days (unusually long)')

        mtype = month.get("type", "standard")
        if mtype not in ("standard", "normal", "intercalary"):
            out.error(f"{where}.type", f'Invalid month type: "{mtype}"', 'Use "standard" or "intercalary"')
        elif mtype == "intercalary" and _is_int(days) and days > LONG_INTERCALARY_DAYS:
            out.warn(
                f"{where}.days",
                f'Intercalary month "{name}" has {days} days',
                "Intercalary periods are usually 1-5 days",
            )


def _check_eras(data: Mapping[str, Any], out: _Collector) -> None:
    eras = data.get("eras")
    if eras is None or not isinstance(eras, (list, tuple)):
        return
    if not eras:
        out.warn("eras", "Empty eras list defined", "Remove the eras field if no eras are used")
        return

    names, abbrevs = set(), set()
    for i, era in enumerate(eras):
        where = f"eras[{i}]"
        if not isinstance(era, Mapping):
            out.error(where, "Era must be an object")
            continue
        name, abbrev = era.get("name"), era.get("abbrev")
        if not _is_name(name):
            out.error(f"{where}.name", "Era name is required and must be a non-empty string")
        elif name in names:
            out.error(f"{where}.name", f'Duplicate era name: "{name}"')
        else:
            names.add(name)
        if not _is_name(abbrev):
            out.error(f"{where}.abbrev", "Era abbreviation is required and must be a non-empty string")
        elif abbrev in abbrevs:
            out.error(f"{where}.abbrev", f'Duplicate era abbreviation: "{abbrev}"')
        else:
            abbrevs.add(abbrev)

        start = _pick(era, "start_year", "startYear")
        end = _pick(era, "end_year", "endYear")
        if start is not None and not _is_int(start):
            out.error(f"{where}.startYear", "Era startYear must be an integer if provided")
        if end is not None and not _is_int(end):
            out.error(f"{where}.endYear", "Era endYear must be an integer if provided")
        elif _is_int(start) and _is_int(end) and end <= start:
            out.error(f"{where}.endYear", "Era endYear must be greater than startYear")
        if era.get("direction", 1) not in (1, -1):
            out.error(
                f"{where}.direction",
                "Era direction must be 1 (forward) or -1 (backward)",
                "Use 1 for normal counting, -1 for counting down",
            )

    # None bounds are open-ended on their side.
    spans = []
    for era in eras:
        if not isinstance(era, Mapping):
            continue
        start = _pick(era, "start_year", "startYear")
        end = _pick(era, "end_year", "endYear")
        if (start is None or _is_int(start)) and (end is None or _is_int(end)):
            spans.append((era.get("name"), start, end))
    for i in range(len(spans)):
        for j in range(i + 1, len(spans)):
            n1, s1, e1 = spans[i]
            n2, s2, e2 = spans[j]
            before_e2 = e2 is None or s1 is None or s1 < e2
            before_e1 = e1 is None or s2 is None or s2 < e1
            if before_e2 and before_e1:
                out.error(
                    "eras",
                    f'Eras "{n1}" and "{n2}" have overlapping year ranges',
                    "Each year should belong to exactly one era",
                )


def _check_leap_rule(rule: Any, where: str, out: _Collector) -> None:
    if not isinstance(rule, Mapping):
        out.error(where, "Leap rule must be an object")
        return
    interval = rule.get("interval")
    if not _is_int(interval) or interval < 1:
        out.error(f"{where}.interval", "Leap rule interval must be a positive integer", "e.g. 4 for every 4 years")
    offset = rule.get("offset")
    if offset is not None and not _is_int(offset):
        out.error(f"{where}.offset", "Leap rule offset must be an integer if provided")
    target = _pick(rule, "target_month", "targetMonth")
    if target is not None and (not _is_int(target) or target < 0):
        out.error(
            f"{where}.targetMonth",
            "Leap rule targetMonth must be a non-negative integer if provided",
            "Use 0 for first month, 1 for second month, etc.",
        )
    exclude = rule.get("exclude")
    if exclude is not None:
        if not isinstance(exclude, (list, tuple)):
            out.error(f"{where}.exclude", "Leap rule exclude must be a list if provided")
        else:
            for i, ex in enumerate(exclude):
                _check_leap_rule(ex, f"{where}.exclude[{i}]", out)


def _check_leap_rules(data: Mapping[str, Any], out: _Collector) -> None:
    rules = _pick(data, "leap_rules", "leapRules")
    if rules is None or not isinstance(rules, (list, tuple)):
        return
    if not rules:
        out.warn("leapRules", "Empty leap rules list defined", "Remove the leapRules field if no leap years are used")
        return
    for i, rule in enumerate(rules):
        _check_leap_rule(rule, f"leapRules[{i}]", out)


def _check_seasons(data: Mapping[str, Any], out: _Collector) -> None:
    seasons = data.get("seasons")
    if seasons is None or not isinstance(seasons, (list, tuple)):
        return
    if not seasons:
        out.warn("seasons", "Empty seasons list defined", "Remove the seasons field if no seasons are used")
        return

    names = set()
    for i, season in enumerate(seasons):
        where = f"seasons[{i}]"
        if not isinstance(season, Mapping):
            out.error(where, "Season must be an object")
            continue
        name = season.get("name")
        if not _is_name(name):
            out.error(f"{where}.name", "Season name is required and must be a non-empty string")
        else:
            region = season.get("region")
            key = (name, region if isinstance(region, str) else None)
            if key in names:
                out.warn(f"{where}.name", f'Duplicate season name: "{name}"')
            names.add(key)

        start_month = _pick(season, "start_month", "startMonth")
        start_day = _pick(season, "start_day", "startDay")
        if not _is_int(start_month) or start_month < 0:
            out.error(f"{where}.startMonth", "Season startMonth must be a non-negative integer")
        if not _is_int(start_day) or start_day < 1:
            out.error(f"{where}.startDay", "Season startDay must be a positive integer (1-indexed)")

        for key in ("sunrise", "sunset"):
            value = season.get(key)
            if not _is_int(value):
                out.error(f"{where}.{key}", f"Season {key} must be an integer (minutes from midnight)")
            elif not (0 <= value <= LAST_MINUTE):
                out.error(f"{where}.{key}", f"Season {key} must be 0-{LAST_MINUTE} minutes. Got: {value}")

        sunrise, sunset = season.get("sunrise"), season.get("sunset")
        if _is_int(sunrise) and _is_int(sunset) and sunrise >= sunset:
            out.error(
                where,
                f'Season "{name}" has sunrise ({sunrise}) >= sunset ({sunset})',
                "Sunrise must be before sunset",
            )

        region = season.get("region")
        if region is not None and not _is_name(region):
            out.error(f"{where}.region", "Season region must be a non-empty string if provided")


# ---------------------------------------------------------
# Pass 2: logic
# ---------------------------------------------------------

def _check_leap_targets(rules, month_count: int, path: str, out: _Collector) -> None:
    for i, rule in enumerate(rules):
        where = f"{path}[{i}]"
        if rule.target_month is not None and rule.target_month >= month_count:
            out.error(
                f"{where}.targetMonth",
                f"Leap rule references month {rule.target_month}, but calendar only has {month_count} months",
                f"Use month index 0-{month_count - 1} or omit targetMonth to add the leap day to the last month",
            )
        _check_leap_targets(rule.exclude, month_count, f"{where}.exclude", out)


def _check_logic(defn: CalendarDefinition, out: _Collector) -> None:
    months = defn.months
    if not months:
        if defn.leap_rules:
            out.warn("leapRules", "Leap rules have no effect without months")
        if defn.seasons:
            out.warn("seasons", "Seasons have no effect without months")
        return

    if all(m.is_intercalary for m in months):
        out.error(
            "months",
            "Calendar must have at least one standard (non-intercalary) month",
            'Add at least one month with type "standard"',
        )

    _check_leap_targets(defn.leap_rules, len(months), "leapRules", out)

    for i, season in enumerate(defn.seasons):
        if season.start_month >= len(months):
            out.error(
                f"seasons[{i}].startMonth",
                f'Season "{season.name}" references month {season.start_month}, '
                f"but calendar only has {len(months)} months",
                f"Use month index 0-{len(months) - 1}",
            )
        elif season.start_day > months[season.start_month].days:
            month = months[season.start_month]
            out.error(
                f"seasons[{i}].startDay",
                f'Season "{season.name}" starts on day {season.start_day}, '
                f'but month "{month.name}" only has {month.days} days',
                f"Use day 1-{month.days}",
            )

    total = sum(m.days for m in months)
    out.note("months", f"Total days in year: {total}")
    if total < SHORT_YEAR_DAYS:
        out.warn("months", f"Short year: only {total} days", "Most calendars have 300-400 days")
    elif total > LONG_YEAR_DAYS:
        out.warn("months", f"Long year: {total} days", "Most calendars have 300-400 days")


# ---------------------------------------------------------
# Pass 3: arithmetic
# ---------------------------------------------------------

def _check_arithmetic(defn: CalendarDefinition, out: _Collector) -> None:
    from realmcal.engines.driver import CalendarDriver

    try:
        driver = CalendarDriver(defn)
    except (RealmcalError, ValueError, ArithmeticError) as e:
        out.error("calendar", f"Failed to create CalendarDriver: {e}", "Definition has structural issues")
        return

    for day in CRASH_TEST_DAYS:
        try:
            date = driver.get_date(day)
            if date.is_simple_counter:
                continue
            back = driver.get_absolute_day(date.year, date.month_index, date.day_of_month)
        except (RealmcalError, ValueError, ArithmeticError, IndexError) as e:
            out.error("calendar", f"get_date({day}) failed: {e}")
            continue
        if back != day:
            out.error(
                "calendar",
                f"Round-trip failed for day {day}: got {back}",
                "get_date() and get_absolute_day() are inconsistent",
            )

    if not out.errors:
        tested = ", ".join(str(d) for d in CRASH_TEST_DAYS)
        out.note("calendar", f"Mathematical validation passed (tested days {tested})")


# ---------------------------------------------------------
# Public API
# ---------------------------------------------------------

def validate(definition: DefinitionLike) -> ValidationResult:
    """Run all checks. Accepts a CalendarDefinition or a raw (camelCase or snake_case) mapping."""
    if isinstance(definition, CalendarDefinition):
        data = definition_to_dict(definition)
    elif isinstance(definition, Mapping):
        data = definition
    else:
        out = _Collector()
        out.error("calendar", f"Calendar definition must be an object, got {type(definition).__name__}")
        return out.result()

    out = _Collector()
    _check_header(data, out)
    _check_weekdays(data, out)
    _check_months(data, out)
    _check_eras(data, out)
    _check_leap_rules(data, out)
    _check_seasons(data, out)

    if not out.errors:
        try:
            defn = definition_from_dict(data)
        except RealmcalError as e:
            out.error("calendar", str(e))
        else:
            _check_logic(defn, out)
            if not out.errors:
                _check_arithmetic(defn, out)

    result = out.result()
    logger.debug(
        "Validated calendar %r: %d errors, %d warnings, %d info",
        data.get("id"), len(result.errors), len(result.warnings), len(result.info),
    )
    return result


def validate_or_raise(definition: DefinitionLike) -> ValidationResult:
    """Like validate(), but raises CalendarValidationError on the first error."""
    result = validate(definition)
    if not result.valid:
        for issue in result.errors:
            logger.warning("Calendar validation error: %s - %s", issue.field, issue.message)
        first = result.errors[0]
        raise CalendarValidationError(first.field, first.message, first.suggestion)
    return result


def validation_messages(result: ValidationResult) -> Sequence[str]:
    """Human readable lines, errors first."""
    lines: List[str] = []
    for tag, issues in (("ERROR", result.errors), ("WARNING", result.warnings), ("INFO", result.info)):
        for issue in issues:
            line = f"[{tag}] {issue.field}: {issue.message}"
            if issue.suggestion:
                line += f" ({issue.suggestion})"
            lines.append(line)
    return lines
