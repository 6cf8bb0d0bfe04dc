"""
realmcal.config.loader
----------------------
Reads calendar definitions from plain mappings, JSON files and YAML files.

Campaign calendars are usually authored as JSON in camelCase
(``startingYear``, ``leapRules``, ``targetMonth``); snake_case keys are
accepted as well so YAML files can follow Python naming.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from realmcal.core.errors import DefinitionLoadError
from realmcal.core.types import CalendarDefinition, Era, Holiday, LeapRule, Month, Season

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Month type spellings seen in hand-written files.
_MONTH_TYPES = {"standard": "standard", "normal": "standard", "intercalary": "intercalary"}


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)


def _get(data: Mapping[str, Any], key: str, default: Any = None) -> Any:
    """Look up a snake_case key, falling back to its camelCase spelling."""
    if key in data:
        return data[key]
    return data.get(_camel(key), default)


def _require(data: Mapping[str, Any], key: str, where: str) -> Any:
    value = _get(data, key)
    if value is None:
        raise DefinitionLoadError(f"{where}: missing required field '{_camel(key)}'")
    return value


def _int(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise DefinitionLoadError(f"{where}: expected an integer, got {value!r}")
    return value


def _opt_int(value: Any, where: str) -> Optional[int]:
    return None if value is None else _int(value, where)


def _list(value: Any, where: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise DefinitionLoadError(f"{where}: expected a list, got {type(value).__name__}")
    return list(value)


# ============================================================
# Mapping -> dataclasses
# ============================================================

def _month(data: Mapping[str, Any], where: str) -> Month:
    raw_type = str(_get(data, "type", "standard")).lower()
    if raw_type not in _MONTH_TYPES:
        raise DefinitionLoadError(f"{where}.type: unknown month type {raw_type!r}")
    return Month(
        name=str(_require(data, "name", where)),
        days=_int(_require(data, "days", where), f"{where}.days"),
        order=_opt_int(_get(data, "order"), f"{where}.order"),
        type=_MONTH_TYPES[raw_type],
    )


def _leap_rule(data: Mapping[str, Any], where: str) -> LeapRule:
    return LeapRule(
        interval=_int(_require(data, "interval", where), f"{where}.interval"),
        offset=_int(_get(data, "offset", 0), f"{where}.offset"),
        target_month=_opt_int(_get(data, "target_month"), f"{where}.targetMonth"),
        exclude=tuple(
            _leap_rule(ex, f"{where}.exclude[{i}]")
            for i, ex in enumerate(_list(_get(data, "exclude"), f"{where}.exclude"))
        ),
    )


def _era(data: Mapping[str, Any], where: str) -> Era:
    direction = _int(_get(data, "direction", 1), f"{where}.direction")
    if direction not in (1, -1):
        raise DefinitionLoadError(f"{where}.direction: must be 1 or -1, got {direction}")
    return Era(
        name=str(_require(data, "name", where)),
        abbrev=str(_require(data, "abbrev", where)),
        start_year=_opt_int(_get(data, "start_year"), f"{where}.startYear"),
        end_year=_opt_int(_get(data, "end_year"), f"{where}.endYear"),
        direction=direction,
    )


def _season(data: Mapping[str, Any], where: str) -> Season:
    region = _get(data, "region")
    if region is not None and not isinstance(region, str):
        raise DefinitionLoadError(f"{where}.region: expected a string, got {type(region).__name__}")
    return Season(
        name=str(_require(data, "name", where)),
        start_month=_int(_require(data, "start_month", where), f"{where}.startMonth"),
        start_day=_int(_require(data, "start_day", where), f"{where}.startDay"),
        sunrise=_int(_require(data, "sunrise", where), f"{where}.sunrise"),
        sunset=_int(_require(data, "sunset", where), f"{where}.sunset"),
        region=region,
    )


def _holiday(data: Mapping[str, Any], where: str) -> Holiday:
    return Holiday(
        name=str(_require(data, "name", where)),
        description=str(_get(data, "description", "")),
        day_of_year=_opt_int(_get(data, "day_of_year"), f"{where}.dayOfYear"),
        month=_opt_int(_get(data, "month"), f"{where}.month"),
        day=_opt_int(_get(data, "day"), f"{where}.day"),
        notify_on_arrival=bool(_get(data, "notify_on_arrival", False)),
    )


def _each(data: Mapping[str, Any], key: str, build) -> tuple:
    name = _camel(key)
    items = _list(_get(data, key), name)
    for i, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise DefinitionLoadError(f"{name}[{i}]: expected an object, got {type(item).__name__}")
    return tuple(build(item, f"{name}[{i}]") for i, item in enumerate(items))


def definition_from_dict(data: Mapping[str, Any]) -> CalendarDefinition:
    """Build a CalendarDefinition from a camelCase or snake_case mapping."""
    if not isinstance(data, Mapping):
        raise DefinitionLoadError(f"Calendar definition must be an object, got {type(data).__name__}")

    weekdays = _list(_get(data, "weekdays"), "weekdays")
    return CalendarDefinition(
        id=str(_require(data, "id", "calendar")),
        name=str(_require(data, "name", "calendar")),
        description=str(_get(data, "description", "")),
        months=_each(data, "months", _month),
        weekdays=tuple(str(w) for w in weekdays),
        holidays=_each(data, "holidays", _holiday),
        starting_year=_int(_get(data, "starting_year", 0), "startingYear"),
        year_suffix=str(_get(data, "year_suffix", "")),
        leap_rules=_each(data, "leap_rules", _leap_rule),
        eras=_each(data, "eras", _era),
        seasons=_each(data, "seasons", _season),
    )


# ============================================================
# dataclasses -> Mapping (camelCase, the authoring format)
# ============================================================

def _drop_none(d: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None}


def _rule_to_dict(rule: LeapRule) -> Dict[str, Any]:
    out: Dict[str, Any] = {"interval": rule.interval}
    if rule.offset:
        out["offset"] = rule.offset
    if rule.target_month is not None:
        out["targetMonth"] = rule.target_month
    if rule.exclude:
        out["exclude"] = [_rule_to_dict(ex) for ex in rule.exclude]
    return out


def definition_to_dict(defn: CalendarDefinition) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "id": defn.id,
        "name": defn.name,
        "months": [
            _drop_none({"name": m.name, "days": m.days, "order": m.order, "type": m.type})
            for m in defn.months
        ],
        "weekdays": list(defn.weekdays),
        "holidays": [
            _drop_none({
                "name": h.name,
                "description": h.description,
                "dayOfYear": h.day_of_year,
                "month": h.month,
                "day": h.day,
                "notifyOnArrival": h.notify_on_arrival,
            })
            for h in defn.holidays
        ],
        "startingYear": defn.starting_year,
        "yearSuffix": defn.year_suffix,
    }
    if defn.description:
        out["description"] = defn.description
    if defn.leap_rules:
        out["leapRules"] = [_rule_to_dict(r) for r in defn.leap_rules]
    if defn.eras:
        out["eras"] = [
            _drop_none({
                "name": e.name,
                "abbrev": e.abbrev,
                "startYear": e.start_year,
                "endYear": e.end_year,
                "direction": e.direction,
            })
            for e in defn.eras
        ]
    if defn.seasons:
        out["seasons"] = [
            _drop_none({
                "name": s.name,
                "startMonth": s.start_month,
                "startDay": s.start_day,
                "sunrise": s.sunrise,
                "sunset": s.sunset,
                "region": s.region,
            })
            for s in defn.seasons
        ]
    return out


# ============================================================
# Files
# ============================================================

def read_mapping(path: PathLike) -> Dict[str, Any]:
    """Parse a .json, .yaml or .yml file into a plain mapping."""
    p = Path(path)
    suffix = p.suffix.lower()
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise DefinitionLoadError(f"Cannot read calendar file {p}: {e}") from e

    try:
        if suffix == ".json":
            data = json.loads(text)
        elif suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text) or {}
        else:
            raise DefinitionLoadError(f"Unsupported calendar file type '{suffix}' (use .json, .yaml or .yml)")
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DefinitionLoadError(f"Cannot parse calendar file {p}: {e}") from e

    if not isinstance(data, dict):
        raise DefinitionLoadError(f"Calendar file {p} must contain an object at the top level")
    return data


def load_definition(path: PathLike, *, validate: bool = False) -> CalendarDefinition:
    """
    Load a calendar file. With validate=True the validator runs first and
    the first error is raised as CalendarValidationError.
    """
    logger.info("Loading calendar definition from %s", path)
    data = read_mapping(path)
    if validate:
        from realmcal.validation.validator import validate_or_raise
        validate_or_raise(data)
    defn = definition_from_dict(data)
    logger.debug("Loaded calendar '%s' (%d months, %d weekdays)", defn.id, len(defn.months), len(defn.weekdays))
    return defn


def dump_definition(defn: CalendarDefinition, path: PathLike) -> None:
    """Write a definition back out; format follows the file suffix."""
    p = Path(path)
    data = definition_to_dict(defn)
    if p.suffix.lower() in (".yaml", ".yml"):
        p.write_text(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), encoding="utf-8")
    else:
        p.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
