# tests/test_validator.py

import copy

import pytest

from realmcal.config.loader import definition_to_dict
from realmcal.core.errors import CalendarValidationError
from realmcal.engines.specs import ALL_SPECS, HARPTOS
from realmcal.validation.validator import validate, validate_or_raise, validation_messages


def _fields(issues):
    return [i.field for i in issues]


@pytest.fixture
def harptos_dict():
    return copy.deepcopy(definition_to_dict(HARPTOS))


@pytest.mark.parametrize("name", sorted(ALL_SPECS))
def test_presets_are_valid(name):
    result = validate(ALL_SPECS[name])
    assert result.valid, validation_messages(result)


def test_math_check_reported(harptos_dict):
    result = validate(harptos_dict)
    assert result.valid
    assert any("Mathematical validation passed" in i.message for i in result.info)
    assert any("Total days in year: 365" in i.message for i in result.info)


def test_simple_counter_only_warns():
    result = validate({"id": "c", "name": "Counter"})
    assert result.valid
    assert set(_fields(result.warnings)) == {"weekdays", "months"}


def test_missing_header():
    result = validate({"months": [{"name": "M", "days": 10}]})
    assert not result.valid
    assert _fields(result.errors)[:2] == ["id", "name"]


def test_not_a_mapping():
    result = validate(["not", "a", "calendar"])
    assert not result.valid
    assert result.errors[0].field == "calendar"


def test_duplicate_and_bad_months(harptos_dict):
    harptos_dict["months"][2]["name"] = "Hammer"
    harptos_dict["months"][3]["days"] = 0
    harptos_dict["months"][4]["type"] = "leap"
    result = validate(harptos_dict)
    assert not result.valid
    assert "months[2].name" in _fields(result.errors)
    assert "months[3].days" in _fields(result.errors)
    assert "months[4].type" in _fields(result.errors)


def test_month_warnings(harptos_dict):
    harptos_dict["months"][0]["days"] = 150
    harptos_dict["months"][1]["days"] = 7
    harptos_dict["months"][2]["days"] = 150
    result = validate(harptos_dict)
    assert result.valid
    fields = _fields(result.warnings)
    assert "months[0].days" in fields
    assert "months[1].days" in fields
    assert any("Long year" in w.message for w in result.warnings)


def test_unusual_week_length(harptos_dict):
    harptos_dict["weekdays"] = ["a", "b", "c", "d"]
    result = validate(harptos_dict)
    assert result.valid
    assert "Unusual week length: 4 days" in [i.message for i in result.info]


def test_leap_target_out_of_range(harptos_dict):
    harptos_dict["leapRules"] = [{"interval": 4, "targetMonth": 40}]
    result = validate(harptos_dict)
    assert _fields(result.errors) == ["leapRules[0].targetMonth"]


def test_nested_leap_rule_checked(harptos_dict):
    harptos_dict["leapRules"] = [{"interval": 4, "exclude": [{"interval": 0}]}]
    result = validate(harptos_dict)
    assert _fields(result.errors) == ["leapRules[0].exclude[0].interval"]


def test_overlapping_eras(harptos_dict):
    harptos_dict["eras"] = [
        {"name": "A", "abbrev": "A", "startYear": 0, "endYear": 100},
        {"name": "B", "abbrev": "B", "startYear": 50},
    ]
    result = validate(harptos_dict)
    assert _fields(result.errors) == ["eras"]


def test_era_bounds(harptos_dict):
    harptos_dict["eras"] = [{"name": "A", "abbrev": "A", "startYear": 10, "endYear": 5, "direction": 0}]
    result = validate(harptos_dict)
    assert set(_fields(result.errors)) == {"eras[0].endYear", "eras[0].direction"}


def test_season_checks(harptos_dict):
    harptos_dict["seasons"] = [
        {"name": "Odd", "startMonth": 0, "startDay": 1, "sunrise": 900, "sunset": 800},
        {"name": "Late", "startMonth": 0, "startDay": 1, "sunrise": 0, "sunset": 1440},
    ]
    result = validate(harptos_dict)
    assert set(_fields(result.errors)) == {"seasons[0]", "seasons[1].sunset"}


def test_season_anchor_out_of_range(harptos_dict):
    harptos_dict["seasons"] = [
        {"name": "Nowhere", "startMonth": 99, "startDay": 1, "sunrise": 300, "sunset": 900},
        {"name": "Too late", "startMonth": 1, "startDay": 2, "sunrise": 300, "sunset": 900},
    ]
    result = validate(harptos_dict)
    assert _fields(result.errors) == ["seasons[0].startMonth", "seasons[1].startDay"]


def test_season_region_of_wrong_type(harptos_dict):
    harptos_dict["seasons"] = [
        {"name": "Thaw", "startMonth": 0, "startDay": 1, "sunrise": 300, "sunset": 900, "region": ["polar"]},
        {"name": "Thaw", "startMonth": 5, "startDay": 1, "sunrise": 300, "sunset": 900, "region": {"zone": 1}},
    ]
    result = validate(harptos_dict)
    assert not result.valid
    assert _fields(result.errors) == ["seasons[0].region", "seasons[1].region"]


def test_only_intercalary_months():
    data = {"id": "x", "name": "X", "months": [{"name": "Fest", "days": 3, "type": "intercalary"}]}
    result = validate(data)
    assert not result.valid
    assert "non-intercalary" in result.errors[0].message


def test_validate_or_raise(harptos_dict):
    assert validate_or_raise(harptos_dict).valid

    harptos_dict["weekdays"] = ["x", "x"]
    with pytest.raises(CalendarValidationError) as exc:
        validate_or_raise(harptos_dict)
    assert exc.value.field == "weekdays"
    assert "Calendar validation failed: weekdays" in str(exc.value)


def test_messages_order(harptos_dict):
    harptos_dict["weekdays"] = ["x", "x"]
    lines = validation_messages(validate(harptos_dict))
    assert lines[0].startswith("[ERROR] weekdays")
    assert any(line.startswith("[WARNING] yearSuffix") for line in lines)
