# tests/test_cli.py

import json

import pytest

from realmcal import cli
from realmcal.config.loader import definition_to_dict
from realmcal.engines.specs import ABSALOM


def test_list(capsys):
    assert cli.main(["list"]) == 0
    out = capsys.readouterr().out
    assert "harptos" in out and "simple-counter" in out


def test_date(capsys):
    assert cli.main(["date", "0"]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "Hammer 1, 1492 DR (1st Day)"
    assert "season:   Winter" in out


def test_date_shorthand_and_time(capsys):
    assert cli.main(["212", "--time", "12:00"]) == 0
    out = capsys.readouterr().out
    assert "holidays: Midsummer" in out
    assert "at 12:00: day, bright" in out


def test_date_other_calendar(capsys):
    assert cli.main(["date", "59", "--calendar", "gregorian"]) == 0
    assert capsys.readouterr().out.startswith("February 29, 2000 AD")


def test_day(capsys):
    assert cli.main(["day", "1493", "0", "1"]) == 0
    assert capsys.readouterr().out.strip() == "366"


def test_day_out_of_range(capsys):
    assert cli.main(["day", "1492", "40", "1"]) == 2
    assert capsys.readouterr().err.startswith("error: Month index 40")


def test_unknown_calendar(capsys):
    assert cli.main(["date", "0", "--calendar", "nope"]) == 2
    assert "Unknown calendar 'nope'" in capsys.readouterr().err


def test_advance(capsys):
    assert cli.main(["advance", "--day", "5", "--time", "23:50", "--minutes", "20"]) == 0
    out = capsys.readouterr().out
    assert "00:10" in out
    assert "day 6 (+1)" in out


def test_advance_negative(capsys):
    assert cli.main(["advance", "--minutes", "-5"]) == 2
    assert "negative" in capsys.readouterr().err


def test_validate(tmp_path, capsys):
    good = tmp_path / "absalom.json"
    good.write_text(json.dumps(definition_to_dict(ABSALOM)), encoding="utf-8")
    assert cli.main(["validate", str(good)]) == 0
    assert capsys.readouterr().out.strip().endswith("valid")

    data = definition_to_dict(ABSALOM)
    data["weekdays"] = ["Moonday", "Moonday"]
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps(data), encoding="utf-8")
    assert cli.main(["validate", str(bad), "--quiet"]) == 1
    out = capsys.readouterr().out
    assert "[ERROR] weekdays" in out
    assert "[INFO]" not in out

    data = definition_to_dict(ABSALOM)
    data["seasons"] = [{"name": "S", "startMonth": 0, "startDay": 1, "sunrise": 1, "sunset": 2, "region": ["polar"]}]
    odd = tmp_path / "odd.json"
    odd.write_text(json.dumps(data), encoding="utf-8")
    assert cli.main(["validate", str(odd)]) == 1
    assert "[ERROR] seasons[0].region" in capsys.readouterr().out


def test_file_source(tmp_path, capsys):
    path = tmp_path / "absalom.json"
    path.write_text(json.dumps(definition_to_dict(ABSALOM)), encoding="utf-8")
    assert cli.main(["date", "0", "--file", str(path)]) == 0
    assert capsys.readouterr().out.startswith("Abadius 1, 4724 AR (Moonday)")


def test_pretty_month(capsys):
    assert cli.main(["pretty-month", "1492", "0"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Hammer 1492 DR")
    assert "followed by Midwinter" in out


def test_diag_round_trip(capsys):
    assert cli.main(["diag", "round-trip", "--n", "50", "--calendars", "harptos,gregorian"]) == 0
    assert "failures=0" in capsys.readouterr().out


def test_subcommand_required():
    with pytest.raises(SystemExit):
        cli.main([])
