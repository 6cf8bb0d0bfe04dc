# tests/test_diagnostics.py

import pytest

import realmcal
from realmcal.diagnostics import leap_years, pretty_month, round_trip


def test_month_lines_grid():
    drv = realmcal.get_driver("harptos")
    lines = pretty_month.month_lines(drv, 1492, 0)
    assert lines[0] == "Hammer 1492 DR  (days 0..29)"
    # ten-day week, Hammer starts on the 1st day: three full rows
    rows = lines[3:6]
    assert rows[0].split() == [str(n) for n in range(1, 11)]
    assert rows[2].split() == [str(n) for n in range(21, 31)]
    assert lines[-1].startswith("  + followed by Midwinter (1 day")


def test_month_lines_intercalary_and_holidays():
    drv = realmcal.get_driver("harptos")
    lines = pretty_month.month_lines(drv, 1492, 9)
    assert "  Midsummer 1, 1492 DR" in lines
    assert "  Midsummer 2, 1492 DR" in lines
    assert any("Shieldmeet" in line for line in lines)


def test_month_lines_gregorian_padding():
    drv = realmcal.get_driver("gregorian")
    lines = pretty_month.month_lines(drv, 2000, 1)
    # February 1, 2000 is weekday index 31 % 7 = 3
    first_row = lines[3]
    assert first_row.split()[0] == "1"
    assert first_row.startswith(" " * (3 * 5))


def test_round_trip_diagnostic():
    assert round_trip.roundtrip_test("harptos", 300, -10**6, 10**6, 42, max_failures=1) == 0
    assert round_trip.roundtrip_test("simple-counter", 50, 0, 10**6, 42, max_failures=1) == 0
    assert round_trip.parse_calendars(" harptos, ,gregorian") == ["harptos", "gregorian"]


def test_leap_rows():
    rows = leap_years.leap_rows(["harptos", "gregorian"], 1896, 1904)
    assert rows[0] == [y % 4 == 0 for y in range(1896, 1905)]
    assert rows[1][4] is False  # 1900
    with pytest.raises(SystemExit):
        leap_years.parse_calendars(" , ")


def test_leap_years_plot(tmp_path):
    pytest.importorskip("numpy")
    pytest.importorskip("matplotlib")
    import matplotlib
    matplotlib.use("Agg")

    out = tmp_path / "leap.png"
    assert leap_years.main(["--start-year", "1490", "--end-year", "1500", "--out", str(out)]) == 0
    assert out.exists()
