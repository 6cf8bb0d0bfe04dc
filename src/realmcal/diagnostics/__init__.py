"""Diagnostics package.

- pretty_month, round_trip: always available, text output only
- leap_years: plots, requires the diagnostics extras (numpy, matplotlib)
"""

__all__ = ["pretty_month", "round_trip", "leap_years"]
