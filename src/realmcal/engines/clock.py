"""
realmcal.engines.clock
----------------------
The minutes-since-midnight clock: the only mutable state of a driver.
Date math never reads it except for sun-state defaults.
"""

from __future__ import annotations

from realmcal.core.errors import InvalidTimeAdvanceError
from realmcal.core.time import clamp_minute_of_day, split_minutes
from realmcal.core.types import ClockSnapshot


class TimeOfDayClock:
    def __init__(self, minutes: int = 0):
        self._minutes = clamp_minute_of_day(minutes)

    @property
    def minutes(self) -> int:
        return self._minutes

    def set(self, minutes: float) -> None:
        self._minutes = clamp_minute_of_day(minutes)

    def advance(self, minutes: int) -> int:
        """Move forward; returns the number of whole days rolled over."""
        if minutes < 0:
            raise InvalidTimeAdvanceError(f"Cannot advance time by negative minutes: {minutes}")
        days, self._minutes = split_minutes(self._minutes + minutes)
        return days


def advance_snapshot(snapshot: ClockSnapshot, minutes: int) -> ClockSnapshot:
    """Pure counterpart of TimeOfDayClock.advance over a persisted pair."""
    clock = TimeOfDayClock(snapshot.time_of_day)
    days = clock.advance(minutes)
    return ClockSnapshot(absolute_day=snapshot.absolute_day + days, time_of_day=clock.minutes)
