"""
realmcal.engines.driver
-----------------------
The orchestrator. Binds the preprocessed YearLayout, the leap engine and the
lookup strategies selected by the calendar mode, and translates between
absolute days and CalendarDate values in both directions.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from realmcal.core.errors import DateOutOfRangeError
from realmcal.core.types import (
    CalendarDate,
    CalendarDefinition,
    CalendarMode,
    CalendarOrigin,
    ClockSnapshot,
    Era,
    Holiday,
    LightLevel,
    Season,
    SolarTimes,
    SunState,
)

from .clock import TimeOfDayClock
from .interfaces import MonthLookupProtocol, WeekdayResolverProtocol, YearLookupProtocol
from .layout import YearLayout
from .leap import leap_engine
from .lookup import effective_leap_month, make_lookups
from .solar import DEFAULT_SOLAR_TIMES, SeasonTable, era_year, find_era, light_level, sun_state
from .weekday import make_weekday_resolver

logger = logging.getLogger(__name__)


class CalendarDriver:
    """
    Converts absolute days to calendar dates and back for one calendar.

    The definition is treated as immutable; everything derived from it is
    cached at construction. All date queries are pure. The time-of-day clock
    is the only mutable state and is reachable only through
    get_time_of_day / set_time_of_day / advance_time.
    """
    def __init__(self, definition: CalendarDefinition, origin: Optional[CalendarOrigin] = None):
        self._definition = definition
        self._origin = origin
        self._base_year = origin.year if origin is not None else definition.starting_year

        self.layout = YearLayout.from_definition(definition)
        self.leap = leap_engine(definition.leap_rules)
        self._mode = self.layout.mode(self.leap.has_rules)

        self._years: Optional[YearLookupProtocol]
        self._months: Optional[MonthLookupProtocol]
        self._years, self._months = make_lookups(self.layout, self._mode, self._base_year, self.leap)
        self._weekdays: WeekdayResolverProtocol = make_weekday_resolver(
            self.layout, self._base_year, definition.weekdays, self.leap
        )
        self._seasons = SeasonTable(definition.seasons)
        self._clock = TimeOfDayClock()

        logger.debug(
            "CalendarDriver(%s): mode=%s base_year=%d days_in_year=%d week_length=%d",
            definition.id, self._mode.value, self._base_year,
            self.layout.total_days_in_year, len(definition.weekdays),
        )

    def __repr__(self) -> str:
        return f"CalendarDriver(id={self._definition.id!r}, mode={self._mode.value}, base_year={self._base_year})"

    # ---------------------------------------------------------
    # Definition accessors
    # ---------------------------------------------------------

    @property
    def definition(self) -> CalendarDefinition:
        return self._definition

    @property
    def origin(self) -> Optional[CalendarOrigin]:
        return self._origin

    @property
    def base_year(self) -> int:
        return self._base_year

    @property
    def mode(self) -> CalendarMode:
        return self._mode

    def has_months(self) -> bool:
        return self.layout.has_months

    def has_weekdays(self) -> bool:
        return bool(self._definition.weekdays)

    def has_leap_rules(self) -> bool:
        return self.leap.has_rules

    def has_intercalary_months(self) -> bool:
        return self.layout.has_intercalary

    def get_total_days_in_year(self) -> int:
        return self.layout.total_days_in_year

    def get_week_length(self) -> int:
        return len(self._definition.weekdays)

    def get_week_counting_days_in_year(self) -> int:
        return self.layout.week_counting_days_in_year

    # ---------------------------------------------------------
    # Forward: absolute day -> CalendarDate
    # ---------------------------------------------------------

    def get_date(self, absolute_day: int) -> CalendarDate:
        if self._mode is CalendarMode.SIMPLE_COUNTER:
            return self._simple_counter_date(absolute_day)

        year, day_of_year = self._years.year_and_day(absolute_day)
        month_index, day_of_month = self._months.month_and_day(day_of_year, year)
        month = self._definition.months[month_index]

        if month.is_intercalary:
            weekday_index = -1
        else:
            weekday_index = self._weekdays.weekday_index(absolute_day, year, month_index, day_of_month)

        return CalendarDate(
            absolute_day=absolute_day,
            year=year,
            month_index=month_index,
            day_of_month=day_of_month,
            month_name=month.name,
            day_of_week=self._definition.weekdays[weekday_index] if weekday_index >= 0 else "",
            day_of_week_index=weekday_index,
            day_of_year=day_of_year,
            year_suffix=self.get_year_suffix(year),
            is_simple_counter=False,
            is_intercalary=month.is_intercalary,
        )

    def _simple_counter_date(self, absolute_day: int) -> CalendarDate:
        return CalendarDate(
            absolute_day=absolute_day,
            year=0,
            month_index=-1,
            day_of_month=0,
            month_name="",
            day_of_week="",
            day_of_week_index=-1,
            day_of_year=absolute_day,
            year_suffix=self.get_year_suffix(0),
            is_simple_counter=True,
            is_intercalary=False,
        )

    def get_day_of_week(self, absolute_day: int) -> str:
        if not self.has_weekdays():
            return ""
        return self.get_date(absolute_day).day_of_week

    def get_month_name(self, absolute_day: int) -> str:
        return self.get_date(absolute_day).month_name

    def get_day_of_month(self, absolute_day: int) -> int:
        return self.get_date(absolute_day).day_of_month

    def get_year(self, absolute_day: int) -> int:
        return self.get_date(absolute_day).year

    def get_day_of_year(self, absolute_day: int) -> int:
        if self._mode is CalendarMode.SIMPLE_COUNTER:
            return absolute_day
        return self._years.year_and_day(absolute_day)[1]

    def is_intercalary_day(self, absolute_day: int) -> bool:
        return self.get_date(absolute_day).is_intercalary

    # ---------------------------------------------------------
    # Backward: (year, month, day) -> absolute day
    # ---------------------------------------------------------

    def get_absolute_day(self, year: int, month_index: int, day_of_month: int, *, strict: bool = False) -> int:
        """
        Inverse of get_date. month_index is 0-based, day_of_month 1-based.

        The month index must exist. Day numbers past the end of the month
        are accepted and simply count on into the following days, unless
        strict=True, which rejects them.
        """
        if self._mode is CalendarMode.SIMPLE_COUNTER:
            return day_of_month - 1

        if not (0 <= month_index < self.layout.month_count):
            raise DateOutOfRangeError(
                f"Month index {month_index} out of range for calendar '{self._definition.id}' "
                f"({self.layout.month_count} months)"
            )
        if strict:
            length = self._months.month_length(month_index, year)
            if not (1 <= day_of_month <= length):
                raise DateOutOfRangeError(
                    f"Day {day_of_month} out of range for {self._definition.months[month_index].name} "
                    f"{year} (1..{length})"
                )

        return (
            self._years.days_to_year(year)
            + self._months.days_before_month(month_index, year)
            + (day_of_month - 1)
        )

    def get_absolute_day_for(self, date: CalendarDate) -> int:
        if date.is_simple_counter:
            return date.absolute_day
        return self.get_absolute_day(date.year, date.month_index, date.day_of_month)

    # ---------------------------------------------------------
    # Leap years
    # ---------------------------------------------------------

    def is_leap_year(self, year: int) -> bool:
        return self.leap.is_leap_year(year)

    def get_days_in_year(self, year: int) -> int:
        return self.leap.days_in_year(year, self.layout.total_days_in_year)

    def get_leap_day_target_month(self, year: int) -> Optional[int]:
        return effective_leap_month(self.leap, year, self.layout.month_count)

    def get_days_in_month(self, year: int, month_index: int) -> int:
        if self._months is None:
            return 0
        return self._months.month_length(month_index, year)

    def get_year_start(self, year: int) -> int:
        """Absolute day of the first day of `year`."""
        if self._years is None:
            return 0
        return self._years.days_to_year(year)

    # ---------------------------------------------------------
    # Eras
    # ---------------------------------------------------------

    def get_era(self, year: int) -> Optional[Era]:
        return find_era(self._definition.eras, year)

    def get_year_suffix(self, year: int) -> str:
        era = self.get_era(year)
        if era is not None:
            return era.abbrev
        return self._definition.year_suffix

    def format_year(self, year: int) -> str:
        era = self.get_era(year)
        shown = era_year(era, year)
        suffix = era.abbrev if era is not None else self._definition.year_suffix
        return f"{shown} {suffix}" if suffix else str(shown)

    # ---------------------------------------------------------
    # Holidays
    # ---------------------------------------------------------

    def get_holidays(self, absolute_day: int) -> Tuple[Holiday, ...]:
        """
        Holidays falling on a day. A holiday with both month and day set is
        anchored there; otherwise its day_of_year is used.
        """
        if not self._definition.holidays:
            return ()
        date = self.get_date(absolute_day)
        found = []
        for holiday in self._definition.holidays:
            if holiday.month is not None and holiday.day is not None:
                if (holiday.month, holiday.day) == (date.month_index, date.day_of_month):
                    found.append(holiday)
            elif holiday.day_of_year is not None and holiday.day_of_year == date.day_of_year:
                found.append(holiday)
        return tuple(found)

    # ---------------------------------------------------------
    # Seasons and solar times
    # ---------------------------------------------------------

    def _month_and_day(self, absolute_day: int) -> Optional[Tuple[int, int]]:
        if self._mode is CalendarMode.SIMPLE_COUNTER:
            return None
        d = self.get_date(absolute_day)
        return d.month_index, d.day_of_month

    def get_season(self, absolute_day: int, region: Optional[str] = None) -> Optional[Season]:
        if not self._seasons:
            return None
        md = self._month_and_day(absolute_day)
        if md is None:
            return None
        season = self._seasons.find_region(md[0], md[1], region) if region else None
        return season if season is not None else self._seasons.find(*md)

    def get_default_solar_times(self) -> SolarTimes:
        return DEFAULT_SOLAR_TIMES

    def get_solar_times(self, absolute_day: int, region: Optional[str] = None) -> SolarTimes:
        """
        Region-tagged season first, then the untagged season, then the
        06:00 / 18:00 defaults.
        """
        season = self.get_season(absolute_day, region)
        if season is None:
            return DEFAULT_SOLAR_TIMES
        return SolarTimes(sunrise=season.sunrise, sunset=season.sunset)

    def get_sunrise(self, absolute_day: int, region: Optional[str] = None) -> int:
        return self.get_solar_times(absolute_day, region).sunrise

    def get_sunset(self, absolute_day: int, region: Optional[str] = None) -> int:
        return self.get_solar_times(absolute_day, region).sunset

    def get_sun_state(
        self, absolute_day: int, time_of_day: Optional[int] = None, region: Optional[str] = None
    ) -> SunState:
        current = self._clock.minutes if time_of_day is None else time_of_day
        return sun_state(current, self.get_solar_times(absolute_day, region))

    def get_light_level(
        self, absolute_day: int, time_of_day: Optional[int] = None, region: Optional[str] = None
    ) -> LightLevel:
        return light_level(self.get_sun_state(absolute_day, time_of_day, region))

    # ---------------------------------------------------------
    # Time of day
    # ---------------------------------------------------------

    def get_time_of_day(self) -> int:
        return self._clock.minutes

    def set_time_of_day(self, minutes: float) -> None:
        """Floors and clamps into [0, 1439]."""
        self._clock.set(minutes)

    def advance_time(self, minutes: int) -> int:
        """Returns the number of whole days rolled over. Negative input raises."""
        return self._clock.advance(minutes)

    def snapshot(self, absolute_day: int) -> ClockSnapshot:
        return ClockSnapshot(absolute_day=absolute_day, time_of_day=self._clock.minutes)

    def restore(self, snapshot: ClockSnapshot) -> int:
        """Loads the clock from a persisted pair and returns its absolute day."""
        self._clock.set(snapshot.time_of_day)
        return snapshot.absolute_day
