"""
realmcal.engines.solar
----------------------
Era, season, solar-time and sun-state resolution.

Seasons are cyclic across the year boundary: a date earlier than the first
season start of the year belongs to the last season of the previous year.
Region-tagged seasons only take part in lookups for their own region.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence, Tuple

from realmcal.core.types import Era, LightLevel, Season, SolarTimes, SunState

DEFAULT_SUNRISE = 6 * 60
DEFAULT_SUNSET = 18 * 60
TWILIGHT_MINUTES = 30

DEFAULT_SOLAR_TIMES = SolarTimes(sunrise=DEFAULT_SUNRISE, sunset=DEFAULT_SUNSET)

LIGHT_LEVELS: Dict[str, LightLevel] = {
    "day": "bright",
    "dawn": "dim",
    "dusk": "dim",
    "night": "dark",
}


# ---------------------------------------------------------
# Eras
# ---------------------------------------------------------

def find_era(eras: Sequence[Era], year: int) -> Optional[Era]:
    """First era in definition order containing `year`."""
    for era in eras:
        if era.contains(year):
            return era
    return None


def era_year(era: Optional[Era], year: int) -> int:
    """
    Year number as displayed within its era. Backward-counting eras count
    down towards their end year: with end_year=1, year 0 shows as 1.
    """
    if era is None or era.direction == 1 or era.end_year is None:
        return year
    return era.end_year - year


# ---------------------------------------------------------
# Seasons
# ---------------------------------------------------------

class SeasonTable:
    """
    Seasons pre-sorted by (start_month, start_day), one sorted list for the
    untagged seasons and one per region.
    """
    def __init__(self, seasons: Sequence[Season]):
        def key(s: Season) -> Tuple[int, int]:
            return (s.start_month, s.start_day)

        self.default: Tuple[Season, ...] = tuple(sorted((s for s in seasons if not s.region), key=key))
        regions: Dict[str, list] = {}
        for s in seasons:
            if s.region:
                regions.setdefault(s.region, []).append(s)
        self.regions: Dict[str, Tuple[Season, ...]] = {r: tuple(sorted(v, key=key)) for r, v in regions.items()}

    def __bool__(self) -> bool:
        return bool(self.default) or bool(self.regions)

    @staticmethod
    def _active(ordered: Tuple[Season, ...], month_index: int, day_of_month: int) -> Optional[Season]:
        if not ordered:
            return None
        active = None
        for season in ordered:
            if (season.start_month, season.start_day) <= (month_index, day_of_month):
                active = season
            else:
                break
        return active if active is not None else ordered[-1]

    def find(self, month_index: int, day_of_month: int) -> Optional[Season]:
        return self._active(self.default, month_index, day_of_month)

    def find_region(self, month_index: int, day_of_month: int, region: str) -> Optional[Season]:
        return self._active(self.regions.get(region, ()), month_index, day_of_month)


# ---------------------------------------------------------
# Sun state
# ---------------------------------------------------------

def sun_state(time_of_day: int, solar: SolarTimes, twilight: int = TWILIGHT_MINUTES) -> SunState:
    """
    dawn  [sunrise - t, sunrise + t)
    day   [sunrise + t, sunset - t)
    dusk  [sunset - t,  sunset + t)
    night otherwise
    """
    if solar.sunrise - twilight <= time_of_day < solar.sunrise + twilight:
        return "dawn"
    if solar.sunrise + twilight <= time_of_day < solar.sunset - twilight:
        return "day"
    if solar.sunset - twilight <= time_of_day < solar.sunset + twilight:
        return "dusk"
    return "night"


def light_level(state: SunState) -> LightLevel:
    return LIGHT_LEVELS[state]
