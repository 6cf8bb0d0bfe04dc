from __future__ import annotations
from realmcal.core.engine import CalendarRegistry
from realmcal.engines.specs import ALL_SPECS


def build_registry() -> CalendarRegistry:
    return CalendarRegistry(dict(ALL_SPECS))
