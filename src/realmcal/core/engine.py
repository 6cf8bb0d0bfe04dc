from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List

from .errors import UnknownCalendarError
from .types import CalendarDefinition


@dataclass
class CalendarRegistry:
    _calendars: Dict[str, CalendarDefinition]

    def get(self, name: str) -> CalendarDefinition:
        if name not in self._calendars:
            raise UnknownCalendarError(f"Unknown calendar '{name}'. Available: {sorted(self._calendars)}")
        return self._calendars[name]

    def list(self) -> List[str]:
        return sorted(self._calendars.keys())

    def register(self, name: str, definition: CalendarDefinition, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._calendars):
            raise KeyError(f"Calendar '{name}' already exists. Use overwrite=True to replace.")
        self._calendars[name] = definition
