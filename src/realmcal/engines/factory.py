"""
realmcal.engines.factory
------------------------
Turns calendar data (a definition, a raw mapping, or a file path) into a
live CalendarDriver.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional, Union

from realmcal.config.loader import definition_from_dict, load_definition
from realmcal.core.types import CalendarDefinition, CalendarOrigin
from realmcal.engines.driver import CalendarDriver

DriverSource = Union[CalendarDefinition, Mapping[str, Any], str, Path]


def build_definition(source: DriverSource) -> CalendarDefinition:
    if isinstance(source, CalendarDefinition):
        return source
    if isinstance(source, Mapping):
        return definition_from_dict(source)
    if isinstance(source, (str, Path)):
        return load_definition(source)
    raise TypeError(f"Cannot build a calendar from {type(source).__name__}")


def make_driver(source: DriverSource, origin: Optional[CalendarOrigin] = None) -> CalendarDriver:
    """The universal entry point."""
    return CalendarDriver(build_definition(source), origin)
