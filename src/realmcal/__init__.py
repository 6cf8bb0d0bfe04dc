"""realmcal public API.

Keep this surface small: users should mostly interact with CalendarDriver and
the functions re-exported here.
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    list_calendars,
    calendar_info,
    get_driver,
    make_driver,
    register_calendar,
    format_date,
    date_info,
    to_absolute_day,
    month_days,
    year_summary,
)
from .config.loader import definition_from_dict, definition_to_dict, dump_definition, load_definition
from .core.errors import (
    RealmcalError,
    InvalidTimeAdvanceError,
    DateOutOfRangeError,
    DefinitionLoadError,
    UnknownCalendarError,
    CalendarValidationError,
)
from .core.types import (
    CalendarDate,
    CalendarDefinition,
    CalendarMode,
    CalendarOrigin,
    ClockSnapshot,
    Era,
    Holiday,
    LeapRule,
    Month,
    Season,
    SolarTimes,
)
from .engines.driver import CalendarDriver
from .validation.validator import validate, validate_or_raise

__all__ = [
    "list_calendars",
    "calendar_info",
    "get_driver",
    "make_driver",
    "register_calendar",
    "format_date",
    "date_info",
    "to_absolute_day",
    "month_days",
    "year_summary",
    "definition_from_dict",
    "definition_to_dict",
    "load_definition",
    "dump_definition",
    "validate",
    "validate_or_raise",
    "CalendarDriver",
    "CalendarDate",
    "CalendarDefinition",
    "CalendarMode",
    "CalendarOrigin",
    "ClockSnapshot",
    "Era",
    "Holiday",
    "LeapRule",
    "Month",
    "Season",
    "SolarTimes",
    "RealmcalError",
    "InvalidTimeAdvanceError",
    "DateOutOfRangeError",
    "DefinitionLoadError",
    "UnknownCalendarError",
    "CalendarValidationError",
]
