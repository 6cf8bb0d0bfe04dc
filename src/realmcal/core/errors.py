from typing import Optional


class RealmcalError(Exception):
    """Base error."""


class InvalidTimeAdvanceError(RealmcalError, ValueError):
    """Raised when the clock is asked to move backwards."""


class DateOutOfRangeError(RealmcalError, ValueError):
    """Raised by backward conversion for a date the calendar cannot hold."""


class DefinitionLoadError(RealmcalError):
    """Raised when a calendar file or mapping cannot be turned into a definition."""


class UnknownCalendarError(RealmcalError, KeyError):
    """Raised when a calendar name is not registered."""

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""


class CalendarValidationError(RealmcalError):
    """Raised when a calendar definition has validation errors."""

    def __init__(self, field: str, message: str, suggestion: Optional[str] = None):
        super().__init__(f"Calendar validation failed: {field} - {message}")
        self.field = field
        self.message = message
        self.suggestion = suggestion
