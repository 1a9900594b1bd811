"""Exceptions raised by bookkeeping operations.

Every operation validates its input before building a new snapshot, so any of
these errors leaves the caller's current document untouched.
"""

from typing import Any


class BookkeepingError(Exception):
    """Base exception for bookkeeping errors."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.details = details


class ValidationError(BookkeepingError):
    """User input was rejected."""

    pass


class InvalidAmount(ValidationError):
    """Amount is negative, non-numeric, or zero where a positive value is required."""

    def __init__(self, field: str, value: Any, reason: str):
        super().__init__(f"Invalid amount for '{field}': {reason}", details=value)
        self.field = field
        self.value = value


class InvalidEntry(ValidationError):
    """A required descriptive field is missing."""

    pass


class InvalidTimestamp(ValidationError):
    """Timestamp or date string could not be interpreted."""

    pass


class NotFound(BookkeepingError):
    """No record matches the requested id."""

    pass


class InvalidTransition(BookkeepingError):
    """State change not allowed from the record's current state."""

    pass


class DayClosed(BookkeepingError):
    """Business day has been closed against new orders."""

    pass


class ImportValidationFailed(BookkeepingError):
    """Imported document failed the structural shape check."""

    pass
