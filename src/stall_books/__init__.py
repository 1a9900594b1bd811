"""stall-books - daily bookkeeping and cash reconciliation for a small food stall."""

__version__ = "0.1.0"

from stall_books.business_day import BusinessDayResolver
from stall_books.commands import apply
from stall_books.config import configure_logging, get_settings
from stall_books.errors import (
    BookkeepingError,
    DayClosed,
    ImportValidationFailed,
    InvalidAmount,
    InvalidEntry,
    InvalidTimestamp,
    InvalidTransition,
    NotFound,
    ValidationError,
)
from stall_books.models import AppData
from stall_books.session import Session

__all__ = [
    # Version
    "__version__",
    # Core
    "AppData",
    "BusinessDayResolver",
    "Session",
    "apply",
    # Errors
    "BookkeepingError",
    "ValidationError",
    "InvalidAmount",
    "InvalidEntry",
    "InvalidTimestamp",
    "InvalidTransition",
    "NotFound",
    "DayClosed",
    "ImportValidationFailed",
    # Config
    "get_settings",
    "configure_logging",
]
