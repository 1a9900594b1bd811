"""Configuration module for stall-books."""

from stall_books.config.defaults import load_default_document
from stall_books.config.logging import (
    bind_business_day,
    clear_business_day,
    configure_logging,
    get_logger,
)
from stall_books.config.settings import StallSettings, get_settings

__all__ = [
    "StallSettings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "bind_business_day",
    "clear_business_day",
    "load_default_document",
]
