"""Utilities package for the product tracker application."""

from .config import get_config, reset_config
from .datetime_utils import utc_now, ensure_utc

__all__ = [
    "get_config",
    "reset_config",
    "utc_now",
    "ensure_utc",
]
