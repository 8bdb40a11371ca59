"""Recipient preference use cases."""

from .get_preferences import create_default_preferences, get_preferences
from .quiet_hours import compute_quiet_hours_delay, is_quiet_hours, parse_clock_time
from .update_preferences import update_preferences

__all__ = [
    "compute_quiet_hours_delay",
    "create_default_preferences",
    "get_preferences",
    "is_quiet_hours",
    "parse_clock_time",
    "update_preferences",
]
