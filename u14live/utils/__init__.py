"""
Utilities package for the U14 Live match tracker.

This package contains utility functions and constants used throughout the application.
"""
from .time_utils import fmt_mmss, clamp, seconds_to_minutes
from .constants import (
    APP_TITLE, HALF_DURATION_MINUTES, HALF_DURATION_SECONDS, HALF_COUNT,
    FIRST_HALF, SECOND_HALF, XI_SIZE, MIN_SELECTED,
    KEY_LAST_MATCH, KEY_MATCH_PREFIX,
    DEFAULT_HOST, DEFAULT_PORT, DEFAULT_DATA_DIR, DEFAULT_ROSTER_PATH
)

__all__ = [
    "fmt_mmss", "clamp", "seconds_to_minutes", "APP_TITLE",
    "HALF_DURATION_MINUTES", "HALF_DURATION_SECONDS", "HALF_COUNT",
    "FIRST_HALF", "SECOND_HALF", "XI_SIZE", "MIN_SELECTED",
    "KEY_LAST_MATCH", "KEY_MATCH_PREFIX",
    "DEFAULT_HOST", "DEFAULT_PORT", "DEFAULT_DATA_DIR", "DEFAULT_ROSTER_PATH"
]
