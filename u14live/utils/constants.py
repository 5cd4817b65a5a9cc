"""
Constants for the U14 Live match tracker.

This module contains configuration constants used throughout the application.
"""

# Application metadata
APP_TITLE = "U14 Live"

# Match timing
HALF_DURATION_MINUTES = 35
HALF_DURATION_SECONDS = HALF_DURATION_MINUTES * 60
HALF_COUNT = 2
FIRST_HALF = 1
SECOND_HALF = 2

# Squad sizes
XI_SIZE = 11
MIN_SELECTED = XI_SIZE

# Storage keys (one document per match plus the last-match pointer)
KEY_LAST_MATCH = "u14_live_last_match_id"
KEY_MATCH_PREFIX = "u14_live_match_"

# Web server defaults
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 7122
DEFAULT_DATA_DIR = "matchdata"
DEFAULT_ROSTER_PATH = "data/players.json"
