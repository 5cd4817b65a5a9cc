"""
Utility functions for the U14 Live match tracker.

This module contains common time helpers used throughout the application.
"""


def fmt_mmss(seconds: int) -> str:
    """
    Format seconds as MM:SS string.

    Negative values are shown as 00:00.

    Args:
        seconds: Number of seconds to format

    Returns:
        Formatted time string in MM:SS format

    Example:
        >>> fmt_mmss(90)
        '01:30'
        >>> fmt_mmss(2100)
        '35:00'
    """
    seconds = max(0, int(seconds))
    m = seconds // 60
    s = seconds % 60
    return f"{m:02d}:{s:02d}"


def clamp(value: int, low: int, high: int) -> int:
    """Clamp ``value`` into the inclusive range ``[low, high]``."""
    return max(low, min(high, value))


def seconds_to_minutes(seconds: int) -> int:
    """
    Convert seconds to whole minutes, rounding halves up.

    Example:
        >>> seconds_to_minutes(90)
        2
        >>> seconds_to_minutes(89)
        1
    """
    return (max(0, int(seconds)) + 30) // 60
