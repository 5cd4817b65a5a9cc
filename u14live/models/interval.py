"""
Playing interval model for the U14 Live match tracker.

An interval is a contiguous span during which a player was on the field,
scoped to a single half. Open and closed intervals are separate types so
that "is this interval still running" is answered by the type, not by a
missing end value.
"""
from dataclasses import dataclass
from typing import Any, Dict, Union


@dataclass(frozen=True)
class OpenInterval:
    """Interval that started but has not ended yet."""
    half: int
    start: int

    @property
    def is_open(self) -> bool:
        return True

    def close(self, end: int) -> "ClosedInterval":
        """Return the closed counterpart of this interval ending at ``end``."""
        return ClosedInterval(half=self.half, start=self.start, end=end)

    def to_dict(self) -> Dict[str, Any]:
        return {"half": self.half, "start": self.start, "end": None}


@dataclass(frozen=True)
class ClosedInterval:
    """Interval with both ends known."""
    half: int
    start: int
    end: int

    @property
    def is_open(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {"half": self.half, "start": self.start, "end": self.end}


Interval = Union[OpenInterval, ClosedInterval]


def interval_from_dict(data: Dict[str, Any]) -> Interval:
    """
    Create an interval from its stored form.

    A missing or null ``end`` yields an :class:`OpenInterval`.

    Args:
        data: Dictionary with ``half``, ``start`` and optional ``end``

    Returns:
        OpenInterval or ClosedInterval instance
    """
    half = int(data.get("half", 1))
    start = int(data.get("start", 0))
    end = data.get("end")
    if end is None:
        return OpenInterval(half=half, start=start)
    return ClosedInterval(half=half, start=start, end=int(end))
