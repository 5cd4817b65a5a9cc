"""
Player models for the U14 Live match tracker.

This module contains the static roster entry (:class:`Player`) and the
per-match live state of a player (:class:`PlayerLiveState`): on-field flag,
playing intervals, goals and rating.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .interval import Interval, OpenInterval, interval_from_dict


@dataclass(frozen=True)
class Player:
    """
    A roster entry supplied by the roster provider.

    Attributes:
        id: Unique player identifier
        name: Display name
    """
    id: int
    name: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Player':
        """Create from dictionary for JSON deserialization."""
        return cls(id=int(data["id"]), name=str(data["name"]))


@dataclass
class PlayerLiveState:
    """
    Live tracking state of one selected player during a match.

    Attributes:
        on_field: Whether the player is currently on the field
        intervals: Chronological playing intervals; only the last may be open
        goals: Goals scored in this match
        rating: Coach rating for this match
    """
    on_field: bool = False
    intervals: List[Interval] = field(default_factory=list)
    goals: int = 0
    rating: float = 0

    def last_interval(self) -> Optional[Interval]:
        """Return the most recent interval, or None if the player never played."""
        return self.intervals[-1] if self.intervals else None

    def has_open_interval(self) -> bool:
        """Return True when the last interval is still running."""
        last = self.last_interval()
        return last is not None and last.is_open

    def is_consistent(self, finished: bool = False) -> bool:
        """
        Check that the intervals agree with the on-field flag.

        Only the last interval may be open, and it is open exactly when the
        player is on the field. A finished match has no open interval.
        """
        if any(it.is_open for it in self.intervals[:-1]):
            return False
        return self.has_open_interval() == (self.on_field and not finished)

    def copy(self) -> 'PlayerLiveState':
        """Return an independent copy (intervals are immutable values)."""
        return PlayerLiveState(
            on_field=self.on_field,
            intervals=list(self.intervals),
            goals=self.goals,
            rating=self.rating,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "onField": self.on_field,
            "intervals": [it.to_dict() for it in self.intervals],
            "goals": self.goals,
            "rating": self.rating,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlayerLiveState':
        """Create from dictionary for JSON deserialization."""
        intervals = [interval_from_dict(it) for it in data.get("intervals") or []]
        return cls(
            on_field=bool(data.get("onField", False)),
            intervals=intervals,
            goals=max(0, int(data.get("goals") or 0)),
            rating=float(data.get("rating") or 0),
        )

    @classmethod
    def starter(cls) -> 'PlayerLiveState':
        """Starting XI member: on the field from kick-off of the first half."""
        return cls(on_field=True, intervals=[OpenInterval(half=1, start=0)])

    @classmethod
    def substitute(cls) -> 'PlayerLiveState':
        """Selected player who starts on the bench."""
        return cls(on_field=False)
