"""Dataclasses describing the end-of-match export document."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..utils import HALF_COUNT, HALF_DURATION_MINUTES


@dataclass
class PlayerExportRow:
    """Minutes, goals and rating of one player in one match."""

    match_id: int
    player_id: int
    minutes: int
    goals: int
    rating: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matchId": self.match_id,
            "playerId": self.player_id,
            "minutes": self.minutes,
            "goals": self.goals,
            "rating": self.rating,
        }


@dataclass
class MatchExport:
    """Read-only projection of a match, ready to be written as JSON."""

    match_id: int
    opponent: str
    home_score: Optional[int]
    away_score: Optional[int]
    players: List[PlayerExportRow] = field(default_factory=list)
    halves: int = HALF_COUNT
    half_duration_minutes: int = HALF_DURATION_MINUTES

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matchId": self.match_id,
            "meta": {
                "halves": self.halves,
                "halfDurationMinutes": self.half_duration_minutes,
                "opponent": self.opponent,
                "score": {"home": self.home_score, "away": self.away_score},
            },
            "players": [row.to_dict() for row in self.players],
        }
