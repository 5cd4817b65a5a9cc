"""
MatchSheet model for the U14 Live match tracker.

The sheet is the pre-match record filled in before kick-off: opponent,
optional final score, the selected squad and the starting XI.
"""
from dataclasses import dataclass, field
from typing import Any, List, Optional


def optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


@dataclass
class MatchSheet:
    """
    Roster selection and match details for one match.

    Attributes:
        match_id: Match identifier (> 0)
        opponent: Opponent name, may be empty
        home_score: Home score if entered
        away_score: Away score if entered
        selected: Ids of the selected squad, in selection order
        xi: Ids of the starting XI (subset of ``selected``)
    """
    match_id: int
    opponent: str = ""
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    selected: List[int] = field(default_factory=list)
    xi: List[int] = field(default_factory=list)

    def to_json(self) -> dict:
        """
        Convert MatchSheet to JSON-serializable dictionary.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        return {
            "matchId": self.match_id,
            "opponent": self.opponent,
            "homeScore": self.home_score,
            "awayScore": self.away_score,
            "selected": list(self.selected),
            "xi": list(self.xi),
        }

    @staticmethod
    def from_json(data: dict) -> "MatchSheet":
        """
        Create MatchSheet from JSON dictionary.

        Args:
            data: Dictionary with sheet data

        Returns:
            New MatchSheet instance
        """
        return MatchSheet(
            match_id=int(data.get("matchId") or 0),
            opponent=data.get("opponent") or "",
            home_score=optional_int(data.get("homeScore")),
            away_score=optional_int(data.get("awayScore")),
            selected=[int(pid) for pid in data.get("selected") or []],
            xi=[int(pid) for pid in data.get("xi") or []],
        )
