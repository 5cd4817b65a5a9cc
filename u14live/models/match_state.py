"""
MatchState model for the U14 Live match tracker.

This module contains the MatchState dataclass which represents the complete
live state of a match: half, clock position, per-player live state and
match details, plus persistence helpers.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .interval import OpenInterval
from .interval_ledger import IntervalLedger
from .match_sheet import MatchSheet, optional_int
from .player import PlayerLiveState
from ..utils import FIRST_HALF, HALF_DURATION_SECONDS, SECOND_HALF, clamp


@dataclass
class MatchMeta:
    """Opponent and score. A score is None until it is entered."""
    opponent: str = ""
    home_score: Optional[int] = None
    away_score: Optional[int] = None

    def to_json(self) -> dict:
        return {
            "opponent": self.opponent,
            "homeScore": self.home_score,
            "awayScore": self.away_score,
        }

    @staticmethod
    def from_json(data: Optional[dict]) -> "MatchMeta":
        data = data or {}
        return MatchMeta(
            opponent=data.get("opponent") or "",
            home_score=optional_int(data.get("homeScore")),
            away_score=optional_int(data.get("awayScore")),
        )


@dataclass
class MatchState:
    """
    Represents the complete live state of a match.

    Attributes:
        match_id: Match identifier (> 0)
        half: Current half (1 or 2)
        current_time: Seconds elapsed in the current half, 0..HALF_DURATION_SECONDS
        is_running: Whether the match clock is running
        players: Live state keyed by player id; the key set is fixed at creation
        meta: Opponent and score
        finished: Whether the match has been finished
    """
    match_id: int
    half: int = FIRST_HALF
    current_time: int = 0
    is_running: bool = False
    players: Dict[int, PlayerLiveState] = field(default_factory=dict)
    meta: MatchMeta = field(default_factory=MatchMeta)
    finished: bool = False

    @staticmethod
    def from_sheet(sheet: MatchSheet) -> "MatchState":
        """
        Build the kick-off state from a finalized sheet.

        Starting XI members are on the field with an interval open from 0 in
        the first half; the other selected players start on the bench.
        """
        xi = set(sheet.xi)
        players = {
            pid: PlayerLiveState.starter() if pid in xi else PlayerLiveState.substitute()
            for pid in sheet.selected
        }
        return MatchState(
            match_id=sheet.match_id,
            players=players,
            meta=MatchMeta(
                opponent=sheet.opponent,
                home_score=sheet.home_score,
                away_score=sheet.away_score,
            ),
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def clamped_time(self) -> int:
        """Current time clamped to the half duration."""
        return clamp(self.current_time, 0, HALF_DURATION_SECONDS)

    def live_seconds(self, player_id: int) -> int:
        """Seconds played so far by ``player_id`` (0 for unknown players)."""
        player = self.players.get(player_id)
        if player is None:
            return 0
        return IntervalLedger.elapsed_seconds(player.intervals, self.half, self.current_time)

    def on_field_ids(self) -> List[int]:
        return [pid for pid, ps in self.players.items() if ps.on_field]

    def bench_ids(self) -> List[int]:
        return [pid for pid, ps in self.players.items() if not ps.on_field]

    # ------------------------------------------------------------------
    # Half boundary helpers
    # ------------------------------------------------------------------
    def close_open_intervals(self, at_time: int) -> int:
        """
        Force-close every interval still open in the current half.

        A stray open interval from an earlier half is closed at the end of
        that half, which is what elapsed time already assumed for it.

        Args:
            at_time: Closing time in seconds from the half start

        Returns:
            Number of intervals closed
        """
        closed = 0
        for ps in self.players.values():
            for idx, interval in enumerate(ps.intervals):
                if not isinstance(interval, OpenInterval):
                    continue
                end = at_time if interval.half == self.half else HALF_DURATION_SECONDS
                ps.intervals[idx] = interval.close(end)
                closed += 1
        return closed

    def reopen_on_field_intervals(self) -> None:
        """Open a fresh interval at 0 for every on-field player in the current half."""
        for ps in self.players.values():
            if ps.on_field:
                IntervalLedger.open_interval(ps.intervals, self.half, 0)

    def next_half(self) -> int:
        """The half that follows the current one; there is no third period."""
        return SECOND_HALF

    # ------------------------------------------------------------------
    # Copy / persistence
    # ------------------------------------------------------------------
    def copy(self) -> "MatchState":
        """Return an independent value copy of this state."""
        return MatchState(
            match_id=self.match_id,
            half=self.half,
            current_time=self.current_time,
            is_running=self.is_running,
            players={pid: ps.copy() for pid, ps in self.players.items()},
            meta=MatchMeta(
                opponent=self.meta.opponent,
                home_score=self.meta.home_score,
                away_score=self.meta.away_score,
            ),
            finished=self.finished,
        )

    def to_json(self) -> dict:
        """
        Convert MatchState to JSON-serializable dictionary.

        Player ids become string keys, as JSON objects require.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        return {
            "matchId": self.match_id,
            "half": self.half,
            "currentTime": self.current_time,
            "isRunning": self.is_running,
            "players": {str(pid): ps.to_dict() for pid, ps in self.players.items()},
            "meta": self.meta.to_json(),
            "finished": self.finished,
        }

    @staticmethod
    def is_complete_document(data: object) -> bool:
        """Return True when ``data`` has the shape of a stored live state."""
        return (
            isinstance(data, dict)
            and isinstance(data.get("players"), dict)
            and "half" in data
            and "currentTime" in data
        )

    @staticmethod
    def from_json(data: dict) -> "MatchState":
        """
        Create MatchState from JSON dictionary.

        Args:
            data: Dictionary with live state data

        Returns:
            New MatchState instance

        Raises:
            ValueError: If the document holds values that cannot be converted,
                or a player's on-field flag disagrees with its intervals
        """
        half = int(data.get("half", FIRST_HALF))
        if half not in (FIRST_HALF, SECOND_HALF):
            raise ValueError(f"Invalid half: {half}")

        players = {
            int(pid): PlayerLiveState.from_dict(pdata or {})
            for pid, pdata in (data.get("players") or {}).items()
        }
        finished = bool(data.get("finished", False))
        for pid, ps in players.items():
            if not ps.is_consistent(finished):
                raise ValueError(f"Inconsistent live state for player {pid}")
        return MatchState(
            match_id=int(data.get("matchId") or 0),
            half=half,
            current_time=clamp(int(data.get("currentTime") or 0), 0, HALF_DURATION_SECONDS),
            is_running=bool(data.get("isRunning", False)),
            players=players,
            meta=MatchMeta.from_json(data.get("meta")),
            finished=finished,
        )


