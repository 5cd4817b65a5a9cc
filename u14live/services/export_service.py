"""Export helpers for the U14 Live match tracker."""

from __future__ import annotations

import json
from typing import Optional

from ..models import IntervalLedger, MatchExport, MatchSheet, MatchState, PlayerExportRow
from ..utils import seconds_to_minutes


class MatchExportService:
    """
    Build the end-of-match export document.

    The export is a read-only projection: it never changes the match state.
    Scores entered on the sheet win over the live copy; the opponent comes
    from the live copy and falls back to the sheet.
    """

    def build(self, state: MatchState, sheet: Optional[MatchSheet] = None) -> MatchExport:
        """Build a :class:`MatchExport` for ``state``."""

        opponent = state.meta.opponent or (sheet.opponent if sheet else "")
        home = sheet.home_score if sheet and sheet.home_score is not None else state.meta.home_score
        away = sheet.away_score if sheet and sheet.away_score is not None else state.meta.away_score

        rows = []
        for player_id, ps in state.players.items():
            seconds = IntervalLedger.elapsed_seconds(ps.intervals, state.half, state.current_time)
            rows.append(
                PlayerExportRow(
                    match_id=state.match_id,
                    player_id=player_id,
                    minutes=seconds_to_minutes(seconds),
                    goals=ps.goals,
                    rating=ps.rating,
                )
            )
        rows.sort(key=lambda row: row.player_id)

        return MatchExport(
            match_id=state.match_id,
            opponent=opponent,
            home_score=home,
            away_score=away,
            players=rows,
        )

    def to_json_text(self, export: MatchExport) -> str:
        """Return the export as pretty-printed JSON."""
        return json.dumps(export.to_dict(), indent=2)

    @staticmethod
    def filename(match_id: int) -> str:
        return f"match-{match_id}.json"
