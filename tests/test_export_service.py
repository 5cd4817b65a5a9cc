"""Test match export document generation."""

import json
import unittest

from u14live.models import ClosedInterval, MatchMeta, MatchSheet, MatchState, OpenInterval, PlayerLiveState
from u14live.services import MatchExportService


class MatchExportServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.state = MatchState(
            match_id=12,
            half=2,
            current_time=1800,
            players={
                9: PlayerLiveState(intervals=[ClosedInterval(1, 0, 2100), ClosedInterval(2, 0, 1800)], goals=1),
                3: PlayerLiveState(intervals=[ClosedInterval(1, 2010, 2100)], rating=7.5),
                5: PlayerLiveState(),
                4: PlayerLiveState(on_field=True, intervals=[OpenInterval(2, 1650)]),
            },
            meta=MatchMeta(opponent="Live FC", home_score=0, away_score=0),
            finished=True,
        )
        self.service = MatchExportService()

    def test_export_document(self) -> None:
        export = self.service.build(self.state).to_dict()
        self.assertEqual(export["matchId"], 12)
        self.assertEqual(
            export["meta"],
            {
                "halves": 2,
                "halfDurationMinutes": 35,
                "opponent": "Live FC",
                "score": {"home": 0, "away": 0},
            },
        )
        self.assertEqual(
            export["players"],
            [
                {"matchId": 12, "playerId": 3, "minutes": 2, "goals": 0, "rating": 7.5},
                {"matchId": 12, "playerId": 4, "minutes": 3, "goals": 0, "rating": 0},
                {"matchId": 12, "playerId": 5, "minutes": 0, "goals": 0, "rating": 0},
                {"matchId": 12, "playerId": 9, "minutes": 65, "goals": 1, "rating": 0},
            ],
        )

    def test_sheet_score_takes_precedence(self) -> None:
        sheet = MatchSheet(match_id=12, opponent="Sheet FC", home_score=3, away_score=None)
        export = self.service.build(self.state, sheet)
        self.assertEqual(export.opponent, "Live FC")
        self.assertEqual((export.home_score, export.away_score), (3, 0))

        self.state.meta = MatchMeta()
        export = self.service.build(self.state, sheet)
        self.assertEqual(export.opponent, "Sheet FC")
        self.assertEqual((export.home_score, export.away_score), (3, None))

    def test_json_text_and_filename(self) -> None:
        export = self.service.build(self.state)
        self.assertEqual(json.loads(self.service.to_json_text(export)), export.to_dict())
        self.assertEqual(self.service.filename(12), "match-12.json")


if __name__ == "__main__":
    unittest.main()
