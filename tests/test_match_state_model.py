import json
import unittest

from u14live.models import (
    ClosedInterval, MatchMeta, MatchSheet, MatchState, OpenInterval, PlayerLiveState
)


class MatchStateModelTests(unittest.TestCase):
    def setUp(self) -> None:
        self.state = MatchState(
            match_id=5,
            half=2,
            current_time=300,
            players={
                1: PlayerLiveState(
                    on_field=True,
                    intervals=[ClosedInterval(1, 0, 2100), OpenInterval(2, 0)],
                    goals=2,
                ),
                2: PlayerLiveState(on_field=False, intervals=[ClosedInterval(1, 600, 2100)]),
                3: PlayerLiveState(),
            },
            meta=MatchMeta(opponent="Rivals", home_score=1),
        )

    def test_from_sheet(self) -> None:
        sheet = MatchSheet(match_id=9, opponent="X", away_score=3, selected=[4, 5, 6], xi=[5])
        state = MatchState.from_sheet(sheet)
        self.assertEqual(state.players[5], PlayerLiveState.starter())
        self.assertEqual(state.players[4], PlayerLiveState())
        self.assertEqual(state.meta, MatchMeta(opponent="X", away_score=3))
        self.assertEqual((state.half, state.current_time, state.is_running), (1, 0, False))

    def test_stored_document_shape(self) -> None:
        data = json.loads(json.dumps(self.state.to_json()))
        self.assertEqual(data["currentTime"], 300)
        self.assertEqual(
            data["players"]["1"]["intervals"],
            [{"half": 1, "start": 0, "end": 2100}, {"half": 2, "start": 0, "end": None}],
        )
        self.assertEqual(data["meta"], {"opponent": "Rivals", "homeScore": 1, "awayScore": None})
        self.assertEqual(MatchState.from_json(data), self.state)

    def test_live_seconds(self) -> None:
        self.assertEqual(self.state.live_seconds(1), 2400)
        self.assertEqual(self.state.live_seconds(2), 1500)
        self.assertEqual(self.state.live_seconds(3), 0)
        self.assertEqual(self.state.live_seconds(99), 0)

    def test_copy_is_independent(self) -> None:
        clone = self.state.copy()
        self.assertEqual(clone, self.state)
        clone.players[1].intervals.append(ClosedInterval(2, 10, 20))
        clone.players[3].goals = 1
        clone.meta.away_score = 4
        self.assertEqual(len(self.state.players[1].intervals), 2)
        self.assertEqual(self.state.players[3].goals, 0)
        self.assertIsNone(self.state.meta.away_score)

    def test_close_open_intervals(self) -> None:
        self.state.players[2].intervals.append(OpenInterval(1, 100))
        closed = self.state.close_open_intervals(450)
        self.assertEqual(closed, 2)
        self.assertEqual(self.state.players[1].intervals[-1], ClosedInterval(2, 0, 450))
        self.assertEqual(self.state.players[2].intervals[-1], ClosedInterval(1, 100, 2100))

    def test_partial_documents(self) -> None:
        self.assertFalse(MatchState.is_complete_document(None))
        self.assertFalse(MatchState.is_complete_document({"half": 1}))
        self.assertTrue(MatchState.is_complete_document(self.state.to_json()))
        with self.assertRaises(ValueError):
            MatchState.from_json({"half": 3, "currentTime": 0, "players": {}})

    def test_rating_is_read_as_number(self) -> None:
        data = self.state.to_json()
        data["players"]["3"]["rating"] = "7.5"
        self.assertEqual(MatchState.from_json(data).players[3].rating, 7.5)

        data["players"]["3"]["rating"] = "great"
        with self.assertRaises(ValueError):
            MatchState.from_json(data)

    def test_on_field_flag_must_match_intervals(self) -> None:
        data = self.state.to_json()
        data["players"]["2"]["intervals"].append({"half": 2, "start": 30, "end": None})
        with self.assertRaises(ValueError):
            MatchState.from_json(data)

        data = self.state.to_json()
        data["players"]["1"]["onField"] = False
        with self.assertRaises(ValueError):
            MatchState.from_json(data)

    def test_finished_match_keeps_players_on_field(self) -> None:
        self.state.close_open_intervals(900)
        self.state.finished = True
        restored = MatchState.from_json(self.state.to_json())
        self.assertTrue(restored.players[1].on_field)
        self.assertEqual(restored, self.state)

    def test_on_field_and_bench(self) -> None:
        self.assertEqual(self.state.on_field_ids(), [1])
        self.assertEqual(sorted(self.state.bench_ids()), [2, 3])


if __name__ == "__main__":
    unittest.main()
