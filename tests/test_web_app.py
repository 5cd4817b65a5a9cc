"""
Integration tests for the web API.

Drives the sheet, live and export endpoints through the Flask test client
against a temporary data directory and roster file.
"""
import json
import os
import shutil
import tempfile
import unittest

from u14live.ui import create_app

MATCH_ID = 7


class TestWebApp(unittest.TestCase):
    """Test cases for the JSON API."""

    def setUp(self) -> None:
        self.temp_dir = tempfile.mkdtemp()
        roster_path = os.path.join(self.temp_dir, "players.json")
        with open(roster_path, "w", encoding="utf-8") as f:
            json.dump([{"id": i, "name": f"Player {i:02d}"} for i in range(1, 15)], f)

        self.app = create_app(os.path.join(self.temp_dir, "matches"), roster_path)
        self.app.config["TESTING"] = True
        self.client = self.app.test_client()

    def tearDown(self) -> None:
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _post(self, url: str, payload: dict = None):
        return self.client.post(url, json=payload or {})

    def _prepare_sheet(self) -> None:
        self._post(f"/api/sheet/{MATCH_ID}/select-all")
        self._post(f"/api/sheet/{MATCH_ID}/auto-xi")
        self._post(f"/api/sheet/{MATCH_ID}/meta", {"opponent": "Harbor FC", "home_score": 2})
        response = self._post(f"/api/sheet/{MATCH_ID}/finalize")
        self.assertEqual(response.status_code, 200)

    def test_player_search(self) -> None:
        response = self.client.get("/api/players?q=player 1")
        names = [p["name"] for p in response.get_json()["players"]]
        self.assertEqual(names[0], "Player 10")
        self.assertEqual(len(names), 5)

    def test_sheet_validation_errors(self) -> None:
        self._post(f"/api/sheet/{MATCH_ID}/select", {"player_id": 3})
        response = self._post(f"/api/sheet/{MATCH_ID}/finalize")
        self.assertEqual(response.status_code, 400)
        body = response.get_json()
        self.assertFalse(body["success"])
        self.assertEqual(len(body["errors"]), 2)

        sheet = self.client.get(f"/api/sheet/{MATCH_ID}").get_json()
        self.assertEqual(sheet["selected_count"], 1)
        self.assertEqual(sheet["sheet"]["selected"], [3])

    def test_unknown_actions(self) -> None:
        self.assertEqual(self._post(f"/api/sheet/{MATCH_ID}/shuffle").status_code, 404)
        self._prepare_sheet()
        self.assertEqual(self._post("/api/live/rewind").status_code, 404)

    def test_live_requires_sheet(self) -> None:
        response = self._post("/api/live/open")
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.get_json()["redirect"], "sheet")

        self._post(f"/api/sheet/{MATCH_ID}/select", {"player_id": 1})
        response = self._post("/api/live/open", {"match_id": MATCH_ID})
        self.assertEqual(response.status_code, 409)

    def test_substitution_flow(self) -> None:
        self._prepare_sheet()
        live = self._post("/api/live/open").get_json()["live"]
        self.assertEqual(live["match_id"], MATCH_ID)
        self.assertEqual(len(live["field"]), 11)
        self.assertEqual(len(live["bench"]), 3)
        out_id = live["field"][0]["id"]
        in_id = live["bench"][0]["id"]

        self.assertTrue(self._post("/api/live/start").get_json()["changed"])
        live = self._post("/api/live/tick", {"count": 90}).get_json()["live"]
        self.assertEqual(live["clock"], "01:30")

        live = self._post("/api/live/propose", {"out_id": out_id, "in_id": in_id}).get_json()["live"]
        self.assertEqual(live["pending"]["out_id"], out_id)
        live = self._post("/api/live/confirm").get_json()["live"]
        self.assertIsNone(live["pending"])
        self.assertTrue(live["can_undo"])
        self.assertIn(in_id, [card["id"] for card in live["field"]])

        self._post("/api/live/tick", {"count": 30})
        live = self._post("/api/live/undo").get_json()["live"]
        self.assertFalse(live["can_undo"])
        self.assertIn(out_id, [card["id"] for card in live["field"]])
        self.assertEqual(live["current_time"], 90)

    def test_halftime_and_export(self) -> None:
        self._prepare_sheet()
        self._post("/api/live/open", {"match_id": MATCH_ID})
        self._post("/api/live/start")
        self._post("/api/live/tick", {"count": 600})

        response = self._post("/api/live/halftime")
        self.assertEqual(response.status_code, 409)
        self.assertTrue(response.get_json()["confirm_required"])

        live = self._post("/api/live/halftime", {"confirm": True}).get_json()["live"]
        self.assertEqual((live["half"], live["current_time"], live["is_running"]), (2, 0, False))
        self.assertEqual(live["field"][0]["seconds"], 600)

        live = self._post("/api/live/finish", {"confirm": True}).get_json()["live"]
        self.assertTrue(live["finished"])
        self.assertFalse(self._post("/api/live/start").get_json()["changed"])

        export = self.client.get("/api/export").get_json()["export"]
        self.assertEqual(export["matchId"], MATCH_ID)
        self.assertEqual(export["meta"]["opponent"], "Harbor FC")
        self.assertEqual(export["meta"]["score"], {"home": 2, "away": None})
        minutes = [row["minutes"] for row in export["players"]]
        self.assertEqual(minutes.count(10), 11)
        self.assertEqual(minutes.count(0), 3)

        response = self.client.get("/api/export/download")
        self.assertEqual(
            response.headers["Content-Disposition"], f"attachment; filename=match-{MATCH_ID}.json"
        )
        self.assertEqual(json.loads(response.get_data(as_text=True)), export)

    def test_sheet_edits_during_live_match_are_kept(self) -> None:
        self._prepare_sheet()
        self._post("/api/live/open")
        self._post("/api/live/start")
        self._post(
            f"/api/sheet/{MATCH_ID}/meta", {"opponent": "Rivals", "home_score": 2, "away_score": 1}
        )
        self._post("/api/live/tick", {"count": 5})

        sheet = self.client.get(f"/api/sheet/{MATCH_ID}").get_json()["sheet"]
        self.assertEqual((sheet["opponent"], sheet["homeScore"], sheet["awayScore"]), ("Rivals", 2, 1))

        self._post("/api/live/finish", {"confirm": True})
        self._post(f"/api/sheet/{MATCH_ID}/meta", {"home_score": 3, "away_score": 1})
        export = self.client.get("/api/export").get_json()["export"]
        self.assertEqual(export["meta"]["score"], {"home": 3, "away": 1})

    def test_reset_needs_confirmation(self) -> None:
        self._prepare_sheet()
        self._post("/api/live/open")
        response = self._post(f"/api/sheet/{MATCH_ID}/reset")
        self.assertEqual(response.status_code, 409)

        body = self._post(f"/api/sheet/{MATCH_ID}/reset", {"confirm": True}).get_json()
        self.assertEqual(body["selected_count"], 0)
        self.assertEqual(self.client.get("/api/live/state").status_code, 409)


if __name__ == "__main__":
    unittest.main()
