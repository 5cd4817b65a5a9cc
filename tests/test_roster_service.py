import json
import os
import shutil
import tempfile
import unittest

from u14live.exceptions import RosterError
from u14live.models import Player
from u14live.services import RosterService


class RosterServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.roster = RosterService.from_list([
            {"id": 3, "name": "Zoe"},
            {"id": 1, "name": "adam"},
            {"id": 2, "name": "Bruno"},
        ])

    def test_keeps_file_order(self) -> None:
        self.assertEqual(self.roster.ids(), [3, 1, 2])

    def test_sorted_by_name(self) -> None:
        self.assertEqual([p.id for p in self.roster.sorted_by_name()], [1, 2, 3])
        self.assertEqual([p.id for p in self.roster.sorted_by_name([3, 2, 99])], [2, 3])

    def test_search(self) -> None:
        self.assertEqual([p.name for p in self.roster.search("O")], ["Bruno", "Zoe"])
        self.assertEqual(len(self.roster.search("  ")), 3)

    def test_lookup(self) -> None:
        self.assertEqual(self.roster.get(2), Player(2, "Bruno"))
        self.assertIsNone(self.roster.get(9))
        self.assertEqual(self.roster.name_of(9), "9")

    def test_duplicate_ids_rejected(self) -> None:
        with self.assertRaises(RosterError):
            RosterService.from_list([{"id": 1, "name": "A"}, {"id": 1, "name": "B"}])

    def test_malformed_entries_rejected(self) -> None:
        for data in ({"id": 1}, [{"name": "A"}], [{"id": "x", "name": "A"}], [{"id": 1, "name": " "}]):
            with self.assertRaises(RosterError):
                RosterService.from_list(data)

    def test_from_file(self) -> None:
        tmp_dir = tempfile.mkdtemp()
        try:
            path = os.path.join(tmp_dir, "players.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump([{"id": 4, "name": "Dan"}], f)
            self.assertEqual(RosterService.from_file(path).players, [Player(4, "Dan")])

            with open(path, "w", encoding="utf-8") as f:
                f.write("[")
            with self.assertRaises(RosterError):
                RosterService.from_file(path)
            with self.assertRaises(RosterError):
                RosterService.from_file(os.path.join(tmp_dir, "missing.json"))
        finally:
            shutil.rmtree(tmp_dir, ignore_errors=True)


if __name__ == "__main__":
    unittest.main()
