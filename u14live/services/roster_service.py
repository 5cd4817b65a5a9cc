"""
Roster service for the U14 Live match tracker.

This module loads the club roster (an ordered list of ``{"id", "name"}``
entries) and provides the lookups the sheet and live views need.
"""
import json
import logging
import os
from typing import Dict, List, Optional

from ..exceptions import RosterError
from ..models import Player

logger = logging.getLogger(__name__)


class RosterService:
    """
    Read-only access to the roster.

    Players keep the order of the roster file; ``sorted_by_name`` gives the
    alphabetical order used for display.
    """

    def __init__(self, players: List[Player]):
        self._players = list(players)
        self._by_id: Dict[int, Player] = {}
        for player in self._players:
            if player.id in self._by_id:
                raise RosterError(f"Duplicate player id: {player.id}")
            self._by_id[player.id] = player

    @classmethod
    def from_file(cls, file_path: str) -> 'RosterService':
        """
        Load the roster from a JSON file.

        Args:
            file_path: Path to a JSON list of ``{"id", "name"}`` objects

        Returns:
            RosterService instance

        Raises:
            RosterError: If the file is missing or malformed
        """
        if not os.path.exists(file_path):
            raise RosterError(f"Roster file not found: {file_path}")

        with open(file_path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise RosterError(f"Roster file is not valid JSON: {e}") from e

        return cls.from_list(data)

    @classmethod
    def from_list(cls, data: object) -> 'RosterService':
        """Build the roster from already decoded JSON data."""
        if not isinstance(data, list):
            raise RosterError("Roster must be a list of players")

        players = []
        for idx, entry in enumerate(data):
            try:
                player = Player.from_dict(entry)
            except (KeyError, TypeError, ValueError) as e:
                raise RosterError(f"Invalid roster entry at index {idx}: {entry!r}") from e
            if not player.name.strip():
                raise RosterError(f"Player {player.id} has an empty name")
            players.append(player)

        logger.info("Loaded roster with %d players", len(players))
        return cls(players)

    @property
    def players(self) -> List[Player]:
        return list(self._players)

    def ids(self) -> List[int]:
        return [p.id for p in self._players]

    def get(self, player_id: int) -> Optional[Player]:
        return self._by_id.get(player_id)

    def name_of(self, player_id: int) -> str:
        """Display name, falling back to the id for unknown players."""
        player = self._by_id.get(player_id)
        return player.name if player else str(player_id)

    def sorted_by_name(self, player_ids: Optional[List[int]] = None) -> List[Player]:
        """
        Players in alphabetical order.

        Args:
            player_ids: Restrict to these ids; unknown ids are skipped
        """
        if player_ids is None:
            players = self._players
        else:
            players = [self._by_id[pid] for pid in player_ids if pid in self._by_id]
        return sorted(players, key=lambda p: p.name.lower())

    def search(self, query: str) -> List[Player]:
        """Case-insensitive name filter, alphabetical."""
        needle = (query or "").strip().lower()
        return [p for p in self.sorted_by_name() if not needle or needle in p.name.lower()]
