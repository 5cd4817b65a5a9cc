"""
Persistence service for the U14 Live match tracker.

This module stores one JSON document per match, shaped
``{"sheet": ..., "live": ...}``, plus a pointer to the last match used.
"""
import json
import logging
import os
from typing import Optional, Protocol

from ..utils import KEY_LAST_MATCH, KEY_MATCH_PREFIX

logger = logging.getLogger(__name__)


class PersistenceStore(Protocol):
    """Keyed document store used by the match services."""

    def save(self, match_id: int, document: dict) -> None:
        ...

    def load(self, match_id: int) -> Optional[dict]:
        ...

    def reset(self, match_id: int) -> None:
        ...

    def last_match_id(self) -> int:
        ...


class JsonFileStore:
    """
    Store match documents as JSON files in a directory.

    Writes are synchronous and write errors propagate to the caller.
    """

    def __init__(self, base_dir: str):
        """
        Initialize the store.

        Args:
            base_dir: Directory holding the match files (created on first save)
        """
        self.base_dir = base_dir

    def path_for(self, match_id: int) -> str:
        """Return the file path of a match document."""
        return os.path.join(self.base_dir, f"{KEY_MATCH_PREFIX}{int(match_id)}.json")

    @property
    def pointer_path(self) -> str:
        return os.path.join(self.base_dir, KEY_LAST_MATCH)

    def save(self, match_id: int, document: dict) -> None:
        """
        Save a match document and remember it as the last match.

        Args:
            match_id: Match identifier
            document: JSON-serializable document

        Raises:
            OSError: If the file cannot be written
            TypeError: If the document is not JSON serializable
        """
        payload = json.dumps(document, indent=2)

        if not os.path.exists(self.base_dir):
            os.makedirs(self.base_dir)

        self._write_atomic(self.path_for(match_id), payload)
        self._write_atomic(self.pointer_path, str(int(match_id)))

    @staticmethod
    def _write_atomic(file_path: str, text: str) -> None:
        """Write to a temporary sibling file, then move it over ``file_path``."""
        tmp_path = file_path + ".tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp_path, file_path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def load(self, match_id: int) -> Optional[dict]:
        """
        Load a match document.

        Args:
            match_id: Match identifier

        Returns:
            The stored document, or None if absent or not valid JSON
        """
        file_path = self.path_for(match_id)
        if not os.path.exists(file_path):
            return None

        with open(file_path, "r", encoding="utf-8") as f:
            raw = f.read()
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable match document %s", file_path)
            return None
        if not isinstance(data, dict):
            logger.warning("Ignoring match document %s: not an object", file_path)
            return None
        return data

    def reset(self, match_id: int) -> None:
        """Remove a match document; the last-match pointer is kept."""
        file_path = self.path_for(match_id)
        if os.path.exists(file_path):
            os.remove(file_path)
            logger.info("Reset match %s", match_id)

    def last_match_id(self) -> int:
        """
        Return the id of the last saved match.

        Returns:
            Match id, or 0 when no match was saved or the pointer is unreadable
        """
        if not os.path.exists(self.pointer_path):
            return 0
        with open(self.pointer_path, "r", encoding="utf-8") as f:
            raw = f.read().strip()
        try:
            return int(raw or 0)
        except ValueError:
            return 0
