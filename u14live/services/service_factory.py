"""
Service Factory for the U14 Live match tracker.

This module wires the services together around a single document store
and roster, so the web layer never constructs collaborators itself.
"""
from typing import Optional

from .export_service import MatchExportService
from .live_match_service import LiveMatchService
from .match_clock import ClockDriver
from .persistence_service import JsonFileStore, PersistenceStore
from .roster_service import RosterService
from .sheet_service import MatchSheetService


class ServiceFactory:
    """Factory for creating service instances sharing one store and roster."""

    def __init__(self, store: PersistenceStore, roster: RosterService):
        """
        Initialize factory.

        Args:
            store: Document store for sheets and live states
            roster: Roster provider
        """
        self.store = store
        self.roster = roster
        self._export_service: Optional[MatchExportService] = None

    @classmethod
    def from_paths(cls, data_dir: str, roster_path: str) -> 'ServiceFactory':
        """Create a factory backed by a JSON file store and roster file."""
        return cls(JsonFileStore(data_dir), RosterService.from_file(roster_path))

    def create_sheet_service(self) -> MatchSheetService:
        return MatchSheetService(self.store, self.roster)

    def open_live_match(
        self,
        match_id: Optional[int] = None,
        driver: Optional[ClockDriver] = None,
    ) -> LiveMatchService:
        """
        Open live tracking for a match.

        Raises:
            MissingPrerequisiteError: If the match or its sheet is missing
        """
        return LiveMatchService.open(self.store, match_id=match_id, driver=driver)

    def get_export_service(self) -> MatchExportService:
        """Get singleton export service."""
        if self._export_service is None:
            self._export_service = MatchExportService()
        return self._export_service
