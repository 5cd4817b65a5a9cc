"""
Match sheet service for the U14 Live match tracker.

This module provides the business logic behind the pre-match sheet:
selecting the squad, picking the starting XI, entering match details,
validation and persistence of the sheet record.
"""
import logging
from typing import List, Optional

from ..exceptions import SheetValidationError
from ..models import MatchSheet
from ..utils import MIN_SELECTED, XI_SIZE
from .persistence_service import PersistenceStore
from .roster_service import RosterService

logger = logging.getLogger(__name__)


class MatchSheetService:
    """
    Edit, validate and store match sheets.

    Sheet edits are saved immediately when the match id is set, the same
    way every live mutation is written through.
    """

    def __init__(self, store: PersistenceStore, roster: RosterService):
        """
        Initialize MatchSheetService.

        Args:
            store: Document store shared with the live match service
            roster: Roster used to resolve player ids and names
        """
        self.store = store
        self.roster = roster

    def load(self, match_id: int) -> MatchSheet:
        """
        Load the sheet of a match, or a blank sheet if none was saved.

        Args:
            match_id: Match identifier

        Returns:
            MatchSheet instance
        """
        document = self.store.load(match_id) if match_id else None
        sheet_data = (document or {}).get("sheet")
        if not isinstance(sheet_data, dict):
            return MatchSheet(match_id=match_id)
        sheet = MatchSheet.from_json(sheet_data)
        sheet.match_id = match_id
        return sheet

    def load_last(self) -> Optional[MatchSheet]:
        """Load the sheet of the last used match, if any."""
        match_id = self.store.last_match_id()
        if not match_id:
            return None
        return self.load(match_id)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------
    def toggle_selected(self, sheet: MatchSheet, player_id: int) -> bool:
        """
        Add or remove a player from the selected squad.

        Removing a player also removes them from the XI.

        Returns:
            True if the player is selected afterwards
        """
        if self.roster.get(player_id) is None:
            return False
        if player_id in sheet.selected:
            sheet.selected.remove(player_id)
            if player_id in sheet.xi:
                sheet.xi.remove(player_id)
            selected = False
        else:
            sheet.selected.append(player_id)
            selected = True
        del sheet.xi[XI_SIZE:]
        self.persist(sheet)
        return selected

    def toggle_xi(self, sheet: MatchSheet, player_id: int) -> bool:
        """
        Add or remove a selected player from the starting XI.

        Unselected players and additions beyond a full XI are ignored.

        Returns:
            True if the player is in the XI afterwards
        """
        if player_id not in sheet.selected:
            return False
        if player_id in sheet.xi:
            sheet.xi.remove(player_id)
        elif len(sheet.xi) < XI_SIZE:
            sheet.xi.append(player_id)
        else:
            return False
        self.persist(sheet)
        return player_id in sheet.xi

    def select_all(self, sheet: MatchSheet) -> None:
        """Select every roster player, keeping the existing order first."""
        for player_id in self.roster.ids():
            if player_id not in sheet.selected:
                sheet.selected.append(player_id)
        self.persist(sheet)

    def auto_xi(self, sheet: MatchSheet) -> List[int]:
        """
        Replace the XI with the first selected players in alphabetical order.

        Returns:
            The new XI
        """
        ordered = self.roster.sorted_by_name(sheet.selected)
        sheet.xi = [p.id for p in ordered[:XI_SIZE]]
        self.persist(sheet)
        return list(sheet.xi)

    def update_meta(
        self,
        sheet: MatchSheet,
        opponent: Optional[str] = None,
        home_score: Optional[int] = None,
        away_score: Optional[int] = None,
    ) -> None:
        """Set the opponent and score; a None score clears it."""
        if opponent is not None:
            sheet.opponent = opponent.strip()
        sheet.home_score = home_score
        sheet.away_score = away_score
        self.persist(sheet)

    # ------------------------------------------------------------------
    # Validation and persistence
    # ------------------------------------------------------------------
    def validate_sheet_data(self, sheet: MatchSheet) -> List[str]:
        """
        Validate a sheet and return list of validation errors.

        Args:
            sheet: Sheet to validate

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []
        if not sheet.match_id or sheet.match_id <= 0:
            errors.append("Match ID is required")
        if len(sheet.selected) < MIN_SELECTED:
            errors.append(f"At least {MIN_SELECTED} players must be selected")
        if len(sheet.xi) != XI_SIZE:
            errors.append(f"Starting XI must have exactly {XI_SIZE} players")
        outside = [pid for pid in sheet.xi if pid not in sheet.selected]
        if outside:
            errors.append(f"XI players not selected: {', '.join(str(pid) for pid in outside)}")
        for score in (sheet.home_score, sheet.away_score):
            if score is not None and score < 0:
                errors.append("Scores cannot be negative")
                break
        return errors

    def validate(self, sheet: MatchSheet) -> None:
        """
        Raise if the sheet cannot start live tracking.

        Raises:
            SheetValidationError: With every problem found
        """
        errors = self.validate_sheet_data(sheet)
        if errors:
            raise SheetValidationError(errors)

    def persist(self, sheet: MatchSheet) -> bool:
        """
        Store the sheet in its match document, keeping any live state.

        Returns:
            False when the sheet has no match id yet
        """
        if not sheet.match_id:
            return False
        document = self.store.load(sheet.match_id) or {}
        document["sheet"] = sheet.to_json()
        document.setdefault("live", None)
        self.store.save(sheet.match_id, document)
        return True

    def finalize(self, sheet: MatchSheet) -> None:
        """Validate and store the sheet before live tracking starts."""
        self.validate(sheet)
        self.persist(sheet)
        logger.info(
            "Sheet saved for match %s: %d selected, XI %s",
            sheet.match_id, len(sheet.selected), sheet.xi,
        )

    def reset(self, match_id: int) -> None:
        """Delete the sheet and live state of a match."""
        if match_id:
            self.store.reset(match_id)
