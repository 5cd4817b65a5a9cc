"""
Live match service for the U14 Live match tracker.

This module orchestrates a match in progress: it owns the match state,
its clock and the substitution engine, exposes the halftime and finish
transitions and writes the state through to the store after every change.
"""
import logging
from typing import Callable, Optional

from ..exceptions import ConfirmationRequiredError, MissingPrerequisiteError
from ..models import MatchSheet, MatchState
from ..utils import MIN_SELECTED, XI_SIZE
from .match_clock import ClockDriver, MatchClock
from .persistence_service import PersistenceStore
from .substitution_engine import SubstitutionEngine, SwapProposal

logger = logging.getLogger(__name__)


class LiveMatchService:
    """
    Live tracking of one match.

    All mutations run to completion and are persisted before returning;
    store errors are not caught here.
    """

    def __init__(
        self,
        state: MatchState,
        store: PersistenceStore,
        driver: Optional[ClockDriver] = None,
        on_change: Optional[Callable[[], None]] = None,
    ):
        """
        Initialize LiveMatchService.

        Args:
            state: Match state to track
            store: Store receiving the match document after every mutation
            driver: Clock driver delivering ticks
            on_change: Called after every mutation, e.g. to refresh a display
        """
        self.state = state
        self.store = store
        self.engine = SubstitutionEngine()
        self.clock = MatchClock(state, driver, on_tick=self._on_tick)
        self._on_change = on_change

    @classmethod
    def open(
        cls,
        store: PersistenceStore,
        match_id: Optional[int] = None,
        driver: Optional[ClockDriver] = None,
    ) -> 'LiveMatchService':
        """
        Open live tracking for a match, defaulting to the last used match.

        A stored live state is resumed with the clock paused. A missing or
        outdated live state is rebuilt from the sheet.

        Raises:
            MissingPrerequisiteError: If there is no match id, no sheet, or
                the sheet was never finalized
        """
        match_id = match_id or store.last_match_id()
        if not match_id:
            raise MissingPrerequisiteError("No active match: set a match ID on the sheet first")

        document = store.load(match_id) or {}
        sheet_data = document.get("sheet")
        if not isinstance(sheet_data, dict):
            raise MissingPrerequisiteError(f"Match sheet missing for match {match_id}")
        sheet = MatchSheet.from_json(sheet_data)
        sheet.match_id = match_id

        state = cls._restore_state(document.get("live"))
        if state is None:
            if len(sheet.selected) < MIN_SELECTED or len(sheet.xi) != XI_SIZE:
                raise MissingPrerequisiteError(
                    f"Match sheet for match {match_id} is not finalized"
                )
            logger.info("Building live state for match %s from its sheet", match_id)
            state = MatchState.from_sheet(sheet)

        state.match_id = match_id
        state.is_running = False
        service = cls(state, store, driver=driver)
        service.clock.sync()
        service.save()
        return service

    @staticmethod
    def _restore_state(live: object) -> Optional[MatchState]:
        if not MatchState.is_complete_document(live):
            if live is not None:
                logger.warning("Stored live state has an outdated shape, rebuilding from sheet")
            return None
        try:
            return MatchState.from_json(live)
        except (TypeError, ValueError) as e:
            logger.warning("Stored live state could not be read (%s), rebuilding from sheet", e)
            return None

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def save(self) -> None:
        """
        Write the current state into the stored match document.

        The document is read back first so sheet edits made while the match
        is open are kept; only its ``live`` part is replaced.
        """
        document = self.store.load(self.state.match_id) or {}
        document["live"] = self.state.to_json()
        self.store.save(self.state.match_id, document)

    def _changed(self) -> None:
        self.save()
        if self._on_change is not None:
            self._on_change()

    def _on_tick(self) -> None:
        self._changed()

    # ------------------------------------------------------------------
    # Clock
    # ------------------------------------------------------------------
    def start_clock(self) -> bool:
        """Start the clock; no-op when running or after the final whistle."""
        if self.state.finished:
            return False
        started = self.clock.start()
        if started:
            self._changed()
        return started

    def pause_clock(self) -> bool:
        """Pause the clock; no-op when already paused."""
        paused = self.clock.pause()
        if paused:
            self._changed()
        return paused

    def tick(self) -> bool:
        """
        Apply one clock tick.

        Returns:
            False when the clock is paused and the tick was ignored
        """
        if not self.state.is_running:
            return False
        self.clock.tick()
        return True

    # ------------------------------------------------------------------
    # Substitutions
    # ------------------------------------------------------------------
    @property
    def selected_out_id(self) -> Optional[int]:
        return self.engine.selected_out_id

    @property
    def pending(self) -> Optional[SwapProposal]:
        return self.engine.pending

    @property
    def can_undo(self) -> bool:
        return self.engine.can_undo

    def select_outgoing(self, player_id: int) -> Optional[int]:
        if self.state.finished:
            return None
        return self.engine.select_outgoing(self.state, player_id)

    def propose_swap(self, out_id: int, in_id: int) -> Optional[SwapProposal]:
        if self.state.finished:
            return None
        return self.engine.propose_swap(self.state, out_id, in_id)

    def propose_incoming(self, in_id: int) -> Optional[SwapProposal]:
        if self.state.finished:
            return None
        return self.engine.propose_incoming(self.state, in_id)

    def confirm_swap(self) -> bool:
        """Apply the pending proposal at the current time and persist."""
        if self.state.finished:
            self.engine.cancel_swap()
            return False
        applied = self.engine.confirm_swap(self.state)
        if applied:
            self._changed()
        return applied

    def cancel_swap(self) -> None:
        self.engine.cancel_swap()

    def undo(self) -> bool:
        """Restore the state from before the last swap, if there is one."""
        snapshot = self.engine.undo()
        if snapshot is None:
            return False
        self.state = snapshot
        self.clock.bind(snapshot)
        logger.info("Match %s: last substitution undone", self.state.match_id)
        self._changed()
        return True

    # ------------------------------------------------------------------
    # Half boundaries
    # ------------------------------------------------------------------
    def _close_half(self) -> int:
        self.clock.pause()
        at_time = self.state.clamped_time()
        self.state.close_open_intervals(at_time)
        self.engine.clear()
        return at_time

    def halftime_transition(self, confirmed: bool = False) -> bool:
        """
        Move to the second half.

        Every interval open in the first half is closed at the current
        time, the clock resets to 0 and on-field players start a new
        interval. There is no third period: in the second half this is a
        no-op returning False.

        Raises:
            ConfirmationRequiredError: If ``confirmed`` is False
        """
        if not confirmed:
            raise ConfirmationRequiredError("Confirm halftime: the clock will reset to 00:00")
        if self.state.finished:
            return False
        if self.state.next_half() == self.state.half:
            logger.debug("Match %s: already in the last half", self.state.match_id)
            return False

        at_time = self._close_half()
        previous_half = self.state.half
        self.state.half = self.state.next_half()
        self.state.current_time = 0
        self.state.reopen_on_field_intervals()

        logger.info(
            "Match %s: half %s closed at %ss, now half %s",
            self.state.match_id, previous_half, at_time, self.state.half,
        )
        self._changed()
        return True

    def finish(self, confirmed: bool = False) -> None:
        """
        End the match, closing every running interval at the current time.

        Raises:
            ConfirmationRequiredError: If ``confirmed`` is False
        """
        if not confirmed:
            raise ConfirmationRequiredError("Confirm end of match: running times will be closed")

        at_time = self._close_half()
        self.state.finished = True
        logger.info(
            "Match %s finished at half %s %ss", self.state.match_id, self.state.half, at_time
        )
        self._changed()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def live_seconds(self, player_id: int) -> int:
        return self.state.live_seconds(player_id)

    @property
    def current_half(self) -> int:
        return self.state.half

    @property
    def current_time(self) -> int:
        return self.state.current_time

    @property
    def is_running(self) -> bool:
        return self.state.is_running

    @property
    def sheet(self) -> Optional[MatchSheet]:
        """The match sheet as currently stored, or None when it is gone."""
        document = self.store.load(self.state.match_id) or {}
        sheet_data = document.get("sheet")
        if not isinstance(sheet_data, dict):
            return None
        return MatchSheet.from_json(sheet_data)
