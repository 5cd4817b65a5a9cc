"""
Substitution engine for the U14 Live match tracker.

A substitution is a three-step UI flow: pick the outgoing player, pick the
incoming player (which stores a proposal), then confirm. Confirming applies
exactly one swap and keeps a single snapshot of the previous state so the
last swap can be undone.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from ..models import IntervalLedger, MatchState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwapProposal:
    """Outgoing/incoming pair waiting for confirmation."""
    out_id: int
    in_id: int


class SubstitutionEngine:
    """
    Validates and applies swaps with a single-level undo.

    Invalid pairs are dropped without raising: they come from UI double
    clicks or a player already swapped by an earlier action.
    """

    def __init__(self) -> None:
        self.selected_out_id: Optional[int] = None
        self.pending: Optional[SwapProposal] = None
        self._snapshot: Optional[MatchState] = None

    @property
    def can_undo(self) -> bool:
        return self._snapshot is not None

    @staticmethod
    def is_legal(state: MatchState, out_id: int, in_id: int) -> bool:
        """True when ``out_id`` is on the field and ``in_id`` is on the bench."""
        out_state = state.players.get(out_id)
        in_state = state.players.get(in_id)
        if out_state is None or in_state is None:
            return False
        return out_state.on_field and not in_state.on_field

    def select_outgoing(self, state: MatchState, player_id: int) -> Optional[int]:
        """
        Toggle the outgoing selection.

        Selecting the already selected player clears the selection. Bench or
        unknown players are ignored.

        Returns:
            The selected outgoing player id, or None
        """
        player = state.players.get(player_id)
        if player is None or not player.on_field:
            return self.selected_out_id
        self.selected_out_id = None if self.selected_out_id == player_id else player_id
        return self.selected_out_id

    def propose_swap(self, state: MatchState, out_id: int, in_id: int) -> Optional[SwapProposal]:
        """
        Store a swap proposal if the pair is currently legal.

        Returns:
            The stored proposal, or None when the pair was dropped
        """
        if not self.is_legal(state, out_id, in_id):
            logger.debug("Dropping swap proposal %s -> %s", out_id, in_id)
            return None
        self.pending = SwapProposal(out_id=out_id, in_id=in_id)
        return self.pending

    def propose_incoming(self, state: MatchState, in_id: int) -> Optional[SwapProposal]:
        """Propose a swap between the selected outgoing player and ``in_id``."""
        if self.selected_out_id is None:
            return None
        return self.propose_swap(state, self.selected_out_id, in_id)

    def confirm_swap(self, state: MatchState) -> bool:
        """
        Apply the pending proposal at the current (clamped) match time.

        Preconditions are checked again against ``state``; a proposal that
        became illegal since it was made is dropped without touching the
        state or the undo snapshot.

        Returns:
            True if the swap was applied
        """
        proposal = self.pending
        self.pending = None
        self.selected_out_id = None
        if proposal is None:
            return False
        if not self.is_legal(state, proposal.out_id, proposal.in_id):
            logger.debug("Dropping stale swap %s -> %s", proposal.out_id, proposal.in_id)
            return False

        at_time = state.clamped_time()
        self._snapshot = state.copy()

        out_state = state.players[proposal.out_id]
        in_state = state.players[proposal.in_id]
        IntervalLedger.close_open_interval(out_state.intervals, state.half, at_time)
        IntervalLedger.open_interval(in_state.intervals, state.half, at_time)
        out_state.on_field = False
        in_state.on_field = True

        logger.info(
            "Match %s: player %s off, player %s on at half %s %ss",
            state.match_id, proposal.out_id, proposal.in_id, state.half, at_time,
        )
        return True

    def cancel_swap(self) -> None:
        """Discard the pending proposal, keeping the outgoing selection."""
        self.pending = None

    def undo(self) -> Optional[MatchState]:
        """
        Take the snapshot of the state before the last swap.

        Returns:
            The pre-swap state, or None if there is nothing to undo
        """
        snapshot = self._snapshot
        self._snapshot = None
        self.pending = None
        self.selected_out_id = None
        return snapshot

    def clear(self) -> None:
        """Forget selection, proposal and undo snapshot."""
        self.selected_out_id = None
        self.pending = None
        self._snapshot = None
