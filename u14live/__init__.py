"""
U14 Live

Offline match tracker for youth soccer: pick the squad and starting XI,
track substitutions and per-player playing time across two halves, then
export minutes per player.

The core is the live match state machine (interval ledger, match clock,
substitution engine); the Flask API in :mod:`u14live.ui` drives it.
"""
from .models import Player, PlayerLiveState, MatchSheet, MatchState, IntervalLedger
from .services import (
    JsonFileStore, MatchClock, SubstitutionEngine, LiveMatchService,
    RosterService, MatchSheetService, MatchExportService, ServiceFactory
)
from .utils import fmt_mmss, APP_TITLE, HALF_DURATION_SECONDS

__version__ = "1.0.0"

__all__ = [
    "Player", "PlayerLiveState", "MatchSheet", "MatchState", "IntervalLedger",
    "JsonFileStore", "MatchClock", "SubstitutionEngine", "LiveMatchService",
    "RosterService", "MatchSheetService", "MatchExportService", "ServiceFactory",
    "fmt_mmss", "APP_TITLE", "HALF_DURATION_SECONDS"
]
