"""
Models package for the U14 Live match tracker.

This package contains the core data models used throughout the application.
"""
from .player import Player, PlayerLiveState
from .interval import Interval, OpenInterval, ClosedInterval, interval_from_dict
from .interval_ledger import IntervalLedger
from .match_sheet import MatchSheet
from .match_state import MatchMeta, MatchState
from .match_export import MatchExport, PlayerExportRow

__all__ = [
    "Player", "PlayerLiveState", "Interval", "OpenInterval", "ClosedInterval",
    "interval_from_dict", "IntervalLedger", "MatchSheet", "MatchMeta", "MatchState",
    "MatchExport", "PlayerExportRow"
]
