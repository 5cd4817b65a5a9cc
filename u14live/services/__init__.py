"""
Services package for the U14 Live match tracker.

This package contains service classes that handle business logic.
"""
from .persistence_service import PersistenceStore, JsonFileStore
from .match_clock import ClockStatus, ClockDriver, ManualClockDriver, MatchClock
from .substitution_engine import SubstitutionEngine, SwapProposal
from .live_match_service import LiveMatchService
from .roster_service import RosterService
from .sheet_service import MatchSheetService
from .export_service import MatchExportService
from .service_factory import ServiceFactory

__all__ = [
    "PersistenceStore", "JsonFileStore", "ClockStatus", "ClockDriver",
    "ManualClockDriver", "MatchClock", "SubstitutionEngine", "SwapProposal",
    "LiveMatchService", "RosterService", "MatchSheetService",
    "MatchExportService", "ServiceFactory"
]
