"""
Data Models Layer.

This package contains the core data structures used throughout the
application: the agenda, retrieval outcomes, statistics, and configuration.
"""

from .agenda import UNKNOWN_DATE, Agenda
from .config import SyncConfig
from .outcome import FetchOutcome, OutcomeStatus
from .stats import SyncStats

__all__ = [
    "UNKNOWN_DATE",
    "Agenda",
    "FetchOutcome",
    "OutcomeStatus",
    "SyncConfig",
    "SyncStats",
]
