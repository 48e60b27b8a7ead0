"""
Dataclass for tracking sync session statistics.
"""

import time
from dataclasses import dataclass, field

from .outcome import FetchOutcome, OutcomeStatus


@dataclass
class SyncStats:
    """Tracks statistics for a sync session."""

    documents_downloaded: int = 0
    documents_existed: int = 0
    documents_failed: int = 0
    documents_timed_out: int = 0
    total_size_downloaded: int = 0
    dates_processed: set[str] = field(default_factory=set)
    _started_at: float = field(default_factory=time.monotonic, repr=False)

    def record(self, outcome: FetchOutcome) -> None:
        """Folds a single retrieval outcome into the counters."""
        self.dates_processed.add(outcome.date_key)
        if outcome.status is OutcomeStatus.DOWNLOADED:
            self.documents_downloaded += 1
            self.total_size_downloaded += outcome.bytes_written
        elif outcome.status is OutcomeStatus.EXISTED:
            self.documents_existed += 1
        elif outcome.status is OutcomeStatus.TIMED_OUT:
            self.documents_timed_out += 1
        else:
            self.documents_failed += 1

    @property
    def total(self) -> int:
        return (
            self.documents_downloaded
            + self.documents_existed
            + self.documents_failed
            + self.documents_timed_out
        )

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self._started_at
