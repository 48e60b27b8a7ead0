"""
Result records produced by a single document retrieval.
"""

from dataclasses import dataclass
from enum import Enum


class OutcomeStatus(str, Enum):
    DOWNLOADED = "downloaded"
    EXISTED = "existed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class FetchOutcome:
    """The terminal report for one retrieval. `str()` gives the printable line."""

    status: OutcomeStatus
    date_key: str
    identifier: str
    message: str
    bytes_written: int = 0

    @property
    def filename(self) -> str:
        return f"{self.identifier}.pdf"

    def __str__(self) -> str:
        return self.message

    @classmethod
    def downloaded(
        cls, date_key: str, identifier: str, bytes_written: int
    ) -> "FetchOutcome":
        return cls(
            OutcomeStatus.DOWNLOADED,
            date_key,
            identifier,
            f"{date_key}: Downloaded {identifier}.pdf: {bytes_written} bytes.",
            bytes_written,
        )

    @classmethod
    def existed(cls, date_key: str, identifier: str) -> "FetchOutcome":
        return cls(
            OutcomeStatus.EXISTED,
            date_key,
            identifier,
            f"{date_key}: {identifier}.pdf already existed.",
        )

    @classmethod
    def failed(cls, date_key: str, identifier: str, message: str) -> "FetchOutcome":
        return cls(OutcomeStatus.FAILED, date_key, identifier, message)

    @classmethod
    def timed_out(cls, date_key: str, identifier: str) -> "FetchOutcome":
        return cls(
            OutcomeStatus.TIMED_OUT,
            date_key,
            identifier,
            f"Timeout downloading a draft: {date_key}/{identifier}.pdf",
        )
