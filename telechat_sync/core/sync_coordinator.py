"""
The main orchestrator: prepares date directories and fans document retrievals
out over a bounded pool of workers.
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from telechat_sync.documents.downloader import DocumentDownloader
from telechat_sync.exceptions import DirectoryCreationError
from telechat_sync.models.agenda import Agenda
from telechat_sync.models.config import DEFAULT_ITEM_TIMEOUT, DEFAULT_MAX_WORKERS
from telechat_sync.models.outcome import FetchOutcome, OutcomeStatus
from telechat_sync.models.stats import SyncStats
from telechat_sync.utils.path import create_dir, date_directory

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkItem:
    date_key: str
    identifier: str


class SyncCoordinator:
    """
    Orchestrates one synchronization of an agenda into a base directory.

    Every (date, document) pair in the agenda yields exactly one outcome:
    downloaded, already existed, failed, or timed out. Per-document problems
    never abort the run; only directory preparation failures do.
    """

    def __init__(
        self,
        downloader: DocumentDownloader,
        max_workers: int = DEFAULT_MAX_WORKERS,
        item_timeout: float = DEFAULT_ITEM_TIMEOUT,
    ):
        self.downloader = downloader
        self.max_workers = max_workers
        self.item_timeout = item_timeout
        self.stats = SyncStats()
        self.outcomes: list[FetchOutcome] = []

    def prepare_directories(self, base_dir: Path, agenda: Agenda) -> None:
        """
        Ensures base_dir/<date> exists for every date on the agenda.

        Raises:
            DirectoryCreationError: For anything other than the directory
            already existing.
        """
        for date_key in agenda.dates:
            directory = date_directory(base_dir, date_key)
            try:
                create_dir(directory)
            except OSError as e:
                raise DirectoryCreationError(f"Error making {directory}: {e}") from e
            log.debug(f"Directory ready: {directory}")

    async def sync_all(self, base_dir: Path, agenda: Agenda) -> list[str]:
        """
        Downloads every document on the agenda and returns one outcome line per
        document, in arrival order.
        """
        self.stats = SyncStats()
        self.outcomes = []
        self.prepare_directories(base_dir, agenda)

        work: asyncio.Queue[WorkItem] = asyncio.Queue()
        for date_key, identifier in agenda.iter_documents():
            work.put_nowait(WorkItem(date_key, identifier))

        total = work.qsize()
        if not total:
            log.info("No documents on the agenda. Nothing to do.")
            return []

        results: asyncio.Queue[FetchOutcome] = asyncio.Queue()
        worker_count = min(self.max_workers, total)
        log.info(f"Fetching {total} documents with {worker_count} workers...")

        async with self.downloader:
            workers = [
                asyncio.create_task(self._worker(base_dir, work, results))
                for _ in range(worker_count)
            ]
            collected: list[FetchOutcome] = []
            try:
                while len(collected) < total:
                    outcome = await results.get()
                    self._record(outcome)
                    collected.append(outcome)
            finally:
                for worker in workers:
                    worker.cancel()
                await asyncio.gather(*workers, return_exceptions=True)

        return [str(outcome) for outcome in collected]

    async def _worker(
        self,
        base_dir: Path,
        work: "asyncio.Queue[WorkItem]",
        results: "asyncio.Queue[FetchOutcome]",
    ) -> None:
        while True:
            try:
                item = work.get_nowait()
            except asyncio.QueueEmpty:
                return
            outcome = await self._fetch_with_deadline(base_dir, item)
            results.put_nowait(outcome)

    async def _fetch_with_deadline(self, base_dir: Path, item: WorkItem) -> FetchOutcome:
        """Runs one retrieval, cancelling it if it outlives the per-item timeout."""
        try:
            return await asyncio.wait_for(
                self.downloader.fetch_document(base_dir, item.date_key, item.identifier),
                timeout=self.item_timeout,
            )
        except asyncio.TimeoutError:
            return FetchOutcome.timed_out(item.date_key, item.identifier)
        except Exception as e:
            log.error(
                f"[red]✗ An unexpected error occurred for '{item.identifier}': {e}[/red]",
                exc_info=log.getEffectiveLevel() == logging.DEBUG,
            )
            return FetchOutcome.failed(
                item.date_key, item.identifier, f"Error fetching {item.identifier}: {e}"
            )

    def _record(self, outcome: FetchOutcome) -> None:
        self.outcomes.append(outcome)
        self.stats.record(outcome)
        if outcome.status in (OutcomeStatus.FAILED, OutcomeStatus.TIMED_OUT):
            log.debug(f"{outcome.status.value}: {outcome.message}")
