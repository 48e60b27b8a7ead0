"""
Handles the low-level downloading of a single draft PDF into its date directory.
"""

import asyncio
import logging
from pathlib import Path

import aiofiles
import aiohttp

from telechat_sync.models.config import DEFAULT_DOCUMENT_BASE_URL
from telechat_sync.models.outcome import FetchOutcome
from telechat_sync.utils.path import document_path

log = logging.getLogger(__name__)


class DocumentDownloader:
    """
    Downloads documents over a shared connection pool.

    Use as an async context manager; the pool is opened on entry and closed on
    exit. Failures are reported as FetchOutcome values, never raised.
    """

    CHUNK_SIZE = 131072  # 128 KB

    def __init__(
        self,
        document_base_url: str = DEFAULT_DOCUMENT_BASE_URL,
        max_workers: int = 8,
    ):
        self.document_base_url = document_base_url
        self.max_workers = max_workers
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "DocumentDownloader":
        connector = aiohttp.TCPConnector(
            limit=self.max_workers,
            limit_per_host=self.max_workers,
            ttl_dns_cache=600,
            enable_cleanup_closed=True,
        )
        self._session = aiohttp.ClientSession(
            connector=connector,
            timeout=aiohttp.ClientTimeout(total=None, sock_connect=15, sock_read=90),
        )
        log.debug(f"Created download pool with limit={self.max_workers}")
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
            log.debug("Download connection pool closed.")
        self._session = None

    def document_url(self, identifier: str) -> str:
        return f"{self.document_base_url}{identifier}.pdf"

    async def fetch_document(
        self, base_dir: Path, date_key: str, identifier: str
    ) -> FetchOutcome:
        """
        Fetches one document into base_dir/date_key/identifier.pdf.

        A file already at the destination is never re-downloaded. A failed copy
        leaves whatever was written on disk.
        """
        if self._session is None:
            raise RuntimeError("DocumentDownloader must be entered before use.")

        destination = document_path(base_dir, date_key, identifier)
        url = self.document_url(identifier)

        if await asyncio.to_thread(destination.exists):
            return FetchOutcome.existed(date_key, identifier)

        try:
            output = await aiofiles.open(destination, "xb")
        except FileExistsError:
            # Another retrieval created it between the check and the open.
            return FetchOutcome.existed(date_key, identifier)
        except OSError as e:
            return FetchOutcome.failed(
                date_key, identifier, f"Error creating {destination}: {e}"
            )

        try:
            async with self._session.get(url, allow_redirects=True) as response:
                response.raise_for_status()
                try:
                    written = await self._stream_to_file(response, output)
                except (aiohttp.ClientError, OSError) as e:
                    return FetchOutcome.failed(
                        date_key, identifier, f"Error while downloading: {url} - {e}"
                    )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            return FetchOutcome.failed(
                date_key, identifier, f"Error while downloading {url}: {e}"
            )
        finally:
            await output.close()

        log.debug(f"Wrote {written} bytes to '{destination}'.")
        return FetchOutcome.downloaded(date_key, identifier, written)

    async def _stream_to_file(self, response: aiohttp.ClientResponse, output) -> int:
        written = 0
        async for chunk in response.content.iter_chunked(self.CHUNK_SIZE):
            await output.write(chunk)
            written += len(chunk)
        return written
