"""
Fetches the IESG agenda from the datatracker and decodes it into an Agenda.
"""

import asyncio
import logging

import aiohttp

from telechat_sync.exceptions import AgendaDecodeError, AgendaFetchError
from telechat_sync.models.agenda import Agenda

from .html_parser import parse_agenda_html
from .json_parser import parse_agenda_json

log = logging.getLogger(__name__)

_USER_AGENT = "telechat-sync (+https://datatracker.ietf.org/iesg/agenda/)"


def detect_format(content_type: str, body: str) -> str:
    """Picks 'json' or 'html' for an agenda response whose format was not configured."""
    if "json" in content_type.lower() or body.lstrip().startswith("{"):
        return "json"
    return "html"


def decode_agenda(body: str, agenda_format: str = "auto", content_type: str = "") -> Agenda:
    """
    Decodes an agenda body. Pure: the result depends only on the arguments.

    Raises:
        AgendaDecodeError: If the body does not have the expected structure.
    """
    if agenda_format == "auto":
        agenda_format = detect_format(content_type, body)

    if agenda_format == "json":
        return parse_agenda_json(body)
    if agenda_format == "html":
        return parse_agenda_html(body)
    raise AgendaDecodeError(f"Unsupported agenda format: '{agenda_format}'.")


class AgendaSource:
    """
    Retrieves the telechat agenda and produces the date -> documents mapping.

    One request is made per fetch; nothing is cached between calls.
    """

    def __init__(self, agenda_format: str = "auto", timeout: float = 30):
        self.agenda_format = agenda_format
        self.timeout = aiohttp.ClientTimeout(total=timeout, connect=15)

    async def fetch(self, url: str) -> Agenda:
        """
        Fetches and decodes the agenda at `url`.

        Raises:
            AgendaFetchError: On connection failures, timeouts or non-2xx responses.
            AgendaDecodeError: If the response is not a recognisable agenda.
        """
        body, content_type = await self._download(url)
        agenda = decode_agenda(body, self.agenda_format, content_type)
        log.info(
            f"Agenda lists {agenda.document_count} documents across "
            f"{len(agenda)} telechat dates."
        )
        return agenda

    async def _download(self, url: str) -> tuple[str, str]:
        log.debug(f"Fetching agenda from {url}")
        try:
            async with aiohttp.ClientSession(
                timeout=self.timeout, headers={"User-Agent": _USER_AGENT}
            ) as session:
                async with session.get(url) as response:
                    response.raise_for_status()
                    raw = await response.read()
                    content_type = response.headers.get("Content-Type", "")
                    charset = response.charset or "utf-8"
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise AgendaFetchError(f"Could not fetch agenda from {url}: {e}") from e

        try:
            body = raw.decode(charset)
        except (UnicodeDecodeError, LookupError) as e:
            raise AgendaDecodeError(f"Agenda response is not valid text: {e}") from e

        log.debug(f"Fetched agenda ({len(raw)} bytes, '{content_type}').")
        return body, content_type
