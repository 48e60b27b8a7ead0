"""
Parses the datatracker's HTML agenda page into an Agenda.

The page lists each telechat under an <h2> heading ("IESG telechat
2017-04-27") followed by links to the documents on that telechat. This relies
upon the format of the page not changing much.
"""

import logging
import re

from bs4 import BeautifulSoup

from telechat_sync.models.agenda import UNKNOWN_DATE, Agenda

log = logging.getLogger(__name__)

_TELECHAT_HEADING_REGEX = re.compile(
    r"IESG telechat\s+(?P<date>.+?)\.?\s*$", re.IGNORECASE
)
_DOC_HREF_PREFIX = "/doc/draft"
_DRAFT_PREFIX = "draft-"


def extract_date(heading: str) -> str:
    """
    Parses out the date from a telechat heading.

    "IESG telechat 2017-04-27." -> "2017-04-27"

    Headings that carry no date map to UNKNOWN_DATE so their documents are
    still placed somewhere.
    """
    match = _TELECHAT_HEADING_REGEX.search(heading.strip())
    if not match:
        log.warning(f"[yellow]Was not able to extract a date from '{heading}'.[/yellow]")
        return UNKNOWN_DATE
    return match.group("date").strip()


def extract_document(text: str) -> str | None:
    """Returns the link text if it names an Internet-Draft."""
    text = text.strip()
    return text if text.startswith(_DRAFT_PREFIX) else None


def _is_document_link(tag) -> bool:
    return tag.get("href", "").startswith(_DOC_HREF_PREFIX)


def parse_agenda_html(html: str) -> Agenda:
    """Walks headings and document links in page order and groups drafts by date."""
    soup = BeautifulSoup(html, "html.parser")
    agenda = Agenda()

    # Documents listed before the first telechat heading still need a home.
    date_key = UNKNOWN_DATE

    for tag in soup.find_all(["h2", "a"]):
        if tag.name == "h2":
            date_key = extract_date(tag.get_text(" ", strip=True))
            continue

        if not _is_document_link(tag):
            continue
        docname = extract_document(tag.get_text(strip=True))
        if docname and agenda.add(date_key, docname):
            log.debug(f"Found a new document: {docname} on {date_key}")

    return agenda
