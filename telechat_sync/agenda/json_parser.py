"""
Parses the datatracker's JSON agenda (agenda.json) into an Agenda.
"""

import json
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from telechat_sync.exceptions import AgendaDecodeError
from telechat_sync.models.agenda import UNKNOWN_DATE, Agenda

log = logging.getLogger(__name__)


class AgendaDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    docname: str
    rev: str

    @field_validator("rev", mode="before")
    @classmethod
    def coerce_rev(cls, v: Any) -> Any:
        # Revisions are zero-padded strings, but tolerate bare integers.
        if isinstance(v, int) and not isinstance(v, bool):
            return f"{v:02}"
        return v

    @property
    def identifier(self) -> str:
        return f"{self.docname}-{self.rev}"


class AgendaSection(BaseModel):
    model_config = ConfigDict(extra="ignore")

    docs: list[AgendaDocument] = Field(default_factory=list)


class AgendaPayload(BaseModel):
    """The parts of agenda.json this tool depends on."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    telechat_date: str = Field(alias="telechat-date")
    sections: dict[str, AgendaSection]


def parse_agenda_payload(data: Any) -> Agenda:
    """Validates decoded JSON data and builds the agenda from it."""
    try:
        payload = AgendaPayload.model_validate(data)
    except ValidationError as e:
        raise AgendaDecodeError(f"Unexpected agenda structure:\n{e}") from e

    date_key = payload.telechat_date.strip() or UNKNOWN_DATE
    agenda = Agenda()
    for section_id, section in payload.sections.items():
        for doc in section.docs:
            if agenda.add(date_key, doc.identifier):
                log.debug(
                    f"Found a new document: {doc.identifier} on {date_key} "
                    f"(section {section_id})"
                )
    return agenda


def parse_agenda_json(text: str) -> Agenda:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise AgendaDecodeError(f"Agenda is not valid JSON: {e}") from e
    return parse_agenda_payload(data)
