"""
The date-keyed collection of documents scheduled on telechat agendas.
"""

from typing import Iterator, Mapping, Sequence

# Date key used when a document is found before any telechat date is known.
UNKNOWN_DATE = "Unknown-date"


class Agenda:
    """
    Maps telechat date keys to ordered lists of document identifiers.

    Identifiers are unique within a date key. The same identifier may be listed
    under several dates; each listing is kept so the document lands in every
    date directory it belongs to.
    """

    def __init__(self) -> None:
        self._documents: dict[str, list[str]] = {}

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Sequence[str]]) -> "Agenda":
        """Builds an agenda from a plain {date: [identifier, ...]} mapping."""
        agenda = cls()
        for date_key, identifiers in mapping.items():
            agenda._documents.setdefault(date_key, [])
            for identifier in identifiers:
                agenda.add(date_key, identifier)
        return agenda

    def add(self, date_key: str, identifier: str) -> bool:
        """Adds a document under a date. Returns False if it was already listed there."""
        documents = self._documents.setdefault(date_key, [])
        if identifier in documents:
            return False
        documents.append(identifier)
        return True

    @property
    def dates(self) -> list[str]:
        return list(self._documents)

    def documents(self, date_key: str) -> list[str]:
        return list(self._documents.get(date_key, []))

    def iter_documents(self) -> Iterator[tuple[str, str]]:
        """Yields (date_key, identifier) pairs in insertion order."""
        for date_key, identifiers in self._documents.items():
            for identifier in identifiers:
                yield date_key, identifier

    @property
    def document_count(self) -> int:
        return sum(len(identifiers) for identifiers in self._documents.values())

    def to_dict(self) -> dict[str, list[str]]:
        return {date_key: list(ids) for date_key, ids in self._documents.items()}

    def __len__(self) -> int:
        return len(self._documents)

    def __bool__(self) -> bool:
        return self.document_count > 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Agenda):
            return NotImplemented
        return self._documents == other._documents

    def __repr__(self) -> str:
        return f"Agenda({self._documents!r})"
