"""
Agenda Layer.

This package fetches the IESG telechat agenda and decodes it, from either the
HTML documents page or agenda.json, into an Agenda.
"""

from .html_parser import parse_agenda_html
from .json_parser import parse_agenda_json
from .source import AgendaSource, decode_agenda

__all__ = ["AgendaSource", "decode_agenda", "parse_agenda_html", "parse_agenda_json"]
