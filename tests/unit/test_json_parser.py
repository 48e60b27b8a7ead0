import json

import pytest

from telechat_sync.agenda.json_parser import parse_agenda_json, parse_agenda_payload
from telechat_sync.agenda.source import decode_agenda, detect_format
from telechat_sync.exceptions import AgendaDecodeError
from telechat_sync.models.agenda import UNKNOWN_DATE


class TestParseAgendaJson:
    """Unit tests for agenda.json decoding"""

    def test_documents_named_with_revision(self, agenda_json):
        agenda = parse_agenda_json(agenda_json)
        assert agenda.to_dict() == {
            "2024-01-11": [
                "draft-ietf-foo-bar-05",
                "draft-ietf-baz-qux-12",
                "draft-smith-widgets-00",
            ]
        }

    def test_integer_revision_is_zero_padded(self):
        data = {
            "telechat-date": "2024-01-11",
            "sections": {"2.1.1": {"docs": [{"docname": "draft-a", "rev": 3}]}},
        }
        assert parse_agenda_payload(data).documents("2024-01-11") == ["draft-a-03"]

    def test_blank_date_maps_to_unknown_date(self):
        data = {
            "telechat-date": "  ",
            "sections": {"2.1.1": {"docs": [{"docname": "draft-a", "rev": "01"}]}},
        }
        assert parse_agenda_payload(data).to_dict() == {UNKNOWN_DATE: ["draft-a-01"]}

    def test_sections_without_documents(self):
        data = {"telechat-date": "2024-01-11", "sections": {"1": {"title": "Admin"}}}
        assert parse_agenda_payload(data).document_count == 0


class TestMalformedAgendaJson:
    """Payloads missing required structure must fail the whole decode"""

    def test_missing_telechat_date(self):
        with pytest.raises(AgendaDecodeError):
            parse_agenda_json(json.dumps({"sections": {}}))

    def test_missing_sections(self):
        with pytest.raises(AgendaDecodeError):
            parse_agenda_json(json.dumps({"telechat-date": "2024-01-11"}))

    def test_sections_of_wrong_shape(self):
        with pytest.raises(AgendaDecodeError):
            parse_agenda_json(
                json.dumps({"telechat-date": "2024-01-11", "sections": ["2.1.1"]})
            )

    def test_document_without_revision(self):
        payload = {
            "telechat-date": "2024-01-11",
            "sections": {"2.1.1": {"docs": [{"docname": "draft-a"}]}},
        }
        with pytest.raises(AgendaDecodeError):
            parse_agenda_json(json.dumps(payload))

    def test_top_level_not_an_object(self):
        with pytest.raises(AgendaDecodeError):
            parse_agenda_json("[1, 2, 3]")

    def test_invalid_json(self):
        with pytest.raises(AgendaDecodeError):
            parse_agenda_json("{not json")


class TestFormatDetection:
    def test_json_content_type(self):
        assert detect_format("application/json; charset=utf-8", "") == "json"

    def test_json_body_sniffed(self):
        assert detect_format("text/plain", '  {"a": 1}') == "json"

    def test_html_fallback(self):
        assert detect_format("text/html", "<html></html>") == "html"

    def test_forced_format_wins(self, agenda_html):
        with pytest.raises(AgendaDecodeError):
            decode_agenda(agenda_html, "json")

    def test_unsupported_format(self):
        with pytest.raises(AgendaDecodeError):
            decode_agenda("{}", "yaml")
