import time

from telechat_sync.cli.formatters import print_summary_panel
from telechat_sync.models.agenda import UNKNOWN_DATE
from telechat_sync.models.outcome import FetchOutcome, OutcomeStatus
from telechat_sync.models.stats import SyncStats
from telechat_sync.utils.formatting import format_duration, format_size, pluralize
from telechat_sync.utils.path import date_directory, document_path


class TestFetchOutcome:
    """Unit tests for the printable outcome lines"""

    def test_downloaded_reports_bytes(self):
        outcome = FetchOutcome.downloaded("2024-01-10", "draft-foo-01", 2048)
        assert str(outcome) == "2024-01-10: Downloaded draft-foo-01.pdf: 2048 bytes."
        assert outcome.bytes_written == 2048
        assert outcome.filename == "draft-foo-01.pdf"

    def test_existed(self):
        outcome = FetchOutcome.existed("2024-01-10", "draft-foo-01")
        assert str(outcome) == "2024-01-10: draft-foo-01.pdf already existed."
        assert outcome.status is OutcomeStatus.EXISTED

    def test_timed_out(self):
        outcome = FetchOutcome.timed_out("2024-01-10", "draft-foo-01")
        assert str(outcome).startswith("Timeout downloading a draft")
        assert "2024-01-10/draft-foo-01.pdf" in str(outcome)


class TestSyncStats:
    def test_record_counts_each_status(self):
        stats = SyncStats()
        stats.record(FetchOutcome.downloaded("d1", "draft-a-01", 100))
        stats.record(FetchOutcome.downloaded("d2", "draft-b-01", 50))
        stats.record(FetchOutcome.existed("d1", "draft-c-01"))
        stats.record(FetchOutcome.failed("d2", "draft-d-01", "Error creating x: y"))
        stats.record(FetchOutcome.timed_out("d2", "draft-e-01"))

        assert stats.documents_downloaded == 2
        assert stats.documents_existed == 1
        assert stats.documents_failed == 1
        assert stats.documents_timed_out == 1
        assert stats.total_size_downloaded == 150
        assert stats.total == 5
        assert stats.dates_processed == {"d1", "d2"}

    def test_summary_reports_elapsed_time(self, capsys):
        stats = SyncStats()
        stats._started_at = time.monotonic() - 65
        stats.record(FetchOutcome.downloaded("d1", "draft-a-01", 100))

        print_summary_panel(stats)

        assert "1m 05s" in capsys.readouterr().out


class TestFormatting:
    def test_format_size(self):
        assert format_size(0) == "0 B"
        assert format_size(512) == "512.0 B"
        assert format_size(1536) == "1.5 KB"
        assert format_size(5 * 1024 * 1024) == "5.0 MB"

    def test_format_duration(self):
        assert format_duration(3.21) == "3.2s"
        assert format_duration(65) == "1m 05s"
        assert format_duration(3725) == "1h 02m 05s"

    def test_pluralize(self):
        assert pluralize(1, "document") == "1 document"
        assert pluralize(3, "date") == "3 dates"


class TestPaths:
    def test_document_path_layout(self, tmp_path):
        path = document_path(tmp_path, "2024-01-10", "draft-foo-01")
        assert path == tmp_path / "2024-01-10" / "draft-foo-01.pdf"

    def test_date_key_cannot_escape_base_dir(self, tmp_path):
        assert date_directory(tmp_path, "../../etc").parent == tmp_path

    def test_date_key_that_sanitizes_to_nothing(self, tmp_path):
        assert date_directory(tmp_path, ".") == tmp_path / UNKNOWN_DATE
        assert document_path(tmp_path, ".", "draft-foo-01").parent != tmp_path
