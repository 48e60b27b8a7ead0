"""
Utilities for handling base directories and per-document destination paths.
"""

from pathlib import Path

from pathvalidate import sanitize_filename

from telechat_sync.models.agenda import UNKNOWN_DATE


def create_dir(directory_path: Path) -> None:
    """
    Creates a single directory if it does not already exist.

    The parent must exist. A non-directory already occupying the path raises
    FileExistsError.
    """
    directory_path.mkdir(exist_ok=True)


def date_directory(base_dir: Path, date_key: str) -> Path:
    """Returns the directory holding the documents for one telechat date."""
    # Keys such as "." sanitize to nothing and would alias base_dir itself.
    name = sanitize_filename(date_key, platform="auto") or UNKNOWN_DATE
    return base_dir / name


def document_path(base_dir: Path, date_key: str, identifier: str) -> Path:
    """Returns base/date/identifier.pdf."""
    filename = sanitize_filename(f"{identifier}.pdf", platform="auto")
    return date_directory(base_dir, date_key) / filename
