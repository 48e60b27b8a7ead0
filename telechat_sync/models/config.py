"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

# Where the IESG agenda lives.
DEFAULT_AGENDA_URL = "https://datatracker.ietf.org/iesg/agenda/agenda.json"

# Where the PDF versions of drafts live.
DEFAULT_DOCUMENT_BASE_URL = "https://tools.ietf.org/pdf/"

DEFAULT_ITEM_TIMEOUT = 10.0
DEFAULT_MAX_WORKERS = 8

AGENDA_FORMATS = ("auto", "html", "json")


class SyncConfig(BaseModel):
    """A validated configuration model for the application."""

    # Destination
    base_dir: str = ""

    # Sources
    agenda_url: str = DEFAULT_AGENDA_URL
    document_base_url: str = DEFAULT_DOCUMENT_BASE_URL
    agenda_format: str = "auto"

    # Download Settings
    max_workers: int = DEFAULT_MAX_WORKERS
    item_timeout: float = DEFAULT_ITEM_TIMEOUT

    # Internal fields not loaded from INI file
    config_path: str = Field("", repr=False)

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @field_validator("base_dir")
    @classmethod
    def validate_base_dir(cls, v: str) -> str:
        """Expands a leading '~' and ensures the directory already exists."""
        if not v:
            return v
        path = Path(v).expanduser()
        if not path.is_dir():
            raise ValueError(f"Base directory '{path}' does not exist or is not a directory.")
        return str(path)

    @field_validator("agenda_url", "document_base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"'{v}' is not an http(s) URL.")
        return v

    @field_validator("document_base_url")
    @classmethod
    def normalize_document_base_url(cls, v: str) -> str:
        """Document URLs are built by appending '<identifier>.pdf' to this base."""
        return v if v.endswith("/") else v + "/"

    @field_validator("agenda_format")
    @classmethod
    def validate_agenda_format(cls, v: str) -> str:
        v = v.lower()
        if v not in AGENDA_FORMATS:
            raise ValueError(f"Agenda format must be one of: {', '.join(AGENDA_FORMATS)}.")
        return v

    @field_validator("max_workers")
    @classmethod
    def validate_workers(cls, v: int) -> int:
        """Ensures a reasonable number of workers."""
        if v < 1 or v > 64:
            raise ValueError("Max workers must be between 1 and 64.")
        return v

    @field_validator("item_timeout")
    @classmethod
    def validate_item_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Per-document timeout must be greater than zero.")
        return v

    @property
    def base_path(self) -> Path:
        return Path(self.base_dir)

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        internal_fields = {"config_path"}
        return {key for key in cls.model_fields if key not in internal_fields}
