"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class TelechatSyncError(Exception):
    """Base exception for all application-specific errors."""


class ConfigurationError(TelechatSyncError):
    """Raised for issues related to configuration loading or validation."""


class AgendaFetchError(TelechatSyncError):
    """Raised when the agenda could not be retrieved from the remote source."""


class AgendaDecodeError(TelechatSyncError):
    """Raised when the agenda payload does not have the expected structure."""


class DirectoryCreationError(TelechatSyncError):
    """Raised when a per-date destination directory cannot be created."""
