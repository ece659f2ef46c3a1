"""
Error kinds raised by the song library core.

Each failure is reported with exactly one of these kinds so the HTTP
layer can translate it to a distinct status code.  None of them is
retried or recovered locally.
"""

from typing import Optional


class SongLibraryError(Exception):
    """Base class for song library errors."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class ValidationError(SongLibraryError):
    """Caller input (filter keys, pagination, identifiers) is malformed."""


class NotFoundError(SongLibraryError):
    """No song exists for the requested identifier."""


class StorageError(SongLibraryError):
    """The backing database rejected or failed to execute a statement."""


class EnrichmentError(SongLibraryError):
    """The metadata provider was unreachable or returned an unusable answer."""
