from __future__ import annotations

from pathlib import Path

from clndir.models import DirectoryEntry


class ClndirError(Exception):
    """Base class for errors raised by clndir."""


class ConfigurationError(ClndirError):
    """Command-line and environment input could not be resolved."""


class DirectoryAccessError(ClndirError):
    """The target directory is missing, not a directory, or unreadable."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{reason}: {path}")
        self.path = path
        self.reason = reason


class DeletionError(ClndirError):
    """A single entry could not be deleted.

    Collected by the executor instead of being raised, so one failure never
    stops the rest of the batch.
    """

    def __init__(self, entry: DirectoryEntry, cause: OSError) -> None:
        detail = cause.strerror or str(cause)
        super().__init__(f"Error deleting {entry.name}: {detail}")
        self.entry = entry
        self.cause = cause
