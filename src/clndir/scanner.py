from __future__ import annotations

import logging
import os
import stat
from datetime import datetime, timezone
from pathlib import Path

from clndir.errors import DirectoryAccessError
from clndir.models import DirectoryEntry

logger = logging.getLogger(__name__)


def scan_directory(directory: Path) -> list[DirectoryEntry]:
    """List the immediate entries of ``directory`` in listing order.

    Subdirectories are returned as entries but never descended into. Symbolic
    links are reported with their own modification time and are never treated
    as directories, whatever they point to.
    """
    entries: list[DirectoryEntry] = []
    try:
        if not stat.S_ISDIR(os.stat(directory).st_mode):
            raise DirectoryAccessError(directory, "Not a directory")
        with os.scandir(directory) as listing:
            for item in listing:
                entry = _entry_for(item)
                if entry is not None:
                    entries.append(entry)
    except FileNotFoundError as exc:
        raise DirectoryAccessError(directory, "Directory does not exist") from exc
    except PermissionError as exc:
        raise DirectoryAccessError(directory, "Permission denied") from exc
    except OSError as exc:
        raise DirectoryAccessError(directory, exc.strerror or "Cannot read directory") from exc

    logger.debug("Scanned %d entries in %s", len(entries), directory)
    return entries


def _entry_for(item: os.DirEntry[str]) -> DirectoryEntry | None:
    try:
        info = item.stat(follow_symlinks=False)
        is_dir = item.is_dir(follow_symlinks=False)
    except FileNotFoundError:
        logger.debug("Entry vanished during scan: %s", item.path)
        return None
    return DirectoryEntry(
        path=Path(item.path),
        last_modified=datetime.fromtimestamp(info.st_mtime, tz=timezone.utc),
        is_dir=is_dir,
    )
