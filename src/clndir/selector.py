from __future__ import annotations

import fnmatch
import logging
from collections.abc import Iterable
from datetime import datetime

from clndir.models import Configuration, DirectoryEntry

logger = logging.getLogger(__name__)


def select_candidates(
    entries: Iterable[DirectoryEntry],
    config: Configuration,
    now: datetime,
) -> list[DirectoryEntry]:
    """Keep entries strictly older than the threshold that no skip pattern names.

    Scan order is preserved.
    """
    candidates: list[DirectoryEntry] = []
    for entry in entries:
        if entry.age(now) <= config.age_threshold:
            continue
        if _matches_any(entry.name, config.skip_patterns):
            logger.debug("Skipping %s (matches skip pattern)", entry.name)
            continue
        candidates.append(entry)
    logger.debug("Selected %d candidates", len(candidates))
    return candidates


def matches(filename: str, pattern: str) -> bool:
    """Case-insensitive glob match against a base filename."""
    return fnmatch.fnmatchcase(filename.lower(), pattern.lower())


def _matches_any(filename: str, patterns: Iterable[str]) -> bool:
    return any(matches(filename, pattern) for pattern in patterns)
