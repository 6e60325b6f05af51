from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clndir.errors import DeletionError


@dataclass(frozen=True)
class Configuration:
    target_directory: Path
    age_threshold: timedelta = timedelta(days=180)
    skip_patterns: tuple[str, ...] = ()
    confirm_required: bool = True

    @property
    def age_days(self) -> int:
        return self.age_threshold.days


@dataclass(frozen=True)
class DirectoryEntry:
    path: Path
    last_modified: datetime  # UTC, snapshot taken at scan time
    is_dir: bool = False

    @property
    def name(self) -> str:
        return self.path.name

    def age(self, now: datetime) -> timedelta:
        return now - self.last_modified


@dataclass
class DeletionReport:
    deleted: list[DirectoryEntry] = field(default_factory=list)
    failures: list[DeletionError] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return len(self.deleted)

    @property
    def failed(self) -> int:
        return len(self.failures)


class RunOutcome(enum.Enum):
    DONE = "done"
    ABORTED = "aborted"
    NOTHING_TO_DO = "nothing_to_do"
