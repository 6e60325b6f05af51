from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Sequence
from datetime import datetime
from typing import IO, Protocol

from rich.console import Console
from rich.markup import escape

from clndir.errors import DeletionError
from clndir.models import Configuration, DeletionReport, DirectoryEntry, RunOutcome

DATE_FORMAT = "%Y-%m-%d"
AFFIRMATIVE_ANSWERS = {"y", "yes"}

logger = logging.getLogger(__name__)


class Confirmer(Protocol):
    def ask(self, candidates: Sequence[DirectoryEntry]) -> bool:
        ...


class ConsoleConfirmer:
    """Print the candidate list and ask for a yes/no answer on the console.

    Only ``y`` or ``yes`` (any case) confirms. Anything else, including end of
    input, declines.
    """

    def __init__(
        self,
        now: datetime,
        console: Console | None = None,
        stream: IO[str] | None = None,
    ) -> None:
        self.now = now
        self.console = console or Console(highlight=False)
        self.stream = stream

    def ask(self, candidates: Sequence[DirectoryEntry]) -> bool:
        for entry in candidates:
            self.console.print(describe_entry(entry, self.now), soft_wrap=True)
        self.console.print()
        prompt = f"Delete these {_count(len(candidates))}? [bold red]\\[y/N][/bold red] "
        try:
            answer = self.console.input(prompt, stream=self.stream)
        except EOFError:
            return False
        return answer.strip().lower() in AFFIRMATIVE_ANSWERS


def describe_entry(entry: DirectoryEntry, now: datetime) -> str:
    """Rich markup line showing when an entry was modified and its path."""
    date = entry.last_modified.strftime(DATE_FORMAT)
    days = entry.age(now).days
    path = escape(str(entry.path)) + ("/" if entry.is_dir else "")
    return f"Last Modified [green]{date}[/green] ({days} days) - [yellow]{path}[/yellow]"


def delete_candidates(candidates: Sequence[DirectoryEntry]) -> DeletionReport:
    """Delete every candidate in order; a failure never stops the batch."""
    report = DeletionReport()
    for entry in candidates:
        try:
            _remove(entry)
        except OSError as exc:
            error = DeletionError(entry, exc)
            logger.debug("%s", error)
            report.failures.append(error)
            continue
        logger.debug("Deleted %s", entry.path)
        report.deleted.append(entry)
    return report


def _remove(entry: DirectoryEntry) -> None:
    if entry.is_dir:
        shutil.rmtree(entry.path)
    else:
        os.unlink(entry.path)


def run(
    candidates: Sequence[DirectoryEntry],
    config: Configuration,
    confirmer: Confirmer,
    console: Console | None = None,
    err_console: Console | None = None,
) -> tuple[RunOutcome, DeletionReport]:
    console = console or Console(highlight=False)
    err_console = err_console or Console(stderr=True, highlight=False)

    if not candidates:
        console.print(
            f"Nothing to delete: no entries older than {config.age_days} days in "
            f"{escape(str(config.target_directory))}",
            soft_wrap=True,
        )
        return RunOutcome.NOTHING_TO_DO, DeletionReport()

    if config.confirm_required and not confirmer.ask(candidates):
        console.print("Deletion canceled by user")
        return RunOutcome.ABORTED, DeletionReport()

    report = delete_candidates(candidates)
    for failure in report.failures:
        err_console.print(escape(str(failure)), soft_wrap=True)
    console.print(f"{_count(report.succeeded)} deleted")
    if report.failed:
        err_console.print(f"[red]{report.failed} failed[/red]")
    return RunOutcome.DONE, report


def _count(n: int) -> str:
    return f"{n} entry" if n == 1 else f"{n} entries"
