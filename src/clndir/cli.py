from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone

from clndir import __version__
from clndir.config import DEFAULT_AGE_DAYS, DOWNLOADS_ENV_VAR, resolve_config
from clndir.errors import ConfigurationError, DirectoryAccessError
from clndir.executor import Confirmer, ConsoleConfirmer, run
from clndir.scanner import scan_directory
from clndir.selector import select_candidates

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clndir",
        description=(
            "Delete old entries from a directory. Defaults to the directory in the "
            f"{DOWNLOADS_ENV_VAR} environment variable and fails if neither --dir "
            "nor the variable is set. Lists the entries and asks for confirmation "
            "unless --nowarn is given. An old subdirectory is deleted with "
            "everything inside it, including recently modified files."
        ),
    )
    parser.add_argument("-d", "--dir", default=None, help="Target directory")
    parser.add_argument(
        "-a",
        "--age",
        default=None,
        help=f"Only delete entries older than this many days (default {DEFAULT_AGE_DAYS})",
    )
    parser.add_argument(
        "-s",
        "--skip",
        action="append",
        default=[],
        help="Filename glob to never delete (repeatable, e.g. '*.log')",
    )
    parser.add_argument(
        "-n",
        "--nowarn",
        action="store_true",
        help="Delete without listing entries or asking for confirmation",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each step")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(
    argv: Iterable[str] | None = None,
    environ: Mapping[str, str] | None = None,
    confirmer: Confirmer | None = None,
) -> int:
    args = build_parser().parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = resolve_config(
            directory=args.dir,
            age=args.age,
            skip=args.skip,
            nowarn=args.nowarn,
            environ=os.environ if environ is None else environ,
        )
        entries = scan_directory(config.target_directory)
    except (ConfigurationError, DirectoryAccessError) as exc:
        logger.debug("Aborting before any deletion", exc_info=True)
        raise SystemExit(f"Error: {exc}") from exc

    now = datetime.now(timezone.utc)
    candidates = select_candidates(entries, config, now)
    outcome, report = run(candidates, config, confirmer or ConsoleConfirmer(now))
    logger.debug(
        "Run finished: %s (%d deleted, %d failed)",
        outcome.value,
        report.succeeded,
        report.failed,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
