from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import timedelta
from pathlib import Path

from clndir.errors import ConfigurationError
from clndir.models import Configuration

DOWNLOADS_ENV_VAR = "Downloads"
DEFAULT_AGE_DAYS = 180

logger = logging.getLogger(__name__)


def resolve_config(
    directory: str | None,
    age: str | int | None,
    skip: Iterable[str],
    nowarn: bool,
    environ: Mapping[str, str],
) -> Configuration:
    """Build the run configuration from command-line values.

    ``environ`` is only consulted for the ``Downloads`` fallback when no
    directory was given. Nothing here touches the filesystem.
    """
    target = _resolve_directory(directory, environ)
    age_days = _parse_age(age)
    patterns = tuple(pattern for pattern in skip if pattern)

    config = Configuration(
        target_directory=target,
        age_threshold=timedelta(days=age_days),
        skip_patterns=patterns,
        confirm_required=not nowarn,
    )
    logger.debug(
        "Resolved configuration: dir=%s age=%d days skip=%s confirm=%s",
        config.target_directory,
        config.age_days,
        list(config.skip_patterns),
        config.confirm_required,
    )
    return config


def _resolve_directory(directory: str | None, environ: Mapping[str, str]) -> Path:
    if directory is not None:
        if not directory.strip():
            raise ConfigurationError("Empty --dir given")
        return Path(directory)
    fallback = environ.get(DOWNLOADS_ENV_VAR, "")
    if not fallback.strip():
        raise ConfigurationError(
            f"No directory given: pass --dir or set the {DOWNLOADS_ENV_VAR} "
            "environment variable"
        )
    logger.debug("Using %s environment variable: %s", DOWNLOADS_ENV_VAR, fallback)
    return Path(fallback)


def _parse_age(age: str | int | None) -> int:
    if age is None:
        return DEFAULT_AGE_DAYS
    if isinstance(age, bool):
        raise ConfigurationError(f"Invalid age {age!r}: expected a number of days")
    if isinstance(age, int):
        days = age
    else:
        text = age.strip()
        if not (text.isascii() and text.isdigit()):
            raise ConfigurationError(
                f"Invalid age {age!r}: expected a non-negative whole number of days"
            )
        days = int(text)
    if days < 0:
        raise ConfigurationError(f"Invalid age {age!r}: must not be negative")
    if days > timedelta.max.days:
        raise ConfigurationError(f"Invalid age {age!r}: too large")
    return days
