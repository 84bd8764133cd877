"""
Logging configuration for the skillpack CLI.

``skillpack.main`` calls ``setup_logging`` once per command, with the
level chosen by ``resolve_level``:

    --debug  >  --verbose  >  --quiet  >  SKILLPACK_LOG_LEVEL  >  WARNING

Log records go to stderr so they never mix with ``--json`` output on
stdout.  SKILLPACK_LOG_FILE adds a file handler, optionally at its own
level (SKILLPACK_LOG_FILE_LEVEL).
"""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV = "SKILLPACK_LOG_LEVEL"
LOG_FILE_ENV = "SKILLPACK_LOG_FILE"
LOG_FILE_LEVEL_ENV = "SKILLPACK_LOG_FILE_LEVEL"

_DETAILED = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"

# (threshold, format, datefmt): first entry whose threshold >= level wins
_CONSOLE_FORMATS = (
    (logging.DEBUG, _DETAILED, "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "%(message)s", None),
)


def resolve_level(debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Pick the console level from CLI flags, falling back to the env var."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(LOG_LEVEL_ENV, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """(Re)configure the root logger.

    Replaces any handlers from a previous call, so ``install --verbose``
    can raise the level after the group callback already ran.
    """
    console_level = _parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_DETAILED, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(fh)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)


def _console_formatter(level: int) -> logging.Formatter:
    for threshold, fmt, datefmt in _CONSOLE_FORMATS:
        if level <= threshold:
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter("%(message)s")


def _parse_level(level: str | None) -> int:
    """Level name to its numeric value; unknown names mean WARNING."""
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
