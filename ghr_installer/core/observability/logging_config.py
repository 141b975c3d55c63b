"""
Logging configuration for the ``ghri`` command.

``main.cli`` calls ``setup_logging(resolve_level(...))`` once before any
subcommand runs; every module logs through
``logging.getLogger(__name__)``.  Logs always go to stderr, so the
``--json`` output on stdout stays machine-readable at any level.

What each level shows during an install:

    WARNING  problems that do not stop the run (corrupt metadata cache
             refetched, checksum manifest matching no local file)
    INFO     one line per remote fetch, download and extraction
    DEBUG    cache hits, asset candidates, skipped archive entries

Level precedence:
    --debug  >  --verbose  >  --quiet  >  GHRI_LOG_LEVEL  >  WARNING

GHRI_LOG_FILE adds a file handler at GHRI_LOG_FILE_LEVEL (default: the
console level), which lets a quiet terminal run keep a DEBUG trace.
"""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV = "GHRI_LOG_LEVEL"
LOG_FILE_ENV = "GHRI_LOG_FILE"
LOG_FILE_LEVEL_ENV = "GHRI_LOG_FILE_LEVEL"

# ── Formats ─────────────────────────────────────────────────────

# (max level, format, datefmt); first row whose level is >= the console level wins.
_CONSOLE_FORMATS = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d: %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "ghri: %(levelname)s: %(message)s", None),
)

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d: %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Pulled in transitively by some urllib setups; chatty at DEBUG.
_NOISY_LOGGERS = ("urllib3", "charset_normalizer")


def resolve_level(debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Pick the console level from the ``ghri`` flags, then ``GHRI_LOG_LEVEL``."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(LOG_LEVEL_ENV) or "WARNING"


def _console_formatter(level: int) -> logging.Formatter:
    for max_level, fmt, datefmt in _CONSOLE_FORMATS:
        if level <= max_level:
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter(_CONSOLE_FORMATS[-1][1])


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Install the stderr handler (and optional file handler) on the root logger.

    Calling it again replaces the previous handlers, so tests and
    repeated CLI invocations in one process do not stack output.

    Args:
        level: Console level name; unknown names mean WARNING.
        log_file: Log file path; falls back to ``GHRI_LOG_FILE``.
        log_file_level: File level name; falls back to
            ``GHRI_LOG_FILE_LEVEL``, then to ``level``.
        quiet_third_party: Hold noisy library loggers at WARNING unless
            the console level is DEBUG.
    """
    console_level = _parse_level(level)
    log_file = log_file or os.environ.get(LOG_FILE_ENV) or None
    log_file_level = log_file_level or os.environ.get(LOG_FILE_LEVEL_ENV) or None

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    # root must pass records down to the most verbose handler
    root_level = console_level
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        root_level = min(root_level, file_level)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(file_handler)

    root.setLevel(root_level)

    if quiet_third_party and console_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    if not level:
        return logging.WARNING
    numeric = logging.getLevelName(level.upper())
    return numeric if isinstance(numeric, int) else logging.WARNING
