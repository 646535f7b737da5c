"""
Logging configuration — set up once by main.py before any step runs.

Every module logs through ``logging.getLogger(__name__)``. The console
handler writes to stderr so the step summary on stdout stays clean for
npm's postinstall output and for ``--json``.

Levels are resolved in precedence order:
    CLI flag  >  NXD_LOG_LEVEL env var  >  WARNING (default)

Optional file output via NXD_LOG_FILE / NXD_LOG_FILE_LEVEL env vars.
"""

from __future__ import annotations

import logging
import sys

# Plain messages by default; logger names once -v or --debug is given
_FMT_CONSOLE = "%(message)s"
_FMT_CONSOLE_DETAIL = "%(levelname)-7s %(name)s: %(message)s"

_FMT_FILE = "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure the root logger for this process.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path of a log file to append to.
        log_file_level: Level for the file; defaults to ``level``.
    """
    console_level = _parse_level(level)
    fmt = _FMT_CONSOLE_DETAIL if console_level <= logging.INFO else _FMT_CONSOLE

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        root_level = min(root_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(root_level)

    # A postinstall hook must never fail because of its own logging
    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Level name to numeric constant; unknown names mean WARNING."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
