"""
Logging configuration — central setup for the CLI.

Called once at startup by main.py.  Every module that does
``logger = logging.getLogger(__name__)`` inherits this config.

Levels are resolved in precedence order:
    CLI flag  >  RUNNER_DEBUG=1  >  SETUP_K6_LOG_LEVEL env var  >  INFO

Inside GitHub Actions the console output is rendered as workflow
commands (``::debug::``, ``::warning::``, ``::error::``) so the runner
folds and annotates it.  Optional file output via SETUP_K6_LOG_FILE /
SETUP_K6_LOG_FILE_LEVEL env vars.
"""

from __future__ import annotations

import logging
import os
import sys

from setup_k6.adapters.ci import in_github_actions, workflow_command

# ── Format strings ──────────────────────────────────────────────

# INFO level — plain, the runner adds its own timestamps
_FMT_MINIMAL = "%(message)s"

# DEBUG level — full diagnostic with file:line
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_DEBUG = "%H:%M:%S"

# File output — always full detail
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


class WorkflowCommandFormatter(logging.Formatter):
    """Render records as GitHub Actions workflow commands.

    INFO stays plain text; the other levels map to the runner's
    ``debug`` / ``warning`` / ``error`` commands.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno >= logging.ERROR:
            return workflow_command("error", message)
        if record.levelno >= logging.WARNING:
            return workflow_command("warning", message)
        if record.levelno < logging.INFO:
            return workflow_command("debug", message)
        return message


def setup_logging(
    level: str | None = None,
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure Python logging for the entire process.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            ``None`` falls back to RUNNER_DEBUG / SETUP_K6_LOG_LEVEL.
        log_file: Optional path to a log file.
        log_file_level: Optional separate level for the log file.
            Defaults to the same as ``level``.
    """
    if level is None:
        if os.environ.get("RUNNER_DEBUG") == "1":
            level = "DEBUG"
        else:
            level = os.environ.get("SETUP_K6_LOG_LEVEL", "INFO")
    numeric_level = _parse_level(level)

    # ── Console handler ─────────────────────────────────────────
    if in_github_actions():
        formatter: logging.Formatter = WorkflowCommandFormatter(_FMT_MINIMAL)
        stream = sys.stdout
    elif numeric_level <= logging.DEBUG:
        formatter = logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_DEBUG)
        stream = sys.stderr
    else:
        formatter = logging.Formatter(_FMT_MINIMAL)
        stream = sys.stderr

    console = logging.StreamHandler(stream)
    console.setLevel(numeric_level)
    console.setFormatter(formatter)

    # ── Root logger ─────────────────────────────────────────────
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    # Effective root level = minimum of console and file levels
    effective_level = numeric_level

    # ── File handler (optional) ─────────────────────────────────
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(effective_level)

    # Don't propagate exceptions from logging itself
    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.INFO
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.INFO
    return numeric
