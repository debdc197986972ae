"""
CI environment adapter — GitHub Actions side effects.

Publishes directories on the job's PATH and exports variables to the
following steps through the ``GITHUB_PATH`` / ``GITHUB_ENV`` files.
Outside GitHub Actions only the current process environment changes,
so the CLI behaves the same when run by hand.
"""

from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path

logger = logging.getLogger(__name__)


def _append(file_var: str, text: str) -> bool:
    """Append ``text`` to the file named by ``file_var``, if set."""
    target = os.environ.get(file_var)
    if not target:
        return False
    with open(target, "a", encoding="utf-8") as fh:
        fh.write(text)
    return True


def add_path(directory: Path | str) -> None:
    """Prepend ``directory`` to PATH for this process and later steps."""
    directory = str(directory)
    if _append("GITHUB_PATH", f"{directory}\n"):
        logger.debug("Appended %s to GITHUB_PATH", directory)
    os.environ["PATH"] = os.pathsep.join(
        [directory, os.environ["PATH"]] if os.environ.get("PATH") else [directory]
    )
    logger.info("Added %s to PATH", directory)


def export_variable(name: str, value: str) -> None:
    """Set ``name=value`` for this process and later steps."""
    if "\n" in value:
        # Multi-line values need the heredoc form of GITHUB_ENV.
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        entry = f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
    else:
        entry = f"{name}={value}\n"
    _append("GITHUB_ENV", entry)
    os.environ[name] = value
    logger.info("Exported %s", name)


def in_github_actions() -> bool:
    return os.environ.get("GITHUB_ACTIONS", "").lower() == "true"


def workflow_command(command: str, message: str) -> str:
    """Render a ``::command::message`` line with the runner's escaping."""
    escaped = (
        message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
    )
    return f"::{command}::{escaped}"
