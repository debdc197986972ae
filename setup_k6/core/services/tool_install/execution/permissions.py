"""
L4 Execution — Recursive chmod.

Marks a file, or a directory tree, executable for everyone.  The k6
archives ship the binary next to README/LICENSE files, so the whole
relocated tree gets the same mode.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from setup_k6.core.errors import PermissionSettingFailed

logger = logging.getLogger(__name__)

EXECUTABLE_MODE = 0o755


def chmod_recursive(path: Path, mode: int = EXECUTABLE_MODE) -> None:
    """Apply ``mode`` to ``path`` and everything below it.

    Raises:
        PermissionSettingFailed: On the first entry that cannot be
            changed.  Nothing is rolled back.
    """
    current = path
    try:
        os.chmod(path, mode)
        if path.is_dir() and not path.is_symlink():
            for root, dirs, files in os.walk(path):
                for name in dirs + files:
                    current = Path(root) / name
                    if current.is_symlink():
                        continue
                    os.chmod(current, mode)
    except OSError as exc:
        raise PermissionSettingFailed(str(current), exc) from exc

    logger.debug("Set mode %o on %s", mode, path)
