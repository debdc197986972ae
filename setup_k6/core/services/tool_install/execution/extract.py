"""
L4 Execution — Archive extraction.

Unpacks ``.tar.gz`` / ``.tgz`` and ``.zip`` archives into a fresh
directory.  The archive format is taken from the file name.
"""

from __future__ import annotations

import logging
import tarfile
import tempfile
import zipfile
from pathlib import Path

from setup_k6.core.errors import ExtractionFailed

logger = logging.getLogger(__name__)


def _archive_kind(path: Path) -> str:
    name = path.name.lower()
    if name.endswith((".tar.gz", ".tgz")):
        return "tar.gz"
    if name.endswith(".zip"):
        return "zip"
    return ""


def extract_archive(archive: Path, *, dest: Path | None = None) -> Path:
    """Extract ``archive`` and return the extraction root.

    Args:
        archive: Local ``.tar.gz``/``.tgz``/``.zip`` file.
        dest: Target directory.  Defaults to a new directory next to
            the archive.

    Raises:
        ExtractionFailed: Unknown format, corrupt archive, unsafe
            member paths, or a filesystem error.
    """
    kind = _archive_kind(archive)
    if not kind:
        raise ExtractionFailed(str(archive), "unsupported archive format")

    if dest is None:
        dest = Path(tempfile.mkdtemp(prefix="setup-k6-x-", dir=archive.parent))
    else:
        dest.mkdir(parents=True, exist_ok=True)

    logger.debug("Extracting %s into %s", archive, dest)
    try:
        if kind == "tar.gz":
            with tarfile.open(archive, "r:gz") as tf:
                tf.extractall(dest, filter="data")
        else:
            with zipfile.ZipFile(archive, "r") as zf:
                zf.extractall(dest)
    except (tarfile.TarError, zipfile.BadZipFile, OSError, EOFError) as exc:
        raise ExtractionFailed(str(archive), exc) from exc

    return dest
