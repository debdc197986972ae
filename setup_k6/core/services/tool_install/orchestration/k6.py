"""
L5 Orchestration — k6 tool provisioner.

Sequences detect → validate → resolve → download → extract →
relocate → chmod → publish.  Every step runs exactly once and every
failure propagates unchanged; there is no cache, so two calls do two
full download/extract cycles.

External capabilities (release lookup, download, extraction, PATH
publishing) are keyword arguments so tests can swap them out.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from setup_k6.adapters.ci import add_path
from setup_k6.core.errors import (
    DownloadFailed,
    ExtractionFailed,
    UnexpectedArchiveLayout,
)
from setup_k6.core.models.platform import Platform
from setup_k6.core.services.tool_install.data.constants import K6_BINARY
from setup_k6.core.services.tool_install.detection.platform import (
    detect_host,
    validate_tool_platform,
)
from setup_k6.core.services.tool_install.execution.download import download_file
from setup_k6.core.services.tool_install.execution.extract import extract_archive
from setup_k6.core.services.tool_install.execution.permissions import chmod_recursive
from setup_k6.core.services.tool_install.resolver.artifact import (
    build_artifact,
    normalize_version,
)
from setup_k6.core.services.tool_install.resolver.release_index import (
    get_latest_version,
)

logger = logging.getLogger(__name__)


def relocate_binary(extraction_root: Path, binary_name: str) -> Path:
    """Rename ``<root>/<binary_name>`` to ``<root>/k6``.

    The entry is a directory for real k6 archives (binary plus docs)
    and a bare file for single-binary archives; both are moved as-is.

    Raises:
        UnexpectedArchiveLayout: ``binary_name`` is not in the root, or
            the root already holds a ``k6`` entry.
    """
    source = extraction_root / binary_name
    if not source.exists():
        found = [p.name for p in extraction_root.iterdir()] if extraction_root.is_dir() else []
        raise UnexpectedArchiveLayout(str(extraction_root), binary_name, found)

    target = extraction_root / K6_BINARY
    if target.exists():
        found = [p.name for p in extraction_root.iterdir()]
        raise UnexpectedArchiveLayout(str(extraction_root), binary_name, found)
    source.rename(target)
    return target


def _executable_dir(relocated: Path) -> Path:
    """Directory that holds the ``k6`` executable after relocation."""
    if relocated.is_dir():
        return relocated
    return relocated.parent


def provision_tool(
    requested_version: str | None = None,
    *,
    platform: Platform | None = None,
    latest_version: Callable[[], str] = get_latest_version,
    download: Callable[[str], Path] = download_file,
    extract: Callable[[Path], Path] = extract_archive,
    publish: Callable[[Path], None] = add_path,
) -> Path:
    """Install k6 and put it on PATH.

    Args:
        requested_version: Exact version (``1.2.3`` or ``v1.2.3``), or
            ``None`` for the latest release.  A blank string (or a bare
            ``v``) also means latest.
        platform: Target platform; detected from the host when omitted.
        latest_version: Release-index lookup, called only when no
            version was requested.
        download: ``url -> local archive path``.
        extract: ``archive path -> extraction root``.
        publish: Adds a directory to the executable search path.

    Returns:
        Absolute path of the relocated entry, always ``<root>/k6``.

    Raises:
        UnsupportedPlatform, UnsupportedArchitecture,
        ReleaseLookupFailed, DownloadFailed, ExtractionFailed,
        UnexpectedArchiveLayout, PermissionSettingFailed.
    """
    # ── 1. Platform, validated before any I/O ──
    target = validate_tool_platform(platform or detect_host())

    # ── 2. Version ──
    if requested_version and requested_version.strip().lstrip("vV"):
        version = normalize_version(requested_version)
    else:
        version = normalize_version(latest_version())
        logger.info("Resolved latest k6 version: %s", version)

    # ── 3. Artifact ──
    artifact = build_artifact(version, target)
    logger.info("Installing k6 %s for %s", artifact.version, target)
    logger.debug("Artifact URL: %s", artifact.download_url)

    # ── 4–5. Fetch + unpack ──
    try:
        archive = download(artifact.download_url)
    except OSError as exc:
        raise DownloadFailed(artifact.download_url, exc) from exc

    try:
        extraction_root = Path(extract(archive)).resolve()
    except OSError as exc:
        raise ExtractionFailed(str(archive), exc) from exc

    # ── 6. Stable location ──
    relocated = relocate_binary(extraction_root, artifact.binary_name)

    # ── 7. Executable bits ──
    chmod_recursive(relocated)

    # ── 8. PATH ──
    publish(_executable_dir(relocated))

    logger.info("k6 %s installed at %s", artifact.version, relocated)
    return relocated
