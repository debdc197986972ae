"""
L2 Resolver — k6 artifact naming.

Pure: no I/O.  Builds the archive name and download URL for a
(version, platform) pair.
"""

from __future__ import annotations

from setup_k6.core.models.artifact import ArtifactDescriptor
from setup_k6.core.models.platform import Platform
from setup_k6.core.services.tool_install.data.constants import (
    K6_ARCHIVE_EXTENSION,
    K6_DOWNLOAD_BASE,
    K6_OS_TOKEN,
)


def normalize_version(version: str) -> str:
    """Strip whitespace and one leading ``v``: ``v1.2.3`` → ``1.2.3``."""
    version = version.strip()
    if version[:1] in ("v", "V"):
        version = version[1:]
    if not version:
        raise ValueError("empty k6 version")
    return version


def build_artifact(version: str, target: Platform) -> ArtifactDescriptor:
    """Describe the release archive of ``version`` for ``target``.

    ``version`` may carry a leading ``v``; the descriptor always holds
    the normalized form.

    Example::

        >>> build_artifact("v1.2.3", Platform(os=OS.LINUX, arch=Arch.AMD64)).download_url
        'https://github.com/grafana/k6/releases/download/v1.2.3/k6-v1.2.3-linux-amd64.tar.gz'
    """
    normalized = normalize_version(version)
    binary_name = f"k6-v{normalized}-{K6_OS_TOKEN[target.os]}-{target.arch.value}"
    extension = K6_ARCHIVE_EXTENSION[target.os]

    return ArtifactDescriptor(
        version=normalized,
        os=target.os,
        arch=target.arch,
        binary_name=binary_name,
        archive_extension=extension,
        download_url=f"{K6_DOWNLOAD_BASE}v{normalized}/{binary_name}.{extension}",
    )
