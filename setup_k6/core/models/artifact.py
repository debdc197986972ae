"""
Artifact model — the downloadable k6 archive for one version/platform.

Derived, never stored: the resolver computes a fresh descriptor for
every provisioning call.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from setup_k6.core.models.platform import OS, Arch


class ArtifactDescriptor(BaseModel):
    """Everything needed to fetch and unpack one k6 release archive.

    ``binary_name`` is also the name of the top-level entry inside the
    archive, e.g. ``k6-v1.2.3-linux-amd64``.
    """

    model_config = ConfigDict(frozen=True)

    version: str                 # normalized, no leading "v"
    os: OS
    arch: Arch
    binary_name: str
    archive_extension: str       # "tar.gz" or "zip"
    download_url: str

    @property
    def archive_name(self) -> str:
        """File name of the archive as published on the release page."""
        return f"{self.binary_name}.{self.archive_extension}"

    def to_dict(self) -> dict[str, str]:
        return self.model_dump(mode="json")
