"""
Platform model — the normalized (OS, architecture) pair of the host.

Derived once per run by the platform detector and threaded into both
provisioners.  Immutable; two platforms with the same fields are equal.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class OS(StrEnum):
    LINUX = "linux"
    DARWIN = "darwin"
    WINDOWS = "windows"


class Arch(StrEnum):
    AMD64 = "amd64"
    ARM64 = "arm64"


class Platform(BaseModel):
    """Host operating system and CPU architecture."""

    model_config = ConfigDict(frozen=True)

    os: OS
    arch: Arch

    def __str__(self) -> str:
        return f"{self.os.value}/{self.arch.value}"
