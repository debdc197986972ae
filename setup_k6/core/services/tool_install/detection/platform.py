"""
L3 Detection — Host platform.

Maps raw OS / architecture identifiers to the closed ``OS`` and
``Arch`` enums, and checks a platform against the k6 release matrix.
``detect`` and ``validate_tool_platform`` are pure; only
``detect_host`` reads the interpreter's view of the machine.
"""

from __future__ import annotations

import logging
import platform as _platform
import sys

from setup_k6.core.errors import UnsupportedArchitecture, UnsupportedPlatform
from setup_k6.core.models.platform import OS, Arch, Platform
from setup_k6.core.services.tool_install.data.constants import (
    ARCH_MAP,
    K6_SUPPORTED_MATRIX,
    OS_MAP,
)

logger = logging.getLogger(__name__)


def _map_os(raw_os: str) -> OS:
    token = raw_os.strip().lower()
    if token in OS_MAP:
        return OS_MAP[token]
    # sys.platform on old interpreters reports "linux2", and
    # platform.system() under MSYS reports "MSYS_NT-10.0".
    for prefix, value in OS_MAP.items():
        if token.startswith(prefix):
            return value
    raise UnsupportedPlatform(raw_os)


def _map_arch(raw_arch: str) -> Arch:
    token = raw_arch.strip().lower()
    try:
        return ARCH_MAP[token]
    except KeyError:
        raise UnsupportedArchitecture(raw_arch) from None


def detect(raw_os: str, raw_arch: str) -> Platform:
    """Normalize raw host identifiers into a ``Platform``.

    Args:
        raw_os: ``sys.platform``-style token (``linux``, ``darwin``,
            ``win32``) or ``platform.system()`` output.
        raw_arch: ``x64`` / ``x86_64`` / ``amd64`` or
            ``arm64`` / ``aarch64``.

    Raises:
        UnsupportedPlatform: The OS token maps to nothing.
        UnsupportedArchitecture: The architecture token maps to nothing.
    """
    return Platform(os=_map_os(raw_os), arch=_map_arch(raw_arch))


def detect_host() -> Platform:
    """Detect the platform this interpreter is running on."""
    detected = detect(sys.platform, _platform.machine())
    logger.debug("Detected platform %s (sys.platform=%s, machine=%s)",
                 detected, sys.platform, _platform.machine())
    return detected


def validate_tool_platform(
    target: Platform,
    matrix: dict[OS, frozenset[Arch]] = K6_SUPPORTED_MATRIX,
) -> Platform:
    """Reject a platform whose (OS, arch) pair has no k6 release.

    Returns the platform unchanged so calls can be chained.

    Raises:
        UnsupportedPlatform: The OS is absent from the matrix.
        UnsupportedArchitecture: The OS is known but the architecture
            is not among those published for it.
    """
    if target.os not in matrix:
        raise UnsupportedPlatform(target.os.value, "no k6 release for this OS")

    permitted = matrix[target.os]
    if target.arch not in permitted:
        raise UnsupportedArchitecture(
            target.arch.value,
            os_name=target.os.value,
            permitted=[a.value for a in permitted],
        )
    return target
