"""
L3 Detection — ``__init__.py`` re-exports all detection functions.

These functions READ host state but never WRITE.
"""

from setup_k6.core.services.tool_install.detection.platform import (  # noqa: F401
    detect,
    detect_host,
    validate_tool_platform,
)
