"""
Domain models — Pydantic types for setup-k6.

All models are re-exported here for convenient access:

    from setup_k6.core.models import Platform, OS, Arch, ArtifactDescriptor
"""

from setup_k6.core.models.artifact import ArtifactDescriptor
from setup_k6.core.models.browser import BrowserInstallOutcome
from setup_k6.core.models.platform import OS, Arch, Platform
from setup_k6.core.models.settings import Settings

__all__ = [
    # platform.py
    "Arch",
    # artifact.py
    "ArtifactDescriptor",
    # browser.py
    "BrowserInstallOutcome",
    "OS",
    "Platform",
    # settings.py
    "Settings",
]
