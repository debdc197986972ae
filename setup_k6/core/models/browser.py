"""
Browser install outcome — result of one check/install/re-check cycle.

Transient: used by the CLI to decide what to report, never persisted.
"""

from __future__ import annotations

from pydantic import BaseModel


class BrowserInstallOutcome(BaseModel):
    was_already_installed: bool = False
    install_attempted: bool = False
    verified_after_install: bool = False

    @property
    def ok(self) -> bool:
        """Whether the browser is usable after the cycle."""
        return self.was_already_installed or self.verified_after_install
