"""
Settings model — the validated inputs of one setup-k6 run.

Built by ``core.config.loader`` from action inputs, an optional YAML
file, and CLI overrides.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, field_validator

# v?MAJOR.MINOR.PATCH with optional -prerelease / +build suffixes
_VERSION_RE = re.compile(
    r"^v?\d+\.\d+\.\d+(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?$"
)


class Settings(BaseModel):
    """Inputs consumed by the orchestrator.

    ``k6_version`` of ``None`` means "resolve the latest release".
    """

    model_config = ConfigDict(extra="ignore")

    k6_version: str | None = None
    browser: bool = False

    @field_validator("k6_version", mode="before")
    @classmethod
    def _check_version(cls, value: object) -> object:
        if value is None:
            return None
        text = str(value).strip()
        if not text or text.lower() == "latest":
            return None
        if not _VERSION_RE.match(text):
            raise ValueError(f"not a k6 release version: {text!r}")
        return text

    @field_validator("browser", mode="before")
    @classmethod
    def _parse_flag(cls, value: object) -> object:
        # Action inputs arrive as strings; anything but "true" is off.
        if isinstance(value, str):
            return value.strip().lower() == "true"
        if value is None:
            return False
        return value
