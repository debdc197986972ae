"""
Configuration loader — action inputs and setup-k6.yml into Settings.

Sources, highest precedence first:
    CLI options  >  action inputs (INPUT_* env vars)  >  YAML file

The YAML file is optional.  It is read from ``--config`` or the
SETUP_K6_CONFIG env var, validated against the Pydantic ``Settings``
model, and may nest its keys under a ``setup-k6:`` mapping.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from setup_k6.core.models.settings import Settings

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SETUP_K6_CONFIG"

# GitHub Actions exposes input "k6-version" as INPUT_K6-VERSION; some
# wrappers normalise the dash, so accept both spellings.
_INPUT_ENV_VARS: dict[str, tuple[str, ...]] = {
    "k6_version": ("INPUT_K6-VERSION", "INPUT_K6_VERSION"),
    "browser": ("INPUT_BROWSER",),
}


class ConfigError(Exception):
    """Raised when setup-k6 configuration is invalid or unreadable."""


def _read_inputs(environ: Mapping[str, str]) -> dict[str, Any]:
    """Collect action inputs; unset and empty inputs are skipped."""
    data: dict[str, Any] = {}
    for field, names in _INPUT_ENV_VARS.items():
        for name in names:
            value = environ.get(name, "").strip()
            if value:
                data[field] = value
                break
    return data


def _read_file(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading setup-k6 config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Either flat, or wrapped under a "setup-k6" key
    section = data.get("setup-k6", data)
    if not isinstance(section, dict):
        raise ConfigError(f"Expected 'setup-k6' to be a mapping in {path}")

    return {key.replace("-", "_"): value for key, value in section.items()}


def load_settings(
    config_path: Path | None = None,
    *,
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Merge every configuration source into validated ``Settings``.

    Args:
        config_path: Explicit YAML file.  Falls back to SETUP_K6_CONFIG.
        overrides: CLI values; ``None`` entries mean "not given".
        environ: Environment to read inputs from (default: os.environ).

    Raises:
        ConfigError: Unreadable/invalid file or failed validation.
    """
    env = os.environ if environ is None else environ

    if config_path is None and env.get(CONFIG_ENV_VAR):
        config_path = Path(env[CONFIG_ENV_VAR])

    merged: dict[str, Any] = {}
    if config_path is not None:
        merged.update(_read_file(config_path))
    merged.update(_read_inputs(env))
    if overrides:
        merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        settings = Settings.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid setup-k6 configuration: {e}") from e

    logger.debug(
        "Settings: k6_version=%s browser=%s",
        settings.k6_version or "latest", settings.browser,
    )
    return settings
