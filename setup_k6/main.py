"""
setup-k6 — CLI entrypoint.

Usage:
    python -m setup_k6.main --help
    python -m setup_k6.main run --k6-version 0.49.0 --browser true
    python -m setup_k6.main detect --json
    python -m setup_k6.main resolve
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

import click

from setup_k6 import __version__
from setup_k6.adapters.ci import export_variable, in_github_actions, workflow_command
from setup_k6.core.config.loader import ConfigError, load_settings
from setup_k6.core.errors import SetupK6Error
from setup_k6.core.observability.logging_config import setup_logging
from setup_k6.core.services.tool_install.data.constants import (
    BROWSER_ARGS_ENV,
    BROWSER_ARGS_NO_SANDBOX,
)

logger = logging.getLogger(__name__)


def _fail(message: str) -> None:
    """Report a failure once and stop the step."""
    if in_github_actions():
        click.echo(workflow_command("error", message))
    click.secho(f"❌ {message}", fg="red", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="setup-k6")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to a setup-k6 YAML file (default: $SETUP_K6_CONFIG).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """setup-k6 — install k6 (and optionally Chrome) in a CI job."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level: str | None = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = None

    setup_logging(
        level=level,
        log_file=os.environ.get("SETUP_K6_LOG_FILE"),
        log_file_level=os.environ.get("SETUP_K6_LOG_FILE_LEVEL"),
    )


@cli.command()
@click.option(
    "--k6-version",
    "k6_version",
    default=None,
    help="Exact k6 version (default: latest release).",
)
@click.option(
    "--browser",
    type=click.BOOL,
    default=None,
    help="true to also make sure Google Chrome is installed.",
)
@click.pass_context
def run(ctx: click.Context, k6_version: str | None, browser: bool | None) -> None:
    """Install k6, then Chrome when the browser input is set."""
    from setup_k6.core.services.tool_install.orchestration.browser import (
        ensure_browser_installed,
    )
    from setup_k6.core.services.tool_install.orchestration.k6 import provision_tool

    try:
        settings = load_settings(
            ctx.obj.get("config_path"),
            overrides={"k6_version": k6_version, "browser": browser},
        )
        k6_path = provision_tool(settings.k6_version)

        if settings.browser:
            export_variable(BROWSER_ARGS_ENV, BROWSER_ARGS_NO_SANDBOX)
            ensure_browser_installed()
    except (SetupK6Error, ConfigError) as e:
        logger.debug("Setup failed", exc_info=True)
        _fail(str(e))
        return

    click.secho(f"✅ k6 ready at {k6_path}", fg="green")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def detect(as_json: bool) -> None:
    """Show the detected platform and whether k6 ships for it."""
    from setup_k6.core.services.tool_install.detection.platform import (
        detect_host,
        validate_tool_platform,
    )

    try:
        platform = detect_host()
    except SetupK6Error as e:
        _fail(str(e))
        return

    reason = ""
    try:
        validate_tool_platform(platform)
    except SetupK6Error as e:
        reason = str(e)

    if as_json:
        click.echo(json.dumps({
            "os": platform.os.value,
            "arch": platform.arch.value,
            "k6_supported": not reason,
            "reason": reason or None,
        }, indent=2))
        return

    click.secho(f"🖥️  {platform}", fg="cyan", bold=True)
    if reason:
        click.secho(f"   ✗ k6: {reason}", fg="yellow")
    else:
        click.secho("   ✓ k6 release available", fg="green")


@cli.command()
@click.option("--k6-version", "k6_version", default=None, help="Exact k6 version.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def resolve(ctx: click.Context, k6_version: str | None, as_json: bool) -> None:
    """Print the archive k6 would be installed from, without downloading."""
    from setup_k6.core.services.tool_install.detection.platform import (
        detect_host,
        validate_tool_platform,
    )
    from setup_k6.core.services.tool_install.resolver.artifact import build_artifact
    from setup_k6.core.services.tool_install.resolver.release_index import (
        get_latest_version,
    )

    try:
        settings = load_settings(
            ctx.obj.get("config_path"), overrides={"k6_version": k6_version},
        )
        platform = validate_tool_platform(detect_host())
        artifact = build_artifact(settings.k6_version or get_latest_version(), platform)
    except (SetupK6Error, ConfigError) as e:
        _fail(str(e))
        return

    if as_json:
        click.echo(json.dumps(artifact.to_dict(), indent=2))
        return

    click.secho(f"📦 k6 {artifact.version} ({platform})", fg="cyan", bold=True)
    click.echo(f"   {artifact.download_url}")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
