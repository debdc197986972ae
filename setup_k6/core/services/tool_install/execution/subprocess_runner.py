"""
L4 Execution — Core subprocess runner.

The SINGLE PLACE where ``subprocess.run`` is called.  Logging, sudo
prefixing, and error mapping are centralised here: callers get a
``CommandResult`` on exit 0 and a ``ProcessError`` otherwise.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import time
from dataclasses import dataclass

from setup_k6.core.errors import ProcessError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    stdout: str
    stderr: str
    returncode: int
    elapsed_ms: int = 0


def _is_root() -> bool:
    # os.geteuid does not exist on Windows.
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0


def _privileged(cmd: list[str]) -> list[str]:
    """Prefix ``sudo`` unless already root.

    CI runners grant passwordless sudo; ``-n`` makes a password prompt
    fail fast instead of hanging the job.
    """
    if _is_root():
        return cmd
    return ["sudo", "-n"] + cmd


def execute(
    cmd: list[str],
    *,
    needs_sudo: bool = False,
    timeout: int | None = None,
    env_overrides: dict[str, str] | None = None,
    cwd: str | None = None,
) -> CommandResult:
    """Run a command and capture its output.

    Args:
        cmd: Command list for ``subprocess.run()``.
        needs_sudo: Whether the command requires root.
        timeout: Seconds before giving up; ``None`` waits forever.
        env_overrides: Extra environment variables.
        cwd: Working directory for the command.

    Returns:
        ``CommandResult`` when the command exits 0.

    Raises:
        ProcessError: The command could not be spawned, timed out, or
            exited non-zero.
    """
    if needs_sudo:
        cmd = _privileged(cmd)

    env = None
    if env_overrides:
        env = os.environ.copy()
        env.update(env_overrides)

    logger.info("[command] %s", shlex.join(cmd))
    start = time.monotonic()
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            env=env,
            cwd=cwd,
        )
    except FileNotFoundError as exc:
        raise ProcessError(cmd, reason="command not found") from exc
    except PermissionError as exc:
        raise ProcessError(cmd, reason=f"not executable: {exc}") from exc
    except subprocess.TimeoutExpired as exc:
        raise ProcessError(cmd, reason=f"timed out ({timeout}s)") from exc
    except OSError as exc:
        raise ProcessError(cmd, reason=str(exc)) from exc

    elapsed_ms = int((time.monotonic() - start) * 1000)
    stdout = result.stdout or ""
    stderr = result.stderr or ""

    if stdout.strip():
        logger.debug("stdout: %s", stdout.strip()[-2000:])

    if result.returncode != 0:
        logger.debug("Command exited %d after %dms", result.returncode, elapsed_ms)
        raise ProcessError(
            cmd,
            returncode=result.returncode,
            stdout=stdout,
            stderr=stderr[-2000:],
        )

    return CommandResult(
        stdout=stdout,
        stderr=stderr,
        returncode=result.returncode,
        elapsed_ms=elapsed_ms,
    )
