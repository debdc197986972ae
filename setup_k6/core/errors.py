"""
Error taxonomy for provisioning.

Every failure raised by the tool or browser provisioner is a
``SetupK6Error``.  Nothing below the CLI catches these: they propagate
unmodified to ``main.py``, which reports the message and exits 1.
"""

from __future__ import annotations

from collections.abc import Iterable


class SetupK6Error(Exception):
    """Base class for every provisioning failure."""


class UnsupportedPlatform(SetupK6Error):
    """The host OS is unknown, or not provisionable for this component."""

    def __init__(self, raw: str, detail: str = "") -> None:
        self.raw = raw
        message = f"Unsupported platform: {raw}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class UnsupportedArchitecture(SetupK6Error):
    """The host CPU architecture is unknown or not valid for the OS."""

    def __init__(
        self,
        raw: str,
        *,
        os_name: str = "",
        permitted: Iterable[str] = (),
    ) -> None:
        self.raw = raw
        self.os_name = os_name
        self.permitted = sorted(permitted)
        if os_name:
            allowed = ", ".join(self.permitted) or "none"
            message = (
                f"Unsupported architecture for {os_name}: {raw} "
                f"(permitted: {allowed})"
            )
        else:
            message = f"Unsupported architecture: {raw}"
        super().__init__(message)


class ReleaseLookupFailed(SetupK6Error):
    """The release index could not tell us the latest version."""

    def __init__(self, project: str, cause: object) -> None:
        self.project = project
        self.cause = cause
        super().__init__(f"Failed to resolve latest release of {project}: {cause}")


class DownloadFailed(SetupK6Error):
    def __init__(self, url: str, cause: object) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Download failed for {url}: {cause}")


class ExtractionFailed(SetupK6Error):
    def __init__(self, path: str, cause: object) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Extract failed for {path}: {cause}")


class UnexpectedArchiveLayout(SetupK6Error):
    """The archive does not contain the entry its name promises.

    Indicates an upstream packaging change; never retried.
    """

    def __init__(self, root: str, expected: str, found: Iterable[str] = ()) -> None:
        self.root = root
        self.expected = expected
        self.found = sorted(found)
        listing = ", ".join(self.found[:10]) or "nothing"
        super().__init__(
            f"Expected '{expected}' in {root}, found: {listing}"
        )


class PermissionSettingFailed(SetupK6Error):
    def __init__(self, path: str, cause: object) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Could not mark {path} executable: {cause}")


class ProcessError(SetupK6Error):
    """A subprocess could not be spawned or exited non-zero."""

    def __init__(
        self,
        command: list[str],
        *,
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
        reason: str = "",
    ) -> None:
        self.command = command
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.reason = reason
        if reason:
            message = f"{command[0]}: {reason}"
        else:
            message = f"Command failed (exit {returncode}): {' '.join(command)}"
            if stderr.strip():
                message = f"{message}\n{stderr.strip()}"
        super().__init__(message)

    @property
    def spawn_failed(self) -> bool:
        """True when the command never ran (binary missing, not executable)."""
        return self.returncode is None


class InstallCommandFailed(SetupK6Error):
    def __init__(self, step: str, cause: object) -> None:
        self.step = step
        self.cause = cause
        super().__init__(f"Browser install step '{step}' failed: {cause}")


class BrowserInstallVerificationFailed(SetupK6Error):
    """Install commands returned, but the browser is still not detectable."""

    def __init__(self, browser: str, os_name: str) -> None:
        self.browser = browser
        self.os_name = os_name
        super().__init__(
            f"Failed to install browser: {browser} still not detected on {os_name}"
        )
