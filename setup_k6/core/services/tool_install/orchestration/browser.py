"""
L5 Orchestration — Browser provisioner.

One strategy per OS, each exposing ``check_installed`` and ``install``.
``ensure_browser_installed`` runs the check → install → re-check
protocol: hosts that already ship Chrome do no work, and a package
manager that exits 0 without installing anything is still caught.
"""

from __future__ import annotations

import logging
import shlex
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path

from setup_k6.core.errors import (
    BrowserInstallVerificationFailed,
    InstallCommandFailed,
    ProcessError,
    SetupK6Error,
    UnsupportedArchitecture,
    UnsupportedPlatform,
)
from setup_k6.core.models.browser import BrowserInstallOutcome
from setup_k6.core.models.platform import OS, Platform
from setup_k6.core.services.tool_install.data.constants import (
    BROWSER_NAME,
    CHROME_APT_LIST,
    CHROME_APT_PACKAGE,
    CHROME_APT_SOURCE,
    CHROME_KEYRING,
    CHROME_LINUX_ARCHES,
    CHROME_PROBES,
    CHROME_SIGNING_KEY_URL,
)
from setup_k6.core.services.tool_install.detection.platform import detect_host
from setup_k6.core.services.tool_install.execution.download import download_file
from setup_k6.core.services.tool_install.execution.subprocess_runner import (
    CommandResult,
    execute,
)

logger = logging.getLogger(__name__)

Runner = Callable[..., CommandResult]


class BrowserInstaller(ABC):
    """Platform-specific way to detect and install the browser.

    To support a new OS:
        1. Subclass BrowserInstaller
        2. Implement install (and a probe in ``CHROME_PROBES``)
        3. Register it in ``_INSTALLERS``
    """

    os: OS

    def __init__(self, platform: Platform, runner: Runner = execute) -> None:
        self.platform = platform
        self.run = runner

    def check_installed(self) -> bool:
        """Whether the inspection command's stdout carries the marker.

        A command that cannot run or exits non-zero counts as "not
        installed": either way the right next move is to install.
        """
        command, marker = CHROME_PROBES[self.os]
        try:
            result = self.run(command)
        except ProcessError as exc:
            if exc.spawn_failed:
                logger.debug("%s not available: %s", command[0], exc.reason)
            else:
                logger.debug("Browser probe failed: %s", exc)
            return False
        return marker in result.stdout

    @abstractmethod
    def install(self) -> None:
        """Install the browser.

        Raises:
            InstallCommandFailed: A step exited non-zero.
        """

    def _step(self, step: str, cmd: list[str], *, needs_sudo: bool = False) -> None:
        logger.debug("Browser install step: %s", step)
        try:
            self.run(cmd, needs_sudo=needs_sudo)
        except ProcessError as exc:
            raise InstallCommandFailed(step, exc) from exc

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} platform={self.platform}>"


class LinuxBrowserInstaller(BrowserInstaller):
    """Google Chrome from Google's apt repository.

    Four privileged steps, each must succeed before the next; a failure
    leaves earlier steps in place (no rollback).
    """

    os = OS.LINUX

    def __init__(
        self,
        platform: Platform,
        runner: Runner = execute,
        download: Callable[[str], Path] = download_file,
    ) -> None:
        super().__init__(platform, runner)
        self.download = download

    def install(self) -> None:
        if self.platform.arch not in CHROME_LINUX_ARCHES:
            raise UnsupportedArchitecture(
                self.platform.arch.value,
                os_name=f"{BROWSER_NAME} on {self.os.value}",
                permitted=[a.value for a in CHROME_LINUX_ARCHES],
            )

        try:
            key = self.download(CHROME_SIGNING_KEY_URL)
        except SetupK6Error as exc:
            raise InstallCommandFailed("download signing key", exc) from exc

        self._step(
            "register signing key",
            ["gpg", "--batch", "--yes", "--dearmor", "-o", CHROME_KEYRING, str(key)],
            needs_sudo=True,
        )
        self._step(
            "add apt repository",
            ["sh", "-c", f"echo {shlex.quote(CHROME_APT_SOURCE)} >> {CHROME_APT_LIST}"],
            needs_sudo=True,
        )
        self._step("refresh package index", ["apt-get", "update"], needs_sudo=True)
        self._step(
            "install package",
            ["apt-get", "install", "-y", CHROME_APT_PACKAGE],
            needs_sudo=True,
        )


class MacosBrowserInstaller(BrowserInstaller):
    os = OS.DARWIN

    def install(self) -> None:
        self._step("brew install", ["brew", "install", "--cask", "google-chrome"])


class WindowsBrowserInstaller(BrowserInstaller):
    os = OS.WINDOWS

    def install(self) -> None:
        self._step("choco install", ["choco", "install", "googlechrome", "-y"])


_INSTALLERS: dict[OS, type[BrowserInstaller]] = {
    OS.LINUX: LinuxBrowserInstaller,
    OS.DARWIN: MacosBrowserInstaller,
    OS.WINDOWS: WindowsBrowserInstaller,
}


def select_browser_installer(platform: Platform, runner: Runner = execute) -> BrowserInstaller:
    """Pick the strategy for ``platform.os``.

    Raises:
        UnsupportedPlatform: No strategy is registered for the OS.
    """
    installer_cls = _INSTALLERS.get(platform.os)
    if installer_cls is None:
        raise UnsupportedPlatform(str(platform.os), f"no {BROWSER_NAME} installer")
    return installer_cls(platform, runner)


def ensure_browser_installed(
    platform: Platform | None = None,
    *,
    runner: Runner = execute,
    installer: BrowserInstaller | None = None,
) -> BrowserInstallOutcome:
    """Make sure the browser is present, installing it only if needed.

    Raises:
        UnsupportedPlatform: No strategy for the host OS.
        InstallCommandFailed: An install step failed.
        BrowserInstallVerificationFailed: Install returned but the
            browser is still not detected.
    """
    if installer is None:
        installer = select_browser_installer(platform or detect_host(), runner)

    if installer.check_installed():
        logger.info("Browser is already installed, skipping installation")
        return BrowserInstallOutcome(was_already_installed=True)

    logger.info("Installing %s on %s", BROWSER_NAME, installer.platform)
    installer.install()

    if not installer.check_installed():
        raise BrowserInstallVerificationFailed(BROWSER_NAME, installer.platform.os.value)

    logger.info("%s installed", BROWSER_NAME)
    return BrowserInstallOutcome(install_attempted=True, verified_after_install=True)
