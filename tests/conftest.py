"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

import io
import tarfile
import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest

from setup_k6.core.errors import ProcessError
from setup_k6.core.models.platform import OS, Arch, Platform
from setup_k6.core.services.tool_install.execution.subprocess_runner import CommandResult

# Variables the runner (or a developer shell) may set that change behavior.
_CI_ENV_VARS = (
    "GITHUB_ACTIONS",
    "GITHUB_PATH",
    "GITHUB_ENV",
    "GITHUB_TOKEN",
    "RUNNER_DEBUG",
    "RUNNER_TEMP",
    "INPUT_K6-VERSION",
    "INPUT_K6_VERSION",
    "INPUT_BROWSER",
    "SETUP_K6_CONFIG",
    "SETUP_K6_LOG_LEVEL",
    "SETUP_K6_LOG_FILE",
    "SETUP_K6_LOG_FILE_LEVEL",
    "K6_BROWSER_ARGS",
)


@pytest.fixture(autouse=True)
def clean_ci_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test as if outside GitHub Actions."""
    for name in _CI_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def linux_amd64() -> Platform:
    return Platform(os=OS.LINUX, arch=Arch.AMD64)


@pytest.fixture
def linux_arm64() -> Platform:
    return Platform(os=OS.LINUX, arch=Arch.ARM64)


@pytest.fixture
def darwin_arm64() -> Platform:
    return Platform(os=OS.DARWIN, arch=Arch.ARM64)


@pytest.fixture
def windows_amd64() -> Platform:
    return Platform(os=OS.WINDOWS, arch=Arch.AMD64)


# ── k6 archives ─────────────────────────────────────────────────


def _add_bytes(tf: tarfile.TarFile, name: str, data: bytes, mode: int) -> None:
    info = tarfile.TarInfo(name=name)
    info.size = len(data)
    info.mode = mode
    tf.addfile(info, io.BytesIO(data))


@pytest.fixture
def make_k6_tarball(tmp_path: Path) -> Callable[[str], Path]:
    """Build a tar.gz shaped like a real k6 release archive.

    ``k6-v1.2.3-linux-amd64.tar.gz`` holds a ``k6-v1.2.3-linux-amd64/``
    directory with the ``k6`` binary and docs, all mode 0644.
    """

    def _make(binary_name: str, *, top_level: str | None = None) -> Path:
        top = top_level or binary_name
        archive = tmp_path / f"{binary_name}.tar.gz"
        with tarfile.open(archive, "w:gz") as tf:
            dir_info = tarfile.TarInfo(name=top)
            dir_info.type = tarfile.DIRTYPE
            dir_info.mode = 0o755
            tf.addfile(dir_info)
            _add_bytes(tf, f"{top}/k6", b"#!/bin/sh\necho k6\n", 0o644)
            _add_bytes(tf, f"{top}/LICENSE.md", b"AGPL\n", 0o644)
        return archive

    return _make


@pytest.fixture
def make_k6_zip(tmp_path: Path) -> Callable[[str], Path]:
    """Build a zip shaped like the macOS k6 release archive."""

    def _make(binary_name: str) -> Path:
        archive = tmp_path / f"{binary_name}.zip"
        with zipfile.ZipFile(archive, "w") as zf:
            zf.writestr(f"{binary_name}/k6", "#!/bin/sh\necho k6\n")
            zf.writestr(f"{binary_name}/README.md", "k6\n")
        return archive

    return _make


# ── Subprocess double ───────────────────────────────────────────


class FakeRunner:
    """Stands in for ``execute``.

    The probe command answers from a script of stdout strings (or
    exceptions to raise); every other command succeeds unless its
    program name is listed in ``fail_commands``.
    """

    def __init__(
        self,
        probe_command: list[str],
        probe_outputs: list[str | Exception],
        fail_commands: tuple[str, ...] = (),
    ) -> None:
        self.probe_command = probe_command
        self.probe_outputs = list(probe_outputs)
        self.fail_commands = set(fail_commands)
        self.calls: list[tuple[list[str], dict]] = []

    def __call__(self, cmd: list[str], **kwargs) -> CommandResult:
        self.calls.append((list(cmd), kwargs))
        if cmd == self.probe_command:
            out = self.probe_outputs.pop(0)
            if isinstance(out, Exception):
                raise out
            return CommandResult(stdout=out, stderr="", returncode=0)
        if cmd[0] in self.fail_commands:
            raise ProcessError(cmd, returncode=100, stderr="E: boom")
        return CommandResult(stdout="", stderr="", returncode=0)

    @property
    def probe_count(self) -> int:
        return sum(1 for cmd, _ in self.calls if cmd == self.probe_command)

    @property
    def install_calls(self) -> list[list[str]]:
        return [cmd for cmd, _ in self.calls if cmd != self.probe_command]


@pytest.fixture
def fake_runner_cls() -> type[FakeRunner]:
    return FakeRunner
