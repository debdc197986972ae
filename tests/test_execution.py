"""
Tests for the execution layer — subprocess runner, download,
extraction, and recursive chmod.
"""

from __future__ import annotations

import http.client
import io
import os
import stat
import subprocess
import sys
import urllib.error
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from setup_k6.core.errors import (
    DownloadFailed,
    ExtractionFailed,
    PermissionSettingFailed,
    ProcessError,
)
from setup_k6.core.services.tool_install.execution.download import _fmt_size, download_file
from setup_k6.core.services.tool_install.execution.extract import extract_archive
from setup_k6.core.services.tool_install.execution.permissions import chmod_recursive
from setup_k6.core.services.tool_install.execution.subprocess_runner import execute

_RUN = "setup_k6.core.services.tool_install.execution.subprocess_runner.subprocess.run"
_IS_ROOT = "setup_k6.core.services.tool_install.execution.subprocess_runner._is_root"
_URLOPEN = "setup_k6.core.services.tool_install.execution.download.urllib.request.urlopen"


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> MagicMock:
    m = MagicMock()
    m.returncode = returncode
    m.stdout = stdout
    m.stderr = stderr
    return m


# ── Subprocess runner ───────────────────────────────────────────


class TestExecute:
    def test_success(self) -> None:
        with patch(_RUN, return_value=_completed(stdout="Google Chrome 120\n")):
            result = execute(["google-chrome", "--version"])
        assert result.stdout == "Google Chrome 120\n"
        assert result.returncode == 0

    def test_non_zero_exit(self) -> None:
        with patch(_RUN, return_value=_completed(returncode=2, stderr="bad flag")):
            with pytest.raises(ProcessError) as exc_info:
                execute(["choco", "list", "-i"])
        err = exc_info.value
        assert err.returncode == 2
        assert err.stderr == "bad flag"
        assert not err.spawn_failed
        assert "exit 2" in str(err)

    def test_command_not_found(self) -> None:
        with patch(_RUN, side_effect=FileNotFoundError("mdfind")):
            with pytest.raises(ProcessError) as exc_info:
                execute(["mdfind", "x"])
        assert exc_info.value.spawn_failed
        assert "command not found" in str(exc_info.value)

    def test_timeout(self) -> None:
        with patch(_RUN, side_effect=subprocess.TimeoutExpired(["brew"], 5)):
            with pytest.raises(ProcessError, match="timed out"):
                execute(["brew", "install"], timeout=5)

    def test_sudo_prefix_when_not_root(self) -> None:
        with patch(_IS_ROOT, return_value=False), \
             patch(_RUN, return_value=_completed()) as mock_run:
            execute(["apt-get", "update"], needs_sudo=True)
        assert mock_run.call_args.args[0] == ["sudo", "-n", "apt-get", "update"]

    def test_no_sudo_prefix_as_root(self) -> None:
        with patch(_IS_ROOT, return_value=True), \
             patch(_RUN, return_value=_completed()) as mock_run:
            execute(["apt-get", "update"], needs_sudo=True)
        assert mock_run.call_args.args[0] == ["apt-get", "update"]

    def test_env_overrides_merged(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KEEP_ME", "1")
        with patch(_RUN, return_value=_completed()) as mock_run:
            execute(["true"], env_overrides={"DEBIAN_FRONTEND": "noninteractive"})
        env = mock_run.call_args.kwargs["env"]
        assert env["DEBIAN_FRONTEND"] == "noninteractive"
        assert env["KEEP_ME"] == "1"

    def test_real_process(self) -> None:
        result = execute([sys.executable, "-c", "print('hello')"])
        assert result.stdout.strip() == "hello"


# ── Download ────────────────────────────────────────────────────


def _http_response(body: bytes) -> MagicMock:
    stream = io.BytesIO(body)
    resp = MagicMock()
    resp.read.side_effect = stream.read
    resp.headers = {"Content-Length": str(len(body))}
    resp.__enter__.return_value = resp
    return resp


class TestDownloadFile:
    URL = "https://github.com/grafana/k6/releases/download/v1.2.3/k6-v1.2.3-linux-amd64.tar.gz"

    def test_keeps_file_name(self, tmp_path: Path) -> None:
        payload = b"x" * 20000
        with patch(_URLOPEN, return_value=_http_response(payload)):
            path = download_file(self.URL, dest_dir=tmp_path)
        assert path.name == "k6-v1.2.3-linux-amd64.tar.gz"
        assert path.read_bytes() == payload
        assert tmp_path in path.parents

    def test_each_call_gets_fresh_directory(self, tmp_path: Path) -> None:
        with patch(_URLOPEN, side_effect=[_http_response(b"a"), _http_response(b"b")]):
            first = download_file(self.URL, dest_dir=tmp_path)
            second = download_file(self.URL, dest_dir=tmp_path)
        assert first != second
        assert first.read_bytes() == b"a"

    def test_uses_runner_temp(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        runner_temp = tmp_path / "runner"
        monkeypatch.setenv("RUNNER_TEMP", str(runner_temp))
        with patch(_URLOPEN, return_value=_http_response(b"a")):
            path = download_file(self.URL)
        assert runner_temp in path.parents

    def test_http_error(self, tmp_path: Path) -> None:
        err = urllib.error.HTTPError(self.URL, 404, "Not Found", {}, io.BytesIO(b""))
        with patch(_URLOPEN, side_effect=err):
            with pytest.raises(DownloadFailed) as exc_info:
                download_file(self.URL, dest_dir=tmp_path)
        assert exc_info.value.url == self.URL
        assert "404" in str(exc_info.value)
        assert not list(tmp_path.rglob("*.tar.gz"))

    def test_network_error(self, tmp_path: Path) -> None:
        with patch(_URLOPEN, side_effect=urllib.error.URLError("timed out")):
            with pytest.raises(DownloadFailed):
                download_file(self.URL, dest_dir=tmp_path)

    def test_connection_cut_mid_body(self, tmp_path: Path) -> None:
        resp = _http_response(b"")
        resp.headers = {"Content-Length": "100"}
        resp.read.side_effect = [b"x" * 10, http.client.IncompleteRead(b"", 90)]
        with patch(_URLOPEN, return_value=resp):
            with pytest.raises(DownloadFailed) as exc_info:
                download_file(self.URL, dest_dir=tmp_path)
        assert exc_info.value.url == self.URL
        assert not list(tmp_path.rglob("*.tar.gz"))


class TestFmtSize:
    def test_units(self) -> None:
        assert _fmt_size(512) == "512.0 B"
        assert _fmt_size(2048) == "2.0 KB"
        assert _fmt_size(5 * 1024 * 1024) == "5.0 MB"


# ── Extraction ──────────────────────────────────────────────────


class TestExtractArchive:
    def test_tarball(self, make_k6_tarball) -> None:
        archive = make_k6_tarball("k6-v1.2.3-linux-amd64")
        root = extract_archive(archive)
        assert (root / "k6-v1.2.3-linux-amd64" / "k6").is_file()
        assert root.parent == archive.parent

    def test_zip(self, make_k6_zip) -> None:
        archive = make_k6_zip("k6-v1.2.3-macos-arm64")
        root = extract_archive(archive)
        assert (root / "k6-v1.2.3-macos-arm64" / "k6").is_file()

    def test_explicit_destination(self, make_k6_tarball, tmp_path: Path) -> None:
        dest = tmp_path / "out"
        root = extract_archive(make_k6_tarball("k6-v1.2.3-linux-amd64"), dest=dest)
        assert root == dest

    def test_unknown_format(self, tmp_path: Path) -> None:
        archive = tmp_path / "k6.rar"
        archive.write_bytes(b"rar")
        with pytest.raises(ExtractionFailed, match="unsupported archive format"):
            extract_archive(archive)

    def test_corrupt_tarball(self, tmp_path: Path) -> None:
        archive = tmp_path / "k6.tar.gz"
        archive.write_bytes(b"not gzip at all")
        with pytest.raises(ExtractionFailed) as exc_info:
            extract_archive(archive)
        assert exc_info.value.path == str(archive)

    def test_corrupt_zip(self, tmp_path: Path) -> None:
        archive = tmp_path / "k6.zip"
        archive.write_bytes(b"PK nope")
        with pytest.raises(ExtractionFailed):
            extract_archive(archive)


# ── chmod ───────────────────────────────────────────────────────


def _mode(path: Path) -> int:
    return stat.S_IMODE(path.stat().st_mode)


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
class TestChmodRecursive:
    def test_single_file(self, tmp_path: Path) -> None:
        binary = tmp_path / "k6"
        binary.write_text("bin")
        binary.chmod(0o600)
        chmod_recursive(binary)
        assert _mode(binary) == 0o755

    def test_tree(self, tmp_path: Path) -> None:
        top = tmp_path / "k6"
        (top / "lib").mkdir(parents=True)
        (top / "k6").write_text("bin")
        (top / "lib" / "libfoo.so").write_text("lib")
        for p in (top / "k6", top / "lib" / "libfoo.so"):
            p.chmod(0o644)
        chmod_recursive(top)
        for p in (top, top / "lib", top / "k6", top / "lib" / "libfoo.so"):
            assert _mode(p) == 0o755

    def test_failure_is_raised(self, tmp_path: Path) -> None:
        with pytest.raises(PermissionSettingFailed) as exc_info:
            chmod_recursive(tmp_path / "missing")
        assert exc_info.value.path.endswith("missing")
