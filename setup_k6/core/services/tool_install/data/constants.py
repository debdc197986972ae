"""
L0 Data — Module-level constants.

Pure data. No logic. No imports beyond the enum models.
"""

from __future__ import annotations

from setup_k6.core.models.platform import OS, Arch

# ── Release host ────────────────────────────────────────────────

K6_REPO = "grafana/k6"
K6_DOWNLOAD_BASE = f"https://github.com/{K6_REPO}/releases/download/"
K6_BINARY = "k6"

GITHUB_API = "https://api.github.com"

# ── Raw host identifiers → enums ────────────────────────────────
#
# Keys are lowercase.  OS tokens cover both ``sys.platform`` style
# (``linux``, ``darwin``, ``win32``) and ``platform.system()`` style
# (``Windows``).  Arch tokens cover Node-style (``x64``), ``uname -m``
# style (``x86_64``, ``aarch64``) and Go-style (``amd64``, ``arm64``).

OS_MAP: dict[str, OS] = {
    "linux": OS.LINUX,
    "darwin": OS.DARWIN,
    "win32": OS.WINDOWS,
    "windows": OS.WINDOWS,
    "cygwin": OS.WINDOWS,
    "msys": OS.WINDOWS,
}

ARCH_MAP: dict[str, Arch] = {
    "x64": Arch.AMD64,
    "x86_64": Arch.AMD64,
    "amd64": Arch.AMD64,
    "arm64": Arch.ARM64,
    "aarch64": Arch.ARM64,
    "armv8": Arch.ARM64,
    "armv8l": Arch.ARM64,
}

# ── Tool matrix ─────────────────────────────────────────────────
#
# Windows is a known OS with no provisionable architecture: the k6
# Windows archive ships ``k6.exe`` and is not handled here.

K6_SUPPORTED_MATRIX: dict[OS, frozenset[Arch]] = {
    OS.LINUX: frozenset({Arch.AMD64, Arch.ARM64}),
    OS.DARWIN: frozenset({Arch.AMD64, Arch.ARM64}),
    OS.WINDOWS: frozenset(),
}

# k6 release archives name macOS "macos", not "darwin".
K6_OS_TOKEN: dict[OS, str] = {
    OS.LINUX: "linux",
    OS.DARWIN: "macos",
    OS.WINDOWS: "windows",
}

K6_ARCHIVE_EXTENSION: dict[OS, str] = {
    OS.LINUX: "tar.gz",
    OS.DARWIN: "zip",
    OS.WINDOWS: "zip",
}

# ── Browser (Google Chrome) ─────────────────────────────────────

BROWSER_NAME = "google-chrome"

CHROME_SIGNING_KEY_URL = "https://dl-ssl.google.com/linux/linux_signing_key.pub"
CHROME_KEYRING = "/usr/share/keyrings/google-linux-signing-key.gpg"
CHROME_APT_LIST = "/etc/apt/sources.list.d/google-chrome.list"
CHROME_APT_SOURCE = (
    f"deb [arch=amd64 signed-by={CHROME_KEYRING}] "
    "http://dl.google.com/linux/chrome/deb/ stable main"
)
CHROME_APT_PACKAGE = "google-chrome-stable"

# Google's apt repository publishes amd64 packages only.
CHROME_LINUX_ARCHES: frozenset[Arch] = frozenset({Arch.AMD64})

# Inspection command + the stdout marker proving the browser is there.
CHROME_PROBES: dict[OS, tuple[list[str], str]] = {
    OS.LINUX: (["google-chrome", "--version"], "Google Chrome"),
    OS.DARWIN: (
        ["mdfind", "kMDItemCFBundleIdentifier == 'com.google.Chrome'"],
        "Chrome.app",
    ),
    OS.WINDOWS: (["choco", "list", "-i"], "Google Chrome|"),
}

# ── Environment ─────────────────────────────────────────────────

BROWSER_ARGS_ENV = "K6_BROWSER_ARGS"
BROWSER_ARGS_NO_SANDBOX = "no-sandbox"
