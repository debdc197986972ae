"""
L4 Execution — Archive download.

Streams a URL to a fresh file under the runner's temp directory.
No checksum verification, no resume, no cache: every call fetches.
"""

from __future__ import annotations

import http.client
import logging
import os
import tempfile
import urllib.error
import urllib.parse
import urllib.request
from pathlib import Path

from setup_k6 import __version__
from setup_k6.core.errors import DownloadFailed

logger = logging.getLogger(__name__)

_CHUNK = 8192


def _fmt_size(n: int | float) -> str:
    """Format byte count to human-readable string."""
    for unit in ("B", "KB", "MB", "GB"):
        if n < 1024:
            return f"{n:.1f} {unit}"
        n /= 1024
    return f"{n:.1f} TB"


def _temp_root() -> Path:
    """Directory that holds downloads and extractions for this job."""
    runner_temp = os.environ.get("RUNNER_TEMP")
    if runner_temp:
        root = Path(runner_temp)
        root.mkdir(parents=True, exist_ok=True)
        return root
    return Path(tempfile.gettempdir())


def download_file(url: str, *, dest_dir: Path | None = None, timeout: int = 60) -> Path:
    """Download ``url`` and return the local path.

    The file keeps the URL's basename (so ``.tar.gz`` / ``.zip``
    survives for extraction) inside a new directory, so concurrent or
    repeated runs never collide.

    Raises:
        DownloadFailed: Any HTTP, network (including a body cut
            short), or local write error.  A partial file is removed
            before raising.
    """
    name = Path(urllib.parse.urlparse(url).path).name or "download"
    target_dir = Path(tempfile.mkdtemp(prefix="setup-k6-dl-", dir=dest_dir or _temp_root()))
    dest = target_dir / name

    logger.info("Downloading %s", url)
    req = urllib.request.Request(url, headers={"User-Agent": f"setup-k6/{__version__}"})
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            total = int(resp.headers.get("Content-Length") or 0)
            downloaded = 0
            last_progress = 0
            with open(dest, "wb") as f:
                while True:
                    chunk = resp.read(_CHUNK)
                    if not chunk:
                        break
                    f.write(chunk)
                    downloaded += len(chunk)

                    if total > 0:
                        pct = int(downloaded * 100 / total)
                        if pct >= last_progress + 25:
                            last_progress = pct
                            logger.info(
                                "Download progress: %d%% (%s / %s)",
                                pct, _fmt_size(downloaded), _fmt_size(total),
                            )
    except urllib.error.HTTPError as exc:
        dest.unlink(missing_ok=True)
        raise DownloadFailed(url, f"HTTP {exc.code} {exc.reason}") from exc
    except (urllib.error.URLError, http.client.HTTPException, OSError) as exc:
        dest.unlink(missing_ok=True)
        raise DownloadFailed(url, exc) from exc

    logger.debug("Downloaded %s to %s", _fmt_size(downloaded), dest)
    return dest
