"""
L2 Resolver — Release index lookup.

Asks the GitHub releases API for the latest published tag of a
repository.  This is the only network call the resolver makes, and
it is injected into the provisioner so naming logic stays testable
offline.
"""

from __future__ import annotations

import http.client
import json
import logging
import os
import urllib.error
import urllib.request

from setup_k6 import __version__
from setup_k6.core.errors import ReleaseLookupFailed
from setup_k6.core.services.tool_install.data.constants import GITHUB_API, K6_REPO
from setup_k6.core.services.tool_install.resolver.artifact import normalize_version

logger = logging.getLogger(__name__)


def _api_headers() -> dict[str, str]:
    headers = {
        "Accept": "application/vnd.github+json",
        "User-Agent": f"setup-k6/{__version__}",
    }
    # Unauthenticated calls are rate limited to 60/hour per runner IP.
    token = os.environ.get("GITHUB_TOKEN", "")
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def get_latest_version(repo: str = K6_REPO, *, timeout: int = 15) -> str:
    """Return the latest release version of ``repo``, without the ``v``.

    Args:
        repo: GitHub repository in ``owner/name`` form.
        timeout: HTTP timeout in seconds.

    Raises:
        ReleaseLookupFailed: HTTP/URL error, unparsable body, or a
            release without a usable ``tag_name``.
    """
    api_url = f"{GITHUB_API}/repos/{repo}/releases/latest"
    logger.debug("Fetching latest release from %s", api_url)

    req = urllib.request.Request(api_url, headers=_api_headers())
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            data = json.loads(resp.read())
    except urllib.error.HTTPError as exc:
        raise ReleaseLookupFailed(repo, f"HTTP {exc.code} from {api_url}") from exc
    except (urllib.error.URLError, http.client.HTTPException, OSError) as exc:
        raise ReleaseLookupFailed(repo, exc) from exc
    except ValueError as exc:
        raise ReleaseLookupFailed(repo, f"invalid JSON: {exc}") from exc

    tag = data.get("tag_name") if isinstance(data, dict) else None
    if not isinstance(tag, str) or not tag.strip().lstrip("vV"):
        raise ReleaseLookupFailed(repo, "release has no tag_name")

    version = normalize_version(tag)
    logger.debug("Latest %s version is %s", repo, version)
    return version
