"""
Tool installation service — package re-exports.

    from setup_k6.core.services.tool_install import provision_tool

Each symbol lives in its single-responsibility module inside the
appropriate onion layer (data → resolver → detection → execution →
orchestration).
"""

# ── L2: Resolver ──
from setup_k6.core.services.tool_install.resolver.artifact import (  # noqa: F401
    build_artifact,
    normalize_version,
)
from setup_k6.core.services.tool_install.resolver.release_index import (  # noqa: F401
    get_latest_version,
)

# ── L3: Detection ──
from setup_k6.core.services.tool_install.detection.platform import (  # noqa: F401
    detect,
    detect_host,
    validate_tool_platform,
)

# ── L5: Orchestration ──
from setup_k6.core.services.tool_install.orchestration.browser import (  # noqa: F401
    ensure_browser_installed,
    select_browser_installer,
)
from setup_k6.core.services.tool_install.orchestration.k6 import (  # noqa: F401
    provision_tool,
)
