"""
L2 Resolver — ``__init__.py`` re-exports.

Turns a requested version and a platform into a concrete artifact.
"""

from setup_k6.core.services.tool_install.resolver.artifact import (  # noqa: F401
    build_artifact,
    normalize_version,
)
from setup_k6.core.services.tool_install.resolver.release_index import (  # noqa: F401
    get_latest_version,
)
