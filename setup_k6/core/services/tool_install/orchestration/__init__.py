"""
L5 Orchestration — ``__init__.py`` re-exports.

The two provisioning workflows.  They share the platform detector
and never call each other.
"""

from setup_k6.core.services.tool_install.orchestration.browser import (  # noqa: F401
    BrowserInstaller,
    LinuxBrowserInstaller,
    MacosBrowserInstaller,
    WindowsBrowserInstaller,
    ensure_browser_installed,
    select_browser_installer,
)
from setup_k6.core.services.tool_install.orchestration.k6 import (  # noqa: F401
    provision_tool,
    relocate_binary,
)
