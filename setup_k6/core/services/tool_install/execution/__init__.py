"""
L4 Execution — ``__init__.py`` re-exports.

These modules WRITE: subprocesses, downloads, extraction, chmod.
"""

from setup_k6.core.services.tool_install.execution.download import (  # noqa: F401
    download_file,
)
from setup_k6.core.services.tool_install.execution.extract import (  # noqa: F401
    extract_archive,
)
from setup_k6.core.services.tool_install.execution.permissions import (  # noqa: F401
    chmod_recursive,
)
from setup_k6.core.services.tool_install.execution.subprocess_runner import (  # noqa: F401
    CommandResult,
    execute,
)
