"""External tool dependency checker."""

from __future__ import annotations

import shutil
from pathlib import Path

from tizenbridge.exceptions import ToolNotFoundError

# Install hints for required tools
TOOL_INSTALL_HINTS: dict[str, str] = {
    "sdb": (
        "Part of the Tizen SDK (tools/sdb) — add it to PATH, set "
        "TIZENBRIDGE_SDB, or configure sdb_path in ~/.tizenbridge/config.json"
    ),
}


def check_tool(tool: str) -> bool:
    """Check if a tool is available on PATH or as an explicit file path."""

    if Path(tool).expanduser().is_file():
        return True

    return shutil.which(tool) is not None


def require(*tools: str) -> None:
    """Require that all specified tools are available.

    Args:
        *tools: Names or paths of tools that must be available.

    Raises:
        ToolNotFoundError: If any tool is not found.
    """
    for tool in tools:
        if not check_tool(tool):
            raise ToolNotFoundError(tool, TOOL_INSTALL_HINTS.get(Path(tool).name))
