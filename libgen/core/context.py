"""
Workspace context — which workspace this process is generating into.

Set ONCE at startup by the CLI (``--workspace`` or auto-detected)
and read by use cases that weren't handed an explicit root.
Tests either pass a root explicitly or set it from ``tmp_path``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


_workspace_root: Optional[Path] = None


def set_workspace_root(root: Path | None) -> None:
    """Register the workspace root for the current process."""
    global _workspace_root
    _workspace_root = root


def get_workspace_root() -> Optional[Path]:
    """Return the current workspace root, or None if not yet set."""
    return _workspace_root
