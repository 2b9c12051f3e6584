"""
Workspace loader — reads workspace.json and nx.json into domain models.

All reads go through a ``Tree`` so generators see changes staged by
earlier steps in the same run (for example the project entry added by
the base library generator).
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from libgen.core.engine.tree import Tree, TreeError
from libgen.core.models.workspace import NxConfig, WorkspaceContext, WorkspaceManifest

logger = logging.getLogger(__name__)

WORKSPACE_CONFIG_FILE = "workspace.json"
NX_CONFIG_FILE = "nx.json"


class WorkspaceError(Exception):
    """Raised when the workspace manifests are missing, invalid, or inconsistent."""


def find_workspace_root(start_dir: Path | None = None) -> Path | None:
    """Search for workspace.json starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        The directory holding workspace.json, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        if (current / WORKSPACE_CONFIG_FILE).is_file():
            return current
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_workspace_manifest(tree: Tree) -> WorkspaceManifest:
    """Load and validate workspace.json from the tree.

    Raises:
        WorkspaceError: If the file is missing or invalid.
    """
    if not tree.exists(WORKSPACE_CONFIG_FILE):
        raise WorkspaceError(f"No {WORKSPACE_CONFIG_FILE} found in {tree.root}")

    try:
        data = tree.read_json(WORKSPACE_CONFIG_FILE)
    except TreeError as e:
        raise WorkspaceError(str(e)) from e

    if not isinstance(data, dict):
        raise WorkspaceError(
            f"Expected a JSON object in {WORKSPACE_CONFIG_FILE}, got {type(data).__name__}"
        )

    try:
        return WorkspaceManifest.model_validate(data)
    except ValidationError as e:
        raise WorkspaceError(f"Invalid {WORKSPACE_CONFIG_FILE}: {e}") from e


def save_workspace_manifest(tree: Tree, manifest: WorkspaceManifest) -> None:
    tree.write_json(WORKSPACE_CONFIG_FILE, manifest.to_json())


def load_nx_config(tree: Tree) -> NxConfig:
    """Load nx.json from the tree. A missing nx.json means all defaults."""
    if not tree.exists(NX_CONFIG_FILE):
        logger.debug("No %s — using defaults", NX_CONFIG_FILE)
        return NxConfig()

    try:
        data = tree.read_json(NX_CONFIG_FILE)
    except TreeError as e:
        raise WorkspaceError(str(e)) from e

    if not isinstance(data, dict):
        raise WorkspaceError(
            f"Expected a JSON object in {NX_CONFIG_FILE}, got {type(data).__name__}"
        )

    try:
        return NxConfig.model_validate(data)
    except ValidationError as e:
        raise WorkspaceError(f"Invalid {NX_CONFIG_FILE}: {e}") from e


def save_nx_config(tree: Tree, nx_config: NxConfig) -> None:
    tree.write_json(NX_CONFIG_FILE, nx_config.to_json())


def load_workspace_context(tree: Tree) -> WorkspaceContext:
    """Collect the read-only workspace facts option normalization needs."""
    nx_config = load_nx_config(tree)
    context = WorkspaceContext(
        root=tree.root,
        libs_root=nx_config.libs_dir,
        npm_scope=nx_config.npm_scope,
    )
    logger.debug(
        "Workspace %s: libsDir=%s npmScope=%s",
        context.root, context.libs_root, context.npm_scope,
    )
    return context
