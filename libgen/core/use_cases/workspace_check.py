"""
Workspace check use case — validate the manifests a generator depends on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from libgen.core.config.defaults_loader import ConfigError, load_generator_defaults
from libgen.core.config.loader import (
    NX_CONFIG_FILE,
    WorkspaceError,
    find_workspace_root,
    load_nx_config,
    load_workspace_manifest,
)
from libgen.core.context import get_workspace_root
from libgen.core.engine.tree import Tree
from libgen.core.services.workspace_lib.generator import TSCONFIG_BASE


@dataclass
class WorkspaceCheckResult:
    """Result of workspace validation."""

    valid: bool = False
    workspace_root: Path | None = None
    project_count: int = 0
    libs_dir: str = ""
    npm_scope: str | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "workspace_root": str(self.workspace_root) if self.workspace_root else None,
            "project_count": self.project_count,
            "libs_dir": self.libs_dir,
            "npm_scope": self.npm_scope,
            "errors": self.errors,
            "warnings": self.warnings,
        }


def check_workspace(workspace_root: Path | None = None) -> WorkspaceCheckResult:
    """Validate workspace.json, nx.json and libgen.yml and report issues."""
    result = WorkspaceCheckResult()

    root = workspace_root or get_workspace_root() or find_workspace_root()
    if root is None:
        result.errors.append("No workspace.json found.")
        return result
    result.workspace_root = root

    tree = Tree(root)

    try:
        manifest = load_workspace_manifest(tree)
        result.project_count = len(manifest.projects)
    except WorkspaceError as e:
        result.errors.append(str(e))
        return result

    try:
        nx_config = load_nx_config(tree)
        result.libs_dir = nx_config.libs_dir
        result.npm_scope = nx_config.npm_scope
    except WorkspaceError as e:
        result.errors.append(str(e))
        return result

    try:
        load_generator_defaults(root)
    except ConfigError as e:
        result.errors.append(str(e))

    if not tree.exists(NX_CONFIG_FILE):
        result.warnings.append(f"No {NX_CONFIG_FILE}: project tags won't be recorded.")
    if not nx_config.npm_scope:
        result.warnings.append("No npmScope in nx.json: default import paths will start with '@/'.")
    if not tree.exists(TSCONFIG_BASE):
        result.warnings.append(f"No {TSCONFIG_BASE}: import paths won't be mapped.")

    # Projects whose root doesn't exist on disk
    for name, project in manifest.projects.items():
        if not (root / project.root).exists():
            result.warnings.append(f"Project '{name}' root does not exist: {project.root}")

    result.valid = len(result.errors) == 0
    return result
