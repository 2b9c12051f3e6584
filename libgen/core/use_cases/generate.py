"""
Generate use case — run the library generator and commit the result.

Loads the workspace, merges libgen.yml defaults with the explicit
options, stages the library in a fresh tree, and commits it unless
this is a dry run. Known failures come back in ``GenerateResult.error``
and leave the workspace untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from libgen.adapters.registry import AdapterRegistry, default_registry
from libgen.core.config.defaults_loader import (
    ConfigError,
    load_generator_defaults,
    merge_options,
)
from libgen.core.config.loader import WorkspaceError, find_workspace_root
from libgen.core.context import get_workspace_root
from libgen.core.engine.executor import GeneratorError
from libgen.core.engine.tree import Tree, TreeError
from libgen.core.models.options import NormalizedOptions
from libgen.core.models.template import FileChange
from libgen.core.services.library.generator import library_generator
from libgen.core.services.library.normalize import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class GenerateResult:
    """Result of running the library generator."""

    options: NormalizedOptions | None = None
    workspace_root: Path | None = None
    changes: list[FileChange] = field(default_factory=list)
    committed: bool = False
    dry_run: bool = False
    error: str | None = None

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            return result

        result["workspace_root"] = str(self.workspace_root)
        result["dry_run"] = self.dry_run
        result["committed"] = self.committed
        if self.options:
            result["project"] = {
                "name": self.options.name,
                "projectRoot": self.options.project_root,
                "projectDirectory": self.options.project_directory,
                "importPath": self.options.import_path,
                "tags": self.options.parsed_tags,
            }
        result["changes"] = [c.model_dump() for c in self.changes]
        return result


def _resolve_root(workspace_root: Path | None) -> Path:
    root = workspace_root or get_workspace_root() or find_workspace_root()
    if root is None:
        raise WorkspaceError(
            "No workspace.json found. Run from inside a workspace or pass --workspace."
        )
    return root


def generate_library(
    options: dict[str, Any],
    workspace_root: Path | None = None,
    dry_run: bool = False,
    registry: AdapterRegistry | None = None,
) -> GenerateResult:
    """Generate a node library in the workspace.

    Args:
        options: Explicit option values (camelCase keys). ``None`` values
            fall back to libgen.yml defaults.
        workspace_root: Workspace directory (default: context, then auto-detect).
        dry_run: Stage and report changes without writing them.
        registry: Adapter registry (default: built-in generators).

    Returns:
        GenerateResult with the staged/applied changes or an error.
    """
    result = GenerateResult(dry_run=dry_run)

    try:
        root = _resolve_root(workspace_root)
        result.workspace_root = root

        defaults = load_generator_defaults(root).for_generator("library")
        raw = merge_options(defaults, options)

        tree = Tree(root)
        result.options = library_generator(tree, raw, registry or default_registry())

        if dry_run:
            result.changes = tree.changes()
            logger.info("Dry run: %d change(s) not written", len(result.changes))
        else:
            result.changes = tree.commit()
            result.committed = True

    except (ConfigurationError, ConfigError, WorkspaceError, GeneratorError, TreeError) as e:
        logger.debug("Generation failed: %s", e)
        result.error = str(e)
    except OSError as e:
        logger.debug("Workspace I/O failed: %s", e)
        result.error = f"Workspace I/O error: {e}"

    return result
