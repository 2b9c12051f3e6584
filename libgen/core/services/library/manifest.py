"""
Manifest patcher — adds a ``build`` target for distributable libraries.

Only publishable or buildable libraries get one. The project entry must
already exist (the base library generator adds it); a project without a
target container is left alone.
"""

from __future__ import annotations

import logging
from typing import Any

from libgen.core.config.loader import (
    WorkspaceError,
    load_workspace_manifest,
    save_workspace_manifest,
)
from libgen.core.engine.tree import Tree
from libgen.core.models.options import NormalizedOptions
from libgen.core.services.library.to_js import maybe_js

logger = logging.getLogger(__name__)

PACKAGE_BUILDER = "@nrwl/node:package"


def build_target(options: NormalizedOptions, runner_key: str = "builder") -> dict[str, Any]:
    """The ``build`` target descriptor for a distributable library."""
    root = options.project_root
    target_options: dict[str, Any] = {
        "outputPath": f"dist/{options.libs_root}/{options.project_directory}",
        "tsConfig": f"{root}/tsconfig.lib.json",
        "packageJson": f"{root}/package.json",
        "main": maybe_js(options, f"{root}/src/index.ts"),
        "assets": [f"{root}/*.md"],
    }
    if options.root_dir:
        target_options["srcRootForCompilationRoot"] = options.root_dir

    return {
        runner_key: PACKAGE_BUILDER,
        "outputs": ["{options.outputPath}"],
        "options": target_options,
    }


def add_build_target(tree: Tree, options: NormalizedOptions) -> bool:
    """Set the project's ``build`` target in workspace.json.

    Returns:
        True if the manifest was patched, False if there was nothing to do.

    Raises:
        WorkspaceError: If the project isn't registered in workspace.json.
    """
    if not options.publishable and not options.buildable:
        return False

    manifest = load_workspace_manifest(tree)
    project = manifest.get_project(options.name)
    if project is None:
        raise WorkspaceError(
            f"Project '{options.name}' is not registered in workspace.json"
        )

    container = project.target_container(manifest.version)
    if container is None:
        logger.debug("Project '%s' has no %s — build target skipped",
                     options.name, manifest.target_key)
        return False

    container["build"] = build_target(options, manifest.runner_key)
    save_workspace_manifest(tree, manifest)
    logger.info("Added build target to '%s'", options.name)
    return True
