"""
Base library generator — registers a library in the workspace.

This is the scaffold every library generator builds on. It:
    - adds the project to workspace.json (lint/test targets)
    - records the project's tags in nx.json
    - maps the import path in tsconfig.base.json
    - stages the skeleton sources and configs

The node library generator reaches it only through the
``workspace:lib`` adapter.
"""

from __future__ import annotations

import logging
import posixpath
from pathlib import Path
from typing import Any

from libgen.core.config.loader import (
    NX_CONFIG_FILE,
    WorkspaceError,
    load_nx_config,
    load_workspace_context,
    load_workspace_manifest,
    save_nx_config,
    save_workspace_manifest,
)
from libgen.core.engine.tree import Tree
from libgen.core.models.options import LibraryOptions, NormalizedOptions
from libgen.core.models.template import GeneratedFile
from libgen.core.models.workspace import NxProject, ProjectEntry
from libgen.core.services.library.files import (
    convert_to_js,
    merge_files,
    move,
    offset_from_root,
    template_features,
    template_placeholders,
)
from libgen.core.services.library.normalize import normalize_options
from libgen.core.services.library.template_engine import render_template_set
from libgen.core.services.library.to_js import maybe_js, update_tsconfigs_to_js

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "files" / "lib"
TSCONFIG_BASE = "tsconfig.base.json"

ESLINT_BUILDER = "@nrwl/linter:eslint"
JEST_BUILDER = "@nrwl/jest:jest"

_JEST_ONLY = ("jest.config.js", "tsconfig.spec.json", "spec.ts")


def project_targets(options: NormalizedOptions, runner_key: str) -> dict[str, Any]:
    """Initial lint and test targets for a new library."""
    root = options.project_root
    targets: dict[str, Any] = {}

    if options.linter == "eslint":
        targets["lint"] = {
            runner_key: ESLINT_BUILDER,
            "options": {
                "lintFilePatterns": [f"{root}/**/*.js" if options.js else f"{root}/**/*.ts"],
            },
        }

    if options.unit_test_runner == "jest":
        targets["test"] = {
            runner_key: JEST_BUILDER,
            "outputs": [f"coverage/{root}"],
            "options": {
                "jestConfig": f"{root}/jest.config.js",
                "passWithNoTests": True,
            },
        }

    return targets


def eslint_config(options: NormalizedOptions) -> dict[str, Any]:
    offset = offset_from_root(options.project_root)
    return {
        "extends": [f"{offset}.eslintrc.json"],
        "ignorePatterns": ["!**/*"],
        "overrides": [
            {"files": ["*.ts", "*.tsx", "*.js", "*.jsx"], "rules": {}},
            {"files": ["*.ts", "*.tsx"], "rules": {}},
            {"files": ["*.js", "*.jsx"], "rules": {}},
        ],
    }


def add_project(tree: Tree, options: NormalizedOptions) -> None:
    manifest = load_workspace_manifest(tree)
    if options.name in manifest.projects:
        raise WorkspaceError(f"Project '{options.name}' already exists in workspace.json")

    entry = ProjectEntry.model_validate({
        "root": options.project_root,
        "sourceRoot": f"{options.project_root}/src",
        "projectType": "library",
        manifest.target_key: project_targets(options, manifest.runner_key),
    })
    manifest.projects[options.name] = entry
    save_workspace_manifest(tree, manifest)


def add_tags(tree: Tree, options: NormalizedOptions) -> None:
    if not tree.exists(NX_CONFIG_FILE):
        logger.debug("No %s — tags not recorded", NX_CONFIG_FILE)
        return
    nx_config = load_nx_config(tree)
    nx_config.projects[options.name] = NxProject(tags=options.parsed_tags)
    save_nx_config(tree, nx_config)


def add_import_path_mapping(tree: Tree, options: NormalizedOptions) -> None:
    if not tree.exists(TSCONFIG_BASE):
        logger.warning("No %s — import path '%s' not mapped", TSCONFIG_BASE, options.import_path)
        return

    data = tree.read_json(TSCONFIG_BASE)
    paths = data.setdefault("compilerOptions", {}).setdefault("paths", {})
    if options.import_path in paths:
        raise WorkspaceError(
            f"You already have a library using the import path \"{options.import_path}\". "
            "Make sure to specify a unique one."
        )
    paths[options.import_path] = [maybe_js(options, f"{options.project_root}/src/index.ts")]
    tree.write_json(TSCONFIG_BASE, data)


def generate_base_files(options: NormalizedOptions) -> list[GeneratedFile]:
    files = render_template_set(
        TEMPLATES_DIR,
        features=template_features(options),
        placeholders=template_placeholders(options),
    )
    files = move(options.project_root)(files)
    if options.unit_test_runner == "none":
        files = [f for f in files if not f.path.endswith(_JEST_ONLY)]
    if options.js:
        files = convert_to_js(files)
    return files


def generate_workspace_library(tree: Tree, options: LibraryOptions) -> NormalizedOptions:
    """Register a new library and stage its skeleton.

    Raises:
        WorkspaceError: If the project or import path is already taken,
            or the workspace manifests can't be read.
        ConfigurationError: If the options don't resolve to a valid project.
    """
    normalized = normalize_options(options, load_workspace_context(tree))

    add_project(tree, normalized)
    add_tags(tree, normalized)
    if not normalized.skip_ts_config:
        add_import_path_mapping(tree, normalized)

    files = generate_base_files(normalized)
    merge_files(tree, files)
    if normalized.linter == "eslint":
        tree.write_json(
            posixpath.join(normalized.project_root, ".eslintrc.json"),
            eslint_config(normalized),
        )
    if normalized.js:
        update_tsconfigs_to_js(tree, normalized)

    logger.info("Registered library '%s' at %s", normalized.name, normalized.project_root)
    return normalized
