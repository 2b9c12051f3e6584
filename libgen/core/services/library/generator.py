"""
Node library generator — the full pipeline for one invocation.

    normalize → gate → workspace:lib → library files → (tsconfig → js)
              → build target → format

Everything is staged in the tree it is given; committing is the
caller's job. Any exception leaves the disk exactly as it was.
"""

from __future__ import annotations

import logging

from libgen.adapters.registry import AdapterRegistry
from libgen.adapters.workspace_lib import WORKSPACE_LIB
from libgen.core.config.loader import load_workspace_context
from libgen.core.engine.executor import chain, external_generator, noop
from libgen.core.engine.tree import Tree
from libgen.core.models.options import LibraryOptions, NormalizedOptions
from libgen.core.services.formatter import format_files
from libgen.core.services.library.files import create_files
from libgen.core.services.library.manifest import add_build_target
from libgen.core.services.library.normalize import (
    ensure_publishable_import_path,
    normalize_options,
)
from libgen.core.services.library.to_js import update_tsconfigs_to_js

logger = logging.getLogger(__name__)


def library_generator(
    tree: Tree,
    options: LibraryOptions,
    registry: AdapterRegistry,
) -> NormalizedOptions:
    """Stage a new node library in ``tree``.

    Raises:
        ConfigurationError: Publishable without a proper import path,
            or a project root outside the workspace. Raised before
            anything is staged.
        GeneratorError: The base library generator failed.
        WorkspaceError: workspace.json is missing, invalid, or lost
            the new project entry.
    """
    normalized = normalize_options(options, load_workspace_context(tree))
    ensure_publishable_import_path(normalized, options)

    base_params = options.model_dump(by_alias=True, exclude_none=True)
    base_params["importPath"] = normalized.import_path

    chain([
        external_generator(registry, WORKSPACE_LIB, base_params),
        lambda t: create_files(t, normalized),
        (lambda t: update_tsconfigs_to_js(t, normalized)) if normalized.js else noop,
        lambda t: add_build_target(t, normalized),
        noop if normalized.skip_format else format_files,
    ])(tree)

    logger.info("Library '%s' staged (%d change(s))", normalized.name, len(tree.changes()))
    return normalized
