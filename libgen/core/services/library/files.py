"""
File-set assembler — the node library's own template files.

Renders ``files/lib`` for a set of normalized options, rebases it under
the project root, and runs an ordered list of predicate-gated steps
over the result:

    unitTestRunner == 'none'          → drop *spec.ts
    not publishable and not buildable → drop package.json
    js                                → convert to plain JavaScript
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Callable
from pathlib import Path

from libgen.core.engine.tree import Tree
from libgen.core.models.options import NormalizedOptions
from libgen.core.models.template import GeneratedFile
from libgen.core.services.library.names import names
from libgen.core.services.library.template_engine import render_template_set
from libgen.core.services.library.to_js import to_js

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "files" / "lib"

SPEC_SUFFIX = "spec.ts"
PACKAGE_JSON = "package.json"

FileStep = Callable[[list[GeneratedFile]], list[GeneratedFile]]


def offset_from_root(full_path_to_dir: str) -> str:
    """Relative path from ``full_path_to_dir`` back to the workspace root.

    offset_from_root('libs/shared/foo') → '../../../'
    """
    parts = posixpath.normpath(full_path_to_dir).split("/")
    return "".join("../" for part in parts if part and part != ".")


def template_placeholders(options: NormalizedOptions) -> dict[str, str]:
    """String substitutions available to templates."""
    placeholders = {
        key: value
        for key, value in options.model_dump(by_alias=True).items()
        if isinstance(value, str)
    }
    placeholders.update(names(options.name))
    placeholders["tmpl"] = ""
    placeholders["offsetFromRoot"] = offset_from_root(options.project_root)
    return placeholders


def template_features(options: NormalizedOptions) -> dict[str, bool]:
    """Feature flags for conditional template blocks."""
    features = {
        key: value
        for key, value in options.model_dump(by_alias=True).items()
        if isinstance(value, bool)
    }
    features["jest"] = options.unit_test_runner == "jest"
    features["eslint"] = options.linter == "eslint"
    features["distributable"] = options.publishable or options.buildable
    return features


def move(root: str) -> FileStep:
    def _move(files: list[GeneratedFile]) -> list[GeneratedFile]:
        return [
            f.model_copy(update={"path": posixpath.join(root, f.path)})
            for f in files
        ]
    return _move


def drop_suffix(suffix: str) -> FileStep:
    def _drop(files: list[GeneratedFile]) -> list[GeneratedFile]:
        return [f for f in files if not f.path.endswith(suffix)]
    return _drop


def convert_to_js(files: list[GeneratedFile]) -> list[GeneratedFile]:
    return [to_js(f) for f in files]


def library_file_steps(
    options: NormalizedOptions,
) -> list[tuple[Callable[[NormalizedOptions], bool], FileStep]]:
    """The ordered (predicate, step) pipeline applied after rendering."""
    return [
        (lambda o: True, move(options.project_root)),
        (lambda o: o.unit_test_runner == "none", drop_suffix(SPEC_SUFFIX)),
        (lambda o: not (o.publishable or o.buildable), drop_suffix(PACKAGE_JSON)),
        (lambda o: o.js, convert_to_js),
    ]


def generate_library_files(
    options: NormalizedOptions,
    template_dir: Path = TEMPLATES_DIR,
) -> list[GeneratedFile]:
    """Render the library template set for ``options``.

    Returns:
        Workspace-relative files in template order. Same options, same output.
    """
    files = render_template_set(
        template_dir,
        features=template_features(options),
        placeholders=template_placeholders(options),
    )
    for predicate, step in library_file_steps(options):
        if predicate(options):
            files = step(files)
    return files


def merge_files(tree: Tree, files: list[GeneratedFile]) -> None:
    """Stage files in the tree.

    Existing paths, on disk or staged, are replaced unconditionally.
    No merging, no conflict reporting.
    """
    for f in files:
        if tree.exists(f.path):
            logger.debug("Overwriting %s", f.path)
        tree.write(f.path, f.content)


def create_files(tree: Tree, options: NormalizedOptions) -> list[GeneratedFile]:
    files = generate_library_files(options)
    merge_files(tree, files)
    logger.info("Staged %d library file(s) under %s", len(files), options.project_root)
    return files
