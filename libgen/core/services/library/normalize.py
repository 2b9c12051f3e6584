"""
Option normalization and the publishable-library gate.

``normalize_options`` is pure: raw options + workspace facts in,
frozen ``NormalizedOptions`` out. ``ensure_publishable_import_path``
must run before anything is staged in the tree.
"""

from __future__ import annotations

import logging
import posixpath
import re

from libgen.core.models.options import LibraryOptions, NormalizedOptions
from libgen.core.models.workspace import WorkspaceContext
from libgen.core.services.library.names import to_file_name

logger = logging.getLogger(__name__)

IMPORT_PATH_REQUIRED = (
    'For publishable libs you have to provide a proper "--importPath" which needs '
    "to be a valid npm package name (e.g. my-awesome-lib or @myorg/my-lib)"
)

# npm package names: lowercase, optional @scope/, no leading '.' or '_'
_PACKAGE_NAME_RE = re.compile(
    r"^(?:@[a-z0-9\-~][a-z0-9\-._~]*/)?[a-z0-9\-~][a-z0-9\-._~]*$"
)
_PACKAGE_NAME_MAX = 214


class ConfigurationError(Exception):
    """Raised when the options can't describe a valid library."""


def is_valid_package_name(value: str) -> bool:
    """Whether ``value`` is an acceptable npm package name."""
    if not value or len(value) > _PACKAGE_NAME_MAX:
        return False
    return bool(_PACKAGE_NAME_RE.match(value))


def parse_tags(tags: str | None) -> list[str]:
    """Split a comma-separated tag string. Empty tokens are kept."""
    if not tags:
        return []
    return [t.strip() for t in tags.split(",")]


def _has_dot_segment(path: str) -> bool:
    return any(segment in (".", "..") for segment in path.split("/"))


def _is_under(path: str, root: str) -> bool:
    """Whether ``path`` is strictly inside ``root`` (both normalized, relative)."""
    if path.startswith("/") or path == ".." or path.startswith("../"):
        return False
    if root == ".":
        return path != "."
    return path.startswith(root + "/")


def normalize_options(
    options: LibraryOptions,
    workspace: WorkspaceContext,
) -> NormalizedOptions:
    """Resolve names, paths, tags and import path for a new library.

    Raises:
        ConfigurationError: If the project root would not be strictly inside the libs
            directory, or the name or directory has a '.' or '..' segment.
    """
    name = to_file_name(options.name)
    directory = to_file_name(options.directory) if options.directory else None
    project_directory = f"{directory}/{name}" if directory else name

    project_name = project_directory.replace("/", "-")
    libs_root = posixpath.normpath(workspace.libs_root)
    project_root = posixpath.normpath(f"{libs_root}/{project_directory}")

    if _has_dot_segment(name) or (directory and _has_dot_segment(directory)):
        raise ConfigurationError(
            f"Library '{options.name}' can't use '.' or '..' in its name or directory"
        )
    if not _is_under(project_root, libs_root):
        raise ConfigurationError(
            f"Library '{options.name}' must be created under '{libs_root}', not at '{project_root}'"
        )

    prefix = workspace.npm_scope or ""
    import_path = options.import_path or f"@{prefix}/{project_directory}"

    data = options.model_dump()
    data.update(
        name=project_name,
        file_name=project_name,
        project_directory=project_directory,
        project_root=project_root,
        prefix=prefix,
        parsed_tags=parse_tags(options.tags),
        import_path=import_path,
        libs_root=libs_root,
    )
    normalized = NormalizedOptions.model_validate(data)
    logger.debug(
        "Normalized '%s' → name=%s root=%s importPath=%s",
        options.name, normalized.name, normalized.project_root, normalized.import_path,
    )
    return normalized


def ensure_publishable_import_path(
    options: NormalizedOptions,
    raw: LibraryOptions,
) -> None:
    """Refuse publishable libraries without a proper, explicit import path.

    Raises:
        ConfigurationError: If publishable and ``--importPath`` was not given
            or is not a valid npm package name.
    """
    if options.publishable is not True:
        return

    if not raw.import_path:
        raise ConfigurationError(IMPORT_PATH_REQUIRED)

    if not is_valid_package_name(raw.import_path):
        raise ConfigurationError(
            f'"{raw.import_path}" is not a valid npm package name. {IMPORT_PATH_REQUIRED}'
        )
