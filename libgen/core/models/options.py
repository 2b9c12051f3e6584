"""
Library options — raw user input and its normalized form.

``LibraryOptions`` is whatever the user typed (CLI flags, libgen.yml
defaults, or a dict from a test). ``NormalizedOptions`` is derived
from it exactly once by the normalizer and is frozen afterwards.

Field aliases are camelCase so the same spelling works for CLI flags,
YAML defaults, and the JSON report.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LibraryOptions(BaseModel):
    """Raw options for the library generator. No invariants enforced."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    directory: str | None = None
    import_path: str | None = None
    tags: str | None = None               # comma-separated
    publishable: bool = False
    buildable: bool = False
    js: bool = False
    unit_test_runner: Literal["jest", "none"] = "jest"
    root_dir: str | None = None
    test_environment: Literal["node", "jsdom"] = "node"
    linter: Literal["eslint", "none"] = "eslint"
    strict: bool = True
    skip_format: bool = False
    skip_ts_config: bool = False


class NormalizedOptions(LibraryOptions):
    """Fully resolved options.

    Attributes:
        name:              Registry key (projectDirectory with '/' → '-').
        file_name:         Same as ``name``; used by template paths.
        project_directory: 'dir/name' or 'name', slugified.
        project_root:      libsRoot + projectDirectory, posix-normalized.
        prefix:            Workspace npm scope ("" when not configured).
        parsed_tags:       Trimmed tag tokens, empty tokens kept.
        import_path:       User value or '@prefix/projectDirectory'.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True,
    )

    file_name: str
    project_directory: str
    project_root: str
    prefix: str = ""
    parsed_tags: list[str] = Field(default_factory=list)
    import_path: str
    libs_root: str = "libs"
