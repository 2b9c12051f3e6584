"""
Workspace models — the two manifest files a generator edits.

``workspace.json`` lists every project and its targets; ``nx.json``
carries the npm scope, the workspace layout, and per-project tags.
Both models keep unknown keys so a load → dump round-trip never
drops anything the generator doesn't know about.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_LIBS_DIR = "libs"


def _dump_with_projects(model: BaseModel) -> dict[str, Any]:
    """Dump only what was loaded or assigned, so null and unknown keys round-trip.

    ``projects`` is always written: a generator may add the first one
    to a file that had no ``projects`` key.
    """
    data = model.model_dump(by_alias=True, exclude_unset=True)
    data["projects"] = {
        name: project.model_dump(by_alias=True, exclude_unset=True)
        for name, project in model.projects.items()
    }
    return data


class ProjectEntry(BaseModel):
    """One project in workspace.json.

    Version 1 manifests keep targets under ``architect`` (each target
    has a ``builder``); version 2 manifests use ``targets`` and
    ``executor``. Either container may be absent.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    root: str
    source_root: str | None = Field(default=None, alias="sourceRoot")
    project_type: str | None = Field(default=None, alias="projectType")
    architect: dict[str, Any] | None = None
    targets: dict[str, Any] | None = None

    def target_container(self, version: int) -> dict[str, Any] | None:
        """Return the target mapping for the given manifest version, if present."""
        return self.targets if version >= 2 else self.architect


class WorkspaceManifest(BaseModel):
    """workspace.json."""

    model_config = ConfigDict(extra="allow")

    version: int = 1
    projects: dict[str, ProjectEntry] = Field(default_factory=dict)

    @property
    def target_key(self) -> str:
        return "targets" if self.version >= 2 else "architect"

    @property
    def runner_key(self) -> str:
        return "executor" if self.version >= 2 else "builder"

    def get_project(self, name: str) -> ProjectEntry | None:
        return self.projects.get(name)

    def to_json(self) -> dict[str, Any]:
        return _dump_with_projects(self)


class WorkspaceLayout(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    libs_dir: str = Field(default=DEFAULT_LIBS_DIR, alias="libsDir")
    apps_dir: str = Field(default="apps", alias="appsDir")


class NxProject(BaseModel):
    model_config = ConfigDict(extra="allow")

    tags: list[str] = Field(default_factory=list)


class NxConfig(BaseModel):
    """nx.json."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    npm_scope: str | None = Field(default=None, alias="npmScope")
    workspace_layout: WorkspaceLayout | None = Field(default=None, alias="workspaceLayout")
    projects: dict[str, NxProject] = Field(default_factory=dict)

    @property
    def libs_dir(self) -> str:
        if self.workspace_layout is None:
            return DEFAULT_LIBS_DIR
        return self.workspace_layout.libs_dir

    def to_json(self) -> dict[str, Any]:
        return _dump_with_projects(self)


class WorkspaceContext(BaseModel):
    """Read-only facts about the workspace that option normalization needs."""

    model_config = ConfigDict(frozen=True)

    root: Path
    libs_root: str = DEFAULT_LIBS_DIR
    npm_scope: str | None = None
