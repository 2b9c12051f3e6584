"""
Shared test fixtures — a minimal workspace in a temp directory.
"""

import json
from pathlib import Path

import pytest

from libgen.core import context
from libgen.core.engine.tree import Tree
from libgen.core.models.workspace import WorkspaceContext


def write_json(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n")


def read_json(path: Path) -> dict:
    return json.loads(path.read_text())


@pytest.fixture(autouse=True)
def _reset_workspace_context():
    """The CLI sets a process-wide workspace root; never leak it between tests."""
    context.set_workspace_root(None)
    yield
    context.set_workspace_root(None)


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    """A workspace with workspace.json, nx.json and tsconfig.base.json."""
    root = tmp_path / "workspace"
    root.mkdir()
    write_json(root / "workspace.json", {"version": 1, "projects": {}})
    write_json(root / "nx.json", {"npmScope": "acme", "projects": {}})
    write_json(root / "tsconfig.base.json", {"compilerOptions": {"paths": {}}})
    return root


@pytest.fixture
def tree(workspace_root: Path) -> Tree:
    return Tree(workspace_root)


@pytest.fixture
def workspace_context(workspace_root: Path) -> WorkspaceContext:
    return WorkspaceContext(root=workspace_root, libs_root="libs", npm_scope="acme")
