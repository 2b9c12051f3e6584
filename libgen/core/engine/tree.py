"""
Staging tree — an in-memory change-set over a workspace directory.

Generators never touch the disk. They read through the tree (staged
content wins over disk content) and stage writes and deletes in it.
Only ``commit()`` persists, and it does so in two phases: every new
file is first written to a temp file next to its target, then all
temp files are renamed into place. If any temp write fails, the temps
are removed and nothing on disk changes.
"""

from __future__ import annotations

import json
import logging
import os
import posixpath
import tempfile
from pathlib import Path
from typing import Any

from libgen.core.models.template import FileChange

logger = logging.getLogger(__name__)


class TreeError(Exception):
    """Raised for paths outside the tree or unreadable staged content."""


class Tree:
    """Staged view of a workspace rooted at ``root``.

    Paths are workspace-relative posix strings. Insertion order of
    staged paths is kept, so reports and commits are deterministic.
    """

    def __init__(self, root: Path):
        self.root = Path(root).resolve()
        self._staged: dict[str, str | None] = {}

    # ── Path handling ───────────────────────────────────────────

    @staticmethod
    def normalize_path(path: str) -> str:
        """Normalize a workspace-relative path, rejecting escapes."""
        norm = posixpath.normpath(str(path).replace("\\", "/"))
        if norm.startswith("/") or norm == ".." or norm.startswith("../"):
            raise TreeError(f"Path escapes the workspace: {path}")
        if norm == ".":
            raise TreeError("Empty path")
        return norm

    def _disk_path(self, key: str) -> Path:
        return self.root / key

    # ── Reads ───────────────────────────────────────────────────

    def exists(self, path: str) -> bool:
        key = self.normalize_path(path)
        if key in self._staged:
            return self._staged[key] is not None
        return self._disk_path(key).is_file()

    def read(self, path: str) -> str | None:
        """Return the current content of ``path`` or None if it doesn't exist."""
        key = self.normalize_path(path)
        if key in self._staged:
            return self._staged[key]
        disk = self._disk_path(key)
        if not disk.is_file():
            return None
        return disk.read_text(encoding="utf-8")

    def read_json(self, path: str) -> Any:
        content = self.read(path)
        if content is None:
            raise TreeError(f"File not found: {path}")
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise TreeError(f"Invalid JSON in {path}: {e}") from e

    # ── Writes ──────────────────────────────────────────────────

    def write(self, path: str, content: str) -> None:
        """Stage ``content`` at ``path``, replacing whatever is there."""
        key = self.normalize_path(path)
        self._staged[key] = content
        logger.debug("Staged write: %s (%d bytes)", key, len(content))

    def write_json(self, path: str, data: Any) -> None:
        self.write(path, json.dumps(data, indent=2, ensure_ascii=False) + "\n")

    def delete(self, path: str) -> None:
        key = self.normalize_path(path)
        self._staged[key] = None
        logger.debug("Staged delete: %s", key)

    def rename(self, src: str, dest: str) -> None:
        content = self.read(src)
        if content is None:
            raise TreeError(f"File not found: {src}")
        self.delete(src)
        self.write(dest, content)

    # ── Change-set ──────────────────────────────────────────────

    def staged_paths(self) -> list[str]:
        """Paths with staged content (deletes excluded), in staging order."""
        return [k for k, v in self._staged.items() if v is not None]

    def changes(self) -> list[FileChange]:
        """Describe what ``commit()`` would do, in staging order.

        Writes whose content equals the file on disk are not changes.
        Deletes of files that never existed on disk are dropped.
        """
        result: list[FileChange] = []
        for key, content in self._staged.items():
            disk = self._disk_path(key)
            on_disk = disk.is_file()
            if content is None:
                if on_disk:
                    result.append(FileChange(path=key, kind="delete"))
                continue
            if not on_disk:
                result.append(FileChange(path=key, kind="create"))
            elif disk.read_text(encoding="utf-8") != content:
                result.append(FileChange(path=key, kind="update"))
        return result

    def commit(self) -> list[FileChange]:
        """Persist every staged change. Returns the applied changes."""
        changes = self.changes()
        pending: list[tuple[Path, Path]] = []

        try:
            for change in changes:
                content = self._staged[change.path]
                if content is None:
                    continue
                target = self._disk_path(change.path)
                target.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp_name = tempfile.mkstemp(
                    dir=target.parent, prefix=".libgen_", suffix=".tmp",
                )
                os.close(fd)
                tmp = Path(tmp_name)
                pending.append((tmp, target))
                tmp.write_text(content, encoding="utf-8")
        except Exception as e:
            for tmp, _target in pending:
                tmp.unlink(missing_ok=True)
            logger.error("Commit aborted, nothing written: %s", e)
            raise

        for tmp, target in pending:
            tmp.replace(target)

        for change in changes:
            if change.kind == "delete":
                self._disk_path(change.path).unlink(missing_ok=True)

        logger.info("Committed %d change(s) under %s", len(changes), self.root)
        self._staged.clear()
        return changes
