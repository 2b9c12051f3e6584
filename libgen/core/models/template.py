"""
Generated file model — used by every generator.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """A file produced by a generator, before it is merged into the tree.

    Attributes:
        path:      Workspace-relative posix path.
        content:   Full file content.
        reason:    Why this file was generated.
    """

    path: str
    content: str
    reason: str = ""


class FileChange(BaseModel):
    """One staged change in a ``Tree``, as shown by dry-run and reports."""

    path: str
    kind: Literal["create", "update", "delete"]
