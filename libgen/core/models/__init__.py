"""
Domain models — Pydantic types for the generator.

All models are re-exported here for convenient access:

    from libgen.core.models import LibraryOptions, NormalizedOptions, GeneratedFile
"""

from libgen.core.models.action import Action, Receipt
from libgen.core.models.options import LibraryOptions, NormalizedOptions
from libgen.core.models.template import FileChange, GeneratedFile
from libgen.core.models.workspace import (
    NxConfig,
    NxProject,
    ProjectEntry,
    WorkspaceContext,
    WorkspaceLayout,
    WorkspaceManifest,
)

__all__ = [
    # action.py
    "Action",
    "Receipt",
    # options.py
    "LibraryOptions",
    "NormalizedOptions",
    # template.py
    "FileChange",
    "GeneratedFile",
    # workspace.py
    "NxConfig",
    "NxProject",
    "ProjectEntry",
    "WorkspaceContext",
    "WorkspaceLayout",
    "WorkspaceManifest",
]
