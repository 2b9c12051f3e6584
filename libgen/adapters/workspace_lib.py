"""
``workspace:lib`` adapter — runs the base library generator.

Action params are raw LibraryOptions (camelCase keys) with the
import path already resolved by the caller.
"""

from __future__ import annotations

import logging

from libgen.adapters.base import Adapter, ExecutionContext
from libgen.core.models.action import Receipt
from libgen.core.models.options import LibraryOptions
from libgen.core.services.workspace_lib.generator import generate_workspace_library

logger = logging.getLogger(__name__)

WORKSPACE_LIB = "workspace:lib"


class WorkspaceLibraryAdapter(Adapter):
    """Registers a library in workspace.json, nx.json and tsconfig.base.json."""

    @property
    def name(self) -> str:
        return WORKSPACE_LIB

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        if not context.action.params.get("name"):
            return False, "Missing required param: 'name'"
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        try:
            options = LibraryOptions.model_validate(context.action.params)
            normalized = generate_workspace_library(context.tree, options)
        except Exception as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=str(e),
                metadata={"error_type": type(e).__name__},
            )

        return Receipt.success(
            adapter=self.name,
            action_id=context.action.id,
            output=f"Registered {normalized.name} at {normalized.project_root}",
            metadata={
                "project": normalized.name,
                "project_root": normalized.project_root,
                "import_path": normalized.import_path,
            },
        )
