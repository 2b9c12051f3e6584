"""
Adapter registry — lookup and dispatch for delegated generators.

The library generator never calls another generator directly; it asks
the registry to execute an Action against the current tree.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from libgen.adapters.base import Adapter, ExecutionContext
from libgen.core.engine.tree import Tree
from libgen.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Central registry and dispatcher for adapters."""

    def __init__(self) -> None:
        self._adapters: dict[str, Adapter] = {}

    def register(self, adapter: Adapter) -> None:
        name = adapter.name
        if name in self._adapters:
            logger.warning("Overwriting existing adapter: %s", name)
        self._adapters[name] = adapter
        logger.debug("Registered adapter: %s", name)

    def unregister(self, name: str) -> None:
        """Remove an adapter from the registry."""
        self._adapters.pop(name, None)

    def get(self, name: str) -> Adapter | None:
        return self._adapters.get(name)

    def list_adapters(self) -> list[str]:
        return list(self._adapters.keys())

    def execute(self, action: Action, tree: Tree, dry_run: bool = False) -> Receipt:
        """Run ``action`` through its adapter.

        Unknown adapters and failed validation come back as failure
        receipts, like any other adapter failure.
        """
        adapter = self._adapters.get(action.adapter)
        if adapter is None:
            return Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"No adapter registered for '{action.adapter}'",
            )

        context = ExecutionContext(action=action, tree=tree, dry_run=dry_run)

        valid, error = adapter.validate(context)
        if not valid:
            return Receipt.failure(
                adapter=adapter.name,
                action_id=action.id,
                error=f"Validation failed: {error}",
            )

        started = datetime.now(UTC).isoformat()
        logger.debug("Executing %s via %s", action.id, adapter.name)
        receipt = adapter.execute(context)
        receipt.started_at = started
        receipt.ended_at = datetime.now(UTC).isoformat()

        if receipt.failed:
            logger.warning("Action %s failed: %s", action.id, receipt.error)
        return receipt


def default_registry() -> AdapterRegistry:
    """A registry with the built-in delegated generators."""
    from libgen.adapters.workspace_lib import WorkspaceLibraryAdapter

    registry = AdapterRegistry()
    registry.register(WorkspaceLibraryAdapter())
    return registry
