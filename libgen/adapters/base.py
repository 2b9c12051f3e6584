"""
Adapter base — the contract between the engine and delegated generators.

A delegated generator (for example the base ``workspace:lib`` scaffold)
is reached only through this interface: it receives an Action and the
tree to stage changes in, and answers with a Receipt.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict

from libgen.core.engine.tree import Tree
from libgen.core.models.action import Action, Receipt


class ExecutionContext(BaseModel):
    """Everything an adapter needs: the action and the staging tree."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    action: Action
    tree: Tree
    dry_run: bool = False


class Adapter(ABC):
    """Abstract base class for all adapters.

    Adapters stage changes in ``context.tree`` and return receipts.
    They NEVER raise exceptions — failures are captured in the Receipt.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'workspace:lib')."""

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Validate that the action can be executed.

        Returns:
            (is_valid, error_message). error_message is empty if valid.
        """

    @abstractmethod
    def execute(self, context: ExecutionContext) -> Receipt:
        """Execute the action and return a receipt. MUST never raise."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
