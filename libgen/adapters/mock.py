"""
Mock adapter — stands in for a delegated generator in tests.

By default it succeeds without touching the tree. Tests can make it
fail, or hand it a callback that stages whatever the real generator
would have staged.
"""

from __future__ import annotations

from collections.abc import Callable

from libgen.adapters.base import Adapter, ExecutionContext
from libgen.core.models.action import Receipt


class MockAdapter(Adapter):
    """Configurable test double for any adapter name."""

    def __init__(
        self,
        adapter_name: str = "mock",
        default_output: str = "[mock] executed",
        on_execute: Callable[[ExecutionContext], None] | None = None,
    ):
        self._name = adapter_name
        self._default_output = default_output
        self._on_execute = on_execute
        self._failure: str | None = None
        self._call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        """All execution contexts this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def set_failure(self, error: str = "Mock failure") -> None:
        """Make every subsequent execution fail."""
        self._failure = error

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self._call_log.append(context)

        if self._failure is not None:
            return Receipt.failure(
                adapter=self._name,
                action_id=context.action.id,
                error=self._failure,
            )

        if self._on_execute is not None:
            self._on_execute(context)

        return Receipt.success(
            adapter=self._name,
            action_id=context.action.id,
            output=self._default_output,
            metadata={"mock": True},
        )

    def reset(self) -> None:
        """Clear call log and configured failure."""
        self._call_log.clear()
        self._failure = None
