"""
Rule executor — runs a generator's steps against a staging tree.

A rule is any callable that takes the tree and stages changes in it.
``chain`` runs rules in order and stops at the first exception, which
propagates to the caller with the disk untouched (nothing is committed
until the whole chain has finished).

Flow:
    options → rules → tree (staged) → commit
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from typing import Any

from libgen.adapters.registry import AdapterRegistry
from libgen.core.engine.tree import Tree
from libgen.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)

Rule = Callable[[Tree], Any]


class GeneratorError(Exception):
    """Raised when a delegated generator reports failure."""

    def __init__(self, message: str, receipt: Receipt | None = None):
        super().__init__(message)
        self.receipt = receipt


def generate_operation_id() -> str:
    """Generate a unique operation identifier.

    Format: gen-YYYYMMDDTHHMMSS-XXXX
    """
    now = datetime.now(UTC).strftime("%Y%m%dT%H%M%S")
    short_id = uuid.uuid4().hex[:4]
    return f"gen-{now}-{short_id}"


def noop(tree: Tree) -> None:
    """A rule that does nothing."""


def chain(rules: Iterable[Rule]) -> Rule:
    """Combine rules into one that runs them in order."""
    rules = list(rules)

    def _run(tree: Tree) -> None:
        for rule in rules:
            logger.debug("Running rule %s", getattr(rule, "__name__", rule))
            rule(tree)

    return _run


def external_generator(
    registry: AdapterRegistry,
    adapter: str,
    params: dict[str, Any],
) -> Rule:
    """A rule that runs a registered generator through the adapter registry.

    Raises (when run):
        GeneratorError: If the adapter's receipt reports failure.
    """

    def _run(tree: Tree) -> Receipt:
        action = Action(id=generate_operation_id(), adapter=adapter, params=params)
        receipt = registry.execute(action, tree)
        if receipt.failed:
            raise GeneratorError(
                f"{adapter} failed: {receipt.error}",
                receipt=receipt,
            )
        logger.info("%s: %s", adapter, receipt.output)
        return receipt

    _run.__name__ = f"external_generator[{adapter}]"
    return _run
