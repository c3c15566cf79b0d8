"""Per-run closure state: visited types, pending references and emitted definitions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from crdswagger.errors import ErrorCodes
from crdswagger.types import DefinitionKey, Diagnostic, QualifiedTypeName

logger = logging.getLogger(__name__)

__all__ = ["ClosureState"]


@dataclass
class ClosureState:
    """Mutable state owned by exactly one closure run.

    ``definitions`` is append-only: a key is written once and never replaced.
    """

    visited: set[QualifiedTypeName] = field(default_factory=set)
    pending: set[QualifiedTypeName] = field(default_factory=set)
    definitions: dict[DefinitionKey, dict[str, Any]] = field(default_factory=dict)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def register(self, name: QualifiedTypeName) -> bool:
        """Queue a referenced type for a later round. Returns False if already visited."""
        if name in self.visited:
            return False
        self.pending.add(name)
        return True

    def take_pending(self) -> list[QualifiedTypeName]:
        """Snapshot and clear the pending set, sorted for deterministic output."""
        batch = sorted(self.pending)
        self.pending = set()
        return batch

    def mark_visited(self, name: QualifiedTypeName) -> None:
        self.visited.add(name)
        self.pending.discard(name)

    def emit(self, key: DefinitionKey, schema: dict[str, Any], name: QualifiedTypeName) -> bool:
        """Store a definition. A second type mapping to the same key is reported and dropped."""
        if key in self.definitions:
            self.report(
                ErrorCodes.DEFINITION_KEY_COLLISION,
                f"Definition key '{key}' already emitted, dropping schema of {name}",
                subject=str(name),
            )
            return False
        self.definitions[key] = schema
        return True

    def report(self, code: str, message: str, subject: str | None = None) -> None:
        """Record a non-fatal diagnostic and log it."""
        logger.warning("%s: %s", code, message)
        self.diagnostics.append(Diagnostic(code=code, message=message, subject=subject))
