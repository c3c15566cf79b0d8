"""Closure driver: round-based fixed point over discovered type references."""

from __future__ import annotations

import logging
from typing import Iterable

from crdswagger.config import GeneratorConfig
from crdswagger.naming.mapper import NamespaceMapper
from crdswagger.registry.state import ClosureState
from crdswagger.schema.classify import is_simple_type
from crdswagger.schema.props import StructuralSchema
from crdswagger.source.base import SchemaSource, resolve_type
from crdswagger.translator import SchemaTranslator
from crdswagger.types import QualifiedTypeName

logger = logging.getLogger(__name__)

__all__ = ["ClosureDriver"]


class ClosureDriver:
    """Translates every type reachable from a set of top-level kinds exactly once.

    Each :meth:`run` owns a fresh :class:`ClosureState`; nothing is shared
    between runs.
    """

    def __init__(
        self,
        source: SchemaSource,
        mapper: NamespaceMapper,
        config: GeneratorConfig | None = None,
    ) -> None:
        self._source = source
        self._mapper = mapper
        self._config = config or GeneratorConfig()

    def run(self, kinds: Iterable[QualifiedTypeName]) -> ClosureState:
        """Seed with the given kinds and drain discovered references until none remain.

        Raises:
            SchemaNotFoundError: If a reachable type cannot be loaded from the source.
            CompositionCycleError: If an allOf/anyOf walk loops back on itself.
        """
        state = ClosureState()
        translator = SchemaTranslator(self._source, self._mapper, state, self._config)

        for name in sorted(set(kinds)):
            schema = self._source.schema_for(name)
            if is_simple_type(schema):
                logger.warning("Kind %s has a simple schema, not emitted", name)
                continue
            self._emit(name, schema, translator, state)

        rounds = 0
        while state.pending:
            rounds += 1
            batch = state.take_pending()
            logger.debug("Closure round %d: %d pending", rounds, len(batch))
            for name in batch:
                if name in state.visited:
                    continue
                resolved = resolve_type(self._source, name, self._config.foreign_namespaces)
                if resolved is None:
                    continue
                self._emit(resolved, self._source.schema_for(resolved), translator, state)

        logger.info("Closure finished after %d rounds with %d definitions", rounds, len(state.definitions))
        return state

    def _emit(
        self,
        name: QualifiedTypeName,
        schema: StructuralSchema,
        translator: SchemaTranslator,
        state: ClosureState,
    ) -> None:
        # Visited before translating, so self references are not queued again.
        state.mark_visited(name)
        key = self._mapper.map_type(name)
        if key.startswith(self._config.foreign_key_prefix):
            return
        state.emit(key, translator.translate(schema, name), name)
