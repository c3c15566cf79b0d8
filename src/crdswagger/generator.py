"""Generator: one definition-synthesis pass over a schema source."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from crdswagger.config import GeneratorConfig
from crdswagger.document import SwaggerDocument
from crdswagger.naming.mapper import NamespaceMapper, build_profiles
from crdswagger.naming.policy import TieBreakPolicy, longest_group_label
from crdswagger.registry.driver import ClosureDriver
from crdswagger.source.base import SchemaSource
from crdswagger.types import (
    DefinitionKey,
    Diagnostic,
    GroupVersionKind,
    QualifiedTypeName,
    is_path_prefix,
    split_path,
)

logger = logging.getLogger(__name__)

__all__ = ["Generator", "GenerationResult"]


@dataclass
class GenerationResult:
    """Output of one generation pass."""

    document: SwaggerDocument
    diagnostics: list[Diagnostic] = field(default_factory=list)
    visited: frozenset[QualifiedTypeName] = frozenset()


class Generator:
    """Builds the definitions section of a Swagger document from top-level kinds.

    The naming profiles are computed once, from the kinds known to the source
    when they are first needed, and are reused by every later call.
    """

    def __init__(
        self,
        source: SchemaSource,
        config: GeneratorConfig | None = None,
        tie_break: TieBreakPolicy = longest_group_label,
    ) -> None:
        self._source = source
        self._config = config or GeneratorConfig()
        self._tie_break = tie_break
        self._mapper: NamespaceMapper | None = None

    @property
    def config(self) -> GeneratorConfig:
        return self._config

    def included_kinds(self) -> dict[QualifiedTypeName, GroupVersionKind]:
        """Known kinds whose namespace lies under the configured root namespace."""
        root = split_path(self._config.root_namespace) if self._config.root_namespace else ()
        return {
            name: gvk for name, gvk in self._source.known_kinds().items() if is_path_prefix(root, name.segments)
        }

    def included_groups(self) -> list[str]:
        return sorted({gvk.group for gvk in self.included_kinds().values()})

    @property
    def mapper(self) -> NamespaceMapper:
        if self._mapper is None:
            profiles = build_profiles(
                self._source.known_kinds(),
                self.included_groups(),
                root_namespace=self._config.root_namespace,
                naming_mode=self._config.naming_mode,
            )
            self._mapper = NamespaceMapper(profiles, tie_break=self._tie_break)
        return self._mapper

    def definition_key(self, name: QualifiedTypeName) -> DefinitionKey:
        """The key under which ``name`` is (or would be) stored in the definitions map."""
        return self.mapper.map_type(name)

    def generate(self) -> GenerationResult:
        """Run one generation pass.

        Raises:
            SchemaNotFoundError: If a reachable type cannot be loaded.
            CompositionCycleError: If composed types form a cycle.
        """
        groups = self.included_groups()
        logger.info("groups: %s", ", ".join(groups))

        mapper = self.mapper
        state = ClosureDriver(self._source, mapper, self._config).run(self.included_kinds())

        document = SwaggerDocument(
            title=f"Kubernetes ({', '.join(groups)})",
            version=self._config.api_version,
            definitions=dict(state.definitions),
        )
        return GenerationResult(
            document=document,
            diagnostics=[*mapper.diagnostics, *state.diagnostics],
            visited=frozenset(state.visited),
        )
