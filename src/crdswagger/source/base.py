"""Schema source protocol and reference resolution against a source."""

from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

from crdswagger.schema.props import StructuralSchema
from crdswagger.types import GroupVersionKind, QualifiedTypeName, is_path_prefix, split_path

__all__ = ["SchemaSource", "is_foreign_namespace", "resolve_type"]


@runtime_checkable
class SchemaSource(Protocol):
    """Supplies structural schemas and kind metadata for qualified type names."""

    def schema_for(self, name: QualifiedTypeName) -> StructuralSchema:
        """Return the schema of a known type.

        Raises:
            SchemaNotFoundError: If the type is not known and cannot be loaded.
        """
        ...

    def kind_metadata_for(self, name: QualifiedTypeName) -> GroupVersionKind | None: ...

    def ensure_loaded(self, name: QualifiedTypeName) -> None:
        """Request on-demand loading of a type discovered during closure."""
        ...

    def is_known(self, name: QualifiedTypeName) -> bool: ...

    def known_kinds(self) -> dict[QualifiedTypeName, GroupVersionKind]: ...


def is_foreign_namespace(namespace: str, foreign_namespaces: Iterable[str]) -> bool:
    """Whether ``namespace`` lies under one of the base platform's namespaces."""
    segments = split_path(namespace)
    return any(is_path_prefix(split_path(foreign), segments) for foreign in foreign_namespaces)


def resolve_type(
    source: SchemaSource,
    name: QualifiedTypeName,
    foreign_namespaces: Iterable[str],
) -> QualifiedTypeName | None:
    """Make ``name`` available in ``source``.

    Returns None for unknown types in a foreign namespace, which are never
    loaded. Other unknown types are loaded on demand.
    """
    if source.is_known(name):
        return name
    if is_foreign_namespace(name.namespace, foreign_namespaces):
        return None
    source.ensure_loaded(name)
    return name
