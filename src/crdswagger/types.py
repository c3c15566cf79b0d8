"""Value types shared across the definition generator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "DefinitionKey",
    "Diagnostic",
    "GroupNamingProfile",
    "GroupVersionKind",
    "NamingMode",
    "QualifiedTypeName",
    "DEFINITIONS_PREFIX",
]

DEFINITIONS_PREFIX = "#/definitions/"

_NAMESPACE_SEPARATOR = "~1"
_TYPE_SEPARATOR = "~0"

DefinitionKey = str


class NamingMode(str, Enum):
    """Controls how a group label is turned into a definition namespace."""

    REVERSED = "reversed"
    LEGACY = "legacy"


@dataclass(frozen=True, order=True)
class QualifiedTypeName:
    """A source type identified by its namespace path and local name."""

    namespace: str
    local_name: str

    @property
    def segments(self) -> tuple[str, ...]:
        """Path segments of the namespace."""
        return split_path(self.namespace)

    @property
    def reference(self) -> str:
        """Encode as a raw reference token."""
        encoded = self.namespace.replace("/", _NAMESPACE_SEPARATOR)
        return f"{DEFINITIONS_PREFIX}{encoded}{_TYPE_SEPARATOR}{self.local_name}"

    @classmethod
    def from_reference(cls, token: str) -> QualifiedTypeName:
        """Parse a raw reference token such as ``#/definitions/org~1api~1v1~0Widget``.

        Raises:
            ValueError: If the token does not contain a type separator.
        """
        split_index = token.rfind(_TYPE_SEPARATOR)
        if split_index == -1:
            raise ValueError(f"Reference '{token}' has no type separator '{_TYPE_SEPARATOR}'")
        namespace = token[:split_index]
        if namespace.startswith(DEFINITIONS_PREFIX):
            namespace = namespace[len(DEFINITIONS_PREFIX) :]
        local_name = token[split_index + len(_TYPE_SEPARATOR) :]
        if not local_name:
            raise ValueError(f"Reference '{token}' has an empty type name")
        return cls(namespace=namespace.replace(_NAMESPACE_SEPARATOR, "/"), local_name=local_name)

    def __str__(self) -> str:
        return f"{self.namespace}/{self.local_name}"


@dataclass(frozen=True)
class GroupVersionKind:
    """Three-part identity of a top-level kind."""

    group: str
    version: str
    kind: str

    def to_extension(self) -> dict[str, str]:
        return {"group": self.group, "kind": self.kind, "version": self.version}


@dataclass(frozen=True)
class GroupNamingProfile:
    """Naming profile computed once per API group.

    Attributes:
        group: The API group label, e.g. ``apps.example.com``.
        shared_prefix: Longest common path-segment prefix of the group's member namespaces.
        mapped_namespace: Dotted namespace that replaces ``shared_prefix`` in definition keys.
    """

    group: str
    shared_prefix: tuple[str, ...]
    mapped_namespace: str

    @property
    def shared_namespace_prefix(self) -> str:
        return "/".join(self.shared_prefix)


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal condition observed during a generation pass."""

    code: str
    message: str
    subject: str | None = None


def split_path(path: str) -> tuple[str, ...]:
    """Split a namespace path into its non-empty segments."""
    return tuple(part for part in path.split("/") if part)


def is_path_prefix(prefix: tuple[str, ...], segments: tuple[str, ...]) -> bool:
    """Whether ``prefix`` is a whole-segment prefix of ``segments``."""
    return len(prefix) <= len(segments) and segments[: len(prefix)] == prefix
