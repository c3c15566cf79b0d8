"""Namespace mapping: qualified source type names to definition keys."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from crdswagger.errors import ErrorCodes
from crdswagger.naming.policy import TieBreakPolicy, longest_group_label
from crdswagger.types import (
    DefinitionKey,
    Diagnostic,
    GroupNamingProfile,
    GroupVersionKind,
    NamingMode,
    QualifiedTypeName,
    is_path_prefix,
    split_path,
)

logger = logging.getLogger(__name__)

__all__ = [
    "NamespaceMapper",
    "build_profiles",
    "generic_cleanup",
    "group_to_namespace",
    "shared_namespace_prefix",
]


def group_to_namespace(group: str, mode: NamingMode = NamingMode.REVERSED) -> str:
    """Turn an API group label into a dotted definition namespace.

    ``apps.example.com`` becomes ``com.example.apps`` in reversed mode and stays
    ``apps.example.com`` in legacy mode.
    """
    if mode == NamingMode.LEGACY:
        return group
    return ".".join(reversed(group.split(".")))


def shared_namespace_prefix(namespaces: Iterable[tuple[str, ...]]) -> tuple[str, ...]:
    """Longest common whole-segment prefix of the given namespace paths."""
    shared: tuple[str, ...] | None = None
    for segments in namespaces:
        if shared is None:
            shared = segments
            continue
        common = 0
        for left, right in zip(shared, segments):
            if left != right:
                break
            common += 1
        shared = shared[:common]
    return shared or ()


def build_profiles(
    kinds: Mapping[QualifiedTypeName, GroupVersionKind],
    groups: Iterable[str],
    root_namespace: str | None = None,
    naming_mode: NamingMode = NamingMode.REVERSED,
) -> list[GroupNamingProfile]:
    """Compute one naming profile per group from its member kinds' namespaces.

    Only members under ``root_namespace`` count. Groups without such members
    get no profile. Profiles are returned sorted by group label.
    """
    root = split_path(root_namespace) if root_namespace else ()
    profiles: list[GroupNamingProfile] = []

    for group in sorted(set(groups)):
        members = sorted(
            {name.segments for name, gvk in kinds.items() if gvk.group == group and is_path_prefix(root, name.segments)}
        )
        if not members:
            logger.warning("Group '%s' has no kinds under root namespace '%s', no profile built", group, root_namespace)
            continue

        profile = GroupNamingProfile(
            group=group,
            shared_prefix=shared_namespace_prefix(members),
            mapped_namespace=group_to_namespace(group, naming_mode),
        )
        logger.info("[%s] shared namespace = %s => %s", group, profile.shared_namespace_prefix, profile.mapped_namespace)
        profiles.append(profile)

    return profiles


def generic_cleanup(namespace: str, local_name: str) -> DefinitionKey:
    """Fallback mapping for namespaces outside every group profile.

    Separators become dots and the first two segments swap places, so
    ``k8s.io/api/core/v1`` + ``Pod`` becomes ``io.k8s.api.core.v1.Pod``.
    """
    parts = [part for part in namespace.replace("/", ".").split(".") if part]
    if len(parts) >= 2:
        parts[0], parts[1] = parts[1], parts[0]
    parts.append(local_name)
    return ".".join(parts)


class NamespaceMapper:
    """Maps qualified type names to definition keys using a fixed profile set.

    Mapping is pure given the profiles; results are memoized so repeated
    lookups return the identical key and ambiguity is reported once.
    """

    def __init__(
        self,
        profiles: Iterable[GroupNamingProfile],
        tie_break: TieBreakPolicy = longest_group_label,
    ) -> None:
        self._profiles: tuple[GroupNamingProfile, ...] = tuple(profiles)
        self._tie_break = tie_break
        self._cache: dict[tuple[str, str], DefinitionKey] = {}
        self._diagnostics: list[Diagnostic] = []

    @property
    def profiles(self) -> tuple[GroupNamingProfile, ...]:
        return self._profiles

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Ambiguous mappings observed so far."""
        return list(self._diagnostics)

    def map_type(self, name: QualifiedTypeName) -> DefinitionKey:
        return self.map_name(name.namespace, name.local_name)

    def map_name(self, namespace: str, local_name: str) -> DefinitionKey:
        """Compute the definition key for a type in ``namespace``."""
        cache_key = (namespace, local_name)
        if cache_key in self._cache:
            return self._cache[cache_key]

        segments = split_path(namespace)
        profile = self.matching_profile(segments)
        if profile is None:
            key = generic_cleanup(namespace, local_name)
        else:
            parts = [profile.mapped_namespace, *segments[len(profile.shared_prefix) :], local_name]
            key = ".".join(part for part in parts if part)

        logger.debug("%s/%s => %s", namespace, local_name, key)
        self._cache[cache_key] = key
        return key

    def matching_profile(self, segments: tuple[str, ...]) -> GroupNamingProfile | None:
        """The profile whose shared prefix covers ``segments``, after tie-breaking."""
        candidates = [p for p in self._profiles if is_path_prefix(p.shared_prefix, segments)]
        if not candidates:
            return None
        if len(candidates) == 1:
            return candidates[0]

        chosen = self._tie_break(candidates)
        namespace = "/".join(segments)
        message = (
            f"Namespace '{namespace}' matches groups {[c.group for c in candidates]}, "
            f"using '{chosen.group}'"
        )
        if not any(d.subject == namespace for d in self._diagnostics):
            logger.warning(message)
            self._diagnostics.append(
                Diagnostic(code=ErrorCodes.AMBIGUOUS_NAMESPACE_MAPPING, message=message, subject=namespace)
            )
        return chosen
