"""Namespace mapping from qualified type names to definition keys."""

from __future__ import annotations

from crdswagger.naming.mapper import (
    NamespaceMapper,
    build_profiles,
    generic_cleanup,
    group_to_namespace,
    shared_namespace_prefix,
)
from crdswagger.naming.policy import TieBreakPolicy, longest_group_label

__all__ = [
    "NamespaceMapper",
    "TieBreakPolicy",
    "build_profiles",
    "generic_cleanup",
    "group_to_namespace",
    "longest_group_label",
    "shared_namespace_prefix",
]
