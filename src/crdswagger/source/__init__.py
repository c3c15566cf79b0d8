"""Schema sources: where type schemas and kind metadata come from."""

from __future__ import annotations

from crdswagger.source.base import SchemaSource, is_foreign_namespace, resolve_type
from crdswagger.source.catalog import SCHEMA_FILE_SUFFIX, SchemaCatalog

__all__ = [
    "SCHEMA_FILE_SUFFIX",
    "SchemaCatalog",
    "SchemaSource",
    "is_foreign_namespace",
    "resolve_type",
]
