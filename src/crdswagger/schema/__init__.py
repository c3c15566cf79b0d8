"""Structural schema model and simple-type classification.

Example usage::

    from crdswagger.schema import parse_schema, is_simple_type

    schema = parse_schema({"type": "array", "items": {"type": "string"}})
    assert is_simple_type(schema)
"""

from __future__ import annotations

from crdswagger.schema.classify import is_simple_type
from crdswagger.schema.props import StructuralSchema, parse_schema

__all__ = [
    "StructuralSchema",
    "is_simple_type",
    "parse_schema",
]
