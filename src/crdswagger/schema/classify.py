"""Simple-type classification: which schemas are embedded instead of referenced."""

from __future__ import annotations

from crdswagger.schema.props import StructuralSchema

__all__ = ["is_simple_type"]


def is_simple_type(schema: StructuralSchema) -> bool:
    """Whether a schema is inlined at its use sites rather than emitted as a definition.

    Rules, first match wins:

    1. a bare reference is never simple before it is resolved;
    2. a node with no type, reference, format or union is malformed and not simple;
    3. a map-shaped object is simple;
    4. any declared type other than ``object`` is simple;
    5. an ``object`` is not simple.
    """
    if schema.is_reference:
        return False
    if not schema.type and not schema.format and not schema.any_of and not schema.int_or_string:
        return False
    if schema.is_map:
        return True
    return schema.type != "object"
