"""SchemaTranslator: structural schemas to Swagger 2.0 definition schemas."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from crdswagger.config import GeneratorConfig
from crdswagger.errors import CompositionCycleError, ErrorCodes
from crdswagger.schema.classify import is_simple_type
from crdswagger.schema.props import StructuralSchema
from crdswagger.source.base import SchemaSource, is_foreign_namespace, resolve_type
from crdswagger.types import DEFINITIONS_PREFIX, QualifiedTypeName

if TYPE_CHECKING:
    from crdswagger.naming.mapper import NamespaceMapper
    from crdswagger.registry.state import ClosureState

__all__ = ["SchemaTranslator", "INT_OR_STRING_FORMAT", "UNKNOWN_UNION_FORMAT", "GVK_EXTENSION"]

logger = logging.getLogger(__name__)

INT_OR_STRING_FORMAT = "int-or-string"
UNKNOWN_UNION_FORMAT = "unknown-union"
GVK_EXTENSION = "x-kubernetes-group-version-kind"

_KNOWN_FORMATS: dict[str, set[str] | None] = {
    "string": None,
    "boolean": set(),
    "integer": {"int32", "int64"},
    "number": {"float", "double"},
    "Any": None,
}

_OMIT_WHEN_EMPTY = frozenset({"type", "format", "description", "required", "enum", "properties"})

_Properties = dict[str, dict[str, Any]]


class SchemaTranslator:
    """Converts structural schemas into output schemas for one closure run.

    Referenced types are either embedded (simple targets) or emitted as
    ``$ref`` pointers, in which case the target is queued on the closure
    state for a later round.
    """

    def __init__(
        self,
        source: SchemaSource,
        mapper: NamespaceMapper,
        state: ClosureState,
        config: GeneratorConfig | None = None,
    ) -> None:
        self._source = source
        self._mapper = mapper
        self._state = state
        self._config = config or GeneratorConfig()
        # Types being embedded, outermost first.
        self._embedding: list[QualifiedTypeName] = []
        # Every type whose content is being expanded in place, embedded or composed.
        self._walk: list[QualifiedTypeName] = []

    def translate(self, schema: StructuralSchema, type_name: QualifiedTypeName | None = None) -> dict[str, Any]:
        """Translate the schema of a type into its definition schema."""
        if type_name is not None:
            self._embedding.append(type_name)
            self._walk.append(type_name)
        try:
            if schema.ref is not None:
                return self._translate_reference(schema, schema.ref)
            if is_simple_type(schema):
                return self.translate_property(schema)
            return self._translate_object(schema, type_name)
        finally:
            if type_name is not None:
                self._embedding.pop()
                self._walk.pop()

    def translate_property(self, schema: StructuralSchema) -> dict[str, Any]:
        """Translate a schema node used inside another schema."""
        if schema.ref is not None:
            return self._translate_reference(schema, schema.ref)
        if self._is_int_or_string(schema):
            return _compact({"type": "string", "format": INT_OR_STRING_FORMAT, "description": schema.description})
        if schema.any_of or schema.all_of:
            return self._translate_object(schema, None)
        if schema.type == "array":
            return self._translate_array(schema)
        if schema.is_map and schema.value_schema is not None:
            return self._translate_map(schema, schema.value_schema)
        if schema.type == "object":
            return self._translate_object(schema, None)
        return self._passthrough(schema)

    def follow_chain(
        self, name: QualifiedTypeName, seen: list[QualifiedTypeName] | None = None
    ) -> tuple[QualifiedTypeName, StructuralSchema] | None:
        """Resolve an alias chain to its first non-reference schema.

        Returns None when the chain ends in a foreign type that cannot be
        loaded, or when it loops back on itself.
        """
        seen = [] if seen is None else seen
        if name in seen:
            chain = " -> ".join(str(n) for n in [*seen, name])
            self._state.report(ErrorCodes.ALIAS_CHAIN_CYCLE, f"Alias chain loops: {chain}", subject=str(name))
            return None

        resolved = resolve_type(self._source, name, self._config.foreign_namespaces)
        if resolved is None:
            return None

        target = self._source.schema_for(resolved)
        if target.is_reference and target.ref is not None:
            return self.follow_chain(target.ref, [*seen, resolved])
        return resolved, target

    # ----- Per-kind rules -----

    def _translate_reference(self, schema: StructuralSchema, ref: QualifiedTypeName) -> dict[str, Any]:
        resolved = self.follow_chain(ref)

        if resolved is not None:
            target_name, target = resolved
            if is_simple_type(target) and target_name not in self._embedding:
                self._embedding.append(target_name)
                self._walk.append(target_name)
                try:
                    embedded = self.translate_property(target)
                finally:
                    self._embedding.pop()
                    self._walk.pop()
                if schema.description:
                    embedded["description"] = schema.description
                logger.debug("Embedded %s", target_name)
                return embedded

        return _compact(
            {
                "description": schema.description,
                "$ref": DEFINITIONS_PREFIX + self._pointer_key(ref),
                "required": list(schema.required),
            }
        )

    def _pointer_key(self, name: QualifiedTypeName) -> str:
        key = self._mapper.map_type(name)
        if key.startswith(self._config.foreign_key_prefix):
            return key
        if not self._source.is_known(name) and is_foreign_namespace(name.namespace, self._config.foreign_namespaces):
            # Never loaded, so the key would stay undefined.
            self._state.report(
                ErrorCodes.UNDEFINED_FOREIGN_REFERENCE,
                f"Reference to {name} in a foreign namespace maps to '{key}', "
                f"which lacks the '{self._config.foreign_key_prefix}' prefix and is never defined",
                subject=str(name),
            )
            return key
        self._state.register(name)
        return key

    def _translate_array(self, schema: StructuralSchema) -> dict[str, Any]:
        node: dict[str, Any] = {"type": "array", "description": schema.description}
        if isinstance(schema.items, StructuralSchema):
            node["items"] = self.translate_property(schema.items)
        # Tuple-style item lists are not supported and are dropped.
        node["required"] = list(schema.required)
        return _compact(node)

    def _translate_map(self, schema: StructuralSchema, value_schema: StructuralSchema) -> dict[str, Any]:
        return _compact(
            {
                "type": "object",
                "description": schema.description,
                "additionalProperties": self.translate_property(value_schema),
            }
        )

    def _passthrough(self, schema: StructuralSchema) -> dict[str, Any]:
        allowed_formats = _KNOWN_FORMATS.get(schema.type, set())
        known_type = schema.type in _KNOWN_FORMATS
        if not known_type or (schema.format and allowed_formats is not None and schema.format not in allowed_formats):
            self._state.report(
                ErrorCodes.UNKNOWN_SCHEMA_SHAPE,
                f"Unrecognized schema type '{schema.type}' with format '{schema.format}', emitted verbatim",
            )
        return _compact(
            {
                "type": schema.type,
                "format": schema.format,
                "description": schema.description,
                "enum": list(schema.enum) if schema.enum is not None else None,
                "required": list(schema.required),
            }
        )

    def _translate_object(self, schema: StructuralSchema, type_name: QualifiedTypeName | None) -> dict[str, Any]:
        """Flatten composition and translate declared properties into one object schema."""
        properties: _Properties = {}
        required: list[str] = []

        self._merge_composition(schema.all_of, properties, required)
        union = bool(schema.any_of) and not self._is_int_or_string(schema)
        if union:
            self._merge_composition(schema.any_of, properties, required)

        for prop_name, prop in schema.properties.items():
            properties[prop_name] = self.translate_property(prop)
        _extend_unique(required, schema.required)

        if schema.type not in ("", "object") or (
            not schema.type and not schema.all_of and not schema.any_of and not schema.properties
        ):
            self._state.report(
                ErrorCodes.UNKNOWN_SCHEMA_SHAPE,
                f"Schema of {type_name or 'inline node'} has type '{schema.type}' and no usable shape, "
                "emitted as an object",
                subject=str(type_name) if type_name is not None else None,
            )

        node: dict[str, Any] = {
            "type": "object",
            "format": UNKNOWN_UNION_FORMAT if union else "",
            "description": schema.description,
            "properties": properties,
            "required": required,
        }
        if schema.value_schema is not None:
            node["additionalProperties"] = self.translate_property(schema.value_schema)

        if type_name is not None:
            gvk = self._source.kind_metadata_for(type_name)
            if gvk is not None:
                node[GVK_EXTENSION] = [gvk.to_extension()]
        return _compact(node)

    def _merge_composition(
        self,
        parts: list[StructuralSchema],
        properties: _Properties,
        required: list[str],
    ) -> None:
        for part in parts:
            self._merge_part(part, properties, required)

    def _merge_part(
        self,
        part: StructuralSchema,
        properties: _Properties,
        required: list[str],
    ) -> None:
        """Merge one composed parent: its referenced type, its own composition, then its properties.

        The walk stack spans nested inline nodes too, so a property that
        composes an enclosing type is caught as a cycle.
        """
        if part.ref is not None:
            resolved = self.follow_chain(part.ref)
            if resolved is not None:
                target_name, target = resolved
                if target_name in self._walk:
                    start = self._walk.index(target_name)
                    cycle = [str(n) for n in self._walk[start:]] + [str(target_name)]
                    raise CompositionCycleError(cycle_path=cycle)
                self._walk.append(target_name)
                try:
                    self._merge_part(target, properties, required)
                finally:
                    self._walk.pop()

        self._merge_composition(part.all_of, properties, required)
        if part.any_of and not self._is_int_or_string(part):
            self._merge_composition(part.any_of, properties, required)

        for prop_name, prop in part.properties.items():
            properties[prop_name] = self.translate_property(prop)
        _extend_unique(required, part.required)

    @staticmethod
    def _is_int_or_string(schema: StructuralSchema) -> bool:
        if schema.int_or_string:
            return True
        if not schema.any_of:
            return False
        branch_types = set()
        for branch in schema.any_of:
            if branch.ref is not None or branch.properties or branch.type not in ("integer", "string"):
                return False
            branch_types.add(branch.type)
        return branch_types == {"integer", "string"}


def _extend_unique(target: list[str], values: list[str]) -> None:
    for value in values:
        if value not in target:
            target.append(value)


def _compact(node: dict[str, Any]) -> dict[str, Any]:
    """Drop optional keys whose value is empty."""
    return {k: v for k, v in node.items() if k not in _OMIT_WHEN_EMPTY or v}
