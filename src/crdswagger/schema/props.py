"""Structural schema model parsed from raw CRD JSON-Schema dicts."""

from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from crdswagger.errors import SchemaParseError
from crdswagger.types import QualifiedTypeName

__all__ = ["StructuralSchema", "parse_schema"]


class StructuralSchema(BaseModel):
    """One node of a structural (CRD-style) JSON schema.

    ``$ref`` tokens are parsed into :class:`QualifiedTypeName` on validation,
    so nothing downstream handles raw reference strings.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    type: str = ""
    format: str = ""
    description: str = ""
    required: list[str] = Field(default_factory=list)
    enum: list[Any] | None = None
    properties: dict[str, StructuralSchema] = Field(default_factory=dict)
    additional_properties: Union[bool, StructuralSchema, None] = Field(default=None, alias="additionalProperties")
    items: Union[StructuralSchema, list[StructuralSchema], None] = None
    ref: QualifiedTypeName | None = Field(default=None, alias="$ref")
    all_of: list[StructuralSchema] = Field(default_factory=list, alias="allOf")
    any_of: list[StructuralSchema] = Field(default_factory=list, alias="anyOf")
    int_or_string: bool = Field(default=False, alias="x-kubernetes-int-or-string")

    @field_validator("ref", mode="before")
    @classmethod
    def _parse_ref(cls, value: Any) -> Any:
        if isinstance(value, str):
            return QualifiedTypeName.from_reference(value)
        return value

    @property
    def value_schema(self) -> StructuralSchema | None:
        """The additional-properties value schema, if this node declares one."""
        if isinstance(self.additional_properties, StructuralSchema):
            return self.additional_properties
        return None

    @property
    def is_reference(self) -> bool:
        """A bare reference: a ``$ref`` with no declared type."""
        return self.ref is not None and not self.type

    @property
    def is_map(self) -> bool:
        """An object with only an additional-value schema and no declared properties."""
        return self.type == "object" and self.value_schema is not None and not self.properties


StructuralSchema.model_rebuild()


def parse_schema(raw: dict[str, Any] | StructuralSchema) -> StructuralSchema:
    """Validate a raw schema dict into a StructuralSchema.

    Raises:
        SchemaParseError: If the dict is not a valid structural schema.
    """
    if isinstance(raw, StructuralSchema):
        return raw
    if not isinstance(raw, dict):
        raise SchemaParseError(message=f"Schema must be a mapping, got {type(raw).__name__}")
    try:
        return StructuralSchema.model_validate(raw)
    except ValidationError as e:
        raise SchemaParseError(message=f"Invalid structural schema: {e}", cause=e) from e
