"""crdswagger - Swagger definitions from CRD structural schemas."""

from __future__ import annotations

# Core
from crdswagger.generator import GenerationResult, Generator
from crdswagger.document import SwaggerDocument
from crdswagger.translator import SchemaTranslator
from crdswagger.registry import ClosureDriver, ClosureState

# Types
from crdswagger.types import (
    Diagnostic,
    GroupNamingProfile,
    GroupVersionKind,
    NamingMode,
    QualifiedTypeName,
)

# Config
from crdswagger.config import Config, GeneratorConfig

# Naming
from crdswagger.naming import NamespaceMapper, build_profiles, longest_group_label

# Schema
from crdswagger.schema import StructuralSchema, is_simple_type, parse_schema

# Sources
from crdswagger.source import SchemaCatalog, SchemaSource

# Errors
from crdswagger.errors import (
    CompositionCycleError,
    ConfigError,
    ConfigNotFoundError,
    ErrorCodes,
    GeneratorError,
    SchemaNotFoundError,
    SchemaParseError,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "Generator",
    "GenerationResult",
    "SwaggerDocument",
    "SchemaTranslator",
    "ClosureDriver",
    "ClosureState",
    # Types
    "Diagnostic",
    "GroupNamingProfile",
    "GroupVersionKind",
    "NamingMode",
    "QualifiedTypeName",
    # Config
    "Config",
    "GeneratorConfig",
    # Naming
    "NamespaceMapper",
    "build_profiles",
    "longest_group_label",
    # Schema
    "StructuralSchema",
    "is_simple_type",
    "parse_schema",
    # Sources
    "SchemaCatalog",
    "SchemaSource",
    # Errors
    "ErrorCodes",
    "GeneratorError",
    "ConfigError",
    "ConfigNotFoundError",
    "SchemaNotFoundError",
    "SchemaParseError",
    "CompositionCycleError",
]
