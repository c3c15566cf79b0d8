"""Error hierarchy for the crdswagger generator."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "GeneratorError",
    "ConfigNotFoundError",
    "ConfigError",
    "SchemaNotFoundError",
    "SchemaParseError",
    "CompositionCycleError",
    "ErrorCodes",
]


class GeneratorError(Exception):
    """Base error for all crdswagger errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigNotFoundError(GeneratorError):
    """Raised when a configuration file cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(GeneratorError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class SchemaNotFoundError(GeneratorError):
    """Raised when a schema source cannot produce the schema of a type."""

    def __init__(self, type_name: str, **kwargs: Any) -> None:
        super().__init__(
            code="SCHEMA_NOT_FOUND",
            message=f"Schema not found: {type_name}",
            details={"type_name": type_name},
            **kwargs,
        )

    @property
    def type_name(self) -> str:
        """The qualified type name that could not be loaded."""
        return self.details["type_name"]


class SchemaParseError(GeneratorError):
    """Raised when a raw schema or reference token is malformed."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="SCHEMA_PARSE_ERROR", message=message, **kwargs)


class CompositionCycleError(GeneratorError):
    """Raised when an allOf/anyOf walk reaches a type already on its own stack."""

    def __init__(self, cycle_path: list[str], **kwargs: Any) -> None:
        super().__init__(
            code="COMPOSITION_CYCLE",
            message=f"Composition cycle detected: {' -> '.join(cycle_path)}",
            details={"cycle_path": cycle_path},
            **kwargs,
        )

    @property
    def cycle_path(self) -> list[str]:
        """The composed types forming the cycle, first element repeated at the end."""
        return self.details["cycle_path"]


class ErrorCodes:
    """All error and diagnostic codes as constants.

    Example:
        if error.code == ErrorCodes.SCHEMA_NOT_FOUND:
            handle_missing_type()
    """

    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"
    SCHEMA_NOT_FOUND = "SCHEMA_NOT_FOUND"
    SCHEMA_PARSE_ERROR = "SCHEMA_PARSE_ERROR"
    COMPOSITION_CYCLE = "COMPOSITION_CYCLE"
    # Non-fatal diagnostics
    UNKNOWN_SCHEMA_SHAPE = "UNKNOWN_SCHEMA_SHAPE"
    AMBIGUOUS_NAMESPACE_MAPPING = "AMBIGUOUS_NAMESPACE_MAPPING"
    ALIAS_CHAIN_CYCLE = "ALIAS_CHAIN_CYCLE"
    DEFINITION_KEY_COLLISION = "DEFINITION_KEY_COLLISION"
    UNDEFINED_FOREIGN_REFERENCE = "UNDEFINED_FOREIGN_REFERENCE"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
