"""SwaggerDocument: the in-memory output document and its serialization."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import yaml

from crdswagger.types import DefinitionKey

__all__ = ["SwaggerDocument"]


@dataclass
class SwaggerDocument:
    """A Swagger 2.0 document.

    This package fills ``definitions``; ``paths`` is left for a REST path
    builder that refers to definitions by their keys.
    """

    title: str
    version: str
    definitions: dict[DefinitionKey, dict[str, Any]] = field(default_factory=dict)
    paths: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Swagger-shaped dict with definitions sorted by key."""
        return {
            "swagger": "2.0",
            "info": {"title": self.title, "version": self.version},
            "paths": dict(self.paths),
            "definitions": {key: self.definitions[key] for key in sorted(self.definitions)},
        }

    def export(self, format: str = "json") -> str:
        """Serialize to a JSON or YAML string."""
        data = self.to_dict()
        if format == "yaml":
            return yaml.dump(data, default_flow_style=False, sort_keys=False)
        return json.dumps(data, indent=2)
