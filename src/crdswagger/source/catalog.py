"""SchemaCatalog: in-memory schema source with optional YAML directory backing."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from crdswagger.errors import ConfigNotFoundError, SchemaNotFoundError, SchemaParseError
from crdswagger.schema.props import StructuralSchema, parse_schema
from crdswagger.types import GroupVersionKind, QualifiedTypeName

__all__ = ["SchemaCatalog", "SCHEMA_FILE_SUFFIX"]

logger = logging.getLogger(__name__)

SCHEMA_FILE_SUFFIX = ".schema.yaml"


class SchemaCatalog:
    """Schema source backed by registered schemas and, optionally, a directory.

    A directory holds one ``<namespace>/<Name>.schema.yaml`` file per type::

        groupVersionKind:        # optional, marks a top-level kind
          group: example.io
          version: v1
          kind: Widget
        schema:
          type: object
          properties: ...

    Top-level kinds are loaded by :meth:`from_directory`; every other type is
    read only when :meth:`ensure_loaded` asks for it.
    """

    def __init__(self, schemas_dir: str | Path | None = None) -> None:
        self._schemas_dir: Path | None = Path(schemas_dir).resolve() if schemas_dir is not None else None
        self._schemata: dict[QualifiedTypeName, StructuralSchema] = {}
        self._kinds: dict[QualifiedTypeName, GroupVersionKind] = {}
        self._loaded_on_demand: list[QualifiedTypeName] = []

    @classmethod
    def from_directory(cls, schemas_dir: str | Path) -> SchemaCatalog:
        """Scan a schema directory and register every top-level kind found in it."""
        root = Path(schemas_dir)
        if not root.is_dir():
            raise ConfigNotFoundError(config_path=str(root))

        catalog = cls(root)
        for file_path in sorted(root.rglob(f"*{SCHEMA_FILE_SUFFIX}")):
            relative = file_path.relative_to(root)
            if any(part.startswith((".", "_")) for part in relative.parts):
                continue
            name = _name_for_path(relative)
            data = _load_file(file_path)
            if "groupVersionKind" in data:
                catalog._register_loaded(name, data, file_path)
        logger.info("Loaded %d kinds from %s", len(catalog._kinds), root)
        return catalog

    def register(
        self,
        name: QualifiedTypeName,
        schema: dict[str, Any] | StructuralSchema,
        kind: GroupVersionKind | None = None,
    ) -> None:
        """Register a type schema, optionally as a top-level kind."""
        self._schemata[name] = parse_schema(schema)
        if kind is not None:
            self._kinds[name] = kind

    @property
    def loaded_on_demand(self) -> list[QualifiedTypeName]:
        """Types read from disk through ensure_loaded, in load order."""
        return list(self._loaded_on_demand)

    # ----- SchemaSource -----

    def schema_for(self, name: QualifiedTypeName) -> StructuralSchema:
        try:
            return self._schemata[name]
        except KeyError:
            raise SchemaNotFoundError(type_name=str(name)) from None

    def kind_metadata_for(self, name: QualifiedTypeName) -> GroupVersionKind | None:
        return self._kinds.get(name)

    def is_known(self, name: QualifiedTypeName) -> bool:
        return name in self._schemata

    def known_kinds(self) -> dict[QualifiedTypeName, GroupVersionKind]:
        return dict(self._kinds)

    def ensure_loaded(self, name: QualifiedTypeName) -> None:
        if name in self._schemata or self._schemas_dir is None:
            return

        file_path = self._schemas_dir / name.namespace / f"{name.local_name}{SCHEMA_FILE_SUFFIX}"
        if not file_path.exists():
            logger.debug("No schema file for %s at %s", name, file_path)
            return

        self._register_loaded(name, _load_file(file_path), file_path)
        self._loaded_on_demand.append(name)
        logger.debug("Loaded %s on demand from %s", name, file_path)

    def _register_loaded(self, name: QualifiedTypeName, data: dict[str, Any], file_path: Path) -> None:
        if "schema" not in data:
            raise SchemaParseError(message=f"Missing required field: schema in {file_path}")

        kind = None
        gvk_raw = data.get("groupVersionKind")
        if gvk_raw is not None:
            if not isinstance(gvk_raw, dict) or not all(k in gvk_raw for k in ("group", "version", "kind")):
                raise SchemaParseError(
                    message=f"groupVersionKind in {file_path} must have group, version and kind"
                )
            kind = GroupVersionKind(
                group=str(gvk_raw["group"]),
                version=str(gvk_raw["version"]),
                kind=str(gvk_raw["kind"]),
            )
        self.register(name, data["schema"], kind)


def _name_for_path(relative: Path) -> QualifiedTypeName:
    local_name = relative.name[: -len(SCHEMA_FILE_SUFFIX)]
    return QualifiedTypeName(namespace=relative.parent.as_posix(), local_name=local_name)


def _load_file(file_path: Path) -> dict[str, Any]:
    """Load and parse a schema YAML file."""
    try:
        parsed = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise SchemaParseError(message=f"Invalid YAML in {file_path}: {e}", cause=e) from e

    if not isinstance(parsed, dict):
        raise SchemaParseError(message=f"Schema file {file_path} is empty or not a mapping")
    return parsed
