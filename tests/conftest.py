"""Shared fixtures for the crdswagger test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest
import yaml

from crdswagger.config import GeneratorConfig
from crdswagger.naming.mapper import NamespaceMapper, build_profiles
from crdswagger.registry.state import ClosureState
from crdswagger.source.catalog import SCHEMA_FILE_SUFFIX, SchemaCatalog
from crdswagger.translator import SchemaTranslator
from crdswagger.types import GroupVersionKind, QualifiedTypeName

ROOT = "github.com/acme/widgets"
V1 = "github.com/acme/widgets/api/v1"
META = "k8s.io/apimachinery/pkg/apis/meta/v1"


@pytest.fixture
def catalog() -> SchemaCatalog:
    """An empty in-memory catalog."""
    return SchemaCatalog()


@pytest.fixture
def generator_config() -> GeneratorConfig:
    """Default config rooted at the test project namespace."""
    return GeneratorConfig(root_namespace=ROOT)


@pytest.fixture
def widget_catalog(catalog: SchemaCatalog) -> SchemaCatalog:
    """Catalog with one Widget kind in group widgets.acme.io/v1 referencing a few helper types."""
    widget = QualifiedTypeName(V1, "Widget")
    catalog.register(
        widget,
        {
            "type": "object",
            "description": "Widget is the Schema for the widgets API",
            "properties": {
                "metadata": {"$ref": QualifiedTypeName(META, "ObjectMeta").reference},
                "spec": {"$ref": QualifiedTypeName(V1, "WidgetSpec").reference},
                "tags": {"$ref": QualifiedTypeName(V1, "Tags").reference, "description": "Free-form tags"},
            },
        },
        kind=GroupVersionKind(group="widgets.acme.io", version="v1", kind="Widget"),
    )
    catalog.register(
        QualifiedTypeName(V1, "WidgetSpec"),
        {
            "type": "object",
            "properties": {
                "size": {"type": "integer", "format": "int32"},
                "port": {"anyOf": [{"type": "integer"}, {"type": "string"}], "x-kubernetes-int-or-string": True},
            },
            "required": ["size"],
        },
    )
    catalog.register(
        QualifiedTypeName(V1, "Tags"),
        {"type": "array", "items": {"type": "string"}, "description": "A list of tags"},
    )
    return catalog


@pytest.fixture
def make_translator(generator_config: GeneratorConfig) -> Callable[..., tuple[SchemaTranslator, ClosureState]]:
    """Factory building a translator over a catalog with profiles computed from its kinds."""

    def _make(source: SchemaCatalog, config: GeneratorConfig | None = None) -> tuple[SchemaTranslator, ClosureState]:
        cfg = config or generator_config
        kinds = source.known_kinds()
        profiles = build_profiles(
            kinds,
            {gvk.group for gvk in kinds.values()},
            root_namespace=cfg.root_namespace,
            naming_mode=cfg.naming_mode,
        )
        state = ClosureState()
        return SchemaTranslator(source, NamespaceMapper(profiles), state, cfg), state

    return _make


@pytest.fixture
def write_schema(tmp_path: Path) -> Callable[..., Path]:
    """Write a ``<namespace>/<Name>.schema.yaml`` file below ``tmp_path / 'schemas'``."""

    def _write(namespace: str, name: str, data: dict[str, Any] | str) -> Path:
        path = tmp_path / "schemas" / namespace / f"{name}{SCHEMA_FILE_SUFFIX}"
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(data, str):
            path.write_text(data)
        else:
            path.write_text(yaml.dump(data, default_flow_style=False))
        return path

    return _write
