"""Tests for SwaggerDocument serialization."""

from __future__ import annotations

import json

import yaml

from crdswagger.document import SwaggerDocument


def _document() -> SwaggerDocument:
    return SwaggerDocument(
        title="Kubernetes (widgets.acme.io)",
        version="v1.18.2",
        definitions={
            "io.acme.widgets.WidgetSpec": {"type": "object"},
            "io.acme.widgets.Widget": {"type": "object", "properties": {"spec": {"$ref": "#/definitions/io.acme.widgets.WidgetSpec"}}},
        },
    )


class TestSwaggerDocument:
    def test_to_dict(self) -> None:
        data = _document().to_dict()
        assert data["swagger"] == "2.0"
        assert data["info"] == {"title": "Kubernetes (widgets.acme.io)", "version": "v1.18.2"}
        assert data["paths"] == {}
        assert list(data["definitions"]) == ["io.acme.widgets.Widget", "io.acme.widgets.WidgetSpec"]

    def test_export_json(self) -> None:
        exported = _document().export()
        assert json.loads(exported) == _document().to_dict()

    def test_export_yaml_keeps_key_order(self) -> None:
        exported = _document().export(format="yaml")
        assert yaml.safe_load(exported) == _document().to_dict()
        assert exported.index("swagger:") < exported.index("definitions:")
        assert exported.index("io.acme.widgets.Widget:") < exported.index("io.acme.widgets.WidgetSpec:")
