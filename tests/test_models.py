import json

import pytest
from pydantic import ValidationError

from openapi_sidebar.generator.tree import NavCategory, NavEntry, SidebarTree
from openapi_sidebar.parser.base import ApiDocument, OperationSpec, Param


def _tree() -> SidebarTree:
    entry = NavEntry(
        id="api/list-food",
        slug="list-food",
        label="List food",
        method="get",
        operation=OperationSpec(method="get", path="/food"),
    )
    return SidebarTree(
        overview=NavEntry(id="api/food-api", slug="food-api", label="Food API"),
        categories=[NavCategory(label="Search", id="api/search", slug="search", entries=[entry])],
    )


class TestParam:
    def test_defaults(self):
        p = Param(name="id", location="path")
        assert p.required is False
        assert p.param_type == "string"
        assert p.description == ""


class TestOperationSpec:
    def test_minimal_operation(self):
        op = OperationSpec(method="get", path="/food")
        assert op.operation_id is None
        assert op.tags == []
        assert op.responses == {}
        assert op.deprecated is False

    def test_is_frozen(self):
        op = OperationSpec(method="get", path="/food")
        with pytest.raises(ValidationError):
            op.path = "/other"


class TestApiDocument:
    def test_empty_document(self):
        doc = ApiDocument(dialect="openapi3")
        assert doc.info.title == ""
        assert doc.operations == []


class TestSidebarTree:
    def test_overview_entry_has_no_label_in_sidebar(self):
        assert _tree().to_sidebar()[0] == {"type": "doc", "id": "api/food-api"}

    def test_doc_ids_in_sidebar_order(self):
        tree = _tree()
        assert tree.doc_ids() == ["api/food-api", "api/search", "api/list-food"]
        assert tree.doc_ids("none") == ["api/food-api", "api/list-food"]

    def test_to_json_round_trips_sidebar(self):
        tree = _tree()
        assert tree.to_json().endswith("\n")
        assert json.loads(tree.to_json()) == tree.to_sidebar()

    def test_json_keeps_non_ascii_labels(self):
        entry = NavEntry(id="kafe", slug="kafe", label="Café", method="get")
        tree = SidebarTree(
            overview=NavEntry(id="o", slug="o", label="O"),
            categories=[NavCategory(label="Kafé", id="k", slug="k", entries=[entry])],
        )
        assert '"label": "Café"' in tree.to_json()

    def test_typescript_module(self):
        ts = _tree().to_typescript()
        assert ts.startswith('import type { SidebarsConfig } from "@docusaurus/plugin-content-docs";')
        assert "  apisidebar: [" in ts
        assert '"className": "api-method get"' in ts
        assert ts.endswith("export default sidebar.apisidebar;\n")
