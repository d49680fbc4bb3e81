from pathlib import Path

import pytest

from openapi_sidebar.errors import MalformedSpecError
from openapi_sidebar.parser.detect import detect_dialect
from openapi_sidebar.parser.openapi import parse_document, parse_openapi

FIXTURES = Path(__file__).parent / "fixtures"


class TestDetectDialect:
    def test_detect_openapi3(self):
        assert detect_dialect({"openapi": "3.1.0"}) == "openapi3"

    def test_detect_swagger2(self):
        assert detect_dialect({"swagger": "2.0"}) == "swagger2"

    def test_detect_unknown(self):
        assert detect_dialect({"info": {}}) is None
        assert detect_dialect(["openapi"]) is None


class TestOpenApiParser:
    def test_parse_operations_in_declaration_order(self):
        doc = parse_openapi(FIXTURES / "pahlawan.yaml")
        assert [(op.method, op.path) for op in doc.operations] == [
            ("get", "/food"),
            ("post", "/food"),
            ("post", "/courier-request"),
        ]

    def test_parse_info_and_tags(self):
        doc = parse_openapi(FIXTURES / "pahlawan.yaml")
        assert doc.dialect == "openapi3"
        assert doc.info.title == "Pahlawan Pangan Public API"
        assert doc.info.version == "1.0.0"
        assert [t.name for t in doc.tags] == ["Search", "Provider"]
        assert doc.tag_description("Provider") == "Endpoints for food providers."
        assert doc.tag_description("Missing") == ""

    def test_parse_get_food(self):
        doc = parse_openapi(FIXTURES / "pahlawan.yaml")
        get_food = doc.operations[0]
        assert get_food.summary == "Cari Makanan Murah (B2C)"
        assert get_food.operation_id == "searchFood"
        assert get_food.tags == ["Search"]
        assert [p.name for p in get_food.parameters] == ["X-Region", "query"]
        assert get_food.parameters[1].required is False
        assert get_food.responses == {"200": "Matching surplus listings"}

    def test_parse_post_food_has_body(self):
        doc = parse_openapi(FIXTURES / "pahlawan.yaml")
        post_food = doc.operations[1]
        assert post_food.request_body is not None
        assert "portions" in post_food.request_body["properties"]

    def test_untagged_operation_has_no_tags(self):
        doc = parse_openapi(FIXTURES / "pahlawan.yaml")
        assert doc.operations[2].tags == []

    def test_parse_swagger2_json(self):
        doc = parse_openapi(FIXTURES / "swagger2.json")
        assert doc.dialect == "swagger2"
        assert [op.method for op in doc.operations] == ["get", "put"]
        put = doc.operations[1]
        assert put.request_body == {"type": "object"}
        assert [p.name for p in put.parameters] == ["id"]
        assert put.parameters[0].location == "path"
        assert put.parameters[0].required is True

    def test_operation_parameter_overrides_path_parameter(self):
        doc = parse_document({
            "openapi": "3.0.0",
            "paths": {
                "/food/{id}": {
                    "parameters": [{"name": "id", "in": "path", "description": "shared"}],
                    "get": {"parameters": [{"name": "id", "in": "path", "description": "own"}]},
                }
            },
        })
        params = doc.operations[0].parameters
        assert len(params) == 1
        assert params[0].description == "own"


class TestMalformedDocuments:
    def test_invalid_yaml(self, tmp_path):
        f = tmp_path / "broken.yaml"
        f.write_text("openapi: 3.0.0\npaths: [unclosed\n")
        with pytest.raises(MalformedSpecError) as exc:
            parse_openapi(f)
        assert exc.value.source == str(f)

    def test_missing_file(self, tmp_path):
        with pytest.raises(MalformedSpecError):
            parse_openapi(tmp_path / "missing.yaml")

    def test_not_openapi(self):
        with pytest.raises(MalformedSpecError, match="not an OpenAPI"):
            parse_document({"info": {"title": "x"}})

    def test_paths_must_be_mapping(self):
        with pytest.raises(MalformedSpecError, match="'paths'"):
            parse_document({"openapi": "3.0.0", "paths": ["/food"]})

    def test_operation_must_be_mapping(self):
        with pytest.raises(MalformedSpecError):
            parse_document({"openapi": "3.0.0", "paths": {"/food": {"get": "nope"}}})

    def test_tags_must_be_list(self):
        with pytest.raises(MalformedSpecError, match="tags"):
            parse_document({"openapi": "3.0.0", "paths": {"/food": {"get": {"tags": "Search"}}}})

    def test_parameter_schema_must_be_mapping(self):
        with pytest.raises(MalformedSpecError, match="schema of parameter 'q'"):
            parse_document({
                "openapi": "3.0.0",
                "paths": {"/a": {"get": {"parameters": [{"name": "q", "in": "query", "schema": "string"}]}}},
            })

    def test_parameters_must_be_list(self):
        with pytest.raises(MalformedSpecError, match="parameters of 'get /a'"):
            parse_document({"openapi": "3.0.0", "paths": {"/a": {"get": {"parameters": {"q": {}}}}}})

    def test_responses_must_be_mapping(self):
        with pytest.raises(MalformedSpecError, match="responses of 'get /a'"):
            parse_document({"openapi": "3.0.0", "paths": {"/a": {"get": {"responses": ["200"]}}}})

    def test_request_body_content_entry_must_be_mapping(self):
        with pytest.raises(MalformedSpecError, match="requestBody content of 'post /a'"):
            parse_document({
                "openapi": "3.0.0",
                "paths": {"/a": {"post": {"requestBody": {"content": {"application/json": "object"}}}}},
            })

    def test_request_body_schema_must_be_mapping(self):
        with pytest.raises(MalformedSpecError, match="request body schema of 'post /a'"):
            parse_document({
                "openapi": "3.0.0",
                "paths": {"/a": {"post": {"requestBody": {"content": {"application/json": {"schema": "object"}}}}}},
            })
