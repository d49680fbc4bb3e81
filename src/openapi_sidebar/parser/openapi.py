"""OpenAPI / Swagger document parser.

Parses OpenAPI 3.x and Swagger 2.0 documents (YAML or JSON) into an
ApiDocument, keeping operations in declaration order.
"""

import logging
from pathlib import Path

import yaml

from openapi_sidebar.errors import MalformedSpecError
from .base import METHODS, ApiDocument, ApiInfo, OperationSpec, Param, TagSpec
from .detect import detect_dialect

logger = logging.getLogger(__name__)


def parse_openapi(file_path: Path) -> ApiDocument:
    """Read and parse an OpenAPI/Swagger file."""
    source = str(file_path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedSpecError(f"cannot read document ({e})", source) from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise MalformedSpecError(f"invalid YAML/JSON ({e})", source) from e

    return parse_document(data, source=source)


def parse_document(data: object, source: str | None = None) -> ApiDocument:
    """Convert a loaded OpenAPI mapping into an ApiDocument."""
    dialect = detect_dialect(data)
    if dialect is None:
        raise MalformedSpecError("not an OpenAPI 3.x or Swagger 2.0 document", source)

    paths = data.get("paths") or {}
    if not isinstance(paths, dict):
        raise MalformedSpecError("'paths' must be a mapping", source)

    operations = []
    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            raise MalformedSpecError(f"path item '{path}' must be a mapping", source)
        shared_params = path_item.get("parameters", [])

        for method, operation in path_item.items():
            method = str(method).lower()
            if method not in METHODS:
                if method not in ("parameters", "summary", "description", "servers", "$ref"):
                    logger.debug("Skipping '%s %s': unsupported method", method, path)
                continue
            if not isinstance(operation, dict):
                raise MalformedSpecError(f"operation '{method} {path}' must be a mapping", source)
            operations.append(_parse_operation(str(path), method, operation, shared_params, dialect, source))

    logger.debug("Parsed %d operations (%s)", len(operations), dialect)
    return ApiDocument(
        dialect=dialect,
        info=_parse_info(data.get("info")),
        tags=_parse_tags(data.get("tags"), source),
        operations=operations,
    )


def _parse_operation(
    path: str,
    method: str,
    operation: dict,
    shared_params: list,
    dialect: str,
    source: str | None,
) -> OperationSpec:
    where = f"'{method} {path}'"
    tags = operation.get("tags") or []
    if not isinstance(tags, list):
        raise MalformedSpecError(f"tags of {where} must be a list", source)

    own_params = operation.get("parameters") or []
    for params in (shared_params or [], own_params):
        if not isinstance(params, list):
            raise MalformedSpecError(f"parameters of {where} must be a list", source)
    raw_params = _merge_parameters(shared_params, own_params)
    if dialect == "swagger2":
        request_body = _swagger_body(raw_params, where, source)
    else:
        request_body = _parse_request_body(operation.get("requestBody"), where, source)

    operation_id = operation.get("operationId")
    return OperationSpec(
        method=method,
        path=path,
        operation_id=str(operation_id) if operation_id is not None else None,
        summary=str(operation.get("summary") or "").strip(),
        description=str(operation.get("description") or "").strip(),
        tags=[str(t) for t in tags],
        parameters=_parse_parameters(raw_params, where, source),
        request_body=request_body,
        responses=_parse_responses(operation.get("responses") or {}, where, source),
        deprecated=bool(operation.get("deprecated", False)),
    )


def _merge_parameters(shared: list, own: list) -> list[dict]:
    # Operation-level parameters override path-level ones on (name, in).
    merged: dict[tuple, dict] = {}
    for p in list(shared or []) + list(own):
        if not isinstance(p, dict) or "name" not in p:
            continue
        merged[(p["name"], p.get("in", "query"))] = p
    return list(merged.values())


def _parse_parameters(params: list[dict], where: str, source: str | None) -> list[Param]:
    result = []
    for p in params:
        location = p.get("in", "query")
        if location in ("body", "formData"):
            continue
        schema = p.get("schema") or {}
        if not isinstance(schema, dict):
            raise MalformedSpecError(f"schema of parameter '{p['name']}' of {where} must be a mapping", source)
        result.append(
            Param(
                name=str(p["name"]),
                location=location,
                required=bool(p.get("required", location == "path")),
                param_type=schema.get("type") or p.get("type") or "string",
                description=str(p.get("description") or "").strip(),
            )
        )
    return result


def _parse_request_body(body: dict | None, where: str, source: str | None) -> dict | None:
    if body is None:
        return None
    if not isinstance(body, dict):
        raise MalformedSpecError(f"requestBody of {where} must be a mapping", source)
    content = body.get("content") or {}
    if not isinstance(content, dict):
        raise MalformedSpecError(f"requestBody content of {where} must be a mapping", source)
    for ct_data in content.values():
        if not isinstance(ct_data, dict):
            raise MalformedSpecError(f"requestBody content of {where} must map to mappings", source)

    for content_type in ("application/json", "multipart/form-data"):
        if content_type in content:
            return _schema(content[content_type].get("schema"), where, source)
    # Fallback: return first available schema
    for ct_data in content.values():
        return _schema(ct_data.get("schema"), where, source)
    return None


def _swagger_body(params: list[dict], where: str, source: str | None) -> dict | None:
    for p in params:
        if p.get("in") == "body":
            return _schema(p.get("schema"), where, source)
    return None


def _schema(schema: object, where: str, source: str | None) -> dict | None:
    if schema is not None and not isinstance(schema, dict):
        raise MalformedSpecError(f"request body schema of {where} must be a mapping", source)
    return schema


def _parse_responses(responses: dict, where: str, source: str | None) -> dict[str, str]:
    if not isinstance(responses, dict):
        raise MalformedSpecError(f"responses of {where} must be a mapping", source)
    result = {}
    for status_code, resp in responses.items():
        description = resp.get("description", "") if isinstance(resp, dict) else ""
        result[str(status_code)] = str(description or "").strip()
    return result


def _parse_info(info: dict | None) -> ApiInfo:
    if not isinstance(info, dict):
        return ApiInfo()
    return ApiInfo(
        title=str(info.get("title") or "").strip(),
        version=str(info.get("version") or "").strip(),
        description=str(info.get("description") or "").strip(),
    )


def _parse_tags(tags: list | None, source: str | None) -> list[TagSpec]:
    if tags is None:
        return []
    if not isinstance(tags, list):
        raise MalformedSpecError("top-level 'tags' must be a list", source)
    return [
        TagSpec(name=str(t["name"]), description=str(t.get("description") or "").strip())
        for t in tags
        if isinstance(t, dict) and "name" in t
    ]
