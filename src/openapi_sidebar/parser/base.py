"""Data models for a parsed OpenAPI document.

The parser converts both OpenAPI 3.x and Swagger 2.0 input into these
models for the sidebar compiler and the page renderer.
"""

from pydantic import BaseModel, ConfigDict

METHODS = ("get", "post", "put", "patch", "delete")


class Param(BaseModel):
    """A single operation parameter (query, path, header, or cookie)."""

    model_config = ConfigDict(frozen=True)

    name: str
    location: str  # query / path / header / cookie
    required: bool = False
    param_type: str = "string"
    description: str = ""


class OperationSpec(BaseModel):
    """One API operation, in the order it was declared."""

    model_config = ConfigDict(frozen=True)

    method: str  # get / post / put / patch / delete
    path: str  # /food/{id}
    operation_id: str | None = None
    summary: str = ""
    description: str = ""
    tags: list[str] = []
    parameters: list[Param] = []
    request_body: dict | None = None
    responses: dict[str, str] = {}  # {status_code: description}
    deprecated: bool = False


class TagSpec(BaseModel):
    """A tag declared in the document's top-level ``tags`` list."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""


class ApiInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = ""
    version: str = ""
    description: str = ""


class ApiDocument(BaseModel):
    """The whole parsed document."""

    model_config = ConfigDict(frozen=True)

    dialect: str  # openapi3 / swagger2
    info: ApiInfo = ApiInfo()
    tags: list[TagSpec] = []
    operations: list[OperationSpec] = []

    def tag_description(self, name: str) -> str:
        for tag in self.tags:
            if tag.name == name:
                return tag.description
        return ""
