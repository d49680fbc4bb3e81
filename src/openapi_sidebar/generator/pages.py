"""Renders the MDX content pages the sidebar points at."""

import json

import yaml
from pydantic import BaseModel, ConfigDict

from openapi_sidebar.parser.base import ApiDocument, OperationSpec
from .tree import NavCategory, NavEntry, SidebarTree

_MDX_ESCAPES = str.maketrans({"{": "\\{", "}": "\\}", "<": "&lt;", ">": "&gt;"})


class Page(BaseModel):
    """One generated content document."""

    model_config = ConfigDict(frozen=True)

    doc_id: str
    filename: str  # e.g. food-search.api.mdx
    content: str


def render_pages(
    tree: SidebarTree,
    document: ApiDocument,
    base_url: str = "/",
    route_base_path: str = "docs",
) -> dict[str, Page]:
    """Render every page of the tree, keyed by doc id in sidebar order."""
    link = _linker(base_url, route_base_path)
    pages = [_overview_page(tree, document, link)]
    for category in tree.categories:
        pages.append(_category_page(category, document, link))
        pages.extend(_operation_page(entry) for entry in category.entries)
    return {page.doc_id: page for page in pages}


def escape_mdx(text: str) -> str:
    return text.translate(_MDX_ESCAPES)


def _linker(base_url: str, route_base_path: str):
    prefix = "/" + "/".join(p for p in (base_url.strip("/"), route_base_path.strip("/")) if p)

    def link(doc_id: str) -> str:
        return f"{prefix.rstrip('/')}/{doc_id}"

    return link


def _front_matter(fields: dict) -> str:
    dumped = yaml.safe_dump(fields, sort_keys=False, allow_unicode=True, default_flow_style=False)
    return f"---\n{dumped}---\n"


def _overview_page(tree: SidebarTree, document: ApiDocument, link) -> Page:
    entry = tree.overview
    info = document.info
    lines = [f"# {escape_mdx(entry.label)}", ""]
    if info.version:
        lines += [f"Version: `{info.version}`", ""]
    if info.description:
        lines += [escape_mdx(info.description), ""]
    if tree.categories:
        lines += ["## Sections", ""]
        lines += [
            f"- [{escape_mdx(c.label)}]({link(c.id)}) ({len(c.entries)})" for c in tree.categories
        ]
        lines.append("")

    front = _front_matter({
        "id": entry.slug,
        "title": entry.label,
        "sidebar_label": "Introduction",
        "description": _first_line(info.description),
        "custom_edit_url": None,
    })
    return Page(doc_id=entry.id, filename=f"{entry.slug}.info.mdx", content=front + "\n" + "\n".join(lines))


def _category_page(category: NavCategory, document: ApiDocument, link) -> Page:
    description = document.tag_description(category.label)
    lines = [f"# {escape_mdx(category.label)}", ""]
    if description:
        lines += [escape_mdx(description), ""]
    for entry in category.entries:
        lines.append(
            f"- **{entry.method.upper()}** [{escape_mdx(entry.label)}]({link(entry.id)})"
        )
    lines.append("")

    front = _front_matter({
        "id": category.slug,
        "title": category.label,
        "description": _first_line(description),
        "custom_edit_url": None,
    })
    return Page(doc_id=category.id, filename=f"{category.slug}.tag.mdx", content=front + "\n" + "\n".join(lines))


def _operation_page(entry: NavEntry) -> Page:
    op = entry.operation
    lines = [f"# {escape_mdx(entry.label)}", "", f"**{op.method.upper()}** `{op.path}`", ""]
    if op.deprecated:
        lines += [":::caution deprecated", "", "This endpoint has been deprecated.", "", ":::", ""]
    if op.description:
        lines += [escape_mdx(op.description), ""]
    lines += _parameter_section(op)
    lines += _request_body_section(op)
    lines += _response_section(op)

    front = _front_matter({
        "id": entry.slug,
        "title": entry.label,
        "sidebar_label": entry.label,
        "description": _first_line(op.description),
        "sidebar_class_name": f"{op.method} api-method",
        "api": {"method": op.method, "path": op.path},
        "custom_edit_url": None,
    })
    return Page(doc_id=entry.id, filename=f"{entry.slug}.api.mdx", content=front + "\n" + "\n".join(lines))


def _parameter_section(op: OperationSpec) -> list[str]:
    if not op.parameters:
        return []
    lines = ["## Parameters", "", "| Name | In | Type | Required | Description |", "| --- | --- | --- | --- | --- |"]
    for p in op.parameters:
        required = "yes" if p.required else "no"
        lines.append(
            f"| `{p.name}` | {p.location} | {p.param_type} | {required} | {_cell(p.description)} |"
        )
    lines.append("")
    return lines


def _request_body_section(op: OperationSpec) -> list[str]:
    if op.request_body is None:
        return []
    # YAML loads unquoted dates and timestamps as date objects.
    schema = json.dumps(op.request_body, indent=2, ensure_ascii=False, default=str)
    return ["## Request Body", "", "```json", schema, "```", ""]


def _response_section(op: OperationSpec) -> list[str]:
    if not op.responses:
        return []
    lines = ["## Responses", "", "| Status | Description |", "| --- | --- |"]
    for status, description in op.responses.items():
        lines.append(f"| `{status}` | {_cell(description)} |")
    lines.append("")
    return lines


def _cell(text: str) -> str:
    return escape_mdx(" ".join(text.split())).replace("|", "\\|")


def _first_line(text: str) -> str:
    return text.strip().splitlines()[0] if text.strip() else ""
