"""Navigation tree models and their renderer-facing serialization."""

import json

from pydantic import BaseModel, ConfigDict

from openapi_sidebar.parser.base import OperationSpec

UNTAGGED = "UNTAGGED"
SIDEBAR_ID = "apisidebar"


class NavEntry(BaseModel):
    """One leaf of the sidebar: the overview page or a single operation."""

    model_config = ConfigDict(frozen=True)

    id: str
    slug: str
    label: str
    method: str | None = None  # None for the overview entry
    operation: OperationSpec | None = None

    @property
    def class_name(self) -> str:
        return f"api-method {self.method}"

    def to_sidebar(self) -> dict:
        if self.method is None:
            return {"type": "doc", "id": self.id}
        return {
            "type": "doc",
            "id": self.id,
            "label": self.label,
            "className": self.class_name,
        }


class NavCategory(BaseModel):
    """Entries that share a tag, in declaration order."""

    model_config = ConfigDict(frozen=True)

    label: str
    id: str  # doc id of the category's own page
    slug: str
    entries: list[NavEntry] = []

    def to_sidebar(self, link: bool = True) -> dict:
        item = {"type": "category", "label": self.label}
        if link:
            item["link"] = {"type": "doc", "id": self.id}
        item["items"] = [entry.to_sidebar() for entry in self.entries]
        return item


class SidebarTree(BaseModel):
    """The overview entry followed by the ordered categories."""

    model_config = ConfigDict(frozen=True)

    overview: NavEntry
    categories: list[NavCategory] = []

    def entries(self) -> list[NavEntry]:
        return [entry for category in self.categories for entry in category.entries]

    def doc_ids(self, category_link_source: str = "tag") -> list[str]:
        """Every doc id the sidebar references, in sidebar order."""
        ids = [self.overview.id]
        for category in self.categories:
            if category_link_source == "tag":
                ids.append(category.id)
            ids.extend(entry.id for entry in category.entries)
        return ids

    def to_sidebar(self, category_link_source: str = "tag") -> list[dict]:
        link = category_link_source == "tag"
        return [self.overview.to_sidebar()] + [
            category.to_sidebar(link=link) for category in self.categories
        ]

    def to_json(self, category_link_source: str = "tag") -> str:
        data = self.to_sidebar(category_link_source)
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    def to_typescript(self, category_link_source: str = "tag") -> str:
        body = json.dumps(self.to_sidebar(category_link_source), indent=2, ensure_ascii=False)
        body = body.replace("\n", "\n  ")
        return (
            'import type { SidebarsConfig } from "@docusaurus/plugin-content-docs";\n'
            "\n"
            "const sidebar: SidebarsConfig = {\n"
            f"  {SIDEBAR_ID}: {body},\n"
            "};\n"
            "\n"
            f"export default sidebar.{SIDEBAR_ID};\n"
        )
