"""Checks that every doc id the sidebar references has a content document."""

import json
import logging
import warnings
from pathlib import Path

import yaml

from openapi_sidebar.errors import BrokenReferenceWarning, SidebarError
from .tree import SidebarTree

logger = logging.getLogger(__name__)

DOC_SUFFIXES = (".md", ".mdx")


def find_broken_references(
    tree: SidebarTree,
    doc_ids: set[str],
    category_link_source: str = "tag",
) -> list[str]:
    """Return referenced doc ids missing from ``doc_ids``, in sidebar order."""
    return [doc_id for doc_id in tree.doc_ids(category_link_source) if doc_id not in doc_ids]


def find_broken_sidebar_references(sidebar: list, doc_ids: set[str]) -> list[str]:
    """Same check for a sidebar already serialized to JSON."""
    return [doc_id for doc_id in sidebar_doc_ids(sidebar) if doc_id not in doc_ids]


def report_broken_references(broken: list[str]) -> None:
    """Surface each broken reference as a BrokenReferenceWarning."""
    for doc_id in broken:
        logger.warning("Broken sidebar reference: %s", doc_id)
        warnings.warn(BrokenReferenceWarning(doc_id), stacklevel=2)


def sidebar_doc_ids(items: list) -> list[str]:
    ids = []
    for item in items:
        if isinstance(item, str):
            ids.append(item)
        elif item.get("type") == "doc":
            ids.append(item["id"])
        elif item.get("type") == "category":
            link = item.get("link") or {}
            if link.get("type") == "doc":
                ids.append(link["id"])
            ids.extend(sidebar_doc_ids(item.get("items", [])))
    return ids


def load_sidebar(path: Path) -> list:
    """Read a sidebar.json written by a previous build."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise SidebarError(f"{path}: cannot load sidebar ({e})") from e
    if not isinstance(data, list):
        raise SidebarError(f"{path}: sidebar must be a list")
    return data


def collect_doc_ids(directory: Path, id_prefix: str = "") -> set[str]:
    """Doc ids of every Markdown/MDX file under ``directory``.

    The id is the front-matter ``id`` (or the file stem) prefixed with the
    file's sub-directory and ``id_prefix``, which is how the docs renderer
    resolves them.
    """
    ids = set()
    for path in sorted(directory.rglob("*")):
        if not path.is_file() or path.suffix not in DOC_SUFFIXES:
            continue
        local_id = _front_matter_id(path) or path.stem
        parts = [id_prefix.strip("/")] + list(path.relative_to(directory).parent.parts) + [local_id]
        ids.add("/".join(p for p in parts if p))
    return ids


def _front_matter_id(path: Path) -> str | None:
    text = path.read_text(encoding="utf-8")
    if not text.startswith("---\n"):
        return None
    end = text.find("\n---", 4)
    if end == -1:
        return None
    try:
        front = yaml.safe_load(text[4:end])
    except yaml.YAMLError:
        logger.warning("Unreadable front matter in %s", path)
        return None
    if isinstance(front, dict) and front.get("id"):
        return str(front["id"])
    return None
