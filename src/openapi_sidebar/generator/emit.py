"""Writes the sidebar and content pages to the docs output directory.

Generation is deterministic and total, so every emit replaces the
previously generated files wholesale instead of diffing them.
"""

import logging
from pathlib import Path

from pydantic import BaseModel

from .pages import Page
from .tree import SidebarTree
from .validator import find_broken_references, report_broken_references

logger = logging.getLogger(__name__)

GENERATED_PATTERNS = ("*.api.mdx", "*.tag.mdx", "*.info.mdx", "sidebar.json", "sidebar.ts")


class EmitResult(BaseModel):
    """Files written and removed by one emit, plus broken references."""

    written: list[Path] = []
    removed: list[Path] = []
    broken: list[str] = []


def emit(
    tree: SidebarTree,
    pages: dict[str, Page],
    destination: Path,
    category_link_source: str = "tag",
) -> EmitResult:
    """Replace the generated files in ``destination`` with ``tree`` and ``pages``."""
    result = EmitResult()
    result.broken = find_broken_references(tree, set(pages), category_link_source)
    report_broken_references(result.broken)

    destination.mkdir(parents=True, exist_ok=True)
    result.removed = clean(destination)

    for page in pages.values():
        result.written.append(_write(destination / page.filename, page.content))
    result.written.append(_write(destination / "sidebar.json", tree.to_json(category_link_source)))
    result.written.append(_write(destination / "sidebar.ts", tree.to_typescript(category_link_source)))

    logger.info("Wrote %d files to %s", len(result.written), destination)
    return result


def clean(destination: Path) -> list[Path]:
    """Remove previously generated files; anything else is left in place."""
    if not destination.is_dir():
        return []
    removed = []
    for pattern in GENERATED_PATTERNS:
        for path in sorted(destination.glob(pattern)):
            if path.is_file():
                path.unlink()
                removed.append(path)
    logger.debug("Removed %d generated files from %s", len(removed), destination)
    return removed


def _write(path: Path, content: str) -> Path:
    # No newline translation on write.
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(content)
    return path
