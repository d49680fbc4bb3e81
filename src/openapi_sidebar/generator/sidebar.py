"""Sidebar compiler — turns a parsed OpenAPI document into a SidebarTree.

The compiler is a single pass over the operations in declaration order.
It does no I/O, so compiling the same document twice yields equal trees.
"""

import logging
from collections import Counter

from openapi_sidebar.errors import DuplicateOperationIdError
from openapi_sidebar.parser.base import ApiDocument, OperationSpec
from .slug import SlugRegistry, humanize, slugify
from .tree import UNTAGGED, NavCategory, NavEntry, SidebarTree

logger = logging.getLogger(__name__)

DEFAULT_OVERVIEW_SLUG = "overview"


def compile_sidebar(
    document: ApiDocument,
    id_prefix: str = "",
    overview_id: str | None = None,
) -> SidebarTree:
    """Compile a SidebarTree from a parsed document."""
    registry = SlugRegistry()

    overview_slug = registry.claim(
        slugify(overview_id or "") or slugify(document.info.title) or DEFAULT_OVERVIEW_SLUG
    )
    overview = NavEntry(
        id=_doc_id(id_prefix, overview_slug),
        slug=overview_slug,
        label=document.info.title or "Overview",
    )

    _warn_repeated_operation_ids(document.operations)

    # Insertion order of the dict is first-seen tag order.
    buckets: dict[str, list[NavEntry]] = {}
    for operation in document.operations:
        tag = operation.tags[0] if operation.tags else UNTAGGED
        slug = registry.claim(operation_slug(operation))
        entry = NavEntry(
            id=_doc_id(id_prefix, slug),
            slug=slug,
            label=operation_label(operation),
            method=operation.method,
            operation=operation,
        )
        logger.debug("%s %s -> %s [%s]", operation.method.upper(), operation.path, entry.id, tag)
        buckets.setdefault(tag, []).append(entry)

    categories = []
    for tag, entries in buckets.items():
        slug = registry.claim(slugify(tag) or "tag")
        categories.append(
            NavCategory(label=tag, id=_doc_id(id_prefix, slug), slug=slug, entries=entries)
        )

    tree = SidebarTree(overview=overview, categories=categories)
    _check_unique_ids(tree)
    return tree


def operation_slug(operation: OperationSpec) -> str:
    """Slug from the summary, else the operationId, else method and path."""
    for source in (operation.summary, operation.operation_id or ""):
        slug = slugify(source)
        if slug:
            return slug
    return slugify(f"{operation.method} {operation.path}") or operation.method


def operation_label(operation: OperationSpec) -> str:
    """Summary if present, else the un-camel-cased operationId, else METHOD /path."""
    if operation.summary:
        return operation.summary
    if operation.operation_id:
        label = humanize(operation.operation_id)
        if label:
            return label
    return f"{operation.method.upper()} {operation.path}"


def _doc_id(prefix: str, slug: str) -> str:
    prefix = prefix.strip("/")
    return f"{prefix}/{slug}" if prefix else slug


def _warn_repeated_operation_ids(operations: list[OperationSpec]) -> None:
    counts = Counter(op.operation_id for op in operations if op.operation_id)
    for operation_id, count in counts.items():
        if count > 1:
            logger.warning("operationId '%s' is declared %d times", operation_id, count)


def _check_unique_ids(tree: SidebarTree) -> None:
    seen: dict[str, NavEntry] = {tree.overview.id: tree.overview}
    for entry in tree.entries():
        if entry.id in seen:
            operation_ids = [_describe(seen[entry.id]), _describe(entry)]
            raise DuplicateOperationIdError(entry.id, operation_ids)
        seen[entry.id] = entry


def _describe(entry: NavEntry) -> str:
    if entry.operation is None:
        return entry.id
    return entry.operation.operation_id or f"{entry.method.upper()} {entry.operation.path}"
