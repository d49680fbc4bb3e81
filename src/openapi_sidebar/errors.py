"""Error taxonomy for sidebar generation.

Parsing and derivation errors are fatal and abort the build. Broken
references are reported as warnings so the build can still produce
best-effort output.
"""


class SidebarError(Exception):
    """Base class for every error raised while generating API docs."""


class MalformedSpecError(SidebarError):
    """The OpenAPI document cannot be read or parsed."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class DuplicateOperationIdError(SidebarError):
    """Two navigation entries ended up with the same doc id."""

    def __init__(self, doc_id: str, operation_ids: list[str]):
        self.doc_id = doc_id
        self.operation_ids = operation_ids
        joined = ", ".join(operation_ids)
        super().__init__(f"Duplicate doc id '{doc_id}' for operations: {joined}")


class BrokenReferenceWarning(UserWarning):
    """A sidebar entry points at a doc id with no content document."""

    def __init__(self, doc_id: str):
        self.doc_id = doc_id
        super().__init__(f"Sidebar references missing document '{doc_id}'")
