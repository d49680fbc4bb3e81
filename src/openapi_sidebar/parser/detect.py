"""Detect the dialect of a loaded OpenAPI document."""


def detect_dialect(data: object) -> str | None:
    """Detect which OpenAPI dialect a loaded document uses.

    Returns: 'openapi3', 'swagger2', or None when the data is not an
    OpenAPI document at all.
    """
    if not isinstance(data, dict):
        return None

    version = data.get("openapi")
    if version is not None and str(version).startswith("3"):
        return "openapi3"

    version = data.get("swagger")
    if version is not None and str(version).startswith("2"):
        return "swagger2"

    return None
