"""Path and name conversion utilities."""

import re

_UUID_PATTERN = r'[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}'
_SEARCH_SEGMENT = re.compile(r'(/search/)[^/]+$')


def normalize_path(path: str) -> str:
    """Normalize API path by replacing ids and search fragments with placeholders.

    Useful for metrics and logging to avoid high cardinality.

    Examples:
        >>> normalize_path("/api/v1/employee/a1b2c3d4-e5f6-7890-abcd-ef1234567890")
        "/api/v1/employee/{id}"
        >>> normalize_path("/api/v1/employee/123")
        "/api/v1/employee/{id}"
        >>> normalize_path("/api/v1/employee/search/john")
        "/api/v1/employee/search/{fragment}"
    """
    if not path:
        return path

    path = re.sub(_UUID_PATTERN, '{id}', path, flags=re.IGNORECASE)
    path = _SEARCH_SEGMENT.sub(r'\1{fragment}', path)

    return re.sub(r'/\d+(?=/|$)', '/{id}', path)


def fold_name(name: str) -> str:
    """Case-fold a name for case-insensitive comparison."""
    return name.casefold()
