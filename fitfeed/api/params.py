"""Query parameter parsing shared by paginated endpoints.

Paging values are lenient: missing, non-numeric or out-of-range values fall
back to the default instead of failing the request.
"""

from __future__ import annotations

MAX_PAGE_SIZE = 100


def _to_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def page_limit(raw: str | None, default: int) -> int:
    """Page size; non-positive or unparseable values use default, large values are capped."""
    value = _to_int(raw)
    if not value or value < 1:
        return default
    return min(value, MAX_PAGE_SIZE)


def page_offset(raw: str | None) -> int:
    value = _to_int(raw)
    if not value or value < 0:
        return 0
    return value
