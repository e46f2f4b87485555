# blog_cms/utils/pagination.py
from __future__ import annotations

import math
from typing import Any, Mapping, Optional, Tuple, TypedDict


class PageMeta(TypedDict):
    """
    Offset pagination metadata shared by every list endpoint.
    """
    page: int
    limit: int
    total: int
    pages: int


def _to_int(raw: Any, default: int) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        return default


def parse_page_params(
    args: Mapping[str, Any],
    *,
    default_limit: int = 20,
    max_limit: Optional[int] = None,
    allow_unbounded: bool = False,
) -> Tuple[int, Optional[int]]:
    """
    Read ``page``/``limit`` from query args.

    Returns ``(page, limit)`` where ``limit`` is None when the caller asked
    for every row (``limit`` of 0 or -1 with ``allow_unbounded``).
    """
    page = max(1, _to_int(args.get("page"), 1))
    limit = _to_int(args.get("limit"), default_limit)

    if allow_unbounded and limit in (0, -1):
        return page, None

    limit = max(1, limit)
    if max_limit is not None:
        limit = min(max_limit, limit)

    return page, limit


def paginate(query, *, page: int, limit: Optional[int]) -> Tuple[list, PageMeta]:
    """
    Execute an offset-paginated query.

    An unbounded ``limit`` returns every row as a single page whose
    ``limit`` equals the row count.
    """
    total = query.order_by(None).count()

    if limit is None:
        items = query.all()
        return items, {
            "page": page,
            "limit": total,
            "total": total,
            "pages": 1 if total else 0,
        }

    items = query.offset((page - 1) * limit).limit(limit).all()
    return items, {
        "page": page,
        "limit": limit,
        "total": total,
        "pages": math.ceil(total / limit),
    }


def with_navigation(meta: PageMeta) -> dict:
    """Add next/prev page hints used by post listings."""
    page, pages = meta["page"], meta["pages"]
    has_next = page < pages
    has_prev = page > 1
    return {
        **meta,
        "hasNextPage": has_next,
        "hasPrevPage": has_prev,
        "nextPage": page + 1 if has_next else None,
        "prevPage": page - 1 if has_prev else None,
    }
