# blog_cms/normalizers/pagination.py
from typing import Any, Callable, Dict, List, Mapping


def normalize_pagination(
    items: List[Any],
    normalize_fn: Callable[[Any], Dict[str, Any]],
    meta: Mapping[str, Any],
) -> Dict[str, Any]:
    """
    Normalize paginated API responses.

    ``meta`` is the offset pagination produced by ``utils.pagination``.
    """
    return {
        "items": [normalize_fn(item) for item in items],
        "pagination": dict(meta),
    }
