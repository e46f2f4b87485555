# blog_cms/utils/slugs.py
import re
import time
from typing import Callable, Iterator, Optional

from slugify import slugify

from blog_cms.domain.exceptions import ValidationError

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
MAX_SLUG_ATTEMPTS = 1000

SEQUENTIAL = "sequential"
QUICK = "quick"


def normalize_slug(text: str) -> str:
    """Lowercase, collapse non-alphanumeric runs into single hyphens, trim hyphens."""
    return slugify(text or "", lowercase=True)


def validate_slug(slug: str) -> str:
    if not SLUG_PATTERN.match(slug or ""):
        raise ValidationError(
            "Slug must contain only lowercase letters, numbers, and hyphens"
        )
    return slug


def _time_suffix() -> str:
    return str(int(time.time() * 1000))[-6:]


def _candidates(base: str, strategy: str) -> Iterator[str]:
    yield base

    if strategy == QUICK:
        base = f"{base}-{_time_suffix()}"
        yield base

    counter = 1
    while True:
        yield f"{base}-{counter}"
        counter += 1


def allocate_slug(
    base: str,
    exists: Callable[[str], bool],
    *,
    strategy: str = SEQUENTIAL,
    max_attempts: int = MAX_SLUG_ATTEMPTS,
) -> str:
    """
    Return the first candidate derived from ``base`` that ``exists`` rejects.

    sequential: base, base-1, base-2, ...
    quick:      base, base-<6 digit time suffix>, then sequential on that.
    """
    if not base:
        raise ValidationError("Cannot derive a slug from an empty value")

    for attempt, candidate in enumerate(_candidates(base, strategy)):
        if attempt >= max_attempts:
            break
        if not exists(candidate):
            return candidate

    raise ValidationError(f"Could not allocate a unique slug for '{base}'")


def slug_exists_query(model, tenant_id: str, exclude_id: Optional[int] = None) -> Callable[[str], bool]:
    """Build a tenant-scoped existence probe for ``model.slug``."""
    def exists(candidate: str) -> bool:
        query = model.query.filter(
            model.tenant_id == tenant_id,
            model.slug == candidate,
        )
        if exclude_id is not None:
            query = query.filter(model.id != exclude_id)
        return query.first() is not None

    return exists
