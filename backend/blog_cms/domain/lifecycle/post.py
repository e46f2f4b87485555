from datetime import datetime
from typing import Optional

from blog_cms.domain.exceptions import ValidationError
from blog_cms.models.post import POST_STATUSES

PUBLISHED = "published"


def assert_post_status(status: str) -> str:
    if status not in POST_STATUSES:
        raise ValidationError(
            f"Invalid status '{status}'. Must be one of: {', '.join(POST_STATUSES)}"
        )
    return status


def resolve_published_at(
    *,
    status: str,
    now: datetime,
    requested: Optional[datetime] = None,
    previous_status: Optional[str] = None,
    previous_published_at: Optional[datetime] = None,
) -> Optional[datetime]:
    """
    Publication timestamp for a post that ends up in ``status``.

    Any status other than published clears the timestamp, even when one
    was requested. Entering published without a requested value stamps
    ``now``; staying published keeps the existing timestamp.
    """
    if status != PUBLISHED:
        return None

    if requested is not None:
        return requested

    if previous_status == PUBLISHED and previous_published_at is not None:
        return previous_published_at

    return now
