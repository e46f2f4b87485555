from datetime import datetime, time, timezone
from typing import Any, Optional

from dateutil.parser import parse, ParserError

from blog_cms.domain.exceptions import ValidationError


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def normalize_ts(ts: datetime) -> datetime:
    """
    Ensure datetime is timezone-aware and expressed in UTC.
    Naive values are assumed to already be UTC.
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def parse_datetime(value: Any, field: str) -> Optional[datetime]:
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return normalize_ts(value)

    try:
        return normalize_ts(parse(str(value)))
    except (ParserError, ValueError, OverflowError) as exc:
        raise ValidationError(f"Invalid date for {field}") from exc


def end_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.max, tzinfo=value.tzinfo)


def iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None
