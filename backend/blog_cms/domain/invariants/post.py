from typing import Any, Dict, List

from blog_cms.domain.exceptions import ValidationError
from blog_cms.domain.seo import extract_seo_payload

TITLE_MAX_LENGTH = 255
EXCERPT_MAX_LENGTH = 300
FOCUS_KEYWORD_MAX_WORDS = 4


def collect_post_errors(data: Dict[str, Any], *, partial: bool = False) -> List[str]:
    """
    Field-level checks for post payloads.

    With ``partial`` only the keys present in ``data`` are checked. The focus
    keyword is read the way it is stored, so a nested ``seo`` value counts.
    """
    errors: List[str] = []

    if not partial or "title" in data:
        title = data.get("title")
        if title is not None and not isinstance(title, str):
            errors.append("Title must be a string")
        elif not (title or "").strip():
            errors.append("Title is required")
        elif len(title.strip()) > TITLE_MAX_LENGTH:
            errors.append(f"Title must be less than {TITLE_MAX_LENGTH} characters")

    excerpt = data.get("excerpt")
    if excerpt is not None and not isinstance(excerpt, str):
        errors.append("Excerpt must be a string")
    elif excerpt and len(excerpt) > EXCERPT_MAX_LENGTH:
        errors.append(f"Excerpt must be less than {EXCERPT_MAX_LENGTH} characters")

    keyword = extract_seo_payload(data).get("focusKeyword")
    if keyword is not None and not isinstance(keyword, str):
        errors.append("Focus keyword must be a string")
    elif keyword and len(keyword.split()) > FOCUS_KEYWORD_MAX_WORDS:
        errors.append(f"Focus keyword should be {FOCUS_KEYWORD_MAX_WORDS} words or less")

    return errors


def assert_post_payload(data: Dict[str, Any], *, partial: bool = False) -> None:
    errors = collect_post_errors(data, partial=partial)
    if errors:
        raise ValidationError("Validation errors", errors=errors)
