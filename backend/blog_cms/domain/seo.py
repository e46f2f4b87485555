# blog_cms/domain/seo.py
"""
SEO side-record rules.

Text fields map 1:1 from camelCase payload keys to columns. Image fields
carry public media ids in payloads and internal ids on the row.
"""
from typing import Any, Dict, List, Tuple

SEO_TEXT_FIELDS: Dict[str, str] = {
    "metaTitle": "meta_title",
    "metaDescription": "meta_description",
    "canonicalUrl": "canonical_url",
    "ogTitle": "og_title",
    "ogDescription": "og_description",
    "twitterTitle": "twitter_title",
    "twitterDescription": "twitter_description",
    "focusKeyword": "focus_keyword",
}

SEO_IMAGE_FIELDS: Dict[str, str] = {
    "ogImageId": "og_image_id",
    "twitterImageId": "twitter_image_id",
}

SEO_PAYLOAD_KEYS = tuple(SEO_TEXT_FIELDS) + tuple(SEO_IMAGE_FIELDS)

# (target, source) pairs, applied in order: og <- meta, then twitter <- og.
SEO_FALLBACKS: List[Tuple[str, str]] = [
    ("og_title", "meta_title"),
    ("og_description", "meta_description"),
    ("twitter_title", "og_title"),
    ("twitter_description", "og_description"),
    ("twitter_image_id", "og_image_id"),
]


def extract_seo_payload(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Collect SEO keys from a post payload.

    Keys may sit at the top level or inside a nested ``seo`` object; nested
    values win.
    """
    found = {key: data[key] for key in SEO_PAYLOAD_KEYS if key in data}

    nested = data.get("seo")
    if isinstance(nested, dict):
        found.update({key: nested[key] for key in SEO_PAYLOAD_KEYS if key in nested})

    return found


def has_seo_values(payload: Dict[str, Any]) -> bool:
    return any(value not in (None, "") for value in payload.values())


def clean_text(column: str, value: Any):
    if value is None:
        return None
    text = str(value).strip()
    if column == "focus_keyword":
        text = text.lower()
    return text or None


def apply_fallbacks(values: Dict[str, Any]) -> Dict[str, Any]:
    """Fill absent specific fields from their more general counterparts."""
    filled = dict(values)
    for target, source in SEO_FALLBACKS:
        if filled.get(target) in (None, "") and filled.get(source) not in (None, ""):
            filled[target] = filled[source]
    return filled
