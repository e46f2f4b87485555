from typing import Any, Dict, Optional

from blog_cms.application.blog.associations import resolve_media_id
from blog_cms.domain.seo import (
    SEO_IMAGE_FIELDS,
    SEO_TEXT_FIELDS,
    apply_fallbacks,
    clean_text,
    has_seo_values,
)
from blog_cms.models.seo import SeoRecord


def find_seo(tenant_id: str, entity_type: str, entity_id: int) -> Optional[SeoRecord]:
    return SeoRecord.query.filter_by(
        tenant_id=tenant_id,
        entity_type=entity_type,
        entity_id=entity_id,
    ).first()


def _column_values(tenant_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    values = {}
    for key, column in SEO_TEXT_FIELDS.items():
        if key in payload:
            values[column] = clean_text(column, payload[key])

    for key, column in SEO_IMAGE_FIELDS.items():
        if key in payload:
            label = "OG" if column.startswith("og") else "Twitter"
            values[column] = resolve_media_id(tenant_id, payload[key], label)

    return values


def write_seo(tenant_id: str, entity_type: str, entity_id: int, payload: Dict[str, Any], session):
    """
    Create or patch the SEO row for an entity.

    A row is only created when at least one field carries a value; social
    fields are back-filled from their general counterparts on creation.
    Existing rows are patched with exactly the supplied fields.
    """
    if not payload:
        return find_seo(tenant_id, entity_type, entity_id)

    values = _column_values(tenant_id, payload)
    record = find_seo(tenant_id, entity_type, entity_id)

    if record is None:
        if not has_seo_values(payload):
            return None

        record = SeoRecord()
        record.tenant_id = tenant_id
        record.entity_type = entity_type
        record.entity_id = entity_id
        values = apply_fallbacks(values)
        session.add(record)

    for column, value in values.items():
        setattr(record, column, value)

    session.flush()
    return record
