# blog_cms/application/media/upload_media.py
import io
import json
from typing import Any, List, Optional

from flask import current_app

from blog_cms.domain.exceptions import ValidationError
from blog_cms.models.media import Media
from blog_cms.utils.media import (
    MAX_FILES_PER_UPLOAD,
    UPLOAD_KINDS,
    allowed_mime,
    file_extension,
    storage_key,
)
from blog_cms.utils.slugs import normalize_slug
from blog_cms.utils.storage import get_blob_store
from blog_cms.utils.transaction import transactional


def parse_alt_texts(raw: Any) -> List[Optional[str]]:
    """``altTexts`` arrives as a JSON array in a form field."""
    if not raw:
        return []
    if isinstance(raw, list):
        return raw

    try:
        parsed = json.loads(raw)
    except ValueError as exc:
        raise ValidationError("altTexts must be a JSON array") from exc

    if not isinstance(parsed, list):
        raise ValidationError("altTexts must be a JSON array")
    return parsed


def upload_media(
    *,
    tenant_id: str,
    uploaded_by: str,
    files: list,
    kind: str,
    alt_texts: Optional[List[Optional[str]]] = None,
    post_slug: Optional[str] = None,
) -> List[Media]:
    """
    Validate, store and record uploaded files.

    Every file is checked against the MIME types accepted for ``kind``
    before any byte is stored. If the rows cannot be written, stored blobs
    are removed again.
    """
    if kind not in UPLOAD_KINDS:
        raise ValidationError(f"Unknown upload type '{kind}'")

    files = [f for f in files if f and f.filename]
    if not files:
        raise ValidationError("No file uploaded")
    if len(files) > MAX_FILES_PER_UPLOAD:
        raise ValidationError(f"Cannot upload more than {MAX_FILES_PER_UPLOAD} files at once")

    invalid = [f.filename for f in files if not allowed_mime(kind, f.mimetype)]
    if invalid:
        raise ValidationError(f"Invalid file type(s): {', '.join(invalid)}")

    alt_texts = alt_texts or []
    prefix = normalize_slug(post_slug) if post_slug else None
    store = get_blob_store()

    stored_keys: List[str] = []
    rows: List[Media] = []
    try:
        for index, upload in enumerate(files):
            payload = upload.read()
            key = storage_key(kind, upload.filename, prefix)
            url = store.put(key, io.BytesIO(payload), upload.mimetype)
            stored_keys.append(key)

            alt = alt_texts[index] if index < len(alt_texts) else None

            media = Media()
            media.tenant_id = tenant_id
            media.file_name = upload.filename
            media.storage_key = key
            media.url = url
            media.file_type = file_extension(upload.filename)
            media.file_size = len(payload)
            media.alt_text = (str(alt).strip() if alt is not None else "") or upload.filename
            media.uploaded_by = uploaded_by
            rows.append(media)

        with transactional() as session:
            session.add_all(rows)
    except Exception:
        for key in stored_keys:
            try:
                store.delete(key)
            except Exception:
                current_app.logger.exception("Failed to remove orphaned blob %s", key)
        raise

    current_app.logger.info("Uploaded %s %s file(s)", len(rows), kind)
    return rows
