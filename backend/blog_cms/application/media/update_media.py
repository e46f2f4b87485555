from typing import Any, Dict

from blog_cms.application.media.list_media import get_media
from blog_cms.domain.exceptions import ValidationError
from blog_cms.utils.transaction import transactional

FILE_NAME_MAX_LENGTH = 255


def update_media(*, tenant_id: str, media_id: Any, data: Dict[str, Any]):
    """Only ``altText`` and ``fileName`` are editable; bytes never change."""
    media = get_media(tenant_id=tenant_id, media_id=media_id)

    with transactional():
        if "altText" in data:
            media.alt_text = (data.get("altText") or "").strip()

        if "fileName" in data:
            name = (data.get("fileName") or "").strip()
            if not name:
                raise ValidationError("File name cannot be empty")
            if len(name) > FILE_NAME_MAX_LENGTH:
                raise ValidationError(
                    f"File name must be less than {FILE_NAME_MAX_LENGTH} characters"
                )
            media.file_name = name

    return media
