from typing import Any

from flask import current_app
from sqlalchemy import or_

from blog_cms.application.media.list_media import get_media
from blog_cms.domain.exceptions import ConflictError
from blog_cms.models.post import Post
from blog_cms.models.seo import SeoRecord
from blog_cms.utils.storage import get_blob_store
from blog_cms.utils.transaction import transactional


def media_in_use(tenant_id: str, media_id: int) -> bool:
    featured = Post.query.filter(
        Post.tenant_id == tenant_id,
        Post.featured_image_id == media_id,
    ).first()
    if featured is not None:
        return True

    social = SeoRecord.query.filter(
        SeoRecord.tenant_id == tenant_id,
        or_(SeoRecord.og_image_id == media_id, SeoRecord.twitter_image_id == media_id),
    ).first()
    return social is not None


def delete_media(*, tenant_id: str, media_id: Any) -> str:
    """
    Delete a media row and its stored bytes.

    Blob removal is best effort; a storage failure is logged and the row is
    still deleted.
    """
    media = get_media(tenant_id=tenant_id, media_id=media_id)

    if media_in_use(tenant_id, media.id):
        raise ConflictError("Cannot delete media that is currently in use")

    if media.storage_key:
        try:
            get_blob_store().delete(media.storage_key)
        except Exception:
            current_app.logger.exception("Failed to delete blob %s", media.storage_key)

    public_id = media.uuid
    with transactional() as session:
        session.delete(media)

    return public_id
