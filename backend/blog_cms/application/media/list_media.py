from typing import Any, Dict, Mapping

from sqlalchemy import func, or_

from blog_cms.domain.exceptions import NotFoundError
from blog_cms.models.media import Media
from blog_cms.utils.identifiers import find_by_identifier
from blog_cms.utils.media import (
    DOCUMENT_EXTENSIONS,
    IMAGE_EXTENSIONS,
    MEDIA_TYPE_EXTENSIONS,
    VIDEO_EXTENSIONS,
    format_file_size,
)
from blog_cms.utils.pagination import paginate, parse_page_params

SORT_FIELDS = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "fileName": "file_name",
    "fileSize": "file_size",
}


def list_media(*, tenant_id: str, args: Mapping[str, Any]):
    page, limit = parse_page_params(args, default_limit=20)

    query = Media.query.filter(Media.tenant_id == tenant_id)

    file_type = (args.get("fileType") or "").strip().lower()
    if file_type:
        query = query.filter(Media.file_type == file_type)

    media_type = args.get("mediaType")
    if media_type in MEDIA_TYPE_EXTENSIONS:
        query = query.filter(Media.file_type.in_(sorted(MEDIA_TYPE_EXTENSIONS[media_type])))

    search = (args.get("search") or "").strip()
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(Media.file_name.ilike(pattern), Media.alt_text.ilike(pattern)))

    column = getattr(Media, SORT_FIELDS.get(args.get("sortBy"), "created_at"))
    ascending = (args.get("sortOrder") or "desc").lower() == "asc"
    query = query.order_by(column.asc() if ascending else column.desc())

    return paginate(query, page=page, limit=limit)


def get_media(*, tenant_id: str, media_id: Any) -> Media:
    media = find_by_identifier(Media, tenant_id, media_id)
    if media is None:
        raise NotFoundError("Media not found")
    return media


def _count(tenant_id: str, extensions) -> int:
    return Media.query.filter(
        Media.tenant_id == tenant_id,
        Media.file_type.in_(sorted(extensions)),
    ).count()


def media_stats(*, tenant_id: str) -> Dict[str, Any]:
    total_files = Media.query.filter(Media.tenant_id == tenant_id).count()
    total_size = (
        Media.query.with_entities(func.coalesce(func.sum(Media.file_size), 0))
        .filter(Media.tenant_id == tenant_id)
        .scalar()
    )

    return {
        "totalFiles": total_files,
        "images": _count(tenant_id, IMAGE_EXTENSIONS),
        "videos": _count(tenant_id, VIDEO_EXTENSIONS),
        "documents": _count(tenant_id, DOCUMENT_EXTENSIONS),
        "totalSize": int(total_size or 0),
        "formattedTotalSize": format_file_size(int(total_size or 0)),
    }
