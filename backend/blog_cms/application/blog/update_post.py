from typing import Any, Dict

from sqlalchemy.exc import IntegrityError

from blog_cms.application.blog.associations import apply_term_changes, resolve_media_id
from blog_cms.application.blog.seo_records import write_seo
from blog_cms.application.guards import require_active_tenant
from blog_cms.domain.exceptions import ConflictError, NotFoundError
from blog_cms.domain.invariants.post import assert_post_payload
from blog_cms.domain.lifecycle.post import assert_post_status, resolve_published_at
from blog_cms.domain.seo import extract_seo_payload
from blog_cms.models.post import Post
from blog_cms.utils.dates import parse_datetime, utc_now
from blog_cms.utils.identifiers import find_by_identifier
from blog_cms.utils.slugs import SEQUENTIAL, allocate_slug, normalize_slug, slug_exists_query, validate_slug
from blog_cms.utils.transaction import transactional


def get_post_for_write(tenant, raw_id: Any) -> Post:
    require_active_tenant(tenant)
    post = find_by_identifier(Post, tenant.id, raw_id)
    if post is None:
        raise NotFoundError("Blog post not found")
    return post


def _apply_slug(post: Post, tenant_id: str, raw: Any) -> None:
    exists = slug_exists_query(Post, tenant_id, exclude_id=post.id)
    requested = (raw or "").strip()

    if not requested:
        post.slug = allocate_slug(normalize_slug(post.title), exists, strategy=SEQUENTIAL)
        return

    validate_slug(requested)
    if requested != post.slug and exists(requested):
        raise ConflictError("Slug already exists for another post")
    post.slug = requested


def update_post(*, tenant, post_id: Any, data: Dict[str, Any]) -> Post:
    """
    Sparse update: only keys present in ``data`` change.

    Category/tag arrays replace the existing links; an empty array clears
    them and an absent key leaves them alone.
    """
    post = get_post_for_write(tenant, post_id)
    assert_post_payload(data, partial=True)

    try:
        with transactional() as session:
            if "title" in data:
                post.title = data["title"].strip()

            if "slug" in data:
                _apply_slug(post, tenant.id, data["slug"])

            if "content" in data:
                post.content = data["content"] or ""

            if "excerpt" in data:
                post.excerpt = (data["excerpt"] or "").strip()

            if "isIndexable" in data:
                post.is_indexable = bool(data["isIndexable"])

            if "featuredImageId" in data:
                post.featured_image_id = resolve_media_id(
                    tenant.id, data["featuredImageId"], "featured"
                )

            if "status" in data or "publishedAt" in data:
                status = assert_post_status(data.get("status") or post.status)
                post.published_at = resolve_published_at(
                    status=status,
                    now=utc_now(),
                    requested=parse_datetime(data.get("publishedAt"), "publishedAt"),
                    previous_status=post.status,
                    previous_published_at=post.published_at,
                )
                post.status = status

            apply_term_changes(tenant.id, post.id, data, session)
            write_seo(tenant.id, "post", post.id, extract_seo_payload(data), session)

    except IntegrityError as exc:
        raise ConflictError("Slug already exists for another post") from exc

    return post
