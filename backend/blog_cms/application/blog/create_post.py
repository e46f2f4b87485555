from typing import Any, Dict

from flask import current_app
from sqlalchemy.exc import IntegrityError

from blog_cms.application.blog.associations import apply_term_changes, resolve_media_id
from blog_cms.application.blog.seo_records import write_seo
from blog_cms.application.guards import require_active_tenant
from blog_cms.domain.exceptions import ConflictError
from blog_cms.domain.invariants.post import assert_post_payload
from blog_cms.domain.lifecycle.post import assert_post_status, resolve_published_at
from blog_cms.domain.seo import extract_seo_payload
from blog_cms.models.post import Post
from blog_cms.utils.dates import parse_datetime, utc_now
from blog_cms.utils.slugs import SEQUENTIAL, allocate_slug, normalize_slug, slug_exists_query, validate_slug
from blog_cms.utils.transaction import transactional


def create_post(
    *,
    tenant,
    author_id: str,
    data: Dict[str, Any],
) -> Post:
    """
    Create a blog post with its category/tag links and SEO row.

    Everything is written in one transaction; any failure leaves no post,
    link or SEO row behind.

    Edge cases handled:
    - Inactive tenant
    - Slug already taken (numeric suffix)
    - Unknown featured image or category/tag ids
    - Slug race lost at flush time
    """
    require_active_tenant(tenant)
    assert_post_payload(data)

    status = assert_post_status(data.get("status") or "draft")
    requested_at = parse_datetime(data.get("publishedAt"), "publishedAt")
    title = data["title"].strip()

    explicit = (data.get("slug") or "").strip()
    base = validate_slug(explicit) if explicit else normalize_slug(title)

    try:
        with transactional() as session:
            post = Post()
            post.tenant_id = tenant.id
            post.title = title
            post.slug = allocate_slug(
                base,
                slug_exists_query(Post, tenant.id),
                strategy=SEQUENTIAL,
            )
            post.content = data.get("content") or ""
            post.excerpt = (data.get("excerpt") or "").strip()
            post.status = status
            post.is_indexable = bool(data.get("isIndexable", True))
            post.author_id = author_id
            post.featured_image_id = resolve_media_id(
                tenant.id, data.get("featuredImageId"), "featured"
            )
            post.published_at = resolve_published_at(
                status=status,
                now=utc_now(),
                requested=requested_at,
            )

            session.add(post)
            session.flush()  # ensures post.id is available

            apply_term_changes(tenant.id, post.id, data, session)
            write_seo(tenant.id, "post", post.id, extract_seo_payload(data), session)

    except IntegrityError as exc:
        raise ConflictError("A post with this slug already exists") from exc

    current_app.logger.info("Created post %s (%s)", post.uuid, post.slug)
    return post
