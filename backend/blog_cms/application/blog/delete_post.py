# blog_cms/application/blog/delete_post.py
from typing import Any, Dict, List

from flask import current_app
from sqlalchemy.exc import IntegrityError

from blog_cms.application.blog.update_post import get_post_for_write
from blog_cms.application.guards import require_active_tenant
from blog_cms.domain.exceptions import NotFoundError, ReferentialIntegrityError, ValidationError
from blog_cms.extensions import db
from blog_cms.models.post import Post
from blog_cms.models.post_links import PostCategory, PostTag, PostVideo
from blog_cms.models.seo import SeoRecord
from blog_cms.utils.dates import iso, utc_now
from blog_cms.utils.identifiers import InternalId, parse_identifier
from blog_cms.utils.transaction import transactional


def _post_summary(post: Post) -> Dict[str, Any]:
    return {
        "id": post.uuid,
        "title": post.title,
        "slug": post.slug,
        "status": post.status,
        "createdAt": iso(post.created_at),
        "updatedAt": iso(post.updated_at),
    }


def _delete_associations(tenant_id: str, post_ids: List[int]) -> Dict[str, int]:
    """Remove SEO rows and join rows for ``post_ids``, in dependency order."""
    seo = SeoRecord.query.filter(
        SeoRecord.tenant_id == tenant_id,
        SeoRecord.entity_type == "post",
        SeoRecord.entity_id.in_(post_ids),
    ).delete(synchronize_session=False)

    counts = {"seoRecords": seo}
    for key, link in (
        ("categoryAssociations", PostCategory),
        ("tagAssociations", PostTag),
        ("videoAssociations", PostVideo),
    ):
        counts[key] = link.query.filter(link.post_id.in_(post_ids)).delete(
            synchronize_session=False
        )

    return counts


def delete_post(*, tenant, post_id: Any) -> Dict[str, Any]:
    post = get_post_for_write(tenant, post_id)
    summary = _post_summary(post)

    try:
        with transactional() as session:
            counts = _delete_associations(tenant.id, [post.id])
            session.delete(post)
    except IntegrityError as exc:
        raise ReferentialIntegrityError(
            "Cannot delete post because it is referenced by other records"
        ) from exc

    current_app.logger.info("Deleted post %s with associations %s", summary["id"], counts)

    return {
        "deletedPost": summary,
        "deletedAssociations": counts,
        "deletedAt": iso(utc_now()),
    }


def bulk_delete_posts(*, tenant, post_ids: Any) -> Dict[str, Any]:
    require_active_tenant(tenant)

    if not isinstance(post_ids, list) or not post_ids:
        raise ValidationError("Please provide an array of post IDs to delete")

    limit = current_app.config.get("MAX_BULK_POST_DELETE", 50)
    if len(post_ids) > limit:
        raise ValidationError(f"Cannot delete more than {limit} posts at once")

    identifiers = [i for i in (parse_identifier(raw) for raw in post_ids) if i is not None]
    internal = [i.value for i in identifiers if isinstance(i, InternalId)]
    public = [i.value for i in identifiers if not isinstance(i, InternalId)]

    posts = []
    if identifiers:
        posts = Post.query.filter(
            Post.tenant_id == tenant.id,
            db.or_(Post.id.in_(internal), Post.uuid.in_(public)),
        ).all()

    if not posts:
        raise NotFoundError("No blog posts found with the provided IDs")

    summaries = [_post_summary(p) for p in posts]
    ids = [p.id for p in posts]

    try:
        with transactional():
            counts = _delete_associations(tenant.id, ids)
            deleted = Post.query.filter(Post.id.in_(ids)).delete(synchronize_session=False)
    except IntegrityError as exc:
        raise ReferentialIntegrityError(
            "Cannot delete posts because they are referenced by other records"
        ) from exc

    current_app.logger.info("Bulk deleted %s posts with associations %s", deleted, counts)

    return {
        "deletedPosts": summaries,
        "counts": {"postsDeleted": deleted, **counts},
        "deletedAt": iso(utc_now()),
    }


def archive_post(*, tenant, post_id: Any) -> Dict[str, Any]:
    """Reversible hide: archived posts drop out of published listings."""
    post = get_post_for_write(tenant, post_id)

    post.status = "archived"
    post.published_at = None
    archived_at = utc_now()
    db.session.commit()

    return {
        "id": post.uuid,
        "title": post.title,
        "slug": post.slug,
        "status": post.status,
        "archivedAt": iso(archived_at),
    }
