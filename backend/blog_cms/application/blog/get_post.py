# blog_cms/application/blog/get_post.py
from typing import Any, Dict, Optional

from flask import current_app

from blog_cms.application.blog.post_views import post_view
from blog_cms.application.guards import require_active_tenant
from blog_cms.domain.exceptions import NotFoundError
from blog_cms.models.category import Category
from blog_cms.models.post import Post
from blog_cms.models.post_links import PostCategory
from blog_cms.utils.identifiers import as_uuid, find_by_identifier


def find_post_by_key(tenant_id: str, key: str) -> Post:
    """A UUID key matches the public id; anything else is treated as a slug."""
    public = as_uuid(key)
    if public is not None:
        post = Post.query.filter_by(tenant_id=tenant_id, uuid=public).first()
    else:
        post = Post.query.filter_by(tenant_id=tenant_id, slug=key).first()

    if post is None:
        raise NotFoundError("Blog post not found")
    return post


def _excluded_post_ids(tenant_id: str):
    """Posts in the configured News category never appear in navigation."""
    news = Category.query.filter_by(
        tenant_id=tenant_id,
        uuid=current_app.config.get("NEWS_CATEGORY_ID"),
    ).first()
    if news is None:
        return []

    rows = PostCategory.query.with_entities(PostCategory.post_id).filter_by(category_id=news.id).all()
    return [row[0] for row in rows]


def next_post(post: Post) -> Optional[Post]:
    """
    The next older published post, wrapping to the newest one when the
    current post is the oldest.
    """
    base = Post.query.filter(Post.tenant_id == post.tenant_id, Post.status == "published")

    excluded = _excluded_post_ids(post.tenant_id)
    if excluded:
        base = base.filter(Post.id.notin_(excluded))

    reference = post.published_at or post.created_at
    older = (
        base.filter(Post.published_at < reference)
        .order_by(Post.published_at.desc())
        .first()
    )
    if older is not None:
        return older

    return (
        base.filter(Post.id != post.id)
        .order_by(Post.published_at.desc())
        .first()
    )


def get_post(*, tenant, key: str) -> Dict[str, Any]:
    require_active_tenant(tenant)
    post = find_post_by_key(tenant.id, key)

    view = post_view(post, tenant.id, category_descriptions=True)
    following = next_post(post)
    view.update(
        nextSlug=following.slug if following else None,
        nextId=following.uuid if following else None,
        nextTitle=following.title if following else None,
    )
    return view


def get_post_by_id(*, tenant, post_id: Any) -> Dict[str, Any]:
    """Admin read by internal or public id, no navigation."""
    require_active_tenant(tenant)
    post = find_by_identifier(Post, tenant.id, post_id)
    if post is None:
        raise NotFoundError("Blog post not found")
    return post_view(post, tenant.id)
