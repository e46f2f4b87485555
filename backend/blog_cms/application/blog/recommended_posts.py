from typing import Any, Dict, Mapping

from blog_cms.application.blog.get_post import find_post_by_key
from blog_cms.application.blog.post_views import post_summaries
from blog_cms.application.guards import require_active_tenant
from blog_cms.models.post import Post
from blog_cms.models.post_links import PostCategory

DEFAULT_LIMIT = 5
MAX_LIMIT = 10


def _limit(args: Mapping[str, Any]) -> int:
    try:
        limit = int(args.get("limit", DEFAULT_LIMIT))
    except (TypeError, ValueError):
        limit = DEFAULT_LIMIT
    return min(MAX_LIMIT, max(1, limit))


def recommended_posts(*, tenant, key: str, args: Mapping[str, Any]) -> Dict[str, Any]:
    """Other published posts sharing at least one category, newest first."""
    require_active_tenant(tenant)
    post = find_post_by_key(tenant.id, key)

    category_ids = [
        row[0]
        for row in PostCategory.query.with_entities(PostCategory.category_id)
        .filter_by(post_id=post.id)
        .all()
    ]

    posts = []
    if category_ids:
        related_ids = {
            row[0]
            for row in PostCategory.query.with_entities(PostCategory.post_id)
            .filter(PostCategory.category_id.in_(category_ids))
            .all()
        }
        related_ids.discard(post.id)

        if related_ids:
            posts = (
                Post.query.filter(
                    Post.tenant_id == tenant.id,
                    Post.status == "published",
                    Post.id.in_(list(related_ids)),
                )
                .order_by(Post.published_at.desc())
                .limit(_limit(args))
                .all()
            )

    items = post_summaries(posts, tenant.id)
    return {"recommendedPosts": items, "total": len(items)}
