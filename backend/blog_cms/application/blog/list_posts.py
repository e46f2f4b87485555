# blog_cms/application/blog/list_posts.py
from typing import Any, Dict, Mapping, Optional, Set

from sqlalchemy import or_

from blog_cms.application.blog.post_views import post_summaries
from blog_cms.application.guards import require_active_tenant
from blog_cms.application.taxonomy.kinds import CATEGORY, TAG, TaxonomyKind
from blog_cms.application.taxonomy.terms import get_term_by_slug
from blog_cms.models.post import Post
from blog_cms.normalizers.taxonomy import normalize_term_ref
from blog_cms.utils.dates import end_of_day, parse_datetime
from blog_cms.utils.identifiers import as_uuid
from blog_cms.utils.pagination import paginate, parse_page_params, with_navigation

SORT_FIELDS = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "publishedAt": "published_at",
    "title": "title",
}

DEFAULT_LIMIT = 10
MAX_LIMIT = 1000
MAX_TERM_LIMIT = 100


def _linked_post_ids(kind: TaxonomyKind, tenant_id: str, raw_id: Any) -> Set[int]:
    """Post ids linked to the term with public id ``raw_id``; empty when unknown."""
    public = as_uuid(raw_id)
    if public is None:
        return set()

    term = kind.model.query.filter_by(tenant_id=tenant_id, uuid=public).first()
    if term is None:
        return set()

    return post_ids_for_term(kind, term.id)


def post_ids_for_term(kind: TaxonomyKind, term_id: int) -> Set[int]:
    link = kind.link_model
    rows = link.query.with_entities(link.post_id).filter(kind.link_target() == term_id).all()
    return {row[0] for row in rows}


def _filtered_query(tenant_id: str, args: Mapping[str, Any], post_ids: Optional[Set[int]] = None):
    """
    Build the post query from request filters.

    Category/tag filters are turned into post-id sets before the main query
    so that counts and pages agree.
    """
    query = Post.query.filter(Post.tenant_id == tenant_id)

    status = args.get("status") or "published"
    if status != "all":
        query = query.filter(Post.status == status)

    author_id = args.get("authorId")
    if author_id:
        query = query.filter(Post.author_id == author_id)

    if args.get("categoryId"):
        ids = _linked_post_ids(CATEGORY, tenant_id, args["categoryId"])
        post_ids = ids if post_ids is None else post_ids & ids

    if args.get("tagId"):
        ids = _linked_post_ids(TAG, tenant_id, args["tagId"])
        post_ids = ids if post_ids is None else post_ids & ids

    if post_ids is not None:
        query = query.filter(Post.id.in_(list(post_ids)))

    search = (args.get("search") or "").strip()
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(
                Post.title.ilike(pattern),
                Post.content.ilike(pattern),
                Post.excerpt.ilike(pattern),
            )
        )

    start = parse_datetime(args.get("startDate"), "startDate")
    if start:
        query = query.filter(Post.published_at >= start)

    end = parse_datetime(args.get("endDate"), "endDate")
    if end:
        query = query.filter(Post.published_at <= end_of_day(end))

    sort_key = args.get("sortBy") if args.get("sortBy") in SORT_FIELDS else "publishedAt"
    sort_order = "asc" if (args.get("sortOrder") or "").lower() == "asc" else "desc"
    column = getattr(Post, SORT_FIELDS[sort_key])
    query = query.order_by(column.asc() if sort_order == "asc" else column.desc(), Post.id.desc())

    filters = {
        "status": status,
        "authorId": author_id or None,
        "categoryId": args.get("categoryId") or None,
        "tagId": args.get("tagId") or None,
        "search": search or None,
        "startDate": args.get("startDate") or None,
        "endDate": args.get("endDate") or None,
        "sortBy": sort_key,
        "sortOrder": sort_order,
    }
    return query, filters


def _page_of_posts(tenant_id, args, *, max_limit, allow_unbounded, post_ids=None) -> Dict[str, Any]:
    page, limit = parse_page_params(
        args,
        default_limit=DEFAULT_LIMIT,
        max_limit=max_limit,
        allow_unbounded=allow_unbounded,
    )
    query, filters = _filtered_query(tenant_id, args, post_ids)
    posts, meta = paginate(query, page=page, limit=limit)

    return {
        "items": post_summaries(posts, tenant_id),
        "pagination": with_navigation(meta),
        "filters": filters,
    }


def list_posts(*, tenant, args: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Filtered, paginated post listing.

    ``limit`` of 0 or -1 returns every matching post in a single page.
    """
    require_active_tenant(tenant)
    return _page_of_posts(tenant.id, args, max_limit=MAX_LIMIT, allow_unbounded=True)


def _list_by_term(kind: TaxonomyKind, tenant, slug: str, args) -> Dict[str, Any]:
    require_active_tenant(tenant)
    term = get_term_by_slug(kind, tenant.id, slug)

    result = _page_of_posts(
        tenant.id,
        args,
        max_limit=MAX_TERM_LIMIT,
        allow_unbounded=False,
        post_ids=post_ids_for_term(kind, term.id),
    )
    return {kind.label: normalize_term_ref(term, with_description=True), **result}


def list_posts_by_tag(*, tenant, slug: str, args) -> Dict[str, Any]:
    return _list_by_term(TAG, tenant, slug, args)


def list_posts_by_category(*, tenant, slug: str, args) -> Dict[str, Any]:
    return _list_by_term(CATEGORY, tenant, slug, args)


def category_info(*, tenant, slug: str) -> Dict[str, Any]:
    require_active_tenant(tenant)
    category = get_term_by_slug(CATEGORY, tenant.id, slug)

    published = Post.query.filter(
        Post.tenant_id == tenant.id,
        Post.status == "published",
        Post.id.in_(list(post_ids_for_term(CATEGORY, category.id))),
    ).count()

    return {**normalize_term_ref(category, with_description=True), "postCount": published}
