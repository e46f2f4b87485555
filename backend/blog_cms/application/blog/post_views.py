# blog_cms/application/blog/post_views.py
from dataclasses import dataclass, field
from typing import Any, Dict, List

from blog_cms.application.taxonomy.kinds import CATEGORY, TAG
from blog_cms.models.category import Category
from blog_cms.models.media import Media
from blog_cms.models.seo import SeoRecord
from blog_cms.models.tag import Tag
from blog_cms.models.user import User
from blog_cms.normalizers.post import normalize_post, normalize_post_summary
from blog_cms.utils.related import batch_load, group_links, zip_related


@dataclass
class PostRelations:
    """Related rows for one page of posts, keyed for in-memory joins."""

    authors: Dict[Any, Any] = field(default_factory=dict)
    images: Dict[int, Any] = field(default_factory=dict)
    categories: Dict[int, List[Any]] = field(default_factory=dict)
    tags: Dict[int, List[Any]] = field(default_factory=dict)
    seo: Dict[int, Any] = field(default_factory=dict)


def load_relations(posts, tenant_id: str) -> PostRelations:
    """
    One batched query per related table, driven by the ids on this page.
    """
    if not posts:
        return PostRelations()

    post_ids = [p.id for p in posts]

    authors = batch_load(User, [p.author_id for p in posts], User.deleted_at.is_(None))

    category_links = group_links(CATEGORY.link_model, "post_id", CATEGORY.link_column, post_ids)
    tag_links = group_links(TAG.link_model, "post_id", TAG.link_column, post_ids)
    categories = batch_load(Category, [c for ids in category_links.values() for c in ids])
    tags = batch_load(Tag, [t for ids in tag_links.values() for t in ids])

    seo_rows = SeoRecord.query.filter(
        SeoRecord.tenant_id == tenant_id,
        SeoRecord.entity_type == "post",
        SeoRecord.entity_id.in_(post_ids),
    ).all()
    seo = {row.entity_id: row for row in seo_rows}

    image_ids = [p.featured_image_id for p in posts]
    for row in seo_rows:
        image_ids.extend([row.og_image_id, row.twitter_image_id])
    images = batch_load(Media, image_ids)

    return PostRelations(
        authors=authors,
        images=images,
        categories=zip_related(post_ids, category_links, categories),
        tags=zip_related(post_ids, tag_links, tags),
        seo=seo,
    )


def post_view(post, tenant_id: str, **options) -> Dict[str, Any]:
    return normalize_post(post, load_relations([post], tenant_id), **options)


def post_summaries(posts, tenant_id: str) -> List[Dict[str, Any]]:
    relations = load_relations(posts, tenant_id)
    return [normalize_post_summary(p, relations) for p in posts]
