# blog_cms/normalizers/post.py
import re
from typing import Any, Dict, Optional

from blog_cms.normalizers.media import normalize_media_ref
from blog_cms.normalizers.seo import normalize_seo, normalize_seo_summary
from blog_cms.normalizers.taxonomy import normalize_term_ref
from blog_cms.utils.dates import iso

EXCERPT_LENGTH = 160
_TAGS = re.compile(r"<[^>]*>")


def generate_excerpt(content: Optional[str], length: int = EXCERPT_LENGTH) -> str:
    text = _TAGS.sub("", content or "").strip()
    if len(text) <= length:
        return text
    return text[:length] + "..."


def normalize_author(user):
    if user is None:
        return None

    return {
        "id": user.id,
        "name": user.full_name,
        "email": user.email,
        "avatar": user.avatar,
    }


def _base(post) -> Dict[str, Any]:
    return {
        "id": post.uuid,
        "title": post.title,
        "slug": post.slug,
        "status": post.status,
        "isIndexable": post.is_indexable,
        "publishedAt": iso(post.published_at),
        "createdAt": iso(post.created_at),
        "updatedAt": iso(post.updated_at),
    }


def normalize_post(post, relations, *, category_descriptions=False):
    """
    Full post view: content, author, featured image, categories, tags and
    the complete SEO record.
    """
    return {
        **_base(post),
        "content": post.content,
        "excerpt": post.excerpt,
        "author": normalize_author(relations.authors.get(post.author_id)),
        "featuredImage": normalize_media_ref(relations.images.get(post.featured_image_id)),
        "categories": [
            normalize_term_ref(c, with_description=category_descriptions)
            for c in relations.categories.get(post.id, [])
        ],
        "tags": [normalize_term_ref(t) for t in relations.tags.get(post.id, [])],
        "seo": normalize_seo(relations.seo.get(post.id), relations.images),
    }


def normalize_post_summary(post, relations):
    """List item: generated excerpt in place of content, summary SEO."""
    return {
        **_base(post),
        "excerpt": post.excerpt or generate_excerpt(post.content),
        "author": normalize_author(relations.authors.get(post.author_id)),
        "featuredImage": normalize_media_ref(relations.images.get(post.featured_image_id)),
        "categories": [normalize_term_ref(c) for c in relations.categories.get(post.id, [])],
        "tags": [normalize_term_ref(t) for t in relations.tags.get(post.id, [])],
        "seo": normalize_seo_summary(relations.seo.get(post.id)),
    }
