from .tenant import Tenant
from .user import User
from .category import Category
from .tag import Tag
from .media import Media
from .video import Video
from .post import Post, POST_STATUSES
from .post_links import PostCategory, PostTag, PostVideo
from .seo import SeoRecord, SEO_ENTITY_TYPES

__all__ = [
    "Tenant",
    "User",
    "Category",
    "Tag",
    "Media",
    "Video",
    "Post",
    "POST_STATUSES",
    "PostCategory",
    "PostTag",
    "PostVideo",
    "SeoRecord",
    "SEO_ENTITY_TYPES",
]
