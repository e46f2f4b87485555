from dataclasses import dataclass

from blog_cms.models.category import Category
from blog_cms.models.post_links import PostCategory, PostTag
from blog_cms.models.tag import Tag


@dataclass(frozen=True)
class TaxonomyKind:
    """Everything that differs between categories and tags."""

    model: type
    link_model: type
    link_column: str
    entity_type: str
    label: str
    plural: str

    @property
    def title(self) -> str:
        return self.label.capitalize()

    def link_target(self):
        return getattr(self.link_model, self.link_column)


CATEGORY = TaxonomyKind(
    model=Category,
    link_model=PostCategory,
    link_column="category_id",
    entity_type="category",
    label="category",
    plural="categories",
)

TAG = TaxonomyKind(
    model=Tag,
    link_model=PostTag,
    link_column="tag_id",
    entity_type="tag",
    label="tag",
    plural="tags",
)
