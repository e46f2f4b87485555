from blog_cms.extensions import db
from .base import SurrogateKeyModel
from .tenant_mixin import TenantMixin

POST_STATUSES = ("draft", "published", "archived")


class Post(SurrogateKeyModel, TenantMixin):
    __tablename__ = "blog_posts"

    title = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), nullable=False)
    content = db.Column(db.Text, nullable=True)
    excerpt = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(20), nullable=False, default="draft", index=True)
    is_indexable = db.Column(db.Boolean, nullable=False, default=True)

    author_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=True, index=True)
    featured_image_id = db.Column(db.Integer, db.ForeignKey("blog_media.id"), nullable=True)
    published_at = db.Column(db.DateTime(timezone=True), nullable=True, index=True)

    __table_args__ = (
        db.UniqueConstraint("tenant_id", "slug", name="uq_blog_post_slug_per_tenant"),
        db.Index("idx_blog_post_tenant_status", "tenant_id", "status"),
        db.Index("idx_blog_post_status_published", "status", "published_at"),
    )
