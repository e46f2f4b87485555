from blog_cms.extensions import db
from .base import SurrogateKeyModel
from .tenant_mixin import TenantMixin

SEO_ENTITY_TYPES = ("post", "category", "tag")


class SeoRecord(SurrogateKeyModel, TenantMixin):
    __tablename__ = "blog_seo"

    entity_type = db.Column(db.String(50), nullable=False)
    entity_id = db.Column(db.Integer, nullable=False)

    meta_title = db.Column(db.String(300), nullable=True)
    meta_description = db.Column(db.Text, nullable=True)
    canonical_url = db.Column(db.String(500), nullable=True)
    og_title = db.Column(db.String(255), nullable=True)
    og_description = db.Column(db.Text, nullable=True)
    og_image_id = db.Column(db.Integer, db.ForeignKey("blog_media.id"), nullable=True)
    twitter_title = db.Column(db.String(255), nullable=True)
    twitter_description = db.Column(db.Text, nullable=True)
    twitter_image_id = db.Column(db.Integer, db.ForeignKey("blog_media.id"), nullable=True)
    focus_keyword = db.Column(db.String(255), nullable=True, index=True)

    __table_args__ = (
        db.UniqueConstraint("tenant_id", "entity_type", "entity_id", name="uq_blog_seo_entity"),
        db.Index("idx_blog_seo_entity", "entity_type", "entity_id"),
    )
