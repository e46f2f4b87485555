from blog_cms.extensions import db
from .base import SurrogateKeyModel
from .tenant_mixin import TenantMixin


class Tag(SurrogateKeyModel, TenantMixin):
    __tablename__ = "blog_tags"

    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)

    __table_args__ = (
        db.UniqueConstraint("tenant_id", "slug", name="uq_blog_tag_slug_per_tenant"),
    )
