from blog_cms.extensions import db
from .base import SurrogateKeyModel
from .tenant_mixin import TenantMixin


class Category(SurrogateKeyModel, TenantMixin):
    __tablename__ = "blog_categories"

    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)

    __table_args__ = (
        db.UniqueConstraint("tenant_id", "slug", name="uq_blog_category_slug_per_tenant"),
    )
