from blog_cms.extensions import db
from .base import BaseModel


class Tenant(BaseModel):
    __tablename__ = "tenants"

    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    # Feature toggles
    enable_blog = db.Column(db.Boolean, default=True)
    enable_media = db.Column(db.Boolean, default=True)
    enable_seo_tools = db.Column(db.Boolean, default=True)

    # JSON field for future toggles (flexible)
    features = db.Column(db.JSON, default=dict)

    def has_feature(self, feature_name: str) -> bool:
        """
        Check if a feature is enabled for this tenant.
        """
        # Check JSON overrides first
        overrides = self.features or {}
        if overrides.get(feature_name) is not None:
            return bool(overrides[feature_name])

        # Fallback to attribute toggles
        return bool(getattr(self, f"enable_{feature_name}", False))
