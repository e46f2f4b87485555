from blog_cms.extensions import db
from .base import SurrogateKeyModel
from .tenant_mixin import TenantMixin


class Media(SurrogateKeyModel, TenantMixin):
    __tablename__ = "blog_media"

    file_name = db.Column(db.String(255), nullable=False)
    storage_key = db.Column(db.String(500), nullable=True)
    url = db.Column(db.String(500), nullable=True)
    file_type = db.Column(db.String(50), nullable=False, index=True)
    file_size = db.Column(db.Integer, nullable=True)
    alt_text = db.Column(db.String(255), nullable=True)
    uploaded_by = db.Column(db.String(36), nullable=True, index=True)
