# blog_cms/models/soft_delete_mixin.py
from blog_cms.extensions import db


class SoftDeleteMixin:
    deleted_at = db.Column(db.DateTime(timezone=True), nullable=True)
