from blog_cms.extensions import db
from .base import SurrogateKeyModel
from .tenant_mixin import TenantMixin


class Video(SurrogateKeyModel, TenantMixin):
    __tablename__ = "blog_videos"

    youtube_id = db.Column(db.String(50), nullable=False)
    title = db.Column(db.String(255), nullable=True)
    description = db.Column(db.Text, nullable=True)
