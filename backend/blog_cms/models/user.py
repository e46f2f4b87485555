from werkzeug.security import generate_password_hash, check_password_hash
from blog_cms.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin
from .soft_delete_mixin import SoftDeleteMixin


class User(BaseModel, TenantMixin, SoftDeleteMixin):
    __tablename__ = 'users'

    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)

    first_name = db.Column(db.String(100), nullable=True)
    last_name = db.Column(db.String(100), nullable=True)
    avatar = db.Column(db.String(500), nullable=True)

    role = db.Column(db.String(50), nullable=False, default='editor')
    is_active = db.Column(db.Boolean, default=True)

    @property
    def full_name(self):
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)
