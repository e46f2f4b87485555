from datetime import datetime, timezone

import pytest
from flask_jwt_extended import create_access_token

from blog_cms import create_app
from blog_cms.extensions import db as _db
from blog_cms.models import Tenant, User
from blog_cms.utils.storage import init_blob_store


@pytest.fixture
def app(tmp_path):
    app = create_app("testing")
    app.config.update(
        UPLOAD_FOLDER=str(tmp_path / "uploads"),
        MEDIA_BASE_URL="/uploads",
    )
    init_blob_store(app)

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def make_tenant(db):
    def _make(name="Acme", slug=None, **flags):
        tenant = Tenant()
        tenant.name = name
        tenant.slug = slug or name.lower()
        for key, value in flags.items():
            setattr(tenant, key, value)
        db.session.add(tenant)
        db.session.commit()
        return tenant
    return _make


@pytest.fixture
def make_user(db):
    def _make(tenant, email="editor@example.com", role="admin", password="secret123"):
        user = User()
        user.tenant_id = tenant.id
        user.email = email
        user.first_name = "Ada"
        user.last_name = "Lovelace"
        user.role = role
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user
    return _make


@pytest.fixture
def headers_for():
    def _headers(tenant, user):
        token = create_access_token(
            identity=user.id,
            additional_claims={"tenant_id": tenant.id, "role": user.role},
        )
        return {
            "Authorization": f"Bearer {token}",
            "X-Tenant-ID": tenant.id,
        }
    return _headers


@pytest.fixture
def tenant(make_tenant):
    return make_tenant()


@pytest.fixture
def user(make_user, tenant):
    return make_user(tenant)


@pytest.fixture
def headers(headers_for, tenant, user):
    return headers_for(tenant, user)


@pytest.fixture
def create_post(client, headers):
    def _create(payload, expected=201, request_headers=None):
        resp = client.post(
            "/api/v1/blog/posts",
            json=payload,
            headers=request_headers or headers,
        )
        assert resp.status_code == expected, resp.get_json()
        return resp.get_json()
    return _create


def parse_ts(value):
    """API timestamps come back naive from SQLite; treat them as UTC."""
    ts = datetime.fromisoformat(value)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts
