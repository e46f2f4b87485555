def test_health_needs_no_tenant(client):
    resp = client.get("/api/v1/health")
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "ok"


def test_missing_tenant_header(client):
    resp = client.get("/api/v1/blog/posts")

    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "message": "X-Tenant-ID header is missing"}


def test_unknown_tenant(client):
    resp = client.get("/api/v1/blog/posts", headers={"X-Tenant-ID": "nope"})
    assert resp.status_code == 404


def test_login_issues_tokens(client, tenant, user):
    resp = client.post(
        "/api/v1/auth/login",
        json={"email": user.email, "password": "secret123"},
        headers={"X-Tenant-ID": tenant.id},
    )
    data = resp.get_json()["data"]

    assert resp.status_code == 200
    assert data["accessToken"]

    listed = client.get(
        "/api/v1/blog/posts",
        headers={"X-Tenant-ID": tenant.id, "Authorization": f"Bearer {data['accessToken']}"},
    )
    assert listed.status_code == 200


def test_login_rejects_bad_password(client, tenant, user):
    resp = client.post(
        "/api/v1/auth/login",
        json={"email": user.email, "password": "wrong"},
        headers={"X-Tenant-ID": tenant.id},
    )
    assert resp.status_code == 401


def test_token_for_another_tenant_is_forbidden(client, headers, make_tenant):
    other = make_tenant("Globex")
    resp = client.get("/api/v1/blog/posts", headers={**headers, "X-Tenant-ID": other.id})

    assert resp.status_code == 403
    assert resp.get_json()["message"] == "Tenant mismatch"


def test_viewer_cannot_write(client, tenant, make_user, headers_for):
    viewer = make_user(tenant, email="viewer@example.com", role="viewer")
    headers = headers_for(tenant, viewer)

    assert client.get("/api/v1/blog/categories", headers=headers).status_code == 200
    assert client.post("/api/v1/blog/categories", json={"name": "x"}, headers=headers).status_code == 403


def test_disabled_blog_feature(client, tenant, headers, db):
    tenant.enable_blog = False
    db.session.commit()

    resp = client.get("/api/v1/blog/posts", headers=headers)

    assert resp.status_code == 403
    assert "disabled" in resp.get_json()["message"]


def test_unknown_route_uses_envelope(client, headers):
    resp = client.get("/api/v1/blog/nowhere", headers=headers)

    assert resp.status_code == 404
    assert resp.get_json()["success"] is False
