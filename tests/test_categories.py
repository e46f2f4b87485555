from blog_cms.models import Category, SeoRecord

BASE = "/api/v1/blog/categories"


def _create(client, headers, **payload):
    resp = client.post(BASE, json=payload, headers=headers)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["data"]


def test_create_trims_fields_and_derives_slug(client, headers):
    category = _create(client, headers, name="  Launch News  ", description="  Latest  ")

    assert category["name"] == "Launch News"
    assert category["slug"] == "launch-news"
    assert category["description"] == "Latest"


def test_duplicate_name_gets_suffixed_slug(client, headers):
    first = _create(client, headers, name="Launch News")
    second = _create(client, headers, name="Launch News")

    assert second["slug"] != first["slug"]
    assert second["slug"].startswith("launch-news-")

    resp = client.get(f"{BASE}/{first['id']}", headers=headers)
    assert resp.get_json()["data"]["slug"] == "launch-news"


def test_create_requires_name(client, headers):
    resp = client.post(BASE, json={"name": "   "}, headers=headers)

    assert resp.status_code == 400
    body = resp.get_json()
    assert body["success"] is False
    assert body["message"] == "Category name is required"


def test_create_rejects_malformed_slug(client, headers):
    resp = client.post(BASE, json={"name": "News", "slug": "Not A Slug"}, headers=headers)
    assert resp.status_code == 400


def test_get_accepts_internal_or_public_id(client, headers, db):
    created = _create(client, headers, name="Guides")
    internal = Category.query.filter_by(uuid=created["id"]).one().id

    by_uuid = client.get(f"{BASE}/{created['id']}", headers=headers)
    by_int = client.get(f"{BASE}/{internal}", headers=headers)

    assert by_uuid.get_json()["data"] == by_int.get_json()["data"]


def test_get_unknown_category_is_404(client, headers):
    resp = client.get(f"{BASE}/9e2a3c1e-6f0b-4c55-9d8e-3a4b5c6d7e8f", headers=headers)

    assert resp.status_code == 404
    assert resp.get_json()["message"] == "Category not found"


def test_update_rejects_slug_taken_by_another_category(client, headers):
    _create(client, headers, name="Alpha")
    beta = _create(client, headers, name="Beta")

    resp = client.put(f"{BASE}/{beta['id']}", json={"slug": "alpha"}, headers=headers)

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "A category with this slug already exists"


def test_update_changes_only_supplied_fields(client, headers):
    created = _create(client, headers, name="Alpha", description="First")

    resp = client.put(f"{BASE}/{created['id']}", json={"name": "Alpha Two"}, headers=headers)
    updated = resp.get_json()["data"]

    assert updated["name"] == "Alpha Two"
    assert updated["slug"] == "alpha"
    assert updated["description"] == "First"


def test_list_searches_and_paginates(client, headers):
    for name in ("Design", "Development", "Marketing"):
        _create(client, headers, name=name)

    resp = client.get(f"{BASE}?search=de&limit=1&page=2", headers=headers)
    data = resp.get_json()["data"]

    assert data["pagination"] == {"page": 2, "limit": 1, "total": 2, "pages": 2}
    assert [c["name"] for c in data["items"]] == ["Development"]


def test_list_sorts_by_requested_field(client, headers):
    for name in ("Alpha", "Zulu"):
        _create(client, headers, name=name)

    resp = client.get(f"{BASE}?sort=name&order=DESC", headers=headers)
    assert [c["name"] for c in resp.get_json()["data"]["items"]] == ["Zulu", "Alpha"]

    resp = client.get(f"{BASE}?sortBy=name&sortOrder=asc", headers=headers)
    assert [c["name"] for c in resp.get_json()["data"]["items"]] == ["Alpha", "Zulu"]


def test_delete_blocked_while_linked_to_post(client, headers, create_post, db):
    create_post({"title": "Launch day", "categories": ["Launch"]})
    category = Category.query.filter_by(name="Launch").one()

    resp = client.delete(f"{BASE}/{category.uuid}", headers=headers)
    body = resp.get_json()

    assert resp.status_code == 400
    assert body["postCount"] == 1
    assert body["categoryName"] == "Launch"
    assert "linked to 1 blog post(s)" in body["message"]
    assert db.session.get(Category, category.id) is not None


def test_delete_removes_seo_row(client, headers, tenant, db):
    created = _create(client, headers, name="Orphan")
    category = Category.query.filter_by(uuid=created["id"]).one()

    seo = SeoRecord()
    seo.tenant_id = tenant.id
    seo.entity_type = "category"
    seo.entity_id = category.id
    seo.meta_title = "Orphan"
    db.session.add(seo)
    db.session.commit()

    resp = client.delete(f"{BASE}/{created['id']}", headers=headers)

    assert resp.status_code == 200
    assert resp.get_json()["data"] == {"id": created["id"]}
    assert Category.query.count() == 0
    assert SeoRecord.query.filter_by(entity_type="category").count() == 0


def test_bulk_delete_is_all_or_nothing(client, headers, create_post):
    create_post({"title": "Linked", "categories": ["Busy"]})
    busy = Category.query.filter_by(name="Busy").one()
    free = _create(client, headers, name="Free")

    resp = client.post(
        f"{BASE}/bulk-delete",
        json={"ids": [busy.uuid, free["id"]]},
        headers=headers,
    )
    body = resp.get_json()

    assert resp.status_code == 400
    assert [c["name"] for c in body["categories"]] == ["Busy"]
    assert body["categories"][0]["postCount"] == 1
    assert Category.query.count() == 2


def test_bulk_delete_removes_every_unused_category(client, headers):
    ids = [_create(client, headers, name=name)["id"] for name in ("One", "Two")]

    resp = client.post(f"{BASE}/bulk-delete", json={"ids": ids}, headers=headers)

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["deletedCount"] == 2
    assert sorted(data["deletedIds"]) == sorted(ids)
    assert Category.query.count() == 0


def test_bulk_delete_validates_input(client, headers):
    empty = client.post(f"{BASE}/bulk-delete", json={"ids": []}, headers=headers)
    unknown = client.post(
        f"{BASE}/bulk-delete",
        json={"ids": ["9e2a3c1e-6f0b-4c55-9d8e-3a4b5c6d7e8f"]},
        headers=headers,
    )

    assert empty.status_code == 400
    assert unknown.status_code == 404
