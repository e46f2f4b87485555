from blog_cms.models import Tag

BASE = "/api/v1/blog/tags"


def test_tag_crud_round_trip(client, headers):
    created = client.post(BASE, json={"name": "Python", "description": "Snakes"}, headers=headers)
    assert created.status_code == 201
    tag = created.get_json()["data"]
    assert tag["slug"] == "python"

    updated = client.put(f"{BASE}/{tag['id']}", json={"slug": ""}, headers=headers)
    assert updated.status_code == 200
    assert updated.get_json()["data"]["slug"] == "python"

    listed = client.get(BASE, headers=headers).get_json()["data"]
    assert [t["name"] for t in listed["items"]] == ["Python"]

    deleted = client.delete(f"{BASE}/{tag['id']}", headers=headers)
    assert deleted.status_code == 200
    assert Tag.query.count() == 0


def test_tag_linked_to_post_cannot_be_deleted(client, headers, create_post):
    create_post({"title": "Tagged", "tags": ["Flask"]})
    tag = Tag.query.filter_by(name="Flask").one()

    resp = client.delete(f"{BASE}/{tag.uuid}", headers=headers)

    assert resp.status_code == 400
    assert resp.get_json()["tagName"] == "Flask"
    assert Tag.query.count() == 1


def test_tags_are_isolated_per_tenant(client, headers, make_tenant, make_user, headers_for):
    other = make_tenant("Globex")
    other_headers = headers_for(other, make_user(other, email="other@example.com"))

    client.post(BASE, json={"name": "Shared"}, headers=headers)
    resp = client.post(BASE, json={"name": "Shared"}, headers=other_headers)

    assert resp.get_json()["data"]["slug"] == "shared"
    assert client.get(BASE, headers=other_headers).get_json()["data"]["pagination"]["total"] == 1
