import io
import os

import pytest

from blog_cms.models import Media
from blog_cms.utils.media import format_file_size, storage_key

BASE = "/api/v1/blog/media"
PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 2040
PDF = b"%PDF-1.4\n" + b"0" * 1015


def _upload(client, headers, content, name, mimetype, route="single", **form):
    field = "file" if route in ("single", "featured") else "files"
    data = {field: (io.BytesIO(content), name, mimetype), **form}
    return client.post(
        f"{BASE}/upload/{route}",
        data=data,
        headers=headers,
        content_type="multipart/form-data",
    )


@pytest.mark.parametrize("size, expected", [
    (None, "Unknown"),
    (0, "0 Bytes"),
    (512, "512 Bytes"),
    (1024, "1 KB"),
    (1536, "1.5 KB"),
    (int(2.5 * 1024 * 1024), "2.5 MB"),
])
def test_format_file_size(size, expected):
    assert format_file_size(size) == expected


def test_featured_keys_are_prefixed_with_post_slug():
    assert storage_key("featured", "Cover Photo.PNG", "my-post").startswith("blog/featured/my-post-")
    assert storage_key("featured", "cover.png").startswith("blog/featured/draft-")
    assert storage_key("document", "brief.pdf").startswith("blog/docs/brief-")


def test_pdf_rejected_for_content_but_accepted_as_document(client, headers):
    rejected = _upload(client, headers, PDF, "brief.pdf", "application/pdf", type="content")

    assert rejected.status_code == 400
    assert rejected.get_json()["message"] == "Invalid file type(s): brief.pdf"
    assert Media.query.count() == 0

    accepted = _upload(client, headers, PDF, "brief.pdf", "application/pdf", type="document")
    data = accepted.get_json()["data"]

    assert accepted.status_code == 201
    assert data["fileType"] == "pdf"
    assert data["isDocument"] is True
    assert data["isImage"] is False
    assert data["url"].startswith("/uploads/blog/docs/")


def test_image_upload_stores_bytes(app, client, headers):
    resp = _upload(client, headers, PNG, "hero.png", "image/png", altText="Hero shot")
    data = resp.get_json()["data"]

    assert resp.status_code == 201
    assert resp.get_json()["count"] == 1
    assert data["altText"] == "Hero shot"
    assert data["fileSize"] == len(PNG)
    assert data["formattedSize"] == "2 KB"

    media = Media.query.filter_by(uuid=data["id"]).one()
    path = os.path.join(app.config["UPLOAD_FOLDER"], *media.storage_key.split("/"))
    with open(path, "rb") as fh:
        assert fh.read() == PNG


def test_alt_text_defaults_to_file_name(client, headers):
    data = _upload(client, headers, PNG, "plain.png", "image/png").get_json()["data"]
    assert data["altText"] == "plain.png"


def test_upload_without_file_is_rejected(client, headers):
    resp = client.post(
        f"{BASE}/upload/single",
        data={"type": "content"},
        headers=headers,
        content_type="multipart/form-data",
    )
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "No file uploaded"


def test_multiple_upload_returns_list(client, headers):
    resp = client.post(
        f"{BASE}/upload/multiple",
        data={
            "files": [
                (io.BytesIO(PNG), "a.png", "image/png"),
                (io.BytesIO(PNG), "b.png", "image/png"),
            ],
            "altTexts": '["First", null]',
        },
        headers=headers,
        content_type="multipart/form-data",
    )
    body = resp.get_json()

    assert resp.status_code == 201
    assert body["count"] == 2
    assert [m["altText"] for m in body["data"]] == ["First", "b.png"]


def test_multiple_upload_coerces_alt_texts(client, headers):
    resp = client.post(
        f"{BASE}/upload/multiple",
        data={
            "files": [
                (io.BytesIO(PNG), "a.png", "image/png"),
                (io.BytesIO(PNG), "b.png", "image/png"),
            ],
            "altTexts": "[42, null]",
        },
        headers=headers,
        content_type="multipart/form-data",
    )

    assert resp.status_code == 201
    assert [m["altText"] for m in resp.get_json()["data"]] == ["42", "b.png"]


def test_stats_and_listing(client, headers):
    _upload(client, headers, PNG, "photo.png", "image/png")
    _upload(client, headers, PDF, "terms.pdf", "application/pdf", type="document")

    stats = client.get(f"{BASE}/stats", headers=headers).get_json()["data"]
    assert stats["totalFiles"] == 2
    assert stats["images"] == 1
    assert stats["documents"] == 1
    assert stats["videos"] == 0
    assert stats["totalSize"] == len(PNG) + len(PDF)
    assert stats["formattedTotalSize"] == "3 KB"

    images = client.get(f"{BASE}?mediaType=image", headers=headers).get_json()["data"]
    assert [m["fileName"] for m in images["items"]] == ["photo.png"]

    found = client.get(f"{BASE}?search=terms", headers=headers).get_json()["data"]
    assert found["pagination"]["total"] == 1


def test_update_alt_text(client, headers):
    media = _upload(client, headers, PNG, "edit.png", "image/png").get_json()["data"]

    resp = client.put(f"{BASE}/{media['id']}", json={"altText": "Edited"}, headers=headers)

    assert resp.get_json()["data"]["altText"] == "Edited"


def test_delete_refused_while_used_as_featured_image(client, headers, create_post):
    media = _upload(client, headers, PNG, "cover.png", "image/png").get_json()["data"]
    post = create_post({"title": "Covered", "featuredImageId": media["id"]})["data"]
    assert post["featuredImage"]["id"] == media["id"]

    blocked = client.delete(f"{BASE}/{media['id']}", headers=headers)
    assert blocked.status_code == 400
    assert blocked.get_json()["message"] == "Cannot delete media that is currently in use"

    client.put(f"/api/v1/blog/posts/{post['id']}", json={"featuredImageId": ""}, headers=headers)
    deleted = client.delete(f"{BASE}/{media['id']}", headers=headers)

    assert deleted.status_code == 200
    assert Media.query.count() == 0


def test_delete_refused_while_used_as_social_image(client, headers, create_post):
    media = _upload(client, headers, PNG, "og.png", "image/png").get_json()["data"]
    post = create_post({"title": "Social", "seo": {"ogImageId": media["id"]}})["data"]

    assert post["seo"]["ogImage"]["id"] == media["id"]
    assert post["seo"]["twitterImage"]["id"] == media["id"]
    assert client.delete(f"{BASE}/{media['id']}", headers=headers).status_code == 400


def test_delete_survives_missing_blob(app, client, headers):
    media = _upload(client, headers, PNG, "gone.png", "image/png").get_json()["data"]
    row = Media.query.filter_by(uuid=media["id"]).one()
    os.remove(os.path.join(app.config["UPLOAD_FOLDER"], *row.storage_key.split("/")))

    resp = client.delete(f"{BASE}/{media['id']}", headers=headers)

    assert resp.status_code == 200
    assert Media.query.count() == 0
