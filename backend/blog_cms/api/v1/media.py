# blog_cms/api/v1/media.py
from flask import g, request
from flask_jwt_extended import jwt_required

from blog_cms.application.media.delete_media import delete_media
from blog_cms.application.media.list_media import get_media, list_media, media_stats
from blog_cms.application.media.update_media import update_media
from blog_cms.application.media.upload_media import parse_alt_texts, upload_media
from blog_cms.domain.exceptions import ValidationError
from blog_cms.normalizers.media import normalize_media
from blog_cms.normalizers.pagination import normalize_pagination
from blog_cms.utils.decorators import feature_enabled, roles_required, tenant_required
from blog_cms.utils.responses import success_response
from . import v1_bp

MAX_DOCUMENTS_PER_UPLOAD = 5


def _upload(files, kind, *, single):
    form = request.form
    alt_texts = parse_alt_texts(form.get("altTexts"))
    if single and form.get("altText"):
        alt_texts = [form.get("altText")]

    rows = upload_media(
        tenant_id=g.current_tenant.id,
        uploaded_by=g.current_user_id,
        files=files,
        kind=kind,
        alt_texts=alt_texts,
        post_slug=form.get("postSlug"),
    )

    items = [normalize_media(m) for m in rows]
    return success_response(
        items[0] if single else items,
        message=f"{len(items)} media file(s) uploaded successfully",
        status_code=201,
        count=len(items),
    )


@v1_bp.route("/blog/media/upload/single", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin", "editor")
@feature_enabled("media")
def upload_single_media():
    kind = request.form.get("type") or "content"
    return _upload(request.files.getlist("file")[:1], kind, single=True)


@v1_bp.route("/blog/media/upload/multiple", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin", "editor")
@feature_enabled("media")
def upload_multiple_media():
    kind = request.form.get("type") or "content"
    return _upload(request.files.getlist("files"), kind, single=False)


@v1_bp.route("/blog/media/upload/featured", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin", "editor")
@feature_enabled("media")
def upload_featured_media():
    return _upload(request.files.getlist("file")[:1], "featured", single=True)


@v1_bp.route("/blog/media/upload/documents", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin", "editor")
@feature_enabled("media")
def upload_document_media():
    files = request.files.getlist("files")
    if len(files) > MAX_DOCUMENTS_PER_UPLOAD:
        raise ValidationError(
            f"Cannot upload more than {MAX_DOCUMENTS_PER_UPLOAD} documents at once"
        )
    return _upload(files, "document", single=False)


@v1_bp.route("/blog/media", methods=["GET"])
@jwt_required()
@tenant_required
@feature_enabled("media")
def list_blog_media():
    items, meta = list_media(tenant_id=g.current_tenant.id, args=request.args)
    return success_response(normalize_pagination(items, normalize_media, meta))


@v1_bp.route("/blog/media/stats", methods=["GET"])
@jwt_required()
@tenant_required
@feature_enabled("media")
def blog_media_stats():
    return success_response(media_stats(tenant_id=g.current_tenant.id))


@v1_bp.route("/blog/media/<media_id>", methods=["GET"])
@jwt_required()
@tenant_required
@feature_enabled("media")
def get_blog_media(media_id):
    media = get_media(tenant_id=g.current_tenant.id, media_id=media_id)
    return success_response(normalize_media(media))


@v1_bp.route("/blog/media/<media_id>", methods=["PUT"])
@jwt_required()
@tenant_required
@roles_required("admin", "editor")
@feature_enabled("media")
def update_blog_media(media_id):
    data = request.get_json(silent=True) or {}
    media = update_media(tenant_id=g.current_tenant.id, media_id=media_id, data=data)
    return success_response(normalize_media(media), message="Media updated successfully")


@v1_bp.route("/blog/media/<media_id>", methods=["DELETE"])
@jwt_required()
@tenant_required
@roles_required("admin", "editor")
@feature_enabled("media")
def delete_blog_media(media_id):
    public_id = delete_media(tenant_id=g.current_tenant.id, media_id=media_id)
    return success_response({"id": public_id}, message="Media deleted successfully")
