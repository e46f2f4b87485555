"""
Category and tag endpoints share one implementation, registered once per
taxonomy kind.
"""
from flask import g, request
from flask_jwt_extended import jwt_required

from blog_cms.application.taxonomy.terms import (
    bulk_delete_terms,
    create_term,
    delete_term,
    get_term,
    list_terms,
    update_term,
)
from blog_cms.normalizers.pagination import normalize_pagination
from blog_cms.normalizers.taxonomy import normalize_term
from blog_cms.utils.decorators import feature_enabled, roles_required, tenant_required
from blog_cms.utils.responses import success_response

WRITE_ROLES = ("admin", "editor")


def register_taxonomy_routes(bp, kind):
    base = f"/blog/{kind.plural}"

    def guarded(fn, write=False):
        fn = feature_enabled("blog")(fn)
        if write:
            fn = roles_required(*WRITE_ROLES)(fn)
        return jwt_required()(tenant_required(fn))

    def list_view():
        items, meta = list_terms(kind, g.current_tenant.id, request.args)
        return success_response(normalize_pagination(items, normalize_term, meta))

    def get_view(term_id):
        return success_response(normalize_term(get_term(kind, g.current_tenant.id, term_id)))

    def create_view():
        data = request.get_json(silent=True) or {}
        term = create_term(kind, g.current_tenant.id, data)
        return success_response(
            normalize_term(term),
            message=f"{kind.title} created successfully",
            status_code=201,
        )

    def update_view(term_id):
        data = request.get_json(silent=True) or {}
        term = update_term(kind, g.current_tenant.id, term_id, data)
        return success_response(
            normalize_term(term),
            message=f"{kind.title} updated successfully",
        )

    def delete_view(term_id):
        public_id = delete_term(kind, g.current_tenant.id, term_id)
        return success_response(
            {"id": public_id},
            message=f"{kind.title} deleted successfully",
        )

    def bulk_delete_view():
        data = request.get_json(silent=True) or {}
        result = bulk_delete_terms(kind, g.current_tenant.id, data.get("ids"))
        return success_response(
            result,
            message=f"{result['deletedCount']} {kind.plural} deleted successfully",
        )

    prefix = kind.plural
    bp.add_url_rule(base, f"list_{prefix}", guarded(list_view), methods=["GET"])
    bp.add_url_rule(base, f"create_{prefix}", guarded(create_view, write=True), methods=["POST"])
    bp.add_url_rule(f"{base}/bulk-delete", f"bulk_delete_{prefix}", guarded(bulk_delete_view, write=True), methods=["POST"])
    bp.add_url_rule(f"{base}/<term_id>", f"get_{prefix}", guarded(get_view), methods=["GET"])
    bp.add_url_rule(f"{base}/<term_id>", f"update_{prefix}", guarded(update_view, write=True), methods=["PUT"])
    bp.add_url_rule(f"{base}/<term_id>", f"delete_{prefix}", guarded(delete_view, write=True), methods=["DELETE"])
