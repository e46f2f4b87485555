# blog_cms/api/v1/posts.py
from flask import g, request
from flask_jwt_extended import jwt_required

from blog_cms.application.blog.create_post import create_post
from blog_cms.application.blog.delete_post import archive_post, bulk_delete_posts, delete_post
from blog_cms.application.blog.get_post import get_post, get_post_by_id
from blog_cms.application.blog.list_posts import (
    category_info,
    list_posts,
    list_posts_by_category,
    list_posts_by_tag,
)
from blog_cms.application.blog.post_views import post_view
from blog_cms.application.blog.recommended_posts import recommended_posts
from blog_cms.application.blog.update_post import update_post
from blog_cms.utils.decorators import feature_enabled, roles_required, tenant_required
from blog_cms.utils.responses import success_response
from . import v1_bp

# ------------------------
# Reads
# ------------------------

@v1_bp.route("/blog/posts", methods=["GET"])
@jwt_required()
@tenant_required
@feature_enabled("blog")
def list_blog_posts():
    return success_response(list_posts(tenant=g.current_tenant, args=request.args))


@v1_bp.route("/blog/posts/tag/<slug>", methods=["GET"])
@jwt_required()
@tenant_required
@feature_enabled("blog")
def list_blog_posts_by_tag(slug):
    return success_response(
        list_posts_by_tag(tenant=g.current_tenant, slug=slug, args=request.args)
    )


@v1_bp.route("/blog/posts/category/<slug>", methods=["GET"])
@jwt_required()
@tenant_required
@feature_enabled("blog")
def list_blog_posts_by_category(slug):
    return success_response(
        list_posts_by_category(tenant=g.current_tenant, slug=slug, args=request.args)
    )


@v1_bp.route("/blog/posts/category/<slug>/info", methods=["GET"])
@jwt_required()
@tenant_required
@feature_enabled("blog")
def blog_category_info(slug):
    return success_response(category_info(tenant=g.current_tenant, slug=slug))


@v1_bp.route("/blog/posts/id/<post_id>", methods=["GET"])
@jwt_required()
@tenant_required
@feature_enabled("blog")
def get_blog_post_by_id(post_id):
    return success_response(get_post_by_id(tenant=g.current_tenant, post_id=post_id))


@v1_bp.route("/blog/posts/<key>", methods=["GET"])
@jwt_required()
@tenant_required
@feature_enabled("blog")
def get_blog_post(key):
    return success_response(get_post(tenant=g.current_tenant, key=key))


@v1_bp.route("/blog/posts/<key>/recommended", methods=["GET"])
@jwt_required()
@tenant_required
@feature_enabled("blog")
def get_recommended_blog_posts(key):
    return success_response(
        recommended_posts(tenant=g.current_tenant, key=key, args=request.args)
    )

# ------------------------
# Writes
# ------------------------

@v1_bp.route("/blog/posts", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin", "editor")
@feature_enabled("blog")
def create_blog_post():
    tenant = g.current_tenant
    data = request.get_json(silent=True) or {}

    post = create_post(tenant=tenant, author_id=g.current_user_id, data=data)
    return success_response(
        post_view(post, tenant.id),
        message="Blog post created successfully",
        status_code=201,
    )


@v1_bp.route("/blog/posts/<post_id>", methods=["PUT"])
@jwt_required()
@tenant_required
@roles_required("admin", "editor")
@feature_enabled("blog")
def update_blog_post(post_id):
    tenant = g.current_tenant
    data = request.get_json(silent=True) or {}

    post = update_post(tenant=tenant, post_id=post_id, data=data)
    return success_response(post_view(post, tenant.id), message="Blog post updated successfully")


@v1_bp.route("/blog/posts/<post_id>", methods=["DELETE"])
@jwt_required()
@tenant_required
@roles_required("admin", "editor")
@feature_enabled("blog")
def delete_blog_post(post_id):
    result = delete_post(tenant=g.current_tenant, post_id=post_id)
    return success_response(result, message="Blog post deleted successfully")


@v1_bp.route("/blog/posts/bulk-delete", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin", "editor")
@feature_enabled("blog")
def bulk_delete_blog_posts():
    data = request.get_json(silent=True) or {}
    result = bulk_delete_posts(tenant=g.current_tenant, post_ids=data.get("postIds"))
    return success_response(
        result,
        message=f"{result['counts']['postsDeleted']} blog post(s) deleted successfully",
    )


@v1_bp.route("/blog/posts/<post_id>/archive", methods=["PATCH"])
@jwt_required()
@tenant_required
@roles_required("admin", "editor")
@feature_enabled("blog")
def archive_blog_post(post_id):
    result = archive_post(tenant=g.current_tenant, post_id=post_id)
    return success_response(result, message="Blog post archived successfully")
