from flask import request, g
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token
)
from blog_cms.domain.exceptions import (
    AuthenticationError,
    ForbiddenError,
    TenantContextError,
    ValidationError,
)
from blog_cms.models.user import User
from blog_cms.utils.responses import success_response
from . import v1_bp


@v1_bp.route("/auth/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    if not data:
        raise ValidationError("Invalid request body")

    email = data.get("email")
    password = data.get("password")

    if not email or not password:
        raise ValidationError("Email and password required")

    tenant = g.current_tenant
    if not tenant:
        raise TenantContextError("Tenant context missing")

    user = User.query.filter_by(
        email=email,
        tenant_id=tenant.id,
        deleted_at=None,
    ).first()

    if not user or not user.check_password(password):
        raise AuthenticationError("Invalid credentials")

    if not user.is_active:
        raise ForbiddenError("User account disabled")

    claims = {
        "tenant_id": tenant.id,
        "role": user.role
    }

    access_token = create_access_token(identity=user.id, additional_claims=claims)
    refresh_token = create_refresh_token(identity=user.id, additional_claims=claims)

    return success_response({
        "accessToken": access_token,
        "refreshToken": refresh_token
    })
