from functools import wraps
from flask import g
from flask_jwt_extended import get_jwt, get_jwt_identity

from blog_cms.domain.exceptions import ForbiddenError, TenantContextError


def tenant_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        tenant = getattr(g, "current_tenant", None)
        if not tenant:
            raise TenantContextError("Tenant context missing")

        if get_jwt().get("tenant_id") != tenant.id:
            raise ForbiddenError("Tenant mismatch")

        g.current_user_id = get_jwt_identity()
        return fn(*args, **kwargs)
    return wrapper


def roles_required(*allowed_roles):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            if get_jwt().get("role") not in allowed_roles:
                raise ForbiddenError("Insufficient permissions")

            return fn(*args, **kwargs)
        return wrapper
    return decorator


def feature_enabled(feature_name):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            tenant = g.current_tenant

            if not tenant.has_feature(feature_name):
                raise ForbiddenError(
                    f"Feature '{feature_name}' is disabled for this tenant"
                )

            return fn(*args, **kwargs)
        return wrapper
    return decorator
