from blog_cms.domain.exceptions import ForbiddenError


def require_active_tenant(tenant):
    if tenant is None or not tenant.is_active:
        raise ForbiddenError("Invalid or inactive tenant")
    return tenant
