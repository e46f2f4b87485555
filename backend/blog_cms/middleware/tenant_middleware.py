from flask import request, g
from blog_cms.domain.exceptions import NotFoundError, TenantContextError
from blog_cms.models.tenant import Tenant

PUBLIC_PREFIXES = ("/api/v1/health", "/openapi", "/swagger", "/static")


def tenant_middleware(app):
    @app.before_request
    def load_tenant():
        g.current_tenant = None

        if request.method == "OPTIONS" or request.path.startswith(PUBLIC_PREFIXES):
            return None

        tenant_id = request.headers.get('X-Tenant-ID')
        if not tenant_id:
            raise TenantContextError("X-Tenant-ID header is missing")

        # Inactive tenants still resolve; write paths reject them explicitly
        tenant = Tenant.query.filter_by(id=tenant_id).first()
        if not tenant:
            raise NotFoundError("Invalid tenant")

        # Attach tenant to global context
        g.current_tenant = tenant
