from typing import Any, Dict, Optional


class BlogError(Exception):
    """Base class for errors that map onto an API response."""

    status_code = 500

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = details


class ValidationError(BlogError):
    status_code = 400

    def __init__(self, message: str, errors: Optional[list] = None, **details: Any):
        if errors:
            details["errors"] = errors
        super().__init__(message, **details)


class AuthenticationError(BlogError):
    status_code = 401


class TenantContextError(BlogError):
    status_code = 400


class ForbiddenError(BlogError):
    status_code = 403


class NotFoundError(BlogError):
    status_code = 404


class ConflictError(BlogError):
    status_code = 400


class ReferentialIntegrityError(BlogError):
    status_code = 400
