from flask import current_app, jsonify
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException

from blog_cms.domain.exceptions import BlogError
from blog_cms.extensions import db


def _error_response(message, status_code, error=None, **details):
    body = {"success": False, "message": message, **details}
    if error is not None and current_app.config.get("EXPOSE_ERRORS"):
        body["error"] = error

    response = jsonify(body)
    response.status_code = status_code
    return response


def register_error_handlers(app):
    @app.errorhandler(BlogError)
    def handle_blog_error(error):
        return _error_response(error.message, error.status_code, **error.details)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(error):
        db.session.rollback()
        current_app.logger.warning("Integrity error: %s", error.orig)
        return _error_response(
            "Operation violates a database constraint",
            400,
            error=str(error.orig),
        )

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return _error_response(error.description, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        current_app.logger.exception("Unhandled error")
        return _error_response("Internal server error", 500, error=str(error))
