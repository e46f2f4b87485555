from contextlib import contextmanager
from flask import current_app
from blog_cms.extensions import db


@contextmanager
def transactional():
    """
    Context manager for database transactions.

    Exactly one of commit/rollback runs on every exit path. A failing
    rollback is logged and never masks the original error.
    """
    try:
        yield db.session
        db.session.commit()
    except Exception:
        try:
            db.session.rollback()
        except Exception:
            current_app.logger.exception("Error rolling back transaction")
        raise
