# blog_cms/normalizers/taxonomy.py
from typing import Any, Dict

from blog_cms.utils.dates import iso


def normalize_term(term) -> Dict[str, Any]:
    """Category or tag as returned by its own CRUD endpoints."""
    if not term:
        raise ValueError("Term cannot be None")

    return {
        "id": term.uuid,
        "name": term.name,
        "slug": term.slug,
        "description": term.description or "",
        "createdAt": iso(term.created_at),
        "updatedAt": iso(term.updated_at),
    }


def normalize_term_ref(term, with_description=False):
    data = {"id": term.uuid, "name": term.name, "slug": term.slug}
    if with_description:
        data["description"] = term.description or ""
    return data
