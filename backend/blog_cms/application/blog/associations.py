# blog_cms/application/blog/associations.py
from typing import Any, Dict, List, Optional

from blog_cms.application.taxonomy.kinds import CATEGORY, TAG, TaxonomyKind
from blog_cms.domain.exceptions import ValidationError
from blog_cms.models.media import Media
from blog_cms.utils.identifiers import find_by_identifier
from blog_cms.utils.slugs import SEQUENTIAL, allocate_slug, normalize_slug, slug_exists_query

# kind -> (names key, ids key) in post payloads
TERM_KEYS = {
    CATEGORY: ("categories", "categoryIds"),
    TAG: ("tags", "tagIds"),
}


def requested_terms(kind: TaxonomyKind, data: Dict[str, Any]) -> Optional[tuple]:
    """
    Which association input a payload carries for ``kind``.

    Returns ``("names", [...])``, ``("ids", [...])`` or None when the payload
    leaves the associations untouched. A non-empty names list wins; ids are
    the fallback. Empty lists with no non-empty counterpart clear the links.
    """
    names_key, ids_key = TERM_KEYS[kind]

    supplied = {}
    for mode, key in (("names", names_key), ("ids", ids_key)):
        if data.get(key) is None:
            continue
        values = data[key]
        if not isinstance(values, list):
            raise ValidationError(f"{key} must be an array")
        supplied[mode] = values

    if not supplied:
        return None

    for mode in ("names", "ids"):
        if supplied.get(mode):
            return mode, supplied[mode]

    return "names", []


def find_or_create_terms(kind: TaxonomyKind, tenant_id: str, names: List[Any], session) -> list:
    terms, seen = [], set()

    for raw in names:
        name = str(raw).strip() if raw is not None else ""
        if not name or name.lower() in seen:
            continue
        seen.add(name.lower())

        term = kind.model.query.filter_by(tenant_id=tenant_id, name=name).first()
        if term is None:
            term = kind.model()
            term.tenant_id = tenant_id
            term.name = name
            term.description = ""
            term.slug = allocate_slug(
                normalize_slug(name),
                slug_exists_query(kind.model, tenant_id),
                strategy=SEQUENTIAL,
            )
            session.add(term)
            session.flush()

        terms.append(term)

    return terms


def resolve_term_ids(kind: TaxonomyKind, tenant_id: str, raw_ids: List[Any]) -> list:
    terms = {}
    for raw in raw_ids:
        term = find_by_identifier(kind.model, tenant_id, raw)
        if term is None:
            raise ValidationError(f"One or more {kind.label} IDs are invalid")
        terms[term.id] = term
    return list(terms.values())


def resolve_terms(kind: TaxonomyKind, tenant_id: str, request: tuple, session) -> list:
    mode, values = request
    if mode == "names":
        return find_or_create_terms(kind, tenant_id, values, session)
    return resolve_term_ids(kind, tenant_id, values)


def replace_links(kind: TaxonomyKind, post_id: int, terms: list, session) -> None:
    """Full replacement: drop every existing link for the post, then insert ``terms``."""
    link = kind.link_model
    link.query.filter(link.post_id == post_id).delete(synchronize_session=False)

    for term in terms:
        row = link()
        row.post_id = post_id
        setattr(row, kind.link_column, term.id)
        session.add(row)

    session.flush()


def apply_term_changes(tenant_id: str, post_id: int, data: Dict[str, Any], session) -> None:
    for kind in (CATEGORY, TAG):
        request = requested_terms(kind, data)
        if request is None:
            continue
        replace_links(kind, post_id, resolve_terms(kind, tenant_id, request, session), session)


def resolve_media_id(tenant_id: str, raw: Any, label: str) -> Optional[int]:
    """Internal id of a tenant media row, None for an empty value."""
    if raw in (None, ""):
        return None

    media = find_by_identifier(Media, tenant_id, raw)
    if media is None:
        raise ValidationError(f"Invalid {label} image ID")
    return media.id
