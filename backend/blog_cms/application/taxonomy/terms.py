# blog_cms/application/taxonomy/terms.py
from typing import Any, Dict, List

from flask import current_app
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError

from blog_cms.application.taxonomy.kinds import TaxonomyKind
from blog_cms.domain.exceptions import ConflictError, NotFoundError, ValidationError
from blog_cms.models.seo import SeoRecord
from blog_cms.utils.identifiers import InternalId, find_by_identifier, parse_identifier
from blog_cms.utils.pagination import paginate, parse_page_params
from blog_cms.utils.slugs import (
    QUICK,
    allocate_slug,
    normalize_slug,
    slug_exists_query,
    validate_slug,
)
from blog_cms.utils.transaction import transactional

NAME_MAX_LENGTH = 255
CREATE_ATTEMPTS = 3

SORT_FIELDS = {
    "name": "name",
    "slug": "slug",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


def _clean_name(kind: TaxonomyKind, raw: Any) -> str:
    name = str(raw).strip() if raw is not None else ""
    if not name:
        raise ValidationError(f"{kind.title} name is required")
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(
            f"{kind.title} name must be less than {NAME_MAX_LENGTH} characters"
        )
    return name


def _clean_description(raw: Any) -> str:
    return (raw or "").strip()


def list_terms(kind: TaxonomyKind, tenant_id: str, args) -> tuple:
    model = kind.model
    page, limit = parse_page_params(args, default_limit=20)

    query = model.query.filter(model.tenant_id == tenant_id)

    search = (args.get("search") or "").strip()
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(model.name.ilike(pattern), model.description.ilike(pattern))
        )

    sort = args.get("sort") or args.get("sortBy")
    order = args.get("order") or args.get("sortOrder") or "asc"
    column = getattr(model, SORT_FIELDS.get(sort, "name"))
    descending = order.lower() == "desc"
    query = query.order_by(column.desc() if descending else column.asc())

    return paginate(query, page=page, limit=limit)


def get_term(kind: TaxonomyKind, tenant_id: str, raw_id: Any):
    term = find_by_identifier(kind.model, tenant_id, raw_id)
    if term is None:
        raise NotFoundError(f"{kind.title} not found")
    return term


def get_term_by_slug(kind: TaxonomyKind, tenant_id: str, slug: str):
    term = kind.model.query.filter_by(tenant_id=tenant_id, slug=slug).first()
    if term is None:
        raise NotFoundError(f"{kind.title} not found")
    return term


def count_usage(kind: TaxonomyKind, term_id: int) -> int:
    return kind.link_model.query.filter(kind.link_target() == term_id).count()


def create_term(kind: TaxonomyKind, tenant_id: str, data: Dict[str, Any]):
    """
    Create a category or tag.

    A slug that is already taken is suffixed rather than rejected. Losing a
    concurrent race at commit re-allocates the slug and tries again.
    """
    name = _clean_name(kind, data.get("name"))
    description = _clean_description(data.get("description"))

    explicit = (data.get("slug") or "").strip()
    base = validate_slug(explicit) if explicit else normalize_slug(name)

    for attempt in range(1, CREATE_ATTEMPTS + 1):
        slug = allocate_slug(
            base,
            slug_exists_query(kind.model, tenant_id),
            strategy=QUICK,
        )

        term = kind.model()
        term.tenant_id = tenant_id
        term.name = name
        term.slug = slug
        term.description = description

        try:
            with transactional() as session:
                session.add(term)
            return term
        except IntegrityError:
            current_app.logger.warning(
                "Slug race creating %s '%s' (attempt %s)", kind.label, slug, attempt
            )

    raise ConflictError(f"A {kind.label} with this slug already exists")


def update_term(kind: TaxonomyKind, tenant_id: str, raw_id: Any, data: Dict[str, Any]):
    term = get_term(kind, tenant_id, raw_id)

    try:
        with transactional():
            if "name" in data:
                term.name = _clean_name(kind, data.get("name"))

            if "slug" in data:
                exists = slug_exists_query(kind.model, tenant_id, exclude_id=term.id)
                requested = (data.get("slug") or "").strip()

                if requested:
                    validate_slug(requested)
                    if exists(requested):
                        raise ConflictError(f"A {kind.label} with this slug already exists")
                    term.slug = requested
                else:
                    term.slug = allocate_slug(normalize_slug(term.name), exists, strategy=QUICK)

            if "description" in data:
                term.description = _clean_description(data.get("description"))
    except IntegrityError as exc:
        raise ConflictError(f"A {kind.label} with this slug already exists") from exc

    return term


def _blocked_message(kind: TaxonomyKind, name: str, count: int) -> str:
    return (
        f'Cannot delete {kind.label} "{name}" because it is currently linked to '
        f"{count} blog post(s). Please remove this {kind.label} from all posts "
        f"before deleting it."
    )


def _delete_seo(kind: TaxonomyKind, tenant_id: str, term_ids: List[int]) -> int:
    return (
        SeoRecord.query.filter(
            SeoRecord.tenant_id == tenant_id,
            SeoRecord.entity_type == kind.entity_type,
            SeoRecord.entity_id.in_(term_ids),
        ).delete(synchronize_session=False)
    )


def delete_term(kind: TaxonomyKind, tenant_id: str, raw_id: Any) -> str:
    term = get_term(kind, tenant_id, raw_id)

    usage = count_usage(kind, term.id)
    if usage > 0:
        raise ConflictError(
            _blocked_message(kind, term.name, usage),
            postCount=usage,
            **{f"{kind.label}Name": term.name},
        )

    public_id = term.uuid
    with transactional() as session:
        _delete_seo(kind, tenant_id, [term.id])
        session.delete(term)

    current_app.logger.info("Deleted %s %s", kind.label, public_id)
    return public_id


def _usage_counts(kind: TaxonomyKind, term_ids: List[int]) -> Dict[int, int]:
    target = kind.link_target()
    rows = (
        kind.link_model.query.with_entities(target, func.count())
        .filter(target.in_(term_ids))
        .group_by(target)
        .all()
    )
    return {term_id: count for term_id, count in rows}


def bulk_delete_terms(kind: TaxonomyKind, tenant_id: str, raw_ids: Any) -> Dict[str, Any]:
    """
    Delete several terms at once, all or nothing.

    Any term still linked to a post blocks the whole batch; the error lists
    every blocking term with its usage count.
    """
    if not isinstance(raw_ids, list) or not raw_ids:
        raise ValidationError(f"Please provide an array of {kind.label} IDs to delete")

    identifiers = [i for i in (parse_identifier(raw) for raw in raw_ids) if i is not None]
    internal = [i.value for i in identifiers if isinstance(i, InternalId)]
    public = [i.value for i in identifiers if not isinstance(i, InternalId)]

    model = kind.model
    terms = []
    if internal or public:
        terms = model.query.filter(
            model.tenant_id == tenant_id,
            or_(model.id.in_(internal), model.uuid.in_(public)),
        ).all()

    if not terms:
        raise NotFoundError(f"No {kind.plural} found with the provided IDs")

    counts = _usage_counts(kind, [t.id for t in terms])
    blocked = [
        {
            "id": t.uuid,
            "name": t.name,
            "postCount": counts[t.id],
            "message": _blocked_message(kind, t.name, counts[t.id]),
        }
        for t in terms
        if counts.get(t.id, 0) > 0
    ]

    if blocked:
        raise ConflictError(
            f"Cannot delete {len(blocked)} {kind.plural if len(blocked) > 1 else kind.label} "
            f"because they are linked to blog posts",
            **{kind.plural: blocked},
        )

    deleted_ids = [t.uuid for t in terms]
    with transactional() as session:
        _delete_seo(kind, tenant_id, [t.id for t in terms])
        for term in terms:
            session.delete(term)

    current_app.logger.info("Bulk deleted %s %s", len(deleted_ids), kind.plural)
    return {"deletedCount": len(deleted_ids), "deletedIds": deleted_ids}
