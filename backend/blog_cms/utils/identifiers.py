# blog_cms/utils/identifiers.py
from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True)
class InternalId:
    """Surrogate integer key, used for joins."""
    value: int


@dataclass(frozen=True)
class PublicId:
    """Public UUID surfaced to API clients."""
    value: str


Identifier = Union[InternalId, PublicId]


def as_uuid(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    try:
        return str(uuid.UUID(str(raw)))
    except ValueError:
        return None


def parse_identifier(raw: Any) -> Optional[Identifier]:
    """
    Resolve a raw path/body value into an identifier once, at the boundary.

    Integers and digit-only strings are internal keys, UUID strings are
    public ids; anything else is not an identifier at all.
    """
    if isinstance(raw, bool) or raw is None:
        return None

    if isinstance(raw, int):
        return InternalId(raw)

    text = str(raw).strip()
    if text.isdigit():
        return InternalId(int(text))

    public = as_uuid(text)
    if public:
        return PublicId(public)

    return None


def identifier_clause(model, identifier: Identifier):
    if isinstance(identifier, InternalId):
        return model.id == identifier.value
    return model.uuid == identifier.value


def find_by_identifier(model, tenant_id: str, raw: Any):
    """Tenant-scoped lookup by internal key or public id. None when absent."""
    identifier = parse_identifier(raw)
    if identifier is None:
        return None

    return model.query.filter(
        model.tenant_id == tenant_id,
        identifier_clause(model, identifier),
    ).first()
