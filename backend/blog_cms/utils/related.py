"""
Batch loading helpers for list views.

Related rows are fetched once per page by id set and zipped back onto
the page rows by foreign key, instead of one query per row.
"""
from collections import defaultdict
from typing import Any, Dict, Iterable, List


def batch_load(model, ids: Iterable[Any], *criteria) -> Dict[Any, Any]:
    """Load ``model`` rows whose primary key is in ``ids``, keyed by id."""
    wanted = {i for i in ids if i is not None}
    if not wanted:
        return {}

    rows = model.query.filter(model.id.in_(wanted), *criteria).all()
    return {row.id: row for row in rows}


def group_links(link_model, owner_column: str, target_column: str,
                owner_ids: Iterable[Any]) -> Dict[Any, List[Any]]:
    """Map each owner id to the target ids linked to it through ``link_model``."""
    wanted = list({i for i in owner_ids if i is not None})
    grouped: Dict[Any, List[Any]] = defaultdict(list)
    if not wanted:
        return grouped

    owner = getattr(link_model, owner_column)
    target = getattr(link_model, target_column)

    for owner_id, target_id in (
        link_model.query.with_entities(owner, target)
        .filter(owner.in_(wanted))
        .order_by(owner, target)
        .all()
    ):
        grouped[owner_id].append(target_id)

    return grouped


def zip_related(owner_ids, grouped: Dict[Any, List[Any]], loaded: Dict[Any, Any]) -> Dict[Any, List[Any]]:
    """Resolve grouped target ids into loaded rows, dropping ids that did not load."""
    return {
        owner_id: [loaded[t] for t in grouped.get(owner_id, []) if t in loaded]
        for owner_id in owner_ids
    }
