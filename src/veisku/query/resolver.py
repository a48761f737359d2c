"""Select documents matching a query under a cardinality policy."""

import logging
from typing import Any

from ..errors import UnknownFilterError
from ..models import Ambiguous, Document, Found, NotFound, Query, Resolution
from ..vault import DocumentStore
from .engine import evaluate, parse_query

logger = logging.getLogger(__name__)

DEFAULT_FILTER = "default"


def preset_query(config: dict[str, Any], name: str, implicit: str = "title") -> Query:
    """Return the preset filter ``name`` from the configuration.

    An empty name disables presets. ``default`` is optional; any other
    name must be defined.
    """
    if not name:
        return Query(implicit=implicit)
    filters = config.get("filters") or {}
    if name not in filters:
        if name == DEFAULT_FILTER:
            return Query(implicit=implicit)
        raise UnknownFilterError(name)
    return parse_query(filters[name], implicit=implicit)


def select_many(store: DocumentStore, query: Query) -> list[Document]:
    """All documents matching the query, in enumeration order."""
    return [doc for doc in store.list() if evaluate(query, doc.query_fields())]


def select_one(store: DocumentStore, query: Query) -> Resolution:
    """Exactly one document matching the query.

    Returns NotFound when nothing matches and Ambiguous, listing every
    candidate id, when more than one does.
    """
    key = str(query)
    if _is_plain_id_lookup(query):
        return store.resolve(query.terms[0].value)

    candidates = select_many(store, query)
    if not candidates:
        return NotFound(key)
    if len(candidates) > 1:
        return Ambiguous(key, [doc.id for doc in candidates])
    return Found(candidates[0])


def _is_plain_id_lookup(query: Query) -> bool:
    # A lone id prefix needs no preamble, so let the store resolve it.
    if len(query.terms) != 1 or query.implicit != "id":
        return False
    term = query.terms[0]
    return term.field is None and not term.negated
