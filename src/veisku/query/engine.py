"""Query parsing and evaluation over preamble fields.

Syntax, one term per whitespace-separated token, all terms ANDed:

- ``TEXT``         implicit field: substring of ``title`` (listing) or id
                   prefix (single-document commands)
- ``KEY:VALUE``    field equals VALUE, or has VALUE as a list element
- ``KEY:~VALUE``   field contains VALUE, or has VALUE as a list element
- ``!TERM``        negates any of the above

There is no quoting, grouping or OR.
"""

import logging
from collections.abc import Iterable, Mapping

from ..models import FieldValue, Query, Term

logger = logging.getLogger(__name__)

IMPLICIT_MODES = {"title": "contains", "id": "prefix"}


def parse_query(text: str | Iterable[str], implicit: str = "title") -> Query:
    """Parse a query string (or a list of command-line tokens)."""
    if implicit not in IMPLICIT_MODES:
        raise ValueError(f"Unsupported implicit field: {implicit}")

    chunks = [text] if isinstance(text, str) else list(text)
    tokens = [token for chunk in chunks for token in chunk.split()]
    query = Query(terms=tuple(parse_term(t, implicit) for t in tokens), implicit=implicit)
    logger.debug(f"compiled query = {query!r}")
    return query


def parse_term(token: str, implicit: str = "title") -> Term:
    negated = token.startswith("!")
    if negated:
        token = token[1:]

    key, sep, value = token.partition(":")
    if not sep:
        return Term(field=None, value=token, negated=negated, mode=IMPLICIT_MODES[implicit])
    if value.startswith("~"):
        return Term(field=key, value=value[1:], negated=negated, mode="contains")
    return Term(field=key, value=value, negated=negated, mode="equals")


def matches(term: Term, fields: Mapping[str, FieldValue], implicit: str = "title") -> bool:
    """Evaluate one term against a field mapping, negation included."""
    name = implicit if term.field is None else term.field
    return _matches_value(term, fields.get(name)) != term.negated


def _matches_value(term: Term, value: FieldValue | None) -> bool:
    if value is None:
        return False
    if isinstance(value, list):
        return term.value in value
    if isinstance(value, bool):
        value = "true" if value else "false"
    if term.mode == "contains":
        return term.value in value
    if term.mode == "prefix":
        return value.startswith(term.value)
    return value == term.value


def evaluate(query: Query, fields: Mapping[str, FieldValue]) -> bool:
    """True iff every term of the query matches."""
    return all(matches(term, fields, query.implicit) for term in query.terms)
