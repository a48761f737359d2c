"""Data models used throughout veisku."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Union

logger = logging.getLogger(__name__)

FieldValue = Union[str, bool, list[str]]


@dataclass
class DocumentRoot:
    """The resolved document root of one invocation."""
    marker_dir: Path
    path: Path
    config: dict[str, Any] = field(default_factory=dict)
    has_marker: bool = True


@dataclass
class Document:
    """A document file. The preamble is read on first access to ``fields``."""
    id: str
    path: Path
    loader: Callable[[Path], tuple[dict[str, FieldValue], str]] | None = field(default=None, repr=False)
    _parsed: tuple[dict[str, FieldValue], str] | None = field(default=None, init=False, repr=False)

    def _ensure_parsed(self) -> tuple[dict[str, FieldValue], str]:
        if self._parsed is None:
            logger.debug(f"Reading the metadata of {self.path}")
            self._parsed = self.loader(self.path) if self.loader else ({}, "")
        return self._parsed

    def load(self) -> "Document":
        """Read the preamble now instead of on first access."""
        self._ensure_parsed()
        return self

    @property
    def fields(self) -> dict[str, FieldValue]:
        return self._ensure_parsed()[0]

    @property
    def body(self) -> str:
        return self._ensure_parsed()[1]

    @property
    def title(self) -> str | None:
        value = self.fields.get("title")
        return value if isinstance(value, str) else None

    def query_fields(self) -> dict[str, FieldValue]:
        """Preamble fields plus the ``id`` and ``path`` pseudo-fields."""
        return {**self.fields, "id": self.id, "path": str(self.path)}


@dataclass(frozen=True)
class Term:
    """One condition of a query.

    ``field`` is None for a bare token, which is evaluated against the
    query's implicit field.
    """
    field: str | None
    value: str
    negated: bool = False
    mode: str = "equals"  # "equals", "contains" or "prefix"


@dataclass(frozen=True)
class Query:
    """A conjunction of terms."""
    terms: tuple[Term, ...] = ()
    implicit: str = "title"

    def __and__(self, other: "Query") -> "Query":
        return Query(terms=self.terms + other.terms, implicit=self.implicit)

    def __str__(self) -> str:
        return " ".join(_format_term(t) for t in self.terms)


def _format_term(term: Term) -> str:
    text = term.value
    if term.field is not None:
        text = f"{term.field}:{'~' if term.mode == 'contains' else ''}{term.value}"
    return f"!{text}" if term.negated else text


class Resolution:
    """Outcome of resolving a lookup key to a single document."""


@dataclass(frozen=True)
class Found(Resolution):
    document: Document


@dataclass(frozen=True)
class NotFound(Resolution):
    key: str


@dataclass(frozen=True)
class Ambiguous(Resolution):
    key: str
    ids: list[str]
