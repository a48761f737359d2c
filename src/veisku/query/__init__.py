"""Query language and document selection."""

from .engine import evaluate, matches, parse_query, parse_term
from .resolver import preset_query, select_many, select_one

__all__ = ["evaluate", "matches", "parse_query", "parse_term", "preset_query", "select_many", "select_one"]
