"""Document preamble parsers."""

from .markdown import DELIMITER, normalize_fields, parse_preamble

__all__ = ["DELIMITER", "normalize_fields", "parse_preamble"]
