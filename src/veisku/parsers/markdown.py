"""Markdown preamble parser.

A preamble is a YAML block at the very top of a document::

    ---
    title: "Flu shot"
    tags: [personal, blocked]
    done: false
    ---
    <document body>

Only the preamble is decoded; the body is returned untouched.
"""

import datetime
import logging
from typing import Any

import yaml

from ..models import FieldValue

logger = logging.getLogger(__name__)

DELIMITER = "---"


def parse_preamble(text: str) -> tuple[dict[str, FieldValue], str]:
    """Split a document into its preamble fields and body.

    Returns ``({}, text)`` when there is no preamble or it cannot be decoded.
    """
    lines = text.splitlines(keepends=True)
    if not lines or not _is_delimiter(lines[0]):
        return {}, text

    for i in range(1, len(lines)):
        if _is_delimiter(lines[i]):
            break
    else:
        logger.info("Encountered EOF while reading the preamble")
        return {}, text

    block = "".join(lines[1:i])
    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as e:
        logger.info(f"Failed to parse the preamble: {e}")
        return {}, text

    if data is None:
        data = {}
    if not isinstance(data, dict):
        logger.info("The preamble is not a mapping; ignoring it")
        return {}, text

    return normalize_fields(data), "".join(lines[i + 1:])


def _is_delimiter(line: str) -> bool:
    return line.rstrip() == DELIMITER


def normalize_fields(data: dict[Any, Any]) -> dict[str, FieldValue]:
    """Reduce decoded YAML to strings, booleans and lists of strings."""
    fields: dict[str, FieldValue] = {}
    for key, value in data.items():
        normalized = _normalize_value(value)
        if normalized is None:
            logger.debug(f"Dropping field '{key}' with uncomparable value {value!r}")
            continue
        fields[str(key)] = normalized
    return fields


def _normalize_value(value: Any) -> FieldValue | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, list):
        return [s for s in (_scalar_to_str(v) for v in value) if s is not None]
    return _scalar_to_str(value)


def _scalar_to_str(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, datetime.date)):
        return str(value)
    return None
