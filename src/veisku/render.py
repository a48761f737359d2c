"""Console output for document listings."""

import json
import logging
import subprocess
import sys
from typing import Any

from rich.console import Console
from rich.errors import StyleSyntaxError
from rich.pager import Pager
from rich.style import Style
from rich.text import Text

from .models import Document

logger = logging.getLogger(__name__)

ID_WIDTH = 10
ID_STYLE = "grey54"
FALLBACK_TAG_STYLE = "green on grey23"


def fit_to_width(s: str, width: int) -> Text:
    """Truncate with an ellipsis, or pad with spaces, to exactly ``width`` cells."""
    text = Text(s)
    text.truncate(width, overflow="ellipsis", pad=True)
    return text


def tag_style(theme: dict[str, Any], tag: str) -> Style:
    """Style for a tag from the theme, falling back to ``tag_default``."""
    tags = theme.get("tags") if isinstance(theme.get("tags"), dict) else {}
    for candidate in (tags.get(tag), theme.get("tag_default"), FALLBACK_TAG_STYLE):
        if not isinstance(candidate, str):
            continue
        try:
            return Style.parse(candidate)
        except StyleSyntaxError:
            logger.warning(f"Invalid style '{candidate}' in the theme; ignoring it")
    return Style.parse(FALLBACK_TAG_STYLE)


def format_document(doc: Document, theme: dict[str, Any]) -> Text:
    """One listing line: id, tags, then the title (or the id)."""
    line = fit_to_width(doc.id, ID_WIDTH)
    line.stylize(ID_STYLE)
    line.append(" ")

    tags = doc.fields.get("tags")
    if isinstance(tags, list):
        for tag in tags:
            line.append(f" {tag} ", style=tag_style(theme, tag))
            line.append(" ")

    line.append(doc.title or doc.id)
    return line


def document_json(doc: Document) -> dict[str, Any]:
    return {"id": doc.id, "path": str(doc.path), "meta": doc.fields}


def print_listing(console: Console, docs: list[Document], theme: dict[str, Any], mode: str = "pretty") -> None:
    """Print documents as ``pretty`` lines, ``simple`` paths or ``json``."""
    if mode == "simple":
        for doc in docs:
            console.print(str(doc.path), markup=False, highlight=False, emoji=False, soft_wrap=True)
    elif mode == "json":
        payload = json.dumps([document_json(doc) for doc in docs], indent=2, ensure_ascii=False)
        console.print(payload, markup=False, highlight=False, emoji=False, soft_wrap=True)
    else:
        for doc in docs:
            console.print(format_document(doc, theme), soft_wrap=True)


class CommandPager(Pager):
    """Pipe rendered output into an external pager command."""

    def __init__(self, argv: list[str]):
        self.argv = argv

    def show(self, content: str) -> None:
        try:
            subprocess.run(self.argv, input=content, text=True)
        except OSError as e:
            logger.warning(f"Failed to spawn the pager {self.argv[0]}; outputting to stdout: {e}")
            sys.stdout.write(content)
            sys.stdout.flush()
