"""Shared fixtures: a small document root on disk."""

from pathlib import Path

import pytest

FLU_SHOT = '---\ntitle: "Flu shot"\ntags: [personal]\n---\nGet the flu shot before December.\n'
TOC_BUTTON = '---\ntitle: "ToC button"\ntags: [personal, blocked]\n---\nAdd a table of contents button.\n'


def write_doc(directory: Path, name: str, text: str) -> Path:
    path = directory / name
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def doc_root(tmp_path: Path) -> Path:
    """A marked document root holding d90ee0b.md and e579f3f.md."""
    root = tmp_path / "notes"
    (root / ".veisku").mkdir(parents=True)
    write_doc(root, "d90ee0b.md", FLU_SHOT)
    write_doc(root, "e579f3f.md", TOC_BUTTON)
    return root
