"""Read documents from the document root."""

import logging
from pathlib import Path

from ..errors import DocumentReadError
from ..models import Ambiguous, Document, DocumentRoot, FieldValue, Found, NotFound, Resolution
from ..parsers import parse_preamble
from ..storage import FilesystemBase, LocalFilesystem

logger = logging.getLogger(__name__)


class DocumentStore:
    """Enumerates the documents of a root and resolves ids.

    Nothing is cached across invocations; every call to ``list`` re-scans
    the document directory.
    """

    def __init__(self, root: DocumentRoot, filesystem: FilesystemBase | None = None):
        self.root = root
        self.filesystem = filesystem or LocalFilesystem()
        self.extensions = {ext.lower() for ext in root.config.get("extensions", [".md"])}

    def list(self) -> list[Document]:
        """Return the documents directly inside the document directory."""
        docs = []
        for name, is_file in self.filesystem.list_entries(self.root.path):
            if not is_file or name.startswith("."):
                continue
            path = self.root.path / name
            if path.suffix.lower() not in self.extensions:
                continue
            docs.append(Document(id=path.stem, path=path, loader=self._load))
        logger.debug(f"Found {len(docs)} documents in {self.root.path}")
        return docs

    def resolve(self, id_prefix: str) -> Resolution:
        """Resolve an id prefix to exactly one document."""
        candidates = [doc for doc in self.list() if doc.id.startswith(id_prefix)]
        if not candidates:
            return NotFound(id_prefix)
        if len(candidates) > 1:
            return Ambiguous(id_prefix, [doc.id for doc in candidates])
        return Found(candidates[0])

    def _load(self, path: Path) -> tuple[dict[str, FieldValue], str]:
        try:
            data = self.filesystem.read_file(path)
        except OSError as e:
            raise DocumentReadError(path, e.strerror or str(e)) from e
        return parse_preamble(data.decode("utf-8", errors="replace"))
