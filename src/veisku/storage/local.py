"""Local disk filesystem provider."""

from pathlib import Path

from ..errors import DocumentRootError
from .base import FilesystemBase


class LocalFilesystem(FilesystemBase):
    """Reads documents straight from the local disk."""

    def list_entries(self, directory: Path) -> list[tuple[str, bool]]:
        try:
            return [(entry.name, entry.is_file()) for entry in Path(directory).iterdir()]
        except OSError as e:
            raise DocumentRootError(f"Failed to read the document directory {directory}: {e}") from e

    def read_file(self, path: Path) -> bytes:
        return Path(path).read_bytes()
