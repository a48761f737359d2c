"""Abstract base class for filesystem providers."""

from abc import ABC, abstractmethod
from pathlib import Path


class FilesystemBase(ABC):
    """Read-only view of the files the document store works on."""

    @abstractmethod
    def list_entries(self, directory: Path) -> list[tuple[str, bool]]:
        """List direct entries of a directory as (name, is_file) pairs.

        Entries are returned in enumeration order, not sorted. Raises
        DocumentRootError if the directory cannot be read."""

    @abstractmethod
    def read_file(self, path: Path) -> bytes:
        """Read a whole file."""
