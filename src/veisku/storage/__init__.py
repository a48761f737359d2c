"""Filesystem providers for the document store."""

from .base import FilesystemBase
from .local import LocalFilesystem

__all__ = ["FilesystemBase", "LocalFilesystem"]
