"""Access to the documents of a document root."""

from .store import DocumentStore

__all__ = ["DocumentStore"]
