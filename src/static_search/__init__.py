"""In-memory full-text indexing for static sites."""

from static_search.search import Document, DocumentReadError, Index, new


__all__ = ["Document", "DocumentReadError", "Index", "new"]
