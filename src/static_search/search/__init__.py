"""
Full-text indexing package.

This package provides the in-memory indexing pipeline:
- analyzers: Tokenizer and filters (accent folding, stopwords, stemming)
- stemmer: Porter2 English stemmer
- html_extractor: Title/date/text extraction from HTML pages
- index: Document store and inverted index
"""

from static_search.search.errors import DocumentReadError
from static_search.search.index import Index, new
from static_search.search.models import Document


__all__ = ["Document", "DocumentReadError", "Index", "new"]
