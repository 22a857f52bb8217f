"""Index data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Document:
    """An indexed document. Its ID is its position in ``Index.docs``."""

    url: str
    title: str = ""
    date: str = ""
