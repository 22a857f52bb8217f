"""Exceptions raised by the indexing pipeline."""


class DocumentReadError(OSError):
    """Raised when a document stream cannot be read to the end."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Unable to read {url}: {reason}")
        self.url = url
