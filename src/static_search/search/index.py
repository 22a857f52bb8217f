"""In-memory document store and inverted index.

Documents live in one append-only list and are referenced everywhere else by
their position in it. The inverted index maps each stem to the set of
document IDs containing it, so repeated occurrences within a document
collapse to a single posting.

Ingestion is all-or-nothing per call: a stream is read and analyzed to the
end before the document and its postings are recorded. The index performs no
locking; callers that ingest from several threads must serialize writes.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
import logging
from types import MappingProxyType
from typing import IO, AnyStr

from static_search.search.analyzers import Analyzer, StandardAnalyzer
from static_search.search.errors import DocumentReadError
from static_search.search.html_extractor import DEFAULT_PARSER, check_parser, extract_page
from static_search.search.models import Document


logger = logging.getLogger(__name__)


class Index:
    """Append-only document store plus stem -> document ID postings."""

    def __init__(self, *, analyzer: Analyzer | None = None, html_parser: str = DEFAULT_PARSER) -> None:
        """Create an empty index.

        Raises:
            FeatureNotFound: If BeautifulSoup has no tree builder named ``html_parser``.
        """

        check_parser(html_parser)
        self._analyzer = analyzer or StandardAnalyzer()
        self._html_parser = html_parser
        self._docs: list[Document] = []
        self._words: dict[str, set[int]] = {}
        self._words_view: Mapping[str, frozenset[int]] | None = None

    @property
    def docs(self) -> Sequence[Document]:
        """Indexed documents in insertion order; a document's ID is its position."""
        return tuple(self._docs)

    @property
    def words(self) -> Mapping[str, frozenset[int]]:
        """Read-only view of stem -> IDs of documents containing it."""
        if self._words_view is None:
            self._words_view = MappingProxyType({stem: frozenset(ids) for stem, ids in self._words.items()})
        return self._words_view

    def __len__(self) -> int:
        return len(self._docs)

    def add_text(self, url: str, title: str, date: str, content: IO[AnyStr]) -> int:
        """Index a plain-text document and return its ID.

        Args:
            url: Document identifier. Not deduplicated.
            title: Display title stored with the document.
            date: Opaque date string stored verbatim.
            content: Binary or text stream; binary content is decoded as UTF-8.

        Raises:
            DocumentReadError: If the stream cannot be read to the end.
        """

        text = _read_stream(url, content)
        return self._commit(Document(url=url, title=title, date=date), (text,))

    def add_html(self, url: str, content: IO[AnyStr]) -> int:
        """Index an HTML page and return its ID.

        Title and date come from the page itself; the searchable text also
        includes the page's host and path. Malformed markup is not an error.

        Raises:
            DocumentReadError: If the stream cannot be read to the end.
        """

        html = _read_stream(url, content)
        page = extract_page(html, url, parser=self._html_parser)
        return self._commit(Document(url=url, title=page.title, date=page.date), page.text)

    def lookup(self, word: str) -> list[Document]:
        """Return documents containing every stem ``word`` analyzes to.

        Stopwords and words never seen yield an empty list.
        """

        stems = {token.text for token in self._analyzer(word)}
        if not stems:
            return []
        matches: set[int] | None = None
        for stem in stems:
            ids = self._words.get(stem, set())
            matches = set(ids) if matches is None else matches & ids
        return [self._docs[doc_id] for doc_id in sorted(matches or ())]

    def _commit(self, document: Document, chunks: Iterable[str]) -> int:
        stems: set[str] = set()
        for chunk in chunks:
            stems.update(token.text for token in self._analyzer(chunk))

        doc_id = len(self._docs)
        self._docs.append(document)
        for stem in stems:
            self._words.setdefault(stem, set()).add(doc_id)
        self._words_view = None

        logger.debug("Indexed %s as document %d with %d stems", document.url, doc_id, len(stems))
        return doc_id


def new(*, analyzer: Analyzer | None = None, html_parser: str = DEFAULT_PARSER) -> Index:
    """Return an empty index."""

    return Index(analyzer=analyzer, html_parser=html_parser)


def _read_stream(url: str, content: IO[AnyStr]) -> str:
    try:
        data = content.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentReadError(url, str(exc)) from exc
    if isinstance(data, (bytes, bytearray)):
        return data.decode("utf-8", errors="replace")
    return data
