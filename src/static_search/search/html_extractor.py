"""Title, date and text extraction from HTML pages.

The extractor walks the BeautifulSoup tree and decides which parts of a page
are searchable. Parsing itself is delegated to BeautifulSoup so malformed
markup degrades to whatever structure the parser could recover.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
import logging
from urllib.parse import unquote, urlparse

from bs4 import (
    BeautifulSoup,
    CData,
    Comment,
    Declaration,
    Doctype,
    FeatureNotFound,
    NavigableString,
    ParserRejectedMarkup,
    ProcessingInstruction,
    Tag,
)
from bs4.builder import builder_registry


logger = logging.getLogger(__name__)

DEFAULT_PARSER = "html.parser"

_SKIPPED_TAGS = frozenset({"script", "style", "template"})
_NON_TEXT_STRINGS = (CData, Comment, Declaration, Doctype, ProcessingInstruction)
_TEXT_META_NAMES = frozenset({"description", "keywords"})
_DATE_META_KEYS = frozenset({"datepublished", "article:published_time", "dc.date", "dc.date.issued"})
_DATE_META_ATTRIBUTES = ("itemprop", "property", "name")


@dataclass(frozen=True)
class ExtractedPage:
    """Searchable parts of one HTML page."""

    title: str
    date: str
    text: tuple[str, ...]


def extract_page(html: str, url: str, *, parser: str = DEFAULT_PARSER) -> ExtractedPage:
    """Extract title, publish date and searchable text from ``html``.

    Text comes from visible text nodes, image ``alt`` attributes, link text,
    description/keywords meta tags and ``noscript`` fallbacks. Script, style
    and template payloads are never included. The page URL is appended so a
    document can be found by its own host and path.

    Args:
        html: Page markup.
        url: Address of the page.
        parser: BeautifulSoup tree builder name.
    """

    try:
        soup = BeautifulSoup(html, parser)
    except ParserRejectedMarkup as exc:
        logger.warning("Markup rejected for %s, indexing URL only: %s", url, exc)
        return ExtractedPage(title="", date="", text=(url_text(url),))

    collector = _TextCollector(parser)
    collector.visit(soup)
    collector.add(url_text(url))
    return ExtractedPage(title=_find_title(soup), date=_find_date(soup), text=tuple(collector.chunks))


def check_parser(parser: str) -> None:
    """Raise ``FeatureNotFound`` unless BeautifulSoup has a tree builder for ``parser``."""

    if builder_registry.lookup(parser) is None:
        msg = f"HTML parser {parser!r} is not installed; install its extra or use {DEFAULT_PARSER!r}"
        raise FeatureNotFound(msg)


def url_text(url: str) -> str:
    """Return the searchable part of ``url``: host without ``www.`` plus path.

    Examples:
        "http://www.codingrobots.com/memoires/" -> "codingrobots.com /memoires/"
        "notes/today.txt" -> "notes/today.txt"
    """

    try:
        parsed = urlparse(url)
        host = parsed.hostname or ""
    except ValueError:
        return url
    if host.startswith("www."):
        host = host[len("www.") :]
    return f"{host} {unquote(parsed.path)}".strip()


class _TextCollector:
    """Visitor collecting searchable text chunks in document order."""

    def __init__(self, parser: str) -> None:
        self.parser = parser
        self.chunks: list[str] = []

    def add(self, text: str | None) -> None:
        if text and text.strip():
            self.chunks.append(text)

    def visit(self, node: Tag, *, raw_markup: bool = False) -> None:
        for child in node.children:
            if isinstance(child, Tag):
                self._visit_tag(child)
            elif isinstance(child, NavigableString) and not isinstance(child, _NON_TEXT_STRINGS):
                if raw_markup and "<" in child:
                    # parsers that honour scripting hand noscript over as raw text
                    try:
                        fragment = BeautifulSoup(str(child), self.parser)
                    except ParserRejectedMarkup as exc:
                        logger.warning("Skipping rejected noscript markup: %s", exc)
                        continue
                    self.visit(fragment)
                else:
                    self.add(str(child))

    def _visit_tag(self, tag: Tag) -> None:
        name = tag.name.lower()
        if name in _SKIPPED_TAGS:
            return
        if name == "img":
            self.add(_attribute(tag, "alt"))
        elif name == "meta":
            if _attribute(tag, "name").lower() in _TEXT_META_NAMES:
                self.add(_attribute(tag, "content"))
            return
        self.visit(tag, raw_markup=name == "noscript")


def _find_title(soup: BeautifulSoup) -> str:
    title = soup.find("title")
    if not isinstance(title, Tag):
        return ""
    return " ".join(title.get_text().split())


def _find_date(soup: BeautifulSoup) -> str:
    for meta in _iter_tags(soup.find_all("meta")):
        for attribute in _DATE_META_ATTRIBUTES:
            if _attribute(meta, attribute).lower() in _DATE_META_KEYS:
                return _attribute(meta, "content")
    return ""


def _iter_tags(nodes: Iterable[object]) -> Iterable[Tag]:
    return (node for node in nodes if isinstance(node, Tag))


def _attribute(tag: Tag, name: str) -> str:
    value = tag.get(name)
    # BeautifulSoup returns lists for multi-valued attributes
    if isinstance(value, list):
        return " ".join(value)
    return value or ""
