"""Index a static site from disk and report what was indexed.

The CLI walks the given files and directories, feeds HTML pages through
``Index.add_html`` and plain-text files through ``Index.add_text``, then prints
a short summary. ``--lookup`` checks which documents a word would find.
"""

# ruff: noqa: T201  # CLI intentionally prints operator feedback

from __future__ import annotations

import argparse
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
import logging
from pathlib import Path
import sys
import textwrap

from bs4 import FeatureNotFound

from static_search.config import Settings
from static_search.observability import configure_logging
from static_search.search.analyzers import get_analyzer
from static_search.search.index import Index


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceFile:
    """A file on disk paired with the URL it is indexed under."""

    path: Path
    url: str
    is_html: bool


@dataclass
class IndexRunResult:
    """Summary for one indexing run."""

    documents_indexed: int = 0
    documents_skipped: int = 0


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="static-search-index",
        description="Build an in-memory search index from HTML and text files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent(
            """
            Examples:
              static-search-index public/
              static-search-index public/ --base-url https://example.com --lookup memoires
              STATIC_SEARCH_LOG_JSON=true static-search-index notes/ --log-level debug
              STATIC_SEARCH_ANALYZER=english-nostem STATIC_SEARCH_HTML_PARSER=html5lib static-search-index public/
            """
        ).strip(),
    )
    parser.add_argument("paths", nargs="+", type=Path, metavar="PATH", help="Files or directories to index")
    parser.add_argument(
        "--base-url",
        help="Prefix joined with each file's path relative to its root (default: STATIC_SEARCH_BASE_URL)",
    )
    parser.add_argument(
        "--lookup",
        action="append",
        default=[],
        metavar="WORD",
        help="Print documents containing WORD after indexing (repeatable)",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        help="Root log level (default: STATIC_SEARCH_LOG_LEVEL or info)",
    )
    parser.add_argument(
        "--json-logs",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Emit JSON log lines (default: STATIC_SEARCH_LOG_JSON)",
    )
    return parser


def discover_sources(
    roots: Sequence[Path],
    *,
    base_url: str,
    html_extensions: Sequence[str],
    text_extensions: Sequence[str],
) -> Iterator[SourceFile]:
    """Yield indexable files under ``roots`` in a stable order."""

    wanted = set(html_extensions) | set(text_extensions)
    for root in roots:
        if root.is_file():
            candidates = [(root, Path(root.name))]
        elif root.is_dir():
            candidates = [(path, path.relative_to(root)) for path in sorted(root.rglob("*")) if path.is_file()]
        else:
            logger.warning("Skipping missing path %s", root)
            continue

        for path, relative in candidates:
            suffix = path.suffix.lower()
            if suffix not in wanted:
                continue
            yield SourceFile(path=path, url=_join_url(base_url, relative), is_html=suffix in html_extensions)


def index_sources(index: Index, sources: Iterator[SourceFile]) -> IndexRunResult:
    """Add every source to ``index``, logging and skipping unreadable files."""

    result = IndexRunResult()
    for source in sources:
        try:
            with source.path.open("rb") as handle:
                if source.is_html:
                    index.add_html(source.url, handle)
                else:
                    index.add_text(source.url, source.path.stem, "", handle)
        except OSError as exc:
            logger.warning("Failed to index %s: %s", source.path, exc)
            result.documents_skipped += 1
            continue
        result.documents_indexed += 1
    return result


def main(argv: Sequence[str] | None = None) -> int:
    args = build_argument_parser().parse_args(argv)
    settings = Settings()

    configure_logging(
        level=args.log_level or settings.log_level,
        json_output=settings.log_json if args.json_logs is None else args.json_logs,
    )

    base_url = settings.base_url if args.base_url is None else args.base_url
    try:
        index = Index(analyzer=get_analyzer(settings.analyzer), html_parser=settings.html_parser)
    except FeatureNotFound as exc:
        logger.error("%s", exc)
        return 2
    sources = discover_sources(
        args.paths,
        base_url=base_url,
        html_extensions=settings.get_html_extensions(),
        text_extensions=settings.get_text_extensions(),
    )
    result = index_sources(index, sources)

    print(f"Indexed {result.documents_indexed} documents ({result.documents_skipped} skipped)")
    print(f"Distinct stems: {len(index.words)}")

    for word in args.lookup:
        matches = index.lookup(word)
        print(f"\n{word}: {len(matches)} match(es)")
        for document in matches:
            title = f" - {document.title}" if document.title else ""
            print(f"  {document.url}{title}")

    return 0 if result.documents_indexed else 1


def _join_url(base_url: str, relative: Path) -> str:
    path = relative.as_posix()
    if not base_url:
        return path
    return f"{base_url.rstrip('/')}/{path}"


if __name__ == "__main__":
    sys.exit(main())
