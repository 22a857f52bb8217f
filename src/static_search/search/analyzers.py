"""Analyzer utilities for the indexing pipeline.

Analyzers follow Whoosh's composable tokenizer/filter design: a tokenizer
yields ``Token`` objects and each filter is a generator over tokens. The
standard analyzer tokenizes, folds case and accents, drops stopwords and
stems, in the order the index relies on.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, replace
from functools import lru_cache
import re
import sys
from typing import Any, Protocol
import unicodedata

from static_search.search.stemmer import stem


@dataclass
class Token:
    """Represents a token emitted by analyzers."""

    text: str
    position: int
    start_char: int
    end_char: int

    def copy_with(self, **updates: Any) -> Token:
        return replace(self, **updates)


class Analyzer(Protocol):
    """Protocol implemented by analyzers."""

    def __call__(self, text: str) -> list[Token]:  # pragma: no cover - interface definition
        ...


class Tokenizer(Protocol):
    """Protocol implemented by tokenizers."""

    def __call__(self, text: str) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class TokenFilter(Protocol):
    """Protocol implemented by token filters."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


@lru_cache(maxsize=1)
def word_pattern() -> str:
    """Pattern for a run of letters/digits, each optionally followed by marks.

    ``re`` has no ``\\p{M}``, so the mark class (Mn, Mc, Me) is built from
    ``unicodedata`` once. Decomposed accents ("e" + U+0301, "e" + U+1DC4)
    therefore stay inside the word that ``remove_accents`` later folds.
    """

    ranges: list[tuple[int, int]] = []
    for codepoint in range(sys.maxunicode + 1):
        if unicodedata.category(chr(codepoint)).startswith("M"):
            if ranges and ranges[-1][1] == codepoint - 1:
                ranges[-1] = (ranges[-1][0], codepoint)
            else:
                ranges.append((codepoint, codepoint))
    marks = "".join(
        f"\\U{first:08x}" if first == last else f"\\U{first:08x}-\\U{last:08x}" for first, last in ranges
    )
    return rf"(?:[^\W_][{marks}]*)+"


class RegexTokenizer:
    """Regex-based tokenizer that yields word tokens."""

    def __init__(self, pattern: str | None = None, flags: int = re.UNICODE | re.MULTILINE) -> None:
        self.pattern = re.compile(word_pattern() if pattern is None else pattern, flags)

    def __call__(self, text: str) -> Iterator[Token]:
        for position, match in enumerate(self.pattern.finditer(text)):
            yield Token(
                text=match.group(0),
                position=position,
                start_char=match.start(),
                end_char=match.end(),
            )


def remove_accents(text: str) -> str:
    """Lowercase ``text`` and strip diacritical marks, keeping base letters.

    >>> remove_accents("Mémoires")
    'memoires'
    """

    decomposed = unicodedata.normalize("NFKD", text.lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    # NFKD can surface uppercase compatibility forms, lower again to stay idempotent
    return stripped.lower()


class AccentFilter:
    """Folds case and removes diacritics from token text."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text.isascii() and token.text.islower():
                yield token
                continue
            folded = remove_accents(token.text)
            if folded:
                yield token.copy_with(text=folded)


# Deliberately short: function words only. Content-bearing words such as
# "this" must survive so pages can be found by them.
STOPWORDS: frozenset[str] = frozenset(
    {
        "a",
        "an",
        "and",
        "are",
        "as",
        "at",
        "be",
        "by",
        "for",
        "from",
        "i",
        "in",
        "is",
        "it",
        "of",
        "on",
        "or",
        "the",
        "to",
        "was",
        "were",
        "with",
        "you",
    }
)


def is_stopword(word: str) -> bool:
    """Return True when ``word`` carries no indexing value."""

    return word in STOPWORDS


class StopFilter:
    """Removes stopwords from the stream."""

    def __init__(self, stopwords: Iterable[str] | None = None) -> None:
        self.stopwords = STOPWORDS if stopwords is None else frozenset(word.lower() for word in stopwords)

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text not in self.stopwords:
                yield token


class PorterStemFilter:
    """Applies the Porter2 (English Snowball) stemmer."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            stemmed = stem(token.text)
            if stemmed == token.text:
                yield token
            else:
                yield token.copy_with(text=stemmed)


class AnalyzerPipeline:
    """Composable analyzer pipeline (tokenizer + filters)."""

    def __init__(self, tokenizer: Tokenizer, filters: Sequence[TokenFilter] | None = None) -> None:
        self.tokenizer = tokenizer
        self.filters = list(filters or [])

    def __call__(self, text: str) -> list[Token]:
        stream: Iterable[Token] = self.tokenizer(text)
        for token_filter in self.filters:
            stream = token_filter(stream)
        tokens = list(stream)
        for idx, token in enumerate(tokens):  # normalize positions post-filtering
            token.position = idx
        return tokens


class StandardAnalyzer:
    """Default analyzer used by the index."""

    def __init__(
        self,
        *,
        stopwords: Iterable[str] | None = None,
        apply_stemming: bool = True,
    ) -> None:
        filters: list[TokenFilter] = [AccentFilter(), StopFilter(stopwords)]
        if apply_stemming:
            filters.append(PorterStemFilter())
        self.pipeline = AnalyzerPipeline(RegexTokenizer(), filters)

    def __call__(self, text: str) -> list[Token]:
        return self.pipeline(text)


_ANALYZER_FACTORIES: dict[str, Callable[[], Analyzer]] = {
    "default": lambda: StandardAnalyzer(),
    "english": lambda: StandardAnalyzer(),
    "english-nostem": lambda: StandardAnalyzer(apply_stemming=False),
}


def get_analyzer(name: str | None) -> Analyzer:
    """Return analyzer by name, defaulting to the standard analyzer."""

    if name is None:
        return _ANALYZER_FACTORIES["default"]()
    normalized = name.lower()
    if normalized not in _ANALYZER_FACTORIES:
        msg = f"Unknown analyzer '{name}'. Available: {sorted(_ANALYZER_FACTORIES)}"
        raise ValueError(msg)
    return _ANALYZER_FACTORIES[normalized]()
