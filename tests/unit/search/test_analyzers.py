"""Unit tests for analyzer pipelines and filters."""

import pytest

from static_search.search import analyzers
from static_search.search.analyzers import (
    STOPWORDS,
    AccentFilter,
    AnalyzerPipeline,
    PorterStemFilter,
    RegexTokenizer,
    StandardAnalyzer,
    StopFilter,
    Token,
    get_analyzer,
    is_stopword,
    remove_accents,
)


def _tokens(*words: str) -> list[Token]:
    return [Token(text=word, position=idx, start_char=0, end_char=len(word)) for idx, word in enumerate(words)]


class TestToken:
    """Token helpers produce independent copies with offsets intact."""

    def test_copy_with_keeps_offsets(self):
        token = Token(text="Mémoires", position=2, start_char=10, end_char=18)

        clone = token.copy_with(text="memoires")
        clone.position = 0

        assert clone.text == "memoires"
        assert (clone.start_char, clone.end_char) == (10, 18)
        assert (token.text, token.position) == ("Mémoires", 2)


class TestRegexTokenizer:
    """Tokens are maximal runs of letters and digits."""

    def test_splits_on_punctuation_and_whitespace(self):
        tokens = list(RegexTokenizer()("HEY you! Try Mémoires.\nTry?"))

        assert [t.text for t in tokens] == ["HEY", "you", "Try", "Mémoires", "Try"]
        assert [t.position for t in tokens] == [0, 1, 2, 3, 4]
        assert (tokens[3].start_char, tokens[3].end_char) == (13, 21)

    def test_keeps_decomposed_accents_inside_the_word(self):
        tokens = list(RegexTokenizer()("Me\u0301moires"))

        assert [t.text for t in tokens] == ["Me\u0301moires"]

    @pytest.mark.parametrize("mark", ["\u1dc4", "\u20d7", "\u0903", "\u20dd"])
    def test_marks_outside_the_basic_block_stay_inside_the_word(self, mark):
        tokens = list(RegexTokenizer()(f"naive{mark}ty cafe"))

        assert [t.text for t in tokens] == [f"naive{mark}ty", "cafe"]

    def test_underscores_and_apostrophes_are_boundaries(self):
        tokens = list(RegexTokenizer()("snake_case don't mp3 2023"))

        assert [t.text for t in tokens] == ["snake", "case", "don", "t", "mp3", "2023"]

    def test_restartable(self):
        tokenizer = RegexTokenizer()
        text = "green day, yoohie"

        assert [t.text for t in tokenizer(text)] == [t.text for t in tokenizer(text)]

    def test_empty_input(self):
        assert list(RegexTokenizer()("  ...  ")) == []


class TestRemoveAccents:
    """Accent folding lowercases and keeps base letters."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Mémoires", "memoires"),
            ("Me\u0301moires", "memoires"),
            ("CRÈME BRÛLÉE", "creme brulee"),
            ("naïve façade", "naive facade"),
            ("plain", "plain"),
        ],
    )
    def test_folds(self, raw, expected):
        assert remove_accents(raw) == expected

    @pytest.mark.parametrize("raw", ["Mémoires", "İstanbul", "ℌello", "Ærøskøbing", "ﬁnal", "Ångström", ""])
    def test_idempotent(self, raw):
        once = remove_accents(raw)
        assert remove_accents(once) == once


class TestFilters:
    """Filters transform or drop tokens without touching the rest."""

    def test_accent_filter_folds_tokens(self):
        result = list(AccentFilter()(_tokens("Mémoires", "try")))

        assert [t.text for t in result] == ["memoires", "try"]

    def test_stop_filter_drops_function_words_only(self):
        result = list(StopFilter()(_tokens("this", "is", "a", "test", "you")))

        assert [t.text for t in result] == ["this", "test"]

    def test_stop_filter_accepts_custom_vocabulary(self):
        result = list(StopFilter(["Test"])(_tokens("this", "test")))

        assert [t.text for t in result] == ["this"]

    def test_stem_filter_reuses_unchanged_tokens(self):
        raw = _tokens("hello", "memoires")

        result = list(PorterStemFilter()(raw))

        assert result[0] is raw[0]
        assert result[1].text == "memoir"
        assert raw[1].text == "memoires"

    def test_stopword_table(self):
        assert is_stopword("a")
        assert is_stopword("is")
        assert not is_stopword("this")
        assert isinstance(STOPWORDS, frozenset)


class TestStandardAnalyzer:
    """The standard analyzer runs tokenize, fold, stop, stem in order."""

    def test_full_pipeline(self):
        tokens = StandardAnalyzer()("HEY you! Try Mémoires.\nTry?")

        assert [t.text for t in tokens] == ["hey", "tri", "memoir", "tri"]
        assert [t.position for t in tokens] == [0, 1, 2, 3]

    def test_stopwords_checked_before_stemming(self):
        tokens = StandardAnalyzer()("This is a test")

        assert [t.text for t in tokens] == ["this", "test"]

    def test_without_stemming(self):
        tokens = StandardAnalyzer(apply_stemming=False)("Trying Mémoires")

        assert [t.text for t in tokens] == ["trying", "memoires"]

    def test_pipeline_without_filters_returns_raw_tokens(self):
        tokens = AnalyzerPipeline(RegexTokenizer())("Hello World")

        assert [t.text for t in tokens] == ["Hello", "World"]


class TestGetAnalyzer:
    """Analyzer lookup by name."""

    def test_default_and_english_stem(self):
        assert [t.text for t in get_analyzer(None)("trying")] == ["tri"]
        assert [t.text for t in get_analyzer("English")("trying")] == ["tri"]

    def test_nostem(self):
        assert [t.text for t in get_analyzer("english-nostem")("trying")] == ["trying"]

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown analyzer 'klingon'"):
            get_analyzer("klingon")

    def test_registry_is_extensible(self, monkeypatch):
        monkeypatch.setattr(analyzers, "_ANALYZER_FACTORIES", {"plain": lambda: AnalyzerPipeline(RegexTokenizer())})

        assert [t.text for t in get_analyzer("plain")("Hi")] == ["Hi"]
