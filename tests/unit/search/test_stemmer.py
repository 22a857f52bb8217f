"""Unit tests for the Porter2 stemmer."""

import pytest

from static_search.search.stemmer import stem


INDEXED_VOCABULARY = {
    "try": "tri",
    "memoires": "memoir",
    "offspring": "offspr",
    "yoohie": "yoohi",
    "masterpiece": "masterpiec",
    "codingrobots": "codingrobot",
    "hello": "hello",
    "world": "world",
    "test": "test",
    "green": "green",
    "day": "day",
    "com": "com",
    "link": "link",
    "roll": "roll",
    "hey": "hey",
    "this": "this",
}


class TestIndexedVocabulary:
    """Words seen in indexed pages reduce to the expected stems."""

    @pytest.mark.parametrize(("word", "expected"), sorted(INDEXED_VOCABULARY.items()))
    def test_stem(self, word, expected):
        assert stem(word) == expected

    @pytest.mark.parametrize("word", sorted(INDEXED_VOCABULARY))
    def test_stemming_a_stem_is_stable(self, word):
        once = stem(word)
        assert stem(once) == once

    def test_deterministic(self):
        assert [stem("memoires") for _ in range(3)] == ["memoir"] * 3


class TestSuffixSteps:
    """Each step of the algorithm strips its suffixes under region rules."""

    @pytest.mark.parametrize(
        ("word", "expected"),
        [
            ("caresses", "caress"),
            ("ponies", "poni"),
            ("ties", "tie"),
            ("cats", "cat"),
            ("gas", "gas"),
            ("running", "run"),
            ("hopping", "hop"),
            ("hoped", "hope"),
            ("agreed", "agre"),
            ("consigned", "consign"),
            ("consigning", "consign"),
            ("happy", "happi"),
            ("knightly", "knight"),
            ("generously", "generous"),
            ("relational", "relat"),
            ("consignment", "consign"),
            ("generate", "generat"),
        ],
    )
    def test_known_stems(self, word, expected):
        assert stem(word) == expected

    def test_short_words_are_untouched(self):
        assert stem("is") == "is"
        assert stem("a") == "a"
        assert stem("") == ""


class TestExceptionalForms:
    """Irregular words bypass the suffix steps."""

    @pytest.mark.parametrize(
        ("word", "expected"),
        [("skies", "sky"), ("dying", "die"), ("news", "news"), ("only", "onli"), ("atlas", "atlas")],
    )
    def test_exceptions(self, word, expected):
        assert stem(word) == expected

    def test_invariants_after_plural_removal(self):
        assert stem("succeed") == "succeed"
        assert stem("proceeds") == "proceed"
