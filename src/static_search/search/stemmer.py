"""Porter2 ("English Snowball") stemmer.

The algorithm is expressed as constant rule tables plus small pure helpers so
the stemmer holds no state and can be shared freely. Input is expected to be
lowercase and accent-free, which is what the analyzer pipeline hands over.

Region notation follows the published algorithm: R1 starts after the first
non-vowel that follows a vowel, R2 is the same rule applied again inside R1.
Offsets are computed once, after the prelude, and stay fixed while suffixes
are removed.
"""

from __future__ import annotations

from collections.abc import Sequence


_VOWELS = frozenset("aeiouy")
_DOUBLES: tuple[str, ...] = ("bb", "dd", "ff", "gg", "mm", "nn", "pp", "rr", "tt")
_VALID_LI_ENDINGS = frozenset("cdeghkmnrt")
_R1_PREFIXES: tuple[str, ...] = ("gener", "commun", "arsen")

_EXCEPTIONAL_FORMS: dict[str, str] = {
    "skis": "ski",
    "skies": "sky",
    "dying": "die",
    "lying": "lie",
    "tying": "tie",
    "idly": "idl",
    "gently": "gentl",
    "ugly": "ugli",
    "early": "earli",
    "only": "onli",
    "singly": "singl",
    # invariant forms
    "sky": "sky",
    "news": "news",
    "howe": "howe",
    "atlas": "atlas",
    "cosmos": "cosmos",
    "bias": "bias",
    "andes": "andes",
}

# Left untouched once step 1a has run.
_POST_STEP1A_INVARIANTS = frozenset(
    {"inning", "outing", "canning", "herring", "earring", "proceed", "exceed", "succeed"}
)

# Every table below is ordered longest suffix first so the first hit is the
# longest match, which is what each step operates on.
_STEP1B_SUFFIXES: tuple[str, ...] = ("eedly", "ingly", "edly", "eed", "ing", "ed")

_STEP2_RULES: tuple[tuple[str, str], ...] = (
    ("ization", "ize"),
    ("ational", "ate"),
    ("fulness", "ful"),
    ("ousness", "ous"),
    ("iveness", "ive"),
    ("tional", "tion"),
    ("biliti", "ble"),
    ("lessli", "less"),
    ("entli", "ent"),
    ("ation", "ate"),
    ("alism", "al"),
    ("aliti", "al"),
    ("ousli", "ous"),
    ("iviti", "ive"),
    ("fulli", "ful"),
    ("enci", "ence"),
    ("anci", "ance"),
    ("abli", "able"),
    ("izer", "ize"),
    ("ator", "ate"),
    ("alli", "al"),
    ("bli", "ble"),
    ("ogi", "og"),
    ("li", ""),
)

_STEP3_RULES: tuple[tuple[str, str], ...] = (
    ("ational", "ate"),
    ("tional", "tion"),
    ("alize", "al"),
    ("icate", "ic"),
    ("iciti", "ic"),
    ("ative", ""),
    ("ical", "ic"),
    ("ness", ""),
    ("ful", ""),
)

_STEP4_SUFFIXES: tuple[str, ...] = (
    "ement",
    "ance",
    "ence",
    "able",
    "ible",
    "ment",
    "ant",
    "ent",
    "ism",
    "ate",
    "iti",
    "ous",
    "ive",
    "ize",
    "ion",
    "al",
    "er",
    "ic",
)


def stem(word: str) -> str:
    """Return the Porter2 stem of ``word``.

    >>> stem("memoires")
    'memoir'
    >>> stem("try")
    'tri'
    """

    if word in _EXCEPTIONAL_FORMS:
        return _EXCEPTIONAL_FORMS[word]
    if len(word) <= 2:
        return word

    word = _prelude(word)
    r1, r2 = _regions(word)

    word = _step0(word)
    word = _step1a(word)
    if word in _POST_STEP1A_INVARIANTS:
        return word

    word = _step1b(word, r1)
    word = _step1c(word)
    word = _step2(word, r1)
    word = _step3(word, r1, r2)
    word = _step4(word, r2)
    word = _step5(word, r1, r2)
    return word.replace("Y", "y")


def _prelude(word: str) -> str:
    if word.startswith("'"):
        word = word[1:]
    chars = list(word)
    for idx, char in enumerate(chars):
        # consonant y is marked as Y so it never counts as a vowel
        if char == "y" and (idx == 0 or chars[idx - 1] in _VOWELS):
            chars[idx] = "Y"
    return "".join(chars)


def _regions(word: str) -> tuple[int, int]:
    for prefix in _R1_PREFIXES:
        if word.startswith(prefix):
            r1 = len(prefix)
            break
    else:
        r1 = _region_start(word, 0)
    return r1, _region_start(word, r1)


def _region_start(word: str, start: int) -> int:
    for idx in range(start + 1, len(word)):
        if word[idx] not in _VOWELS and word[idx - 1] in _VOWELS:
            return idx + 1
    return len(word)


def _longest_suffix(word: str, suffixes: Sequence[str]) -> str | None:
    for suffix in suffixes:
        if word.endswith(suffix):
            return suffix
    return None


def _has_vowel(text: str) -> bool:
    return any(char in _VOWELS for char in text)


def _ends_with_short_syllable(word: str) -> bool:
    if len(word) == 2:
        return word[0] in _VOWELS and word[1] not in _VOWELS
    if len(word) >= 3:
        return (
            word[-3] not in _VOWELS
            and word[-2] in _VOWELS
            and word[-1] not in _VOWELS
            and word[-1] not in "wxY"
        )
    return False


def _is_short_word(word: str, r1: int) -> bool:
    return r1 >= len(word) and _ends_with_short_syllable(word)


def _step0(word: str) -> str:
    for suffix in ("'s'", "'s", "'"):
        if word.endswith(suffix):
            return word[: -len(suffix)]
    return word


def _step1a(word: str) -> str:
    if word.endswith("sses"):
        return word[:-2]
    if word.endswith(("ied", "ies")):
        return word[:-2] if len(word) > 4 else word[:-1]
    if word.endswith(("us", "ss")):
        return word
    if word.endswith("s") and _has_vowel(word[:-2]):
        return word[:-1]
    return word


def _step1b(word: str, r1: int) -> str:
    suffix = _longest_suffix(word, _STEP1B_SUFFIXES)
    if suffix is None:
        return word

    base = word[: -len(suffix)]
    if suffix in ("eed", "eedly"):
        if len(base) >= r1:
            return base + "ee"
        return word

    if not _has_vowel(base):
        return word
    if base.endswith(("at", "bl", "iz")):
        return base + "e"
    if base.endswith(_DOUBLES):
        return base[:-1]
    if _is_short_word(base, r1):
        return base + "e"
    return base


def _step1c(word: str) -> str:
    if len(word) > 2 and word[-1] in "yY" and word[-2] not in _VOWELS:
        return word[:-1] + "i"
    return word


def _step2(word: str, r1: int) -> str:
    for suffix, replacement in _STEP2_RULES:
        if not word.endswith(suffix):
            continue
        base = word[: -len(suffix)]
        if len(base) < r1:
            return word
        if suffix == "ogi" and not base.endswith("l"):
            return word
        if suffix == "li" and (not base or base[-1] not in _VALID_LI_ENDINGS):
            return word
        return base + replacement
    return word


def _step3(word: str, r1: int, r2: int) -> str:
    for suffix, replacement in _STEP3_RULES:
        if not word.endswith(suffix):
            continue
        base = word[: -len(suffix)]
        if len(base) < r1:
            return word
        if suffix == "ative" and len(base) < r2:
            return word
        return base + replacement
    return word


def _step4(word: str, r2: int) -> str:
    suffix = _longest_suffix(word, _STEP4_SUFFIXES)
    if suffix is None:
        return word
    base = word[: -len(suffix)]
    if len(base) < r2:
        return word
    if suffix == "ion" and not base.endswith(("s", "t")):
        return word
    return base


def _step5(word: str, r1: int, r2: int) -> str:
    if word.endswith("e"):
        base = word[:-1]
        if len(base) >= r2 or (len(base) >= r1 and not _ends_with_short_syllable(base)):
            return base
        return word
    if word.endswith("l") and len(word) - 1 >= r2 and word[-2:-1] == "l":
        return word[:-1]
    return word
