"""Title normalization for comparing movie titles across data sources."""

from __future__ import annotations

import re
import unicodedata
from functools import lru_cache

from num2words import num2words


_ROMAN_NUMERALS = {
    "i": "1",
    "ii": "2",
    "iii": "3",
    "iv": "4",
    "v": "5",
    "vi": "6",
    "vii": "7",
    "viii": "8",
    "ix": "9",
    "x": "10",
}
_ROMAN_RE = re.compile(r"\b(?:" + "|".join(sorted(_ROMAN_NUMERALS, key=len, reverse=True)) + r")\b", re.ASCII)
_ORDINAL_RE = re.compile(r"(\d+)(?:st|nd|rd|th)", re.ASCII)
_IN_WORD_DIGITS_RE = re.compile(r"([a-z]+)(\d+)([a-z]+)", re.ASCII)
_DIGITS_RE = re.compile(r"\d+", re.ASCII)
_SYMBOLS = {
    "&": " and ",
    "%": " percent ",
    "@": " at ",
    "°": " degrees ",
}
_SEPARATORS_RE = re.compile(r"[-_,/\\|]")
_DISALLOWED_RE = re.compile(r"[^a-z ]")
_WHITESPACE_RE = re.compile(r"\s+")

_DIGIT_WORDS = ("zero", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine")


def number_words(digits: str, ordinal: bool = False) -> str:
    """Spell a run of ASCII digits as English words.

    num2words joins hundreds and tens with a British "and" ("two thousand and
    nine"); it is dropped so the result matches "two thousand, nine" style
    aliases. Runs too long for num2words (or for int()) are spelled digit
    by digit.

    Args:
        digits: ASCII digit string, leading zeros allowed.
        ordinal: Spell as an ordinal ("third") instead of a cardinal.

    Returns:
        Number words, possibly containing hyphens and commas.
    """
    try:
        words = num2words(int(digits), to="ordinal" if ordinal else "cardinal", lang="en")
    except (OverflowError, ValueError):
        words = " ".join(_DIGIT_WORDS[int(d)] for d in digits)
        if ordinal:
            words += "th"
    return words.replace(" and ", " ")


def _expand_in_word_digits(match: re.Match) -> str:
    head, digits, tail = match.groups()
    words = number_words(digits)
    # "se7en": the letters around the digit are the ends of its own word.
    if words.isalpha() and words.startswith(head) and words.endswith(tail) and len(head) + len(tail) < len(words):
        return words
    return head + words + tail


def _normalize_once(text: str) -> str:
    text = text.strip().lower()
    text = _ROMAN_RE.sub(lambda m: _ROMAN_NUMERALS[m.group(0)], text)
    text = text.replace("½", " and a half ").replace("1/2", " and a half ")
    text = _ORDINAL_RE.sub(lambda m: number_words(m.group(1), ordinal=True), text)
    text = _IN_WORD_DIGITS_RE.sub(_expand_in_word_digits, text)
    text = _DIGITS_RE.sub(lambda m: number_words(m.group(0)), text)
    for symbol, word in _SYMBOLS.items():
        text = text.replace(symbol, word)
    text = _SEPARATORS_RE.sub(" ", text)
    # Plain substring removal, not a word-boundary article strip.
    text = text.replace("the ", "")
    text = unicodedata.normalize("NFD", text)
    text = _DISALLOWED_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


@lru_cache(maxsize=4096)
def _normalize_text(text: str) -> str:
    key = _normalize_once(text)
    # Dropping "the " or stray symbols can expose a new article or numeral.
    while True:
        settled = _normalize_once(key)
        if settled == key:
            return key
        key = settled


def normalize(raw: object) -> str:
    """Reduce a free-text title to a key used only for equality checks.

    The key holds lowercase ASCII letters and single spaces. Numerals
    (digits, ordinals and standalone roman numerals up to X) become English
    words, a handful of symbols become words, separators become spaces,
    every "the " is removed and accents and other punctuation are dropped.

    Args:
        raw: Title to normalize. Non-strings are converted with ``str()``.

    Returns:
        Normalized comparison key, possibly empty.
    """
    return _normalize_text(raw if isinstance(raw, str) else str(raw))


def same_title(left: object, right: object) -> bool:
    """Return True if two titles share a normalized key."""
    return normalize(left) == normalize(right)
