"""Whole-phrase matching against normalized label text."""

import re
from functools import lru_cache
from typing import AbstractSet, List, Sequence

_DIGIT = re.compile(r"[0-9]")


def has_digit(text: str) -> bool:
    return bool(_DIGIT.search(text))


@lru_cache(maxsize=4096)
def _word_pattern(phrase: str) -> re.Pattern:
    return re.compile(r"\b" + re.escape(phrase) + r"\b", re.IGNORECASE)


def contains_phrase(phrase: str, text: str) -> bool:
    """Check if ``phrase`` occurs in ``text`` without splitting a larger word."""
    return bool(_word_pattern(phrase).search(text))


def numeric_variants(phrase: str) -> List[str]:
    """Spellings under which a numbered phrase may appear after OCR.

    Additive codes and numbered colors show up with inconsistent spacing and
    punctuation, so "yellow 5" is also tried as "yellow5" and "yellow-5", and
    "e-330" as "e 330".

    Args:
        phrase: A normalized phrase.

    Returns:
        The phrase as-is, with whitespace removed, with whitespace replaced by
        hyphens, and with hyphen/underscore runs replaced by spaces, in that
        order and without duplicates.
    """
    variants = [
        phrase,
        re.sub(r"\s+", "", phrase),
        re.sub(r"\s+", "-", phrase),
        re.sub(r"[-_]+", " ", phrase),
    ]
    return list(dict.fromkeys(v for v in variants if v))


def contains_words_in_order(words: Sequence[str], text: str) -> bool:
    """Check that every word occurs as a whole word, left to right.

    Each word is searched for strictly after the end of the previous match, so
    matches never overlap and never go backwards. Extra characters between the
    words are tolerated.
    """
    position = 0
    for word in words:
        match = _word_pattern(word).search(text, position)
        if match is None:
            return False
        position = match.end()
    return True


def has_whole_phrase(
    candidate: str, haystack_text: str, haystack_tokens: AbstractSet[str]
) -> bool:
    """Decide whether a dictionary candidate appears in scanned text.

    Both ``candidate`` and ``haystack_text`` must already be normalized.

    Numbered candidates ("yellow 5", "e330") are tried under every spelling
    from :func:`numeric_variants` and nothing else. Alphabetic candidates are
    matched as a whole phrase, then (multi-word) word by word in order, then
    (single word) by token membership.

    Args:
        candidate: Normalized name, id or alias of an ingredient.
        haystack_text: Normalized scan text.
        haystack_tokens: Token set of ``haystack_text``.

    Returns:
        True if the candidate is found.
    """
    if not candidate or not candidate.strip():
        return False

    if has_digit(candidate):
        return any(
            contains_phrase(variant, haystack_text)
            for variant in numeric_variants(candidate)
        )

    if contains_phrase(candidate, haystack_text):
        return True

    words = candidate.split()
    if len(words) > 1:
        return contains_words_in_order(words, haystack_text)
    return words[0] in haystack_tokens
