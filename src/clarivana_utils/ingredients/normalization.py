"""OCR text normalization utilities."""

import re
from typing import FrozenSet

_HYPHENS = re.compile(r"[\u2010-\u2015]")
_DISALLOWED = re.compile(r"[^a-z0-9\s\-_]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Canonicalize scanned label text for matching.

    Lower-cases the text, folds typographic apostrophes and dashes to their
    ASCII forms, replaces every character other than ``a-z``, ``0-9``,
    whitespace, ``-`` and ``_`` with a space, then collapses whitespace.

    Args:
        text: Raw OCR output (or a dictionary name/alias).

    Returns:
        The normalized string; empty when nothing matchable remains.

    Examples:
        >>> normalize_text("Contains: Yellow 5, E–330!")
        "contains yellow 5 e-330"
        >>> normalize_text("***")
        ""
    """
    if not text:
        return ""
    text = text.lower().replace("\u2019", "'")
    text = _HYPHENS.sub("-", text)
    text = _DISALLOWED.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


def tokenize(normalized_text: str) -> FrozenSet[str]:
    """Return the set of whitespace-delimited tokens of normalized text."""
    return frozenset(normalized_text.split())
