"""Conservative edit-distance matching for long candidates."""

import re

from .config import FUZZY_MAX_RATIO, FUZZY_MIN_LENGTH

_WHITESPACE = re.compile(r"\s+")


def levenshtein(a: str, b: str) -> int:
    """Levenshtein distance with unit insert, delete and substitute costs."""
    m, n = len(a), len(b)
    if not m:
        return n
    if not n:
        return m
    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m + 1):
        dp[i][0] = i
    for j in range(n + 1):
        dp[0][j] = j
    for i in range(1, m + 1):
        for j in range(1, n + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            dp[i][j] = min(
                dp[i - 1][j] + 1,
                dp[i][j - 1] + 1,
                dp[i - 1][j - 1] + cost,
            )
    return dp[m][n]


def conservative_fuzzy_match(
    candidate: str,
    haystack_text: str,
    min_length: int = FUZZY_MIN_LENGTH,
    max_ratio: float = FUZZY_MAX_RATIO,
) -> bool:
    """Compare a candidate against the whole haystack with a strict threshold.

    Whitespace is removed from both strings and the entire haystack is treated
    as a single comparison string. This is deliberately crude and only ever
    used as a secondary check after phrase matching failed.

    Args:
        candidate: Normalized candidate string.
        haystack_text: Normalized scan text.
        min_length: Pairs whose longer stripped string is shorter than this
            are rejected outright.
        max_ratio: Highest accepted ``distance / longer length``.

    Returns:
        True if the normalized edit distance is within ``max_ratio``.
    """
    a = _WHITESPACE.sub("", candidate).lower()
    b = _WHITESPACE.sub("", haystack_text).lower()
    max_len = max(len(a), len(b))
    if max_len < min_length:
        return False
    # The distance is at least the length difference.
    if abs(len(a) - len(b)) / max_len > max_ratio:
        return False
    return levenshtein(a, b) / max_len <= max_ratio
