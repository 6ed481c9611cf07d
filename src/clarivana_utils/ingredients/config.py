"""Matching thresholds and the generic-word blacklist."""

import dataclasses
from typing import FrozenSet

# Words that must never trigger a match on their own ("yellow" alone is not
# "yellow 5"); numbered candidates bypass the list.
GENERIC_BLACKLIST = frozenset(
    {
        "yellow",
        "red",
        "blue",
        "white",
        "black",
        "green",
        "natural",
        "artificial",
        "flavour",
        "flavor",
        "colour",
        "color",
        "corn",
        "meal",
        "malted",
        "barley",
        "flour",
        "water",
        "sugar",
        "salt",
        "oil",
        "extract",
    }
)

FUZZY_MIN_LENGTH = 6
FUZZY_MAX_RATIO = 0.15


@dataclasses.dataclass(frozen=True)
class MatchingConfig:
    """Tunable parameters of the ingredient resolver.

    Attributes:
        generic_blacklist: Single words skipped as match candidates unless the
            candidate or the ingredient id carries a digit.
        fuzzy_min_length: Candidates (whitespace stripped) shorter than this
            are never fuzzy matched.
        fuzzy_max_ratio: Maximum edit distance divided by the longer length
            for a fuzzy match to be accepted.
    """

    generic_blacklist: FrozenSet[str] = GENERIC_BLACKLIST
    fuzzy_min_length: int = FUZZY_MIN_LENGTH
    fuzzy_max_ratio: float = FUZZY_MAX_RATIO

    def with_blacklist(self, *words: str) -> "MatchingConfig":
        """Return a copy whose blacklist also contains ``words`` (lower-cased)."""
        extra = {w.strip().lower() for w in words if w and w.strip()}
        return dataclasses.replace(
            self, generic_blacklist=frozenset(self.generic_blacklist | extra)
        )


DEFAULT_CONFIG = MatchingConfig()
