import logging
from typing import AbstractSet, Dict, List, Optional, Sequence, Tuple

from . import fuzzy, phrases
from .config import DEFAULT_CONFIG, MatchingConfig
from .dictionary import IngredientDictionary
from .models import IngredientRecord, MatchResult
from .normalization import normalize_text, tokenize

logger = logging.getLogger(__name__)


def candidate_strings(record: IngredientRecord) -> Tuple[str, ...]:
    """Normalized name, id and aliases of a record, blanks and repeats removed."""
    raw = [record.name, record.id, *record.aliases]
    normalized = (normalize_text(str(value)) for value in raw)
    return tuple(dict.fromkeys(c for c in normalized if c))


class IngredientResolver:
    """Matches scanned label text against a harmful-ingredient dictionary.

    Every record contributes its name, id and aliases as candidate strings.
    Candidates are first tried with deterministic phrase matching; only when
    none of them is found does a conservative fuzzy comparison run, and a fuzzy
    hit still needs one of the candidate's words to appear verbatim in the
    scan.

    Attributes:
        dictionary (IngredientDictionary): The read-only dictionary scanned
            against. Empty until one is loaded.
        config (MatchingConfig): Blacklist and fuzzy thresholds.
    """

    def __init__(
        self,
        dictionary: Optional[IngredientDictionary] = None,
        config: MatchingConfig = DEFAULT_CONFIG,
    ):
        self.dictionary = dictionary if dictionary is not None else IngredientDictionary.empty()
        self.config = config
        self._candidates: Dict[str, Tuple[str, ...]] = {
            record.id: candidate_strings(record) for record in self.dictionary
        }

    def is_blacklisted(self, candidate: str, record: IngredientRecord) -> bool:
        """Check if a generic single-word candidate must be ignored for ``record``."""
        if len(candidate.split()) != 1 or candidate not in self.config.generic_blacklist:
            return False
        return not (phrases.has_digit(candidate) or phrases.has_digit(record.id))

    def usable_candidates(self, record: IngredientRecord) -> List[str]:
        return [
            c
            for c in self._candidates.get(record.id, ())
            if not self.is_blacklisted(c, record)
        ]

    def _fuzzy_match(self, candidate: str, text: str, tokens: AbstractSet[str]) -> bool:
        if len("".join(candidate.split())) < self.config.fuzzy_min_length:
            return False
        if not fuzzy.conservative_fuzzy_match(
            candidate,
            text,
            min_length=self.config.fuzzy_min_length,
            max_ratio=self.config.fuzzy_max_ratio,
        ):
            return False
        # Guard against edit-distance coincidences.
        return any(word in tokens for word in candidate.split())

    def match_record(
        self, record: IngredientRecord, text: str, tokens: AbstractSet[str]
    ) -> bool:
        """Decide whether one dictionary record is present in normalized text."""
        for candidate in self.usable_candidates(record):
            if phrases.has_whole_phrase(candidate, text, tokens):
                logger.debug(f"{record.id}: phrase match on '{candidate}'")
                return True
        # The blacklist only applies to phrase matching.
        for candidate in self._candidates.get(record.id, ()):
            if self._fuzzy_match(candidate, text, tokens):
                logger.debug(f"{record.id}: fuzzy match on '{candidate}'")
                return True
        return False

    def resolve(self, normalized_text: str, tokens: AbstractSet[str]) -> MatchResult:
        """Find every dictionary record present in already-normalized text.

        Args:
            normalized_text: Output of :func:`normalize_text`.
            tokens: Token set of ``normalized_text``.

        Returns:
            MatchResult with matched ids deduplicated, in dictionary order.
        """
        matched: Dict[str, IngredientRecord] = {}
        for record in self.dictionary:
            if record.id in matched:
                continue
            if self.match_record(record, normalized_text, tokens):
                matched[record.id] = record
        return MatchResult(ids=tuple(matched), records=tuple(matched.values()))

    def scan(self, raw_text: Optional[str]) -> MatchResult:
        """Normalize raw OCR text and resolve it.

        Blank input, or input that normalizes to nothing, returns an empty
        result without running any matcher.
        """
        if not raw_text or not raw_text.strip():
            return MatchResult()
        text = normalize_text(raw_text)
        if not text:
            return MatchResult()
        return self.resolve(text, tokenize(text))


def find_allergy_alerts(raw_text: Optional[str], allergies: Sequence[str]) -> Tuple[str, ...]:
    """Return the allergies mentioned in the raw scan text.

    This is a plain case-insensitive substring test against the lower-cased
    raw text, not the normalized form. Blank entries are ignored; alerts keep
    the spelling and order of ``allergies``.
    """
    text = (raw_text or "").lower()
    return tuple(
        allergy
        for allergy in allergies or ()
        if allergy and allergy.strip() and allergy.lower() in text
    )
