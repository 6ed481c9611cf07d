"""End-to-end processing of one scanned label."""

import dataclasses
import logging
from typing import Optional, Sequence, Tuple

from .models import MatchResult
from .report import ScanReport, build_report
from .resolver import IngredientResolver, find_allergy_alerts

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ScanOutcome:
    raw_text: str
    allergy_alerts: Tuple[str, ...]
    match: MatchResult
    report: ScanReport

    @property
    def matched_ids(self) -> Tuple[str, ...]:
        return self.match.ids


def scan_label_text(
    raw_text: Optional[str],
    resolver: IngredientResolver,
    allergies: Sequence[str] = (),
) -> ScanOutcome:
    """Check OCR text for the user's allergies, then for harmful ingredients.

    Args:
        raw_text: Text recovered from the label image; None counts as empty.
        resolver: Resolver bound to the loaded dictionary.
        allergies: The user's allergen substrings.

    Returns:
        ScanOutcome holding the allergy alerts, the match result and the
        assembled report.
    """
    raw_text = raw_text or ""
    alerts = find_allergy_alerts(raw_text, allergies)
    if alerts:
        logger.info(f"Allergy alert: {', '.join(alerts)}")

    match = resolver.scan(raw_text).with_allergy_alerts(alerts)
    logger.info(f"Scan matched {len(match)} harmful ingredient(s)")
    return ScanOutcome(
        raw_text=raw_text,
        allergy_alerts=alerts,
        match=match,
        report=build_report(match.records, alerts),
    )
