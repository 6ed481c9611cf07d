"""Structured scan reports for presentation and persistence."""

import dataclasses
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from .models import IngredientRecord

NOT_AVAILABLE = "N/A"
ALL_CLEAR_TITLE = "All Clear"
ALL_CLEAR_MESSAGE = "No harmful ingredients detected in this scan."

REPORT_COLUMNS = [
    "id",
    "name",
    "category",
    "risk_level",
    "description",
    "toxicity_acute",
    "toxicity_chronic",
    "regulatory_status",
    "health_effects",
    "references",
]


@dataclasses.dataclass(frozen=True)
class ReportItem:
    id: str
    name: str
    category: Optional[str]
    risk_level: Optional[str]
    description: str
    toxicity_acute: str
    toxicity_chronic: str
    regulatory_status: Tuple[Tuple[str, str], ...]
    health_effects: Tuple[str, ...]
    references: Tuple[str, ...]


@dataclasses.dataclass(frozen=True)
class ScanReport:
    items: Tuple[ReportItem, ...] = ()
    allergy_alerts: Tuple[str, ...] = ()

    @property
    def count(self) -> int:
        return len(self.items)

    @property
    def all_clear(self) -> bool:
        return not self.items

    @property
    def title(self) -> str:
        if self.all_clear:
            return ALL_CLEAR_TITLE
        plural = "s" if self.count > 1 else ""
        return f"{self.count} harmful item{plural} detected"

    @property
    def message(self) -> str:
        if self.all_clear:
            return ALL_CLEAR_MESSAGE
        return "Contains: " + ", ".join(item.name for item in self.items)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "message": self.message,
            "count": self.count,
            "all_clear": self.all_clear,
            "allergy_alerts": list(self.allergy_alerts),
            "items": [
                {
                    **dataclasses.asdict(item),
                    "regulatory_status": dict(item.regulatory_status),
                    "health_effects": list(item.health_effects),
                    "references": list(item.references),
                }
                for item in self.items
            ],
        }


def report_item(record: IngredientRecord) -> ReportItem:
    toxicity = record.toxicity
    return ReportItem(
        id=record.id,
        name=record.name,
        category=record.category,
        risk_level=record.risk_level.value if record.risk_level else None,
        description=record.description or "",
        toxicity_acute=(toxicity and toxicity.acute) or NOT_AVAILABLE,
        toxicity_chronic=(toxicity and toxicity.chronic) or NOT_AVAILABLE,
        regulatory_status=record.regulatory_status,
        health_effects=record.health_effects,
        references=record.references,
    )


def build_report(
    records: Iterable[IngredientRecord], allergy_alerts: Sequence[str] = ()
) -> ScanReport:
    """Assemble the report for one scan.

    Args:
        records: Matched ingredient records, already deduplicated.
        allergy_alerts: Allergy strings found in the scan.

    Returns:
        A ScanReport; with no records it is the "all clear" report.
    """
    return ScanReport(
        items=tuple(report_item(record) for record in records),
        allergy_alerts=tuple(allergy_alerts),
    )


def report_to_dataframe(report: ScanReport) -> pd.DataFrame:
    """One row per matched ingredient; list fields are joined with "; "."""
    rows: List[Dict[str, Any]] = []
    for item in report.items:
        rows.append(
            {
                "id": item.id,
                "name": item.name,
                "category": item.category or "",
                "risk_level": item.risk_level or "",
                "description": item.description,
                "toxicity_acute": item.toxicity_acute,
                "toxicity_chronic": item.toxicity_chronic,
                "regulatory_status": "; ".join(
                    f"{jurisdiction}: {status}"
                    for jurisdiction, status in item.regulatory_status
                ),
                "health_effects": "; ".join(item.health_effects),
                "references": "; ".join(item.references),
            }
        )
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)
