import dataclasses
import enum
from typing import Dict, Iterator, Optional, Tuple


class RiskLevel(enum.Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"

    @classmethod
    def parse(cls, value) -> Optional["RiskLevel"]:
        """Map a dictionary value such as "high" or "High" to a RiskLevel."""
        if value is None:
            return None
        text = str(value).strip().lower()
        for level in cls:
            if level.value.lower() == text:
                return level
        return None


@dataclasses.dataclass(frozen=True)
class Toxicity:
    acute: Optional[str] = None
    chronic: Optional[str] = None


@dataclasses.dataclass(frozen=True)
class IngredientRecord:
    """One entry of the harmful-ingredient dictionary."""

    id: str
    name: str
    aliases: Tuple[str, ...] = ()
    category: Optional[str] = None
    risk_level: Optional[RiskLevel] = None
    description: Optional[str] = None
    toxicity: Optional[Toxicity] = None
    regulatory_status: Tuple[Tuple[str, str], ...] = ()
    health_effects: Tuple[str, ...] = ()
    references: Tuple[str, ...] = ()

    @property
    def regulatory_status_map(self) -> Dict[str, str]:
        return dict(self.regulatory_status)


@dataclasses.dataclass(frozen=True)
class MatchResult:
    ids: Tuple[str, ...] = ()
    records: Tuple[IngredientRecord, ...] = ()
    allergy_alerts: Tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.ids)

    def __iter__(self) -> Iterator[str]:
        return iter(self.ids)

    def __contains__(self, ingredient_id) -> bool:
        return ingredient_id in self.ids

    def with_allergy_alerts(self, alerts) -> "MatchResult":
        return dataclasses.replace(self, allergy_alerts=tuple(alerts))
