"""Loading and holding the harmful-ingredient dictionary."""

import json
import logging
import os
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from clarivana_utils.remote import fetch_json

from .models import IngredientRecord, RiskLevel, Toxicity

logger = logging.getLogger(__name__)

DEFAULT_DICTIONARY_FILE = os.path.join(
    os.path.dirname(__file__), "data", "harmful_ingredients.json"
)

# Hosted dictionaries wrap the record list in this field.
ENVELOPE_FIELD = "harmfulIngredients"


class IngredientDictionary:
    """Immutable, ordered collection of ingredient records keyed by id.

    An empty dictionary stands for "not loaded yet": scanning against it is
    valid and simply matches nothing.
    """

    def __init__(self, records: Iterable[IngredientRecord] = ()):
        by_id: Dict[str, IngredientRecord] = {}
        for record in records:
            if record.id in by_id:
                logger.warning(
                    f"Duplicate ingredient id '{record.id}' ({record.name}); keeping the first entry"
                )
                continue
            by_id[record.id] = record
        self._by_id = by_id
        self._records: Tuple[IngredientRecord, ...] = tuple(by_id.values())

    @classmethod
    def empty(cls) -> "IngredientDictionary":
        return cls()

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[IngredientRecord]:
        return iter(self._records)

    def __contains__(self, ingredient_id) -> bool:
        return ingredient_id in self._by_id

    def __repr__(self) -> str:
        return f"IngredientDictionary({len(self)} records)"

    @property
    def records(self) -> Tuple[IngredientRecord, ...]:
        return self._records

    def get(self, ingredient_id: str) -> Optional[IngredientRecord]:
        return self._by_id.get(ingredient_id)


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _strings(values: Any) -> Tuple[str, ...]:
    if not isinstance(values, (list, tuple)):
        return ()
    return tuple(t for t in (_text(v) for v in values) if t)


def _health_effects(values: Any) -> Tuple[str, ...]:
    """Effects are stored either as strings or as {"effect": ...} objects."""
    if not isinstance(values, (list, tuple)):
        return ()
    effects = []
    for value in values:
        if isinstance(value, Mapping):
            value = value.get("effect")
        text = _text(value)
        if text:
            effects.append(text)
    return tuple(effects)


def _toxicity(value: Any) -> Optional[Toxicity]:
    if not isinstance(value, Mapping):
        return None
    return Toxicity(acute=_text(value.get("acute")), chronic=_text(value.get("chronic")))


def _regulatory_status(value: Any) -> Tuple[Tuple[str, str], ...]:
    if not isinstance(value, Mapping):
        return ()
    return tuple(
        (str(jurisdiction), str(status))
        for jurisdiction, status in value.items()
        if status is not None
    )


def record_from_dict(entry: Any) -> Optional[IngredientRecord]:
    """Build an IngredientRecord from one raw JSON entry.

    Args:
        entry: A mapping using the dictionary file's camelCase keys
            (``id``, ``name``, ``aliases``, ``riskLevel``, ``regulatoryStatus``...).

    Returns:
        The record, or None when the entry is not a mapping or lacks a
        ``name`` or ``id``.
    """
    if not isinstance(entry, Mapping):
        return None
    name = _text(entry.get("name"))
    ingredient_id = _text(entry.get("id"))
    if not name or not ingredient_id:
        return None

    return IngredientRecord(
        id=ingredient_id,
        name=name,
        aliases=_strings(entry.get("aliases")),
        category=_text(entry.get("category")),
        risk_level=RiskLevel.parse(entry.get("riskLevel")),
        description=_text(entry.get("description")),
        toxicity=_toxicity(entry.get("toxicity")),
        regulatory_status=_regulatory_status(entry.get("regulatoryStatus")),
        health_effects=_health_effects(entry.get("healthEffects")),
        references=_strings(entry.get("references")),
    )


def parse_records(payload: Any) -> IngredientDictionary:
    """Turn a decoded dictionary document into an IngredientDictionary.

    Accepts either the list of records itself or a mapping holding that list
    under ``harmfulIngredients``. Malformed entries are skipped with a warning
    so that one bad record never prevents matching against the others.
    """
    if isinstance(payload, Mapping):
        payload = payload.get(ENVELOPE_FIELD)
    if not isinstance(payload, (list, tuple)):
        logger.warning(
            f"Ingredient dictionary payload is not a list of records ({type(payload).__name__}); "
            "using an empty dictionary"
        )
        return IngredientDictionary.empty()

    records: List[IngredientRecord] = []
    for index, entry in enumerate(payload):
        record = record_from_dict(entry)
        if record is None:
            logger.warning(f"Skipping malformed ingredient entry #{index}")
            continue
        records.append(record)

    dictionary = IngredientDictionary(records)
    logger.info(f"Loaded {len(dictionary)} ingredient records")
    return dictionary


def load_dictionary(
    path: Union[str, os.PathLike] = DEFAULT_DICTIONARY_FILE,
) -> IngredientDictionary:
    """Load an ingredient dictionary from a JSON file.

    Raises:
        FileNotFoundError: The file does not exist.
        ValueError: The file is not valid JSON.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Missing ingredient dictionary: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e
    return parse_records(payload)


def load_dictionary_from_url(url: str, timeout: float = 10.0) -> IngredientDictionary:
    """Download and parse a hosted ingredient dictionary.

    Connection errors are retried; HTTP errors and invalid JSON propagate.
    """
    logger.info(f"Fetching ingredient dictionary from {url}")
    return parse_records(fetch_json(url, timeout=timeout))
