"""Harmful-ingredient matching for scanned label text."""

from .config import DEFAULT_CONFIG, GENERIC_BLACKLIST, MatchingConfig
from .dictionary import (
    DEFAULT_DICTIONARY_FILE,
    IngredientDictionary,
    load_dictionary,
    load_dictionary_from_url,
    parse_records,
)
from .fuzzy import conservative_fuzzy_match, levenshtein
from .models import IngredientRecord, MatchResult, RiskLevel, Toxicity
from .normalization import normalize_text, tokenize
from .phrases import has_whole_phrase, numeric_variants
from .report import ReportItem, ScanReport, build_report, report_to_dataframe
from .resolver import IngredientResolver, find_allergy_alerts
from .scanning import ScanOutcome, scan_label_text

__all__ = [
    "DEFAULT_CONFIG",
    "GENERIC_BLACKLIST",
    "MatchingConfig",
    "DEFAULT_DICTIONARY_FILE",
    "IngredientDictionary",
    "load_dictionary",
    "load_dictionary_from_url",
    "parse_records",
    "conservative_fuzzy_match",
    "levenshtein",
    "IngredientRecord",
    "MatchResult",
    "RiskLevel",
    "Toxicity",
    "normalize_text",
    "tokenize",
    "has_whole_phrase",
    "numeric_variants",
    "ReportItem",
    "ScanReport",
    "build_report",
    "report_to_dataframe",
    "IngredientResolver",
    "find_allergy_alerts",
    "ScanOutcome",
    "scan_label_text",
]
