#!/usr/bin/env python3
"""
Scan OCR text from a food label for harmful ingredients and allergens.
Reads the text from a file (or stdin), prints the report and optionally
stores the scan in a history database.
"""

import argparse
import json
import logging
import sys

from clarivana_utils.database import get_connection, save_scan_result
from clarivana_utils.ingredients import (
    DEFAULT_DICTIONARY_FILE,
    IngredientResolver,
    load_dictionary,
    load_dictionary_from_url,
    scan_label_text,
)

logging.basicConfig(
    level=logging.WARNING, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def print_report(outcome) -> None:
    report = outcome.report
    if outcome.allergy_alerts:
        print(f"⚠️ Allergy Alert! Contains: {', '.join(outcome.allergy_alerts)}")

    print(report.title)
    if report.all_clear:
        print(f"  {report.message}")
        return

    for item in report.items:
        print(f"\n  {item.name} [{item.id}]")
        print(f"    {item.category or 'Uncategorized'} • {item.risk_level or 'Unknown risk'}")
        if item.description:
            print(f"    {item.description}")
        print(f"    Toxicity - acute: {item.toxicity_acute}, chronic: {item.toxicity_chronic}")
        for jurisdiction, status in item.regulatory_status:
            print(f"    {jurisdiction}: {status}")
        for effect in item.health_effects:
            print(f"    - {effect}")
        for reference in item.references:
            print(f"    {reference}")


def main():
    parser = argparse.ArgumentParser(
        description="Detect harmful ingredients in scanned label text"
    )
    parser.add_argument(
        "text_file",
        nargs="?",
        help="File holding the OCR text (default: read from stdin)",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--dictionary",
        type=str,
        default=DEFAULT_DICTIONARY_FILE,
        help="Path to the ingredient dictionary JSON (default: bundled dictionary)",
    )
    source.add_argument(
        "--dictionary-url",
        type=str,
        help="URL of a hosted ingredient dictionary JSON",
    )
    parser.add_argument(
        "--allergy",
        action="append",
        default=[],
        help="Allergen to look for; repeat for several",
    )
    parser.add_argument(
        "--history-db",
        type=str,
        help="Store the scan in this SQLite history database",
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the report as JSON"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.dictionary_url:
        dictionary = load_dictionary_from_url(args.dictionary_url)
    else:
        dictionary = load_dictionary(args.dictionary)

    if args.text_file:
        with open(args.text_file, "r", encoding="utf-8") as f:
            raw_text = f.read()
    else:
        raw_text = sys.stdin.read()

    outcome = scan_label_text(raw_text, IngredientResolver(dictionary), args.allergy)

    if args.history_db:
        conn = get_connection(args.history_db)
        try:
            save_scan_result(
                conn, outcome.raw_text, outcome.allergy_alerts, outcome.matched_ids
            )
        finally:
            conn.close()
        logger.info(f"Saved scan to {args.history_db}")

    if args.json:
        print(json.dumps(outcome.report.to_dict(), indent=2, ensure_ascii=False))
    else:
        print_report(outcome)


if __name__ == "__main__":
    main()
