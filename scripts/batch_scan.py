#!/usr/bin/env python3
"""
Run the harmful-ingredient scan over a CSV of OCR texts.
Writes one summary row per scan and one detail row per matched ingredient.
"""

import argparse
import datetime
import logging
from typing import Sequence, Tuple

import pandas as pd
from tqdm.auto import tqdm

from clarivana_utils.ingredients import (
    DEFAULT_DICTIONARY_FILE,
    IngredientResolver,
    load_dictionary,
    report_to_dataframe,
    scan_label_text,
)

logging.basicConfig(
    level=logging.WARNING, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def scan_frame(
    df: pd.DataFrame,
    resolver: IngredientResolver,
    text_column: str = "text",
    id_column: str = "scan_id",
    allergies: Sequence[str] = (),
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Scan every row of ``df``.

    Args:
        df: Input rows; ``text_column`` holds the OCR text
        resolver: Resolver bound to the loaded dictionary
        text_column: Column with the OCR text
        id_column: Column identifying each scan; the row index is used when absent
        allergies: Allergens checked in every scan

    Returns:
        Tuple of (summary, details) DataFrames
    """
    summary_rows = []
    detail_frames = []

    for index, row in tqdm(df.iterrows(), total=len(df)):
        scan_id = row[id_column] if id_column in df.columns else index
        text = row[text_column]
        outcome = scan_label_text(text if isinstance(text, str) else "", resolver, allergies)

        summary_rows.append(
            {
                "scan_id": scan_id,
                "match_count": outcome.report.count,
                "matched_ids": ";".join(outcome.matched_ids),
                "allergy_alerts": ";".join(outcome.allergy_alerts),
                "all_clear": outcome.report.all_clear,
            }
        )
        details = report_to_dataframe(outcome.report)
        if not details.empty:
            details.insert(0, "scan_id", scan_id)
            detail_frames.append(details)

    summary = pd.DataFrame(summary_rows)
    details = (
        pd.concat(detail_frames, ignore_index=True) if detail_frames else pd.DataFrame()
    )
    return summary, details


def main():
    parser = argparse.ArgumentParser(
        description="Scan a CSV of label texts for harmful ingredients"
    )
    parser.add_argument("input_csv", help="CSV file with one OCR text per row")
    parser.add_argument(
        "--text-column",
        type=str,
        default="text",
        help="Column holding the OCR text (default: text)",
    )
    parser.add_argument(
        "--id-column",
        type=str,
        default="scan_id",
        help="Column identifying each scan (default: scan_id, falls back to row number)",
    )
    parser.add_argument(
        "--dictionary",
        type=str,
        default=DEFAULT_DICTIONARY_FILE,
        help="Path to the ingredient dictionary JSON (default: bundled dictionary)",
    )
    parser.add_argument(
        "--allergy",
        action="append",
        default=[],
        help="Allergen to look for; repeat for several",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=".",
        help="Directory to write output CSV files (default: current directory)",
    )
    args = parser.parse_args()

    df = pd.read_csv(args.input_csv)
    if args.text_column not in df.columns:
        logger.error(f"Column '{args.text_column}' not found in {args.input_csv}")
        exit(1)

    resolver = IngredientResolver(load_dictionary(args.dictionary))
    print(f"Scanning {len(df)} texts against {len(resolver.dictionary)} ingredients...")
    summary, details = scan_frame(
        df, resolver, args.text_column, args.id_column, args.allergy
    )

    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    summary_file = f"{args.output_dir}/scan_summary_{timestamp}.csv"
    details_file = f"{args.output_dir}/scan_matches_{timestamp}.csv"
    summary.to_csv(summary_file, index=False)
    print(f"Wrote {len(summary)} scan summaries to {summary_file}")
    if not details.empty:
        details.to_csv(details_file, index=False)
        print(f"Wrote {len(details)} matched ingredients to {details_file}")
    else:
        print("No harmful ingredients found in any scan.")

    flagged = int((~summary["all_clear"]).sum()) if not summary.empty else 0
    print(f"\nSummary:")
    print(f"  Scans processed: {len(summary)}")
    print(f"  Scans with harmful ingredients: {flagged}")
    if len(summary) > 0:
        print(f"  Flag rate: {flagged / len(summary) * 100:.1f}%")


if __name__ == "__main__":
    main()
