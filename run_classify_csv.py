#!/usr/bin/env python3
"""
Fill missing facet columns for every book in a CSV export.

Usage:
    python run_classify_csv.py books.csv books_classified.csv [--taxonomy custom.json]
"""

import argparse
import logging

from catalog import FacetClassifier, FacetCSVProcessor, load_taxonomy

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


def main(args: argparse.Namespace) -> None:
    classifier = FacetClassifier(load_taxonomy(args.taxonomy))
    processor = FacetCSVProcessor(classifier)

    print("📚 Starting book facet fill...")
    updated, skipped = processor.process_csv(args.input, args.output, sample_size=args.sample)

    print("\n✅ Facet fill complete!")
    print(f"Updated: {updated} books")
    print(f"Skipped: {skipped} books (already had facets or invalid input)")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Batch-fill book facets in a CSV file")
    parser.add_argument("input")
    parser.add_argument("output")
    parser.add_argument("--taxonomy", help="Path to a taxonomy JSON file")
    parser.add_argument("--sample", type=int, help="Only process the first N rows")
    main(parser.parse_args())
