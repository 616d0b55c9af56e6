#!/usr/bin/env python3
"""
Fetch and reconcile metadata for one book, then print it as JSON.

Usage:
    python run_book_metadata.py "978-0-14-044568-8"
    python run_book_metadata.py "The State and Revolution" --classify
"""

import argparse
import asyncio
import json
import logging

from catalog import BookMetadataEnricher, BookQuery, FacetClassifier, Settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


async def main(args: argparse.Namespace) -> None:
    settings = Settings.from_env()

    async with BookMetadataEnricher(settings, concurrent_sources=args.concurrent) as enricher:
        enrichment = await enricher.enrich(BookQuery(query=args.query))

    output = {"metadata": enrichment.metadata.to_dict()}

    if args.classify:
        metadata = enrichment.metadata
        labels = FacetClassifier().classify(
            metadata.title or "",
            metadata.description or "",
            metadata.authors,
            metadata.published_date,
            metadata.page_count,
        )
        output["facets"] = labels.to_dict()

    if args.verbose:
        output["summary"] = enrichment.get_summary()

    print(json.dumps(output, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Reconcile book metadata from Google Books and Open Library")
    parser.add_argument("query", help="ISBN-10, ISBN-13, or free-text title")
    parser.add_argument("--classify", action="store_true", help="Also assign facet labels")
    parser.add_argument("--concurrent", action="store_true", help="Query both catalogs at once")
    parser.add_argument("--verbose", action="store_true", help="Include the processing log")
    asyncio.run(main(parser.parse_args()))
