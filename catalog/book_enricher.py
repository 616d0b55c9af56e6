# catalog/book_enricher.py
"""
Async book metadata enricher: query planning, catalog fetches, and reconciliation.
"""

import asyncio
import logging
import time
from typing import List, Optional, Union

from .api_caller import APICaller
from .config import Settings
from .fetchers import fetch_google_data, search_open_library, fetch_edition_data, fetch_work_data
from .models.book import BookQuery, BookEnrichment, RawSourceRecord, MANUAL
from .planner import SourceQueryPlanner, QueryPlan
from .processors import (
    process_google_response,
    process_search_doc,
    process_edition,
    process_work,
    edition_keys,
)
from .reconciler import FieldReconciler, record_from_fields

MAX_EDITION_LOOKUPS = 3


class BookMetadataEnricher:
    """
    Builds a canonical book record from Google Books (primary) and Open Library (secondary).

    Features:
    - Google Books first; Open Library only when title, description or authors are missing
    - Description fallback through up to 3 Open Library editions, then the work
    - Optional speculative mode issuing both catalog searches concurrently
    - Batch processing with a concurrency limit, preserving input order

    Any source that fails is treated as absent; the result is then built from
    whatever succeeded, down to the caller's manual fields alone.
    """

    def __init__(self, settings: Optional[Settings] = None, api_caller: Optional[APICaller] = None,
                 planner: Optional[SourceQueryPlanner] = None, reconciler: Optional[FieldReconciler] = None,
                 max_concurrent: int = 10, concurrent_sources: bool = False):
        self.settings = settings or (api_caller.settings if api_caller else Settings())
        self.api_caller = api_caller
        self._owns_caller = api_caller is None
        self.planner = planner or SourceQueryPlanner()
        self.reconciler = reconciler or FieldReconciler(covers_url=self.settings.openlibrary_covers_url)
        self.max_concurrent = max_concurrent
        self.concurrent_sources = concurrent_sources
        self.semaphore = asyncio.Semaphore(max_concurrent)
        self.logger = logging.getLogger(self.__class__.__name__)

    async def __aenter__(self):
        """Async context manager entry"""
        if self.api_caller is None:
            self.api_caller = APICaller(self.settings)
        if self._owns_caller:
            await self.api_caller.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        if self.api_caller and self._owns_caller:
            await self.api_caller.__aexit__(exc_type, exc_val, exc_tb)

    async def enrich_many(self, requests: List[Union[BookQuery, str]]) -> List[BookEnrichment]:
        """
        Enrich a batch of books concurrently.

        Returns:
            One BookEnrichment per request, in request order
        """
        self.logger.info(f"Starting async enrichment of {len(requests)} books")
        start_time = time.time()

        async def bounded(request):
            async with self.semaphore:
                return await self.enrich(request)

        results = await asyncio.gather(*(bounded(request) for request in requests))

        elapsed = time.time() - start_time
        self.logger.info(f"Batch complete! {len(requests)} books in {elapsed:.1f}s")
        return list(results)

    async def enrich(self, request: Union[BookQuery, str]) -> BookEnrichment:
        """
        Enrich a single book.

        Args:
            request: A BookQuery, or a bare ISBN / free-text query

        Returns:
            BookEnrichment whose metadata is the reconciled canonical record
        """
        if isinstance(request, str):
            request = BookQuery(query=request)

        enrichment = BookEnrichment(request=request)
        plan = self.planner.plan(request.query)
        enrichment.search_key = plan.search_key
        enrichment.add_log(f"Search key: {plan.search_key}")

        enrichment.records.append(plan.query_record())
        if request.manual:
            enrichment.records.append(record_from_fields(MANUAL, request.manual))
            enrichment.add_log(f"Manual fields: {', '.join(sorted(request.manual))}")

        if self.concurrent_sources:
            await self._fetch_catalogs_concurrently(enrichment, plan)
        else:
            await self._fetch_catalogs_in_order(enrichment, plan)

        await self._fetch_nested_fallbacks(enrichment)

        enrichment.metadata, provenance = self.reconciler.reconcile_with_provenance(enrichment.records)
        self.logger.info(
            f"[METADATA] {request.query!r}: title={bool(enrichment.metadata.title)}, "
            f"description={bool(enrichment.metadata.description)}, "
            f"authors={bool(enrichment.metadata.authors)}, "
            f"cover={bool(enrichment.metadata.thumbnail_url)}"
        )
        enrichment.add_log(f"Sources used: {sorted({s for s in provenance.values() if s})}")
        return enrichment

    async def _fetch_catalogs_in_order(self, enrichment: BookEnrichment, plan: QueryPlan) -> None:
        google_data = await fetch_google_data(plan.search_key, self.api_caller)
        self._add_google(enrichment, google_data)

        partial = self.reconciler.reconcile(enrichment.records)
        if not self.planner.needs_secondary(partial):
            enrichment.add_log("Open Library: Not needed")
            return

        lookup = self.planner.secondary_lookup(plan, partial)
        search_data = await search_open_library(self.api_caller, **lookup)
        self._add_open_library(enrichment, search_data)

    async def _fetch_catalogs_concurrently(self, enrichment: BookEnrichment, plan: QueryPlan) -> None:
        """
        Speculative mode: both searches in flight at once.

        The secondary result is dropped when the primary turns out complete, so the
        merged record matches what the in-order strategy produces. When the primary
        returns an identifier the query did not carry, the speculative search was
        keyed wrongly and is reissued with that identifier.
        """
        speculative_lookup = self.planner.secondary_lookup(plan)
        google_data, search_data = await asyncio.gather(
            fetch_google_data(plan.search_key, self.api_caller),
            search_open_library(self.api_caller, **speculative_lookup),
        )
        self._add_google(enrichment, google_data)

        partial = self.reconciler.reconcile(enrichment.records)
        if not self.planner.needs_secondary(partial):
            enrichment.add_log("Open Library: Not needed")
            return

        lookup = self.planner.secondary_lookup(plan, partial)
        if lookup != speculative_lookup:
            enrichment.add_log(f"Open Library: Speculative search discarded, searching by {lookup}")
            search_data = await search_open_library(self.api_caller, **lookup)
        self._add_open_library(enrichment, search_data)

    async def _fetch_nested_fallbacks(self, enrichment: BookEnrichment) -> None:
        """Editions (up to 3, in order), then the work, while the description is missing"""
        docs = (enrichment.openlib_search_response or {}).get("docs") or []
        if not docs:
            return
        first_doc = docs[0]

        def description_missing() -> bool:
            value, _ = self.reconciler.resolve_field("description", enrichment.records)
            return value is None

        for sequence, key in enumerate(edition_keys(first_doc, MAX_EDITION_LOOKUPS)):
            if not description_missing():
                return
            edition = await fetch_edition_data(key, self.api_caller)
            if not edition:
                continue
            enrichment.openlib_edition_responses.append(edition)
            record = self._process(enrichment, "Open Library edition", process_edition, edition, sequence)
            if record:
                enrichment.records.append(record)
                if record.description:
                    enrichment.add_log(f"Open Library: Description from edition {key}")

        if description_missing() and first_doc.get("key"):
            work = await fetch_work_data(first_doc["key"], self.api_caller)
            if work:
                enrichment.openlib_work_response = work
                record = self._process(enrichment, "Open Library work", process_work, work)
                if record:
                    enrichment.records.append(record)
                    if record.description:
                        enrichment.add_log("Open Library: Description from work")

    def _add_google(self, enrichment: BookEnrichment, google_data) -> None:
        if not google_data:
            enrichment.add_log("Google Books: No data")
            return

        enrichment.google_response = google_data
        record = self._process(enrichment, "Google Books", process_google_response, google_data)
        if record:
            enrichment.records.append(record)
            enrichment.add_log(f"Google Books: Found {record.title!r}")

    def _add_open_library(self, enrichment: BookEnrichment, search_data) -> None:
        if not search_data:
            enrichment.add_log("Open Library: No data")
            return

        enrichment.openlib_search_response = search_data
        record = self._process(
            enrichment, "Open Library", process_search_doc,
            search_data["docs"][0], self.settings.openlibrary_covers_url,
        )
        if record:
            enrichment.records.append(record)
            enrichment.add_log(f"Open Library: Found {record.title!r}")

    def _process(self, enrichment: BookEnrichment, label: str, processor, *args) -> Optional[RawSourceRecord]:
        """Run a response processor; a malformed payload counts as an absent source"""
        try:
            return processor(*args)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            self.logger.warning(f"{label} processing error: {e}")
            enrichment.add_log(f"{label} processing error: {e}")
            return None
