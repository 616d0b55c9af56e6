# catalog/planner.py
"""
Source query planning: which key to search with and whether the secondary catalog is needed.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from .identifiers import parse_isbn
from .models.book import RawSourceRecord, NormalizedBookMetadata, QUERY


@dataclass(frozen=True)
class QueryPlan:
    """Parsed caller query and the key the primary catalog is searched with"""
    query: str
    search_key: str
    isbn10: Optional[str] = None
    isbn13: Optional[str] = None

    @property
    def identifier(self) -> Optional[str]:
        return self.isbn13 or self.isbn10

    def query_record(self) -> RawSourceRecord:
        """Identifiers parsed from the query, as a low-priority source record"""
        return RawSourceRecord(source=QUERY, isbn10=self.isbn10, isbn13=self.isbn13)


class SourceQueryPlanner:
    """
    Decides the search key and the secondary catalog lookup.

    Search key preference: normalized ISBN-13, then ISBN-10, then the raw text.
    The secondary catalog is only consulted when the primary result lacks a
    title, a description, or authors.
    """

    CORE_FIELDS = ("title", "description", "authors")

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def plan(self, query: str) -> QueryPlan:
        query = (query or "").strip()
        parsed = parse_isbn(query)
        search_key = parsed["isbn13"] or parsed["isbn10"] or query

        self.logger.debug(f"Search key for {query!r}: {search_key!r}")
        return QueryPlan(query=query, search_key=search_key, **parsed)

    def needs_secondary(self, partial: NormalizedBookMetadata) -> bool:
        """True if any of title, description, authors is still missing"""
        missing = [name for name in self.CORE_FIELDS if not getattr(partial, name)]
        if missing:
            self.logger.debug(f"Secondary catalog needed for: {', '.join(missing)}")
        return bool(missing)

    def secondary_lookup(self, plan: QueryPlan,
                         partial: Optional[NormalizedBookMetadata] = None) -> Dict[str, str]:
        """
        Arguments for the secondary catalog search.

        An identifier-keyed lookup is preferred over free text whenever any
        identifier is known, whether parsed from the query or returned by the
        primary catalog.

        Returns:
            {"isbn": ...} or {"query": ...}
        """
        partial = partial or NormalizedBookMetadata()
        isbn = partial.isbn13 or plan.isbn13 or partial.isbn10 or plan.isbn10
        if isbn:
            return {"isbn": isbn}
        return {"query": plan.search_key}
