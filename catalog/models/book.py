# catalog/models/book.py
"""
Data models for the book metadata reconciliation pipeline.
"""

from dataclasses import dataclass, field, asdict
from typing import List, Dict, Optional, Any


# Source tags, highest priority first in the default precedence table
MANUAL = "manual"
GOOGLE_BOOKS = "google_books"
QUERY = "query"
OPEN_LIBRARY = "open_library"
OPEN_LIBRARY_EDITION = "open_library_edition"
OPEN_LIBRARY_WORK = "open_library_work"
ISBN_COVER = "isbn_cover"


@dataclass
class BookQuery:
    """What the caller asked for: a raw query plus optional manual fields"""
    query: str
    manual: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RawSourceRecord:
    """
    Partially populated fields as returned by one external catalog.
    Discarded once the canonical record has been built.
    """
    source: str
    sequence: int = 0  # order among records from the same source

    title: Optional[str] = None
    description: Optional[str] = None
    isbn10: Optional[str] = None
    isbn13: Optional[str] = None
    authors: List[str] = field(default_factory=list)
    publisher: Optional[str] = None
    published_date: Optional[str] = None
    thumbnail_url: Optional[str] = None
    page_count: Optional[int] = None
    categories: List[str] = field(default_factory=list)
    language: Optional[str] = None
    preview_link: Optional[str] = None
    info_link: Optional[str] = None

    def missing_core_fields(self) -> List[str]:
        """Names of title/description/authors that are still empty"""
        return [name for name in ("title", "description", "authors") if not getattr(self, name)]


@dataclass
class NormalizedBookMetadata:
    """Canonical book record produced by the reconciler"""
    title: Optional[str] = None
    description: Optional[str] = None
    isbn10: Optional[str] = None
    isbn13: Optional[str] = None
    authors: List[str] = field(default_factory=list)
    publisher: Optional[str] = None
    published_date: Optional[str] = None
    thumbnail_url: Optional[str] = None
    page_count: Optional[int] = None
    categories: List[str] = field(default_factory=list)
    language: Optional[str] = None
    preview_link: Optional[str] = None
    info_link: Optional[str] = None

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class BookEnrichment:
    """
    Working state for one reconciliation, progressively filled by the enricher.
    """
    request: BookQuery
    search_key: str = ""

    # Raw API responses
    google_response: Optional[Dict] = None
    openlib_search_response: Optional[Dict] = None
    openlib_edition_responses: List[Dict] = field(default_factory=list)
    openlib_work_response: Optional[Dict] = None

    records: List[RawSourceRecord] = field(default_factory=list)
    metadata: NormalizedBookMetadata = field(default_factory=NormalizedBookMetadata)

    # Processing metadata
    processing_log: List[str] = field(default_factory=list)

    def add_log(self, message: str) -> None:
        """Add a message to the processing log"""
        self.processing_log.append(message)

    def get_summary(self) -> Dict:
        """Get a summary dict for reporting"""
        return {
            "query": self.request.query,
            "search_key": self.search_key,
            "sources": sorted({record.source for record in self.records}),
            "has_title": bool(self.metadata.title),
            "has_description": bool(self.metadata.description),
            "has_authors": bool(self.metadata.authors),
            "has_cover": bool(self.metadata.thumbnail_url),
            "processing_log": self.processing_log,
        }
