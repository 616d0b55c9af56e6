# catalog/__init__.py
"""
Book and podcast catalog reconciliation pipeline.

Primary interfaces:
- BookMetadataEnricher: Google Books + Open Library into one canonical book record
- PodcastFeedLoader: vendor URL or feed URL into a normalized podcast feed
- FacetClassifier: rule-based book classification

Building blocks:
- parse_isbn / validate_isbn: identifier normalization
- SourceQueryPlanner, FieldReconciler: query planning and field-level merging
- FeedResolver, RegexFeedParser: feed URL resolution and tolerant RSS extraction
"""

from .config import Settings
from .errors import CatalogError, ResolutionError, ValidationError, SourceUnavailable
from .models import (
    BookQuery,
    RawSourceRecord,
    NormalizedBookMetadata,
    BookEnrichment,
    FeedEpisode,
    NormalizedPodcastFeed,
    FeedSource,
    ResolvedFeed,
    PodcastSearchResult,
    ClassificationLabels,
    BookFacets,
)
from .identifiers import parse_isbn, validate_isbn, require_valid_isbn, clean_isbn, format_authors
from .api_caller import APICaller
from .planner import SourceQueryPlanner, QueryPlan
from .reconciler import FieldReconciler, DEFAULT_PRECEDENCE
from .book_enricher import BookMetadataEnricher
from .feeds import FeedResolver, FeedParser, RegexFeedParser, PodcastFeedLoader, PodcastDirectory
from .classification import FacetClassifier, Taxonomy, load_taxonomy, FacetCSVProcessor

__all__ = [
    # Primary interface
    "BookMetadataEnricher",
    "PodcastFeedLoader",
    "PodcastDirectory",
    "FacetClassifier",
    "FacetCSVProcessor",

    # Models
    "BookQuery",
    "RawSourceRecord",
    "NormalizedBookMetadata",
    "BookEnrichment",
    "FeedEpisode",
    "NormalizedPodcastFeed",
    "FeedSource",
    "ResolvedFeed",
    "PodcastSearchResult",
    "ClassificationLabels",
    "BookFacets",

    # Building blocks
    "Settings",
    "APICaller",
    "parse_isbn",
    "validate_isbn",
    "require_valid_isbn",
    "clean_isbn",
    "format_authors",
    "SourceQueryPlanner",
    "QueryPlan",
    "FieldReconciler",
    "DEFAULT_PRECEDENCE",
    "FeedResolver",
    "FeedParser",
    "RegexFeedParser",
    "Taxonomy",
    "load_taxonomy",

    # Errors
    "CatalogError",
    "ResolutionError",
    "ValidationError",
    "SourceUnavailable",
]
