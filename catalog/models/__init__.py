"""
Data models for the catalog pipeline.
"""

from .book import BookQuery, RawSourceRecord, NormalizedBookMetadata, BookEnrichment
from .podcast import (
    FeedEpisode,
    NormalizedPodcastFeed,
    FeedSource,
    ResolvedFeed,
    PodcastSearchResult,
)
from .facets import ClassificationLabels, BookFacets

__all__ = [
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
]
