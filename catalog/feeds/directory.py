# catalog/feeds/directory.py
"""
Podcast directory search: Podcast Index first, iTunes Search as the fallback.
"""

import logging
from typing import Dict, List

from ..api_caller import APICaller
from ..errors import ValidationError
from ..models.podcast import PodcastSearchResult
from .podcast_index import PodcastIndexClient

MIN_QUERY_LENGTH = 2


class PodcastDirectory:
    """Search shows by term across the configured podcast directories"""

    def __init__(self, api_caller: APICaller, limit: int = 10):
        self.api_caller = api_caller
        self.limit = limit
        self.logger = logging.getLogger(self.__class__.__name__)

    async def search(self, query: str) -> List[PodcastSearchResult]:
        """
        Raises:
            ValidationError: if the query is shorter than two characters
        """
        term = (query or "").strip()
        if len(term) < MIN_QUERY_LENGTH:
            raise ValidationError(f"Query must be at least {MIN_QUERY_LENGTH} characters")

        results: List[PodcastSearchResult] = []

        index = PodcastIndexClient(self.api_caller)
        if index.configured:
            results = [_from_index(feed) for feed in await index.search_podcasts(term, self.limit)]
            self.logger.info(f"Podcast Index: {len(results)} results for {term!r}")

        if not results:
            data = await self.api_caller.get_json(
                "itunes_search", self.api_caller.settings.itunes_search_url,
                {"term": term, "media": "podcast", "limit": self.limit},
            )
            items = data.get("results") if isinstance(data, dict) else None
            results = [_from_itunes(item) for item in items or []]
            self.logger.info(f"iTunes Search: {len(results)} results for {term!r}")

        return results


def _from_index(feed: Dict) -> PodcastSearchResult:
    categories = feed.get("categories") or {}
    return PodcastSearchResult(
        name=feed.get("title") or "",
        author=feed.get("author") or "",
        artwork_url=feed.get("image") or "",
        feed_url=feed.get("url") or "",
        itunes_id=feed.get("itunesId") or None,
        episode_count=feed.get("episodeCount") or 0,
        categories=list(categories.values()) if isinstance(categories, dict) else [],
    )


def _from_itunes(item: Dict) -> PodcastSearchResult:
    return PodcastSearchResult(
        name=item.get("collectionName") or item.get("trackName") or "",
        author=item.get("artistName") or "",
        artwork_url=item.get("artworkUrl600") or item.get("artworkUrl100") or "",
        feed_url=item.get("feedUrl") or "",
        itunes_id=item.get("collectionId") or None,
        episode_count=item.get("trackCount") or 0,
        categories=[genre for genre in [item.get("primaryGenreName")] if genre],
    )
