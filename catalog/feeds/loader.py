# catalog/feeds/loader.py
"""
Podcast feed loading: resolve the feed URL, then read it from Podcast Index or the raw RSS.
"""

import logging
from typing import Optional

from ..api_caller import APICaller
from ..config import Settings
from ..models.podcast import FeedSource, NormalizedPodcastFeed
from .parser import FeedParser, RegexFeedParser
from .podcast_index import PodcastIndexClient, show_to_feed
from .resolver import FeedResolver


class PodcastFeedLoader:
    """
    End-to-end loader for one podcast.

    Podcast Index is preferred when credentials are configured; if it has no
    record of the show (by feed URL, then by iTunes id) or fails, the feed is
    fetched and parsed directly.
    """

    def __init__(self, settings: Optional[Settings] = None, api_caller: Optional[APICaller] = None,
                 parser: Optional[FeedParser] = None):
        self.settings = settings or (api_caller.settings if api_caller else Settings())
        self.api_caller = api_caller
        self._owns_caller = api_caller is None
        self.parser = parser or RegexFeedParser()
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

    async def load(self, source: FeedSource) -> Optional[NormalizedPodcastFeed]:
        """
        Resolve and read a podcast feed.

        Returns:
            The normalized feed, or None when the feed document could not be fetched

        Raises:
            ResolutionError: if no feed URL can be resolved from the input
        """
        resolved = await FeedResolver(self.api_caller).resolve(source)

        index = PodcastIndexClient(self.api_caller)
        if index.configured:
            show = await index.podcast_by_feed_url(resolved.feed_url)
            if not show and resolved.itunes_id:
                show = await index.podcast_by_itunes_id(resolved.itunes_id)

            if show:
                episodes = await index.episodes(show["id"], self.parser_limit)
                self.logger.info(f"Loaded {resolved.feed_url} from Podcast Index ({len(episodes)} episodes)")
                return show_to_feed(show, episodes, resolved.feed_url, self.parser_limit)

            self.logger.info(f"Podcast Index has no show for {resolved.feed_url}, reading RSS")

        xml = await self.api_caller.get_text("rss_feed", resolved.feed_url)
        if xml is None:
            self.logger.warning(f"Failed to fetch feed {resolved.feed_url}")
            return None

        feed = self.parser.parse(xml)
        feed.feed_url = resolved.feed_url
        self.logger.info(f"Parsed {resolved.feed_url}: {len(feed.episodes)} episodes")
        return feed

    @property
    def parser_limit(self) -> int:
        return getattr(self.parser, "max_episodes", 50)
