# catalog/feeds/podcast_index.py
"""
Podcast Index API client.
"""

import hashlib
import logging
import time
from datetime import datetime, timezone
from typing import Dict, List, Optional
from urllib.parse import quote

from ..api_caller import APICaller
from ..models.podcast import FeedEpisode, NormalizedPodcastFeed

SOURCE = "podcast_index"


def format_duration(seconds) -> str:
    """Seconds as h:mm:ss, or m:ss under an hour; "" for missing or non-positive input"""
    try:
        seconds = int(seconds or 0)
    except (TypeError, ValueError):
        return ""
    if seconds <= 0:
        return ""

    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


class PodcastIndexClient:
    """
    Authenticated read-only calls against api.podcastindex.org.

    Every request carries X-Auth-Key, X-Auth-Date and an Authorization header
    holding sha1(key + secret + epoch).
    """

    def __init__(self, api_caller: APICaller):
        self.api_caller = api_caller
        self.settings = api_caller.settings
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def configured(self) -> bool:
        return self.settings.podcast_index_configured

    def auth_headers(self, epoch: Optional[int] = None) -> Dict[str, str]:
        epoch = int(time.time()) if epoch is None else epoch
        digest = hashlib.sha1(
            f"{self.settings.podcast_index_key}{self.settings.podcast_index_secret}{epoch}".encode("utf-8")
        ).hexdigest()
        return {
            "X-Auth-Key": self.settings.podcast_index_key or "",
            "X-Auth-Date": str(epoch),
            "Authorization": digest,
            "User-Agent": self.settings.user_agent,
        }

    async def _request(self, path: str) -> Optional[Dict]:
        if not self.configured:
            return None
        data = await self.api_caller.get_json(
            SOURCE, f"{self.settings.podcast_index_url}{path}", headers=self.auth_headers()
        )
        return data if isinstance(data, dict) else None

    async def search_podcasts(self, term: str, max_results: int = 10) -> List[Dict]:
        data = await self._request(f"/search/byterm?q={quote(term)}&max={max_results}")
        return (data or {}).get("feeds") or []

    async def podcast_by_feed_url(self, feed_url: str) -> Optional[Dict]:
        data = await self._request(f"/podcasts/byfeedurl?url={quote(feed_url, safe='')}")
        feed = (data or {}).get("feed")
        return feed if isinstance(feed, dict) and feed.get("id") else None

    async def podcast_by_itunes_id(self, itunes_id: int) -> Optional[Dict]:
        data = await self._request(f"/podcasts/byitunesid?id={itunes_id}")
        feed = (data or {}).get("feed")
        return feed if isinstance(feed, dict) and feed.get("id") else None

    async def episodes(self, feed_id: int, max_results: int = 50) -> List[Dict]:
        data = await self._request(f"/episodes/byfeedid?id={feed_id}&max={max_results}")
        return (data or {}).get("items") or []


def show_to_feed(show: Dict, episodes: List[Dict], feed_url: Optional[str] = None,
                 max_episodes: int = 50) -> NormalizedPodcastFeed:
    """Convert a Podcast Index show and its episodes into a NormalizedPodcastFeed"""
    categories = show.get("categories") or {}
    items = episodes[:max_episodes]
    return NormalizedPodcastFeed(
        title=show.get("title") or "",
        description=show.get("description") or "",
        author=show.get("author") or "",
        image_url=show.get("image") or "",
        link=show.get("link") or "",
        language=show.get("language") or None,
        categories=list(categories.values()) if isinstance(categories, dict) else [],
        explicit=bool(show.get("explicit")),
        episode_count=show.get("episodeCount") or len(items),
        feed_url=feed_url,
        episodes=[_episode(item) for item in items],
    )


def _episode(item: Dict) -> FeedEpisode:
    published = item.get("datePublished")
    # Unix seconds; anything else is dropped
    if isinstance(published, bool) or not isinstance(published, (int, float)):
        published = None
    return FeedEpisode(
        title=item.get("title") or "",
        description=item.get("description") or "",
        audio_url=item.get("enclosureUrl") or "",
        duration=format_duration(item.get("duration")),
        published_at=(
            datetime.fromtimestamp(published, tz=timezone.utc).isoformat() if published else ""
        ),
        episode_number=item.get("episode") or None,
        season_number=item.get("season") or None,
        episode_type=item.get("episodeType") or "full",
        image_url=item.get("image") or None,
        explicit=item.get("explicit") == 1,
        link=item.get("link") or None,
    )
