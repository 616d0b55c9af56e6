# catalog/feeds/resolver.py
"""
Resolve vendor show-page URLs (Apple Podcasts, SoundCloud) to RSS feed URLs.
"""

import logging
import re
from typing import List, Optional, Tuple
from urllib.parse import unquote, urlparse

from bs4 import BeautifulSoup

from ..api_caller import APICaller
from ..errors import ResolutionError
from ..models.podcast import FeedSource, ResolvedFeed

APPLE_ID_PATTERN = re.compile(r"id(\d+)")
SOUNDCLOUD_ID_PATTERN = re.compile(r"(users|playlists)/(\d+)")

SOUNDCLOUD_FEED_TEMPLATES = {
    "users": "https://feeds.soundcloud.com/users/soundcloud:users:{id}/sounds.rss",
    "playlists": "https://feeds.soundcloud.com/playlists/soundcloud:playlists:{id}/sounds.rss",
}


def is_valid_feed_url(url: Optional[str]) -> bool:
    """Absolute http(s) URL with a host"""
    if not url or not isinstance(url, str):
        return False
    parsed = urlparse(url.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def extract_apple_id(url: str) -> Optional[int]:
    """Numeric show id from an Apple Podcasts URL such as .../id1234567890"""
    match = APPLE_ID_PATTERN.search(url or "")
    return int(match.group(1)) if match else None


def extract_soundcloud_id(embed_html: str) -> Optional[Tuple[str, str]]:
    """
    Find a users/<id> or playlists/<id> fragment in oEmbed markup.

    The player iframe carries the API URL percent-encoded in its src, so the src
    is decoded before matching; the whole markup is scanned as a fallback.

    Returns:
        ("users" | "playlists", id) or None
    """
    candidates = []
    soup = BeautifulSoup(embed_html or "", "html.parser")
    for iframe in soup.find_all("iframe"):
        if iframe.get("src"):
            candidates.append(unquote(iframe["src"]))
    candidates.append(unquote(embed_html or ""))

    for text in candidates:
        match = SOUNDCLOUD_ID_PATTERN.search(text)
        if match:
            return match.group(1), match.group(2)
    return None


class FeedResolver:
    """
    Turns a FeedSource into a canonical feed URL.

    Order: explicit feed URL, then Apple Podcasts show page (iTunes lookup),
    then SoundCloud page (oEmbed). A vendor that cannot be resolved falls
    through to the next one given.
    """

    def __init__(self, api_caller: APICaller):
        self.api_caller = api_caller
        self.logger = logging.getLogger(self.__class__.__name__)

    async def resolve(self, source: FeedSource) -> ResolvedFeed:
        """
        Raises:
            ResolutionError: if an explicit feed URL is invalid, or no input
                resolves to a syntactically valid feed URL
        """
        if not (source.feed_url or source.apple_show_url or source.soundcloud_url):
            raise ResolutionError("A feed, Apple Podcasts, or SoundCloud URL is required")

        failures: List[str] = []
        itunes_id = None

        if source.feed_url:
            if not is_valid_feed_url(source.feed_url):
                raise ResolutionError(f"Could not resolve: invalid feed URL {source.feed_url!r}")
            return ResolvedFeed(feed_url=source.feed_url.strip())

        if source.apple_show_url:
            feed_url, itunes_id, reason = await self._resolve_apple(source.apple_show_url)
            if feed_url:
                return ResolvedFeed(feed_url=feed_url, itunes_id=itunes_id)
            failures.append(reason)

        if source.soundcloud_url:
            feed_url, reason = await self._resolve_soundcloud(source.soundcloud_url)
            if feed_url:
                return ResolvedFeed(feed_url=feed_url, itunes_id=itunes_id)
            failures.append(reason)

        self.logger.warning(f"Could not resolve feed: {'; '.join(failures)}")
        raise ResolutionError(f"Could not resolve a valid RSS feed URL: {'; '.join(failures)}")

    async def _resolve_apple(self, url: str) -> Tuple[Optional[str], Optional[int], str]:
        itunes_id = extract_apple_id(url)
        if itunes_id is None:
            return None, None, f"no Apple show id in {url!r}"

        data = await self.api_caller.get_json(
            "itunes_lookup", self.api_caller.settings.itunes_lookup_url, {"id": itunes_id}
        )
        results = data.get("results") if isinstance(data, dict) else None
        if not results:
            return None, itunes_id, f"iTunes lookup returned no results for id {itunes_id}"

        feed_url = results[0].get("feedUrl")
        if not is_valid_feed_url(feed_url):
            return None, itunes_id, f"iTunes lookup gave no valid feed URL for id {itunes_id}"

        self.logger.info(f"Resolved Apple show {itunes_id} to {feed_url}")
        return feed_url, itunes_id, ""

    async def _resolve_soundcloud(self, url: str) -> Tuple[Optional[str], str]:
        data = await self.api_caller.get_json(
            "soundcloud_oembed", self.api_caller.settings.soundcloud_oembed_url,
            {"format": "json", "url": url},
        )
        html = data.get("html") if isinstance(data, dict) else None
        if not isinstance(html, str):
            return None, f"no oEmbed markup for {url!r}"

        found = extract_soundcloud_id(html)
        if not found:
            return None, f"no SoundCloud user or playlist id in oEmbed markup for {url!r}"

        kind, vendor_id = found
        feed_url = SOUNDCLOUD_FEED_TEMPLATES[kind].format(id=vendor_id)
        self.logger.info(f"Resolved SoundCloud {kind} {vendor_id} to {feed_url}")
        return feed_url, ""
