# catalog/feeds/parser.py
"""
Bounded, tolerant RSS 2.0 extraction.

This is not a conformant XML parser. Tags are found with regular expressions,
CDATA first and plain text second, and anything missing or malformed comes back
as an empty string or None instead of raising. Namespaces are matched by their
literal prefix (e.g. "itunes:author").
"""

import html
import re
from abc import ABC, abstractmethod
from functools import lru_cache
from itertools import islice
from typing import List, Optional

from ..models.podcast import FeedEpisode, NormalizedPodcastFeed

MAX_EPISODES = 50

_ITEM_PATTERN = re.compile(r"<item(?:\s[^>]*)?>(.*?)</item>", re.DOTALL | re.IGNORECASE)
_FIRST_ITEM = re.compile(r"<item[\s>]", re.IGNORECASE)


@lru_cache(maxsize=None)
def _compiled(kind: str, tag: str, attr: str = "") -> "re.Pattern":
    name = re.escape(tag)
    if kind == "cdata":
        pattern = rf"<{name}(?:\s[^>]*)?>\s*<!\[CDATA\[(.*?)\]\]>\s*</{name}>"
    elif kind == "plain":
        pattern = rf"<{name}(?:\s[^>]*)?>(.*?)</{name}>"
    else:
        pattern = rf"<{name}\s[^>]*?\b{re.escape(attr)}\s*=\s*[\"']([^\"']*)[\"']"
    return re.compile(pattern, re.DOTALL | re.IGNORECASE)


def extract_tag(xml: str, tag: str) -> str:
    """
    Text of the first <tag>, trying a CDATA body before a plain one.

    Returns:
        Stripped text, or "" when the tag is absent
    """
    match = _compiled("cdata", tag).search(xml or "")
    if match:
        return match.group(1).strip()

    match = _compiled("plain", tag).search(xml or "")
    if match:
        return html.unescape(match.group(1).strip())

    return ""


def extract_attr(xml: str, tag: str, attr: str) -> str:
    """Value of attr on the first <tag ... attr="..."> or "" """
    match = _compiled("attr", tag, attr).search(xml or "")
    return html.unescape(match.group(1).strip()) if match else ""


def extract_all_attrs(xml: str, tag: str, attr: str) -> List[str]:
    """Values of attr on every <tag ...> in document order"""
    return [html.unescape(m.strip()) for m in _compiled("attr", tag, attr).findall(xml or "") if m.strip()]


def parse_int(text: str) -> Optional[int]:
    try:
        return int(text.strip())
    except (ValueError, AttributeError):
        return None


def _is_explicit(text: str) -> bool:
    return text.strip().lower() in ("yes", "true")


class FeedParser(ABC):
    """Interface for turning raw feed text into a NormalizedPodcastFeed"""

    @abstractmethod
    def parse(self, xml: str) -> NormalizedPodcastFeed:
        """Parse raw feed text. Must not raise on malformed input."""


class RegexFeedParser(FeedParser):
    """
    Regex-based extractor for RSS 2.0 podcast feeds.

    Channel fields come from the preamble before the first <item>. Items are
    read in document order and scanning stops after max_episodes.
    """

    def __init__(self, max_episodes: int = MAX_EPISODES):
        self.max_episodes = max_episodes

    def parse(self, xml: str) -> NormalizedPodcastFeed:
        xml = xml or ""
        first_item = _FIRST_ITEM.search(xml)
        preamble = xml[:first_item.start()] if first_item else xml

        feed = NormalizedPodcastFeed(
            title=extract_tag(preamble, "title"),
            description=extract_tag(preamble, "description") or extract_tag(preamble, "itunes:summary"),
            author=extract_tag(preamble, "itunes:author") or extract_tag(preamble, "managingEditor"),
            image_url=extract_attr(preamble, "itunes:image", "href") or extract_tag(preamble, "url"),
            link=extract_tag(preamble, "link"),
            language=extract_tag(preamble, "language") or None,
            categories=extract_all_attrs(preamble, "itunes:category", "text"),
            explicit=_is_explicit(extract_tag(preamble, "itunes:explicit")),
        )

        blocks = islice(_ITEM_PATTERN.finditer(xml), self.max_episodes)
        feed.episodes = [self.parse_item(match.group(1)) for match in blocks]
        return feed

    def parse_item(self, block: str) -> FeedEpisode:
        return FeedEpisode(
            title=extract_tag(block, "title"),
            description=extract_tag(block, "description") or extract_tag(block, "itunes:summary"),
            audio_url=extract_attr(block, "enclosure", "url"),
            duration=extract_tag(block, "itunes:duration"),
            published_at=extract_tag(block, "pubDate"),
            episode_number=parse_int(extract_tag(block, "itunes:episode")),
            season_number=parse_int(extract_tag(block, "itunes:season")),
            episode_type=extract_tag(block, "itunes:episodeType") or "full",
            image_url=extract_attr(block, "itunes:image", "href") or None,
            explicit=_is_explicit(extract_tag(block, "itunes:explicit")),
            link=extract_tag(block, "link") or None,
        )
