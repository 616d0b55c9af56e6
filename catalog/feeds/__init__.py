"""
Podcast feed resolution, parsing, and directory lookups.
"""

from .resolver import FeedResolver, is_valid_feed_url, extract_apple_id, extract_soundcloud_id
from .parser import FeedParser, RegexFeedParser, extract_tag, extract_attr, MAX_EPISODES
from .podcast_index import PodcastIndexClient, format_duration, show_to_feed
from .loader import PodcastFeedLoader
from .directory import PodcastDirectory

__all__ = [
    "FeedResolver",
    "is_valid_feed_url",
    "extract_apple_id",
    "extract_soundcloud_id",
    "FeedParser",
    "RegexFeedParser",
    "extract_tag",
    "extract_attr",
    "MAX_EPISODES",
    "PodcastIndexClient",
    "format_duration",
    "show_to_feed",
    "PodcastFeedLoader",
    "PodcastDirectory",
]
