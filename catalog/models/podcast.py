# catalog/models/podcast.py
"""
Data models for podcast feeds and directory results.
"""

from dataclasses import dataclass, field, asdict
from typing import List, Dict, Optional


@dataclass
class FeedEpisode:
    """One <item> of a podcast feed. Duration and date are kept as raw strings."""
    title: str = ""
    description: str = ""
    audio_url: str = ""
    duration: str = ""
    published_at: str = ""
    episode_number: Optional[int] = None
    season_number: Optional[int] = None
    episode_type: str = "full"
    image_url: Optional[str] = None
    explicit: bool = False
    link: Optional[str] = None


@dataclass
class NormalizedPodcastFeed:
    """Channel-level data plus episodes in document order (at most 50)"""
    title: str = ""
    description: str = ""
    author: str = ""
    image_url: str = ""
    link: str = ""
    language: Optional[str] = None
    categories: List[str] = field(default_factory=list)
    explicit: bool = False
    episode_count: Optional[int] = None
    feed_url: Optional[str] = None
    episodes: List[FeedEpisode] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class FeedSource:
    """Caller input naming a podcast by feed URL or vendor show page"""
    feed_url: Optional[str] = None
    apple_show_url: Optional[str] = None
    soundcloud_url: Optional[str] = None


@dataclass
class ResolvedFeed:
    """Result of feed URL resolution"""
    feed_url: str
    itunes_id: Optional[int] = None


@dataclass
class PodcastSearchResult:
    """One show from a podcast directory search"""
    name: str
    author: str = ""
    artwork_url: str = ""
    feed_url: str = ""
    itunes_id: Optional[int] = None
    episode_count: int = 0
    categories: List[str] = field(default_factory=list)
