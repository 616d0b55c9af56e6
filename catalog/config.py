# catalog/config.py
"""
Runtime settings for the catalog pipeline.
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Settings:
    """Endpoint URLs, HTTP limits, and optional API credentials"""

    # Book catalogs
    google_books_url: str = "https://www.googleapis.com/books/v1/volumes"
    openlibrary_search_url: str = "https://openlibrary.org/search.json"
    openlibrary_base_url: str = "https://openlibrary.org"
    openlibrary_covers_url: str = "https://covers.openlibrary.org"

    # Podcast directories
    itunes_lookup_url: str = "https://itunes.apple.com/lookup"
    itunes_search_url: str = "https://itunes.apple.com/search"
    soundcloud_oembed_url: str = "https://soundcloud.com/oembed"
    podcast_index_url: str = "https://api.podcastindex.org/api/1.0"

    # HTTP
    timeout: float = 10.0
    connection_limit: int = 50
    user_agent: str = "CatalogReconciler/1.0"

    # Credentials
    google_books_api_key: Optional[str] = None
    podcast_index_key: Optional[str] = None
    podcast_index_secret: Optional[str] = None

    @property
    def podcast_index_configured(self) -> bool:
        return bool(self.podcast_index_key and self.podcast_index_secret)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables, keeping defaults for anything unset"""
        timeout = os.environ.get("CATALOG_HTTP_TIMEOUT")
        return cls(
            timeout=float(timeout) if timeout else cls.timeout,
            user_agent=os.environ.get("CATALOG_USER_AGENT") or cls.user_agent,
            google_books_api_key=os.environ.get("GOOGLE_BOOKS_API_KEY") or None,
            podcast_index_key=os.environ.get("PODCAST_INDEX_KEY") or None,
            podcast_index_secret=os.environ.get("PODCAST_INDEX_SECRET") or None,
        )
