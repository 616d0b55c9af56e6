"""Pytest fixtures for catalog tests."""

import asyncio
import copy
from typing import Callable, Dict, Optional, Union

import pytest

from catalog.config import Settings


class FakeAPICaller:
    """
    Stand-in for APICaller that serves canned responses.

    routes maps exact URLs to a response (or to a callable taking the request
    params), or is itself a callable handler(source, url, params). Unknown URLs
    answer None, as an unavailable source would.
    """

    def __init__(self, routes: Union[Dict, Callable, None] = None, settings: Optional[Settings] = None,
                 delays: Optional[Dict[str, float]] = None):
        self.settings = settings or Settings()
        self.routes = routes if routes is not None else {}
        self.delays = delays or {}
        self.calls = []

    async def get_json(self, source, url, params=None, headers=None):
        return await self._respond(source, url, params, headers)

    async def get_text(self, source, url, params=None, headers=None):
        return await self._respond(source, url, params, headers)

    async def _respond(self, source, url, params, headers):
        params = dict(params or {})
        self.calls.append({"source": source, "url": url, "params": params, "headers": headers})

        if source in self.delays:
            await asyncio.sleep(self.delays[source])

        if callable(self.routes):
            response = self.routes(source, url, params)
        else:
            response = self.routes.get(url)
            if callable(response):
                response = response(params)
        return copy.deepcopy(response)

    def sources_called(self):
        return [call["source"] for call in self.calls]


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def google_response():
    """Google Books volumes response with one complete item."""
    return {
        "totalItems": 1,
        "items": [
            {
                "volumeInfo": {
                    "title": "The Communist Manifesto",
                    "authors": ["Karl Marx", "Friedrich Engels"],
                    "publisher": "Penguin Classics",
                    "publishedDate": "2002-04-25",
                    "description": "A call to arms first published in 1848.",
                    "industryIdentifiers": [
                        {"type": "ISBN_10", "identifier": "0140447571"},
                        {"type": "ISBN_13", "identifier": "9780140447576"},
                    ],
                    "pageCount": 288,
                    "categories": ["Political Science"],
                    "imageLinks": {
                        "smallThumbnail": "http://books.google.com/books/content?id=abc&zoom=5",
                        "thumbnail": "http://books.google.com/books/content?id=abc&zoom=1",
                    },
                    "language": "en",
                    "previewLink": "http://books.google.com/books?id=abc&pg=PP1",
                    "infoLink": "http://books.google.com/books?id=abc",
                }
            }
        ],
    }


@pytest.fixture
def openlibrary_search_response():
    """Open Library search response with one doc."""
    return {
        "numFound": 1,
        "docs": [
            {
                "key": "/works/OL1W",
                "title": "The State and Revolution",
                "author_name": ["Vladimir Lenin"],
                "first_publish_year": 1917,
                "publisher": ["Progress Publishers", "Penguin"],
                "number_of_pages_median": 120,
                "isbn": ["0140184333", "9780140184334"],
                "cover_i": 12345,
                "edition_key": ["OL1M", "OL2M", "OL3M", "OL4M"],
            }
        ],
    }


def rss_document(items: str = "", channel_extra: str = "") -> str:
    """Minimal RSS 2.0 podcast document around the given item markup."""
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:itunes="http://www.itunes.com/dtds/podcast-1.0.dtd">
  <channel>
    <title>Reading Capital</title>
    <link>https://example.org/podcast</link>
    <language>en-us</language>
    <description><![CDATA[A chapter-by-chapter <b>reading group</b>.]]></description>
    <itunes:author>Study Group Collective</itunes:author>
    <itunes:image href="https://example.org/cover.jpg"/>
    <itunes:category text="Education"/>
    <itunes:category text="History"/>
    <itunes:explicit>no</itunes:explicit>
    {channel_extra}
    {items}
  </channel>
</rss>"""


def rss_item(number: int, description: Optional[str] = "Episode notes.") -> str:
    description_tag = f"<description>{description}</description>" if description is not None else ""
    return f"""
    <item>
      <title>Episode {number}</title>
      {description_tag}
      <enclosure url="https://example.org/audio/{number}.mp3" length="1000" type="audio/mpeg"/>
      <itunes:duration>01:02:03</itunes:duration>
      <pubDate>Mon, 02 Jan 2023 10:00:00 +0000</pubDate>
      <itunes:episode>{number}</itunes:episode>
      <itunes:season>1</itunes:season>
    </item>"""
