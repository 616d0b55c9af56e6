"""Tests for podcast directory search."""

import pytest

from catalog.config import Settings
from catalog.errors import ValidationError
from catalog.feeds.directory import PodcastDirectory
from conftest import FakeAPICaller

ITUNES_SEARCH = "https://itunes.apple.com/search"

ITUNES_RESULTS = {
    "resultCount": 1,
    "results": [
        {
            "collectionId": 1234567890,
            "collectionName": "Reading Capital",
            "artistName": "Study Group Collective",
            "artworkUrl100": "https://example.org/100.jpg",
            "artworkUrl600": "https://example.org/600.jpg",
            "feedUrl": "https://example.org/feed.xml",
            "trackCount": 48,
            "primaryGenreName": "Education",
        }
    ],
}


class TestPodcastDirectory:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", " ", "a", None])
    async def test_short_query_rejected(self, query):
        caller = FakeAPICaller()
        with pytest.raises(ValidationError):
            await PodcastDirectory(caller).search(query)
        assert caller.calls == []

    @pytest.mark.asyncio
    async def test_itunes_search(self):
        caller = FakeAPICaller({ITUNES_SEARCH: ITUNES_RESULTS})

        results = await PodcastDirectory(caller, limit=5).search(" capital ")

        assert caller.calls[0]["params"] == {"term": "capital", "media": "podcast", "limit": 5}
        result = results[0]
        assert result.name == "Reading Capital"
        assert result.author == "Study Group Collective"
        assert result.artwork_url == "https://example.org/600.jpg"
        assert result.feed_url == "https://example.org/feed.xml"
        assert result.itunes_id == 1234567890
        assert result.episode_count == 48
        assert result.categories == ["Education"]

    @pytest.mark.asyncio
    async def test_podcast_index_preferred(self):
        def routes(source, url, params):
            if source == "podcast_index":
                return {"feeds": [{
                    "title": "Reading Capital",
                    "author": "Study Group Collective",
                    "url": "https://example.org/feed.xml",
                    "itunesId": 1234567890,
                    "episodeCount": 50,
                    "categories": {"5": "Education"},
                }]}
            return None

        settings = Settings(podcast_index_key="KEY", podcast_index_secret="SECRET")
        caller = FakeAPICaller(routes, settings=settings)

        results = await PodcastDirectory(caller).search("capital")

        assert caller.sources_called() == ["podcast_index"]
        assert results[0].feed_url == "https://example.org/feed.xml"
        assert results[0].categories == ["Education"]

    @pytest.mark.asyncio
    async def test_empty_index_falls_back_to_itunes(self):
        def routes(source, url, params):
            if source == "podcast_index":
                return {"feeds": []}
            return ITUNES_RESULTS

        settings = Settings(podcast_index_key="KEY", podcast_index_secret="SECRET")
        caller = FakeAPICaller(routes, settings=settings)

        results = await PodcastDirectory(caller).search("capital")

        assert caller.sources_called() == ["podcast_index", "itunes_search"]
        assert results[0].name == "Reading Capital"

    @pytest.mark.asyncio
    async def test_unavailable_directory_gives_no_results(self):
        assert await PodcastDirectory(FakeAPICaller()).search("capital") == []
