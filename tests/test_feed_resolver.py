"""Tests for feed URL resolution from vendor show pages."""

import pytest

from catalog.errors import ResolutionError
from catalog.feeds.resolver import (
    FeedResolver,
    extract_apple_id,
    extract_soundcloud_id,
    is_valid_feed_url,
)
from catalog.models.podcast import FeedSource
from conftest import FakeAPICaller

ITUNES_LOOKUP = "https://itunes.apple.com/lookup"
SOUNDCLOUD_OEMBED = "https://soundcloud.com/oembed"

APPLE_URL = "https://podcasts.apple.com/us/podcast/reading-capital/id1234567890"
SOUNDCLOUD_URL = "https://soundcloud.com/reading-capital"

EMBED_HTML = (
    '<iframe width="100%" height="400" scrolling="no" frameborder="no" '
    'src="https://w.soundcloud.com/player/?visual=true&url=https%3A%2F%2Fapi.soundcloud.com'
    '%2Fusers%2F98765&show_artwork=true"></iframe>'
)


class TestHelpers:

    @pytest.mark.parametrize("url,expected", [
        ("https://example.org/feed.xml", True),
        ("http://example.org/rss", True),
        ("ftp://example.org/feed.xml", False),
        ("example.org/feed.xml", False),
        ("https://", False),
        ("", False),
        (None, False),
    ])
    def test_is_valid_feed_url(self, url, expected):
        assert is_valid_feed_url(url) is expected

    def test_extract_apple_id(self):
        assert extract_apple_id(APPLE_URL) == 1234567890
        assert extract_apple_id("https://podcasts.apple.com/us/podcast/no-id") is None

    def test_extract_soundcloud_user_from_encoded_iframe(self):
        assert extract_soundcloud_id(EMBED_HTML) == ("users", "98765")

    def test_extract_soundcloud_playlist(self):
        html = '<iframe src="https://w.soundcloud.com/player/?url=https://api.soundcloud.com/playlists/555"></iframe>'
        assert extract_soundcloud_id(html) == ("playlists", "555")

    def test_extract_soundcloud_from_bare_markup(self):
        assert extract_soundcloud_id("tracks: api.soundcloud.com/users/42") == ("users", "42")

    def test_extract_soundcloud_nothing(self):
        assert extract_soundcloud_id("<iframe src='https://w.soundcloud.com/player/'></iframe>") is None
        assert extract_soundcloud_id("") is None


class TestFeedResolver:

    @pytest.mark.asyncio
    async def test_explicit_feed_url_needs_no_requests(self):
        caller = FakeAPICaller()
        resolved = await FeedResolver(caller).resolve(FeedSource(feed_url=" https://example.org/feed.xml "))

        assert resolved.feed_url == "https://example.org/feed.xml"
        assert caller.calls == []

    @pytest.mark.asyncio
    async def test_apple_show_page(self):
        caller = FakeAPICaller({
            ITUNES_LOOKUP: {"resultCount": 1, "results": [{"feedUrl": "https://example.org/apple.xml"}]},
        })
        resolved = await FeedResolver(caller).resolve(FeedSource(apple_show_url=APPLE_URL))

        assert resolved.feed_url == "https://example.org/apple.xml"
        assert resolved.itunes_id == 1234567890
        assert caller.calls[0]["params"] == {"id": 1234567890}

    @pytest.mark.asyncio
    async def test_soundcloud_user_page(self):
        caller = FakeAPICaller({SOUNDCLOUD_OEMBED: {"html": EMBED_HTML}})
        resolved = await FeedResolver(caller).resolve(FeedSource(soundcloud_url=SOUNDCLOUD_URL))

        assert resolved.feed_url == "https://feeds.soundcloud.com/users/soundcloud:users:98765/sounds.rss"
        assert caller.calls[0]["params"] == {"format": "json", "url": SOUNDCLOUD_URL}

    @pytest.mark.asyncio
    async def test_soundcloud_playlist_page(self):
        html = '<iframe src="https://w.soundcloud.com/player/?url=https%3A//api.soundcloud.com/playlists/777"></iframe>'
        caller = FakeAPICaller({SOUNDCLOUD_OEMBED: {"html": html}})
        resolved = await FeedResolver(caller).resolve(FeedSource(soundcloud_url=SOUNDCLOUD_URL))

        assert resolved.feed_url == (
            "https://feeds.soundcloud.com/playlists/soundcloud:playlists:777/sounds.rss"
        )

    @pytest.mark.asyncio
    async def test_feed_url_takes_precedence(self):
        caller = FakeAPICaller()
        source = FeedSource(feed_url="https://example.org/feed.xml", apple_show_url=APPLE_URL)

        resolved = await FeedResolver(caller).resolve(source)

        assert resolved.feed_url == "https://example.org/feed.xml"
        assert caller.calls == []

    @pytest.mark.asyncio
    async def test_apple_failure_falls_through_to_soundcloud(self):
        caller = FakeAPICaller({
            ITUNES_LOOKUP: {"resultCount": 0, "results": []},
            SOUNDCLOUD_OEMBED: {"html": EMBED_HTML},
        })
        source = FeedSource(apple_show_url=APPLE_URL, soundcloud_url=SOUNDCLOUD_URL)

        resolved = await FeedResolver(caller).resolve(source)

        assert resolved.feed_url.endswith("soundcloud:users:98765/sounds.rss")
        assert caller.sources_called() == ["itunes_lookup", "soundcloud_oembed"]

    @pytest.mark.asyncio
    async def test_empty_source_raises(self):
        with pytest.raises(ResolutionError):
            await FeedResolver(FakeAPICaller()).resolve(FeedSource())

    @pytest.mark.asyncio
    async def test_invalid_feed_url_raises(self):
        with pytest.raises(ResolutionError, match="invalid feed URL"):
            await FeedResolver(FakeAPICaller()).resolve(FeedSource(feed_url="not a url"))

    @pytest.mark.asyncio
    async def test_invalid_feed_url_does_not_fall_through(self):
        caller = FakeAPICaller({ITUNES_LOOKUP: {"results": [{"feedUrl": "https://example.org/apple.xml"}]}})
        source = FeedSource(feed_url="not a url", apple_show_url=APPLE_URL)

        with pytest.raises(ResolutionError, match="invalid feed URL"):
            await FeedResolver(caller).resolve(source)
        assert caller.calls == []

    @pytest.mark.asyncio
    async def test_apple_url_without_id_raises(self):
        caller = FakeAPICaller()
        with pytest.raises(ResolutionError, match="no Apple show id"):
            await FeedResolver(caller).resolve(FeedSource(apple_show_url="https://podcasts.apple.com/us/podcast/x"))
        assert caller.calls == []

    @pytest.mark.asyncio
    async def test_apple_lookup_with_invalid_feed_url_raises(self):
        caller = FakeAPICaller({ITUNES_LOOKUP: {"results": [{"feedUrl": "not-a-url"}]}})
        with pytest.raises(ResolutionError, match="no valid feed URL"):
            await FeedResolver(caller).resolve(FeedSource(apple_show_url=APPLE_URL))

    @pytest.mark.asyncio
    async def test_unavailable_directories_raise(self):
        source = FeedSource(apple_show_url=APPLE_URL, soundcloud_url=SOUNDCLOUD_URL)
        with pytest.raises(ResolutionError) as excinfo:
            await FeedResolver(FakeAPICaller()).resolve(source)

        message = str(excinfo.value)
        assert "iTunes lookup returned no results" in message
        assert "no oEmbed markup" in message

    @pytest.mark.asyncio
    async def test_oembed_without_ids_raises(self):
        caller = FakeAPICaller({SOUNDCLOUD_OEMBED: {"html": "<iframe src='https://w.soundcloud.com/player/'></iframe>"}})
        with pytest.raises(ResolutionError, match="no SoundCloud user or playlist id"):
            await FeedResolver(caller).resolve(FeedSource(soundcloud_url=SOUNDCLOUD_URL))
