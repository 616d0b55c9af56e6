#!/usr/bin/env python3
"""
Resolve a podcast URL and print the normalized feed as JSON.

Usage:
    python run_podcast_feed.py --feed-url https://example.com/feed.xml
    python run_podcast_feed.py --apple-url https://podcasts.apple.com/us/podcast/x/id123456789
    python run_podcast_feed.py --search "history podcast"
"""

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict

from catalog import (
    APICaller, FeedSource, PodcastDirectory, PodcastFeedLoader, ResolutionError, Settings, ValidationError,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


async def main(args: argparse.Namespace) -> int:
    settings = Settings.from_env()

    if args.search:
        try:
            async with APICaller(settings) as api_caller:
                results = await PodcastDirectory(api_caller).search(args.search)
        except ValidationError as e:
            print(f"❌ {e}", file=sys.stderr)
            return 1
        print(json.dumps([asdict(r) for r in results], indent=2, ensure_ascii=False))
        return 0

    source = FeedSource(
        feed_url=args.feed_url,
        apple_show_url=args.apple_url,
        soundcloud_url=args.soundcloud_url,
    )

    try:
        async with PodcastFeedLoader(settings) as loader:
            feed = await loader.load(source)
    except ResolutionError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    if feed is None:
        print("❌ Failed to fetch feed", file=sys.stderr)
        return 2

    print(json.dumps(feed.to_dict(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Load a podcast feed from a feed, Apple, or SoundCloud URL")
    parser.add_argument("--feed-url")
    parser.add_argument("--apple-url")
    parser.add_argument("--soundcloud-url")
    parser.add_argument("--search", help="Search podcast directories instead of loading a feed")
    sys.exit(asyncio.run(main(parser.parse_args())))
