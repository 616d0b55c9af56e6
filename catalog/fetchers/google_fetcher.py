# catalog/fetchers/google_fetcher.py
"""
Google Books API data fetcher (primary catalog).
"""

import logging
from typing import Optional, Dict

from ..api_caller import APICaller
from ..models.book import GOOGLE_BOOKS

logger = logging.getLogger(__name__)


async def fetch_google_data(search_key: str, api_caller: APICaller) -> Optional[Dict]:
    """
    Fetch volume data from Google Books.

    The search key is an ISBN-13, an ISBN-10, or free text; Google Books accepts
    all three through the same `q` parameter.

    Args:
        search_key: Value chosen by the query planner
        api_caller: Open API caller

    Returns:
        Raw JSON response with at least one item, or None
    """
    settings = api_caller.settings
    params = {"q": search_key}
    if settings.google_books_api_key:
        params["key"] = settings.google_books_api_key

    data = await api_caller.get_json(GOOGLE_BOOKS, settings.google_books_url, params)

    if data and data.get("items"):
        return data

    logger.info(f"[GOOGLE BOOKS] No results for {search_key!r}")
    return None
