# catalog/fetchers/open_library_fetcher.py
"""
Open Library API data fetcher: search, then Edition and Work lookups.
"""

import logging
from typing import Optional, Dict

from ..api_caller import APICaller
from ..models.book import OPEN_LIBRARY, OPEN_LIBRARY_EDITION, OPEN_LIBRARY_WORK

logger = logging.getLogger(__name__)


async def search_open_library(api_caller: APICaller, isbn: Optional[str] = None,
                              query: Optional[str] = None, limit: int = 5) -> Optional[Dict]:
    """
    Search Open Library, keyed by ISBN when one is known and by free text otherwise.

    Returns:
        Raw search JSON with at least one doc, or None
    """
    params = {"limit": limit}
    if isbn:
        params["isbn"] = isbn
    elif query:
        params["q"] = query
    else:
        return None

    data = await api_caller.get_json(OPEN_LIBRARY, api_caller.settings.openlibrary_search_url, params)

    if data and data.get("docs"):
        return data

    logger.info(f"[OPEN LIBRARY] No results for {isbn or query!r}")
    return None


async def fetch_edition_data(edition_key: str, api_caller: APICaller) -> Optional[Dict]:
    """Fetch one Edition record, e.g. edition_key "OL7353617M" """
    url = f"{api_caller.settings.openlibrary_base_url}/books/{edition_key}.json"
    return await api_caller.get_json(OPEN_LIBRARY_EDITION, url)


async def fetch_work_data(work_key: str, api_caller: APICaller) -> Optional[Dict]:
    """
    Fetch a Work record.

    Args:
        work_key: Either "/works/OL123W" as found in search docs, or the bare id
    """
    if not work_key.startswith("/works/"):
        work_key = f"/works/{work_key}"
    url = f"{api_caller.settings.openlibrary_base_url}{work_key}.json"
    return await api_caller.get_json(OPEN_LIBRARY_WORK, url)
