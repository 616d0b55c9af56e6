"""
Data fetcher modules for the book catalogs.
"""

from .google_fetcher import fetch_google_data
from .open_library_fetcher import search_open_library, fetch_edition_data, fetch_work_data

__all__ = ["fetch_google_data", "search_open_library", "fetch_edition_data", "fetch_work_data"]
