"""
Response processors: raw catalog JSON to source records.
"""

from .google_processor import process_google_response, pick_image_link
from .open_library_processor import (
    process_search_doc,
    process_edition,
    process_work,
    extract_description,
    edition_keys,
)

__all__ = [
    "process_google_response",
    "pick_image_link",
    "process_search_doc",
    "process_edition",
    "process_work",
    "extract_description",
    "edition_keys",
]
