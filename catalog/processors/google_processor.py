# catalog/processors/google_processor.py
"""
Google Books API response processor.
"""

from typing import Dict, Optional

from ..models.book import RawSourceRecord, GOOGLE_BOOKS

# Largest first
IMAGE_LINK_TIERS = ("extraLarge", "large", "medium", "small", "thumbnail", "smallThumbnail")


def process_google_response(raw_data: Dict) -> Optional[RawSourceRecord]:
    """
    Turn the top search result of a Google Books response into a source record.

    Identifiers are only taken from industryIdentifiers entries explicitly typed
    ISBN_10 or ISBN_13; untyped or other-typed entries are ignored.

    Args:
        raw_data: Raw JSON response from the volumes endpoint

    Returns:
        RawSourceRecord, or None if the response has no items
    """
    items = raw_data.get("items") or []
    if not items:
        return None

    volume_info = items[0].get("volumeInfo") or {}

    record = RawSourceRecord(
        source=GOOGLE_BOOKS,
        title=volume_info.get("title") or None,
        description=volume_info.get("description") or None,
        authors=[a for a in volume_info.get("authors") or [] if a],
        publisher=volume_info.get("publisher") or None,
        published_date=volume_info.get("publishedDate") or None,
        page_count=volume_info.get("pageCount") or None,
        categories=[c for c in volume_info.get("categories") or [] if c],
        language=volume_info.get("language") or None,
        preview_link=volume_info.get("previewLink") or None,
        info_link=volume_info.get("infoLink") or None,
        thumbnail_url=pick_image_link(volume_info.get("imageLinks") or {}),
    )

    for identifier in volume_info.get("industryIdentifiers") or []:
        if identifier.get("type") == "ISBN_10":
            record.isbn10 = identifier.get("identifier") or record.isbn10
        elif identifier.get("type") == "ISBN_13":
            record.isbn13 = identifier.get("identifier") or record.isbn13

    return record


def pick_image_link(image_links: Dict) -> Optional[str]:
    """First non-empty image link, walking size tiers from largest to smallest"""
    for tier in IMAGE_LINK_TIERS:
        if image_links.get(tier):
            return image_links[tier]
    return None
