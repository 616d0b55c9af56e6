# catalog/processors/open_library_processor.py
"""
Open Library API response processors for search docs, Editions, and Works.
"""

from typing import Dict, List, Optional, Any

from ..models.book import RawSourceRecord, OPEN_LIBRARY, OPEN_LIBRARY_EDITION, OPEN_LIBRARY_WORK

# Subject lists are long and noisy; only the head is kept as categories
MAX_FALLBACK_CATEGORIES = 5


def process_search_doc(doc: Dict, covers_url: str = "https://covers.openlibrary.org") -> RawSourceRecord:
    """
    Turn the top Open Library search doc into a source record.

    Args:
        doc: One entry of the search response "docs" list
        covers_url: Base URL of the cover service

    Returns:
        RawSourceRecord tagged open_library
    """
    record = RawSourceRecord(
        source=OPEN_LIBRARY,
        title=doc.get("title") or None,
        authors=[a for a in doc.get("author_name") or [] if a],
        page_count=doc.get("number_of_pages_median") or None,
    )

    if doc.get("first_publish_year"):
        record.published_date = str(doc["first_publish_year"])

    publishers = doc.get("publisher") or []
    if publishers:
        record.publisher = publishers[0]

    for isbn in doc.get("isbn") or []:
        if len(isbn) == 13 and not record.isbn13:
            record.isbn13 = isbn
        elif len(isbn) == 10 and not record.isbn10:
            record.isbn10 = isbn

    if doc.get("cover_i"):
        record.thumbnail_url = f"{covers_url}/b/id/{doc['cover_i']}-L.jpg"

    return record


def process_edition(edition: Dict, sequence: int = 0) -> RawSourceRecord:
    """Source record from an Edition JSON document"""
    publishers = edition.get("publishers") or []
    return RawSourceRecord(
        source=OPEN_LIBRARY_EDITION,
        sequence=sequence,
        description=extract_description(edition.get("description")),
        published_date=edition.get("publish_date") or None,
        page_count=edition.get("number_of_pages") or None,
        publisher=publishers[0] if publishers else None,
        categories=_subject_names(edition.get("subjects"))[:MAX_FALLBACK_CATEGORIES],
    )


def process_work(work: Dict) -> RawSourceRecord:
    """Source record from a Work JSON document"""
    return RawSourceRecord(
        source=OPEN_LIBRARY_WORK,
        description=extract_description(work.get("description")),
        published_date=work.get("first_publish_date") or None,
        categories=_subject_names(work.get("subjects"))[:MAX_FALLBACK_CATEGORIES],
    )


def extract_description(value: Any) -> Optional[str]:
    """Descriptions come either as a plain string or as {"type": ..., "value": ...}"""
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, dict) and isinstance(value.get("value"), str):
        return value["value"].strip() or None
    return None


def edition_keys(doc: Dict, limit: int = 3) -> List[str]:
    """Edition keys of a search doc, in listed order"""
    return list(doc.get("edition_key") or [])[:limit]


def _subject_names(subjects: Optional[List]) -> List[str]:
    names = []
    for subject in subjects or []:
        if isinstance(subject, dict):
            name = subject.get("name", "")
        else:
            name = str(subject)

        if name and name.strip():
            names.append(name.strip())
    return names
