# catalog/reconciler.py
"""
Field-level merging of partial source records into one canonical book record.

Every output field has its own ordered list of sources. For each field the first
source in that list offering a non-empty value wins, independently of every other
field, so one source can supply the title while another supplies the description.
Records are consulted by source priority and never by arrival order.
"""

import logging
from dataclasses import fields
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Any

from .errors import ValidationError
from .identifiers import open_library_cover_url
from .models.book import (
    RawSourceRecord,
    NormalizedBookMetadata,
    MANUAL,
    GOOGLE_BOOKS,
    QUERY,
    OPEN_LIBRARY,
    OPEN_LIBRARY_EDITION,
    OPEN_LIBRARY_WORK,
    ISBN_COVER,
)

_NESTED = (OPEN_LIBRARY_EDITION, OPEN_LIBRARY_WORK)

DEFAULT_PRECEDENCE: Mapping[str, Tuple[str, ...]] = {
    "title": (MANUAL, GOOGLE_BOOKS, OPEN_LIBRARY),
    "description": (MANUAL, GOOGLE_BOOKS, OPEN_LIBRARY) + _NESTED,
    "authors": (MANUAL, GOOGLE_BOOKS, OPEN_LIBRARY),
    "publisher": (MANUAL, GOOGLE_BOOKS, OPEN_LIBRARY) + _NESTED,
    "published_date": (MANUAL, GOOGLE_BOOKS, OPEN_LIBRARY) + _NESTED,
    "page_count": (MANUAL, GOOGLE_BOOKS, OPEN_LIBRARY) + _NESTED,
    "categories": (MANUAL, GOOGLE_BOOKS) + _NESTED,
    "language": (MANUAL, GOOGLE_BOOKS),
    "preview_link": (MANUAL, GOOGLE_BOOKS),
    "info_link": (MANUAL, GOOGLE_BOOKS),
    # Primary cover at any size tier beats the secondary's numeric cover id
    "thumbnail_url": (MANUAL, GOOGLE_BOOKS, OPEN_LIBRARY, ISBN_COVER),
    # Typed primary identifiers override the ones parsed from the query
    "isbn13": (MANUAL, GOOGLE_BOOKS, QUERY),
    "isbn10": (MANUAL, GOOGLE_BOOKS, QUERY),
}

# Used only when no identifier at all came out of the table above
SECONDARY_IDENTIFIER_SOURCES: Tuple[str, ...] = (OPEN_LIBRARY,)

OUTPUT_FIELDS = tuple(f.name for f in fields(NormalizedBookMetadata))


def is_empty(value: Any) -> bool:
    """None, blank strings, and empty lists count as missing"""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def record_from_fields(source: str, values: Mapping[str, Any], sequence: int = 0) -> RawSourceRecord:
    """
    Build a source record from a plain mapping, e.g. caller-supplied manual fields.

    Raises:
        ValidationError: on a key that is not an output field
    """
    unknown = sorted(set(values) - set(OUTPUT_FIELDS))
    if unknown:
        raise ValidationError(f"Unknown book fields: {', '.join(unknown)}")

    record = RawSourceRecord(source=source, sequence=sequence)
    for name, value in values.items():
        if isinstance(value, (list, tuple)):
            value = list(value)
        setattr(record, name, value)
    return record


def ensure_https(url: Optional[str]) -> Optional[str]:
    """Rewrite an http:// URL to https://"""
    if url and url.startswith("http://"):
        return "https://" + url[len("http://"):]
    return url


class FieldReconciler:
    """
    Merges RawSourceRecords according to a per-field precedence table.

    The table is plain data, so a single field's precedence can be tested or
    replaced without touching the others.
    """

    def __init__(self, precedence: Optional[Mapping[str, Sequence[str]]] = None,
                 covers_url: str = "https://covers.openlibrary.org"):
        self.precedence = {name: tuple(sources) for name, sources in (precedence or DEFAULT_PRECEDENCE).items()}
        self.covers_url = covers_url
        self.logger = logging.getLogger(self.__class__.__name__)

        missing = [name for name in OUTPUT_FIELDS if name not in self.precedence]
        if missing:
            raise ValidationError(f"Precedence table has no entry for: {', '.join(missing)}")

    def resolve_field(self, name: str, records: Iterable[RawSourceRecord]) -> Tuple[Any, Optional[str]]:
        """
        Pick one field's value.

        Returns:
            (value, source) of the first non-empty candidate, or (None, None)
        """
        return self._first_non_empty(name, records, self.precedence[name])

    def reconcile(self, records: Iterable[RawSourceRecord]) -> NormalizedBookMetadata:
        """Build the canonical record from 0..N source records"""
        metadata, _ = self.reconcile_with_provenance(records)
        return metadata

    def reconcile_with_provenance(
        self, records: Iterable[RawSourceRecord]
    ) -> Tuple[NormalizedBookMetadata, Dict[str, Optional[str]]]:
        """
        Build the canonical record and report which source supplied each field.
        """
        ordered = sorted(records, key=lambda r: (r.source, r.sequence))
        metadata = NormalizedBookMetadata()
        provenance: Dict[str, Optional[str]] = {}

        for name in OUTPUT_FIELDS:
            if name == "thumbnail_url":
                continue
            value, source = self.resolve_field(name, ordered)
            if value is not None:
                setattr(metadata, name, _copy(value))
            provenance[name] = source

        if not metadata.isbn13 and not metadata.isbn10:
            for name in ("isbn13", "isbn10"):
                value, source = self._first_non_empty(name, ordered, SECONDARY_IDENTIFIER_SOURCES)
                if value is not None:
                    setattr(metadata, name, value)
                    provenance[name] = source

        # The ISBN cover template depends on the merged identifiers
        cover_records = list(ordered)
        isbn = metadata.isbn13 or metadata.isbn10
        if isbn:
            cover_records.append(RawSourceRecord(
                source=ISBN_COVER,
                thumbnail_url=open_library_cover_url(isbn, "L", self.covers_url),
            ))
        thumbnail, source = self.resolve_field("thumbnail_url", cover_records)
        metadata.thumbnail_url = ensure_https(thumbnail)
        provenance["thumbnail_url"] = source

        self.logger.debug(f"Field provenance: {provenance}")
        return metadata, provenance

    def _first_non_empty(self, name: str, records: Iterable[RawSourceRecord],
                         sources: Sequence[str]) -> Tuple[Any, Optional[str]]:
        by_source: Dict[str, List[RawSourceRecord]] = {}
        for record in records:
            by_source.setdefault(record.source, []).append(record)

        for source in sources:
            for record in sorted(by_source.get(source, []), key=lambda r: r.sequence):
                value = getattr(record, name)
                if not is_empty(value):
                    return value, source

        return None, None


def _copy(value: Any) -> Any:
    if isinstance(value, list):
        return list(value)
    return value
