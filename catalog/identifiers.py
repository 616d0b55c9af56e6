# catalog/identifiers.py
"""
ISBN parsing, checksum validation, and ISBN-keyed cover URLs.
"""

import re
from typing import Dict, List, Optional

from .errors import ValidationError

_SEPARATORS = re.compile(r"[-\s]")
_ISBN13 = re.compile(r"^\d{13}$")
_ISBN10 = re.compile(r"^\d{9}[\dX]$", re.IGNORECASE)

COVER_SIZES = ("S", "M", "L")


def parse_isbn(raw: Optional[str]) -> Dict[str, Optional[str]]:
    """
    Classify a raw string as an ISBN-13 or ISBN-10 candidate.

    Hyphens and whitespace are stripped first. The format alone decides which
    slot is filled, so at most one of the two is ever set. No checksum is
    checked here; see validate_isbn.

    Returns:
        {"isbn10": ..., "isbn13": ...} with both None for free text
    """
    cleaned = _SEPARATORS.sub("", raw or "")

    isbn10 = None
    isbn13 = None

    if _ISBN13.match(cleaned):
        isbn13 = cleaned
    elif _ISBN10.match(cleaned):
        isbn10 = cleaned.upper()

    return {"isbn10": isbn10, "isbn13": isbn13}


def validate_isbn(isbn: Optional[str]) -> bool:
    """Checksum test for a 13-digit or 10-character ISBN"""
    cleaned = _SEPARATORS.sub("", isbn or "")

    if _ISBN13.match(cleaned):
        total = sum(int(digit) * (1 if index % 2 == 0 else 3) for index, digit in enumerate(cleaned))
        return total % 10 == 0

    if _ISBN10.match(cleaned):
        total = 0
        for index, char in enumerate(cleaned.upper()):
            value = 10 if char == "X" else int(char)
            total += value * (10 - index)
        return total % 11 == 0

    return False


def require_valid_isbn(raw: str) -> Dict[str, Optional[str]]:
    """
    Parse and validate in one step.

    Raises:
        ValidationError: if the input is not an ISBN or its check digit is wrong
    """
    parsed = parse_isbn(raw)
    isbn = parsed["isbn13"] or parsed["isbn10"]
    if not isbn:
        raise ValidationError(f"Not an ISBN-10 or ISBN-13: {raw!r}")
    if not validate_isbn(isbn):
        raise ValidationError(f"ISBN check digit mismatch: {raw!r}")
    return parsed


def clean_isbn(isbn_str) -> str:
    """
    Clean an ISBN copied out of a spreadsheet export.

    Args:
        isbn_str: Raw value, possibly wrapped as ="1234567890"

    Returns:
        Cleaned ISBN string or empty string if the length is wrong
    """
    if not isbn_str:
        return ""

    # Remove Excel formula formatting (e.g., ="1234567890")
    clean = re.sub(r'^="?([0-9Xx]+)"?$', r"\1", str(isbn_str).strip())
    clean = re.sub(r"[^0-9X]", "", clean.upper())

    if len(clean) in (10, 13):
        return clean
    return ""


def open_library_cover_url(isbn: str, size: str = "L",
                           base_url: str = "https://covers.openlibrary.org") -> str:
    """Open Library cover image URL keyed by ISBN"""
    if size not in COVER_SIZES:
        raise ValidationError(f"Cover size must be one of {COVER_SIZES}, got {size!r}")
    cleaned = _SEPARATORS.sub("", isbn)
    return f"{base_url}/b/isbn/{cleaned}-{size}.jpg"


def google_books_cover_url(isbn: str) -> str:
    """Google Books front-cover image URL keyed by ISBN"""
    cleaned = _SEPARATORS.sub("", isbn)
    return f"https://books.google.com/books/content?id={cleaned}&printsec=frontcover&img=1&zoom=1"


def format_authors(authors: List[str]) -> str:
    """Join author names for display"""
    if not authors:
        return "Unknown Author"
    if len(authors) == 1:
        return authors[0]
    if len(authors) == 2:
        return " and ".join(authors)
    return f"{', '.join(authors[:-1])}, and {authors[-1]}"
