# catalog/classification/classifier.py
"""
Rule-based facet classification of books.

Four independent axes are derived from title, description, authors, publication
date, and page count: source type, functions, difficulty, and traditions. The
classifier holds no mutable state, so one instance can be shared across threads
and tasks.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Set

from ..errors import ValidationError
from ..models.facets import ClassificationLabels, BookFacets
from .taxonomy import Taxonomy, default_taxonomy


def publication_year(published_date: Optional[str]) -> Optional[int]:
    """Year from the first four characters of a free-text date, if numeric"""
    if not published_date:
        return None
    head = str(published_date).strip()[:4]
    return int(head) if head.isdigit() else None


def validate_classification_input(page_count=None, rating=None) -> None:
    """
    Reject present-but-invalid numeric input. Absent input is always fine.

    Raises:
        ValidationError: negative or non-integer page count, rating outside 0..5
    """
    if page_count is not None:
        if isinstance(page_count, bool) or not isinstance(page_count, int):
            raise ValidationError(f"page_count must be an integer, got {page_count!r}")
        if page_count < 0:
            raise ValidationError(f"page_count must not be negative, got {page_count}")

    if rating is not None:
        if isinstance(rating, bool) or not isinstance(rating, (int, float)):
            raise ValidationError(f"rating must be a number, got {rating!r}")
        if not 0 <= rating <= 5:
            raise ValidationError(f"rating must be between 0 and 5, got {rating}")


def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


class FacetClassifier:
    """
    Assigns ClassificationLabels from book text and metadata.

    All keyword, author, and threshold data comes from the Taxonomy, so the
    rules can be exercised against synthetic taxonomies.
    """

    def __init__(self, taxonomy: Optional[Taxonomy] = None):
        self.taxonomy = taxonomy or default_taxonomy()
        self.logger = logging.getLogger(self.__class__.__name__)

    def classify(self, title: str, description: str = "", authors: Sequence[str] = (),
                 published_date: Optional[str] = None, page_count: Optional[int] = None) -> ClassificationLabels:
        """
        Classify one book on every axis.

        Raises:
            ValidationError: for a negative or non-integer page count
        """
        validate_classification_input(page_count=page_count)

        text = f"{title or ''} {description or ''}".lower()
        author_text = " ".join(a for a in authors or () if a).lower()

        return ClassificationLabels(
            source_type=self.detect_source_type(text, author_text, published_date),
            functions=self.detect_functions(text),
            difficulty=self.detect_difficulty(text, page_count),
            traditions=self.detect_traditions(text, author_text),
        )

    def detect_source_type(self, text: str, author_text: str, published_date: Optional[str] = None) -> str:
        taxonomy = self.taxonomy
        primary, secondary = taxonomy.source_types[0], taxonomy.source_types[1]

        if _contains_any(text, taxonomy.primary_work_keywords):
            return primary

        canonical_author = _contains_any(author_text, taxonomy.canonical_authors)
        if canonical_author:
            return primary

        year = publication_year(published_date)
        if year is not None and year < taxonomy.primary_year_cutoff and canonical_author:
            return primary

        return secondary

    def detect_functions(self, text: str) -> tuple:
        found = {name for name, keywords in self.taxonomy.function_keywords if _contains_any(text, keywords)}
        if not found:
            return (self.taxonomy.default_function,)
        return tuple(name for name in self.taxonomy.functions if name in found)

    def detect_difficulty(self, text: str, page_count: Optional[int]) -> str:
        taxonomy = self.taxonomy
        # Difficulties are declared easiest first
        beginner, advanced = taxonomy.difficulties[0], taxonomy.difficulties[-1]

        if _contains_any(text, taxonomy.beginner_keywords):
            return beginner
        if _contains_any(text, taxonomy.advanced_keywords):
            return advanced

        if page_count is not None:
            if page_count < taxonomy.beginner_max_pages:
                return beginner
            if page_count > taxonomy.advanced_min_pages:
                return advanced

        if _contains_any(text, taxonomy.advanced_works):
            return advanced

        return taxonomy.default_difficulty

    def detect_traditions(self, text: str, author_text: str) -> tuple:
        found: Set[str] = set()
        for rule in self.taxonomy.tradition_rules:
            matched = (_contains_any(author_text, rule.author_keywords)
                       or _contains_any(text, rule.text_keywords))
            if matched and not _contains_any(author_text, rule.unless_author_keywords):
                found.update(rule.tags)
        return tuple(tag for tag in self.taxonomy.traditions if tag in found)

    def fill_missing_facets(self, existing: BookFacets, title: str, description: str = "",
                            authors: Sequence[str] = (), published_date: Optional[str] = None,
                            page_count: Optional[int] = None) -> Dict[str, object]:
        """
        Compute only the axes that are still empty on a stored book.

        Axes that already hold a value are never recomputed. An empty tradition
        result is not reported as a change.

        Returns:
            {axis: value} for the axes to update; empty if nothing is missing
        """
        missing = self.missing_axes(existing)
        if not missing:
            return {}

        labels = self.classify(title, description, authors, published_date, page_count)
        changes: Dict[str, object] = {}

        if "source_type" in missing:
            changes["source_type"] = labels.source_type
        if "functions" in missing:
            changes["functions"] = labels.functions
        if "difficulty" in missing:
            changes["difficulty"] = labels.difficulty
        if "traditions" in missing and labels.traditions:
            changes["traditions"] = labels.traditions

        return changes

    @staticmethod
    def missing_axes(existing: BookFacets) -> List[str]:
        missing = []
        if not existing.source_type:
            missing.append("source_type")
        if not existing.functions:
            missing.append("functions")
        if not existing.difficulty:
            missing.append("difficulty")
        if not existing.traditions:
            missing.append("traditions")
        return missing
