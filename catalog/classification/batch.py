# catalog/classification/batch.py
"""
Batch facet filling over a CSV export of stored book records.
"""

import logging
from typing import List, Optional, Tuple

import pandas as pd

from ..errors import ValidationError
from ..models.facets import BookFacets
from .classifier import FacetClassifier, validate_classification_input
from .labels import validate_facet_value

LIST_SEPARATOR = ";"


class FacetCSVProcessor:
    """
    Loads book rows from CSV, fills missing facet columns, and writes them back.

    Expected columns: title, description, authors, published_date, page_count,
    and optionally source_type, functions, difficulty, traditions, rating.
    List columns (authors, functions, traditions) are ';'-separated.
    Each row is classified independently of the others.
    """

    FACET_COLUMNS = ("source_type", "functions", "difficulty", "traditions")

    def __init__(self, classifier: Optional[FacetClassifier] = None):
        self.classifier = classifier or FacetClassifier()
        self.logger = logging.getLogger(self.__class__.__name__)

    def load_books(self, csv_path: str, sample_size: Optional[int] = None) -> pd.DataFrame:
        """
        Load book rows from CSV.

        Args:
            csv_path: Path to the CSV file
            sample_size: Optional limit on number of rows to load

        Returns:
            DataFrame with every facet column present
        """
        self.logger.info(f"Loading books from {csv_path}")
        df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)

        if sample_size:
            df = df.head(sample_size).reset_index(drop=True)

        for column in self.FACET_COLUMNS:
            if column not in df.columns:
                df[column] = ""

        self.logger.info(f"Loaded {len(df)} books")
        return df

    def fill_frame(self, df: pd.DataFrame) -> Tuple[pd.DataFrame, int, int]:
        """
        Fill missing facets row by row.

        Returns:
            (updated frame, updated count, skipped count)
        """
        df = df.copy()
        updated = 0
        skipped = 0

        for index, row in df.iterrows():
            try:
                changes = self._row_changes(row)
            except ValidationError as e:
                self.logger.warning(f"Skipping row {index} ({row.get('title', '')!r}): {e}")
                skipped += 1
                continue

            if not changes:
                skipped += 1
                continue

            for axis, value in changes.items():
                df.at[index, axis] = LIST_SEPARATOR.join(value) if isinstance(value, tuple) else value

            self.logger.info(f"Updated: {row.get('title', '')} -> {', '.join(sorted(changes))}")
            updated += 1

        self.logger.info(f"Facet fill complete. Updated: {updated}, skipped: {skipped}")
        return df, updated, skipped

    def process_csv(self, csv_path: str, output_path: str, sample_size: Optional[int] = None) -> Tuple[int, int]:
        df = self.load_books(csv_path, sample_size)
        filled, updated, skipped = self.fill_frame(df)
        filled.to_csv(output_path, index=False)
        self.logger.info(f"Wrote {len(filled)} rows to {output_path}")
        return updated, skipped

    def _row_changes(self, row: pd.Series) -> dict:
        page_count = _safe_int(row.get("page_count"))
        rating = _safe_float(row.get("rating"))
        validate_classification_input(page_count=page_count, rating=rating)

        existing = BookFacets(
            source_type=_safe_str(row.get("source_type")),
            functions=tuple(_split(row.get("functions"))),
            difficulty=_safe_str(row.get("difficulty")),
            traditions=tuple(_split(row.get("traditions"))),
        )
        taxonomy = self.classifier.taxonomy
        if existing.source_type:
            validate_facet_value("source_type", existing.source_type, taxonomy)
        if existing.difficulty:
            validate_facet_value("difficulty", existing.difficulty, taxonomy)
        for value in existing.functions:
            validate_facet_value("function", value, taxonomy)
        for value in existing.traditions:
            validate_facet_value("tradition", value, taxonomy)

        return self.classifier.fill_missing_facets(
            existing,
            title=_safe_str(row.get("title")) or "",
            description=_safe_str(row.get("description")) or "",
            authors=_split(row.get("authors")),
            published_date=_safe_str(row.get("published_date")),
            page_count=page_count,
        )


def _safe_str(value) -> Optional[str]:
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


def _safe_int(value) -> Optional[int]:
    text = _safe_str(value)
    if text is None:
        return None
    try:
        number = float(text)
    except ValueError as e:
        raise ValidationError(f"Not a number: {text!r}") from e
    if not number.is_integer():
        raise ValidationError(f"page_count must be an integer, got {text!r}")
    return int(number)


def _safe_float(value) -> Optional[float]:
    text = _safe_str(value)
    if text is None:
        return None
    try:
        return float(text)
    except ValueError as e:
        raise ValidationError(f"Not a number: {text!r}") from e


def _split(value) -> List[str]:
    text = _safe_str(value)
    if not text:
        return []
    return [part.strip() for part in text.split(LIST_SEPARATOR) if part.strip()]
