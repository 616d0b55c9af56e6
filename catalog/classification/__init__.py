"""
Facet classification of books: source type, functions, difficulty, traditions.
"""

from .taxonomy import Taxonomy, TraditionRule, load_taxonomy, default_taxonomy
from .classifier import FacetClassifier, validate_classification_input, publication_year
from .labels import (
    format_facet_label,
    facet_description,
    validate_facet_value,
    is_valid_source_type,
    is_valid_function,
    is_valid_difficulty,
    is_valid_tradition,
)
from .batch import FacetCSVProcessor

__all__ = [
    "Taxonomy",
    "TraditionRule",
    "load_taxonomy",
    "default_taxonomy",
    "FacetClassifier",
    "validate_classification_input",
    "publication_year",
    "format_facet_label",
    "facet_description",
    "validate_facet_value",
    "is_valid_source_type",
    "is_valid_function",
    "is_valid_difficulty",
    "is_valid_tradition",
    "FacetCSVProcessor",
]
