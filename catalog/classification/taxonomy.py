# catalog/classification/taxonomy.py
"""
Immutable classification taxonomy loaded from JSON data.
"""

import json
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from ..errors import ValidationError

DEFAULT_TAXONOMY_PATH = Path(__file__).resolve().parent.parent / "data" / "taxonomy.json"


@dataclass(frozen=True)
class TraditionRule:
    """
    Adds every tag when an author or text keyword matches, unless an
    author matches one of unless_author_keywords.
    """
    tags: Tuple[str, ...]
    author_keywords: Tuple[str, ...] = ()
    text_keywords: Tuple[str, ...] = ()
    unless_author_keywords: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Taxonomy:
    """Facet values plus every keyword, author, and threshold the classifier uses"""
    source_types: Tuple[str, ...]
    functions: Tuple[str, ...]
    difficulties: Tuple[str, ...]
    traditions: Tuple[str, ...]

    primary_work_keywords: Tuple[str, ...] = ()
    canonical_authors: Tuple[str, ...] = ()
    primary_year_cutoff: int = 1940

    # (function, keywords) pairs in declaration order
    function_keywords: Tuple[Tuple[str, Tuple[str, ...]], ...] = ()
    default_function: str = "educational"

    beginner_keywords: Tuple[str, ...] = ()
    advanced_keywords: Tuple[str, ...] = ()
    beginner_max_pages: int = 150
    advanced_min_pages: int = 400
    advanced_works: Tuple[str, ...] = ()
    default_difficulty: str = "intermediate"

    tradition_rules: Tuple[TraditionRule, ...] = field(default_factory=tuple)

    def __post_init__(self):
        unknown_functions = [name for name, _ in self.function_keywords if name not in self.functions]
        if unknown_functions:
            raise ValidationError(f"Keyword lists for unknown functions: {unknown_functions}")
        if self.default_function not in self.functions:
            raise ValidationError(f"Default function {self.default_function!r} is not a function value")
        if self.default_difficulty not in self.difficulties:
            raise ValidationError(f"Default difficulty {self.default_difficulty!r} is not a difficulty value")
        for rule in self.tradition_rules:
            unknown = [tag for tag in rule.tags if tag not in self.traditions]
            if unknown:
                raise ValidationError(f"Tradition rule uses unknown tags: {unknown}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Taxonomy":
        def words(key: str) -> Tuple[str, ...]:
            return tuple(word.lower() for word in data.get(key, ()))

        try:
            return cls(
                source_types=tuple(data["source_types"]),
                functions=tuple(data["functions"]),
                difficulties=tuple(data["difficulties"]),
                traditions=tuple(data["traditions"]),
                primary_work_keywords=words("primary_work_keywords"),
                canonical_authors=words("canonical_authors"),
                primary_year_cutoff=int(data.get("primary_year_cutoff", 1940)),
                function_keywords=tuple(
                    (name, tuple(word.lower() for word in keywords))
                    for name, keywords in data.get("function_keywords", {}).items()
                ),
                default_function=data.get("default_function", "educational"),
                beginner_keywords=words("beginner_keywords"),
                advanced_keywords=words("advanced_keywords"),
                beginner_max_pages=int(data.get("beginner_max_pages", 150)),
                advanced_min_pages=int(data.get("advanced_min_pages", 400)),
                advanced_works=words("advanced_works"),
                default_difficulty=data.get("default_difficulty", "intermediate"),
                tradition_rules=tuple(
                    TraditionRule(
                        tags=tuple(rule["tags"]),
                        author_keywords=tuple(w.lower() for w in rule.get("author_keywords", ())),
                        text_keywords=tuple(w.lower() for w in rule.get("text_keywords", ())),
                        unless_author_keywords=tuple(w.lower() for w in rule.get("unless_author_keywords", ())),
                    )
                    for rule in data.get("tradition_rules", ())
                ),
            )
        except KeyError as e:
            raise ValidationError(f"Taxonomy is missing required key {e}") from e

    def values_for(self, axis: str) -> Tuple[str, ...]:
        axes: Dict[str, Tuple[str, ...]] = {
            "source_type": self.source_types,
            "function": self.functions,
            "difficulty": self.difficulties,
            "tradition": self.traditions,
        }
        if axis not in axes:
            raise ValidationError(f"Unknown facet axis {axis!r}")
        return axes[axis]


def load_taxonomy(path: Optional[Union[str, Path]] = None) -> Taxonomy:
    """Load a taxonomy from a JSON file; the packaged default when no path is given"""
    if path is None:
        return default_taxonomy()
    with open(path, encoding="utf-8") as f:
        return Taxonomy.from_dict(json.load(f))


@lru_cache(maxsize=1)
def default_taxonomy() -> Taxonomy:
    with open(DEFAULT_TAXONOMY_PATH, encoding="utf-8") as f:
        return Taxonomy.from_dict(json.load(f))
