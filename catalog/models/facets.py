# catalog/models/facets.py
"""
Classification labels for the book facet taxonomy.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class ClassificationLabels:
    """
    One value per single-valued axis, ordered tuples for the multi-valued ones.
    Tuples follow taxonomy declaration order so equal input gives equal output.
    """
    source_type: str
    functions: Tuple[str, ...]
    difficulty: str
    traditions: Tuple[str, ...] = ()

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["functions"] = list(self.functions)
        data["traditions"] = list(self.traditions)
        return data


@dataclass
class BookFacets:
    """Facets as stored on a book record; any axis may still be unset"""
    source_type: Optional[str] = None
    functions: Tuple[str, ...] = ()
    difficulty: Optional[str] = None
    traditions: Tuple[str, ...] = ()
