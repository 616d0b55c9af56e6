# catalog/classification/labels.py
"""
Display labels, descriptions, and value validation for facet values.
"""

from typing import Dict, Optional

from ..errors import ValidationError
from .taxonomy import Taxonomy, default_taxonomy

SOURCE_TYPE_LABELS = {
    "primary": "Primary Source",
    "secondary": "Secondary Source",
}

SOURCE_TYPE_DESCRIPTIONS = {
    "primary": "Written by Marx, Engels, Lenin, etc. as part of developing Marxism",
    "secondary": "Written later to explain, interpret, or critique Marxism",
}

FUNCTION_LABELS = {
    "foundational": "Foundational Text",
    "theory": "Theoretical Work",
    "introductory": "Introduction",
    "educational": "Educational Guide",
    "historical": "Historical Analysis",
    "commentary": "Commentary",
}

FUNCTION_DESCRIPTIONS = {
    "foundational": "Core texts that establish fundamental principles",
    "theory": "Develops or explains theoretical concepts",
    "introductory": "Designed for newcomers to the subject",
    "educational": "Teaching and learning resource",
    "historical": "Analyzes historical events or periods",
    "commentary": "Interprets or critiques other works",
}

DIFFICULTY_LABELS = {
    "beginner": "Beginner",
    "intermediate": "Intermediate",
    "advanced": "Advanced",
}

DIFFICULTY_DESCRIPTIONS = {
    "beginner": "Accessible to those new to Marxism",
    "intermediate": "Requires some familiarity with Marxist concepts",
    "advanced": "For readers with significant background knowledge",
}

TRADITION_LABELS = {
    "classical_marxism": "Classical Marxism",
    "leninism": "Leninism",
    "trotskyism": "Trotskyism",
    "maoism": "Maoism",
    "western_marxism": "Western Marxism",
    "marxism_leninism": "Marxism-Leninism",
    "other": "Other",
}

TRADITION_DESCRIPTIONS = {
    "classical_marxism": "Marx and Engels' original works and immediate followers",
    "leninism": "Lenin's theoretical and practical contributions",
    "trotskyism": "Trotskyist tradition and Fourth International",
    "maoism": "Mao's theories and Chinese revolutionary tradition",
    "western_marxism": "Frankfurt School and European Marxist philosophy",
    "marxism_leninism": "Soviet-era theoretical synthesis",
    "other": "Other Marxist traditions and tendencies",
}

_LABELS: Dict[str, Dict[str, str]] = {
    "source_type": SOURCE_TYPE_LABELS,
    "function": FUNCTION_LABELS,
    "difficulty": DIFFICULTY_LABELS,
    "tradition": TRADITION_LABELS,
}

_DESCRIPTIONS: Dict[str, Dict[str, str]] = {
    "source_type": SOURCE_TYPE_DESCRIPTIONS,
    "function": FUNCTION_DESCRIPTIONS,
    "difficulty": DIFFICULTY_DESCRIPTIONS,
    "tradition": TRADITION_DESCRIPTIONS,
}


def format_facet_label(axis: str, value: str) -> str:
    """Human-readable label, falling back to the raw value"""
    return _LABELS.get(axis, {}).get(value, value)


def facet_description(axis: str, value: str) -> str:
    return _DESCRIPTIONS.get(axis, {}).get(value, "")


def validate_facet_value(axis: str, value: str, taxonomy: Optional[Taxonomy] = None) -> str:
    """
    Check a caller-supplied facet value against the taxonomy.

    Raises:
        ValidationError: for an unknown axis or a value outside it
    """
    allowed = (taxonomy or default_taxonomy()).values_for(axis)
    if value not in allowed:
        raise ValidationError(f"Invalid {axis} {value!r}; expected one of {', '.join(allowed)}")
    return value


def is_valid_source_type(value: str) -> bool:
    return value in default_taxonomy().source_types


def is_valid_function(value: str) -> bool:
    return value in default_taxonomy().functions


def is_valid_difficulty(value: str) -> bool:
    return value in default_taxonomy().difficulties


def is_valid_tradition(value: str) -> bool:
    return value in default_taxonomy().traditions
