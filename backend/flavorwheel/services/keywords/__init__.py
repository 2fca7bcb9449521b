"""Keyword-based descriptor extraction."""
from flavorwheel.services.keywords.extractor import (
    extract_descriptors_with_intensity,
    extract_from_structured,
    reduce_term,
)

__all__ = [
    "extract_descriptors_with_intensity",
    "extract_from_structured",
    "reduce_term",
]
