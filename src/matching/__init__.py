"""Fuzzy string matching: similarity primitive and match validation."""

from .similarity import best_match, similarity
from .validator import (
    DEFAULT_CONFUSABLE_PAIRS,
    char_set_similarity,
    is_valid_match,
    word_overlap_ratio,
)

__all__ = [
    "similarity",
    "best_match",
    "is_valid_match",
    "word_overlap_ratio",
    "char_set_similarity",
    "DEFAULT_CONFUSABLE_PAIRS",
]
