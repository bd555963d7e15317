"""Learned knowledge: append-only store, similarity index, teaching and review."""

from .base import KnowledgeBase
from .index import TfidfIndex
from .models import KnowledgeEntry, LearnedMatch, Pattern, TeachingPair
from .review import ReviewQueue
from .teaching import TEACHING_RULES, TeachingParser, is_teaching_attempt

__all__ = [
    "KnowledgeBase",
    "KnowledgeEntry",
    "LearnedMatch",
    "Pattern",
    "TeachingPair",
    "TfidfIndex",
    "ReviewQueue",
    "TeachingParser",
    "TEACHING_RULES",
    "is_teaching_attempt",
]
