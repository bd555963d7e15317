"""Mood and intent classification."""

from .intent import INTENT_PATTERNS, IntentResult, detect_intent
from .mood import MOOD_TABLE, MoodLabel, detect_mood

__all__ = [
    "MoodLabel",
    "MOOD_TABLE",
    "detect_mood",
    "IntentResult",
    "INTENT_PATTERNS",
    "detect_intent",
]
