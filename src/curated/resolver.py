"""Rank a message against curated trigger keywords."""

from matching import similarity
from variants import VariantChooser

from .models import CuratedEntry


class CuratedResolver:
    """Substring hits win outright; otherwise the best fuzzy score must clear a threshold."""

    def __init__(
        self,
        entries: list[CuratedEntry],
        threshold: float = 0.6,
        noise_floor: float = 0.1,
    ):
        self.entries = list(entries)
        self.threshold = threshold
        self.noise_floor = noise_floor

    def match(self, message: str) -> CuratedEntry | None:
        text = (message or "").strip().lower()
        if not text:
            return None

        best_entry = None
        best_score = 0.0
        for entry in self.entries:
            for keyword in entry.triggers:
                if keyword in text or text in keyword:
                    return entry
                score = similarity(text, keyword)
                if score > self.noise_floor and score > best_score:
                    best_entry, best_score = entry, score

        if best_entry is not None and best_score > self.threshold:
            return best_entry
        return None

    def respond(self, message: str, chooser: VariantChooser) -> str | None:
        entry = self.match(message)
        if entry is None:
            return None
        return chooser.choose(entry.responses)
