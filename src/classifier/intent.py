"""Intent scoring over a fixed set of keyword categories."""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

INTENT_PATTERNS: dict[str, tuple[str, ...]] = {
    "greeting": ("halo", "hai", "selamat", "pagi", "siang", "malam"),
    "ordering": ("beli", "order", "pesan", "mau", "pengen", "butuh"),
    "problem": ("error", "masalah", "gagal", "tidak", "gak", "rusak", "broken"),
    "info": ("info", "informasi", "detail", "spek", "fitur", "apa", "bagaimana"),
    "payment": ("bayar", "transfer", "dana", "ovo", "gopay", "qris", "harga"),
    "complaint": ("kecewa", "marah", "lambat", "lama", "buruk", "jelek"),
    "thanks": ("terima", "kasih", "makasih", "thanks", "thx"),
    "goodbye": ("bye", "dadah", "sampai", "jumpa"),
}

UNKNOWN_INTENT = "unknown"

_TOKEN = re.compile(r"[a-z0-9+]+")


@dataclass
class IntentResult:
    category: str
    confidence: float
    scores: dict[str, float] = field(default_factory=dict)
    product_mentioned: bool = False


def tokenize(message: str) -> list[str]:
    """Lowercase word tokens; single characters are dropped as noise."""
    return [t for t in _TOKEN.findall((message or "").lower()) if len(t) > 1]


def _keyword_hit(keyword: str, tokens: list[str]) -> bool:
    return any(keyword in t or t in keyword for t in tokens)


def detect_intent(message: str, catalog_names: Iterable[str] = ()) -> IntentResult:
    """Score every intent category and return the strongest one.

    A category scores the fraction of its keywords present in the message.
    Confidence blends the top score (60%) with bonuses for several categories
    firing at once, for a catalog name in the message, and for messages with
    some substance.
    """
    tokens = tokenize(message)
    lowered = (message or "").lower()

    scores: dict[str, float] = {}
    for category, keywords in INTENT_PATTERNS.items():
        hits = sum(1 for k in keywords if _keyword_hit(k, tokens))
        if hits:
            scores[category] = hits / len(keywords)

    product_mentioned = any(name.lower() in lowered for name in catalog_names)

    if scores:
        category = max(scores, key=scores.get)
        top = scores[category]
    else:
        category, top = UNKNOWN_INTENT, 0.0

    confidence = top * 0.6
    if len(scores) > 1:
        confidence += 0.2
    if product_mentioned:
        confidence += 0.1
    if len(lowered) > 10:
        confidence += 0.1

    return IntentResult(
        category=category,
        confidence=min(confidence, 1.0),
        scores=scores,
        product_mentioned=product_mentioned,
    )
