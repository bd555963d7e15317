"""Individual response-cascade stages.

Each stage is a callable taking the trimmed message and returning
``Matched`` or ``NoMatch``. Stages never see the sender; anything
sender-specific (sessions, owner commands) is handled by the router first.
"""

import re
from collections.abc import Callable

from catalog import CatalogResolver
from classifier import MoodLabel, detect_mood
from curated import CuratedResolver
from variants import VariantChooser

from . import texts
from .results import NO_MATCH, Matched, StageResult

GREETINGS = ("halo", "hai", "hello", "hi", "selamat pagi", "selamat siang", "selamat malam")
THANKS = ("makasih", "terima kasih", "thanks", "thank you", "thx")
CATALOG_LISTING = ("produk apa aja", "ada produk apa", "list produk")
GENERAL_PRICING = ("harga semua", "berapa harga semua")

_RECOGNIZED_WORDS = re.compile(
    r"\b(apa|ada|mau|bisa|gimana|bagaimana|kenapa|kapan|dimana|berapa|info|harga|garansi|order|beli)\b"
)
_LETTER = re.compile(r"[a-zA-Z]")


def _has_phrase(text: str, phrases: tuple[str, ...]) -> bool:
    return any(re.search(rf"(?<!\w){re.escape(p)}(?!\w)", text) for p in phrases)


class ShortcutStage:
    """Unambiguous canned replies: greetings, thanks, catalog listing, pricing."""

    name = "shortcut"

    def __init__(
        self,
        catalog_names: Callable[[], list[str]],
        unavailable: dict[str, str] | None = None,
    ):
        self.catalog_names = catalog_names
        self.unavailable = texts.UNAVAILABLE_PRODUCTS if unavailable is None else unavailable

    def __call__(self, message: str) -> StageResult:
        text = message.lower()

        if _has_phrase(text, GREETINGS):
            return Matched(texts.WELCOME, self.name)
        if _has_phrase(text, THANKS):
            return Matched(texts.THANKS, self.name)

        names = self.catalog_names()
        if text == "menu" or any(p in text for p in CATALOG_LISTING):
            return Matched(self._catalog_listing(names), self.name)

        mentioned = [n for n in names if n in text]
        if any(p in text for p in GENERAL_PRICING) or (
            "harga" in text and "produk" in text and not mentioned
        ):
            return Matched(texts.GENERAL_PRICING, self.name)

        for product, reply in self.unavailable.items():
            if product in text and product not in names:
                return Matched(reply, self.name)

        if "diskon" in text or "discount" in text or ("bisa" in text and "murah" in text):
            return Matched(texts.DISCOUNT, self.name)

        return NO_MATCH

    @staticmethod
    def _catalog_listing(names: list[str]) -> str:
        if not names:
            return texts.CATALOG_HEADER.strip()
        lines = "\n".join(f"• {n.capitalize()}" for n in names)
        return f"{texts.CATALOG_HEADER}{lines}{texts.CATALOG_FOOTER}"


class MoodStage:
    name = "mood"

    def __call__(self, message: str) -> StageResult:
        mood = detect_mood(message)
        if mood == MoodLabel.ANGRY:
            return Matched(texts.ANGRY, self.name)
        if mood == MoodLabel.OFF_TOPIC:
            return Matched(texts.OFF_TOPIC, self.name)
        return NO_MATCH


class ReaderStage:
    """Delegates to an optional natural-reading responder."""

    name = "reader"

    def __init__(self, reader: Callable[[str], str | None] | None = None):
        self.reader = reader

    def __call__(self, message: str) -> StageResult:
        if self.reader is None:
            return NO_MATCH
        reply = self.reader(message)
        return Matched(reply, self.name) if reply else NO_MATCH


class CuratedStage:
    def __init__(self, name: str, resolver: CuratedResolver, chooser: VariantChooser):
        self.name = name
        self.resolver = resolver
        self.chooser = chooser

    def __call__(self, message: str) -> StageResult:
        reply = self.resolver.respond(message, self.chooser)
        return Matched(reply, self.name) if reply else NO_MATCH


class PromoStage:
    """Serves the first active promo banner when the message mentions promos."""

    name = "promo"

    def __init__(self, load_promos: Callable[[], list]):
        self.load_promos = load_promos

    def __call__(self, message: str) -> StageResult:
        if "promo" not in message.lower():
            return NO_MATCH
        for promo in self.load_promos():
            if not isinstance(promo, dict) or not promo.get("active", True):
                continue
            banner = promo.get("banner")
            if isinstance(banner, str) and banner.strip():
                return Matched(banner.strip(), self.name)
        return NO_MATCH


class CatalogStage:
    name = "catalog"

    def __init__(self, resolver: CatalogResolver):
        self.resolver = resolver

    def __call__(self, message: str) -> StageResult:
        match = self.resolver.resolve(message)
        return Matched(match.text, self.name) if match else NO_MATCH


class GibberishStage:
    """Asks for clarification on messages too short or noisy to route."""

    name = "clarify"

    def __call__(self, message: str) -> StageResult:
        if len(message) < 3 or not _LETTER.search(message):
            return Matched(texts.CLARIFY, self.name)
        if len(message) < 10 and not _RECOGNIZED_WORDS.search(message.lower()):
            return Matched(texts.NOT_UNDERSTOOD, self.name)
        return NO_MATCH
