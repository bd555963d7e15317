"""Map a free-form message to a catalog item and the facet being asked about."""

from collections.abc import Iterable

import structlog

from matching import (
    DEFAULT_CONFUSABLE_PAIRS,
    best_match,
    char_set_similarity,
    is_valid_match,
    word_overlap_ratio,
)
from shared_types import Facet

from .models import CatalogMatch
from .store import CatalogStore, is_not_found

logger = structlog.get_logger()

# Checked in order; the first group with a hit decides the facet.
FACET_KEYWORDS: list[tuple[Facet, tuple[str, ...]]] = [
    (Facet.WARRANTY, ("garansi", "warranty", "jaminan")),
    (Facet.PRICE, ("harga", "price", "berapa", "biaya", "paket", "package")),
    (Facet.FEATURES, ("fitur", "feature", "spek", "benefit", "keunggulan")),
    (Facet.FULL, ("info lengkap", "detail", "semua", "full info", "penjelasan")),
]

PRODUCT_INTENT_KEYWORDS = (
    "info", "detail", "spek", "fitur", "apa itu", "tentang", "deskripsi",
    "mau", "pengen", "butuh", "cari", "ada gak", "ada tidak", "ada ga",
    "jual", "tersedia", "ready", "stock", "beli", "order", "pesan",
    "rekomendasi", "suggest", "pilihan", "varian", "tipe", "jenis",
    "harga", "berapa", "biaya",
)

ACCOUNT_TROUBLE_KEYWORDS = (
    "login", "masuk", "akses", "password", "username", "email", "akun saya",
    "error", "gagal", "tidak bisa", "gak bisa", "masalah", "kendala", "trouble",
    "proses", "status", "sudah sampai", "kapan selesai", "belum sampai",
)


def detect_facet(message: str) -> Facet:
    """Which facet the message asks about; price when nothing specific is asked."""
    text = (message or "").lower()
    for facet, keywords in FACET_KEYWORDS:
        if any(k in text for k in keywords):
            return facet
    return Facet.PRICE


def is_product_query(message: str, names: Iterable[str]) -> bool:
    """False for account/access trouble that carries no product-intent word.

    An explicit catalog name always counts as a product query, so "kenapa
    netflix error" still reaches the catalog.
    """
    text = (message or "").lower()
    if any(name.lower() in text for name in names):
        return True
    wants_product = any(k in text for k in PRODUCT_INTENT_KEYWORDS)
    account_trouble = any(k in text for k in ACCOUNT_TROUBLE_KEYWORDS)
    return not (account_trouble and not wants_product)


class CatalogResolver:
    """Three passes, first success wins: hard substring, best fuzzy, weak fuzzy."""

    def __init__(
        self,
        store: CatalogStore,
        fuzzy_threshold: float = 0.6,
        weak_threshold: float = 0.5,
        word_overlap_min: float = 0.5,
        char_similarity_min: float = 0.4,
        confusable_pairs: Iterable[tuple[str, str]] = DEFAULT_CONFUSABLE_PAIRS,
    ):
        self.store = store
        self.fuzzy_threshold = fuzzy_threshold
        self.weak_threshold = weak_threshold
        self.word_overlap_min = word_overlap_min
        self.char_similarity_min = char_similarity_min
        self.confusable_pairs = tuple(tuple(p) for p in confusable_pairs)

    def resolve(self, message: str) -> CatalogMatch | None:
        text = (message or "").strip().lower()
        if not text:
            return None

        names = self.store.names()
        if not names:
            return None
        facet = detect_facet(text)

        for name in names:
            if name in text:
                match = self._render(name, facet, "hard", 1.0)
                if match:
                    return match

        if not is_product_query(text, names):
            logger.debug("catalog_prefilter_blocked", message=text[:60])
            return None

        candidate, score = best_match(text, names)
        if candidate is None:
            return None
        if not is_valid_match(text, candidate, score, self.confusable_pairs):
            return None

        if score > self.fuzzy_threshold:
            match = self._render(candidate, facet, "fuzzy", score)
            if match:
                return match

        if (
            score > self.weak_threshold
            and word_overlap_ratio(text, candidate) > self.word_overlap_min
            and char_set_similarity(text, candidate) > self.char_similarity_min
        ):
            return self._render(candidate, facet, "weak_fuzzy", score)

        return None

    def _render(self, name: str, facet: Facet, method: str, score: float) -> CatalogMatch | None:
        text = self.store.render_facet(name, facet)
        if is_not_found(text):
            logger.info("catalog_render_missing", product=name, facet=facet.value)
            return None
        return CatalogMatch(name=name, facet=facet, text=text, method=method, score=score)
