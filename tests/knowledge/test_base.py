"""Tests for the append-only knowledge base."""

import pytest

from knowledge import KnowledgeBase
from knowledge.base import ENTRIES_COLLECTION, PATTERNS_COLLECTION
from knowledge.models import PATTERN_MATCH_CONFIDENCE
from shared_types import Provenance


@pytest.fixture
def kb(store):
    return KnowledgeBase(store)


class TestLearn:
    def test_operator_taught_is_servable(self, kb):
        entry = kb.learn("Cara Refund", "Refund diproses 1x24 jam", Provenance.OPERATOR_TAUGHT)
        assert entry.trigger == "cara refund"
        assert entry.confidence == 1.0
        assert entry.servable

    def test_derived_default_confidence(self, kb):
        entry = kb.learn("jam buka", "08.00", Provenance.DERIVED)
        assert entry.confidence == 0.8

    def test_confidence_clamped(self, kb):
        entry = kb.learn("a b", "c", Provenance.DERIVED, confidence=3.0)
        assert entry.confidence == 1.0

    def test_requires_trigger_and_response(self, kb):
        with pytest.raises(ValueError):
            kb.learn("  ", "x", Provenance.DERIVED)
        with pytest.raises(ValueError):
            kb.learn("x", "", Provenance.DERIVED)

    def test_ids_monotonic_across_reset(self, kb):
        first = kb.learn("satu", "1", Provenance.DERIVED)
        second = kb.learn("dua", "2", Provenance.DERIVED)
        assert second.id == first.id + 1
        kb.reset()
        third = kb.learn("tiga", "3", Provenance.DERIVED)
        assert third.id > second.id

    def test_pending_not_servable_until_approved(self, kb):
        entry = kb.learn("cara upgrade", "Chat admin ya", Provenance.PENDING_REVIEW, confidence=0.5)
        assert not entry.servable
        assert kb.lookup("cara upgrade") is None

        kb.set_review(entry.id, approved=True)
        assert kb.lookup("cara upgrade").response == "Chat admin ya"

    def test_set_review_only_once(self, kb):
        entry = kb.learn("x y", "z", Provenance.PENDING_REVIEW, confidence=0.5)
        assert kb.set_review(entry.id, approved=False) is entry
        assert kb.set_review(entry.id, approved=True) is None
        assert kb.lookup("x y") is None

    def test_set_review_rejects_non_pending(self, kb):
        entry = kb.learn("x y", "z", Provenance.OPERATOR_TAUGHT)
        assert kb.set_review(entry.id, approved=True) is None
        assert kb.set_review(999, approved=True) is None


class TestLookup:
    def test_substring_pattern(self, kb):
        kb.learn("cara refund", "Refund 1x24 jam", Provenance.OPERATOR_TAUGHT)
        match = kb.lookup("Gimana CARA REFUND kak?")
        assert match.method == "pattern"
        assert match.confidence == PATTERN_MATCH_CONFIDENCE
        assert match.response == "Refund 1x24 jam"

    def test_newest_pattern_wins(self, kb):
        kb.learn("harga", "A", Provenance.OPERATOR_TAUGHT)
        kb.learn("harga netflix", "B", Provenance.OPERATOR_TAUGHT)
        assert kb.lookup("harga netflix dong").response == "B"
        assert kb.lookup("harga capcut").response == "A"

    def test_similarity(self, kb):
        kb.learn("jam berapa admin online", "08.00 - 22.00", Provenance.OPERATOR_TAUGHT)
        match = kb.lookup("admin online jam berapa")
        assert match.method == "similarity"
        assert match.confidence == pytest.approx(1.0)

    def test_similarity_below_threshold(self, store):
        kb = KnowledgeBase(store, similarity_threshold=0.99)
        kb.learn("jam berapa admin online", "08.00", Provenance.OPERATOR_TAUGHT)
        assert kb.lookup("admin online") is None

    def test_empty_message(self, kb):
        assert kb.lookup("") is None
        assert kb.lookup(None) is None

    def test_derived_not_a_substring_pattern(self, kb):
        kb.learn("ya", "Bisa bayar pakai QRIS", Provenance.DERIVED)
        assert kb.stats()["patterns"] == 0
        assert kb.lookup("saya ingin tanya soal lain dong") is None

    def test_derived_reachable_by_similarity(self, kb):
        kb.learn("cara bayar gimana", "Bisa bayar pakai QRIS", Provenance.DERIVED)
        match = kb.lookup("gimana cara bayar")
        assert match.method == "similarity"
        assert match.response == "Bisa bayar pakai QRIS"


class TestPersistence:
    def test_reload(self, store):
        kb = KnowledgeBase(store)
        kb.learn("cara refund", "Refund 1x24 jam", Provenance.OPERATOR_TAUGHT)
        kb.learn("cara upgrade", "Chat admin", Provenance.PENDING_REVIEW, confidence=0.5)

        reloaded = KnowledgeBase(store)
        assert len(reloaded) == 2
        assert reloaded.lookup("cara refund").response == "Refund 1x24 jam"
        assert reloaded.lookup("cara upgrade") is None
        assert reloaded.learn("baru", "x", Provenance.DERIVED).id == 3

    def test_collections_written(self, store):
        KnowledgeBase(store).learn("cara refund", "x", Provenance.OPERATOR_TAUGHT)
        assert len(store.load_collection(ENTRIES_COLLECTION)) == 1
        assert store.load_collection(PATTERNS_COLLECTION)[0]["triggers"] == ["cara refund"]

    def test_invalid_records_skipped(self, store):
        store.save_collection(ENTRIES_COLLECTION, [{"trigger": "no id"}])
        assert len(KnowledgeBase(store)) == 0

    def test_without_store(self):
        kb = KnowledgeBase()
        kb.learn("cara refund", "x", Provenance.OPERATOR_TAUGHT)
        assert kb.lookup("cara refund") is not None


class TestReads:
    def test_has_trigger(self, kb):
        kb.learn("Cara Refund", "x", Provenance.OPERATOR_TAUGHT)
        assert kb.has_trigger(" cara refund ")
        assert not kb.has_trigger("cara bayar")

    def test_entries_by_provenance(self, kb):
        kb.learn("a b", "1", Provenance.OPERATOR_TAUGHT)
        kb.learn("c d", "2", Provenance.DERIVED)
        assert len(kb.entries()) == 2
        assert [e.trigger for e in kb.entries(Provenance.DERIVED)] == ["c d"]

    def test_stats(self, kb):
        assert kb.stats()["last_learned"] is None
        kb.learn("a b", "1", Provenance.OPERATOR_TAUGHT)
        kb.learn("c d", "2", Provenance.PENDING_REVIEW, confidence=0.5)
        stats = kb.stats()
        assert stats["total"] == 2
        assert stats["patterns"] == 1
        assert stats["pending_review"] == 1
        assert stats["by_provenance"]["operator_taught"] == 1
