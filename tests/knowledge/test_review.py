"""Tests for the review workflow and unknown-case log."""

import pytest

from knowledge import KnowledgeBase, ReviewQueue
from knowledge.review import UNKNOWN_CASES_COLLECTION


@pytest.fixture
def kb(store):
    return KnowledgeBase(store)


@pytest.fixture
def review(kb, store):
    return ReviewQueue(kb, store, max_cases=3)


class TestReviewQueue:
    def test_submit_is_pending(self, review, kb):
        entry = review.submit("cara upgrade", "Chat admin", confidence=0.7, source="generative")
        assert review.pending() == [entry]
        assert kb.lookup("cara upgrade") is None

    def test_approve(self, review, kb):
        entry = review.submit("cara upgrade", "Chat admin", confidence=0.5, source="suggestion")
        assert review.approve(entry.id).approved is True
        assert review.pending() == []
        assert kb.lookup("cara upgrade").response == "Chat admin"

    def test_reject(self, review, kb):
        entry = review.submit("cara upgrade", "Chat admin", confidence=0.5, source="suggestion")
        assert review.reject(entry.id).approved is False
        assert review.pending() == []
        assert kb.lookup("cara upgrade") is None

    def test_auto_learn_threshold(self, review):
        high = review.submit("aaa bbb", "x", confidence=0.7, source="generative")
        review.submit("ccc ddd", "y", confidence=0.6, source="generative")
        learned = review.auto_learn()
        assert [e.id for e in learned] == [high.id]
        assert len(review.pending()) == 1

    def test_stats(self, review):
        first = review.submit("aaa bbb", "x", confidence=0.7, source="generative")
        second = review.submit("ccc ddd", "y", confidence=0.7, source="generative")
        review.approve(first.id)
        review.reject(second.id)
        review.record_unknown("halo?", None, "628")
        stats = review.stats()
        assert stats == {
            "unknown_cases": 1,
            "queued": 0,
            "learned": 1,
            "rejected": 1,
            "learning_rate": "100.0%",
        }

    def test_stats_empty(self, review):
        assert review.stats()["learning_rate"] == "0%"


class TestUnknownCases:
    def test_record(self, review, store):
        case = review.record_unknown("apa ini", "jawaban", "628123")
        assert case["message"] == "apa ini"
        assert case["sender"] == "628123"
        assert store.load_collection(UNKNOWN_CASES_COLLECTION)[0]["response"] == "jawaban"

    def test_capped_oldest_dropped(self, review):
        for i in range(5):
            review.record_unknown(f"pesan {i}", None, "628")
        assert [c["message"] for c in review.unknown_cases(10)] == [
            "pesan 4",
            "pesan 3",
            "pesan 2",
        ]

    def test_reloaded(self, kb, store):
        ReviewQueue(kb, store).record_unknown("apa ini", None, "628")
        assert len(ReviewQueue(kb, store).unknown_cases()) == 1
