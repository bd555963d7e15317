"""Tests for intent scoring."""

import pytest

from classifier import detect_intent
from classifier.intent import tokenize


class TestTokenize:
    def test_drops_single_characters(self):
        assert tokenize("a b cd") == ["cd"]

    def test_lowercases(self):
        assert tokenize("Halo KAK") == ["halo", "kak"]


class TestDetectIntent:
    def test_greeting(self):
        result = detect_intent("halo kak")
        assert result.category == "greeting"
        assert result.confidence == pytest.approx(0.1)

    def test_ordering_with_product(self):
        result = detect_intent("mau beli netflix dong", ["netflix"])
        assert result.category == "ordering"
        assert result.product_mentioned is True
        assert result.scores["ordering"] == pytest.approx(2 / 6)
        assert result.confidence == pytest.approx(2 / 6 * 0.6 + 0.1 + 0.1)

    def test_multiple_categories_bonus(self):
        result = detect_intent("mau bayar")
        assert set(result.scores) >= {"ordering", "payment"}
        assert result.confidence >= 0.2

    def test_unknown(self):
        result = detect_intent("")
        assert result.category == "unknown"
        assert result.confidence == 0.0
        assert result.scores == {}

    def test_confidence_capped(self):
        result = detect_intent(
            "halo mau beli bayar transfer error info kecewa makasih bye netflix",
            ["netflix"],
        )
        assert result.confidence <= 1.0
