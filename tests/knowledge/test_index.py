"""Tests for the TF-IDF similarity index."""

import pytest

from knowledge import TfidfIndex
from knowledge.index import tokenize


class TestTfidfIndex:
    def test_empty_index(self):
        assert TfidfIndex().search("netflix") == []

    def test_same_terms_any_order(self):
        index = TfidfIndex()
        index.add(1, "jam berapa admin online")
        [(doc_id, score)] = index.search("admin online jam berapa")
        assert doc_id == 1
        assert score == pytest.approx(1.0)

    def test_no_shared_terms(self):
        index = TfidfIndex()
        index.add(1, "cara refund")
        assert index.search("promo netflix") == []

    def test_ranking(self):
        index = TfidfIndex()
        index.add(1, "cara refund saldo")
        index.add(2, "cara bayar pakai qris")
        results = index.search("refund saldo")
        assert results[0][0] == 1
        assert len(results) == 1

    def test_readding_replaces_document(self):
        index = TfidfIndex()
        index.add(1, "netflix")
        index.add(1, "youtube")
        assert len(index) == 1
        assert index.search("netflix") == []

    def test_blank_document_ignored(self):
        index = TfidfIndex()
        index.add(1, "   ")
        assert len(index) == 0

    def test_clear(self):
        index = TfidfIndex()
        index.add(1, "netflix")
        index.clear()
        assert len(index) == 0
        assert index.search("netflix") == []

    def test_tokenize(self):
        assert tokenize("Harga Netflix, 1 bulan?") == ["harga", "netflix", "1", "bulan"]

    def test_refits_after_add(self):
        index = TfidfIndex()
        index.add(1, "cara refund")
        assert index.search("promo netflix") == []
        index.add(2, "promo netflix")
        [(doc_id, score)] = index.search("promo netflix")
        assert doc_id == 2
        assert score == pytest.approx(1.0)

    def test_limit_and_order(self):
        index = TfidfIndex()
        index.add(1, "harga netflix")
        index.add(2, "harga netflix premium sharing")
        index.add(3, "harga youtube")
        results = index.search("harga netflix", limit=2)
        assert [doc_id for doc_id, _ in results] == [1, 2]
        assert results[0][1] > results[1][1]

    def test_single_character_terms_indexed(self):
        index = TfidfIndex()
        index.add(1, "paket a")
        assert index.search("a")[0][0] == 1
