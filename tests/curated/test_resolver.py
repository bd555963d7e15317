"""Tests for curated FAQ/SOP normalization and matching."""

import json

import pytest

from curated import CuratedKind, CuratedResolver, normalize_entries, normalize_entry
from variants import FirstVariant


@pytest.fixture
def faq_entries(data_dir):
    records = json.loads((data_dir / "faq.json").read_text(encoding="utf-8"))
    return normalize_entries(records, CuratedKind.FAQ)


@pytest.fixture
def faq(faq_entries):
    return CuratedResolver(faq_entries)


class TestNormalize:
    def test_sample_faq(self, faq_entries):
        assert [e.id for e in faq_entries] == ["faq_pembayaran", "faq_pengiriman", "faq_jam"]

    def test_answer_field_fallback(self, faq_entries):
        assert faq_entries[1].responses == [
            "Akun dikirim maksimal 1x24 jam setelah pembayaran terkonfirmasi ya Kak 🙏"
        ]

    def test_string_trigger_lowercased(self):
        entry = normalize_entry({"keyword": "Cara Bayar", "response": "QRIS"}, CuratedKind.FAQ)
        assert entry.triggers == ["cara bayar"]
        assert entry.responses == ["QRIS"]

    def test_sop_uses_trigger_field(self):
        entry = normalize_entry({"trigger": ["klaim"], "response": "kirim bukti"}, CuratedKind.SOP)
        assert entry.kind == CuratedKind.SOP
        assert entry.id == "sop_0"

    def test_malformed_records_skipped(self):
        records = [
            "not a dict",
            {"keyword": []},
            {"keyword": "promo"},
            {"keyword": ["ok"], "response": ["", "  "]},
            {"keyword": "jam buka", "response": "08.00"},
        ]
        entries = normalize_entries(records, CuratedKind.FAQ)
        assert len(entries) == 1
        assert entries[0].id == "faq_4"

    def test_none_records(self):
        assert normalize_entries(None, CuratedKind.SOP) == []


class TestCuratedResolver:
    def test_substring_hit(self, faq):
        assert faq.match("cara bayar gimana").id == "faq_pembayaran"

    def test_message_inside_keyword(self, faq):
        assert faq.match("bayar").id == "faq_pembayaran"

    def test_fuzzy_hit(self, faq):
        assert faq.match("metode pembayran").id == "faq_pembayaran"

    def test_fuzzy_below_threshold(self, faq):
        assert faq.match("netflix berapa?") is None

    def test_empty(self, faq):
        assert faq.match("") is None
        assert faq.match(None) is None

    def test_respond_first_variant(self, faq):
        reply = faq.respond("cara bayar?", FirstVariant())
        assert reply.startswith("Pembayaran bisa via QRIS")

    def test_respond_no_match(self, faq):
        assert faq.respond("curhat", FirstVariant()) is None

    def test_custom_threshold(self, faq_entries):
        strict = CuratedResolver(faq_entries, threshold=0.95)
        assert strict.match("metode pembayran") is None
