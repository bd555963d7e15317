"""Tests for deriving structured views from product text."""

from catalog import parse_catalog_entry
from catalog.parser import render_view_facet
from shared_types import Facet

NETFLIX = """🎬 *NETFLIX PREMIUM*

1 Bulan: 25k
3 Bulan: 70k (hemat 5k)
6 Bulan: 135k

✅ Private profile
✅ Ultra HD 4K

Garansi: Full Garansi
Note: max 1 device per profile
"""


class TestParsePackages:
    def test_plain_packages(self):
        entry = parse_catalog_entry("netflix", NETFLIX)
        assert [(p.duration, p.price) for p in entry.packages] == [
            ("1 Bulan", "25k"),
            ("3 Bulan", "70k"),
            ("6 Bulan", "135k"),
        ]

    def test_total_in_parentheses(self):
        entry = parse_catalog_entry("netflix", NETFLIX)
        assert entry.packages[1].total == "hemat 5k"
        assert entry.packages[1].per_unit is None

    def test_per_unit(self):
        entry = parse_catalog_entry("capcut", "12 Bulan: 120k / 10k per bulan (hemat 60k)")
        package = entry.packages[0]
        assert package.per_unit == "10k per bulan"
        assert package.total == "hemat 60k"

    def test_rupiah_prefix_and_dotted_amount(self):
        entry = parse_catalog_entry("x", "Family: Rp 50k\n1 Tahun: 1.200k")
        assert [p.price for p in entry.packages] == ["50k", "1.200k"]

    def test_markup_stripped_but_original_kept(self):
        entry = parse_catalog_entry("x", "**1 Bulan: 25k**")
        assert entry.packages[0].duration == "1 Bulan"
        assert entry.packages[0].original_line == "**1 Bulan: 25k**"


class TestParseOtherSections:
    def test_full_warranty(self):
        assert parse_catalog_entry("netflix", NETFLIX).warranty == "Full Garansi"

    def test_warranty_term(self):
        assert parse_catalog_entry("x", "Garansi 7 hari").warranty == "7 hari"
        assert parse_catalog_entry("x", "Warranty 2 months").warranty == "2 months"

    def test_warranty_without_term(self):
        assert parse_catalog_entry("x", "Garansi penuh").warranty == "Full Garansi"

    def test_features(self):
        entry = parse_catalog_entry("netflix", NETFLIX)
        assert entry.features == ["Private profile", "Ultra HD 4K"]

    def test_notes(self):
        entry = parse_catalog_entry("netflix", NETFLIX)
        assert entry.notes == ["Note: max 1 device per profile"]

    def test_separators_ignored(self):
        entry = parse_catalog_entry("x", "---\n===\n")
        assert entry.packages == [] and entry.notes == [] and entry.features == []

    def test_empty_text(self):
        entry = parse_catalog_entry("x", "")
        assert entry.raw_text == ""
        assert entry.warranty is None


class TestRenderViewFacet:
    def test_price(self):
        entry = parse_catalog_entry("netflix", NETFLIX)
        assert render_view_facet(entry, Facet.PRICE) == "1 Bulan: 25k\n3 Bulan: 70k\n6 Bulan: 135k"

    def test_features(self):
        entry = parse_catalog_entry("netflix", NETFLIX)
        assert render_view_facet(entry, Facet.FEATURES) == "✅ Private profile\n✅ Ultra HD 4K"

    def test_missing_facet_is_none(self):
        entry = parse_catalog_entry("x", "Garansi 7 hari")
        assert render_view_facet(entry, Facet.FEATURES) is None
        assert render_view_facet(entry, Facet.PRICE) is None

    def test_full_is_raw_text(self):
        entry = parse_catalog_entry("netflix", NETFLIX)
        assert render_view_facet(entry, Facet.FULL) == NETFLIX
