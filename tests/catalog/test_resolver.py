"""Tests for catalog message resolution."""

import pytest

from catalog import CatalogResolver, detect_facet, is_product_query
from shared_types import Facet


@pytest.fixture
def resolver(catalog_store):
    return CatalogResolver(catalog_store)


class TestDetectFacet:
    @pytest.mark.parametrize(
        "message,facet",
        [
            ("garansi netflix berapa lama", Facet.WARRANTY),
            ("harga netflix", Facet.PRICE),
            ("fitur youtube apa aja", Facet.FEATURES),
            ("info lengkap capcut", Facet.FULL),
            ("netflix", Facet.PRICE),
        ],
    )
    def test_facets(self, message, facet):
        assert detect_facet(message) == facet


class TestIsProductQuery:
    def test_account_trouble_blocked(self):
        assert is_product_query("login gagal terus", ["netflix"]) is False

    def test_trouble_with_product_intent(self):
        assert is_product_query("mau beli akun baru, login gagal", []) is True

    def test_name_always_counts(self):
        assert is_product_query("kenapa netflix error", ["netflix"]) is True

    def test_plain_message(self):
        assert is_product_query("yang premium ada", []) is True


class TestCatalogResolver:
    def test_hard_match_price(self, resolver):
        match = resolver.resolve("netflix berapa?")
        assert match.name == "netflix"
        assert match.method == "hard"
        assert match.facet == Facet.PRICE
        assert match.text.startswith("🎬 *NETFLIX PREMIUM*")

    def test_hard_match_warranty(self, resolver):
        match = resolver.resolve("garansi youtube")
        assert match.facet == Facet.WARRANTY
        assert match.text == "30 hari"

    def test_hard_match_bypasses_prefilter(self, resolver):
        match = resolver.resolve("kenapa netflix error")
        assert match is not None
        assert match.name == "netflix"

    def test_fuzzy_typo(self, resolver):
        match = resolver.resolve("netflx")
        assert match.name == "netflix"
        assert match.method == "fuzzy"
        assert match.score == pytest.approx(8 / 11)

    def test_weak_fuzzy(self, catalog_store):
        resolver = CatalogResolver(catalog_store, fuzzy_threshold=0.95, weak_threshold=0.5)
        match = resolver.resolve("netfli")
        assert match.method == "weak_fuzzy"
        assert match.name == "netflix"

    def test_score_at_weak_threshold_rejected(self, resolver):
        assert resolver.resolve("netflx harga") is None

    def test_account_trouble_not_routed(self, resolver):
        assert resolver.resolve("password saya salah terus") is None

    def test_confusable_not_matched(self, resolver):
        assert resolver.resolve("canva") is None

    def test_unrelated(self, resolver):
        assert resolver.resolve("asdkjh") is None

    def test_empty(self, resolver):
        assert resolver.resolve("") is None
        assert resolver.resolve(None) is None

    def test_empty_catalog(self, tmp_path):
        from catalog import CatalogStore

        assert CatalogResolver(CatalogStore(tmp_path)).resolve("netflix") is None


class TestMixedCaseCatalog:
    def test_resolves_from_capitalized_file(self, tmp_path, data_dir):
        from catalog import CatalogStore
        from variants import FirstVariant

        (tmp_path / "Netflix.txt").write_text(
            (data_dir / "products" / "netflix.txt").read_text(encoding="utf-8"), encoding="utf-8"
        )
        match = CatalogResolver(CatalogStore(tmp_path, FirstVariant())).resolve(
            "kenapa netflix mahal"
        )
        assert match.name == "netflix"
        assert match.facet == Facet.PRICE
        assert "NETFLIX PREMIUM" in match.text
