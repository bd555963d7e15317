"""Fixtures for cascade tests: a deterministic cascade over the sample data."""

import json

import pytest

from cascade import build_cascade
from catalog import CatalogResolver
from curated import CuratedKind, CuratedResolver, normalize_entries
from observability import Metrics
from variants import FirstVariant


def _curated(data_dir, name, kind):
    records = json.loads((data_dir / name).read_text(encoding="utf-8"))
    return CuratedResolver(normalize_entries(records, kind))


@pytest.fixture
def metrics():
    return Metrics()


@pytest.fixture
def cascade(data_dir, catalog_store, metrics):
    promos = json.loads((data_dir / "promo.json").read_text(encoding="utf-8"))
    return build_cascade(
        CatalogResolver(catalog_store),
        _curated(data_dir, "faq.json", CuratedKind.FAQ),
        _curated(data_dir, "sop.json", CuratedKind.SOP),
        load_promos=lambda: promos,
        chooser=FirstVariant(),
        metrics=metrics,
    )
