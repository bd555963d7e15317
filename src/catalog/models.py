"""Data models for catalog entries and resolver results."""

from dataclasses import dataclass, field

from shared_types import Facet


@dataclass
class Package:
    duration: str
    price: str
    per_unit: str | None = None
    total: str | None = None
    original_line: str = ""


@dataclass
class CatalogEntry:
    """A catalog item: raw source text plus the view derived from it.

    Only ``raw_text`` is ever stored; the other fields are rebuilt by
    ``catalog.parser.parse_catalog_entry`` whenever they are needed.
    """

    name: str
    raw_text: str
    packages: list[Package] = field(default_factory=list)
    warranty: str | None = None
    features: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)


@dataclass
class CatalogMatch:
    name: str
    facet: Facet
    text: str
    method: str  # hard | fuzzy | weak_fuzzy
    score: float = 1.0
