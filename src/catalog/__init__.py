"""Product catalog text store, derived views and message resolution."""

from .models import CatalogEntry, CatalogMatch, Package
from .parser import parse_catalog_entry
from .resolver import CatalogResolver, detect_facet, is_product_query
from .store import NOT_FOUND, CatalogStore

__all__ = [
    "CatalogEntry",
    "CatalogMatch",
    "Package",
    "parse_catalog_entry",
    "CatalogStore",
    "CatalogResolver",
    "NOT_FOUND",
    "detect_facet",
    "is_product_query",
]
