"""Curated FAQ / SOP matching."""

from .models import CuratedEntry, CuratedKind, normalize_entries, normalize_entry
from .resolver import CuratedResolver

__all__ = [
    "CuratedEntry",
    "CuratedKind",
    "CuratedResolver",
    "normalize_entry",
    "normalize_entries",
]
