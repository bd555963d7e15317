"""Derive a structured view (packages, warranty, features, notes) from product text."""

import re

from shared_types import Facet

from .models import CatalogEntry, Package

_PRICE_LINE = re.compile(
    r"(.+?)\s*:\s*(?:Rp\s*)?(\d+(?:\.\d+)*)\s*k\s*(?:/?\s*([^(]+))?(?:\s*\(([^)]+)\))?",
    re.IGNORECASE,
)
_WARRANTY_TERM = re.compile(r"(\d+)\s*(hari|days|bulan|months)", re.IGNORECASE)
_MARKUP = re.compile(r"[`*]")
_FEATURE_MARKS = ("✅", "✓")
_SEPARATORS = {"---", "==="}


def parse_catalog_entry(name: str, raw_text: str) -> CatalogEntry:
    entry = CatalogEntry(name=name, raw_text=raw_text or "")

    for line in (raw_text or "").splitlines():
        line = line.strip()
        clean = _MARKUP.sub("", line).strip()
        if not clean or clean in _SEPARATORS:
            continue
        lowered = clean.lower()

        price = _PRICE_LINE.search(clean)
        if price:
            duration, amount, per_unit, total = price.groups()
            entry.packages.append(
                Package(
                    duration=duration.strip(),
                    price=f"{amount}k",
                    per_unit=per_unit.strip() if per_unit and per_unit.strip() else None,
                    total=total.strip() if total else None,
                    original_line=line,
                )
            )
            continue

        if "garansi" in lowered or "warranty" in lowered:
            term = _WARRANTY_TERM.search(clean)
            if "full garansi" in lowered or not term:
                entry.warranty = "Full Garansi"
            else:
                entry.warranty = f"{term.group(1)} {term.group(2)}"
            continue

        if any(mark in clean for mark in _FEATURE_MARKS):
            feature = re.sub(r"[✅✓_]", "", clean).strip()
            if feature:
                entry.features.append(feature)
            continue

        if lowered.startswith("note") or any(k in clean for k in ("max", "limit", "device")):
            entry.notes.append(clean)

    return entry


def render_view_facet(entry: CatalogEntry, facet: Facet) -> str | None:
    """Render one facet from the derived view, or None if the view lacks it."""
    if facet == Facet.WARRANTY:
        return entry.warranty
    if facet == Facet.FEATURES:
        if not entry.features:
            return None
        return "\n".join(f"✅ {f}" for f in entry.features)
    if facet == Facet.PRICE:
        if not entry.packages:
            return None
        return "\n".join(
            f"{p.duration}: {p.price}" + (f" ({p.per_unit})" if p.per_unit else "")
            for p in entry.packages
        )
    return entry.raw_text or None
