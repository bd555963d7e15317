"""Seedable selection among equivalent response variants."""

import random
from collections.abc import Sequence


class VariantChooser:
    """Pick one of several valid phrasings.

    Pass a seed (or a ``random.Random``) to make picks reproducible.
    """

    def __init__(self, seed: int | None = None, rng: random.Random | None = None):
        self._rng = rng or random.Random(seed)

    def choose(self, variants: Sequence[str] | str) -> str:
        if isinstance(variants, str):
            return variants
        if not variants:
            return ""
        return self._rng.choice(list(variants))


class FirstVariant(VariantChooser):
    """Always returns the first variant; handy for deterministic output."""

    def choose(self, variants: Sequence[str] | str) -> str:
        if isinstance(variants, str):
            return variants
        return variants[0] if variants else ""
