"""String similarity as a Dice coefficient over character bigrams."""

import re
from collections import Counter

_WHITESPACE = re.compile(r"\s+")


def _bigrams(text: str) -> Counter:
    return Counter(text[i : i + 2] for i in range(len(text) - 1))


def similarity(a: str, b: str) -> float:
    """Score two strings in [0, 1].

    Whitespace is ignored. Symmetric, and identical strings score 1.0.
    Strings shorter than two characters have no bigrams, so they score 0
    unless they are equal.
    """
    first = _WHITESPACE.sub("", a or "")
    second = _WHITESPACE.sub("", b or "")

    if first == second:
        return 1.0
    if len(first) < 2 or len(second) < 2:
        return 0.0

    first_bigrams = _bigrams(first)
    second_bigrams = _bigrams(second)
    overlap = sum((first_bigrams & second_bigrams).values())

    return (2.0 * overlap) / (len(first) + len(second) - 2)


def best_match(query: str, candidates: list[str]) -> tuple[str | None, float]:
    """Return the candidate with the highest similarity to query, and its score."""
    best_name = None
    best_score = 0.0
    for candidate in candidates:
        score = similarity(query, candidate)
        if score > best_score:
            best_name, best_score = candidate, score
    return best_name, best_score
