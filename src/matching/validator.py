"""Heuristic gate deciding whether a raw fuzzy score can be trusted."""

from collections.abc import Iterable

# Similarly spelled catalog names that must not be confused with each other.
DEFAULT_CONFUSABLE_PAIRS: tuple[tuple[str, str], ...] = (
    ("canva", "capcut"),
    ("netflix", "wetv"),
    ("spotify", "disney"),
    ("youtube", "prime"),
)

SHORT_INPUT_LENGTH = 2
SHORT_INPUT_MIN_SCORE = 0.8
FIRST_CHAR_MIN_SCORE = 0.7
CONFUSABLE_MIN_SCORE = 0.8
SUBSTRING_MIN_SCORE = 0.3


def _normalize(text: str) -> str:
    return (text or "").strip().lower()


def _confusable_pair(
    text: str, candidate: str, pairs: Iterable[tuple[str, str]]
) -> tuple[str, str] | None:
    for a, b in pairs:
        if (a in text and b in candidate) or (b in text and a in candidate):
            return a, b
    return None


def is_valid_match(
    text: str,
    candidate: str,
    raw_score: float,
    confusable_pairs: Iterable[tuple[str, str]] = DEFAULT_CONFUSABLE_PAIRS,
) -> bool:
    """Decide whether raw_score between text and candidate is trustworthy.

    Rules run in order and the first one that decides wins:

    1. Inputs of two characters or less need a score of at least 0.8.
    2. A differing first character needs at least 0.7.
    3. If text and candidate each hit a different member of a confusable
       pair, an input equal to a pair member only matches itself; any other
       input needs at least 0.8.
    4. If one string contains the other, 0.3 is enough.
    5. Anything else is accepted.
    """
    text = _normalize(text)
    candidate = _normalize(candidate)
    if not text or not candidate:
        return False

    if len(text) <= SHORT_INPUT_LENGTH and raw_score < SHORT_INPUT_MIN_SCORE:
        return False

    if text[0] != candidate[0] and raw_score < FIRST_CHAR_MIN_SCORE:
        return False

    pair = _confusable_pair(text, candidate, confusable_pairs)
    if pair:
        if text in pair:
            return text == candidate
        return raw_score >= CONFUSABLE_MIN_SCORE

    if text in candidate or candidate in text:
        return raw_score >= SUBSTRING_MIN_SCORE

    return True


def word_overlap_ratio(text: str, candidate: str) -> float:
    """Share of candidate words found in (or containing) some input word."""
    input_words = _normalize(text).split()
    candidate_words = _normalize(candidate).split()
    if not candidate_words:
        return 0.0

    hits = sum(
        1
        for cw in candidate_words
        if any(w in cw or cw in w for w in input_words)
    )
    return hits / len(candidate_words)


def char_set_similarity(a: str, b: str) -> float:
    """Distinct shared characters over the larger distinct-character set."""
    set_a = set(_normalize(a))
    set_b = set(_normalize(b))
    largest = max(len(set_a), len(set_b))
    if largest == 0:
        return 0.0
    return len(set_a & set_b) / largest
