"""In-memory TF-IDF index over learned trigger texts."""

import re

import numpy as np
from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.metrics.pairwise import cosine_similarity

_TOKEN = re.compile(r"\w+", re.UNICODE)


def tokenize(text: str) -> list[str]:
    return _TOKEN.findall((text or "").lower())


class TfidfIndex:
    """Cosine similarity between a query and every indexed document.

    Documents are only ever added; ``clear`` drops everything. The
    vectorizer is refit lazily on the next search after any change. IDF is
    sklearn's smoothed form (``ln((N + 1) / (df + 1)) + 1``), so a single
    document still produces usable weights.
    """

    def __init__(self):
        self._docs: dict[int, str] = {}
        self._vectorizer: TfidfVectorizer | None = None
        self._matrix = None
        self._ids: list[int] = []
        self._stale = True

    def __len__(self) -> int:
        return len(self._docs)

    def add(self, doc_id: int, text: str) -> None:
        if not tokenize(text):
            return
        self._docs[doc_id] = text
        self._stale = True

    def clear(self) -> None:
        self._docs.clear()
        self._vectorizer = None
        self._matrix = None
        self._ids = []
        self._stale = True

    def _refit(self) -> None:
        self._ids = list(self._docs)
        self._vectorizer = TfidfVectorizer(
            tokenizer=tokenize, token_pattern=None, lowercase=False
        )
        self._matrix = self._vectorizer.fit_transform([self._docs[i] for i in self._ids])
        self._stale = False

    def search(self, query: str, limit: int = 5) -> list[tuple[int, float]]:
        """Return (doc_id, cosine) pairs, best first, skipping zero scores."""
        if not tokenize(query) or not self._docs:
            return []
        if self._stale:
            self._refit()

        scores = cosine_similarity(self._vectorizer.transform([query]), self._matrix)[0]
        order = np.argsort(-scores, kind="stable")
        return [
            (self._ids[i], float(scores[i])) for i in order[:limit] if scores[i] > 0
        ]
