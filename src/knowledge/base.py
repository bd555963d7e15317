"""Append-only knowledge base of learned trigger/response pairs."""

import threading
from datetime import datetime

import structlog

from classifier import detect_intent
from shared_types import Provenance
from storage import JsonStore

from .index import TfidfIndex
from .models import (
    DERIVED_CONFIDENCE,
    OPERATOR_CONFIDENCE,
    PATTERN_MATCH_CONFIDENCE,
    KnowledgeEntry,
    LearnedMatch,
    Pattern,
)

logger = structlog.get_logger()

ENTRIES_COLLECTION = "learning/knowledge_base.json"
PATTERNS_COLLECTION = "learning/patterns.json"

_DEFAULT_CONFIDENCE = {
    Provenance.OPERATOR_TAUGHT: OPERATOR_CONFIDENCE,
    Provenance.DERIVED: DERIVED_CONFIDENCE,
}


class KnowledgeBase:
    """Learned pairs with substring and TF-IDF lookup.

    Entries are only ever appended. The single exception to immutability is
    the review flag on pending-review entries; approving one makes it
    servable. ``reset`` is the only way the entry count goes down.
    """

    def __init__(self, store: JsonStore | None = None, similarity_threshold: float = 0.6):
        self.store = store
        self.similarity_threshold = similarity_threshold
        self._entries: list[KnowledgeEntry] = []
        self._patterns: list[Pattern] = []
        self._index = TfidfIndex()
        self._lock = threading.RLock()
        self._next_id = 1
        self._load()

    # --- persistence ---

    def _load(self) -> None:
        if not self.store:
            return
        for raw in self.store.load_collection(ENTRIES_COLLECTION):
            try:
                self._entries.append(KnowledgeEntry.from_dict(raw))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("knowledge_entry_invalid", error=str(e))
        for raw in self.store.load_collection(PATTERNS_COLLECTION):
            try:
                self._patterns.append(Pattern.from_dict(raw))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("knowledge_pattern_invalid", error=str(e))

        for entry in self._entries:
            if entry.servable:
                self._index.add(entry.id, entry.trigger)
        if self._entries:
            self._next_id = max(e.id for e in self._entries) + 1
        logger.info("knowledge_loaded", entries=len(self._entries), patterns=len(self._patterns))

    def _persist(self) -> bool:
        if not self.store:
            return True
        ok = self.store.save_collection(
            ENTRIES_COLLECTION, [e.to_dict() for e in self._entries]
        )
        ok = self.store.save_collection(
            PATTERNS_COLLECTION, [p.to_dict() for p in self._patterns]
        ) and ok
        if not ok:
            logger.warning("knowledge_persist_failed")
        return ok

    # --- writes ---

    def learn(
        self,
        trigger: str,
        response: str,
        provenance: Provenance,
        confidence: float | None = None,
        source: str = "",
    ) -> KnowledgeEntry:
        """Append a new entry and index it if it can be served right away."""
        trigger = (trigger or "").strip().lower()
        response = (response or "").strip()
        if not trigger or not response:
            raise ValueError("trigger and response are required")

        if confidence is None:
            confidence = _DEFAULT_CONFIDENCE.get(provenance, 0.5)
        confidence = max(0.0, min(1.0, confidence))

        with self._lock:
            entry = KnowledgeEntry(
                id=self._next_id,
                trigger=trigger,
                response=response,
                provenance=provenance,
                confidence=confidence,
                source=source,
            )
            self._next_id += 1
            self._entries.append(entry)
            if entry.servable:
                self._activate(entry)
            self._persist()

        logger.info(
            "knowledge_learned",
            id=entry.id,
            provenance=provenance.value,
            confidence=confidence,
            source=source,
        )
        return entry

    def _activate(self, entry: KnowledgeEntry) -> None:
        # Derived entries are only reachable through the similarity pass
        if entry.provenance != Provenance.DERIVED:
            intent = detect_intent(entry.trigger)
            self._patterns.append(
                Pattern(
                    id=entry.id,
                    triggers=[entry.trigger],
                    response=entry.response,
                    intents=list(intent.scores),
                    created_at=datetime.now(),
                )
            )
        self._index.add(entry.id, entry.trigger)

    def set_review(self, entry_id: int, approved: bool) -> KnowledgeEntry | None:
        """Approve or reject a pending-review entry. Returns None if not pending."""
        with self._lock:
            entry = self.get(entry_id)
            if entry is None or entry.provenance != Provenance.PENDING_REVIEW:
                return None
            if entry.approved is not None:
                return None
            entry.approved = approved
            if approved:
                self._activate(entry)
            self._persist()
        logger.info("knowledge_reviewed", id=entry_id, approved=approved)
        return entry

    def reset(self) -> int:
        """Drop every entry and pattern. Returns the number of entries removed."""
        with self._lock:
            removed = len(self._entries)
            self._entries.clear()
            self._patterns.clear()
            self._index.clear()
            self._persist()
        logger.warning("knowledge_reset", removed=removed)
        return removed

    # --- reads ---

    def lookup(self, message: str) -> LearnedMatch | None:
        text = (message or "").strip().lower()
        if not text:
            return None

        with self._lock:
            # Newest teaching wins when several triggers overlap
            for pattern in reversed(self._patterns):
                if any(t and t in text for t in pattern.triggers):
                    return LearnedMatch(
                        entry_id=pattern.id,
                        response=pattern.response,
                        confidence=PATTERN_MATCH_CONFIDENCE,
                        method="pattern",
                    )

            results = self._index.search(text, limit=1)
            if results and results[0][1] > self.similarity_threshold:
                entry_id, score = results[0]
                entry = self.get(entry_id)
                if entry and entry.servable:
                    return LearnedMatch(
                        entry_id=entry.id,
                        response=entry.response,
                        confidence=score,
                        method="similarity",
                    )
        return None

    def get(self, entry_id: int) -> KnowledgeEntry | None:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def entries(self, provenance: Provenance | None = None) -> list[KnowledgeEntry]:
        if provenance is None:
            return list(self._entries)
        return [e for e in self._entries if e.provenance == provenance]

    def pending(self) -> list[KnowledgeEntry]:
        return [
            e
            for e in self._entries
            if e.provenance == Provenance.PENDING_REVIEW and e.approved is None
        ]

    def has_trigger(self, trigger: str) -> bool:
        trigger = (trigger or "").strip().lower()
        return any(e.trigger == trigger for e in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def stats(self) -> dict:
        by_provenance = {p.value: 0 for p in Provenance}
        for entry in self._entries:
            by_provenance[entry.provenance.value] += 1
        return {
            "total": len(self._entries),
            "patterns": len(self._patterns),
            "pending_review": len(self.pending()),
            "by_provenance": by_provenance,
            "last_learned": self._entries[-1].created_at.isoformat() if self._entries else None,
        }
