"""Owner review of candidate knowledge and a log of unanswered messages."""

import threading
from datetime import datetime

import structlog

from shared_types import Provenance
from storage import JsonStore

from .base import KnowledgeBase
from .models import KnowledgeEntry

logger = structlog.get_logger()

UNKNOWN_CASES_COLLECTION = "learning/unknown_cases.json"


class ReviewQueue:
    """Pending-review entries live in the knowledge base; this adds the workflow.

    Candidates (generative answers, suggestions from regular users) are
    appended as ``pending_review`` entries and only become servable once
    approved, either by the owner or by ``auto_learn`` when their confidence
    clears ``auto_learn_min``.
    """

    def __init__(
        self,
        kb: KnowledgeBase,
        store: JsonStore | None = None,
        max_cases: int = 200,
        auto_learn_min: float = 0.6,
    ):
        self.kb = kb
        self.store = store
        self.max_cases = max_cases
        self.auto_learn_min = auto_learn_min
        self._lock = threading.Lock()
        self._cases: list[dict] = store.load_collection(UNKNOWN_CASES_COLLECTION) if store else []

    def submit(self, trigger: str, response: str, confidence: float, source: str) -> KnowledgeEntry:
        return self.kb.learn(
            trigger,
            response,
            Provenance.PENDING_REVIEW,
            confidence=confidence,
            source=source,
        )

    def pending(self) -> list[KnowledgeEntry]:
        return self.kb.pending()

    def approve(self, entry_id: int) -> KnowledgeEntry | None:
        return self.kb.set_review(entry_id, approved=True)

    def reject(self, entry_id: int) -> KnowledgeEntry | None:
        return self.kb.set_review(entry_id, approved=False)

    def auto_learn(self) -> list[KnowledgeEntry]:
        """Approve every pending entry whose confidence exceeds auto_learn_min."""
        learned = []
        for entry in self.kb.pending():
            if entry.confidence > self.auto_learn_min:
                approved = self.approve(entry.id)
                if approved:
                    learned.append(approved)
        logger.info("review_auto_learn", learned=len(learned))
        return learned

    def record_unknown(self, message: str, response: str | None, sender: str) -> dict:
        case = {
            "id": int(datetime.now().timestamp() * 1000),
            "message": message,
            "response": response,
            "sender": sender,
            "timestamp": datetime.now().isoformat(),
        }
        with self._lock:
            self._cases.append(case)
            if len(self._cases) > self.max_cases:
                self._cases = self._cases[-self.max_cases :]
            if self.store:
                self.store.save_collection(UNKNOWN_CASES_COLLECTION, self._cases)
        return case

    def unknown_cases(self, limit: int = 10) -> list[dict]:
        return list(reversed(self._cases[-limit:]))

    def stats(self) -> dict:
        reviewed = self.kb.entries(Provenance.PENDING_REVIEW)
        learned = sum(1 for e in reviewed if e.approved is True)
        rejected = sum(1 for e in reviewed if e.approved is False)
        total_cases = len(self._cases)
        return {
            "unknown_cases": total_cases,
            "queued": len(self.kb.pending()),
            "learned": learned,
            "rejected": rejected,
            "learning_rate": f"{(learned / total_cases * 100):.1f}%" if total_cases else "0%",
        }
