"""Top-level message handling: sessions, owner commands, teaching, cascade, fallbacks."""

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime

import structlog

from knowledge import KnowledgeBase, ReviewQueue, TeachingParser, is_teaching_attempt
from knowledge.models import (
    DERIVED_CONFIDENCE,
    GENERATIVE_CONFIDENCE,
    USER_SUGGESTED_CONFIDENCE,
)
from llm import GenerativeResponder
from observability import Metrics
from safety import SafetyGuard
from shared_types import Provenance

from . import texts
from .commands import LearningCommands
from .guided import GuidedCommands
from .orchestrator import ResponseCascade
from .results import Matched

logger = structlog.get_logger()

DERIVABLE_STAGES = ("faq", "sop", "catalog")


@dataclass
class InboundMessage:
    sender_id: str
    conversation_id: str
    text: str | None
    timestamp: datetime = field(default_factory=datetime.now)
    media_ref: str | None = None


@dataclass
class Reply:
    """``text`` is None when nothing could answer and no fallback is configured."""

    text: str | None
    source: str
    stage: str = ""


class ResponseCache:
    """Bounded TTL cache of replies keyed by the lowercased message."""

    def __init__(self, ttl: float = 300.0, max_entries: int = 1000):
        self.ttl = ttl
        self.max_entries = max_entries
        self._items: OrderedDict[str, tuple[float, Reply]] = OrderedDict()
        self._lock = threading.Lock()

    @staticmethod
    def key(text: str) -> str:
        return text.strip().lower()

    def get(self, text: str) -> Reply | None:
        key = self.key(text)
        with self._lock:
            item = self._items.get(key)
            if item is None:
                return None
            stored_at, reply = item
            if time.monotonic() - stored_at > self.ttl:
                del self._items[key]
                return None
            return reply

    def put(self, text: str, reply: Reply) -> None:
        key = self.key(text)
        with self._lock:
            self._items[key] = (time.monotonic(), reply)
            self._items.move_to_end(key)
            while len(self._items) > self.max_entries:
                self._items.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        return len(self._items)


def sender_number(sender_id: str) -> str:
    """'62812...@s.whatsapp.net' -> '62812...'"""
    return (sender_id or "").split("@")[0]


class MessageRouter:
    """Routes one inbound message to exactly one reply.

    Order: guided sessions, owner learning commands, teaching, cache,
    response cascade, learned knowledge, generative fallback. Any
    unexpected error becomes the fixed system-error apology.
    """

    def __init__(
        self,
        cascade: ResponseCascade,
        kb: KnowledgeBase,
        review: ReviewQueue,
        guard: SafetyGuard,
        parser: TeachingParser | None = None,
        commands: LearningCommands | None = None,
        guided: GuidedCommands | None = None,
        generative: GenerativeResponder | None = None,
        owner_ids=(),
        moderator_ids=(),
        metrics: Metrics | None = None,
        cache: ResponseCache | None = None,
        derive_learning: bool = True,
        derived_confidence: float = DERIVED_CONFIDENCE,
        learned_accept: float = 0.7,
    ):
        self.cascade = cascade
        self.kb = kb
        self.review = review
        self.guard = guard
        self.parser = parser or TeachingParser()
        self.commands = commands or LearningCommands(kb, review)
        self.guided = guided
        self.generative = generative
        self.owner_ids = {sender_number(o) for o in owner_ids}
        self.moderator_ids = {sender_number(m) for m in moderator_ids}
        self.metrics = metrics or Metrics()
        self.cache = cache if cache is not None else ResponseCache()
        self.derive_learning = derive_learning
        self.derived_confidence = derived_confidence
        self.learned_accept = learned_accept

    def is_owner(self, sender_id: str) -> bool:
        return sender_number(sender_id) in self.owner_ids

    def is_moderator(self, sender_id: str) -> bool:
        return sender_number(sender_id) in self.moderator_ids

    def handle(self, message: InboundMessage) -> Reply:
        with self.metrics.timer("router.handle"):
            try:
                reply = self._route(message)
            except Exception as e:
                logger.error(
                    "router_failed",
                    error=str(e),
                    error_type=type(e).__name__,
                    sender=message.sender_id,
                )
                self.metrics.counter("router.errors")
                return Reply(texts.SYSTEM_ERROR, "error")
        self.metrics.counter(f"router.{reply.source}")
        return reply

    def _route(self, message: InboundMessage) -> Reply:
        if not isinstance(message.text, str) or not message.text.strip():
            return Reply(texts.INVALID_INPUT, "invalid_input")

        text = message.text.strip()
        sender = message.sender_id
        owner = self.is_owner(sender)

        if self.guided:
            key = (sender, message.conversation_id)
            guided_reply = self.guided.handle(
                key, text, sender=sender, can_start=owner or self.is_moderator(sender)
            )
            if guided_reply is not None:
                return Reply(guided_reply, "session")

        if self.commands.is_command(text):
            if not owner:
                return Reply(texts.OWNER_ONLY, "command")
            reply = self.commands.handle(text)
            self.cache.clear()
            return Reply(reply, "command")

        teaching = self._handle_teaching(text, sender, owner)
        if teaching is not None:
            return teaching

        cached = self.cache.get(text)
        if cached is not None:
            return Reply(cached.text, "cache", cached.stage)

        result = self.cascade.run(text)
        if isinstance(result, Matched):
            reply = Reply(result.response, "cascade", result.stage)
            self.cache.put(text, reply)
            self._derive(text, result)
            return reply

        learned = self._lookup_learned(text)
        if learned is not None:
            return learned

        return self._fallback(text, sender)

    # --- teaching ---

    def _handle_teaching(self, text: str, sender: str, owner: bool) -> Reply | None:
        attempt = is_teaching_attempt(text)
        pair = self.parser.parse(text)
        if not attempt and pair is None:
            return None

        if not owner:
            if pair is None or not attempt:
                return None
            verdict = self.guard.validate_teaching(pair.trigger, pair.response, {"sender": sender})
            if verdict.can_learn:
                self.review.submit(
                    pair.trigger,
                    pair.response,
                    confidence=USER_SUGGESTED_CONFIDENCE,
                    source=f"suggestion:{sender_number(sender)}",
                )
            return Reply(texts.SUGGESTION_RECEIVED, "teaching", "suggestion")

        if pair is None:
            return Reply(texts.TEACH_FORMAT_HELP, "teaching", "format_help")

        try:
            verdict = self.guard.validate_teaching(pair.trigger, pair.response, {"sender": sender})
            if not verdict.can_learn:
                return Reply(self._blocked_text(verdict), "teaching", "blocked")

            self.kb.learn(pair.trigger, pair.response, Provenance.OPERATOR_TAUGHT, source="owner")
        except ValueError as e:
            logger.warning("teaching_failed", error=str(e), pattern=pair.pattern)
            return Reply(texts.TEACH_ERROR, "teaching", "error")

        self.cache.clear()
        self.metrics.counter("knowledge.learned")
        return Reply(
            texts.TEACH_SUCCESS.format(
                trigger=pair.trigger,
                response=pair.response,
                score=verdict.confidence * 100,
            ),
            "teaching",
            pair.pattern,
        )

    @staticmethod
    def _blocked_text(verdict) -> str:
        text = texts.TEACH_BLOCKED_HEADER.format(reason=verdict.reason)
        if verdict.issues:
            text += "Issues:\n" + "".join(f"• {i['message']}\n" for i in verdict.issues)
        return text + texts.TEACH_BLOCKED_FOOTER

    # --- learning from answers ---

    def _derive(self, text: str, result: Matched) -> None:
        if not self.derive_learning or result.stage not in DERIVABLE_STAGES:
            return
        if self.kb.has_trigger(text):
            return
        try:
            self.kb.learn(
                text,
                result.response,
                Provenance.DERIVED,
                confidence=self.derived_confidence,
                source=result.stage,
            )
        except ValueError as e:
            logger.debug("derive_skipped", error=str(e))
            return
        self.metrics.counter("knowledge.learned")

    def _lookup_learned(self, text: str) -> Reply | None:
        match = self.kb.lookup(text)
        if match is None or match.confidence <= self.learned_accept:
            return None
        if not self.guard.validate_text(match.response).safe:
            logger.warning("learned_response_blocked", entry_id=match.entry_id)
            return None
        return Reply(match.response, "learned", match.method)

    def _fallback(self, text: str, sender: str) -> Reply:
        if self.generative is None:
            self.review.record_unknown(text, None, sender_number(sender))
            return Reply(None, "none", "deferred")

        self.metrics.counter("router.generative_calls")
        reply = self.generative.respond(sender, text)
        self.review.record_unknown(text, reply, sender_number(sender))
        if not reply:
            return Reply(None, "none", "deferred")

        verdict = self.guard.validate_text(reply)
        if not verdict.safe:
            logger.warning("generative_response_blocked", issues=verdict.issues)
            return Reply(texts.GENERATIVE_BLOCKED, "generative", "blocked")

        if not self.kb.has_trigger(text):
            self.review.submit(
                text,
                reply,
                confidence=GENERATIVE_CONFIDENCE * verdict.score,
                source="generative",
            )
        return Reply(reply, "generative", "llm")
