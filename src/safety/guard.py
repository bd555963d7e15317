"""Content-policy gate for taught pairs and outgoing learned responses."""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

import structlog

logger = structlog.get_logger()

TOXIC_PATTERNS = (
    "anjing", "bangsat", "kontol", "memek", "tai", "bego", "tolol", "goblok",
    "fuck", "shit", "damn", "asshole", "bitch", "bastard",
)

BUSINESS_RULES = (
    "netflix ori", "disney ori", "spotify ori", "prime ori",
    "beli di tempat lain", "lebih murah di", "mending beli",
    "gratis selamanya", "illegal", "bajakan", "crack",
    "kompetitor", "pesaing", "scam", "penipu", "bohong",
    "gratis", "free", "cuma-cuma", "tanpa bayar",
)

WHITELIST_PHRASES = (
    "terima kasih", "makasih", "thanks", "good", "bagus",
    "mantap", "oke", "siap", "baik",
)

TOXIC_CONTENT = "toxic_content"
BUSINESS_VIOLATION = "business_violation"


def _word_hits(phrases: tuple[str, ...], text: str) -> list[str]:
    """Phrases present in text as whole words ("tai" must not hit "detail")."""
    return [p for p in phrases if re.search(rf"(?<!\w){re.escape(p)}(?!\w)", text)]


@dataclass
class SafetyVerdict:
    safe: bool = True
    score: float = 1.0
    issues: list[str] = field(default_factory=list)
    blocked_rules: list[str] = field(default_factory=list)


@dataclass
class TeachingVerdict:
    can_learn: bool
    confidence: float
    reason: str = ""
    issues: list[dict] = field(default_factory=list)


class SafetyGuard:
    """Whole-word checks against toxic words and business rules.

    Scores: clean 1.0, toxic 0.2, business violation 0.1; a whitelisted
    phrase adds 0.2 (capped at 1.0) but never makes unsafe content safe.
    """

    def __init__(
        self,
        toxic_patterns: Iterable[str] = TOXIC_PATTERNS,
        business_rules: Iterable[str] = BUSINESS_RULES,
        whitelist: Iterable[str] = WHITELIST_PHRASES,
    ):
        self.toxic_patterns = tuple(toxic_patterns)
        self.business_rules = tuple(business_rules)
        self.whitelist = tuple(whitelist)
        self.stats = {"checks": 0, "blocked": 0}

    def validate_text(self, text: str | None) -> SafetyVerdict:
        self.stats["checks"] += 1
        verdict = SafetyVerdict()
        if not text:
            return verdict
        lowered = text.lower()

        if _word_hits(self.toxic_patterns, lowered):
            verdict.safe = False
            verdict.score = 0.2
            verdict.issues.append(TOXIC_CONTENT)

        violations = _word_hits(self.business_rules, lowered)
        if violations:
            verdict.safe = False
            verdict.score = 0.1
            verdict.issues.append(BUSINESS_VIOLATION)
            verdict.blocked_rules = violations

        if any(p in lowered for p in self.whitelist):
            verdict.score = min(1.0, verdict.score + 0.2)

        if not verdict.safe:
            self.stats["blocked"] += 1
        return verdict

    def validate_teaching(
        self, trigger: str, response: str, metadata: dict | None = None
    ) -> TeachingVerdict:
        """Both halves must pass for the pair to be learned."""
        trigger_check = self.validate_text(trigger)
        response_check = self.validate_text(response)
        can_learn = trigger_check.safe and response_check.safe
        issues = trigger_check.issues + response_check.issues

        reason = ""
        if not can_learn:
            blocked = trigger_check.blocked_rules + response_check.blocked_rules
            if blocked:
                reason = "Melanggar business rules: " + ", ".join(blocked)
            elif TOXIC_CONTENT in issues:
                reason = "Mengandung konten toxic atau tidak profesional"
            else:
                reason = "Konten tidak sesuai standar customer service"
            logger.info(
                "teaching_blocked",
                reason=reason,
                sender=(metadata or {}).get("sender"),
            )

        return TeachingVerdict(
            can_learn=can_learn,
            confidence=min(trigger_check.score, response_check.score),
            reason=reason,
            issues=[{"message": issue} for issue in issues],
        )

    def get_stats(self) -> dict:
        return {
            "toxic_patterns": len(self.toxic_patterns),
            "business_rules": len(self.business_rules),
            "whitelist_phrases": len(self.whitelist),
            **self.stats,
        }
