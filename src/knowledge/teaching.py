"""Turn an operator's natural-language teaching message into a trigger/response pair."""

import re
from dataclasses import dataclass

from .models import TeachingPair

# Words that mark a message as an attempt to teach, parseable or not.
TEACHING_KEYWORDS = (
    "ajari bot", "ajarin bot", "teach bot", "bot learn", "ingat ini", "remember",
    "jawaban untuk", "responnya", "bilang aja", "katakan", "bales dengan",
    "jangan nanya balik", "jangan tanya balik", "langsung jawab", "responmu jangan",
    "jawab langsung", "bilang begini", "kalo ada yang nanya", "kalau ditanya",
    "saat ditanya",
)

_QUOTES = "\"'“”‘’`"
_REPLY_VERB = r"\s*,?\s*\b(?:{verbs})\b\s+"


@dataclass(frozen=True)
class TeachingRule:
    name: str
    regex: re.Pattern


def _rule(name: str, pattern: str) -> TeachingRule:
    return TeachingRule(name, re.compile(pattern, re.IGNORECASE | re.DOTALL))


# Evaluated in order, first match wins. Every regex defines the named
# groups ``trigger`` and ``response``.
TEACHING_RULES: list[TeachingRule] = [
    _rule(
        "explicit_arrow",
        r"(?:ajari bot|ajarin bot|teach bot|ingat ini|remember)\s*:?\s*"
        r"(?P<trigger>.+?)\s*(?:->|=>|→|=)\s*(?P<response>.+)",
    ),
    _rule(
        "answer_for",
        r"jawaban untuk\s+(?P<trigger>.+?)\s+(?:adalah|ya|itu)\s+(?P<response>.+)",
    ),
    _rule(
        "if_asked",
        r"(?:kalo ada yang nanya|kalau ada yang nanya|kalau ditanya|kalo ditanya|saat ditanya)\s+"
        r"(?P<trigger>.+?)" + _REPLY_VERB.format(verbs="bilang|jawab|respon|katakan")
        + r"(?P<response>.+)",
    ),
    _rule(
        "dont_ask_back",
        r"jangan (?:nanya|tanya) balik\s+"
        r"(?:(?:saat|kalau|kalo|ketika) (?:ada yang )?(?:tanya|nanya|ditanya)\s+)?"
        r"(?P<trigger>.+?)" + _REPLY_VERB.format(verbs="langsung|bilang|jawab")
        + r"(?P<response>.+)",
    ),
    _rule(
        "instead_of",
        r"responmu jangan\s+(?P<trigger>.+?)" + _REPLY_VERB.format(verbs="tapi|bilang")
        + r"(?P<response>.+)",
    ),
    _rule(
        "answer_directly",
        r"langsung jawab\s+(?P<trigger>.+?)\s+dengan\s+(?P<response>.+)",
    ),
    _rule(
        "just_say",
        r"bilang aja\s+(?P<response>.+?)\s+untuk\s+(?P<trigger>.+)",
    ),
    _rule(
        "should_be",
        r"responnya\s+(?P<trigger>.+?)\s+(?:harusnya|seharusnya|ganti jadi)\s+(?P<response>.+)",
    ),
    _rule(
        "reply_with",
        r"bales dengan\s+(?P<response>.+?)\s+untuk\s+(?P<trigger>.+)",
    ),
]


def _clean(text: str) -> str:
    return text.strip().strip(_QUOTES).strip()


def is_teaching_attempt(message: str) -> bool:
    text = (message or "").lower()
    return any(k in text for k in TEACHING_KEYWORDS)


class TeachingParser:
    def __init__(self, rules: list[TeachingRule] | None = None):
        self.rules = list(rules) if rules is not None else list(TEACHING_RULES)

    def parse(self, message: str) -> TeachingPair | None:
        """Extract (trigger, response), or None when no rule matches."""
        text = (message or "").strip()
        if not text:
            return None

        for rule in self.rules:
            match = rule.regex.search(text)
            if not match:
                continue
            trigger = _clean(match.group("trigger"))
            response = _clean(match.group("response"))
            if trigger and response:
                return TeachingPair(trigger=trigger, response=response, pattern=rule.name)
        return None
