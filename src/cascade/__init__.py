"""Response cascade, guided admin sessions and the top-level message router."""

from .commands import LearningCommands
from .guided import GuidedCommands
from .orchestrator import ResponseCascade, build_cascade
from .results import NO_MATCH, Matched, NoMatch, StageResult
from .router import InboundMessage, MessageRouter, Reply, ResponseCache
from .sessions import Session, SessionManager

__all__ = [
    "ResponseCascade",
    "build_cascade",
    "Matched",
    "NoMatch",
    "NO_MATCH",
    "StageResult",
    "MessageRouter",
    "InboundMessage",
    "Reply",
    "ResponseCache",
    "LearningCommands",
    "GuidedCommands",
    "Session",
    "SessionManager",
]
