"""Data models for learned knowledge."""

from dataclasses import asdict, dataclass, field
from datetime import datetime

from shared_types import Provenance

OPERATOR_CONFIDENCE = 1.0
DERIVED_CONFIDENCE = 0.8
GENERATIVE_CONFIDENCE = 0.7
USER_SUGGESTED_CONFIDENCE = 0.5
PATTERN_MATCH_CONFIDENCE = 0.95


@dataclass
class KnowledgeEntry:
    """One learned trigger/response pair. Never mutated after creation,
    except ``approved`` on pending-review entries."""

    id: int
    trigger: str
    response: str
    provenance: Provenance
    confidence: float
    created_at: datetime = field(default_factory=datetime.now)
    source: str = ""
    approved: bool | None = None

    @property
    def servable(self) -> bool:
        if self.provenance == Provenance.PENDING_REVIEW:
            return self.approved is True
        return True

    def to_dict(self) -> dict:
        data = asdict(self)
        data["provenance"] = self.provenance.value
        data["created_at"] = self.created_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "KnowledgeEntry":
        return cls(
            id=int(data["id"]),
            trigger=data["trigger"],
            response=data["response"],
            provenance=Provenance(data.get("provenance", Provenance.DERIVED)),
            confidence=float(data.get("confidence", DERIVED_CONFIDENCE)),
            created_at=datetime.fromisoformat(data["created_at"])
            if data.get("created_at")
            else datetime.now(),
            source=data.get("source", ""),
            approved=data.get("approved"),
        )


@dataclass
class Pattern:
    """Substring pre-filter for one servable knowledge entry."""

    id: int
    triggers: list[str]
    response: str
    intents: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Pattern":
        return cls(
            id=int(data["id"]),
            triggers=list(data.get("triggers", [])),
            response=data["response"],
            intents=list(data.get("intents", [])),
            created_at=datetime.fromisoformat(data["created_at"])
            if data.get("created_at")
            else datetime.now(),
        )


@dataclass
class LearnedMatch:
    entry_id: int
    response: str
    confidence: float
    method: str  # pattern | similarity


@dataclass
class TeachingPair:
    trigger: str
    response: str
    pattern: str = ""

