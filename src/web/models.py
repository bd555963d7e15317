"""Pydantic request/response schemas for the web API."""

from typing import Optional

from pydantic import BaseModel, Field


class MessageIn(BaseModel):
    """One inbound chat message from the messaging gateway."""

    sender_id: str = Field(..., min_length=1, max_length=128)
    conversation_id: str = Field(..., min_length=1, max_length=128)
    text: Optional[str] = Field(None, max_length=5000)
    media_ref: Optional[str] = None


class MessageOut(BaseModel):
    reply: Optional[str] = None
    source: str
    stage: str = ""


class KnowledgeStats(BaseModel):
    total: int
    patterns: int
    pending_review: int
    by_provenance: dict[str, int]
    last_learned: Optional[str] = None
    unknown_cases: int = 0
    learning_rate: str = "0%"
