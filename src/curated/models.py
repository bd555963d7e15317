"""Curated FAQ and SOP entries, normalized at load time."""

from dataclasses import dataclass, field
from enum import Enum

import structlog

logger = structlog.get_logger()


class CuratedKind(str, Enum):
    FAQ = "faq"
    SOP = "sop"


# Raw field names per kind: (trigger field, response fields in priority order)
_FIELDS = {
    CuratedKind.FAQ: ("keyword", ("response", "answer")),
    CuratedKind.SOP: ("trigger", ("response",)),
}


@dataclass
class CuratedEntry:
    id: str
    kind: CuratedKind
    triggers: list[str]
    responses: list[str] = field(default_factory=list)


def _as_list(value) -> list[str] | None:
    """str or list of str -> list of non-empty lowercased str; None if malformed."""
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return None
    items = [v.strip() for v in value if isinstance(v, str) and v.strip()]
    return items or None


def normalize_entry(record: dict, kind: CuratedKind, index: int = 0) -> CuratedEntry | None:
    """Convert one raw record; returns None (and logs) for malformed records."""
    if not isinstance(record, dict):
        logger.warning("curated_entry_skipped", kind=kind.value, index=index, reason="not_a_dict")
        return None

    trigger_field, response_fields = _FIELDS[kind]
    triggers = _as_list(record.get(trigger_field))
    if not triggers:
        logger.warning("curated_entry_skipped", kind=kind.value, index=index, reason="no_triggers")
        return None

    responses = None
    for name in response_fields:
        responses = _as_list(record.get(name))
        if responses:
            break
    if not responses:
        logger.warning("curated_entry_skipped", kind=kind.value, index=index, reason="no_response")
        return None

    return CuratedEntry(
        id=str(record.get("id", f"{kind.value}_{index}")),
        kind=kind,
        triggers=[t.lower() for t in triggers],
        responses=responses,
    )


def normalize_entries(records: list, kind: CuratedKind) -> list[CuratedEntry]:
    entries = []
    for i, record in enumerate(records or []):
        entry = normalize_entry(record, kind, i)
        if entry:
            entries.append(entry)
    return entries
