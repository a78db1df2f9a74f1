"""Per-event heuristics: category tagging, status extraction and failure detection."""

from __future__ import annotations

import json
from enum import Enum

from investigator.ingestion.models import EventRecord


class EventCategory(str, Enum):
    GIT = "git"
    APPROVAL = "approval"
    ARGO = "argo"
    OTHER = "other"


# Evaluated top to bottom; the first matching pattern wins.
CATEGORY_PATTERNS: tuple[tuple[str, EventCategory], ...] = (
    ("git", EventCategory.GIT),
    ("commit", EventCategory.GIT),
    ("revision", EventCategory.GIT),
    ("approval", EventCategory.APPROVAL),
    ("ticket", EventCategory.APPROVAL),
    ("pr", EventCategory.APPROVAL),
    ("argo", EventCategory.ARGO),
    ("sync", EventCategory.ARGO),
    ("health", EventCategory.ARGO),
)

STATUS_KEYS = ("status", "phase", "health", "result")

FAILURE_MARKERS = ("fail", "error", "degrad", "abort")


def categorize_event(event: EventRecord) -> EventCategory:
    text = f"{event.source} {event.type}".lower()
    for pattern, category in CATEGORY_PATTERNS:
        if pattern in text:
            return category
    return EventCategory.OTHER


def extension_string(event: EventRecord, key: str) -> str:
    """Trimmed string value of an extension attribute, or "" for anything else."""
    value = (event.extensions or {}).get(key)
    return value.strip() if isinstance(value, str) else ""


def extract_event_status(event: EventRecord) -> str:
    for key in STATUS_KEYS:
        value = extension_string(event, key)
        if value:
            return value
    return ""


def failure_signal_text(event: EventRecord) -> str:
    extensions = json.dumps(event.extensions or {}, default=str, ensure_ascii=False, separators=(",", ":"))
    return f"{event.type} {extract_event_status(event)} {extensions}".lower()


def is_failure_event(event: EventRecord) -> bool:
    """Broad substring heuristic; false positives are preferred over misses."""
    signal = failure_signal_text(event)
    return any(marker in signal for marker in FAILURE_MARKERS)


def humanize_event_type(event_type: str | None) -> str:
    raw = (event_type or "").replace(".", " ").replace("_", " ").strip()
    if not raw:
        return "Event"
    return " ".join(word[:1].upper() + word[1:] for word in raw.split())
