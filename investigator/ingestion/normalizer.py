"""Normalize raw JSON change/event payloads into validated records."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from investigator.ingestion.models import ChangeRecord, EventRecord

logger = logging.getLogger("investigator.ingestion")


def normalize_event(raw: Any) -> EventRecord:
    if isinstance(raw, EventRecord):
        return raw
    return EventRecord.model_validate(raw)


def normalize_events(payload: list[Any]) -> list[EventRecord]:
    """Validate every raw event, dropping (and logging) the ones that don't fit."""
    events = []
    for raw_event in payload:
        try:
            events.append(normalize_event(raw_event))
        except ValidationError:
            ref = raw_event.get("id", "?") if isinstance(raw_event, dict) else type(raw_event).__name__
            logger.exception("Failed to normalize event: %s", ref)
    return events


def normalize_change(payload: Any) -> ChangeRecord | None:
    if payload is None:
        return None
    if isinstance(payload, ChangeRecord):
        return payload
    try:
        return ChangeRecord.model_validate(payload)
    except ValidationError:
        logger.exception("Failed to normalize change record")
        return None
