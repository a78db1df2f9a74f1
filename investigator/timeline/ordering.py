"""Chronological ordering of change events, tolerant of malformed timestamps."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Iterable

from investigator.ingestion.models import EventRecord

# fromisoformat stops at microseconds; controllers written in Go emit nanoseconds.
_EXCESS_FRACTION = re.compile(r"(\.\d{6})\d+")


def parse_timestamp(raw: object) -> datetime | None:
    """Parse an RFC 3339 / ISO 8601 timestamp into an aware UTC datetime, or None."""
    if not isinstance(raw, str) or not raw.strip():
        return None
    text = raw.strip()
    if text[-1] in "zZ":
        text = text[:-1] + "+00:00"
    text = _EXCESS_FRACTION.sub(r"\1", text)

    try:
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        # Shifting by the offset can leave the datetime range near year 1 or 9999.
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def event_timestamp(raw: object) -> float:
    """Epoch seconds for a timestamp string; 0.0 when it cannot be parsed."""
    parsed = parse_timestamp(raw)
    return parsed.timestamp() if parsed is not None else 0.0


def format_timestamp(raw: object, fallback: str = "n/a") -> str:
    """Render a timestamp as ``YYYY-MM-DD HH:MM:SS.mmm UTC``."""
    parsed = parse_timestamp(raw)
    if parsed is None or parsed.timestamp() == 0:
        return fallback
    return f"{parsed:%Y-%m-%d %H:%M:%S}.{parsed.microsecond // 1000:03d} UTC"


def order_events(events: Iterable[EventRecord]) -> list[EventRecord]:
    """Return a new list of events sorted oldest first.

    The sort is stable, so events sharing a timestamp (or all carrying an
    unparseable one, which counts as epoch 0) keep their input order.
    """
    return sorted(events, key=lambda event: event_timestamp(event.time))
