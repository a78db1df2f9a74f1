"""Root cause explanation and detection latency for a single change."""

from __future__ import annotations

from datetime import timedelta
from typing import Iterable

from investigator.enrichment.correlator import (
    compute_overall_status,
    extract_correlators,
    find_breaking_event,
)
from investigator.ingestion.models import ChangeRecord, EventRecord
from investigator.reporting.models import (
    Confidence,
    Correlators,
    RootCause,
    RootCauseInference,
    TimeToDetect,
)
from investigator.timeline.classification import humanize_event_type
from investigator.timeline.ordering import format_timestamp, parse_timestamp

UNKNOWN_ROOT_CAUSE = "Root cause: unknown (insufficient evidence)"
PRIMARY_TEXT_LIMIT = 90
SHORT_REVISION_LENGTH = 12
NOT_AVAILABLE = "n/a"


def truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return f"{text[:max(0, limit - 1)].rstrip()}…"


def shorten_revision(revision: str | None) -> str | None:
    if not revision or not revision.strip():
        return None
    revision = revision.strip()
    return revision[:SHORT_REVISION_LENGTH] if len(revision) > SHORT_REVISION_LENGTH else revision


def correlator_tokens(correlators: Correlators) -> list[str]:
    """Identifier chips in display order: external change, ticket, revision."""
    tokens: list[str] = []
    for value in (correlators.external_change_id, correlators.ticket_id, correlators.revision):
        if value and value.strip() and value not in tokens:
            tokens.append(value)
    return tokens


def format_root_cause(change: ChangeRecord | None, events: Iterable[EventRecord] = ()) -> RootCause:
    overall = compute_overall_status(change, events)
    correlators = extract_correlators(change)
    tokens = correlator_tokens(correlators)

    breaking = overall.breaking_event
    if breaking is None:
        return RootCause(primary_text=UNKNOWN_ROOT_CAUSE, correlator_tokens=tokens)

    label = humanize_event_type(breaking.type)
    short_revision = shorten_revision(correlators.revision)
    if short_revision:
        primary = f"{label} after revision {short_revision}"
    else:
        primary = f"{label} after deployment"

    return RootCause(
        primary_text=truncate(primary, PRIMARY_TEXT_LIMIT),
        correlator_tokens=tokens,
        timestamp_text=format_timestamp(breaking.time, fallback="unknown time"),
    )


def infer_root_cause(change: ChangeRecord | None, events: Iterable[EventRecord] = ()) -> RootCauseInference:
    """Full-sentence variant of the root cause, for reports and exports."""
    overall = compute_overall_status(change, events)
    breaking = overall.breaking_event
    if breaking is None:
        return RootCauseInference(text=UNKNOWN_ROOT_CAUSE, confidence=Confidence.LOW)

    correlators = extract_correlators(change)
    links = []
    if correlators.revision:
        links.append(f"revision {correlators.revision}")
    if correlators.external_change_id:
        links.append(f"change {correlators.external_change_id}")
    if correlators.ticket_id:
        links.append(f"ticket {correlators.ticket_id}")
    context = f" linked to {', '.join(links)}" if links else ""

    observed_at = format_timestamp(breaking.time, fallback="unknown time")
    return RootCauseInference(
        text=f"Root cause: {humanize_event_type(breaking.type)} observed at {observed_at}{context}.",
        confidence=Confidence.HIGH,
        event_ref=breaking.id,
    )


def format_duration(seconds: int) -> str:
    if seconds < 60:
        return f"{seconds}s"
    minutes, remainder = divmod(seconds, 60)
    return f"{minutes}m {remainder}s"


def compute_time_to_detect(change: ChangeRecord | None, events: Iterable[EventRecord] = ()) -> TimeToDetect:
    """Elapsed time from the start of the change to its first failure signal.

    Only a non-negative duration between two parseable timestamps is reported;
    everything else is "n/a".
    """
    if change is None:
        return TimeToDetect(label=NOT_AVAILABLE)

    failure = find_breaking_event(events)
    if failure is None:
        return TimeToDetect(label=NOT_AVAILABLE)

    start = parse_timestamp(change.started_at) or parse_timestamp(change.completed_at)
    end = parse_timestamp(failure.time)
    if start is None or end is None:
        return TimeToDetect(label=NOT_AVAILABLE)

    start_ts, end_ts = start.timestamp(), end.timestamp()
    if start_ts <= 0 or end_ts <= 0 or end_ts < start_ts:
        return TimeToDetect(label=NOT_AVAILABLE)

    seconds = (end - start) // timedelta(seconds=1)
    return TimeToDetect(seconds=seconds, label=format_duration(seconds))
