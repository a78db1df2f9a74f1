"""Plain-language evidence summary and timeline rows for a change."""

from __future__ import annotations

from typing import Iterable

from investigator.ingestion.models import ChangeRecord, EventRecord
from investigator.reporting.models import EvidenceGroup, TimelineEntry
from investigator.timeline.classification import (
    categorize_event,
    extension_string,
    extract_event_status,
    humanize_event_type,
)
from investigator.timeline.ordering import format_timestamp, order_events

INCIDENT_NARRATIVE = "Incident Narrative"
TECHNICAL_CONTEXT = "Technical Context"
CORRELATIONS = "Correlations"


def _or_na(value: str | None) -> str:
    return value if value and value.strip() else "n/a"


def event_sentence(event: EventRecord) -> str:
    event_type = event.type or "event"
    app = event.subject or "application"
    status = extension_string(event, "status")
    if status:
        return f"{event_type} for {app} with status {status}."
    health = extension_string(event, "health")
    if health:
        return f"{event_type} for {app} with health {health}."
    return f"{event_type} recorded for {app}."


def build_evidence_summary(
    change: ChangeRecord | None, events: Iterable[EventRecord] = ()
) -> list[EvidenceGroup]:
    """Three fixed groups of sentences: narrative, technical context, correlations.

    Group titles and order are part of the contract with the rendering layer.
    """
    if change is None:
        return []

    ordered = order_events(events)
    first = ordered[0] if ordered else None
    last = ordered[-1] if ordered else None
    health_after = change.health_after_deploy or change.health_status or "unknown"

    narrative = [
        f"Deployment {change.result_status or 'unknown'} for {change.application or change.subject}.",
        f"Change window: {format_timestamp(change.started_at)} to {format_timestamp(change.completed_at)}.",
        f"Health after deployment: {health_after}.",
        f"First observed event: {event_sentence(first)}" if first else "No timeline events recorded.",
        f"Latest observed event: {event_sentence(last)}" if last else "No latest event available.",
    ]
    technical = [
        f"Cluster: {_or_na(change.target_cluster)}.",
        f"Namespace: {_or_na(change.namespace)}.",
        f"Initiator: {_or_na(change.initiator)}.",
        f"Primary provider: {_or_na(change.primary_provider)}.",
        f"Revision: {_or_na(change.revision)}.",
    ]
    correlations = [
        f"External change: {_or_na(change.external_change_id)}.",
        f"Ticket: {_or_na(change.ticket_id)}.",
        f"Approval reference: {_or_na(change.approval_reference)}.",
    ]

    return [
        EvidenceGroup(title=INCIDENT_NARRATIVE, items=narrative),
        EvidenceGroup(title=TECHNICAL_CONTEXT, items=technical),
        EvidenceGroup(title=CORRELATIONS, items=correlations),
    ]


def build_timeline(events: Iterable[EventRecord], breaking_event_id: str | None = None) -> list[TimelineEntry]:
    entries = []
    for event in order_events(events):
        entries.append(
            TimelineEntry(
                event_id=event.id,
                # Unparseable times are shown verbatim rather than hidden.
                time_text=format_timestamp(event.time, fallback=event.time),
                category=categorize_event(event).value,
                status=extract_event_status(event),
                title=humanize_event_type(event.type),
                source=event.source or "unknown source",
                breaking=bool(breaking_event_id) and event.id == breaking_event_id,
            )
        )
    return entries
