"""Investigation endpoints — accept fetched change/event payloads, return the report."""

from __future__ import annotations

import logging

from fastapi import APIRouter
from opentelemetry import trace

from investigator.enrichment.subject import filter_subjects, format_subject_display
from investigator.ingestion.models import InvestigationRequest, SubjectDisplayRequest
from investigator.ingestion.normalizer import normalize_change, normalize_events
from investigator.reporting.models import InvestigationReport
from investigator.reporting.report import build_report
from investigator.telemetry.metrics import dropped_events_total, investigation_events, investigations_total

logger = logging.getLogger("investigator.ingestion")
router = APIRouter(tags=["investigations"])
tracer = trace.get_tracer(__name__)


@router.post("/investigations", response_model=InvestigationReport)
def investigate(request: InvestigationRequest) -> InvestigationReport:
    """Build the root cause banner, timeline and evidence summary for one change."""
    with tracer.start_as_current_span("build-investigation-report") as span:
        change = normalize_change(request.change)
        events = normalize_events(request.events)

        dropped = len(request.events) - len(events)
        if dropped:
            dropped_events_total.inc(dropped)
            logger.warning(
                "Dropped %d of %d events for change=%s",
                dropped,
                len(request.events),
                change.id if change else None,
            )

        report = build_report(change, events)

        span.set_attribute("investigation.change_id", report.change_id or "")
        span.set_attribute("investigation.status", report.status.value)
        span.set_attribute("investigation.events", len(events))
        investigations_total.labels(status=report.status.value).inc()
        investigation_events.observe(len(events))
        return report


@router.post("/subjects/display")
def subject_display(request: SubjectDisplayRequest):
    """Title/subtitle pairs for the subject picker, filtered by an optional search query."""
    items = []
    for raw in filter_subjects(request.subjects, request.query):
        display = format_subject_display(raw)
        items.append({"subject": raw, "title": display.title, "subtitle": display.subtitle})
    return {"items": items}
