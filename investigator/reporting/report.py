"""Assemble the full investigation report for one change."""

from __future__ import annotations

import logging
from typing import Iterable

from investigator.enrichment.correlator import compute_overall_status, extract_correlators
from investigator.enrichment.subject import format_subject_display
from investigator.ingestion.models import ChangeRecord, EventRecord
from investigator.reporting.models import InvestigationReport
from investigator.reporting.rca import compute_time_to_detect, format_root_cause, infer_root_cause
from investigator.reporting.summary import build_evidence_summary, build_timeline
from investigator.timeline.ordering import order_events

logger = logging.getLogger("investigator.reporting")


def build_report(change: ChangeRecord | None, events: Iterable[EventRecord] = ()) -> InvestigationReport:
    ordered = order_events(events)
    overall = compute_overall_status(change, ordered)
    breaking_id = overall.breaking_event.id if overall.breaking_event else None

    report = InvestigationReport(
        change_id=(change.change_id or change.id) if change else None,
        status=overall.status,
        breaking_event_id=breaking_id,
        root_cause=format_root_cause(change, ordered),
        inference=infer_root_cause(change, ordered),
        time_to_detect=compute_time_to_detect(change, ordered),
        correlators=extract_correlators(change),
        subject_display=format_subject_display(change.subject) if change else None,
        timeline=build_timeline(ordered, breaking_id),
        evidence_summary=build_evidence_summary(change, ordered),
    )

    logger.info(
        "Investigation report built: change=%s status=%s events=%d breaking=%s ttd=%s",
        report.change_id,
        report.status.value,
        len(ordered),
        breaking_id,
        report.time_to_detect.label,
    )
    return report
