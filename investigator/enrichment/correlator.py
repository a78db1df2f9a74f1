"""Evidence correlation — tie a change's recorded result to its event trail."""

from __future__ import annotations

import logging
from typing import Iterable

from investigator.ingestion.models import ChangeRecord, EventRecord
from investigator.reporting.models import Correlators, InvestigationStatus, OverallStatus
from investigator.timeline.classification import is_failure_event
from investigator.timeline.ordering import order_events

logger = logging.getLogger("investigator.enrichment")

_RESULT_STATUS_MAP = {
    "failed": InvestigationStatus.FAILED,
    "succeeded": InvestigationStatus.SUCCEEDED,
}


def _non_empty(value: str | None) -> str | None:
    if not value:
        return None
    trimmed = value.strip()
    return trimmed or None


def find_breaking_event(events: Iterable[EventRecord]) -> EventRecord | None:
    """Earliest event that looks like a failure signal, in chronological order."""
    for event in order_events(events):
        if is_failure_event(event):
            return event
    return None


def compute_overall_status(
    change: ChangeRecord | None, events: Iterable[EventRecord] = ()
) -> OverallStatus:
    """Resolve the investigation status.

    A failing event anywhere in the trail wins over ``change.result_status``:
    the change summary may lag behind, or be too coarse to show a post-deploy
    degradation. Without one, the recorded result is used as-is.
    """
    breaking = find_breaking_event(events)
    if breaking is not None:
        logger.debug(
            "Breaking event %s (%s) for change=%s",
            breaking.id,
            breaking.type,
            change.id if change else None,
        )
        return OverallStatus(status=InvestigationStatus.FAILED, breaking_event=breaking)

    recorded = str(change.result_status if change else "unknown").strip().lower()
    return OverallStatus(status=_RESULT_STATUS_MAP.get(recorded, InvestigationStatus.UNKNOWN))


def extract_correlators(change: ChangeRecord | None) -> Correlators:
    if change is None:
        return Correlators()
    return Correlators(
        revision=_non_empty(change.revision),
        external_change_id=_non_empty(change.external_change_id),
        ticket_id=_non_empty(change.ticket_id),
        approval_ref=_non_empty(change.approval_reference),
    )
