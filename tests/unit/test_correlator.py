"""Tests for investigator.enrichment.correlator."""

from __future__ import annotations

import pytest

from investigator.enrichment.correlator import (
    compute_overall_status,
    extract_correlators,
    find_breaking_event,
)
from investigator.reporting.models import InvestigationStatus
from investigator.timeline.ordering import order_events


class TestComputeOverallStatus:
    def test_failing_event_overrides_succeeded_change(self, change, events):
        overall = compute_overall_status(change, events)
        assert overall.status == InvestigationStatus.FAILED
        assert overall.breaking_event is not None
        assert overall.breaking_event.id == "evt_2"

    def test_breaking_event_is_element_of_input(self, change, events):
        ordered = order_events(events)
        overall = compute_overall_status(change, ordered)
        assert any(overall.breaking_event is event for event in ordered)

    def test_status_failed_extension(self, change, make_event):
        failing = make_event("evt_x", type="argo.sync.finished", extensions={"status": "Failed"})
        overall = compute_overall_status(change, [failing])
        assert overall.status == InvestigationStatus.FAILED
        assert overall.breaking_event == failing

    def test_earliest_failure_wins(self, change, make_event):
        evts = [
            make_event("late", "2026-02-16T12:09:00Z", type="argo.sync.failed"),
            make_event("ok", "2026-02-16T12:00:00Z", type="argo.sync.started"),
            make_event("early", "2026-02-16T12:05:00Z", type="argo.health.degraded"),
        ]
        assert compute_overall_status(change, evts).breaking_event.id == "early"

    def test_failure_after_success_still_counts(self, change, make_event):
        evts = [
            make_event("ok", "2026-02-16T12:02:00Z", type="argo.sync.finished", extensions={"status": "Succeeded"}),
            make_event("blip", "2026-02-16T13:00:00Z", type="argo.health.changed", extensions={"health": "Degraded"}),
            make_event("recovered", "2026-02-16T13:05:00Z", type="argo.health.changed", extensions={"health": "Healthy"}),
        ]
        overall = compute_overall_status(change, evts)
        assert overall.status == InvestigationStatus.FAILED
        assert overall.breaking_event.id == "blip"

    @pytest.mark.parametrize(
        "recorded,expected",
        [
            ("succeeded", InvestigationStatus.SUCCEEDED),
            ("SUCCEEDED", InvestigationStatus.SUCCEEDED),
            ("Failed", InvestigationStatus.FAILED),
            ("unknown", InvestigationStatus.UNKNOWN),
            ("running", InvestigationStatus.UNKNOWN),
            ("", InvestigationStatus.UNKNOWN),
        ],
    )
    def test_falls_back_to_result_status(self, change, recorded, expected):
        overall = compute_overall_status(change.model_copy(update={"result_status": recorded}), [])
        assert overall.status == expected
        assert overall.breaking_event is None

    def test_no_change_no_events(self):
        overall = compute_overall_status(None, [])
        assert overall.status == InvestigationStatus.UNKNOWN
        assert overall.breaking_event is None

    def test_no_change_with_failure(self, make_event):
        overall = compute_overall_status(None, [make_event("e", type="argo.sync.failed")])
        assert overall.status == InvestigationStatus.FAILED

    def test_does_not_mutate_input(self, change, events):
        snapshot = list(events)
        compute_overall_status(change, events)
        assert events == snapshot


class TestFindBreakingEvent:
    def test_none_when_clean(self, make_event):
        assert find_breaking_event([make_event("e", type="argo.sync.finished")]) is None


class TestExtractCorrelators:
    def test_all_present(self, change):
        correlators = extract_correlators(change)
        assert correlators.revision == "abc123"
        assert correlators.external_change_id == "CHG-1"
        assert correlators.ticket_id == "JIRA-7"
        assert correlators.approval_ref == "APR-9"

    def test_trims_and_drops_blank(self, change):
        updated = change.model_copy(update={"revision": "  abc  ", "ticket_id": "   ", "external_change_id": None})
        correlators = extract_correlators(updated)
        assert correlators.revision == "abc"
        assert correlators.ticket_id is None
        assert correlators.external_change_id is None

    def test_no_change(self):
        correlators = extract_correlators(None)
        assert correlators.model_dump() == {
            "revision": None,
            "external_change_id": None,
            "ticket_id": None,
            "approval_ref": None,
        }
