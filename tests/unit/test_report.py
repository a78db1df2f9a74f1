"""Tests for investigator.reporting.report."""

from __future__ import annotations

from investigator.reporting.models import InvestigationStatus
from investigator.reporting.report import build_report


class TestBuildReport:
    def test_full_report(self, change, events):
        report = build_report(change, events)
        assert report.change_id == "chg_1"
        assert report.status == InvestigationStatus.FAILED
        assert report.breaking_event_id == "evt_2"
        assert report.root_cause.primary_text == "Argo Health Changed after revision abc123"
        assert report.time_to_detect.label == "3m 0s"
        assert report.subject_display.title == "payments-api"
        assert report.subject_display.subtitle == "prod-eu · in-cluster"
        assert [row.event_id for row in report.timeline] == ["evt_1", "evt_2"]
        assert [row.breaking for row in report.timeline] == [False, True]
        assert len(report.evidence_summary) == 3

    def test_prefers_change_id(self, change, events):
        report = build_report(change.model_copy(update={"change_id": "argo-123"}), events)
        assert report.change_id == "argo-123"

    def test_no_change(self, events):
        report = build_report(None, events)
        assert report.change_id is None
        assert report.subject_display is None
        assert report.evidence_summary == []
        assert report.time_to_detect.label == "n/a"
        assert report.status == InvestigationStatus.FAILED

    def test_deterministic(self, change, events):
        first = build_report(change, events).model_dump(mode="json")
        second = build_report(change, list(reversed(events))).model_dump(mode="json")
        assert first == second

    def test_serializable(self, change, events):
        payload = build_report(change, events).model_dump(mode="json")
        assert payload["status"] == "failed"
        assert payload["inference"]["confidence"] == "high"
        assert payload["correlators"]["approval_ref"] == "APR-9"

    def test_out_of_range_failure_time(self, change, make_event):
        failing = make_event("edge", "9999-12-31T23:59:59-01:00", type="argo.sync.failed")
        report = build_report(change, [failing])
        assert report.breaking_event_id == "edge"
        assert report.root_cause.timestamp_text == "unknown time"
        assert report.time_to_detect.label == "n/a"
