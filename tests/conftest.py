"""Shared fixtures: a representative Argo CD change and its event trail."""

from __future__ import annotations

import pytest

from investigator.ingestion.models import ChangeRecord, EventRecord


@pytest.fixture
def make_event():
    def _make(event_id: str, time: str = "2026-02-16T12:00:00Z", **overrides) -> EventRecord:
        fields = {
            "id": event_id,
            "source": "argocd",
            "type": "argo.sync.started",
            "time": time,
            "subject": "payments-api",
        }
        fields.update(overrides)
        return EventRecord(**fields)

    return _make


@pytest.fixture
def change() -> ChangeRecord:
    return ChangeRecord(
        id="chg_1",
        subject="payments-api:prod-eu:https://kubernetes.default.svc",
        application="payments-api",
        target_cluster="eu-1",
        namespace="prod-eu",
        primary_provider="argo",
        result_status="succeeded",
        health_status="healthy",
        started_at="2026-02-16T12:00:00Z",
        completed_at="2026-02-16T12:02:00Z",
        event_count=2,
        revision="abc123",
        external_change_id="CHG-1",
        ticket_id="JIRA-7",
        approval_reference="APR-9",
        initiator="alice@example.com",
    )


@pytest.fixture
def events(make_event) -> list[EventRecord]:
    # Deliberately out of order.
    return [
        make_event(
            "evt_2",
            "2026-02-16T12:03:00Z",
            type="argo.health.changed",
            extensions={"health": "Degraded"},
        ),
        make_event(
            "evt_1",
            "2026-02-16T12:02:00Z",
            type="argo.sync.finished",
            extensions={"status": "Succeeded"},
        ),
    ]
