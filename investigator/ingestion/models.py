"""Data models for change and event ingestion.

Field names mirror the JSON wire contract of the change/event API and must not
be renamed.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class ResultStatus(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    UNKNOWN = "unknown"


class EventRecord(BaseModel):
    """One observed fact from a source system (GitOps controller, ticketing, approvals)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    source: str = ""
    type: str = ""
    time: str = ""
    subject: str = ""
    extensions: dict[str, Any] | None = None
    data: Any = None
    integrity_hash: str | None = None

    @field_validator("source", "type", "time", "subject", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        # Source systems occasionally send numbers or nulls here.
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)


class ChangeRecord(BaseModel):
    """Snapshot of one deployment/sync operation under investigation."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    change_id: str | None = None
    permalink: str | None = None
    subject: str = ""
    application: str | None = None
    project: str | None = None
    target_cluster: str | None = None
    namespace: str | None = None
    primary_provider: str = ""
    primary_reference: str | None = None
    revision: str | None = None
    initiator: str | None = None
    external_change_id: str | None = None
    ticket_id: str | None = None
    approval_reference: str | None = None
    has_approvals: bool | None = None
    result_status: str = ResultStatus.UNKNOWN.value
    health_status: str = "unknown"
    health_at_operation_start: str | None = None
    health_after_deploy: str | None = None
    evidence_last_updated_at: str | None = None
    evidence_window_seconds: int | None = None
    evidence_may_be_incomplete: bool | None = None
    started_at: str = ""
    completed_at: str = ""
    event_count: int = 0

    @field_validator("result_status", "health_status", mode="before")
    @classmethod
    def _default_unknown(cls, value: Any) -> str:
        if value is None:
            return "unknown"
        return value if isinstance(value, str) else str(value)

    @field_validator("subject", "primary_provider", "started_at", "completed_at", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)


class InvestigationRequest(BaseModel):
    """Request body for building an investigation report.

    Events are kept raw so that one malformed record is dropped by the
    normalizer instead of failing the whole request.
    """

    change: dict[str, Any] | None = None
    events: list[Any] = []


class SubjectDisplayRequest(BaseModel):
    subjects: list[str] = []
    query: str = ""
