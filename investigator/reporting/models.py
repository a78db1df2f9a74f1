"""Data models for investigation outputs handed to the rendering layer."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from investigator.ingestion.models import EventRecord


class InvestigationStatus(str, Enum):
    FAILED = "failed"
    SUCCEEDED = "succeeded"
    UNKNOWN = "unknown"


class Confidence(str, Enum):
    HIGH = "high"
    LOW = "low"


class OverallStatus(BaseModel):
    status: InvestigationStatus
    breaking_event: EventRecord | None = None  # same object as in the ordered event list


class Correlators(BaseModel):
    revision: str | None = None
    external_change_id: str | None = None
    ticket_id: str | None = None
    approval_ref: str | None = None


class RootCause(BaseModel):
    """Banner-sized root cause: one short line plus identifier chips."""

    primary_text: str
    correlator_tokens: list[str] = []
    timestamp_text: str | None = None


class RootCauseInference(BaseModel):
    """Long-form root cause sentence with a coarse confidence grade."""

    text: str
    confidence: Confidence
    event_ref: str | None = None


class TimeToDetect(BaseModel):
    seconds: int | None = None
    label: str = "n/a"


class SubjectDisplay(BaseModel):
    title: str
    subtitle: str = ""


class EvidenceGroup(BaseModel):
    title: str
    items: list[str] = []


class TimelineEntry(BaseModel):
    event_id: str
    time_text: str
    category: str
    status: str = ""
    title: str
    source: str
    breaking: bool = False


class InvestigationReport(BaseModel):
    """Everything the incident view needs for one change, as plain values."""

    change_id: str | None = None
    status: InvestigationStatus
    breaking_event_id: str | None = None
    root_cause: RootCause
    inference: RootCauseInference
    time_to_detect: TimeToDetect
    correlators: Correlators
    subject_display: SubjectDisplay | None = None
    timeline: list[TimelineEntry] = []
    evidence_summary: list[EvidenceGroup] = []
