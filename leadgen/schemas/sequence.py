"""Sequence, step and engagement log schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from leadgen.schemas.base import CamelModel, ensure_utc

STEP_TYPES = ("email", "call", "task")
DEFAULT_STEP_TYPE = "email"
DEFAULT_WAIT_HOURS = 48
BODY_PREVIEW_LIMIT = 180
ELLIPSIS = "…"


def normalize_step_type(step_type: Optional[str]) -> str:
    """Map a step type onto email | call | task, defaulting to email."""
    value = (step_type or DEFAULT_STEP_TYPE).strip().lower()
    return value if value in STEP_TYPES else DEFAULT_STEP_TYPE


def normalize_wait_hours(wait_hours: Optional[int]) -> int:
    if wait_hours is None or wait_hours <= 0:
        return DEFAULT_WAIT_HOURS
    return wait_hours


def truncate(text: Optional[str], limit: int = BODY_PREVIEW_LIMIT) -> str:
    if not text:
        return ""
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


class SequenceStepSchema(CamelModel):
    order: int = 1  # 1..N
    type: str = DEFAULT_STEP_TYPE  # email | call | task
    wait_hours: int = DEFAULT_WAIT_HOURS  # delay after previous step
    template: str = ""  # email body or call script


class SequenceSchema(CamelModel):
    id: str = Field(default="", alias="sequenceId")
    name: str = ""
    description: str = ""
    steps: List[SequenceStepSchema] = Field(default_factory=list)
    created_utc: Optional[datetime] = None
    is_active: bool = False

    @field_validator("created_utc")
    @classmethod
    def _utc(cls, value):
        return ensure_utc(value)

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, value):
        return value or ""


class StartSequenceRequest(CamelModel):
    sequence_id: str = ""
    lead_ids: List[str] = Field(default_factory=list)


class StartSequenceSummary(CamelModel):
    ok: bool = True
    sequence_id: str
    step: int
    count: int
    scheduled_utc: datetime


class EngagementLogSchema(CamelModel):
    """One outreach touch. Append-only."""
    id: str = ""
    lead_id: str = ""
    channel: str = DEFAULT_STEP_TYPE  # email | call | task
    direction: str = "out"  # out | in
    occurred_utc: Optional[datetime] = None
    subject: str = ""
    body_preview: str = ""
    status: str = "sent"  # sent | opened | replied | failed
    provider_ref: Optional[str] = None  # message id, call id, sequence id

    @field_validator("occurred_utc")
    @classmethod
    def _utc(cls, value):
        return ensure_utc(value)
