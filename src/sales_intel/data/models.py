"""Pydantic records for prospects, signals, contacts and contact activity.

Records arrive from the repositories already typed.  Field names are
snake_case in Python; the camelCase spelling used on the wire is accepted
as an alias so JSON rows can be validated directly.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _StrictModel(BaseModel):
    """Shared strict model settings for engine records."""

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


def _normalize_string_list(values: list[str]) -> list[str]:
    """Trim whitespace and drop empty entries while preserving order."""
    normalized: list[str] = []
    for value in values:
        if not isinstance(value, str):
            continue
        cleaned = value.strip()
        if cleaned:
            normalized.append(cleaned)
    return normalized


class SignalType(str, Enum):
    NEW_PERMIT = "new-permit"
    PERMIT_RENEWAL = "permit-renewal"
    VIOLATION = "violation"
    EXPANSION = "expansion"
    HIRING = "hiring"
    FUNDING = "funding"
    ACQUISITION = "acquisition"
    NEW_PRODUCT = "new-product"
    REGULATORY_CHANGE = "regulatory-change"
    CONTRACT_AWARD = "contract-award"
    LEADERSHIP_CHANGE = "leadership-change"
    FACILITY_OPENING = "facility-opening"


class ProspectStatus(str, Enum):
    IDENTIFIED = "identified"
    RESEARCHING = "researching"
    ENRICHED = "enriched"
    QUALIFIED = "qualified"
    CONVERTED_TO_LEAD = "converted-to-lead"
    DISQUALIFIED = "disqualified"
    STALE = "stale"


class CommitteeRole(str, Enum):
    ECONOMIC_BUYER = "economic-buyer"
    DECISION_MAKER = "decision-maker"
    EXECUTIVE_SPONSOR = "executive-sponsor"
    CHAMPION = "champion"
    INFLUENCER = "influencer"
    TECHNICAL_EVALUATOR = "technical-evaluator"
    GATEKEEPER = "gatekeeper"
    END_USER = "end-user"
    UNKNOWN = "unknown"


class ContactStatus(str, Enum):
    NEW = "new"
    ENRICHED = "enriched"
    ENGAGED = "engaged"
    VERIFIED = "verified"
    BOUNCED = "bounced"
    UNSUBSCRIBED = "unsubscribed"


class ContactActivityType(str, Enum):
    EMAIL_SENT = "email-sent"
    EMAIL_OPENED = "email-opened"
    EMAIL_REPLIED = "email-replied"
    EMAIL_BOUNCED = "email-bounced"
    CALL_MADE = "call-made"
    CALL_ANSWERED = "call-answered"
    MEETING_SCHEDULED = "meeting-scheduled"
    MEETING_HELD = "meeting-held"
    LINKEDIN_CONNECTED = "linkedin-connected"
    LINKEDIN_MESSAGED = "linkedin-messaged"
    NOTE_ADDED = "note-added"
    STATUS_CHANGED = "status-changed"


class EnrichmentStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    FAILED = "failed"
    PARTIAL = "partial"


class Prospect(_StrictModel):
    """A company-level sales target."""

    id: str
    tenant_id: str
    company_name: str
    industry: str | None = None
    employee_count: int | None = None
    fit_score: int | None = Field(default=None, ge=0, le=100)
    intent_score: int | None = Field(default=None, ge=0, le=100)
    status: ProspectStatus = ProspectStatus.IDENTIFIED
    tags: list[str] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("id", "tenant_id", "company_name")
    @classmethod
    def normalize_text(cls, value: str) -> str:
        return value.strip()

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, values: list[str]) -> list[str]:
        return _normalize_string_list(values)


class ProspectSignal(_StrictModel):
    """A timestamped event recorded for a prospect."""

    id: str
    tenant_id: str
    prospect_id: str
    signal_type: SignalType
    title: str
    description: str | None = None
    source_url: str | None = None
    source_type: str | None = None
    strength: int = Field(default=50, ge=0, le=100)
    detected_at: datetime
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("title")
    @classmethod
    def normalize_title(cls, value: str) -> str:
        return value.strip()


class Contact(_StrictModel):
    """A person at a prospect company."""

    id: str
    tenant_id: str
    prospect_id: str | None = None
    first_name: str
    last_name: str
    email: str | None = None
    email_verified: bool = False
    phone: str | None = None
    title: str | None = None
    department: str | None = None
    company: str | None = None
    linkedin_url: str | None = None
    role: CommitteeRole = CommitteeRole.UNKNOWN
    seniority: str | None = None
    status: ContactStatus = ContactStatus.NEW

    @field_validator("first_name", "last_name")
    @classmethod
    def normalize_name(cls, value: str) -> str:
        return value.strip()


class ContactActivity(_StrictModel):
    """An outreach touch logged against a contact."""

    id: str
    tenant_id: str
    contact_id: str
    activity_type: ContactActivityType
    subject: str | None = None
    notes: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime


class ContactEnrichment(_StrictModel):
    """One enrichment attempt for a contact from an external source."""

    id: str
    tenant_id: str
    contact_id: str
    source_type: str
    status: EnrichmentStatus = EnrichmentStatus.PENDING
    enriched_data: dict[str, Any] = Field(default_factory=dict)
    confidence_score: int = Field(default=50, ge=0, le=100)
    completed_at: datetime | None = None
    created_at: datetime
