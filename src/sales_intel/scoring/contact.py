"""Contact scoring: how complete, well-placed and worked a single contact is.

Four sub-scores of up to 25 points each add up to a 0-100 total:

- **data quality**: points for each filled-in reach/identity field
- **role fit**: a fixed table keyed by the recorded committee role
- **engagement**: 5 points per activity in the last 30 days
- **enrichment depth**: 8 points per completed enrichment
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Sequence

from sales_intel.clock import as_utc, utc_now
from sales_intel.data.models import (
    CommitteeRole,
    Contact,
    ContactActivity,
    ContactEnrichment,
    EnrichmentStatus,
)
from sales_intel.data.repository import ContactRepository
from sales_intel.errors import NotFoundError
from sales_intel.telemetry import TelemetrySink, timed_event

logger = logging.getLogger(__name__)

SUB_SCORE_CAP = 25
ACTIVITY_LIMIT = 20
RECENT_ACTIVITY_DAYS = 30
POINTS_PER_ACTIVITY = 5
POINTS_PER_ENRICHMENT = 8

DATA_QUALITY_POINTS: dict[str, int] = {
    "email": 10,
    "email_verified": 10,
    "phone": 5,
    "title": 5,
    "linkedin_url": 5,
    "department": 3,
    "company": 3,
}

ROLE_SCORES: dict[CommitteeRole, int] = {
    CommitteeRole.DECISION_MAKER: 25,
    CommitteeRole.ECONOMIC_BUYER: 22,
    CommitteeRole.EXECUTIVE_SPONSOR: 22,
    CommitteeRole.CHAMPION: 20,
    CommitteeRole.INFLUENCER: 15,
    CommitteeRole.TECHNICAL_EVALUATOR: 12,
    CommitteeRole.GATEKEEPER: 8,
    CommitteeRole.END_USER: 5,
    CommitteeRole.UNKNOWN: 3,
}

DEFAULT_ROLE_SCORE = 3


@dataclass(frozen=True)
class ContactScore:
    data_quality: int
    role_fit: int
    engagement: int
    enrichment_depth: int
    total: int


def score_contact_data(contact: Contact) -> int:
    """Sum the points of every truthy field in :data:`DATA_QUALITY_POINTS`, capped at 25."""
    score = sum(
        points for name, points in DATA_QUALITY_POINTS.items()
        if getattr(contact, name)
    )
    return min(SUB_SCORE_CAP, score)


def score_contact_role(contact: Contact) -> int:
    return ROLE_SCORES.get(contact.role, DEFAULT_ROLE_SCORE)


def score_engagement(activities: Sequence[ContactActivity], now: datetime) -> int:
    """Five points per activity younger than 30 days (strict), capped at 25."""
    cutoff = timedelta(days=RECENT_ACTIVITY_DAYS)
    now = as_utc(now)
    recent = sum(1 for a in activities if now - as_utc(a.created_at) < cutoff)
    return min(SUB_SCORE_CAP, recent * POINTS_PER_ACTIVITY)


def score_enrichment_depth(enrichments: Sequence[ContactEnrichment]) -> int:
    completed = sum(1 for e in enrichments if e.status == EnrichmentStatus.COMPLETED)
    return min(SUB_SCORE_CAP, completed * POINTS_PER_ENRICHMENT)


def score_contact(
    contact: Contact,
    activities: Sequence[ContactActivity] = (),
    enrichments: Sequence[ContactEnrichment] = (),
    *,
    now: datetime | None = None,
) -> ContactScore:
    """Score one contact from its record, recent activities and enrichments."""
    now = as_utc(now) if now is not None else utc_now()
    data_quality = score_contact_data(contact)
    role_fit = score_contact_role(contact)
    engagement = score_engagement(activities, now)
    enrichment_depth = score_enrichment_depth(enrichments)
    return ContactScore(
        data_quality=data_quality,
        role_fit=role_fit,
        engagement=engagement,
        enrichment_depth=enrichment_depth,
        total=min(100, data_quality + role_fit + engagement + enrichment_depth),
    )


async def calculate_contact_score(
    repo: ContactRepository,
    tenant_id: str,
    contact_id: str,
    *,
    now: datetime | None = None,
    telemetry: TelemetrySink | None = None,
) -> ContactScore:
    """Fetch a contact with its last 20 activities and its enrichments and score it.

    Raises:
        NotFoundError: The contact does not exist for *tenant_id*.
    """
    with timed_event(
        telemetry, "contacts.scored", tenant_id=tenant_id, contact_id=contact_id,
    ) as attrs:
        contact = await repo.select_contact_by_id(contact_id, tenant_id)
        if contact is None:
            raise NotFoundError(f"Contact not found: {contact_id}")
        activities = await repo.select_activities_by_contact_id(
            contact_id, tenant_id, limit=ACTIVITY_LIMIT,
        )
        enrichments = await repo.select_enrichments_by_contact_id(contact_id, tenant_id)
        score = score_contact(contact, activities, enrichments, now=now)
        attrs.update(
            activities=len(activities),
            enrichments=len(enrichments),
            total=score.total,
        )
        logger.debug("Contact %s scored %d", contact_id, score.total)
        return score
