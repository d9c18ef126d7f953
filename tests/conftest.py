"""Test fixtures and record builders for sales_intel tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from sales_intel.data import (
    CommitteeRole,
    Contact,
    ContactActivity,
    ContactActivityType,
    ContactEnrichment,
    ContactStatus,
    EnrichmentStatus,
    InMemoryRepository,
    Prospect,
    ProspectSignal,
    SignalType,
)
from sales_intel.deals import DealData, DealOutcome
from sales_intel.health import HealthAssessmentInput, UsageTrend

TENANT = "tenant-1"
NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


def days_ago(days: float) -> datetime:
    return NOW - timedelta(days=days)


def make_prospect(
    prospect_id: str = "p1",
    company_name: str = "Acme Chemical",
    fit_score: int | None = None,
    intent_score: int | None = None,
    tenant_id: str = TENANT,
    **extra: Any,
) -> Prospect:
    return Prospect(
        id=prospect_id,
        tenant_id=tenant_id,
        company_name=company_name,
        fit_score=fit_score,
        intent_score=intent_score,
        **extra,
    )


_signal_counter = 0


def make_signal(
    signal_type: SignalType,
    prospect_id: str = "p1",
    detected_at: datetime | None = None,
    strength: int = 50,
    title: str | None = None,
    signal_id: str | None = None,
    tenant_id: str = TENANT,
    **extra: Any,
) -> ProspectSignal:
    """Create a signal; ids are sequential unless given."""
    global _signal_counter
    _signal_counter += 1
    return ProspectSignal(
        id=signal_id or f"s{_signal_counter}",
        tenant_id=tenant_id,
        prospect_id=prospect_id,
        signal_type=signal_type,
        title=title or f"{signal_type.value} signal",
        strength=strength,
        detected_at=detected_at or days_ago(1),
        **extra,
    )


def make_contact(
    contact_id: str,
    title: str | None,
    first_name: str = "Pat",
    last_name: str | None = None,
    prospect_id: str | None = "p1",
    role: CommitteeRole = CommitteeRole.UNKNOWN,
    status: ContactStatus = ContactStatus.NEW,
    company: str | None = "Acme Chemical",
    seniority: str | None = None,
    tenant_id: str = TENANT,
    **extra: Any,
) -> Contact:
    return Contact(
        id=contact_id,
        tenant_id=tenant_id,
        prospect_id=prospect_id,
        first_name=first_name,
        last_name=last_name or contact_id.upper(),
        title=title,
        role=role,
        seniority=seniority,
        status=status,
        company=company,
        **extra,
    )


_activity_counter = 0


def make_activity(
    contact_id: str = "c1",
    created_at: datetime | None = None,
    activity_type: ContactActivityType = ContactActivityType.EMAIL_SENT,
    tenant_id: str = TENANT,
) -> ContactActivity:
    global _activity_counter
    _activity_counter += 1
    return ContactActivity(
        id=f"a{_activity_counter}",
        tenant_id=tenant_id,
        contact_id=contact_id,
        activity_type=activity_type,
        created_at=created_at or days_ago(1),
    )


def make_enrichment(
    contact_id: str = "c1",
    status: EnrichmentStatus = EnrichmentStatus.COMPLETED,
    source_type: str = "apollo",
    tenant_id: str = TENANT,
) -> ContactEnrichment:
    return ContactEnrichment(
        id=f"e-{contact_id}-{source_type}",
        tenant_id=tenant_id,
        contact_id=contact_id,
        source_type=source_type,
        status=status,
        created_at=days_ago(2),
    )

def make_deal(
    outcome: DealOutcome = DealOutcome.WON,
    deal_value: float = 50_000,
    sales_cycle_length: int = 60,
    competitor_involved: str | None = None,
    stages: list[dict[str, Any]] | None = None,
    win_loss_reasons: list[str] | None = None,
) -> DealData:
    return DealData(
        outcome=outcome,
        deal_value=deal_value,
        sales_cycle_length=sales_cycle_length,
        competitor_involved=competitor_involved,
        stages=stages or [],
        win_loss_reasons=win_loss_reasons or [],
    )


def make_health_input(
    *,
    last_contact_days: int = 10,
    meetings_last_90_days: int = 2,
    email_response_rate: float = 0.5,
    support_tickets: int = 2,
    feature_adoption: float = 50,
    months_remaining: int = 9,
    contract_value: float = 100_000,
    expansion_discussed: bool = False,
    competitor_mentioned: bool = False,
    active_users: int = 40,
    total_users: int = 50,
    usage_trend: UsageTrend = UsageTrend.STABLE,
    key_feature_usage: float = 50,
) -> HealthAssessmentInput:
    return HealthAssessmentInput.model_validate({
        "leadId": "lead-1",
        "tenantId": TENANT,
        "engagement": {
            "lastContactDays": last_contact_days,
            "meetingsLast90Days": meetings_last_90_days,
            "emailResponseRate": email_response_rate,
            "supportTickets": support_tickets,
            "featureAdoption": feature_adoption,
        },
        "contract": {
            "monthsRemaining": months_remaining,
            "contractValue": contract_value,
            "expansionDiscussed": expansion_discussed,
            "competitorMentioned": competitor_mentioned,
        },
        "usage": {
            "activeUsers": active_users,
            "totalUsers": total_users,
            "usageTrend": usage_trend.value,
            "keyFeatureUsage": key_feature_usage,
        },
    })


@pytest.fixture()
def repo() -> InMemoryRepository:
    return InMemoryRepository()
