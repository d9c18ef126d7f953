"""Customer health inputs and assessment results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pydantic import Field

from sales_intel.data.models import _StrictModel


class UsageTrend(str, Enum):
    INCREASING = "increasing"
    STABLE = "stable"
    DECREASING = "decreasing"


class Trend(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    AT_RISK = "at-risk"
    CHURNING = "churning"
    EXPANDING = "expanding"


class EngagementFacts(_StrictModel):
    last_contact_days: int = Field(ge=0)
    meetings_last_90_days: int = Field(default=0, ge=0)
    email_response_rate: float = Field(default=0.0, ge=0.0, le=1.0)
    support_tickets: int = Field(default=0, ge=0)
    feature_adoption: float = Field(default=0, ge=0, le=100)


class ContractFacts(_StrictModel):
    months_remaining: int
    contract_value: float = Field(default=0, ge=0)
    expansion_discussed: bool = False
    competitor_mentioned: bool = False


class UsageFacts(_StrictModel):
    active_users: int = Field(default=0, ge=0)
    total_users: int = Field(default=0, ge=0)
    usage_trend: UsageTrend = UsageTrend.STABLE
    key_feature_usage: float = Field(default=0, ge=0, le=100)


class HealthAssessmentInput(_StrictModel):
    """Engagement, contract and usage facts for one customer account."""

    lead_id: str | None = None
    tenant_id: str | None = None
    engagement: EngagementFacts
    contract: ContractFacts
    usage: UsageFacts


@dataclass(frozen=True)
class HealthFactor:
    name: str
    score: int
    weight: float
    trend: Trend
    detail: str


@dataclass(frozen=True)
class ExpansionOpportunity:
    type: str
    description: str
    estimated_value: int
    probability: int
    suggested_action: str


@dataclass(frozen=True)
class HealthAssessment:
    health_score: int
    health_status: HealthStatus
    engagement_score: int
    adoption_score: int
    sentiment_score: int
    expansion_probability: int
    churn_risk: int
    factors: list[HealthFactor] = field(default_factory=list)
    expansion_opportunities: list[ExpansionOpportunity] = field(default_factory=list)
