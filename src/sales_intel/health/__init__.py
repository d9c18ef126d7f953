"""Customer health: weighted factor scoring, churn risk, expansion outlook."""

from sales_intel.health.assessment import (
    FACTOR_WEIGHTS,
    assess_customer_health,
    calculate_adoption_score,
    calculate_churn_risk,
    calculate_contract_health,
    calculate_engagement_score,
    calculate_expansion_probability,
    calculate_sentiment_score,
    determine_health_status,
    identify_expansion_opportunities,
)
from sales_intel.health.models import (
    ContractFacts,
    EngagementFacts,
    ExpansionOpportunity,
    HealthAssessment,
    HealthAssessmentInput,
    HealthFactor,
    HealthStatus,
    Trend,
    UsageFacts,
    UsageTrend,
)

__all__ = [
    "FACTOR_WEIGHTS",
    "ContractFacts",
    "EngagementFacts",
    "ExpansionOpportunity",
    "HealthAssessment",
    "HealthAssessmentInput",
    "HealthFactor",
    "HealthStatus",
    "Trend",
    "UsageFacts",
    "UsageTrend",
    "assess_customer_health",
    "calculate_adoption_score",
    "calculate_churn_risk",
    "calculate_contract_health",
    "calculate_engagement_score",
    "calculate_expansion_probability",
    "calculate_sentiment_score",
    "determine_health_status",
    "identify_expansion_opportunities",
]
