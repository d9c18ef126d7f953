"""Customer health assessment: five weighted factors, churn risk, expansion outlook.

Factor weights are fixed (:data:`FACTOR_WEIGHTS`, summing to 1.0).  The
overall health score is the rounded weighted sum of the factor scores; churn
risk and expansion probability derive from it, and the health status is a
pure function of those three numbers (:func:`determine_health_status`).
"""

from __future__ import annotations

from sales_intel.formatting import format_money
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
from sales_intel.scoring.composite import clamp, round_half_up, weighted_sum

FACTOR_WEIGHTS: dict[str, float] = {
    "engagement": 0.25,
    "adoption": 0.25,
    "sentiment": 0.20,
    "contract_health": 0.15,
    "usage_trend": 0.15,
}

USAGE_TREND_SCORES: dict[UsageTrend, int] = {
    UsageTrend.INCREASING: 85,
    UsageTrend.STABLE: 60,
    UsageTrend.DECREASING: 25,
}

_USAGE_TO_TREND: dict[UsageTrend, Trend] = {
    UsageTrend.INCREASING: Trend.IMPROVING,
    UsageTrend.STABLE: Trend.STABLE,
    UsageTrend.DECREASING: Trend.DECLINING,
}

# (max last-contact days, points), checked in order; older contact earns 0.
_CONTACT_RECENCY_BANDS = ((7, 35), (14, 28), (30, 20), (60, 10))


def _active_ratio(usage: UsageFacts) -> float:
    return usage.active_users / max(usage.total_users, 1)


def calculate_engagement_score(engagement: EngagementFacts) -> int:
    score = 0
    for max_days, points in _CONTACT_RECENCY_BANDS:
        if engagement.last_contact_days <= max_days:
            score += points
            break
    score += min(engagement.meetings_last_90_days * 8, 30)
    score += round_half_up(engagement.email_response_rate * 35)
    return min(score, 100)


def calculate_adoption_score(usage: UsageFacts) -> int:
    ratio = usage.active_users / usage.total_users if usage.total_users > 0 else 0
    user_score = round_half_up(ratio * 50)
    feature_score = round_half_up(usage.key_feature_usage * 0.5)
    return min(user_score + feature_score, 100)


def calculate_sentiment_score(engagement: EngagementFacts, contract: ContractFacts) -> int:
    score = 50
    if contract.competitor_mentioned:
        score -= 25
    if contract.expansion_discussed:
        score += 20
    if engagement.support_tickets > 5:
        score -= 15
    if engagement.support_tickets == 0:
        score += 10
    score += round_half_up(engagement.email_response_rate * 15)
    return int(clamp(score))


def calculate_contract_health(contract: ContractFacts) -> int:
    score = 50
    if contract.months_remaining > 12:
        score += 30
    elif contract.months_remaining > 6:
        score += 15
    elif contract.months_remaining <= 3:
        score -= 20
    if contract.expansion_discussed:
        score += 15
    if contract.competitor_mentioned:
        score -= 15
    return int(clamp(score))


def calculate_churn_risk(health_score: int) -> int:
    """Piecewise over *health_score* with breaks at 80, 60 and 40; bounded to [0, 95]."""
    if health_score >= 80:
        return max(0, 15 - (health_score - 80))
    if health_score >= 60:
        return 25 + round_half_up((80 - health_score) * 1.5)
    if health_score >= 40:
        return 50 + round_half_up((60 - health_score) * 1.5)
    return min(95, 80 + round_half_up((40 - health_score) * 0.5))


def calculate_expansion_probability(health_score: int, data: HealthAssessmentInput) -> int:
    if health_score < 60:
        return 5
    prob = round_half_up((health_score - 60) * 1.5)
    if data.contract.expansion_discussed:
        prob += 25
    if data.usage.usage_trend == UsageTrend.INCREASING:
        prob += 15
    if data.usage.key_feature_usage > 70:
        prob += 10
    return min(95, prob)


def determine_health_status(
    health_score: int, churn_risk: int, expansion_probability: int,
) -> HealthStatus:
    """First match wins: expanding, churning, at-risk, healthy."""
    if expansion_probability >= 50 and health_score >= 70:
        return HealthStatus.EXPANDING
    if churn_risk >= 60:
        return HealthStatus.CHURNING
    if churn_risk >= 35 or health_score < 50:
        return HealthStatus.AT_RISK
    return HealthStatus.HEALTHY


def identify_expansion_opportunities(
    data: HealthAssessmentInput, health_score: int,
) -> list[ExpansionOpportunity]:
    opps: list[ExpansionOpportunity] = []
    value = data.contract.contract_value

    if _active_ratio(data.usage) > 0.7 and health_score >= 60:
        opps.append(ExpansionOpportunity(
            type="seat-expansion",
            description="High user adoption indicates readiness for additional seats",
            estimated_value=round_half_up(value * 0.3),
            probability=60,
            suggested_action=(
                "Discuss expanding user licenses to additional departments or teams"
            ),
        ))

    if data.usage.key_feature_usage > 60 and health_score >= 65:
        opps.append(ExpansionOpportunity(
            type="feature-upsell",
            description="Strong feature adoption suggests readiness for premium features",
            estimated_value=round_half_up(value * 0.25),
            probability=45,
            suggested_action="Demo advanced analytics and reporting capabilities",
        ))

    if data.contract.expansion_discussed:
        opps.append(ExpansionOpportunity(
            type="stated-interest",
            description="Customer has explicitly discussed expansion",
            estimated_value=round_half_up(value * 0.5),
            probability=70,
            suggested_action="Schedule expansion planning meeting with decision-makers",
        ))

    return opps


def _engagement_trend(engagement: EngagementFacts) -> Trend:
    if engagement.last_contact_days < 14:
        return Trend.IMPROVING
    if engagement.last_contact_days > 45:
        return Trend.DECLINING
    return Trend.STABLE


def _sentiment_trend_and_detail(contract: ContractFacts) -> tuple[Trend, str]:
    if contract.competitor_mentioned:
        return Trend.DECLINING, "Competitor mentioned in recent conversations - potential risk"
    if contract.expansion_discussed:
        return Trend.IMPROVING, "Expansion discussed - positive sentiment"
    return Trend.STABLE, "Neutral sentiment - no strong indicators"


def assess_customer_health(data: HealthAssessmentInput) -> HealthAssessment:
    engagement, contract, usage = data.engagement, data.contract, data.usage
    usage_trend = _USAGE_TO_TREND[usage.usage_trend]

    engagement_score = calculate_engagement_score(engagement)
    adoption_score = calculate_adoption_score(usage)
    sentiment_score = calculate_sentiment_score(engagement, contract)
    contract_score = calculate_contract_health(contract)
    usage_trend_score = USAGE_TREND_SCORES[usage.usage_trend]
    sentiment_trend, sentiment_detail = _sentiment_trend_and_detail(contract)

    factors = [
        HealthFactor(
            name="Engagement",
            score=engagement_score,
            weight=FACTOR_WEIGHTS["engagement"],
            trend=_engagement_trend(engagement),
            detail=(
                f"Last contact: {engagement.last_contact_days} days ago. "
                f"{engagement.meetings_last_90_days} meetings in 90 days. "
                f"{round_half_up(engagement.email_response_rate * 100)}% email response rate."
            ),
        ),
        HealthFactor(
            name="Product Adoption",
            score=adoption_score,
            weight=FACTOR_WEIGHTS["adoption"],
            trend=usage_trend,
            detail=(
                f"{usage.active_users}/{usage.total_users} active users. "
                f"{usage.key_feature_usage:g}% key feature usage. "
                f"Trend: {usage.usage_trend.value}."
            ),
        ),
        HealthFactor(
            name="Sentiment",
            score=sentiment_score,
            weight=FACTOR_WEIGHTS["sentiment"],
            trend=sentiment_trend,
            detail=sentiment_detail,
        ),
        HealthFactor(
            name="Contract Health",
            score=contract_score,
            weight=FACTOR_WEIGHTS["contract_health"],
            trend=Trend.STABLE if contract.months_remaining > 6 else Trend.DECLINING,
            detail=(
                f"{contract.months_remaining} months remaining. "
                f"Contract value: {format_money(contract.contract_value)}."
            ),
        ),
        HealthFactor(
            name="Usage Trend",
            score=usage_trend_score,
            weight=FACTOR_WEIGHTS["usage_trend"],
            trend=usage_trend,
            detail=(
                f"Usage trend is {usage.usage_trend.value}. Active user ratio: "
                f"{round_half_up(_active_ratio(usage) * 100)}%."
            ),
        ),
    ]

    health_score = weighted_sum((f.score, f.weight) for f in factors)
    churn_risk = calculate_churn_risk(health_score)
    expansion_probability = calculate_expansion_probability(health_score, data)

    return HealthAssessment(
        health_score=health_score,
        health_status=determine_health_status(health_score, churn_risk, expansion_probability),
        engagement_score=engagement_score,
        adoption_score=adoption_score,
        sentiment_score=sentiment_score,
        expansion_probability=expansion_probability,
        churn_risk=churn_risk,
        factors=factors,
        expansion_opportunities=identify_expansion_opportunities(data, health_score),
    )
