"""Alert rule evaluation against the prospect store.

Each enabled rule's conditions are dispatched to a condition handler that
scans the tenant's prospects and returns zero or more matches.  Every match
becomes a :class:`GeneratedAlert` carrying the rule's category and severity.
Condition types without a handler match nothing.

Recency windows are measured from an explicit *now* so results are
reproducible; when omitted the current UTC time is used.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, Iterable, Sequence

from sales_intel.alerts.models import (
    AlertCategory,
    AlertConditionType,
    AlertRule,
    AlertSeverity,
    ConditionMatch,
    GeneratedAlert,
)
from sales_intel.clock import as_utc, is_within_days, utc_now
from sales_intel.config import DEFAULT_CONFIG, EngineConfig
from sales_intel.data.models import SignalType
from sales_intel.data.repository import ProspectRepository
from sales_intel.telemetry import TelemetrySink, timed_event

logger = logging.getLogger(__name__)

SEVERITY_SCORES: dict[AlertSeverity, int] = {
    AlertSeverity.CRITICAL: 100,
    AlertSeverity.HIGH: 80,
    AlertSeverity.MEDIUM: 60,
    AlertSeverity.LOW: 40,
    AlertSeverity.INFO: 20,
}

CATEGORY_BOOSTS: dict[AlertCategory, int] = {
    AlertCategory.COMPLIANCE_VIOLATION: 15,
    AlertCategory.REGULATORY_CHANGE: 10,
    AlertCategory.BUYING_SIGNAL: 5,
    AlertCategory.EXPANSION_SIGNAL: 5,
}

ACTION_ITEMS: dict[AlertCategory, tuple[str, ...]] = {
    AlertCategory.COMPLIANCE_VIOLATION: (
        "Review violation details and severity",
        "Prepare compliance-focused outreach",
        "Calculate potential compliance cost savings",
    ),
    AlertCategory.BUYING_SIGNAL: (
        "Review signal details and timing",
        "Prepare personalized outreach",
        "Schedule discovery call",
    ),
    AlertCategory.PERMIT_EXPIRY: (
        "Check permit expiration date",
        "Prepare renewal assistance offer",
    ),
}
DEFAULT_ACTION_ITEMS = ("Review alert details", "Determine appropriate action")

ConditionHandler = Callable[
    [ProspectRepository, str, dict[str, Any], datetime, EngineConfig],
    Awaitable[list[ConditionMatch]],
]


def generate_action_items(category: AlertCategory) -> list[str]:
    return list(ACTION_ITEMS.get(category, DEFAULT_ACTION_ITEMS))


def calculate_alert_priority(severity: AlertSeverity, category: AlertCategory) -> int:
    """Severity base plus category boost; used only to order alerts for display."""
    return SEVERITY_SCORES.get(severity, 0) + CATEGORY_BOOSTS.get(category, 0)


def sort_alerts_by_priority(alerts: Iterable[GeneratedAlert]) -> list[GeneratedAlert]:
    """Highest priority first; equal priorities keep their input order."""
    return sorted(
        alerts,
        key=lambda a: calculate_alert_priority(a.severity, a.category),
        reverse=True,
    )


async def _new_violation(
    repo: ProspectRepository,
    tenant_id: str,
    parameters: dict[str, Any],
    now: datetime,
    config: EngineConfig,
) -> list[ConditionMatch]:
    matches: list[ConditionMatch] = []
    prospects = await repo.select_prospects_by_tenant_id(
        tenant_id, limit=config.prospect_scan_limit,
    )
    for prospect in prospects:
        signals = await repo.select_signals_by_prospect_id(prospect.id, tenant_id)
        for s in signals:
            if s.signal_type != SignalType.VIOLATION:
                continue
            if not is_within_days(s.detected_at, config.violation_window_days, now):
                continue
            matches.append(ConditionMatch(
                title=f"Compliance Violation: {prospect.company_name}",
                description=(
                    s.description
                    or f"New violation detected for {prospect.company_name}"
                ),
                prospect_id=prospect.id,
                source_url=s.source_url,
                source_type=s.source_type,
                metadata={"signalId": s.id, "signalStrength": s.strength},
            ))
    return matches


async def _score_threshold(
    repo: ProspectRepository,
    tenant_id: str,
    parameters: dict[str, Any],
    now: datetime,
    config: EngineConfig,
) -> list[ConditionMatch]:
    threshold = parameters.get("minScore")
    if threshold is None:
        threshold = config.default_min_fit_score
    prospects = await repo.select_prospects_by_tenant_id(
        tenant_id, limit=config.score_threshold_scan_limit, min_fit_score=threshold,
    )
    return [
        ConditionMatch(
            title=f"High-Score Prospect: {p.company_name}",
            description=(
                f"{p.company_name} has a fit score of {p.fit_score}, "
                f"above threshold of {threshold}"
            ),
            prospect_id=p.id,
            metadata={"fitScore": p.fit_score, "intentScore": p.intent_score},
        )
        for p in prospects
    ]


async def _new_signal(
    repo: ProspectRepository,
    tenant_id: str,
    parameters: dict[str, Any],
    now: datetime,
    config: EngineConfig,
) -> list[ConditionMatch]:
    wanted = parameters.get("signalType") or None
    matches: list[ConditionMatch] = []
    prospects = await repo.select_prospects_by_tenant_id(
        tenant_id, limit=config.prospect_scan_limit,
    )
    for prospect in prospects:
        signals = await repo.select_signals_by_prospect_id(prospect.id, tenant_id)
        for s in signals:
            if not is_within_days(s.detected_at, config.signal_window_days, now):
                continue
            if wanted is not None and s.signal_type.value != wanted:
                continue
            matches.append(ConditionMatch(
                title=f"New Signal: {s.title}",
                description=s.description or f"Signal detected for {prospect.company_name}",
                prospect_id=prospect.id,
                source_url=s.source_url,
                source_type=s.source_type,
                metadata={"signalId": s.id, "signalType": s.signal_type.value},
            ))
    return matches


CONDITION_HANDLERS: dict[AlertConditionType, ConditionHandler] = {
    AlertConditionType.NEW_VIOLATION: _new_violation,
    AlertConditionType.SCORE_THRESHOLD: _score_threshold,
    AlertConditionType.NEW_SIGNAL: _new_signal,
}


async def evaluate_alert_rules(
    repo: ProspectRepository,
    tenant_id: str,
    rules: Sequence[AlertRule],
    *,
    now: datetime | None = None,
    config: EngineConfig | None = None,
    telemetry: TelemetrySink | None = None,
) -> list[GeneratedAlert]:
    """Evaluate *rules* for *tenant_id* and return alerts in rule/condition order.

    Disabled rules are skipped.  Repository errors propagate.
    """
    config = config or DEFAULT_CONFIG
    now = as_utc(now) if now is not None else utc_now()
    alerts: list[GeneratedAlert] = []

    with timed_event(
        telemetry, "alerts.evaluated", tenant_id=tenant_id, rules=len(rules),
    ) as attrs:
        evaluated = 0
        for rule in rules:
            if not rule.enabled:
                logger.debug("Skipping disabled alert rule %s", rule.id)
                continue
            evaluated += 1
            for condition in rule.conditions:
                handler = CONDITION_HANDLERS.get(condition.condition)
                if handler is None:
                    logger.debug(
                        "Rule %s: condition %s has no evaluator",
                        rule.id, condition.condition.value,
                    )
                    continue
                matches = await handler(repo, tenant_id, condition.parameters, now, config)
                logger.debug(
                    "Rule %s: condition %s matched %d",
                    rule.id, condition.condition.value, len(matches),
                )
                for match in matches:
                    alerts.append(GeneratedAlert(
                        category=rule.category,
                        severity=rule.severity,
                        title=match.title,
                        description=match.description,
                        prospect_id=match.prospect_id,
                        source_url=match.source_url,
                        source_type=match.source_type,
                        action_items=generate_action_items(rule.category),
                        metadata={
                            "ruleId": rule.id,
                            "condition": condition.condition.value,
                            **match.metadata,
                        },
                    ))
        attrs.update(rules_evaluated=evaluated, alerts=len(alerts))

    return alerts
