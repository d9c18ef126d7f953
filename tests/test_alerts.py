"""Tests for alert rule evaluation, action items and priority ordering."""

from __future__ import annotations

from datetime import timedelta

import pytest
from conftest import NOW, TENANT, days_ago, make_prospect, make_signal
from pydantic import ValidationError

from sales_intel.alerts import (
    AlertCategory,
    AlertRule,
    AlertSeverity,
    GeneratedAlert,
    calculate_alert_priority,
    evaluate_alert_rules,
    generate_action_items,
    sort_alerts_by_priority,
)
from sales_intel.config import EngineConfig
from sales_intel.data import InMemoryRepository, SignalType
from sales_intel.telemetry import InMemoryTelemetrySink


def _rule(
    condition: str,
    parameters: dict | None = None,
    category: str = "compliance-violation",
    severity: str = "high",
    rule_id: str = "r1",
    enabled: bool = True,
) -> AlertRule:
    return AlertRule.model_validate({
        "id": rule_id,
        "name": f"Rule {rule_id}",
        "category": category,
        "severity": severity,
        "conditions": [{"condition": condition, "parameters": parameters or {}}],
        "enabled": enabled,
    })


def _alert(severity: AlertSeverity, category: AlertCategory, title: str) -> GeneratedAlert:
    return GeneratedAlert(category=category, severity=severity, title=title, description="")


@pytest.fixture()
def seeded(repo: InMemoryRepository) -> InMemoryRepository:
    repo.add_prospect(make_prospect("p1", "Acme Chemical", fit_score=85, intent_score=60))
    repo.add_prospect(make_prospect("p2", "Globex Plating", fit_score=60))
    repo.add_prospect(make_prospect("p3", "Initech Metals"))
    return repo


class TestNewViolation:
    @pytest.mark.asyncio
    async def test_window_is_inclusive(self, seeded: InMemoryRepository):
        seeded.add_signal(make_signal(
            SignalType.VIOLATION, "p1", detected_at=days_ago(7), signal_id="v-edge",
            strength=70, source_url="https://echo.example/v1", source_type="echo",
        ))
        seeded.add_signal(make_signal(
            SignalType.VIOLATION, "p1",
            detected_at=days_ago(7) - timedelta(seconds=1), signal_id="v-old",
        ))
        seeded.add_signal(make_signal(SignalType.HIRING, "p1", detected_at=days_ago(1)))

        alerts = await evaluate_alert_rules(seeded, TENANT, [_rule("new-violation")], now=NOW)

        [alert] = alerts
        assert alert.title == "Compliance Violation: Acme Chemical"
        assert alert.description == "New violation detected for Acme Chemical"
        assert alert.prospect_id == "p1"
        assert alert.category == AlertCategory.COMPLIANCE_VIOLATION
        assert alert.severity == AlertSeverity.HIGH
        assert alert.source_url == "https://echo.example/v1"
        assert alert.source_type == "echo"
        assert alert.metadata == {
            "ruleId": "r1",
            "condition": "new-violation",
            "signalId": "v-edge",
            "signalStrength": 70,
        }
        assert alert.action_items == [
            "Review violation details and severity",
            "Prepare compliance-focused outreach",
            "Calculate potential compliance cost savings",
        ]

    @pytest.mark.asyncio
    async def test_uses_signal_description(self, seeded: InMemoryRepository):
        seeded.add_signal(make_signal(
            SignalType.VIOLATION, "p2", detected_at=days_ago(2),
            description="Stormwater discharge exceedance",
        ))
        [alert] = await evaluate_alert_rules(seeded, TENANT, [_rule("new-violation")], now=NOW)
        assert alert.description == "Stormwater discharge exceedance"

    @pytest.mark.asyncio
    async def test_window_from_config(self, seeded: InMemoryRepository):
        seeded.add_signal(make_signal(SignalType.VIOLATION, "p1", detected_at=days_ago(2)))
        alerts = await evaluate_alert_rules(
            seeded, TENANT, [_rule("new-violation")],
            now=NOW, config=EngineConfig(violation_window_days=1),
        )
        assert alerts == []


class TestScoreThreshold:
    @pytest.mark.asyncio
    async def test_default_threshold_is_seventy(self, seeded: InMemoryRepository):
        [alert] = await evaluate_alert_rules(
            seeded, TENANT, [_rule("score-threshold", category="buying-signal")], now=NOW,
        )
        assert alert.title == "High-Score Prospect: Acme Chemical"
        assert alert.description == (
            "Acme Chemical has a fit score of 85, above threshold of 70"
        )
        assert alert.metadata["fitScore"] == 85
        assert alert.metadata["intentScore"] == 60
        assert alert.action_items == [
            "Review signal details and timing",
            "Prepare personalized outreach",
            "Schedule discovery call",
        ]

    @pytest.mark.asyncio
    async def test_min_score_parameter(self, seeded: InMemoryRepository):
        alerts = await evaluate_alert_rules(
            seeded, TENANT, [_rule("score-threshold", {"minScore": 50})], now=NOW,
        )
        assert [a.prospect_id for a in alerts] == ["p1", "p2"]


class TestNewSignal:
    @pytest.mark.asyncio
    async def test_three_day_window(self, seeded: InMemoryRepository):
        seeded.add_signal(make_signal(
            SignalType.FUNDING, "p1", detected_at=days_ago(3), title="Series B raised",
        ))
        seeded.add_signal(make_signal(SignalType.HIRING, "p2", detected_at=days_ago(4)))
        alerts = await evaluate_alert_rules(seeded, TENANT, [_rule("new-signal")], now=NOW)
        [alert] = alerts
        assert alert.title == "New Signal: Series B raised"
        assert alert.description == "Signal detected for Acme Chemical"
        assert alert.metadata["signalType"] == "funding"

    @pytest.mark.asyncio
    async def test_signal_type_filter(self, seeded: InMemoryRepository):
        seeded.add_signal(make_signal(SignalType.FUNDING, "p1", detected_at=days_ago(1)))
        seeded.add_signal(make_signal(SignalType.HIRING, "p1", detected_at=days_ago(1)))
        alerts = await evaluate_alert_rules(
            seeded, TENANT, [_rule("new-signal", {"signalType": "hiring"})], now=NOW,
        )
        assert [a.metadata["signalType"] for a in alerts] == ["hiring"]


class TestEvaluateAlertRules:
    @pytest.mark.asyncio
    async def test_disabled_rules_are_skipped(self, seeded: InMemoryRepository):
        rules = [_rule("score-threshold", enabled=False)]
        assert await evaluate_alert_rules(seeded, TENANT, rules, now=NOW) == []

    @pytest.mark.asyncio
    async def test_conditions_without_evaluator_match_nothing(self, seeded: InMemoryRepository):
        rules = [_rule("keyword-match", {"keywords": ["benzene"]}), _rule("permit-expiring-30d")]
        assert await evaluate_alert_rules(seeded, TENANT, rules, now=NOW) == []

    @pytest.mark.asyncio
    async def test_alerts_follow_rule_order(self, seeded: InMemoryRepository):
        seeded.add_signal(make_signal(SignalType.VIOLATION, "p3", detected_at=days_ago(1)))
        rules = [
            _rule("score-threshold", category="buying-signal", severity="medium", rule_id="a"),
            _rule("new-violation", rule_id="b"),
        ]
        alerts = await evaluate_alert_rules(seeded, TENANT, rules, now=NOW)
        assert [a.metadata["ruleId"] for a in alerts] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_telemetry(self, seeded: InMemoryRepository):
        sink = InMemoryTelemetrySink()
        rules = [_rule("score-threshold"), _rule("new-violation", enabled=False, rule_id="r2")]
        await evaluate_alert_rules(seeded, TENANT, rules, now=NOW, telemetry=sink)
        [event] = sink.named("alerts.evaluated")
        assert event.attributes["rules"] == 2
        assert event.attributes["rules_evaluated"] == 1
        assert event.attributes["alerts"] == 1

    @pytest.mark.asyncio
    async def test_idempotent_with_fixed_now(self, seeded: InMemoryRepository):
        seeded.add_signal(make_signal(SignalType.VIOLATION, "p1", detected_at=days_ago(1)))
        rules = [_rule("new-violation"), _rule("new-signal", rule_id="r2")]
        first = await evaluate_alert_rules(seeded, TENANT, rules, now=NOW)
        second = await evaluate_alert_rules(seeded, TENANT, rules, now=NOW)
        assert first == second


class TestAlertRuleModel:
    def test_unknown_condition_rejected(self):
        with pytest.raises(ValidationError):
            _rule("moon-phase")

    def test_blank_id_rejected(self):
        with pytest.raises(ValidationError):
            _rule("new-signal", rule_id="  ")

    def test_defaults(self):
        rule = AlertRule(id="r", category=AlertCategory.MARKET_SHIFT)
        assert rule.severity == AlertSeverity.MEDIUM
        assert rule.enabled is True
        assert rule.conditions == []


class TestPriority:
    def test_severity_plus_category_boost(self):
        assert calculate_alert_priority(
            AlertSeverity.CRITICAL, AlertCategory.COMPLIANCE_VIOLATION,
        ) == 115
        assert calculate_alert_priority(AlertSeverity.MEDIUM, AlertCategory.BUYING_SIGNAL) == 65
        assert calculate_alert_priority(AlertSeverity.LOW, AlertCategory.REGULATORY_CHANGE) == 50
        assert calculate_alert_priority(AlertSeverity.INFO, AlertCategory.MARKET_SHIFT) == 20

    def test_sort_is_stable_and_descending(self):
        alerts = [
            _alert(AlertSeverity.LOW, AlertCategory.MARKET_SHIFT, "low"),
            _alert(AlertSeverity.HIGH, AlertCategory.BUYING_SIGNAL, "high-a"),
            _alert(AlertSeverity.MEDIUM, AlertCategory.COMPLIANCE_VIOLATION, "medium"),
            _alert(AlertSeverity.HIGH, AlertCategory.EXPANSION_SIGNAL, "high-b"),
        ]
        assert [a.title for a in sort_alerts_by_priority(alerts)] == [
            "high-a", "high-b", "medium", "low",
        ]


class TestActionItems:
    def test_permit_expiry(self):
        assert generate_action_items(AlertCategory.PERMIT_EXPIRY) == [
            "Check permit expiration date",
            "Prepare renewal assistance offer",
        ]

    def test_default(self):
        assert generate_action_items(AlertCategory.CONTACT_CHANGE) == [
            "Review alert details",
            "Determine appropriate action",
        ]
