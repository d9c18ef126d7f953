"""Tests for buying-signal classification and detection."""

from __future__ import annotations

import pytest
from conftest import TENANT, make_prospect, make_signal

from sales_intel.data import InMemoryRepository, SignalType
from sales_intel.signals import (
    SIGNAL_WEIGHTS,
    BuyingSignalType,
    classify_buying_signals,
    detect_buying_signals,
    signal_weight,
)
from sales_intel.telemetry import InMemoryTelemetrySink


def _types(results) -> list[BuyingSignalType]:
    return [r.signal_type for r in results]


class TestHighIntent:
    def test_high_combined_score_emits_signal(self):
        prospect = make_prospect(fit_score=80, intent_score=70)
        results = classify_buying_signals(prospect, [make_signal(SignalType.HIRING)])
        assert _types(results) == [BuyingSignalType.HIGH_INTENT]
        high = results[0]
        assert high.composite_score == 74
        assert [c.type for c in high.component_signals] == ["fit-score", "intent-score"]
        assert [c.weight for c in high.component_signals] == [40, 60]
        assert high.optimal_timing == "Now - strike while intent is high"

    def test_mid_scores_emit_nothing(self):
        prospect = make_prospect(fit_score=50, intent_score=50)
        assert classify_buying_signals(prospect, [make_signal(SignalType.HIRING)]) == []

    def test_zero_score_counts_as_unscored(self):
        prospect = make_prospect(fit_score=0, intent_score=100)
        assert classify_buying_signals(prospect, [make_signal(SignalType.HIRING)]) == []

    def test_no_signals_means_no_results(self):
        prospect = make_prospect(fit_score=95, intent_score=95)
        assert classify_buying_signals(prospect, []) == []


class TestComplianceUrgency:
    def test_urgent_violation_and_permit(self):
        signals = [
            make_signal(SignalType.VIOLATION, strength=80),
            make_signal(SignalType.NEW_PERMIT, strength=60),
        ]
        [result] = classify_buying_signals(make_prospect(), signals)
        assert result.signal_type == BuyingSignalType.COMPLIANCE_URGENCY
        # (80*25 + 60*20) / 45
        assert result.composite_score == 71
        assert result.recommended_action.startswith("Immediate outreach")
        assert result.optimal_timing == "Within 1-2 weeks of violation"
        assert result.description == "1 violation(s) and 1 permit activity detected."
        assert {c.source for c in result.component_signals} == {"regulatory"}

    def test_permit_only_is_not_urgent(self):
        [result] = classify_buying_signals(
            make_prospect(), [make_signal(SignalType.PERMIT_RENEWAL, strength=50)],
        )
        assert result.composite_score == 50
        assert result.recommended_action.startswith("Schedule discovery call")
        assert result.optimal_timing == "Before permit renewal deadline"

    def test_weak_signals_below_threshold(self):
        results = classify_buying_signals(
            make_prospect(), [make_signal(SignalType.VIOLATION, strength=30)],
        )
        assert results == []

    def test_source_type_overrides_default_source(self):
        signal = make_signal(SignalType.VIOLATION, strength=90, source_type="echo")
        [result] = classify_buying_signals(make_prospect(), [signal])
        assert result.component_signals[0].source == "echo"


class TestExpansionAndLeadership:
    def test_two_growth_signals_emit_expansion(self):
        signals = [
            make_signal(SignalType.EXPANSION, strength=80),
            make_signal(SignalType.HIRING, strength=50),
        ]
        [result] = classify_buying_signals(make_prospect(), signals)
        assert result.signal_type == BuyingSignalType.EXPANSION_READY
        # (80*20 + 50*10) / 30
        assert result.composite_score == 70

    def test_single_growth_signal_is_not_enough(self):
        assert classify_buying_signals(
            make_prospect(), [make_signal(SignalType.FUNDING, strength=90)],
        ) == []

    def test_leadership_change_always_emits(self):
        [result] = classify_buying_signals(
            make_prospect(), [make_signal(SignalType.LEADERSHIP_CHANGE, strength=15)],
        )
        assert result.signal_type == BuyingSignalType.LEADERSHIP_TRANSITION
        assert result.composite_score == 15
        assert result.component_signals[0].source == "news"


class TestOrdering:
    def test_sorted_by_composite_descending(self):
        prospect = make_prospect(fit_score=80, intent_score=70)
        signals = [
            make_signal(SignalType.LEADERSHIP_CHANGE, strength=20),
            make_signal(SignalType.VIOLATION, strength=90),
            make_signal(SignalType.EXPANSION, strength=50),
            make_signal(SignalType.HIRING, strength=50),
        ]
        results = classify_buying_signals(prospect, signals)
        assert _types(results) == [
            BuyingSignalType.COMPLIANCE_URGENCY,
            BuyingSignalType.HIGH_INTENT,
            BuyingSignalType.EXPANSION_READY,
            BuyingSignalType.LEADERSHIP_TRANSITION,
        ]
        scores = [r.composite_score for r in results]
        assert scores == sorted(scores, reverse=True)

    def test_idempotent(self):
        prospect = make_prospect(fit_score=80, intent_score=70)
        signals = [make_signal(SignalType.VIOLATION, strength=90)]
        assert classify_buying_signals(prospect, signals) == classify_buying_signals(
            prospect, signals,
        )


class TestSignalWeights:
    def test_known_and_default_weights(self):
        assert signal_weight(SignalType.VIOLATION) == 25
        assert signal_weight(SignalType.NEW_PRODUCT) == 10
        assert signal_weight(SignalType.CONTRACT_AWARD) == 10
        assert SignalType.NEW_PRODUCT not in SIGNAL_WEIGHTS


class TestDetectBuyingSignals:
    @pytest.mark.asyncio
    async def test_reads_prospect_and_signals(self, repo: InMemoryRepository):
        repo.add_prospect(make_prospect(fit_score=80, intent_score=70))
        repo.add_signal(make_signal(SignalType.VIOLATION, strength=90))
        sink = InMemoryTelemetrySink()

        results = await detect_buying_signals(repo, TENANT, "p1", telemetry=sink)

        assert _types(results) == [
            BuyingSignalType.COMPLIANCE_URGENCY,
            BuyingSignalType.HIGH_INTENT,
        ]
        [event] = sink.named("signals.detected")
        assert event.attributes["raw_signals"] == 1
        assert event.attributes["buying_signals"] == 2
        assert "elapsed_ms" in event.attributes

    @pytest.mark.asyncio
    async def test_missing_prospect_returns_empty(self, repo: InMemoryRepository):
        assert await detect_buying_signals(repo, TENANT, "nope") == []

    @pytest.mark.asyncio
    async def test_other_tenant_is_not_visible(self, repo: InMemoryRepository):
        repo.add_prospect(make_prospect(fit_score=90, intent_score=90))
        repo.add_signal(make_signal(SignalType.VIOLATION, strength=90))
        assert await detect_buying_signals(repo, "other-tenant", "p1") == []

    @pytest.mark.asyncio
    async def test_repository_errors_propagate(self):
        class BrokenRepo(InMemoryRepository):
            async def select_prospect_by_id(self, prospect_id, tenant_id):
                raise ConnectionError("db down")

        sink = InMemoryTelemetrySink()
        with pytest.raises(ConnectionError):
            await detect_buying_signals(BrokenRepo(), TENANT, "p1", telemetry=sink)
        assert sink.events == []
