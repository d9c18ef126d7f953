"""Buying-signal detection: classify a prospect's raw activity into buying signals.

Four independent rules run over the prospect's recorded signals; a prospect
may produce zero or several :class:`BuyingSignal` results per call:

1. **compliance-urgency**: violations and permit activity, weighted by
   :data:`SIGNAL_WEIGHTS`; emitted only when the composite reaches 40.
2. **expansion-ready**: at least two growth indicators; always emitted.
3. **leadership-transition**: any leadership change; always emitted.
4. **high-intent**: ``fit*0.4 + intent*0.6 >= 60`` on the prospect record.

:func:`classify_buying_signals` is pure.  :func:`detect_buying_signals`
reads the prospect and its signals through a :class:`ProspectRepository`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from sales_intel.data.models import Prospect, ProspectSignal, SignalType
from sales_intel.data.repository import ProspectRepository
from sales_intel.scoring.composite import ComponentSignal, composite_score, round_half_up
from sales_intel.telemetry import TelemetrySink, timed_event

logger = logging.getLogger(__name__)


class BuyingSignalType(str, Enum):
    COMPLIANCE_URGENCY = "compliance-urgency"
    EXPANSION_READY = "expansion-ready"
    LEADERSHIP_TRANSITION = "leadership-transition"
    HIGH_INTENT = "high-intent"


@dataclass(frozen=True)
class BuyingSignal:
    signal_type: BuyingSignalType
    title: str
    description: str
    composite_score: int
    component_signals: list[ComponentSignal] = field(default_factory=list)
    recommended_action: str = ""
    optimal_timing: str | None = None


SIGNAL_WEIGHTS: dict[SignalType, int] = {
    SignalType.VIOLATION: 25,
    SignalType.NEW_PERMIT: 20,
    SignalType.PERMIT_RENEWAL: 15,
    SignalType.EXPANSION: 20,
    SignalType.HIRING: 10,
    SignalType.FUNDING: 15,
    SignalType.ACQUISITION: 15,
    SignalType.REGULATORY_CHANGE: 20,
    SignalType.LEADERSHIP_CHANGE: 10,
    SignalType.FACILITY_OPENING: 15,
}
DEFAULT_SIGNAL_WEIGHT = 10

PERMIT_SIGNALS = frozenset({SignalType.NEW_PERMIT, SignalType.PERMIT_RENEWAL})
GROWTH_SIGNALS = frozenset({
    SignalType.EXPANSION,
    SignalType.HIRING,
    SignalType.FUNDING,
    SignalType.FACILITY_OPENING,
})

COMPLIANCE_EMIT_THRESHOLD = 40
COMPLIANCE_URGENT_THRESHOLD = 70
MIN_GROWTH_SIGNALS = 2
FIT_SHARE = 0.4
INTENT_SHARE = 0.6
HIGH_INTENT_THRESHOLD = 60


def signal_weight(signal_type: SignalType) -> int:
    return SIGNAL_WEIGHTS.get(signal_type, DEFAULT_SIGNAL_WEIGHT)


def _components(
    signals: Sequence[ProspectSignal], default_source: str,
) -> list[ComponentSignal]:
    return [
        ComponentSignal(
            type=s.signal_type.value,
            source=s.source_type or default_source,
            weight=signal_weight(s.signal_type),
            score=s.strength,
            detail=s.title,
        )
        for s in signals
    ]


def _compliance_urgency(
    prospect: Prospect, signals: Sequence[ProspectSignal],
) -> BuyingSignal | None:
    violations = [s for s in signals if s.signal_type == SignalType.VIOLATION]
    permits = [s for s in signals if s.signal_type in PERMIT_SIGNALS]
    if not violations and not permits:
        return None

    components = _components(violations, "regulatory") + _components(permits, "regulatory")
    score = composite_score(components)
    if score < COMPLIANCE_EMIT_THRESHOLD:
        return None

    if score >= COMPLIANCE_URGENT_THRESHOLD:
        action = "Immediate outreach - position compliance solution as urgent need"
    else:
        action = "Schedule discovery call to discuss compliance challenges"
    timing = (
        "Within 1-2 weeks of violation"
        if violations
        else "Before permit renewal deadline"
    )
    return BuyingSignal(
        signal_type=BuyingSignalType.COMPLIANCE_URGENCY,
        title=f"Compliance Urgency: {prospect.company_name}",
        description=(
            f"{len(violations)} violation(s) and {len(permits)} "
            "permit activity detected."
        ),
        composite_score=score,
        component_signals=components,
        recommended_action=action,
        optimal_timing=timing,
    )


def _expansion_ready(
    prospect: Prospect, signals: Sequence[ProspectSignal],
) -> BuyingSignal | None:
    growth = [s for s in signals if s.signal_type in GROWTH_SIGNALS]
    if len(growth) < MIN_GROWTH_SIGNALS:
        return None

    components = _components(growth, "business-intelligence")
    return BuyingSignal(
        signal_type=BuyingSignalType.EXPANSION_READY,
        title=f"Expansion Opportunity: {prospect.company_name}",
        description=(
            f"{len(growth)} growth indicators detected across hiring, "
            "funding, and expansion signals."
        ),
        composite_score=composite_score(components),
        component_signals=components,
        recommended_action=(
            "Position as growth enabler - emphasize scalability and multi-site support"
        ),
        optimal_timing=(
            "During expansion planning phase (typically 3-6 months before execution)"
        ),
    )


def _leadership_transition(
    prospect: Prospect, signals: Sequence[ProspectSignal],
) -> BuyingSignal | None:
    changes = [s for s in signals if s.signal_type == SignalType.LEADERSHIP_CHANGE]
    if not changes:
        return None

    components = _components(changes, "news")
    return BuyingSignal(
        signal_type=BuyingSignalType.LEADERSHIP_TRANSITION,
        title=f"Leadership Change: {prospect.company_name}",
        description=(
            "New leadership detected. New leaders often review and change "
            "vendors within first 90 days."
        ),
        composite_score=composite_score(components),
        component_signals=components,
        recommended_action=(
            "Reach out to new leadership within 30 days. Position as strategic "
            "partner for their new initiatives."
        ),
        optimal_timing="30-90 days after leadership change (during vendor review period)",
    )


def _high_intent(prospect: Prospect) -> BuyingSignal | None:
    # A zero score counts as unscored.
    fit, intent = prospect.fit_score, prospect.intent_score
    if not fit or not intent:
        return None

    combined = fit * FIT_SHARE + intent * INTENT_SHARE
    if combined < HIGH_INTENT_THRESHOLD:
        return None

    return BuyingSignal(
        signal_type=BuyingSignalType.HIGH_INTENT,
        title=f"High Intent: {prospect.company_name}",
        description=f"High combined fit ({fit}) and intent ({intent}) scores.",
        composite_score=round_half_up(combined),
        component_signals=[
            ComponentSignal(
                type="fit-score",
                source="scoring-engine",
                weight=40,
                score=fit,
                detail=f"Fit score: {fit}/100",
            ),
            ComponentSignal(
                type="intent-score",
                source="scoring-engine",
                weight=60,
                score=intent,
                detail=f"Intent score: {intent}/100",
            ),
        ],
        recommended_action=(
            "Prioritize for immediate outreach. This prospect shows strong "
            "alignment and buying intent."
        ),
        optimal_timing="Now - strike while intent is high",
    )


def classify_buying_signals(
    prospect: Prospect, signals: Sequence[ProspectSignal],
) -> list[BuyingSignal]:
    """Apply every rule to *prospect*; results sorted by composite score, descending."""
    if not signals:
        return []

    detected = [
        result
        for result in (
            _compliance_urgency(prospect, signals),
            _expansion_ready(prospect, signals),
            _leadership_transition(prospect, signals),
            _high_intent(prospect),
        )
        if result is not None
    ]
    return sorted(detected, key=lambda s: -s.composite_score)


async def detect_buying_signals(
    repo: ProspectRepository,
    tenant_id: str,
    prospect_id: str,
    *,
    telemetry: TelemetrySink | None = None,
) -> list[BuyingSignal]:
    """Load a prospect and its signals, then classify them.

    A missing prospect yields ``[]``.  Repository errors propagate.
    """
    with timed_event(
        telemetry, "signals.detected", tenant_id=tenant_id, prospect_id=prospect_id,
    ) as attrs:
        prospect = await repo.select_prospect_by_id(prospect_id, tenant_id)
        if prospect is None:
            logger.debug("Prospect %s not found for tenant %s", prospect_id, tenant_id)
            attrs.update(raw_signals=0, buying_signals=0)
            return []

        signals = await repo.select_signals_by_prospect_id(prospect_id, tenant_id)
        detected = classify_buying_signals(prospect, signals)
        attrs.update(raw_signals=len(signals), buying_signals=len(detected))
        logger.debug(
            "Prospect %s: %d raw signal(s) -> %d buying signal(s)",
            prospect_id, len(signals), len(detected),
        )
        return detected
