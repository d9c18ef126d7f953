"""Win/loss analysis: key factors, lessons, and recommendations from closed deals.

:func:`analyze_deal` applies independent pattern rules to one deal, each of
which may append a factor, a lesson, or a recommendation.  Rules run in a
fixed order so the output lists are deterministic.
:func:`analyze_portfolio` aggregates outcomes across many deals.
"""

from __future__ import annotations

from collections import Counter
from typing import NamedTuple, Sequence

from sales_intel.config import DEFAULT_CONFIG, EngineConfig
from sales_intel.deals.models import (
    DealBenchmarks,
    DealData,
    DealFactor,
    DealInsights,
    DealOutcome,
    Impact,
    PortfolioSummary,
)
from sales_intel.formatting import format_money
from sales_intel.scoring.composite import round_half_up


class ReasonFamily(NamedTuple):
    keywords: tuple[str, ...]
    factor: str
    weight: int


# Scanned in order; one reason can match several families.
REASON_FAMILIES: tuple[ReasonFamily, ...] = (
    ReasonFamily(("price", "cost", "budget"), "Pricing", 8),
    ReasonFamily(("feature", "capability", "function"), "Product capabilities", 7),
    ReasonFamily(("relationship", "trust", "support"), "Relationship strength", 6),
    ReasonFamily(("timeline", "urgency", "timing"), "Timing", 5),
)

FAST_CYCLE_DAYS = 30
SLOW_WIN_CYCLE_DAYS = 120
SLOW_LOSS_CYCLE_DAYS = 90
ENTERPRISE_DEAL_VALUE = 100_000
TOP_REASON_COUNT = 5

INDUSTRY_BENCHMARKS = DealBenchmarks(
    avg_sales_cycle_won=45,
    avg_sales_cycle_lost=75,
    avg_deal_size_won=85_000,
    win_rate_by_stage={"qualified": 35, "proposal": 55, "negotiation": 75},
)

_WON_RECOMMENDATIONS = (
    "Document winning strategy and tactics for playbook",
    "Request reference/case study from this customer",
    "Set up regular health check cadence to protect and expand account",
)
_LOST_RECOMMENDATIONS = (
    "Schedule post-mortem with full sales team",
    "Set reminder to re-engage in 6 months when circumstances may change",
    "Update ICP and qualification criteria based on loss factors",
)


def _outcome_impact(outcome: DealOutcome) -> Impact:
    return Impact.POSITIVE if outcome == DealOutcome.WON else Impact.NEGATIVE


def analyze_deal(deal: DealData, *, config: EngineConfig | None = None) -> DealInsights:
    config = config or DEFAULT_CONFIG
    factors: list[DealFactor] = []
    lessons: list[str] = []
    recs: list[str] = []
    outcome = deal.outcome
    cycle = deal.sales_cycle_length

    if outcome == DealOutcome.WON:
        if cycle < FAST_CYCLE_DAYS:
            factors.append(DealFactor(
                "Fast sales cycle", Impact.POSITIVE, 8,
                f"Deal closed in {cycle} days - strong urgency and alignment",
            ))
        elif cycle > SLOW_WIN_CYCLE_DAYS:
            factors.append(DealFactor(
                "Extended sales cycle", Impact.NEUTRAL, 5,
                f"{cycle} day cycle - consider what delayed the process",
            ))
            lessons.append(
                "Long sales cycles increase risk of no-decision. "
                "Identify and address blockers earlier."
            )
    elif outcome == DealOutcome.LOST and cycle > SLOW_LOSS_CYCLE_DAYS:
        factors.append(DealFactor(
            "Prolonged evaluation", Impact.NEGATIVE, 7,
            "Extended cycle may indicate poor qualification or loss of champion",
        ))
        lessons.append("Set clear decision timelines and milestones early in the process.")

    competitor = deal.competitor_involved
    if competitor:
        if outcome == DealOutcome.WON:
            factors.append(DealFactor(
                "Competitive win", Impact.POSITIVE, 9,
                f"Won against {competitor} - differentiation message resonated",
            ))
            recs.append(
                f"Document winning strategy against {competitor} for battle card updates"
            )
        elif outcome == DealOutcome.LOST:
            factors.append(DealFactor(
                "Competitive loss", Impact.NEGATIVE, 9,
                f"Lost to {competitor} - review competitive positioning",
            ))
            lessons.append(f"Analyze what {competitor} offered that we didn't match")
            recs.append(f"Update battle card for {competitor} based on this loss")

    if deal.deal_value > ENTERPRISE_DEAL_VALUE:
        factors.append(DealFactor(
            "Enterprise deal", _outcome_impact(outcome), 7,
            f"{format_money(deal.deal_value)} deal - enterprise-level engagement",
        ))

    for reason in deal.win_loss_reasons:
        lowered = reason.lower()
        for family in REASON_FAMILIES:
            if not any(k in lowered for k in family.keywords):
                continue
            factors.append(
                DealFactor(family.factor, _outcome_impact(outcome), family.weight, reason)
            )
            if family.factor == "Pricing" and outcome == DealOutcome.LOST:
                lessons.append(
                    "Review pricing strategy - consider ROI-based selling "
                    "to justify investment"
                )
                recs.append(
                    "Lead with ROI and compliance cost savings before discussing price"
                )

    stalled = [s for s in deal.stages if s.duration_days > config.stalled_stage_days]
    for stage in stalled:
        factors.append(DealFactor(
            f"Stalled at {stage.stage}", Impact.NEGATIVE, 6,
            f"Spent {stage.duration_days} days in {stage.stage} stage",
        ))
    if stalled:
        names = ", ".join(s.stage for s in stalled)
        lessons.append(
            f"Deal stalled at: {names}. Identify blockers at these stages earlier."
        )

    if outcome == DealOutcome.NO_DECISION:
        lessons.append(
            "No-decision outcomes often indicate weak pain or no compelling event. "
            "Qualify harder upfront."
        )
        recs.append(
            "Establish a mutual close plan with clear milestones and decision criteria"
        )
        recs.append("Identify and validate a compelling event that drives urgency")

    if outcome == DealOutcome.WON:
        recs.extend(_WON_RECOMMENDATIONS)
    elif outcome == DealOutcome.LOST:
        recs.extend(_LOST_RECOMMENDATIONS)

    return DealInsights(
        key_factors=factors,
        lessons_learned=lessons,
        recommendations=recs,
        benchmarks=INDUSTRY_BENCHMARKS,
    )


def _percent(part: int, whole: int) -> int:
    return round_half_up(part / whole * 100) if whole else 0


def _top_reasons(deals: Sequence[DealData]) -> list[str]:
    # Counter keeps first-seen order among equal counts.
    counts = Counter(r for d in deals for r in d.win_loss_reasons)
    return [reason for reason, _ in counts.most_common(TOP_REASON_COUNT)]


def analyze_portfolio(deals: Sequence[DealData]) -> PortfolioSummary:
    """Aggregate win rate, cycle, deal size, top reasons, and per-competitor win rate."""
    won = [d for d in deals if d.outcome == DealOutcome.WON]
    lost = [d for d in deals if d.outcome == DealOutcome.LOST]
    total = len(deals)

    avg_cycle = round_half_up(sum(d.sales_cycle_length for d in deals) / total) if total else 0
    avg_size = round_half_up(sum(d.deal_value for d in won) / len(won)) if won else 0

    competitor_totals: Counter[str] = Counter()
    competitor_wins: Counter[str] = Counter()
    for d in deals:
        if d.competitor_involved:
            competitor_totals[d.competitor_involved] += 1
            if d.outcome == DealOutcome.WON:
                competitor_wins[d.competitor_involved] += 1

    return PortfolioSummary(
        total_deals=total,
        win_rate=_percent(len(won), total),
        avg_sales_cycle=avg_cycle,
        avg_deal_size=avg_size,
        top_win_reasons=_top_reasons(won),
        top_loss_reasons=_top_reasons(lost),
        competitor_win_rates={
            name: _percent(competitor_wins[name], count)
            for name, count in competitor_totals.items()
        },
    )
