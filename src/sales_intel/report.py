"""Output formatters for engine results: aligned text tables and camelCase JSON."""

from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Sequence

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from sales_intel.alerts.engine import calculate_alert_priority
from sales_intel.alerts.models import GeneratedAlert
from sales_intel.compliance.models import ComplianceEstimate
from sales_intel.deals.models import DealInsights, PortfolioSummary
from sales_intel.formatting import format_money
from sales_intel.health.models import HealthAssessment
from sales_intel.relationships.mapper import RelationshipAnalysis
from sales_intel.scoring.contact import ContactScore
from sales_intel.scoring.prospect import ProspectScore
from sales_intel.signals.detector import BuyingSignal

WIDTH = 72


def to_wire(value: Any) -> Any:
    """Convert a result into JSON-ready data with camelCase field names.

    Mapping keys that are data (stage names, competitor names, metadata)
    are kept as-is; only dataclass and model field names are renamed.
    """
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        return {to_camel(f.name): to_wire(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, dict):
        return {
            (k.value if isinstance(k, Enum) else k): to_wire(v) for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [to_wire(v) for v in value]
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def format_json(result: Any) -> str:
    return json.dumps(to_wire(result), indent=2)


def _row(cols: list[str], widths: list[int]) -> str:
    return "  ".join(c.ljust(w) for c, w in zip(cols, widths)).rstrip()


def _bullets(title: str, items: Sequence[str]) -> list[str]:
    if not items:
        return []
    return [title, *[f"  - {item}" for item in items], ""]


def format_health_table(result: HealthAssessment) -> str:
    lines = ["Customer Health Assessment", "=" * WIDTH]
    widths = [20, 7, 8, 10]
    lines.append(_row(["Factor", "Score", "Weight", "Trend"], widths))
    lines.append("-" * WIDTH)
    for f in result.factors:
        lines.append(_row([f.name, str(f.score), f"{f.weight:.2f}", f.trend.value], widths))
        lines.append(f"    {f.detail}")
    lines.append("-" * WIDTH)
    lines.append("")

    opps = [
        f"{o.type}: {format_money(o.estimated_value)} at {o.probability}% - {o.suggested_action}"
        for o in result.expansion_opportunities
    ]
    lines.extend(_bullets("Expansion Opportunities", opps))

    lines.append(
        f"Health: {result.health_score} ({result.health_status.value})"
        f" | churn risk: {result.churn_risk}%"
        f" | expansion: {result.expansion_probability}%"
    )
    return "\n".join(lines)


def format_deal_table(result: DealInsights) -> str:
    lines = ["Win/Loss Analysis", "=" * WIDTH]
    widths = [28, 9, 6]
    lines.append(_row(["Factor", "Impact", "Weight"], widths))
    lines.append("-" * WIDTH)
    for f in result.key_factors:
        lines.append(_row([f.factor[:28], f.impact.value, str(f.weight)], widths))
        lines.append(f"    {f.description}")
    lines.append("-" * WIDTH)
    lines.append("")
    lines.extend(_bullets("Lessons Learned", result.lessons_learned))
    lines.extend(_bullets("Recommendations", result.recommendations))
    b = result.benchmarks
    lines.append(
        f"Benchmarks: won cycle {b.avg_sales_cycle_won}d"
        f" | lost cycle {b.avg_sales_cycle_lost}d"
        f" | avg won {format_money(b.avg_deal_size_won)}"
    )
    return "\n".join(lines)


def format_portfolio_table(result: PortfolioSummary) -> str:
    lines = ["Deal Portfolio", "=" * WIDTH]
    lines.append(
        f"Deals: {result.total_deals} | win rate: {result.win_rate}%"
        f" | avg cycle: {result.avg_sales_cycle}d"
        f" | avg won size: {format_money(result.avg_deal_size)}"
    )
    lines.append("")
    lines.extend(_bullets("Top Win Reasons", result.top_win_reasons))
    lines.extend(_bullets("Top Loss Reasons", result.top_loss_reasons))
    if result.competitor_win_rates:
        widths = [30, 8]
        lines.append(_row(["Competitor", "Win %"], widths))
        lines.append("-" * WIDTH)
        for name, rate in result.competitor_win_rates.items():
            lines.append(_row([name[:30], str(rate)], widths))
    return "\n".join(lines).rstrip()


def format_compliance_table(result: ComplianceEstimate) -> str:
    lines = ["Compliance Burden Estimate", "=" * WIDTH]
    widths = [28, 12, 5, 12]
    lines.append(_row(["Category", "Annual", "Auto", "Savings"], widths))
    lines.append("-" * WIDTH)
    for c in result.cost_breakdown:
        lines.append(_row(
            [
                c.category[:28],
                format_money(c.annual_cost),
                "yes" if c.automatable else "no",
                format_money(c.potential_savings),
            ],
            widths,
        ))
    lines.append("-" * WIDTH)
    roi = result.roi_projection
    lines.append(
        f"Annual cost: {format_money(result.estimated_annual_cost)}"
        f" | savings: {format_money(result.savings_opportunity)}"
        f" | risk: {result.risk_level.value}"
    )
    lines.append(
        f"ROI: implementation {format_money(roi.implementation_cost)}"
        f" | year 1 {format_money(roi.year1_savings)}"
        f" | year 3 {format_money(roi.year3_savings)}"
        f" | payback {roi.payback_months} mo"
        f" | 3-year ROI {roi.roi_3_year}%"
    )
    return "\n".join(lines)


def format_prospect_score_table(result: ProspectScore) -> str:
    lines = ["Prospect Score", "=" * WIDTH]
    widths = [28, 8]
    for name, score in result.breakdown.items():
        lines.append(_row([name, str(score)], widths))
    lines.append("-" * WIDTH)
    lines.extend(_bullets("Signals", result.signals))
    lines.append(f"Fit: {result.fit_score} | intent: {result.intent_score}")
    return "\n".join(lines)


def format_contact_score_table(result: ContactScore) -> str:
    lines = ["Contact Score", "=" * WIDTH]
    widths = [28, 8]
    for name, score in (
        ("Data quality", result.data_quality),
        ("Role fit", result.role_fit),
        ("Engagement", result.engagement),
        ("Enrichment depth", result.enrichment_depth),
    ):
        lines.append(_row([name, f"{score}/25"], widths))
    lines.append("-" * WIDTH)
    lines.append(f"Total: {result.total}")
    return "\n".join(lines)


def format_signals_table(signals: Sequence[BuyingSignal]) -> str:
    if not signals:
        return "No buying signals detected."
    lines = ["Buying Signals", "=" * WIDTH]
    widths = [22, 6, 40]
    lines.append(_row(["Type", "Score", "Title"], widths))
    lines.append("-" * WIDTH)
    for s in signals:
        lines.append(_row([s.signal_type.value, str(s.composite_score), s.title[:40]], widths))
        lines.append(f"    -> {s.recommended_action}")
    return "\n".join(lines)


def format_relationships_table(result: RelationshipAnalysis) -> str:
    lines = [f"Buying Committee: {result.company_name}", "=" * WIDTH]
    widths = [22, 20, 3, 8]
    lines.append(_row(["Contact", "Suggested Role", "Inf", "Engaged"], widths))
    lines.append("-" * WIDTH)
    for c in result.contacts:
        lines.append(_row(
            [
                c.name[:22],
                c.suggested_committee_role.value,
                str(c.influence),
                c.engagement_level.value,
            ],
            widths,
        ))
    lines.append("")
    names = {c.contact_id: c.name for c in result.contacts}
    edges = [
        f"{names.get(e.from_contact_id, e.from_contact_id)} {e.type.value} "
        f"{names.get(e.to_contact_id, e.to_contact_id)} (strength {e.strength})"
        for e in result.relationships
    ]
    lines.extend(_bullets("Relationships", edges))
    lines.extend(_bullets("Coverage Gaps", result.coverage_gaps))
    lines.extend(_bullets("Recommendations", result.recommendations))
    return "\n".join(lines).rstrip()


def format_alerts_table(alerts: Sequence[GeneratedAlert]) -> str:
    if not alerts:
        return "No alerts."
    lines = ["Alerts", "=" * WIDTH]
    widths = [4, 9, 22, 33]
    lines.append(_row(["Pri", "Severity", "Category", "Title"], widths))
    lines.append("-" * WIDTH)
    for a in alerts:
        lines.append(_row(
            [
                str(calculate_alert_priority(a.severity, a.category)),
                a.severity.value,
                a.category.value,
                a.title[:33],
            ],
            widths,
        ))
    return "\n".join(lines)
