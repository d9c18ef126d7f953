"""Prospect fit/intent scoring from firmographic and regulatory facts.

Six sub-scores feed two composites:

- **fit**: industry match, company size, geographic fit
- **intent**: compliance risk, recent activity, regulatory pressure

Each composite is a weighted average of its three sub-scores using the
caller's weights (defaults in :data:`DEFAULT_SCORING_WEIGHTS`).  A human
readable ``signals`` list explains every band that fired.  Weight and
breakdown keys use the camelCase wire names (``industryMatch``, ...).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping

from pydantic import Field

from sales_intel.clock import as_utc, utc_now
from sales_intel.data.models import _StrictModel
from sales_intel.scoring.composite import clamp, round_half_up

DEFAULT_SCORING_WEIGHTS: dict[str, float] = {
    "industryMatch": 25,
    "complianceRisk": 20,
    "companySize": 15,
    "recentActivity": 20,
    "geographicFit": 10,
    "regulatoryPressure": 10,
}

_FIT_KEYS = ("industryMatch", "companySize", "geographicFit")
_INTENT_KEYS = ("complianceRisk", "recentActivity", "regulatoryPressure")

INDUSTRY_SIMILARITY: dict[str, tuple[str, ...]] = {
    "Environmental Services": (
        "Waste Management",
        "Remediation Services",
        "Environmental Consulting",
        "Water Treatment",
        "Air Quality",
    ),
    "Waste Management": (
        "Environmental Services",
        "Recycling",
        "Hazardous Waste",
        "Solid Waste",
    ),
    "Manufacturing": (
        "Industrial Manufacturing",
        "Chemical Manufacturing",
        "Metal Manufacturing",
        "Food Manufacturing",
    ),
    "Chemical Manufacturing": (
        "Manufacturing",
        "Petrochemical",
        "Pharmaceutical",
        "Specialty Chemicals",
    ),
    "Oil & Gas": ("Energy", "Petrochemical", "Mining", "Natural Resources"),
    "Construction": (
        "Building Materials",
        "Heavy Construction",
        "Infrastructure",
        "Real Estate Development",
    ),
    "Water Treatment": (
        "Environmental Services",
        "Utilities",
        "Municipal Services",
        "Wastewater",
    ),
}

# Lower bound of each revenue range, in dollars.
REVENUE_RANGE_MINIMUMS: dict[str, int] = {
    "0-1M": 0,
    "1M-10M": 1_000_000,
    "10M-50M": 10_000_000,
    "50M-100M": 50_000_000,
    "100M-500M": 100_000_000,
    "500M-1B": 500_000_000,
    "1B+": 1_000_000_000,
}

HIGH_PRESSURE_PROGRAMS = frozenset({"RCRA", "CWA", "CAA", "CERCLA", "TSCA"})
MODERATE_PRESSURE_PROGRAMS = frozenset({"SDWA", "NPDES", "TRI", "EPCRA"})


class ProspectScoringData(_StrictModel):
    industry: str | None = None
    target_industries: list[str] = Field(default_factory=list)
    violation_count: int = Field(default=0, ge=0)
    penalty_amount: float = Field(default=0, ge=0)
    employee_count: int | None = Field(default=None, ge=0)
    revenue_range: str | None = None
    last_activity_date: datetime | None = None
    state: str | None = None
    target_states: list[str] = Field(default_factory=list)
    regulatory_programs: list[str] = Field(default_factory=list)


@dataclass(frozen=True)
class ProspectScore:
    fit_score: int
    intent_score: int
    breakdown: dict[str, int] = field(default_factory=dict)
    signals: list[str] = field(default_factory=list)


def _score_industry_match(data: ProspectScoringData, signals: list[str]) -> int:
    if not data.industry:
        return 30
    if not data.target_industries:
        signals.append(f"Industry identified: {data.industry}")
        return 50

    industry_lower = data.industry.lower()
    if any(t.lower() == industry_lower for t in data.target_industries):
        signals.append(f"Direct industry match: {data.industry}")
        return 100

    related = {r.lower() for r in INDUSTRY_SIMILARITY.get(data.industry, ())}
    for target in data.target_industries:
        if target.lower() in related:
            signals.append(
                f"Related industry match: {data.industry} (related to {target})"
            )
            return 70

    signals.append(f"Industry mismatch: {data.industry}")
    return 20


def _score_compliance_risk(data: ProspectScoringData, signals: list[str]) -> int:
    score = 20
    violations = data.violation_count
    penalties = data.penalty_amount

    if violations >= 10:
        score += 50
        signals.append(f"High violation count: {violations} violations")
    elif violations >= 5:
        score += 35
        signals.append(f"Moderate violation count: {violations} violations")
    elif violations >= 2:
        score += 20
        signals.append(f"Some violations detected: {violations}")
    elif violations > 0:
        score += 10
        signals.append(f"Minor violation detected: {violations}")

    if penalties >= 100_000:
        score += 30
        signals.append(f"Significant penalties: ${penalties:,.0f}")
    elif penalties >= 25_000:
        score += 20
        signals.append(f"Notable penalties: ${penalties:,.0f}")
    elif penalties > 0:
        score += 10
        signals.append(f"Minor penalties: ${penalties:,.0f}")

    return int(clamp(score))


def _score_company_size(data: ProspectScoringData, signals: list[str]) -> int:
    score = 40
    employees = data.employee_count
    if employees is not None:
        if employees >= 1000:
            score = 90
            signals.append(f"Large enterprise: {employees:,} employees")
        elif employees >= 250:
            score = 75
            signals.append(f"Mid-market company: {employees:,} employees")
        elif employees >= 50:
            score = 60
            signals.append(f"SMB: {employees:,} employees")
        else:
            score = 35
            signals.append(f"Small business: {employees:,} employees")

    if data.revenue_range:
        minimum = REVENUE_RANGE_MINIMUMS.get(data.revenue_range)
        if minimum is not None:
            if minimum >= 100_000_000:
                score = max(score, 85)
                signals.append(f"High revenue range: {data.revenue_range}")
            elif minimum >= 10_000_000:
                score = max(score, 70)
                signals.append(f"Moderate revenue range: {data.revenue_range}")
            else:
                signals.append(f"Revenue range: {data.revenue_range}")

    return int(clamp(score))


def _score_recent_activity(
    data: ProspectScoringData, signals: list[str], now: datetime,
) -> int:
    if data.last_activity_date is None:
        return 30

    elapsed = as_utc(now) - as_utc(data.last_activity_date)
    days = math.floor(elapsed.total_seconds() / 86_400)
    if days <= 7:
        signals.append(f"Very recent activity: {days} day(s) ago")
        return 100
    if days <= 30:
        signals.append(f"Recent activity: {days} days ago")
        return 80
    if days <= 90:
        signals.append(f"Moderate activity: {days} days ago")
        return 60
    if days <= 180:
        signals.append(f"Aging activity: {days} days ago")
        return 40
    signals.append(f"Stale activity: {days} days ago")
    return 15


def _score_geographic_fit(data: ProspectScoringData, signals: list[str]) -> int:
    if not data.state:
        return 40
    if not data.target_states:
        signals.append(f"State identified: {data.state}")
        return 50
    state_lower = data.state.lower()
    if any(t.lower() == state_lower for t in data.target_states):
        signals.append(f"Target state match: {data.state}")
        return 100
    signals.append(f"Outside target states: {data.state}")
    return 20


def _score_regulatory_pressure(data: ProspectScoringData, signals: list[str]) -> int:
    programs = data.regulatory_programs
    if not programs:
        return 20

    score = 20
    high = [p for p in programs if p.upper() in HIGH_PRESSURE_PROGRAMS]
    moderate = [p for p in programs if p.upper() in MODERATE_PRESSURE_PROGRAMS]
    if high:
        score += len(high) * 20
        signals.append(f"High-pressure regulatory programs: {', '.join(high)}")
    if moderate:
        score += len(moderate) * 10
        signals.append(f"Moderate-pressure regulatory programs: {', '.join(moderate)}")
    if len(programs) >= 3:
        score += 15
        signals.append(f"Multi-program regulatory burden: {len(programs)} programs")
    return int(clamp(score))


def _weighted_average(
    breakdown: Mapping[str, int], weights: Mapping[str, float], keys: tuple[str, ...],
) -> int:
    total = sum(weights[k] for k in keys)
    if total <= 0:
        return 0
    return round_half_up(sum(breakdown[k] * weights[k] for k in keys) / total)


def score_prospect(
    data: ProspectScoringData,
    weights: Mapping[str, float] | None = None,
    *,
    now: datetime | None = None,
) -> ProspectScore:
    """Score *data*; *weights* overrides any subset of the default weights."""
    w = {**DEFAULT_SCORING_WEIGHTS, **(weights or {})}
    unknown = set(w) - set(DEFAULT_SCORING_WEIGHTS)
    if unknown:
        raise ValueError(f"Unknown scoring weights: {', '.join(sorted(unknown))}")
    now = now or utc_now()

    signals: list[str] = []
    breakdown = {
        "industryMatch": _score_industry_match(data, signals),
        "complianceRisk": _score_compliance_risk(data, signals),
        "companySize": _score_company_size(data, signals),
        "recentActivity": _score_recent_activity(data, signals, now),
        "geographicFit": _score_geographic_fit(data, signals),
        "regulatoryPressure": _score_regulatory_pressure(data, signals),
    }

    fit_score = _weighted_average(breakdown, w, _FIT_KEYS)
    intent_score = _weighted_average(breakdown, w, _INTENT_KEYS)
    breakdown["overallWeighted"] = _weighted_average(
        breakdown, w, tuple(DEFAULT_SCORING_WEIGHTS),
    )

    return ProspectScore(
        fit_score=int(clamp(fit_score)),
        intent_score=int(clamp(intent_score)),
        breakdown=breakdown,
        signals=signals,
    )
