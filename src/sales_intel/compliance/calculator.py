"""Annual compliance burden and automation ROI estimate.

Program lines scale a fixed per-facility base cost by facility count.
Overhead lines are percentages of the program total.  A prior-violation
input adds a remediation line.  Savings come from each line's automatable
share; the ROI projection assumes implementation at 15% of annual cost and
a 60% first-year ramp.
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from sales_intel.compliance.models import (
    ComplianceEstimate,
    ComplianceInput,
    CostLine,
    RiskLevel,
    RoiProjection,
)
from sales_intel.scoring.composite import round_half_up

logger = logging.getLogger(__name__)


class ProgramCost(NamedTuple):
    base: int
    description: str
    automatable: float


class OverheadCategory(NamedTuple):
    category: str
    percentage: float
    description: str
    automatable: bool


# Annual cost per facility.
PROGRAM_COSTS: dict[str, ProgramCost] = {
    "CAA": ProgramCost(
        45_000, "Clean Air Act compliance - emissions monitoring, reporting, permits", 0.45,
    ),
    "CWA": ProgramCost(
        35_000, "Clean Water Act - discharge monitoring, stormwater management", 0.4,
    ),
    "RCRA": ProgramCost(
        30_000, "Resource Conservation & Recovery Act - hazardous waste management", 0.35,
    ),
    "TSCA": ProgramCost(
        20_000, "Toxic Substances Control Act - chemical inventory reporting", 0.5,
    ),
    "EPCRA": ProgramCost(15_000, "Emergency Planning and Community Right-to-Know Act", 0.55),
    "TRI": ProgramCost(25_000, "Toxics Release Inventory reporting", 0.6),
    "MACT": ProgramCost(55_000, "Maximum Achievable Control Technology standards", 0.4),
    "NSPS": ProgramCost(40_000, "New Source Performance Standards compliance", 0.45),
    "Title V": ProgramCost(50_000, "Title V operating permit compliance", 0.5),
    "SPCC": ProgramCost(20_000, "Spill Prevention, Control, and Countermeasure", 0.3),
    "NPDES": ProgramCost(30_000, "National Pollutant Discharge Elimination System", 0.4),
    "RMP": ProgramCost(35_000, "Risk Management Program for chemical facilities", 0.35),
    "GHG": ProgramCost(25_000, "Greenhouse Gas reporting and monitoring", 0.55),
    "LDAR": ProgramCost(60_000, "Leak Detection and Repair programs", 0.3),
    "OGI": ProgramCost(40_000, "Optical Gas Imaging surveys and monitoring", 0.25),
}

OVERHEAD_CATEGORIES: tuple[OverheadCategory, ...] = (
    OverheadCategory(
        "Staff & Training", 0.15,
        "Compliance staff salaries, training, certifications", False,
    ),
    OverheadCategory(
        "Record Keeping", 0.10,
        "Document management, data entry, filing systems", True,
    ),
    OverheadCategory(
        "Consulting Fees", 0.12,
        "External consultants, legal review, third-party audits", False,
    ),
    OverheadCategory(
        "Software & Systems", 0.05,
        "Current compliance management tools", True,
    ),
    OverheadCategory(
        "Audit Preparation", 0.08,
        "Internal and external audit prep, mock inspections", True,
    ),
)

# A program counts as automatable above this share.
AUTOMATABLE_SHARE = 0.3
OVERHEAD_SAVINGS_RATE = 0.6
VIOLATION_SURCHARGE = 0.08
VIOLATION_SAVINGS_RATE = 0.7
HIGH_HAZARD_PROGRAMS = frozenset({"MACT", "RMP"})
MAX_PAYBACK_MONTHS = 36


def calculate_risk_level(data: ComplianceInput) -> RiskLevel:
    score = min(data.facility_count * 5, 30)
    score += min(len(data.regulatory_programs) * 8, 40)
    if data.has_violations:
        score += 25
    if HIGH_HAZARD_PROGRAMS.intersection(data.regulatory_programs):
        score += 10

    if score >= 80:
        return RiskLevel.CRITICAL
    if score >= 55:
        return RiskLevel.HIGH
    if score >= 30:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def project_roi(annual_cost: int, savings: int) -> RoiProjection:
    """Three-year projection; zero savings pays back at the cap, zero cost has 0 ROI."""
    implementation = round_half_up(annual_cost * 0.15)
    year3 = round_half_up(savings * 2.6)
    if savings > 0:
        payback = min(round_half_up(implementation / (savings / 12)), MAX_PAYBACK_MONTHS)
    else:
        payback = MAX_PAYBACK_MONTHS
    roi = round_half_up((year3 - implementation) / implementation * 100) if implementation else 0
    return RoiProjection(
        year1_savings=round_half_up(savings * 0.6),
        year3_savings=year3,
        implementation_cost=implementation,
        payback_months=payback,
        roi_3_year=roi,
    )


def calculate_compliance_burden(data: ComplianceInput) -> ComplianceEstimate:
    lines: list[CostLine] = []

    program_total = 0
    for program in data.regulatory_programs:
        cost = PROGRAM_COSTS.get(program)
        if cost is None:
            logger.debug("Unknown regulatory program %r ignored", program)
            continue
        annual = cost.base * data.facility_count
        lines.append(CostLine(
            category=f"{program} Compliance",
            annual_cost=annual,
            description=cost.description,
            automatable=cost.automatable > AUTOMATABLE_SHARE,
            potential_savings=round_half_up(annual * cost.automatable),
        ))
        program_total += annual

    for overhead in OVERHEAD_CATEGORIES:
        annual = round_half_up(program_total * overhead.percentage)
        lines.append(CostLine(
            category=overhead.category,
            annual_cost=annual,
            description=overhead.description,
            automatable=overhead.automatable,
            potential_savings=(
                round_half_up(annual * OVERHEAD_SAVINGS_RATE) if overhead.automatable else 0
            ),
        ))

    if data.has_violations:
        annual = round_half_up(program_total * VIOLATION_SURCHARGE)
        lines.append(CostLine(
            category="Violation Remediation",
            annual_cost=annual,
            description=(
                "Additional costs from violation response, corrective actions, "
                "and enhanced monitoring"
            ),
            automatable=True,
            potential_savings=round_half_up(annual * VIOLATION_SAVINGS_RATE),
        ))

    annual_cost = sum(line.annual_cost for line in lines)
    savings = sum(line.potential_savings for line in lines)

    return ComplianceEstimate(
        estimated_annual_cost=annual_cost,
        risk_level=calculate_risk_level(data),
        savings_opportunity=savings,
        roi_projection=project_roi(annual_cost, savings),
        cost_breakdown=lines,
    )
