"""Compliance burden estimate and automation ROI projection."""

from sales_intel.compliance.calculator import (
    OVERHEAD_CATEGORIES,
    PROGRAM_COSTS,
    calculate_compliance_burden,
    calculate_risk_level,
    project_roi,
)
from sales_intel.compliance.models import (
    ComplianceEstimate,
    ComplianceInput,
    CostLine,
    RiskLevel,
    RoiProjection,
)

__all__ = [
    "OVERHEAD_CATEGORIES",
    "PROGRAM_COSTS",
    "ComplianceEstimate",
    "ComplianceInput",
    "CostLine",
    "RiskLevel",
    "RoiProjection",
    "calculate_compliance_burden",
    "calculate_risk_level",
    "project_roi",
]
