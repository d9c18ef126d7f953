"""Compliance burden inputs and estimates."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pydantic import Field, field_validator

from sales_intel.data.models import _normalize_string_list, _StrictModel


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ComplianceInput(_StrictModel):
    facility_count: int = Field(ge=0)
    regulatory_programs: list[str] = Field(default_factory=list)
    state: str | None = None
    industry: str | None = None
    employee_count: int | None = Field(default=None, ge=0)
    has_violations: bool = False

    @field_validator("regulatory_programs")
    @classmethod
    def normalize_programs(cls, values: list[str]) -> list[str]:
        return _normalize_string_list(values)


@dataclass(frozen=True)
class CostLine:
    category: str
    annual_cost: int
    description: str
    automatable: bool
    potential_savings: int


@dataclass(frozen=True)
class RoiProjection:
    year1_savings: int
    year3_savings: int
    implementation_cost: int
    payback_months: int
    roi_3_year: int


@dataclass(frozen=True)
class ComplianceEstimate:
    estimated_annual_cost: int
    risk_level: RiskLevel
    savings_opportunity: int
    roi_projection: RoiProjection
    cost_breakdown: list[CostLine] = field(default_factory=list)
