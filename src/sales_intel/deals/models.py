"""Closed-deal records and win/loss insight results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from pydantic import Field, field_validator

from sales_intel.data.models import _normalize_string_list, _StrictModel


class DealOutcome(str, Enum):
    WON = "won"
    LOST = "lost"
    NO_DECISION = "no-decision"
    DISQUALIFIED = "disqualified"


class Impact(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class DealStage(_StrictModel):
    stage: str
    entered_at: datetime | None = None
    exited_at: datetime | None = None
    duration_days: int = Field(ge=0)


class DealData(_StrictModel):
    outcome: DealOutcome
    deal_value: float = Field(default=0, ge=0)
    sales_cycle_length: int = Field(default=0, ge=0)
    competitor_involved: str | None = None
    stages: list[DealStage] = Field(default_factory=list)
    win_loss_reasons: list[str] = Field(default_factory=list)

    @field_validator("competitor_involved")
    @classmethod
    def blank_competitor_is_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    @field_validator("win_loss_reasons")
    @classmethod
    def normalize_reasons(cls, values: list[str]) -> list[str]:
        return _normalize_string_list(values)


@dataclass(frozen=True)
class DealFactor:
    factor: str
    impact: Impact
    weight: int
    description: str


@dataclass(frozen=True)
class DealBenchmarks:
    avg_sales_cycle_won: int
    avg_sales_cycle_lost: int
    avg_deal_size_won: int
    win_rate_by_stage: dict[str, int]


@dataclass(frozen=True)
class DealInsights:
    key_factors: list[DealFactor]
    lessons_learned: list[str]
    recommendations: list[str]
    benchmarks: DealBenchmarks


@dataclass(frozen=True)
class PortfolioSummary:
    total_deals: int
    win_rate: int
    avg_sales_cycle: int
    avg_deal_size: int
    top_win_reasons: list[str] = field(default_factory=list)
    top_loss_reasons: list[str] = field(default_factory=list)
    competitor_win_rates: dict[str, int] = field(default_factory=dict)
