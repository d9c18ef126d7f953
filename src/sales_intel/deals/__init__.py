"""Win/loss deal analysis and portfolio aggregation."""

from sales_intel.deals.analyzer import (
    INDUSTRY_BENCHMARKS,
    REASON_FAMILIES,
    analyze_deal,
    analyze_portfolio,
)
from sales_intel.deals.models import (
    DealBenchmarks,
    DealData,
    DealFactor,
    DealInsights,
    DealOutcome,
    DealStage,
    Impact,
    PortfolioSummary,
)

__all__ = [
    "INDUSTRY_BENCHMARKS",
    "REASON_FAMILIES",
    "DealBenchmarks",
    "DealData",
    "DealFactor",
    "DealInsights",
    "DealOutcome",
    "DealStage",
    "Impact",
    "PortfolioSummary",
    "analyze_deal",
    "analyze_portfolio",
]
