"""CLI handlers for the file-based commands: health, deal, portfolio, compliance, prospect-score."""

from __future__ import annotations

from argparse import Namespace

from sales_intel.cli.common import emit, engine_config, fail, read_input, validate_input
from sales_intel.compliance import ComplianceInput, calculate_compliance_burden
from sales_intel.deals import DealData, analyze_deal, analyze_portfolio
from sales_intel.health import HealthAssessmentInput, assess_customer_health
from sales_intel.report import (
    format_compliance_table,
    format_deal_table,
    format_health_table,
    format_portfolio_table,
    format_prospect_score_table,
)
from sales_intel.scoring import ProspectScoringData, score_prospect


def run_health(args: Namespace) -> None:
    data = validate_input(HealthAssessmentInput, read_input(args.file), args.file)
    emit(args, assess_customer_health(data), format_health_table)


def run_deal(args: Namespace) -> None:
    config = engine_config(args)
    deal = validate_input(DealData, read_input(args.file), args.file)
    emit(args, analyze_deal(deal, config=config), format_deal_table)


def run_portfolio(args: Namespace) -> None:
    raw = read_input(args.file)
    rows = raw.get("deals")
    if not isinstance(rows, list):
        fail(f"{args.file} must contain a 'deals' list")
    deals = [validate_input(DealData, row, args.file) for row in rows]
    emit(args, analyze_portfolio(deals), format_portfolio_table)


def run_compliance(args: Namespace) -> None:
    data = validate_input(ComplianceInput, read_input(args.file), args.file)
    emit(args, calculate_compliance_burden(data), format_compliance_table)


def run_prospect_score(args: Namespace) -> None:
    raw = read_input(args.file)
    weights = raw.pop("weights", None)
    data = validate_input(ProspectScoringData, raw, args.file)
    try:
        result = score_prospect(data, weights, now=args.now)
    except ValueError as exc:
        fail(str(exc))
    emit(args, result, format_prospect_score_table)
