"""CLI handlers for the dataset-backed commands."""

from __future__ import annotations

import asyncio
from argparse import Namespace
from pathlib import Path

from sales_intel.alerts import (
    AlertRule,
    evaluate_alert_rules,
    load_alert_rule_directory,
    load_alert_rules,
    sort_alerts_by_priority,
)
from sales_intel.cli.common import emit, engine_config, fail
from sales_intel.data import InMemoryRepository, load_dataset
from sales_intel.errors import NotFoundError, SalesIntelError, log_and_return_error
from sales_intel.relationships import analyze_relationships
from sales_intel.report import (
    format_alerts_table,
    format_contact_score_table,
    format_relationships_table,
    format_signals_table,
)
from sales_intel.scoring import calculate_contact_score
from sales_intel.signals import detect_buying_signals
from sales_intel.telemetry import LoggerTelemetrySink


def _load_repo(path: str) -> InMemoryRepository:
    dataset = Path(path)
    if not dataset.is_file():
        fail(f"dataset file does not exist: {dataset}")
    try:
        return load_dataset(dataset)
    except (SalesIntelError, OSError) as exc:
        fail(log_and_return_error(
            operation="load_dataset", exc=exc, user_message=f"could not load {dataset}: {exc}",
        ))


def _load_rules(path: str) -> list[AlertRule]:
    source = Path(path)
    if source.is_dir():
        return load_alert_rule_directory(source)
    if not source.is_file():
        fail(f"rules path does not exist: {source}")
    try:
        return load_alert_rules(source)
    except (SalesIntelError, OSError) as exc:
        fail(log_and_return_error(
            operation="load_alert_rules", exc=exc, user_message=f"could not load {source}: {exc}",
        ))


def run_signals(args: Namespace) -> None:
    repo = _load_repo(args.dataset)
    signals = asyncio.run(detect_buying_signals(
        repo, args.tenant, args.prospect, telemetry=LoggerTelemetrySink(),
    ))
    emit(args, signals, format_signals_table)


def run_relationships(args: Namespace) -> None:
    config = engine_config(args)
    repo = _load_repo(args.dataset)
    analysis = asyncio.run(analyze_relationships(
        repo, args.tenant, args.prospect, config=config, telemetry=LoggerTelemetrySink(),
    ))
    emit(args, analysis, format_relationships_table)


def run_alerts(args: Namespace) -> None:
    config = engine_config(args)
    repo = _load_repo(args.dataset)
    rules = _load_rules(args.rules)
    if not rules:
        fail(f"no alert rules loaded from {args.rules}")
    alerts = asyncio.run(evaluate_alert_rules(
        repo, args.tenant, rules, now=args.now, config=config, telemetry=LoggerTelemetrySink(),
    ))
    emit(args, sort_alerts_by_priority(alerts), format_alerts_table)


def run_contact_score(args: Namespace) -> None:
    repo = _load_repo(args.dataset)
    try:
        score = asyncio.run(calculate_contact_score(
            repo, args.tenant, args.contact, now=args.now, telemetry=LoggerTelemetrySink(),
        ))
    except NotFoundError as exc:
        fail(str(exc))
    emit(args, score, format_contact_score_table)
