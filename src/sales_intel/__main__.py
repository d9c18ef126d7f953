"""CLI entry point: python -m sales_intel <command>."""

from __future__ import annotations

import argparse
import logging
import sys

from sales_intel.cli.common import parse_datetime

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _add_output(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--json", action="store_true", default=False, help="Output as JSON")


def _add_prospect_target(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--dataset", required=True, help="YAML/JSON file of prospects, signals, contacts")
    parser.add_argument("--tenant", required=True, help="Tenant ID")
    parser.add_argument("--prospect", required=True, help="Prospect ID")
    _add_output(parser)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="sales-intel",
        description="Sales intelligence scoring engine",
    )
    parser.add_argument("--config", default="", help="Engine config YAML file")
    parser.add_argument(
        "--log-level", choices=LOG_LEVELS, default="WARNING", help="Logging level (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command")

    for name, help_text in (
        ("health", "Assess customer health from a facts file"),
        ("deal", "Analyze one closed deal"),
        ("portfolio", "Aggregate win/loss outcomes across deals"),
        ("compliance", "Estimate compliance burden and automation ROI"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("file", help="YAML/JSON input file")
        _add_output(p)

    ps = sub.add_parser("prospect-score", help="Score prospect fit and intent")
    ps.add_argument("file", help="YAML/JSON input file")
    ps.add_argument("--now", type=parse_datetime, default=None, help="Reference time (ISO-8601)")
    _add_output(ps)

    _add_prospect_target(sub.add_parser("signals", help="Detect buying signals for a prospect"))
    _add_prospect_target(sub.add_parser("relationships", help="Map a prospect's buying committee"))

    al = sub.add_parser("alerts", help="Evaluate alert rules for a tenant")
    al.add_argument("--dataset", required=True, help="YAML/JSON file of prospects, signals, contacts")
    al.add_argument("--tenant", required=True, help="Tenant ID")
    al.add_argument("--rules", required=True, help="Alert rule YAML file or directory")
    al.add_argument("--now", type=parse_datetime, default=None, help="Reference time (ISO-8601)")
    _add_output(al)

    cs = sub.add_parser("contact-score", help="Score one contact")
    cs.add_argument("--dataset", required=True, help="YAML/JSON file of contacts and their history")
    cs.add_argument("--tenant", required=True, help="Tenant ID")
    cs.add_argument("--contact", required=True, help="Contact ID")
    cs.add_argument("--now", type=parse_datetime, default=None, help="Reference time (ISO-8601)")
    _add_output(cs)

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    if args.command == "health":
        from sales_intel.cli.analyze import run_health
        run_health(args)
    elif args.command == "deal":
        from sales_intel.cli.analyze import run_deal
        run_deal(args)
    elif args.command == "portfolio":
        from sales_intel.cli.analyze import run_portfolio
        run_portfolio(args)
    elif args.command == "compliance":
        from sales_intel.cli.analyze import run_compliance
        run_compliance(args)
    elif args.command == "prospect-score":
        from sales_intel.cli.analyze import run_prospect_score
        run_prospect_score(args)
    elif args.command == "signals":
        from sales_intel.cli.prospects import run_signals
        run_signals(args)
    elif args.command == "relationships":
        from sales_intel.cli.prospects import run_relationships
        run_relationships(args)
    elif args.command == "alerts":
        from sales_intel.cli.prospects import run_alerts
        run_alerts(args)
    elif args.command == "contact-score":
        from sales_intel.cli.prospects import run_contact_score
        run_contact_score(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
