"""YAML alert rule loading. Files starting with underscore are skipped.

A rule file holds either one rule mapping or a ``rules`` list::

    rules:
      - id: recent-violations
        name: Recent violations
        category: compliance-violation
        severity: high
        conditions:
          - condition: new-violation
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from sales_intel.alerts.models import AlertRule
from sales_intel.data.loader import read_mapping
from sales_intel.errors import RuleLoadError

logger = logging.getLogger(__name__)


def load_alert_rules(path: str | Path) -> list[AlertRule]:
    """Load the rules in one file; any invalid rule fails the whole file."""
    path = Path(path)
    data = read_mapping(path)
    rows = data["rules"] if "rules" in data else [data]
    if not isinstance(rows, list):
        raise RuleLoadError(f"'rules' must be a list in {path}")
    try:
        return [AlertRule.model_validate(row) for row in rows]
    except ValidationError as exc:
        raise RuleLoadError(f"Invalid alert rule in {path}: {exc}") from exc


def load_alert_rule_directory(directory: str | Path) -> list[AlertRule]:
    """Load all YAML rule files under *directory*, logging and skipping bad files."""
    directory = Path(directory)
    if not directory.is_dir():
        logger.warning("Alert rule directory does not exist: %s", directory)
        return []

    rules: list[AlertRule] = []
    seen: set[str] = set()
    for path in sorted([*directory.rglob("*.yaml"), *directory.rglob("*.yml")]):
        if path.name.startswith("_"):
            continue
        try:
            loaded = load_alert_rules(path)
        except (RuleLoadError, OSError) as exc:
            logger.exception("Failed to load alert rules from %s: %s", path, exc)
            continue
        for rule in loaded:
            if rule.id in seen:
                logger.warning("Duplicate alert rule id %s in %s; keeping first", rule.id, path)
                continue
            seen.add(rule.id)
            rules.append(rule)
    return rules
