"""Alert rules: condition evaluation, action items, display priority."""

from sales_intel.alerts.engine import (
    CATEGORY_BOOSTS,
    SEVERITY_SCORES,
    calculate_alert_priority,
    evaluate_alert_rules,
    generate_action_items,
    sort_alerts_by_priority,
)
from sales_intel.alerts.loader import load_alert_rule_directory, load_alert_rules
from sales_intel.alerts.models import (
    AlertCategory,
    AlertCondition,
    AlertConditionType,
    AlertRule,
    AlertSeverity,
    ConditionMatch,
    GeneratedAlert,
)

__all__ = [
    "CATEGORY_BOOSTS",
    "SEVERITY_SCORES",
    "AlertCategory",
    "AlertCondition",
    "AlertConditionType",
    "AlertRule",
    "AlertSeverity",
    "ConditionMatch",
    "GeneratedAlert",
    "calculate_alert_priority",
    "evaluate_alert_rules",
    "generate_action_items",
    "load_alert_rule_directory",
    "load_alert_rules",
    "sort_alerts_by_priority",
]
