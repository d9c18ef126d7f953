"""Sales Intelligence: scoring and classification engine for the Sales Hunter vertical.

Every engine follows the same shape: take already-fetched facts about a
prospect, lead, customer or deal, produce a weighted composite score plus
categorical labels, and emit human-readable recommendations.  Persistence and
notification belong to the caller.

Public API::

    from sales_intel import EngineConfig
    from sales_intel.signals import detect_buying_signals
    from sales_intel.health import assess_customer_health
    from sales_intel.deals import analyze_deal, analyze_portfolio
    from sales_intel.relationships import analyze_relationships
    from sales_intel.scoring import calculate_contact_score, score_prospect
    from sales_intel.alerts import evaluate_alert_rules, calculate_alert_priority
"""

from sales_intel.config import EngineConfig

__all__ = ["EngineConfig"]
__version__ = "0.1.0"
