"""Alert rule definitions and generated alerts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from sales_intel.data.models import _StrictModel


class AlertSeverity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"


class AlertCategory(str, Enum):
    REGULATORY_CHANGE = "regulatory-change"
    COMPLIANCE_VIOLATION = "compliance-violation"
    PERMIT_EXPIRY = "permit-expiry"
    COMPETITOR_ACTIVITY = "competitor-activity"
    BUYING_SIGNAL = "buying-signal"
    CONTACT_CHANGE = "contact-change"
    MARKET_SHIFT = "market-shift"
    EXPANSION_SIGNAL = "expansion-signal"


class AlertConditionType(str, Enum):
    NEW_VIOLATION = "new-violation"
    PERMIT_EXPIRING_30D = "permit-expiring-30d"
    PERMIT_EXPIRING_90D = "permit-expiring-90d"
    NEW_FILING = "new-filing"
    SCORE_THRESHOLD = "score-threshold"
    STATUS_CHANGE = "status-change"
    NEW_SIGNAL = "new-signal"
    KEYWORD_MATCH = "keyword-match"


class AlertCondition(_StrictModel):
    """One trigger of a rule.

    ``parameters`` keeps the wire spelling: ``minScore`` for
    ``score-threshold`` and ``signalType`` for ``new-signal``.
    """

    condition: AlertConditionType
    parameters: dict[str, Any] = Field(default_factory=dict)


class AlertRule(_StrictModel):
    id: str
    name: str = ""
    description: str | None = None
    category: AlertCategory
    severity: AlertSeverity = AlertSeverity.MEDIUM
    conditions: list[AlertCondition] = Field(default_factory=list)
    enabled: bool = True

    @field_validator("id")
    @classmethod
    def id_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Alert rule id must not be blank")
        return value


@dataclass(frozen=True)
class ConditionMatch:
    """A single hit from one condition, before the rule's fields are applied."""

    title: str
    description: str
    prospect_id: str | None = None
    source_url: str | None = None
    source_type: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class GeneratedAlert:
    category: AlertCategory
    severity: AlertSeverity
    title: str
    description: str
    prospect_id: str | None = None
    source_url: str | None = None
    source_type: str | None = None
    action_items: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
