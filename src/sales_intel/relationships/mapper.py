"""Buying-committee mapping for one prospect's contacts.

Contacts are annotated with a suggested committee role and an influence
estimate (see :mod:`sales_intel.relationships.rules`), then paired up into
inferred ``reports-to`` / ``peers-with`` edges.  Coverage gaps and
recommendations are fixed checklists over the annotated contacts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from sales_intel.config import DEFAULT_CONFIG, EngineConfig
from sales_intel.data.models import CommitteeRole, Contact, ContactStatus
from sales_intel.data.repository import ContactRepository
from sales_intel.relationships.rules import estimate_influence, infer_committee_role
from sales_intel.telemetry import TelemetrySink, timed_event

logger = logging.getLogger(__name__)

UNKNOWN_COMPANY = "Unknown Company"
UNKNOWN_TITLE = "Unknown"
MIN_COMMITTEE_SIZE = 3
HIGH_INFLUENCE = 7
MAX_PRIORITY_CONTACTS = 3
REPORTS_TO_GAP = 2
PEER_STRENGTH = 5


class EngagementLevel(str, Enum):
    ENGAGED = "engaged"
    AWARE = "aware"
    UNKNOWN = "unknown"


class RelationshipType(str, Enum):
    REPORTS_TO = "reports-to"
    PEERS_WITH = "peers-with"


@dataclass(frozen=True)
class AnalyzedContact:
    contact_id: str
    name: str
    title: str
    role: CommitteeRole
    suggested_committee_role: CommitteeRole
    influence: int
    engagement_level: EngagementLevel


@dataclass(frozen=True)
class RelationshipEdge:
    from_contact_id: str
    to_contact_id: str
    type: RelationshipType
    strength: int


@dataclass(frozen=True)
class RelationshipAnalysis:
    company_name: str
    contacts: list[AnalyzedContact]
    relationships: list[RelationshipEdge]
    coverage_gaps: list[str]
    recommendations: list[str]


# Required role -> gap message, checked in order.
_REQUIRED_ROLES: tuple[tuple[CommitteeRole, str], ...] = (
    (
        CommitteeRole.ECONOMIC_BUYER,
        "No Economic Buyer identified - need C-level or VP Finance contact",
    ),
    (
        CommitteeRole.CHAMPION,
        "No Champion identified - need someone who will advocate internally",
    ),
    (
        CommitteeRole.TECHNICAL_EVALUATOR,
        "No Technical Evaluator - need technical decision-maker",
    ),
    (
        CommitteeRole.END_USER,
        "No End Users identified - need people who will use the solution daily",
    ),
)


def _engagement_level(status: ContactStatus) -> EngagementLevel:
    if status == ContactStatus.ENGAGED:
        return EngagementLevel.ENGAGED
    if status == ContactStatus.ENRICHED:
        return EngagementLevel.AWARE
    return EngagementLevel.UNKNOWN


def analyze_contact(contact: Contact) -> AnalyzedContact:
    title = contact.title or ""
    return AnalyzedContact(
        contact_id=contact.id,
        name=f"{contact.first_name} {contact.last_name}",
        title=title or UNKNOWN_TITLE,
        role=contact.role,
        suggested_committee_role=infer_committee_role(title, contact.role),
        influence=estimate_influence(title, contact.seniority or ""),
        engagement_level=_engagement_level(contact.status),
    )


def infer_relationships(
    contacts: Sequence[AnalyzedContact], *, max_edges: int = 20,
) -> list[RelationshipEdge]:
    """Pairwise edges over contacts ordered by influence, highest first.

    A gap of two or more points yields ``reports-to`` from the lower to the
    higher contact; equal influence yields ``peers-with``.  Edge order follows
    the pair loop over the sorted list and is truncated to *max_edges*.
    """
    ranked = sorted(contacts, key=lambda c: c.influence, reverse=True)
    edges: list[RelationshipEdge] = []
    for i, senior in enumerate(ranked):
        for junior in ranked[i + 1:]:
            if senior.influence - junior.influence >= REPORTS_TO_GAP:
                edges.append(RelationshipEdge(
                    from_contact_id=junior.contact_id,
                    to_contact_id=senior.contact_id,
                    type=RelationshipType.REPORTS_TO,
                    strength=min(10, senior.influence),
                ))
            elif senior.influence == junior.influence:
                edges.append(RelationshipEdge(
                    from_contact_id=senior.contact_id,
                    to_contact_id=junior.contact_id,
                    type=RelationshipType.PEERS_WITH,
                    strength=PEER_STRENGTH,
                ))
    return edges[:max_edges]


def identify_coverage_gaps(contacts: Sequence[AnalyzedContact]) -> list[str]:
    roles = {c.suggested_committee_role for c in contacts}
    gaps = [message for role, message in _REQUIRED_ROLES if role not in roles]
    if len(contacts) < MIN_COMMITTEE_SIZE:
        gaps.append("Too few contacts - aim for 3-5 contacts across the buying committee")
    return gaps


def generate_relationship_recommendations(
    contacts: Sequence[AnalyzedContact], gaps: Sequence[str],
) -> list[str]:
    recs: list[str] = []

    unengaged = sorted(
        (
            c for c in contacts
            if c.engagement_level == EngagementLevel.UNKNOWN
            and c.influence >= HIGH_INFLUENCE
        ),
        key=lambda c: c.influence,
        reverse=True,
    )
    for c in unengaged[:MAX_PRIORITY_CONTACTS]:
        recs.append(
            f"Prioritize engaging {c.name} "
            f"({c.suggested_committee_role.value}, influence: {c.influence}/10)"
        )

    if gaps:
        recs.append(f"Address {len(gaps)} coverage gap(s) in buying committee")

    if contacts and not any(
        c.suggested_committee_role == CommitteeRole.CHAMPION for c in contacts
    ):
        recs.append("Identify and develop a champion who understands the value proposition")

    return recs


def map_relationships(
    contacts: Sequence[Contact], *, config: EngineConfig | None = None,
) -> RelationshipAnalysis:
    """Build the committee map for an already-fetched contact list."""
    config = config or DEFAULT_CONFIG
    analyzed = [analyze_contact(c) for c in contacts]
    gaps = identify_coverage_gaps(analyzed)
    company = contacts[0].company if contacts else None
    return RelationshipAnalysis(
        company_name=company or UNKNOWN_COMPANY,
        contacts=analyzed,
        relationships=infer_relationships(
            analyzed, max_edges=config.max_relationship_edges,
        ),
        coverage_gaps=gaps,
        recommendations=generate_relationship_recommendations(analyzed, gaps),
    )


async def analyze_relationships(
    repo: ContactRepository,
    tenant_id: str,
    prospect_id: str,
    *,
    config: EngineConfig | None = None,
    telemetry: TelemetrySink | None = None,
) -> RelationshipAnalysis:
    """Fetch the prospect's contacts and map them.

    No contacts yields an empty map for "Unknown Company".  Repository errors
    propagate.
    """
    with timed_event(
        telemetry, "relationships.analyzed", tenant_id=tenant_id, prospect_id=prospect_id,
    ) as attrs:
        contacts = await repo.select_contacts_by_tenant_id(tenant_id, prospect_id=prospect_id)
        analysis = map_relationships(contacts, config=config)
        attrs.update(
            contacts=len(analysis.contacts),
            relationships=len(analysis.relationships),
            coverage_gaps=len(analysis.coverage_gaps),
        )
        logger.debug(
            "Prospect %s: %d contact(s), %d edge(s), %d gap(s)",
            prospect_id,
            len(analysis.contacts),
            len(analysis.relationships),
            len(analysis.coverage_gaps),
        )
        return analysis
