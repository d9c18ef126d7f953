"""Buying-committee mapping: role and influence inference, edges, coverage gaps."""

from sales_intel.relationships.mapper import (
    AnalyzedContact,
    EngagementLevel,
    RelationshipAnalysis,
    RelationshipEdge,
    RelationshipType,
    analyze_contact,
    analyze_relationships,
    generate_relationship_recommendations,
    identify_coverage_gaps,
    infer_relationships,
    map_relationships,
)
from sales_intel.relationships.rules import (
    COMMITTEE_ROLE_RULES,
    INFLUENCE_RULES,
    SENIORITY_INFLUENCE,
    TitleRule,
    estimate_influence,
    first_match,
    infer_committee_role,
    title_has,
)

__all__ = [
    "COMMITTEE_ROLE_RULES",
    "INFLUENCE_RULES",
    "SENIORITY_INFLUENCE",
    "AnalyzedContact",
    "EngagementLevel",
    "RelationshipAnalysis",
    "RelationshipEdge",
    "RelationshipType",
    "TitleRule",
    "analyze_contact",
    "analyze_relationships",
    "estimate_influence",
    "first_match",
    "generate_relationship_recommendations",
    "identify_coverage_gaps",
    "infer_committee_role",
    "infer_relationships",
    "map_relationships",
    "title_has",
]
