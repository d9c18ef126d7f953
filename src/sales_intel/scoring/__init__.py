"""Shared scoring primitives, the prospect fit/intent scorer and the contact scorer."""

from sales_intel.scoring.composite import (
    ComponentSignal,
    clamp,
    composite_score,
    round_half_up,
    weighted_sum,
)
from sales_intel.scoring.contact import (
    ROLE_SCORES,
    ContactScore,
    calculate_contact_score,
    score_contact,
    score_contact_data,
    score_contact_role,
)
from sales_intel.scoring.prospect import (
    DEFAULT_SCORING_WEIGHTS,
    ProspectScore,
    ProspectScoringData,
    score_prospect,
)

__all__ = [
    "DEFAULT_SCORING_WEIGHTS",
    "ROLE_SCORES",
    "ComponentSignal",
    "ContactScore",
    "ProspectScore",
    "ProspectScoringData",
    "calculate_contact_score",
    "clamp",
    "composite_score",
    "round_half_up",
    "score_contact",
    "score_contact_data",
    "score_contact_role",
    "score_prospect",
    "weighted_sum",
]
