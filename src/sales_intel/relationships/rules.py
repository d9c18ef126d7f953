"""Ordered title rules for buying-committee role and influence inference.

Each table is evaluated first-match-wins, so order matters.  Terms are plain
case-insensitive substrings of the title: "Vice President" contains
``president`` and "Director" contains ``cto``, and both are matched that way.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from sales_intel.data.models import CommitteeRole

T = TypeVar("T")


def title_has(title: str, term: str) -> bool:
    return term in title.lower()


@dataclass(frozen=True)
class TitleRule(Generic[T]):
    """Matches when any ``any_of`` term and every ``all_of`` term is in the title."""

    any_of: tuple[str, ...]
    result: T
    all_of: tuple[str, ...] = ()

    def matches(self, title: str) -> bool:
        return (
            any(title_has(title, term) for term in self.any_of)
            and all(title_has(title, term) for term in self.all_of)
        )


def first_match(rules: Sequence[TitleRule[T]], title: str) -> T | None:
    for rule in rules:
        if rule.matches(title):
            return rule.result
    return None


COMMITTEE_ROLE_RULES: tuple[TitleRule[CommitteeRole], ...] = (
    TitleRule(("ceo", "president", "owner"), CommitteeRole.ECONOMIC_BUYER),
    TitleRule(("cfo", "finance"), CommitteeRole.ECONOMIC_BUYER),
    TitleRule(("cto", "cio", "technology"), CommitteeRole.TECHNICAL_EVALUATOR),
    TitleRule(("vp", "vice president"), CommitteeRole.DECISION_MAKER),
    TitleRule(("director",), CommitteeRole.INFLUENCER),
    TitleRule(("compliance", "environment"), CommitteeRole.CHAMPION, all_of=("manager",)),
    TitleRule(("engineer", "specialist"), CommitteeRole.END_USER),
    TitleRule(("procurement", "purchasing"), CommitteeRole.GATEKEEPER),
    TitleRule(("assistant", "coordinator"), CommitteeRole.GATEKEEPER),
)

INFLUENCE_RULES: tuple[TitleRule[int], ...] = (
    TitleRule(("ceo", "president", "owner"), 10),
    TitleRule(("cfo", "coo", "cto"), 9),
    TitleRule(("vp", "vice president"), 8),
    TitleRule(("director",), 7),
    TitleRule(("senior manager",), 6),
    TitleRule(("manager",), 5),
    TitleRule(("lead", "senior"), 4),
    TitleRule(("specialist", "analyst"), 3),
)

# Matched exactly against the recorded seniority level.
SENIORITY_INFLUENCE: dict[str, int] = {
    "c-level": 9,
    "vp": 8,
    "director": 7,
}

DEFAULT_INFLUENCE = 3


def infer_committee_role(title: str, current_role: CommitteeRole) -> CommitteeRole:
    """Role from the title; otherwise the recorded role; otherwise influencer."""
    inferred = first_match(COMMITTEE_ROLE_RULES, title)
    if inferred is not None:
        return inferred
    if current_role != CommitteeRole.UNKNOWN:
        return current_role
    return CommitteeRole.INFLUENCER


def estimate_influence(title: str, seniority: str = "") -> int:
    """Influence 1-10 from the title, then the seniority level, then a default of 3."""
    by_title = first_match(INFLUENCE_RULES, title)
    if by_title is not None:
        return by_title
    return SENIORITY_INFLUENCE.get(seniority, DEFAULT_INFLUENCE)
