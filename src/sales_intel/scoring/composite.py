"""Composite scoring: weighted combination of named component scores.

Two modes are used across the engines:

- **Dynamic weights** (:func:`composite_score`): a weighted *average*
  ``Σ score·weight / Σ weight`` over whatever components were observed.
  The signal detector uses this with per-signal-type weights.
- **Fixed weight table** (:func:`weighted_sum`): a weighted *sum* whose
  weights already total 1.0.  The customer health assessor uses this.

Both round half-up to an integer, so a tie like ``22.5`` becomes ``23``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Protocol


class Weighted(Protocol):
    @property
    def score(self) -> float: ...

    @property
    def weight(self) -> float: ...


@dataclass(frozen=True)
class ComponentSignal:
    """One named factor contributing to a composite score."""

    type: str
    source: str
    weight: float
    score: float
    detail: str

    def __post_init__(self) -> None:
        if self.weight <= 0:
            raise ValueError(f"component weight must be positive, got {self.weight}")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity."""
    return math.floor(value + 0.5)


def clamp(value: float, lo: float = 0, hi: float = 100) -> float:
    return max(lo, min(hi, value))


def composite_score(components: Iterable[Weighted]) -> int:
    """Weighted average of *components*; ``0`` when there is nothing to average."""
    items = list(components)
    if not items:
        return 0
    total_weight = sum(c.weight for c in items)
    if total_weight <= 0:
        return 0
    weighted = sum(c.score * c.weight for c in items)
    return round_half_up(weighted / total_weight)


def weighted_sum(pairs: Iterable[tuple[float, float]]) -> int:
    """``round(Σ score·weight)`` over ``(score, weight)`` pairs from a fixed table."""
    return round_half_up(sum(score * weight for score, weight in pairs))
