"""Engine configuration: operational limits and recency windows.

An :class:`EngineConfig` carries the knobs that govern how much data the
engines scan and how far back they look.  The scoring weight tables and
thresholds are business rules and live as module constants next to the
code that uses them; they are not configurable here.

Example YAML::

    prospect_scan_limit: 100
    score_threshold_scan_limit: 50
    default_min_fit_score: 70
    violation_window_days: 7
    signal_window_days: 3
    max_relationship_edges: 20
    stalled_stage_days: 30
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path

from sales_intel.data.loader import read_mapping
from sales_intel.errors import RuleLoadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    """Operational settings shared by the engines.

    Attributes:
        prospect_scan_limit: Maximum prospects read per alert-condition scan.
        score_threshold_scan_limit: Maximum prospects read for the
            ``score-threshold`` condition.
        default_min_fit_score: Fit score used by ``score-threshold`` when a
            rule does not set ``minScore``.
        violation_window_days: Look-back for ``new-violation`` (inclusive).
        signal_window_days: Look-back for ``new-signal`` (inclusive).
        max_relationship_edges: Cap on inferred relationship edges.
        stalled_stage_days: A deal stage longer than this is "stalled".
    """

    prospect_scan_limit: int = 100
    score_threshold_scan_limit: int = 50
    default_min_fit_score: int = 70
    violation_window_days: int = 7
    signal_window_days: int = 3
    max_relationship_edges: int = 20
    stalled_stage_days: int = 30

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{f.name} must be an integer, got {value!r}")
            if value < 0:
                raise ValueError(f"{f.name} must be non-negative, got {value}")


DEFAULT_CONFIG = EngineConfig()


def load_engine_config(path: str | Path) -> EngineConfig:
    """Load an :class:`EngineConfig` from YAML; a missing file yields defaults."""
    path = Path(path)
    if not path.is_file():
        logger.warning("Engine config file does not exist: %s", path)
        return DEFAULT_CONFIG

    data = read_mapping(path)
    known = {f.name for f in fields(EngineConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise RuleLoadError(f"Unknown engine config keys in {path}: {', '.join(unknown)}")
    try:
        return EngineConfig(**data)
    except ValueError as exc:
        raise RuleLoadError(f"Invalid engine config {path}: {exc}") from exc
