"""Card pool partitioning and metric scoring."""

from .partition import CardPool
from .scoring import (
    DEFAULT_METRIC,
    METRIC_LABELS,
    MISSING_SCORE,
    Metric,
    avg,
    clamp,
    hitter_score,
    num,
    pitcher_score,
)

__all__ = [
    "CardPool",
    "DEFAULT_METRIC",
    "METRIC_LABELS",
    "MISSING_SCORE",
    "Metric",
    "avg",
    "clamp",
    "hitter_score",
    "num",
    "pitcher_score",
]
