"""Metric selection and per-card scoring for hitters and pitchers."""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional

from teambuilder.models import Card


MISSING_SCORE = -1.0


class Metric(str, Enum):
    TRUE_OVR = "true_ovr"
    META_OVR = "meta_ovr"
    POWER = "power"
    CONTACT = "contact"
    BUNTING = "bunting"
    DEFENSE = "defense"
    BASERUNNING = "baserunning"
    VS_LEFT = "vs_left"
    VS_RIGHT = "vs_right"

    @classmethod
    def parse(cls, value: "str | Metric") -> "Metric":
        """Resolve a metric by value or name, raising KeyError if unknown."""

        if isinstance(value, Metric):
            return value
        key = str(value).strip().lower().replace("-", "_")
        for metric in cls:
            if metric.value == key:
                return metric
        raise KeyError(f"Unsupported metric {value!r}")


DEFAULT_METRIC = Metric.META_OVR

METRIC_LABELS = {
    Metric.TRUE_OVR: "True Overall",
    Metric.META_OVR: "Meta Overall",
    Metric.POWER: "Power",
    Metric.CONTACT: "Contact",
    Metric.BUNTING: "Bunting",
    Metric.DEFENSE: "Defense",
    Metric.BASERUNNING: "Baserunning",
    Metric.VS_LEFT: "vs LHP",
    Metric.VS_RIGHT: "vs RHP",
}


def num(value: Optional[float], default: float = 0.0) -> float:
    """Return ``value`` when it is a finite number, otherwise ``default``."""

    if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
        return float(value)
    return default


def avg(*values: Optional[float]) -> float:
    """Mean of the values with missing entries counted as zero."""

    if not values:
        return 0.0
    return sum(num(value) for value in values) / len(values)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _first(*values: Optional[float]) -> Optional[float]:
    for value in values:
        if value is not None:
            return value
    return None


def hitter_score(card: Card, metric: Metric) -> float:
    if metric is Metric.TRUE_OVR:
        return num(_first(card.true_ovr, card.ovr), MISSING_SCORE)
    if metric is Metric.META_OVR:
        return num(card.meta_ovr, MISSING_SCORE)
    return num(getattr(card, metric.value), MISSING_SCORE)


def pitcher_score(card: Card, metric: Metric) -> float:
    """Pitchers honour only true overall and the platoon splits."""

    if metric is Metric.TRUE_OVR:
        return num(_first(card.true_ovr, card.meta_ovr), MISSING_SCORE)
    if metric is Metric.VS_LEFT:
        return num(_first(card.vs_left, card.meta_ovr), MISSING_SCORE)
    if metric is Metric.VS_RIGHT:
        return num(_first(card.vs_right, card.meta_ovr), MISSING_SCORE)
    return num(card.meta_ovr, MISSING_SCORE)
