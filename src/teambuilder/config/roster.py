"""Roster construction rules and their environment overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import FrozenSet, Tuple


logger = logging.getLogger(__name__)

_SHORTLIST_CAP_ENV = "TEAMBUILDER_SHORTLIST_CAP"
_BULLPEN_POOL_ENV = "TEAMBUILDER_BULLPEN_POOL"
_ALLOW_TWO_WAY_ENV = "TEAMBUILDER_ALLOW_TWO_WAY"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class RosterRules:
    field_positions: Tuple[str, ...] = ("C", "1B", "2B", "3B", "SS", "LF", "CF", "RF")
    # Tie-break order for positions with equally sized shortlists.
    scarcity_order: Tuple[str, ...] = ("C", "SS", "CF", "3B", "2B", "RF", "LF", "1B")
    infield: FrozenSet[str] = frozenset({"C", "1B", "2B", "3B", "SS"})
    outfield: FrozenSet[str] = frozenset({"LF", "CF", "RF"})
    shortlist_cap: int = 14
    rotation_size: int = 5
    bullpen_size: int = 8
    bullpen_pool_size: int = 50
    min_left_relievers: int = 2
    allow_two_way: bool = True


DEFAULT_RULES = RosterRules()


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    token = raw.strip().lower()
    if token in _TRUE_VALUES:
        return True
    if token in _FALSE_VALUES:
        return False
    logger.warning("Invalid boolean for %s: %s; using default %s", name, raw, default)
    return default


def get_rules() -> RosterRules:
    """Return the default rules with any environment overrides applied."""

    return replace(
        DEFAULT_RULES,
        shortlist_cap=_env_int(_SHORTLIST_CAP_ENV, DEFAULT_RULES.shortlist_cap, min_value=1),
        bullpen_pool_size=_env_int(_BULLPEN_POOL_ENV, DEFAULT_RULES.bullpen_pool_size, min_value=1),
        allow_two_way=_env_bool(_ALLOW_TWO_WAY_ENV, DEFAULT_RULES.allow_two_way),
    )
