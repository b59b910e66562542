"""Configuration helpers for roster rules."""

from .roster import DEFAULT_RULES, RosterRules, get_rules

__all__ = [
    "DEFAULT_RULES",
    "RosterRules",
    "get_rules",
]
