"""Roster construction engine."""

from .bench import BENCH_ROLES, BenchAssignment
from .pitching import CLOSER_ROLE, BullpenSlot
from .service import LineupSlot, RosterResult, build_roster
from .replacements import (
    ReplacementError,
    RosterSlot,
    SlotKind,
    apply_replacement,
    backfill_bench,
    replacement_candidates,
    slot_card,
)

__all__ = [
    "BENCH_ROLES",
    "BenchAssignment",
    "BullpenSlot",
    "CLOSER_ROLE",
    "LineupSlot",
    "ReplacementError",
    "RosterResult",
    "RosterSlot",
    "SlotKind",
    "apply_replacement",
    "backfill_bench",
    "build_roster",
    "replacement_candidates",
    "slot_card",
]
