"""Ranked replacement candidates for one roster slot, and applying a swap."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional

from teambuilder.config import DEFAULT_RULES, RosterRules
from teambuilder.models import Card
from teambuilder.optimizer.bench import BENCH_ROLES, ROLE_SCORERS
from teambuilder.optimizer.insights import build_insights
from teambuilder.optimizer.pitching import BullpenSlot
from teambuilder.optimizer.service import LineupSlot, RosterResult
from teambuilder.pool import hitter_score, pitcher_score


logger = logging.getLogger(__name__)

MAX_CANDIDATES = 150


class SlotKind(str, Enum):
    LINEUP = "lineup"
    BENCH = "bench"
    ROTATION = "rotation"
    BULLPEN = "bullpen"


class ReplacementError(ValueError):
    """Raised when a slot or pick does not fit the roster."""


@dataclass(frozen=True)
class RosterSlot:
    """A lineup/rotation/bullpen index (0-based) or a bench role."""

    kind: SlotKind
    index: int = 0
    bench_role: Optional[str] = None


@dataclass(frozen=True)
class _RosterRoots:
    lineup: FrozenSet[str]
    bench: FrozenSet[str]
    rotation: FrozenSet[str]
    bullpen: FrozenSet[str]

    @property
    def everything(self) -> FrozenSet[str]:
        return self.lineup | self.bench | self.rotation | self.bullpen


def _roots(result: RosterResult) -> _RosterRoots:
    return _RosterRoots(
        lineup=frozenset(slot.card.base_id for slot in result.lineup),
        bench=frozenset(card.base_id for card in result.bench.cards()),
        rotation=frozenset(card.base_id for card in result.rotation),
        bullpen=frozenset(slot.card.base_id for slot in result.bullpen),
    )


def _check_index(slot: RosterSlot, size: int) -> None:
    if not 0 <= slot.index < size:
        raise ReplacementError(f"No {slot.kind.value} slot at index {slot.index}")


def slot_card(result: RosterResult, slot: RosterSlot) -> Optional[Card]:
    """The card currently filling ``slot``; bench roles may be empty."""

    if slot.kind is SlotKind.BENCH:
        if slot.bench_role not in BENCH_ROLES:
            raise ReplacementError(f"Unknown bench role {slot.bench_role!r}")
        return getattr(result.bench, slot.bench_role)
    if slot.kind is SlotKind.LINEUP:
        _check_index(slot, len(result.lineup))
        return result.lineup[slot.index].card
    if slot.kind is SlotKind.ROTATION:
        _check_index(slot, len(result.rotation))
        return result.rotation[slot.index]
    _check_index(slot, len(result.bullpen))
    return result.bullpen[slot.index].card


def _eligible(result: RosterResult, cards: Iterable[Card], slot: RosterSlot) -> List[Card]:
    current = slot_card(result, slot)
    roots = _roots(result)
    pool = [card for card in cards if current is None or card.id != current.id]

    if slot.kind is SlotKind.LINEUP:
        # Bench players stay eligible so they can be promoted.
        blocked = roots.lineup | roots.rotation | roots.bullpen
        position = result.lineup[slot.index].position
        return [
            card for card in pool
            if not card.is_pitcher
            and card.base_id not in blocked
            and (position == "DH" or card.position == position)
        ]
    if slot.kind is SlotKind.BENCH:
        blocked = roots.everything
        return [card for card in pool if not card.is_pitcher and card.base_id not in blocked]

    blocked = roots.everything
    positions = {"SP"} if slot.kind is SlotKind.ROTATION else {"RP", "CP"}
    return [card for card in pool if card.position in positions and card.base_id not in blocked]


def _rank(result: RosterResult, slot: RosterSlot, pool: List[Card], rules: RosterRules) -> List[Card]:
    metric = result.metric
    if slot.kind in (SlotKind.ROTATION, SlotKind.BULLPEN):
        return sorted(pool, key=lambda card: pitcher_score(card, metric), reverse=True)
    if slot.kind is SlotKind.BENCH:
        scorer = ROLE_SCORERS[slot.bench_role]
        # Outfielders win ties for the roles that can cover the outfield.
        if slot.bench_role in ("pinch_runner", "defensive_sub"):
            return sorted(pool, key=lambda card: (scorer(card), card.position in rules.outfield), reverse=True)
        return sorted(pool, key=scorer, reverse=True)
    return sorted(pool, key=lambda card: hitter_score(card, metric), reverse=True)


def replacement_candidates(
    result: RosterResult,
    cards: Iterable[Card],
    slot: RosterSlot,
    *,
    query: Optional[str] = None,
    limit: int = MAX_CANDIDATES,
    rules: RosterRules = DEFAULT_RULES,
) -> List[Card]:
    """Cards that could fill ``slot`` without duplicating a rostered player, best first.

    The first entry is the recommended pick. ``query`` filters by a
    case-insensitive substring of the card name.
    """

    pool = _eligible(result, cards, slot)
    needle = (query or "").strip().lower()
    if needle:
        pool = [card for card in pool if needle in (card.name or "").lower()]
    return _rank(result, slot, pool, rules)[: max(limit, 0)]


def _lineup_score(starters: Mapping[str, Card], dh: Optional[Card], result: RosterResult) -> float:
    total = sum(hitter_score(card, result.metric) for card in starters.values())
    if dh is not None:
        total += hitter_score(dh, result.metric)
    return total


def _rebuilt(result: RosterResult, **changes) -> RosterResult:
    updated = replace(result, **changes)
    insights = build_insights(
        [slot.card for slot in updated.lineup],
        updated.starters,
        updated.bench,
        updated.rotation,
        [slot.card for slot in updated.bullpen],
        updated.metric,
    )
    return replace(
        updated,
        lineup_score=_lineup_score(updated.starters, updated.dh, updated),
        insights=insights,
    )


def backfill_bench(
    result: RosterResult,
    cards: Iterable[Card],
    role: str,
    *,
    rules: RosterRules = DEFAULT_RULES,
) -> RosterResult:
    """Refill an empty bench role with its top-ranked eligible hitter."""

    slot = RosterSlot(SlotKind.BENCH, bench_role=role)
    if slot_card(result, slot) is not None:
        return result
    ranked = replacement_candidates(result, cards, slot, limit=1, rules=rules)
    pick = ranked[0] if ranked else None
    if pick is None:
        logger.warning("No hitter left to backfill bench role %s", role)
        return result
    logger.debug("Backfilled bench %s with %s", role, pick.name or pick.id)
    return _rebuilt(result, bench=replace(result.bench, **{role: pick}))


def apply_replacement(
    result: RosterResult,
    cards: Iterable[Card],
    slot: RosterSlot,
    pick: Card,
    *,
    rules: RosterRules = DEFAULT_RULES,
) -> RosterResult:
    """Put ``pick`` into ``slot`` and return the updated roster.

    A bench player promoted into the lineup leaves its bench role, which is
    then backfilled. A replaced closer hands the ``Closer`` tag to ``pick``.
    """

    cards = list(cards)
    current = slot_card(result, slot)
    if pick.id not in {card.id for card in _eligible(result, cards, slot)}:
        raise ReplacementError(f"{pick.id} cannot fill the {slot.kind.value} slot")

    if slot.kind is SlotKind.LINEUP:
        old = result.lineup[slot.index]
        lineup = list(result.lineup)
        lineup[slot.index] = LineupSlot(slot=old.slot, position=old.position, card=pick)
        starters: Dict[str, Card] = dict(result.starters)
        dh = result.dh
        if old.position == "DH":
            dh = pick
        else:
            starters[old.position] = pick

        promoted_from = next(
            (role for role in BENCH_ROLES if getattr(result.bench, role) is not None
             and getattr(result.bench, role).id == pick.id),
            None,
        )
        bench = result.bench
        if promoted_from is not None:
            bench = replace(bench, **{promoted_from: None})
        updated = _rebuilt(result, lineup=tuple(lineup), starters=starters, dh=dh, bench=bench)
        if promoted_from is not None:
            updated = backfill_bench(updated, cards, promoted_from, rules=rules)
    elif slot.kind is SlotKind.BENCH:
        updated = _rebuilt(result, bench=replace(result.bench, **{slot.bench_role: pick}))
    elif slot.kind is SlotKind.ROTATION:
        rotation = list(result.rotation)
        rotation[slot.index] = pick
        updated = _rebuilt(result, rotation=tuple(rotation))
    else:
        old_slot = result.bullpen[slot.index]
        bullpen = list(result.bullpen)
        bullpen[slot.index] = BullpenSlot(card=pick, assignment=old_slot.assignment, role=old_slot.role)
        updated = _rebuilt(result, bullpen=tuple(bullpen))

    logger.info(
        "Replaced %s slot %s: %s -> %s",
        slot.kind.value,
        slot.bench_role or slot.index,
        (current.name or current.id) if current is not None else "empty",
        pick.name or pick.id,
    )
    return updated


__all__ = [
    "MAX_CANDIDATES",
    "ReplacementError",
    "RosterSlot",
    "SlotKind",
    "apply_replacement",
    "backfill_bench",
    "replacement_candidates",
    "slot_card",
]
