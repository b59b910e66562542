"""Starting rotation and role-based bullpen selection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Set, Tuple

from teambuilder.models import Card
from teambuilder.optimizer.pitches import JUNK_PITCHES, has_pitch, mix_synergy_score, primary_fastball_mph
from teambuilder.pool import CardPool, Metric, num, pitcher_score


logger = logging.getLogger(__name__)

CLOSER_ROLE = "Closer"

Scorer = Callable[[Card], float]
Filter = Callable[[Card], bool]


@dataclass(frozen=True)
class BullpenSlot:
    card: Card
    assignment: str
    role: Optional[str] = None


def _ranked(cards: Iterable[Card], metric: Metric) -> List[Card]:
    return sorted(cards, key=lambda card: pitcher_score(card, metric), reverse=True)


def select_rotation(pool: CardPool, metric: Metric) -> Tuple[Card, ...]:
    """Top starters by pitcher score, one card per player."""

    rotation: List[Card] = []
    seen: Set[str] = set()
    for card in _ranked(pool.starters, metric):
        if card.base_id in seen:
            continue
        seen.add(card.base_id)
        rotation.append(card)
        if len(rotation) >= pool.rules.rotation_size:
            break
    return tuple(rotation)


def is_left(card: Card) -> bool:
    return card.throw_hand == "L"


def is_right(card: Card) -> bool:
    return card.throw_hand == "R"


def velocity_score(card: Card) -> float:
    return 0.6 * primary_fastball_mph(card) + 0.4 * num(card.pitch_velocity)


class _BullpenBuilder:
    def __init__(self, shortlist: Sequence[Card], metric: Metric):
        self.shortlist = shortlist
        self.metric = metric
        self.picked: List[BullpenSlot] = []
        self.used: Set[str] = set()

    def score(self, card: Card) -> float:
        return pitcher_score(card, self.metric)

    def best(self, scorer: Scorer, keep: Optional[Filter] = None, source: Optional[Sequence[Card]] = None) -> Optional[Card]:
        eligible = [
            card for card in (self.shortlist if source is None else source)
            if card.base_id not in self.used and (keep is None or keep(card))
        ]
        if not eligible:
            return None
        return max(eligible, key=scorer)

    def take(self, card: Optional[Card], assignment: str, role: Optional[str] = None) -> Optional[Card]:
        if card is None or card.base_id in self.used:
            return None
        self.used.add(card.base_id)
        self.picked.append(BullpenSlot(card=card, assignment=assignment, role=role))
        logger.debug("Bullpen %s: %s (%s)", assignment, card.name or card.id, card.throw_hand or "?")
        return card

    # Role composites

    def closer_score(self, card: Card) -> float:
        return (
            0.45 * self.score(card)
            + 0.25 * num(card.k_per_bf)
            + 0.20 * velocity_score(card)
            + 0.10 * num(card.pitching_clutch)
        )

    def setup_score(self, card: Card) -> float:
        return (
            0.40 * self.score(card)
            + 0.25 * num(card.k_per_bf)
            + 0.20 * velocity_score(card)
            + 0.15 * num(card.pitching_clutch)
        )

    def outlier_score(self, card: Card) -> float:
        return 0.55 * velocity_score(card) + 0.25 * num(card.k_per_bf) + 0.20 * self.score(card)

    def control_score(self, card: Card) -> float:
        return (
            0.45 * num(card.pitch_control)
            + 0.25 * (125 - num(card.bb_per_bf))
            + 0.15 * num(card.pitch_movement)
            + 0.15 * self.score(card)
        )

    def mix_score(self, card: Card) -> float:
        return 0.55 * mix_synergy_score(card) + 0.25 * self.score(card) + 0.20 * num(card.pitch_control)

    def junk_score(self, card: Card) -> float:
        return (
            0.40 * self.score(card)
            + 0.30 * num(card.pitch_movement)
            + 0.20 * num(card.pitch_control)
            + 0.10 * num(card.k_per_bf)
        )


def _has_junk(card: Card) -> bool:
    return has_pitch(card, *JUNK_PITCHES)


def _ensure_left_handers(
    builder: _BullpenBuilder,
    reserve: Sequence[Card],
    minimum: int,
    size: int,
) -> None:
    """Swap the best unused lefties in for the weakest non-lefty picks.

    When nothing is replaceable but the bullpen is short, the lefty is added.
    """

    while sum(1 for slot in builder.picked if is_left(slot.card)) < minimum:
        lefty = builder.best(builder.score, is_left, source=reserve)
        if lefty is None:
            logger.warning("Bullpen has fewer than %s left-handed relievers available", minimum)
            return
        replaceable = [
            (idx, slot) for idx, slot in enumerate(builder.picked)
            if not is_left(slot.card) and slot.role != CLOSER_ROLE
        ]
        if not replaceable:
            if len(builder.picked) >= size:
                return
            builder.take(lefty, "lhp_depth")
            continue
        worst_idx, worst = min(replaceable, key=lambda item: builder.score(item[1].card))
        builder.used.discard(worst.card.base_id)
        builder.used.add(lefty.base_id)
        builder.picked[worst_idx] = BullpenSlot(card=lefty, assignment="lhp_depth")
        logger.debug("Bullpen lefty swap: %s replaces %s", lefty.name or lefty.id, worst.card.name or worst.card.id)


def select_bullpen(
    pool: CardPool,
    metric: Metric,
    exclude_ids: Iterable[str] = (),
) -> Tuple[BullpenSlot, ...]:
    """Fill the bullpen with eight sequential, role-specific greedy picks."""

    rules = pool.rules
    blocked = set(exclude_ids)
    reserve = _ranked((card for card in pool.relievers if card.base_id not in blocked), metric)
    shortlist = reserve[: rules.bullpen_pool_size]

    builder = _BullpenBuilder(shortlist, metric)
    builder.take(builder.best(builder.closer_score), "closer", CLOSER_ROLE)
    builder.take(builder.best(builder.setup_score), "setup")
    builder.take(builder.best(builder.outlier_score, is_right), "rhp_velocity")
    builder.take(builder.best(builder.outlier_score, is_left), "lhp_velocity")
    builder.take(builder.best(builder.control_score, is_right), "rhp_control")
    builder.take(builder.best(builder.control_score, is_left), "lhp_control")
    builder.take(builder.best(builder.mix_score), "pitch_mix")
    junk = builder.best(builder.junk_score, _has_junk)
    builder.take(junk if junk is not None else builder.best(builder.score), "junk")

    if builder.picked:
        _ensure_left_handers(builder, reserve, rules.min_left_relievers, rules.bullpen_size)

    while len(builder.picked) < rules.bullpen_size:
        if builder.take(builder.best(builder.score), "depth") is None:
            break

    return tuple(builder.picked)
