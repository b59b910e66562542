"""Assemble a full roster from a card pool."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional, Tuple

from teambuilder.config import RosterRules, get_rules
from teambuilder.models import Card
from teambuilder.optimizer.batting_order import build_batting_order
from teambuilder.optimizer.bench import BenchAssignment, select_bench
from teambuilder.optimizer.insights import SquadInsights, build_insights
from teambuilder.optimizer.lineup import optimize_lineup
from teambuilder.optimizer.pitching import CLOSER_ROLE, BullpenSlot, select_bullpen, select_rotation
from teambuilder.pool import DEFAULT_METRIC, CardPool, Metric


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineupSlot:
    slot: int
    position: str
    card: Card


@dataclass(frozen=True)
class RosterResult:
    metric: Metric
    starters: Mapping[str, Card]
    dh: Optional[Card]
    lineup: Tuple[LineupSlot, ...]
    bench: BenchAssignment
    rotation: Tuple[Card, ...]
    bullpen: Tuple[BullpenSlot, ...]
    lineup_score: float = 0.0
    insights: SquadInsights = field(default_factory=lambda: SquadInsights(kpis=None, advice=()))

    @property
    def closer(self) -> Optional[Card]:
        for slot in self.bullpen:
            if slot.role == CLOSER_ROLE:
                return slot.card
        return None


def _lineup_slots(order: Iterable[Card], starters: Mapping[str, Card], dh: Optional[Card]) -> Tuple[LineupSlot, ...]:
    position_by_id = {card.id: pos for pos, card in starters.items()}
    slots = []
    for idx, card in enumerate(order):
        if dh is not None and card.id == dh.id:
            position = "DH"
        else:
            position = position_by_id.get(card.id, card.position)
        slots.append(LineupSlot(slot=idx + 1, position=position, card=card))
    return tuple(slots)


def build_roster(
    cards: Iterable[Card],
    metric: "Metric | str" = DEFAULT_METRIC,
    *,
    rules: Optional[RosterRules] = None,
    allow_two_way: Optional[bool] = None,
) -> RosterResult:
    """Build starters, batting order, bench, rotation and bullpen for ``metric``."""

    metric = Metric.parse(metric)
    rules = rules or get_rules()
    if allow_two_way is None:
        allow_two_way = rules.allow_two_way

    start = time.perf_counter()
    pool = CardPool.from_cards(cards, rules)
    logger.info(
        "Building roster (metric=%s) from %s hitters, %s starters, %s relievers",
        metric.value,
        len(pool.hitters),
        len(pool.starters),
        len(pool.relievers),
    )

    assignment = optimize_lineup(pool, metric)
    order = build_batting_order(assignment.starters, assignment.dh, rules.field_positions)
    bench = select_bench(pool, assignment.base_ids, metric)

    pitching_pool = pool
    if not allow_two_way:
        hitter_ids = assignment.base_ids | {card.base_id for card in bench.cards()}
        pitching_pool = pool.exclude_pitchers(hitter_ids)

    rotation = select_rotation(pitching_pool, metric)
    bullpen = select_bullpen(pitching_pool, metric, exclude_ids=(card.base_id for card in rotation))

    insights = build_insights(
        order,
        assignment.starters,
        bench,
        rotation,
        [slot.card for slot in bullpen],
        metric,
    )

    result = RosterResult(
        metric=metric,
        starters=dict(assignment.starters),
        dh=assignment.dh,
        lineup=_lineup_slots(order, assignment.starters, assignment.dh),
        bench=bench,
        rotation=rotation,
        bullpen=bullpen,
        lineup_score=assignment.total_score,
        insights=insights,
    )
    logger.info(
        "Roster built in %.3fs: lineup %s/9 (score %.2f), bench %s/4, rotation %s/%s, bullpen %s/%s",
        time.perf_counter() - start,
        len(result.lineup),
        result.lineup_score,
        len(bench.cards()),
        len(rotation),
        rules.rotation_size,
        len(bullpen),
        rules.bullpen_size,
    )
    return result
