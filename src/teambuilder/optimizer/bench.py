"""Bench specialists chosen from hitters left out of the starting nine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Set

from teambuilder.models import Card
from teambuilder.optimizer.batting_order import speed01
from teambuilder.pool import CardPool, Metric, hitter_score, num


Scorer = Callable[[Card], float]
Filter = Callable[[Card], bool]

BENCH_ROLES = ("pinch_runner", "defensive_sub", "platoon_vs_left", "platoon_vs_right")


def pinch_runner_score(card: Card) -> float:
    return 0.75 * (speed01(card) * 125) + 0.25 * num(card.baserunning_ability)


def defense_score(card: Card) -> float:
    return num(card.defense)


def platoon_vs_left_score(card: Card) -> float:
    return num(card.vs_left)


def platoon_vs_right_score(card: Card) -> float:
    return num(card.vs_right)


ROLE_SCORERS: Dict[str, Scorer] = {
    "pinch_runner": pinch_runner_score,
    "defensive_sub": defense_score,
    "platoon_vs_left": platoon_vs_left_score,
    "platoon_vs_right": platoon_vs_right_score,
}


@dataclass(frozen=True)
class BenchAssignment:
    pinch_runner: Optional[Card] = None
    defensive_sub: Optional[Card] = None
    platoon_vs_left: Optional[Card] = None
    platoon_vs_right: Optional[Card] = None

    def cards(self) -> List[Card]:
        return [
            card
            for card in (self.pinch_runner, self.defensive_sub, self.platoon_vs_left, self.platoon_vs_right)
            if card is not None
        ]


class _BenchPicker:
    def __init__(self, pool: Sequence[Card]):
        self.pool = pool
        self.used: Set[str] = set()

    def ranked(self, scorer: Scorer, keep: Optional[Filter] = None) -> List[Card]:
        eligible = [
            card for card in self.pool
            if card.base_id not in self.used and (keep is None or keep(card))
        ]
        return sorted(eligible, key=scorer, reverse=True)

    def take_first(self, *ranked_lists: Iterable[Card]) -> Optional[Card]:
        for ranked in ranked_lists:
            for card in ranked:
                if card.base_id not in self.used:
                    self.used.add(card.base_id)
                    return card
        return None


def select_bench(pool: CardPool, starter_ids: Iterable[str], metric: Metric) -> BenchAssignment:
    """Fill the four bench roles, each falling back until a hitter is found."""

    taken = set(starter_ids)
    candidates = [card for card in pool.hitters if card.base_id not in taken]
    picker = _BenchPicker(candidates)
    outfield, infield = pool.rules.outfield, pool.rules.infield

    def is_of(card: Card) -> bool:
        return card.position in outfield

    def is_if(card: Card) -> bool:
        return card.position in infield

    def by_metric() -> List[Card]:
        return picker.ranked(lambda c: hitter_score(c, metric))

    pinch_runner = picker.take_first(
        picker.ranked(pinch_runner_score, is_of),
        picker.ranked(lambda c: 0.80 * (speed01(c) * 125) + 0.20 * num(c.baserunning_ability)),
        by_metric(),
    )

    defensive_sub = picker.take_first(
        picker.ranked(defense_score, is_of),
        picker.ranked(defense_score, is_if),
        picker.ranked(defense_score),
        by_metric(),
    )

    platoon_vs_left = picker.take_first(picker.ranked(platoon_vs_left_score), by_metric())
    platoon_vs_right = picker.take_first(picker.ranked(platoon_vs_right_score), by_metric())

    return BenchAssignment(
        pinch_runner=pinch_runner,
        defensive_sub=defensive_sub,
        platoon_vs_left=platoon_vs_left,
        platoon_vs_right=platoon_vs_right,
    )
