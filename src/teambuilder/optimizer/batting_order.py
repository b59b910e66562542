"""Batting order heuristics with opposite-hand preference and repair."""

from __future__ import annotations

from typing import Callable, List, Mapping, Optional, Sequence, Set

from teambuilder.models import Card
from teambuilder.pool import avg, clamp, num


Scorer = Callable[[Card], float]

SWITCH_HITTER_BONUS = 8.0
LATE_ORDER_SLOTS = 5


def contact_avg(card: Card) -> float:
    return avg(card.contact_left, card.contact_right, card.contact)


def power_avg(card: Card) -> float:
    return avg(card.power_left, card.power_right, card.power)


def speed01(card: Card) -> float:
    return clamp((0.7 * num(card.speed) + 0.3 * num(card.baserunning_ability)) / 125, 0.0, 1.0)


def vs_balance(card: Card) -> float:
    vl, vr = num(card.vs_left), num(card.vs_right)
    if not vl and not vr:
        return 0.0
    return 125 * (1 - min(1.0, abs(vl - vr) / 125))


def overall_hit(card: Card) -> float:
    return 0.6 * contact_avg(card) + 0.4 * power_avg(card)


def score_leadoff(card: Card) -> float:
    return (
        0.50 * contact_avg(card)
        + 0.30 * (speed01(card) * 125)
        + 0.15 * power_avg(card)
        + 0.05 * avg(card.vs_left, card.vs_right)
    )


def score_two_hole(card: Card) -> float:
    bonus = SWITCH_HITTER_BONUS if card.bat_hand == "S" else 0.0
    return 0.45 * overall_hit(card) + 0.20 * (speed01(card) * 125) + 0.25 * vs_balance(card) + bonus


def score_three_hole(card: Card) -> float:
    return 0.75 * power_avg(card) + 0.25 * contact_avg(card)


def score_cleanup(card: Card) -> float:
    return 0.70 * power_avg(card) + 0.30 * overall_hit(card)


def score_down_order(card: Card) -> float:
    return overall_hit(card)


def hand_of(card: Card) -> str:
    return card.bat_hand or "R"


def same_hand_adjacent(a: Optional[Card], b: Optional[Card]) -> bool:
    """True when two neighbours bat from the same side and neither switch-hits."""

    if a is None or b is None:
        return False
    ha, hb = hand_of(a), hand_of(b)
    if ha == "S" or hb == "S":
        return False
    return ha == hb


def _opposite(hand: str) -> Optional[str]:
    return {"L": "R", "R": "L"}.get(hand)


def select_best(
    pool: Sequence[Card],
    used: Set[str],
    scorer: Scorer,
    prev: Optional[Card] = None,
) -> Optional[Card]:
    """Best unused card by ``scorer``, preferring the hand opposite ``prev``."""

    candidates = [card for card in pool if card.base_id not in used]
    if not candidates:
        return None

    want = _opposite(hand_of(prev)) if prev is not None else None
    filtered = candidates
    if want is not None:
        filtered = [card for card in candidates if hand_of(card) in {"S", want}] or candidates

    return max(filtered, key=scorer)


def repair_adjacency(order: List[Card]) -> List[Card]:
    """Swap forward to break up same-handed neighbours where possible.

    Switch hitters never move: they cannot cause a violation and are not
    used as swap targets, so they keep the slot their fitness earned.
    """

    for i in range(1, len(order)):
        if not same_hand_adjacent(order[i - 1], order[i]):
            continue
        for j in range(i + 1, len(order)):
            if hand_of(order[j]) == "S":
                continue
            if not same_hand_adjacent(order[i - 1], order[j]):
                order[i], order[j] = order[j], order[i]
                break
    return order


def build_batting_order(
    starters: Mapping[str, Card],
    dh: Optional[Card],
    field_positions: Sequence[str],
) -> List[Card]:
    pool = [starters[pos] for pos in field_positions if pos in starters]
    if dh is not None:
        pool.append(dh)
    used: Set[str] = set()

    def take(scorer: Scorer, prev: Optional[Card]) -> Optional[Card]:
        pick = select_best(pool, used, scorer, prev)
        if pick is not None:
            used.add(pick.base_id)
        return pick

    one = take(score_leadoff, None)
    two = take(score_two_hole, one)
    three = take(score_three_hole, two or one)
    four = take(score_cleanup, three or two)

    rest: List[Card] = []
    prev = four or three or two or one
    for _ in range(LATE_ORDER_SLOTS):
        pick = take(score_down_order, prev)
        if pick is not None:
            rest.append(pick)
            prev = pick

    order = [card for card in (one, two, three, four) if card is not None] + rest
    return repair_adjacency(order)
