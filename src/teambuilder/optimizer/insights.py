"""Squad summary numbers and plain-language lineup advice."""

from __future__ import annotations

from dataclasses import dataclass
from statistics import fmean
from typing import List, Mapping, Optional, Sequence, Tuple

from teambuilder.models import Card
from teambuilder.optimizer.batting_order import (
    contact_avg,
    power_avg,
    same_hand_adjacent,
    score_leadoff,
    score_two_hole,
)
from teambuilder.optimizer.bench import BenchAssignment
from teambuilder.pool import Metric, num, pitcher_score


MAX_ADVICE = 8
SLOT_UPGRADE_MARGIN = 4.0
BURNER_SPEED = 90.0
UP_THE_MIDDLE = ("C", "SS", "CF")
UP_THE_MIDDLE_FLOOR = 82.0


@dataclass(frozen=True)
class SquadKpis:
    meta: float
    contact: float
    power: float
    speed: float
    defense: float
    rotation: float
    bullpen: float


@dataclass(frozen=True)
class SquadInsights:
    kpis: Optional[SquadKpis]
    advice: Tuple[str, ...]


def _mean(values: Sequence[float]) -> float:
    return fmean(values) if values else 0.0


def squad_kpis(
    lineup: Sequence[Card],
    rotation: Sequence[Card],
    bullpen: Sequence[Card],
    metric: Metric,
) -> Optional[SquadKpis]:
    if not lineup:
        return None
    return SquadKpis(
        meta=_mean([num(c.meta_ovr) for c in lineup]),
        contact=_mean([num(c.contact) for c in lineup]),
        power=_mean([num(c.power) for c in lineup]),
        speed=_mean([num(c.speed) for c in lineup]),
        defense=_mean([num(c.defense) for c in lineup]),
        rotation=_mean([pitcher_score(c, metric) for c in rotation]),
        bullpen=_mean([pitcher_score(c, metric) for c in bullpen]),
    )


def _label(card: Card) -> str:
    return card.name or card.id or "Unknown"


def _at(lineup: Sequence[Card], idx: int) -> Optional[Card]:
    return lineup[idx] if idx < len(lineup) else None


def _same(a: Optional[Card], b: Optional[Card]) -> bool:
    return a is not None and b is not None and a.id == b.id


def lineup_advice(
    lineup: Sequence[Card],
    starters: Mapping[str, Card],
    bench: BenchAssignment,
) -> List[str]:
    if not lineup:
        return []
    out: List[str] = []

    lead_now, two_now = _at(lineup, 0), _at(lineup, 1)
    three_now, four_now = _at(lineup, 2), _at(lineup, 3)
    best_lead = max(lineup, key=score_leadoff)
    best_two = max(lineup, key=score_two_hole)
    by_power = sorted(lineup, key=power_avg, reverse=True)

    if lead_now is not None and not _same(lead_now, best_lead) and (
        score_leadoff(best_lead) - score_leadoff(lead_now) > SLOT_UPGRADE_MARGIN
    ):
        out.append(f"Lead-off optimization: {_label(best_lead)} grades best there. Consider batting them 1st.")
    if two_now is not None and not _same(two_now, best_two) and (
        score_two_hole(best_two) - score_two_hole(two_now) > SLOT_UPGRADE_MARGIN
    ):
        out.append(f"#2 hitter upgrade: {_label(best_two)} fits the all-around 2-hole best.")
    if by_power and not _same(by_power[0], three_now):
        out.append(f"{_label(by_power[0])} has your top raw power; consider batting them 3rd.")
    if len(by_power) > 1 and not _same(by_power[1], four_now):
        out.append(f"{_label(by_power[1])} is your next thump; 4th is ideal.")

    for i in range(len(lineup) - 2):
        if same_hand_adjacent(lineup[i], lineup[i + 1]) and same_hand_adjacent(lineup[i + 1], lineup[i + 2]):
            out.append(f"Slots {i + 1}-{i + 3} are same-handed. Insert an opposite-sided bat to avoid specialist traps.")
            break

    nine = _at(lineup, 8)
    fastest = max(
        lineup,
        key=lambda c: (num(c.speed), 0.75 * contact_avg(c) + 0.25 * num(c.baserunning_ability)),
    )
    if nine is not None and num(fastest.speed) > BURNER_SPEED and not _same(nine, fastest):
        out.append(f"Try {_label(fastest)} in the 9-spot as a 'second lead-off' to turn the lineup.")

    bench_cards = bench.cards()
    if not any(card.position == "C" for card in bench_cards):
        out.append("No backup catcher on the bench. Add one to avoid burning your starter late.")
    if max((num(card.speed) for card in bench_cards), default=0.0) < BURNER_SPEED:
        out.append("Bench lacks a true burner. Carry an elite runner for late-game leverage.")

    middle = [num(starters[pos].defense) for pos in UP_THE_MIDDLE if pos in starters]
    middle = [value for value in middle if value]
    if middle and fmean(middle) < UP_THE_MIDDLE_FLOOR:
        out.append("Up-the-middle defense (C/SS/CF) is soft. A defensive upgrade at one spot would help run prevention.")

    return out[:MAX_ADVICE]


def build_insights(
    lineup: Sequence[Card],
    starters: Mapping[str, Card],
    bench: BenchAssignment,
    rotation: Sequence[Card],
    bullpen: Sequence[Card],
    metric: Metric,
) -> SquadInsights:
    return SquadInsights(
        kpis=squad_kpis(lineup, rotation, bullpen, metric),
        advice=tuple(lineup_advice(lineup, starters, bench)),
    )
