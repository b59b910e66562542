"""Branch-and-bound assignment of hitters to the eight field positions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Set, Tuple

from teambuilder.models import Card
from teambuilder.pool import CardPool, Metric, hitter_score


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    card: Card
    score: float


@dataclass(frozen=True)
class SearchStats:
    nodes: int
    pruned: int


@dataclass(frozen=True)
class LineupAssignment:
    starters: Mapping[str, Card]
    dh: Optional[Card]
    fielder_score: float
    dh_score: float
    stats: SearchStats

    @property
    def total_score(self) -> float:
        return self.fielder_score + self.dh_score

    @property
    def base_ids(self) -> Set[str]:
        ids = {card.base_id for card in self.starters.values()}
        if self.dh is not None:
            ids.add(self.dh.base_id)
        return ids


def build_shortlists(pool: CardPool, metric: Metric) -> Dict[str, List[Candidate]]:
    """Top ``shortlist_cap`` candidates per position, best first, ties in pool order."""

    cap = pool.rules.shortlist_cap
    shortlists: Dict[str, List[Candidate]] = {}
    for pos in pool.rules.field_positions:
        scored = [Candidate(card, hitter_score(card, metric)) for card in pool.hitters_by_position.get(pos, ())]
        scored.sort(key=lambda cand: cand.score, reverse=True)
        shortlists[pos] = scored[:cap]
    return shortlists


def visit_order(shortlists: Mapping[str, Sequence[Candidate]], scarcity_order: Sequence[str]) -> List[str]:
    """Sparsest positions first so the bound bites early."""

    return sorted(scarcity_order, key=lambda pos: len(shortlists.get(pos, ())))


class _Search:
    """One depth-first search; state lives on the instance, never shared."""

    def __init__(self, shortlists: Mapping[str, Sequence[Candidate]], positions: Sequence[str]):
        self.shortlists = shortlists
        self.positions = list(positions)
        self.used: Set[str] = set()
        self.chosen: Dict[str, Candidate] = {}
        self.best_score = float("-inf")
        self.best_pick: Dict[str, Candidate] = {}
        self.nodes = 0
        self.pruned = 0

    def _best_unused(self, pos: str) -> Optional[Candidate]:
        for cand in self.shortlists.get(pos, ()):
            if cand.card.base_id not in self.used:
                return cand
        return None

    def _optimistic(self, idx: int, running: float) -> float:
        bound = running
        for pos in self.positions[idx:]:
            cand = self._best_unused(pos)
            if cand is not None:
                # An open slot counts 0, so a negative best can still be beaten.
                bound += max(cand.score, 0.0)
        return bound

    def run(self) -> None:
        self._dfs(0, 0.0)

    def _dfs(self, idx: int, running: float) -> None:
        self.nodes += 1
        if idx >= len(self.positions):
            if running > self.best_score:
                self.best_score = running
                self.best_pick = dict(self.chosen)
            return

        if self._optimistic(idx, running) <= self.best_score:
            self.pruned += 1
            return

        pos = self.positions[idx]
        branched = False
        for cand in self.shortlists.get(pos, ()):
            root = cand.card.base_id
            if root in self.used:
                continue
            branched = True
            self.used.add(root)
            self.chosen[pos] = cand
            self._dfs(idx + 1, running + cand.score)
            self.used.discard(root)
            del self.chosen[pos]

        if not branched:
            # Nobody left for this position on the active path; leave it open.
            self._dfs(idx + 1, running)


def _pick_dh(hitters: Sequence[Card], taken: Set[str], metric: Metric) -> Tuple[Optional[Card], float]:
    best: Optional[Card] = None
    best_score = float("-inf")
    for card in hitters:
        if card.base_id in taken:
            continue
        score = hitter_score(card, metric)
        if score > best_score:
            best, best_score = card, score
    if best is None:
        return None, 0.0
    return best, best_score


def optimize_lineup(pool: CardPool, metric: Metric) -> LineupAssignment:
    """Highest-scoring unique assignment of the field positions plus a DH."""

    shortlists = build_shortlists(pool, metric)
    positions = visit_order(shortlists, pool.rules.scarcity_order)

    search = _Search(shortlists, positions)
    search.run()

    starters = {
        pos: search.best_pick[pos].card
        for pos in pool.rules.field_positions
        if pos in search.best_pick
    }
    fielder_score = sum(cand.score for cand in search.best_pick.values())
    taken = {card.base_id for card in starters.values()}
    dh, dh_score = _pick_dh(pool.hitters, taken, metric)

    missing = [pos for pos in pool.rules.field_positions if pos not in starters]
    if missing:
        logger.warning("No eligible hitter for position(s): %s", ", ".join(missing))
    logger.debug(
        "Lineup search visited %s nodes (%s pruned); order=%s, fielder score %.2f",
        search.nodes,
        search.pruned,
        "/".join(positions),
        fielder_score,
    )
    return LineupAssignment(
        starters=starters,
        dh=dh,
        fielder_score=fielder_score,
        dh_score=dh_score,
        stats=SearchStats(nodes=search.nodes, pruned=search.pruned),
    )
