"""CSV export helpers for built rosters."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Iterator, Tuple

from teambuilder.models import Card
from teambuilder.optimizer import BENCH_ROLES, RosterResult
from teambuilder.pool import hitter_score, pitcher_score


HEADERS: Tuple[str, ...] = (
    "section",
    "slot",
    "role",
    "id",
    "name",
    "position",
    "hand",
    "score",
)


def _iter_rows(result: RosterResult) -> Iterator[Tuple[str, str, str, Card, str, float]]:
    metric = result.metric
    for slot in result.lineup:
        card = slot.card
        yield "lineup", str(slot.slot), slot.position, card, card.bat_hand or "", hitter_score(card, metric)
    for role in BENCH_ROLES:
        card = getattr(result.bench, role)
        if card is not None:
            yield "bench", "", role, card, card.bat_hand or "", hitter_score(card, metric)
    for idx, card in enumerate(result.rotation, start=1):
        yield "rotation", str(idx), "SP", card, card.throw_hand or "", pitcher_score(card, metric)
    for idx, slot in enumerate(result.bullpen, start=1):
        role = slot.role or slot.assignment
        yield "bullpen", str(idx), role, slot.card, slot.card.throw_hand or "", pitcher_score(slot.card, metric)


def export_roster_to_csv(result: RosterResult) -> str:
    """Flatten a roster into one CSV row per occupied slot."""

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(HEADERS)
    for section, slot, role, card, hand, score in _iter_rows(result):
        writer.writerow([
            section,
            slot,
            role,
            card.id,
            card.name or "",
            card.position,
            hand,
            f"{score:.2f}",
        ])
    return buffer.getvalue()


__all__ = [
    "HEADERS",
    "export_roster_to_csv",
]
