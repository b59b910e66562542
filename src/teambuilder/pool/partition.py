"""Split a raw card list into hitter and pitcher pools."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Tuple

from teambuilder.config import DEFAULT_RULES, RosterRules
from teambuilder.models import Card


@dataclass(frozen=True)
class CardPool:
    hitters: Tuple[Card, ...]
    hitters_by_position: Mapping[str, Tuple[Card, ...]]
    starters: Tuple[Card, ...]
    relievers: Tuple[Card, ...]
    rules: RosterRules = field(default=DEFAULT_RULES)

    @classmethod
    def from_cards(cls, cards: Iterable[Card], rules: RosterRules = DEFAULT_RULES) -> "CardPool":
        hitters: list[Card] = []
        by_position: Dict[str, list[Card]] = {pos: [] for pos in rules.field_positions}
        starters: list[Card] = []
        relievers: list[Card] = []
        for card in cards:
            position = card.position
            if position == "SP":
                starters.append(card)
            elif position in {"RP", "CP"}:
                relievers.append(card)
            else:
                hitters.append(card)
                if position in by_position:
                    by_position[position].append(card)
        return cls(
            hitters=tuple(hitters),
            hitters_by_position={pos: tuple(items) for pos, items in by_position.items()},
            starters=tuple(starters),
            relievers=tuple(relievers),
            rules=rules,
        )

    def exclude_pitchers(self, base_ids: Iterable[str]) -> "CardPool":
        """Return a pool whose pitchers exclude the given base identities."""

        blocked = set(base_ids)
        return CardPool(
            hitters=self.hitters,
            hitters_by_position=self.hitters_by_position,
            starters=tuple(c for c in self.starters if c.base_id not in blocked),
            relievers=tuple(c for c in self.relievers if c.base_id not in blocked),
            rules=self.rules,
        )

    def summary(self) -> dict[str, int]:
        counts = {pos: len(items) for pos, items in self.hitters_by_position.items()}
        counts["hitters"] = len(self.hitters)
        counts["SP"] = len(self.starters)
        counts["RP"] = len(self.relievers)
        return counts
