"""Command-line interface for building a roster from a card file."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from teambuilder.api.schemas import RosterResponse
from teambuilder.config import get_rules
from teambuilder.export import export_roster_to_csv
from teambuilder.ingest import CardPoolError, load_cards
from teambuilder.optimizer import RosterResult, build_roster
from teambuilder.pool import DEFAULT_METRIC, Metric


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build an optimal roster from a pool of player cards")
    parser.add_argument("cards", type=Path, help="Path to a cards JSON (list or {'items': [...]}) or CSV file")
    parser.add_argument(
        "--metric",
        default=DEFAULT_METRIC.value,
        choices=[metric.value for metric in Metric],
        help="Scoring metric used for starters, DH and pitcher ranking",
    )
    parser.add_argument("--output", type=Path, default=Path("roster.json"), help="Output JSON path")
    parser.add_argument("--csv", type=Path, default=None, help="Optional path to write a roster CSV")
    parser.add_argument(
        "--forbid-two-way",
        action="store_true",
        help="Do not let a player already used as a hitter also pitch",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _print_summary(result: RosterResult) -> None:
    print(f"Metric: {result.metric.value} (lineup score {result.lineup_score:.1f})")
    for slot in result.lineup:
        card = slot.card
        print(f"  {slot.slot}. {slot.position:<3} {card.name or card.id} ({card.bat_hand or '-'})")
    for slot in result.bullpen:
        if slot.role:
            print(f"{slot.role}: {slot.card.name or slot.card.id}")
    for line in result.insights.advice:
        print(f"- {line}")


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cards = load_cards(args.cards)
    except CardPoolError as exc:
        print(f"Unable to load cards: {exc}")
        return 1

    allow_two_way = False if args.forbid_two_way else None
    result = build_roster(cards, args.metric, rules=get_rules(), allow_two_way=allow_two_way)

    payload = RosterResponse.from_result(result)
    args.output.write_text(payload.model_dump_json(indent=2), encoding="utf-8")
    print(f"Wrote roster to {args.output}")

    if args.csv:
        args.csv.write_text(export_roster_to_csv(result), encoding="utf-8")
        print(f"Wrote roster CSV to {args.csv}")

    _print_summary(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
