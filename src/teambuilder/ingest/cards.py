"""Helpers to load card pools from JSON or CSV exports."""

from __future__ import annotations

import csv
import json
import logging
import re
from io import StringIO
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Sequence

from pydantic import ValidationError

from teambuilder.models import Card


logger = logging.getLogger(__name__)

_PITCH_COLUMN = re.compile(r"^pitch_(\d+)_(name|speed|control|movement)$")


class CardPoolError(ValueError):
    """Raised when a card file cannot produce a usable pool."""


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def records_to_cards(records: Iterable[Mapping[str, Any]]) -> List[Card]:
    """Validate raw dicts into cards, skipping rows that fail validation."""

    cards: List[Card] = []
    skipped = 0
    for idx, record in enumerate(records):
        try:
            cards.append(Card.model_validate(record))
        except ValidationError as exc:
            skipped += 1
            logger.warning("Skipping card row %s (%s): %s", idx, record.get("id"), exc.errors()[0].get("msg"))
    if skipped:
        logger.info("Loaded %s cards (%s rows skipped)", len(cards), skipped)
    return cards


def _json_records(payload: Any) -> Sequence[Mapping[str, Any]]:
    if isinstance(payload, Mapping):
        payload = payload.get("items")
    if not isinstance(payload, list):
        raise CardPoolError("Expected a list of cards or an object with an 'items' list")
    return [item for item in payload if isinstance(item, Mapping)]


def parse_json_cards(text: str) -> List[Card]:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CardPoolError(f"Invalid card JSON: {exc}") from exc
    return records_to_cards(_json_records(payload))


def _csv_row_to_record(row: Mapping[str, str]) -> dict[str, Any]:
    record: dict[str, Any] = {}
    pitches: dict[int, dict[str, Any]] = {}
    for column, value in row.items():
        if column is None:
            continue
        key = column.strip()
        match = _PITCH_COLUMN.match(key.lower())
        if match:
            index, attr = int(match.group(1)), match.group(2)
            value = _blank_to_none(value)
            if value is not None:
                pitches.setdefault(index, {})[attr] = value
            continue
        record[key] = _blank_to_none(value)
    if pitches:
        record["pitches"] = [pitches[idx] for idx in sorted(pitches)]
    return record


def parse_csv_cards(text: str) -> List[Card]:
    reader = csv.DictReader(StringIO(text))
    if not reader.fieldnames:
        raise CardPoolError("Card CSV has no header row")
    return records_to_cards(_csv_row_to_record(row) for row in reader)


def load_cards(path: Path) -> List[Card]:
    """Load cards from ``path``, choosing the parser by file suffix."""

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CardPoolError(f"Unable to read {path}: {exc}") from exc

    if path.suffix.lower() == ".csv":
        cards = parse_csv_cards(text)
    else:
        cards = parse_json_cards(text)

    if not cards:
        raise CardPoolError(f"No valid cards found in {path}")
    logger.info("Loaded %s cards from %s", len(cards), path)
    return cards
