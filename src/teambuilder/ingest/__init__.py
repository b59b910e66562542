"""Input adapters that normalize raw card data."""

from .cards import (
    CardPoolError,
    load_cards,
    parse_csv_cards,
    parse_json_cards,
    records_to_cards,
)

__all__ = [
    "CardPoolError",
    "load_cards",
    "parse_csv_cards",
    "parse_json_cards",
    "records_to_cards",
]
