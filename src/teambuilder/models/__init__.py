"""Card models shared across ingestion and roster layers."""

from .card import PITCHER_POSITIONS, Card, CardId, PitchRating, normalize_position

__all__ = ["PITCHER_POSITIONS", "Card", "CardId", "PitchRating", "normalize_position"]
