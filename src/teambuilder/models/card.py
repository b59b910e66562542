"""Canonical card models shared across ingestion and roster layers."""

from __future__ import annotations

import math
from typing import Any, NamedTuple, Optional, Tuple

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


PITCHER_POSITIONS = frozenset({"SP", "RP", "CP"})

_POSITION_ALIASES = {
    "CATCHER": "C",
    "FIRST BASE": "1B",
    "SECOND BASE": "2B",
    "THIRD BASE": "3B",
    "SHORTSTOP": "SS",
    "LEFT FIELD": "LF",
    "CENTER FIELD": "CF",
    "RIGHT FIELD": "RF",
    "DESIGNATED HITTER": "DH",
    "STARTING PITCHER": "SP",
    "RELIEF PITCHER": "RP",
    "CLOSING PITCHER": "CP",
    "CLOSER": "CP",
}


def normalize_position(value: Any) -> Optional[str]:
    """Return the canonical tag for the first listed position, or None."""

    if value is None:
        return None
    text = str(value).strip().upper()
    first = text.replace(",", "/").split("/")[0].strip()
    if not first:
        return None
    return _POSITION_ALIASES.get(first, first)


def _finite_or_none(value: Any) -> Any:
    """Unparseable or non-finite ratings become missing instead of failing the card."""

    if isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


class CardId(NamedTuple):
    """Card identifier split into the player's base id and a variant tag."""

    base_id: str
    variant: Optional[str] = None

    @classmethod
    def parse(cls, raw: str) -> "CardId":
        base, sep, variant = raw.partition("|")
        return cls(base, variant if sep else None)


class PitchRating(BaseModel):
    name: Optional[str] = None
    speed: Optional[float] = None
    control: Optional[float] = None
    movement: Optional[float] = None

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("speed", "control", "movement", mode="before")
    @classmethod
    def _drop_non_finite(cls, value: Any) -> Any:
        return _finite_or_none(value)


class Card(BaseModel):
    """Normalized player card; every rating is optional."""

    id: str = ""
    name: Optional[str] = None
    team: Optional[str] = None
    display_position: Optional[str] = None
    primary_position: Optional[str] = None
    image: Optional[str] = None

    ovr: Optional[float] = None
    true_ovr: Optional[float] = None
    meta_ovr: Optional[float] = None
    vs_left: Optional[float] = None
    vs_right: Optional[float] = None
    power: Optional[float] = None
    contact: Optional[float] = None
    bunting: Optional[float] = None
    baserunning: Optional[float] = None
    defense: Optional[float] = None
    contact_left: Optional[float] = None
    contact_right: Optional[float] = None
    power_left: Optional[float] = None
    power_right: Optional[float] = None
    speed: Optional[float] = None
    baserunning_ability: Optional[float] = None
    bat_hand: Optional[str] = None
    throw_hand: Optional[str] = None

    pitch_velocity: Optional[float] = None
    pitch_control: Optional[float] = None
    pitch_movement: Optional[float] = None
    hits_per_bf: Optional[float] = None
    k_per_bf: Optional[float] = None
    bb_per_bf: Optional[float] = None
    pitching_clutch: Optional[float] = None
    pitches: Tuple[PitchRating, ...] = Field(default_factory=tuple)

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        return str(value).strip()

    @field_validator("display_position", "primary_position", mode="before")
    @classmethod
    def _canonical_position(cls, value: Any) -> Optional[str]:
        return normalize_position(value)

    @field_validator("bat_hand", mode="before")
    @classmethod
    def _canonical_bat_hand(cls, value: Any) -> Optional[str]:
        text = str(value or "").strip().upper()[:1]
        return text if text in {"L", "R", "S"} else None

    @field_validator("throw_hand", mode="before")
    @classmethod
    def _canonical_throw_hand(cls, value: Any) -> Optional[str]:
        text = str(value or "").strip().upper()[:1]
        return text if text in {"L", "R"} else None

    @field_validator("pitches", mode="before")
    @classmethod
    def _pitch_list(cls, value: Any) -> Any:
        if value is None:
            return ()
        return tuple(value)

    @field_validator(
        "ovr", "true_ovr", "meta_ovr", "vs_left", "vs_right", "power", "contact",
        "bunting", "baserunning", "defense", "contact_left", "contact_right",
        "power_left", "power_right", "speed", "baserunning_ability",
        "pitch_velocity", "pitch_control", "pitch_movement", "hits_per_bf",
        "k_per_bf", "bb_per_bf", "pitching_clutch",
        mode="before",
    )
    @classmethod
    def _drop_non_finite(cls, value: Any) -> Any:
        return _finite_or_none(value)

    @property
    def identity(self) -> CardId:
        return CardId.parse(self.id)

    @property
    def base_id(self) -> str:
        return self.identity.base_id

    @property
    def position(self) -> str:
        return self.display_position or ""

    @property
    def is_pitcher(self) -> bool:
        return self.position in PITCHER_POSITIONS
