"""Pitch-type classification and repertoire synergy scoring."""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional, Tuple

from teambuilder.models import Card
from teambuilder.pool import clamp, num


class PitchType(str, Enum):
    FOUR_SEAM = "FF"
    TWO_SEAM = "FT"
    SINKER = "SI"
    CUTTER = "FC"
    SLIDER = "SL"
    SWEEPER = "SWP"
    CURVEBALL = "CB"
    KNUCKLE_CURVE = "KC"
    SLURVE = "SV"
    SCREWBALL = "SC"
    SPLITTER = "SPL"
    FORKBALL = "FRK"
    CHANGEUP = "CH"
    CIRCLE_CHANGE = "CCH"
    VULCAN_CHANGE = "VCH"
    PALMBALL = "PAL"
    KNUCKLEBALL = "KN"
    OTHER = "OTHER"


# Order matters: first match wins.
_PITCH_PATTERNS: Tuple[Tuple[re.Pattern[str], PitchType], ...] = tuple(
    (re.compile(pattern), pitch_type)
    for pattern, pitch_type in (
        (r"4[-\s]?seam", PitchType.FOUR_SEAM),
        (r"2[-\s]?seam", PitchType.TWO_SEAM),
        (r"sinker", PitchType.SINKER),
        (r"cutter|cut fast|fc", PitchType.CUTTER),
        (r"sweeper\b", PitchType.SWEEPER),
        (r"slider|slutter", PitchType.SLIDER),
        (r"sweeping curve", PitchType.CURVEBALL),
        (r"12[-\s]?6|curveball\b|\bcurve\b", PitchType.CURVEBALL),
        (r"knuckle-?curve", PitchType.KNUCKLE_CURVE),
        (r"slurve", PitchType.SLURVE),
        (r"screwball", PitchType.SCREWBALL),
        (r"splitter", PitchType.SPLITTER),
        (r"forkball|fork", PitchType.FORKBALL),
        (r"vulcan", PitchType.VULCAN_CHANGE),
        (r"circle", PitchType.CIRCLE_CHANGE),
        (r"change", PitchType.CHANGEUP),
        (r"palmball", PitchType.PALMBALL),
        # Also matches the full "knuckleball" spelling, a junk pitch for the bullpen.
        (r"knuckle(ball)?$", PitchType.KNUCKLEBALL),
    )
)

CHANGEUP_FAMILY = (PitchType.CHANGEUP, PitchType.CIRCLE_CHANGE, PitchType.VULCAN_CHANGE)
SPLITTER_FAMILY = (PitchType.SPLITTER, PitchType.FORKBALL)
ARM_SIDE = (
    PitchType.SINKER, PitchType.TWO_SEAM, *CHANGEUP_FAMILY, *SPLITTER_FAMILY, PitchType.SCREWBALL,
)
GLOVE_SIDE = (PitchType.CUTTER, PitchType.SLIDER)
CURVE_FAMILY = (PitchType.CURVEBALL, PitchType.KNUCKLE_CURVE, PitchType.SLURVE, PitchType.SWEEPER)
JUNK_PITCHES = (PitchType.PALMBALL, PitchType.SCREWBALL, PitchType.KNUCKLEBALL, PitchType.KNUCKLE_CURVE)

SYNERGY_CAP = 125.0


def classify_pitch(name: Optional[str]) -> PitchType:
    text = str(name or "").lower().strip()
    for pattern, pitch_type in _PITCH_PATTERNS:
        if pattern.search(text):
            return pitch_type
    return PitchType.OTHER


def pitch_speed(card: Card, pitch_type: PitchType) -> float:
    """Speed of the first pitch of ``pitch_type`` in the repertoire, else 0."""

    for pitch in card.pitches:
        if classify_pitch(pitch.name) is pitch_type:
            return num(pitch.speed)
    return 0.0


def has_pitch(card: Card, *pitch_types: PitchType) -> bool:
    return any(pitch_speed(card, pitch_type) > 0 for pitch_type in pitch_types)


def triangle(x: float, low: float, peak: float, high: float) -> float:
    """0 outside (low, high), rising to 1 at ``peak``."""

    if x <= low or x >= high:
        return 0.0
    if x <= peak:
        return (x - low) / (peak - low)
    return (high - x) / (high - peak)


def primary_fastball_mph(card: Card) -> float:
    four_seam = pitch_speed(card, PitchType.FOUR_SEAM)
    if four_seam:
        return four_seam
    return max(
        pitch_speed(card, PitchType.CUTTER),
        pitch_speed(card, PitchType.SINKER),
        pitch_speed(card, PitchType.TWO_SEAM),
    )


def mix_synergy_score(card: Card) -> float:
    """Reward tunneling pairs and horizontal-movement diversity."""

    control = num(card.pitch_control) / 125
    ff = pitch_speed(card, PitchType.FOUR_SEAM)
    si = pitch_speed(card, PitchType.SINKER)
    fc = pitch_speed(card, PitchType.CUTTER)

    score = 0.0
    if si and fc:
        closeness = clamp((3 - abs(si - fc)) / 3, 0.0, 1.0)
        score += 25 * closeness * (0.6 + 0.4 * control)

    best_off = max(pitch_speed(card, t) for t in CHANGEUP_FAMILY + SPLITTER_FAMILY)
    if ff and best_off:
        gap = max(ff - best_off, 0.0)
        weight = max(
            triangle(gap, 6, 11, 16),
            triangle(gap, 4, 10, 18) * 0.7,
            triangle(gap, 9, 13, 20),
        )
        score += 30 * weight * (0.6 + 0.4 * control)

    slider = pitch_speed(card, PitchType.SLIDER)
    if slider:
        score += 12 if slider >= 92 else 8 if slider >= 88 else 4

    glove_side = has_pitch(card, *GLOVE_SIDE)
    if has_pitch(card, *ARM_SIDE) and glove_side:
        score += 10

    vertical_shapes = int(has_pitch(card, PitchType.FOUR_SEAM)) + int(has_pitch(card, *CURVE_FAMILY))
    if vertical_shapes >= 2 and not glove_side:
        score -= 8

    score *= 0.8 + 0.2 * control
    return clamp(score, 0.0, SYNERGY_CAP)
