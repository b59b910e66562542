from __future__ import annotations

from typing import Any

from teambuilder.models import Card


FIELD_POSITIONS = ("C", "1B", "2B", "3B", "SS", "LF", "CF", "RF")


def hitter(card_id: str, position: str, score: float = 70.0, **fields: Any) -> Card:
    payload: dict[str, Any] = {
        "id": card_id,
        "name": f"Hitter {card_id}",
        "display_position": position,
        "meta_ovr": score,
        "true_ovr": score,
    }
    payload.update(fields)
    return Card.model_validate(payload)


def pitcher(card_id: str, position: str, score: float = 70.0, hand: str = "R", **fields: Any) -> Card:
    payload: dict[str, Any] = {
        "id": card_id,
        "name": f"Pitcher {card_id}",
        "display_position": position,
        "meta_ovr": score,
        "throw_hand": hand,
    }
    payload.update(fields)
    return Card.model_validate(payload)


def full_pool() -> list[Card]:
    """Two hitters per field position, a DH, six starters and eleven relievers."""

    cards: list[Card] = []
    for idx, pos in enumerate(FIELD_POSITIONS):
        hand = "L" if idx % 2 else "R"
        cards.append(
            hitter(
                f"{pos.lower()}1",
                pos,
                80 + idx,
                bat_hand=hand,
                contact=70 + idx,
                power=60 + 3 * idx,
                speed=60 + 4 * idx,
                defense=75 + idx,
                vs_left=70 + idx,
                vs_right=72 + idx,
            )
        )
        cards.append(
            hitter(
                f"{pos.lower()}2",
                pos,
                60 + idx,
                bat_hand="R" if hand == "L" else "L",
                contact=55 + idx,
                power=50 + idx,
                speed=70 + 3 * idx,
                defense=80 + idx,
                vs_left=50 + 2 * idx,
                vs_right=65 - idx,
            )
        )
    cards.append(hitter("dh1", "DH", 85, bat_hand="S", contact=80, power=90, speed=40))

    for idx in range(6):
        cards.append(pitcher(f"sp{idx}", "SP", 90 - idx, hand="L" if idx == 2 else "R"))

    relievers = [
        ("rp0", 88, "R", {"k_per_bf": 90, "pitch_velocity": 95, "pitching_clutch": 80}),
        ("rp1", 86, "R", {"k_per_bf": 80, "pitch_velocity": 90, "pitching_clutch": 85}),
        ("rp2", 84, "L", {"k_per_bf": 85, "pitch_velocity": 92}),
        ("rp3", 82, "R", {"pitch_control": 95, "bb_per_bf": 20, "pitch_movement": 80}),
        ("rp4", 80, "L", {"pitch_control": 90, "bb_per_bf": 25, "pitch_movement": 75}),
        ("rp5", 78, "R", {"pitch_velocity": 97, "k_per_bf": 70}),
        ("rp6", 76, "L", {"pitch_control": 70}),
        ("rp7", 74, "R", {"pitches": [{"name": "Sinker", "speed": 94}, {"name": "Cutter", "speed": 93}]}),
        ("rp8", 72, "R", {"pitches": [{"name": "Knuckleball", "speed": 76}]}),
        ("rp9", 70, "R", {}),
        ("cp0", 87, "R", {"k_per_bf": 95, "pitching_clutch": 90}),
    ]
    for card_id, score, hand, extra in relievers:
        cards.append(pitcher(card_id, "CP" if card_id.startswith("cp") else "RP", score, hand=hand, **extra))
    return cards
