from dataclasses import replace

import pytest

from teambuilder.config import DEFAULT_RULES
from teambuilder.optimizer.pitching import CLOSER_ROLE, select_bullpen, select_rotation, velocity_score
from teambuilder.pool import CardPool, Metric

from tests.helpers import full_pool, pitcher


def _lefties(bullpen):
    return [slot for slot in bullpen if slot.card.throw_hand == "L"]


def test_rotation_takes_top_five_starters():
    pool = CardPool.from_cards(full_pool())

    rotation = select_rotation(pool, Metric.META_OVR)

    assert [card.id for card in rotation] == ["sp0", "sp1", "sp2", "sp3", "sp4"]


def test_rotation_uses_each_player_once():
    cards = [pitcher("ace|1", "SP", 95), pitcher("ace|2", "SP", 94), pitcher("two", "SP", 80)]

    rotation = select_rotation(CardPool.from_cards(cards), Metric.META_OVR)

    assert [card.id for card in rotation] == ["ace|1", "two"]


def test_bullpen_from_full_pool():
    pool = CardPool.from_cards(full_pool())

    bullpen = select_bullpen(pool, Metric.META_OVR)

    assert len(bullpen) == 8
    closers = [slot for slot in bullpen if slot.role == CLOSER_ROLE]
    assert len(closers) == 1
    assert bullpen[0].assignment == "closer"
    assert len(_lefties(bullpen)) >= 2
    assert len({slot.card.base_id for slot in bullpen}) == 8
    junk = next(slot for slot in bullpen if slot.assignment == "junk")
    assert junk.card.id == "rp8"


def test_bullpen_is_deterministic():
    pool = CardPool.from_cards(full_pool())

    first = select_bullpen(pool, Metric.TRUE_OVR)
    second = select_bullpen(pool, Metric.TRUE_OVR)

    assert [(s.card.id, s.assignment) for s in first] == [(s.card.id, s.assignment) for s in second]


def test_bullpen_skips_excluded_players():
    pool = CardPool.from_cards(full_pool())

    bullpen = select_bullpen(pool, Metric.META_OVR, exclude_ids={"rp0", "cp0"})

    assert not {"rp0", "cp0"} & {slot.card.id for slot in bullpen}


def test_two_pitcher_pool_fills_what_it_can(caplog):
    pool = CardPool.from_cards([pitcher("lone_sp", "SP", 80), pitcher("lone_rp", "RP", 75)])

    with caplog.at_level("WARNING"):
        rotation = select_rotation(pool, Metric.META_OVR)
        bullpen = select_bullpen(pool, Metric.META_OVR, exclude_ids={c.base_id for c in rotation})

    assert [card.id for card in rotation] == ["lone_sp"]
    assert len(bullpen) == 1
    assert bullpen[0].card.id == "lone_rp"
    assert bullpen[0].role == CLOSER_ROLE
    assert "left-handed" in caplog.text


def test_empty_bullpen():
    assert select_bullpen(CardPool.from_cards([]), Metric.META_OVR) == ()


def test_weak_lefties_are_swapped_in():
    rules = replace(DEFAULT_RULES, bullpen_pool_size=10)
    cards = [pitcher(f"r{idx}", "RP", 90 - idx) for idx in range(10)]
    cards += [pitcher("l0", "RP", 50, hand="L"), pitcher("l1", "RP", 49, hand="L")]

    bullpen = select_bullpen(CardPool.from_cards(cards, rules), Metric.META_OVR)

    assert len(bullpen) == 8
    assert {slot.card.id for slot in _lefties(bullpen)} == {"l0", "l1"}
    assert all(slot.assignment == "lhp_depth" for slot in _lefties(bullpen))
    assert bullpen[0].card.id == "r0"
    assert bullpen[0].role == CLOSER_ROLE
    assert [slot.card.id for slot in bullpen if slot.assignment == "depth"] == ["r4", "r5"]


def test_short_bullpen_adds_lefties_without_dropping_the_closer():
    rules = replace(DEFAULT_RULES, bullpen_pool_size=2)
    cards = [pitcher("r0", "RP", 90), pitcher("l0", "RP", 50, hand="L"), pitcher("l1", "RP", 40, hand="L")]

    bullpen = select_bullpen(CardPool.from_cards(cards, rules), Metric.META_OVR)

    assert [(slot.card.id, slot.role) for slot in bullpen] == [("r0", CLOSER_ROLE), ("l0", None), ("l1", None)]
    assert bullpen[2].assignment == "lhp_depth"


def test_junk_slot_falls_back_to_best_remaining():
    rules = replace(DEFAULT_RULES, min_left_relievers=0)
    cards = [pitcher(f"r{idx}", "RP", 90 - idx) for idx in range(10)]

    bullpen = select_bullpen(CardPool.from_cards(cards, rules), Metric.META_OVR)

    assignments = {slot.assignment: slot.card.id for slot in bullpen}
    assert assignments["junk"] == "r5"
    assert [slot.card.id for slot in bullpen] == [f"r{idx}" for idx in range(8)]


def test_velocity_blends_fastball_and_rating():
    card = pitcher("v", "RP", pitch_velocity=80, pitches=[{"name": "4-Seam Fastball", "speed": 100}])

    assert velocity_score(card) == pytest.approx(92.0)
