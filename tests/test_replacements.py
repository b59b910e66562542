import logging
from dataclasses import replace

import pytest

from teambuilder.optimizer import (
    CLOSER_ROLE,
    BenchAssignment,
    BullpenSlot,
    LineupSlot,
    ReplacementError,
    RosterResult,
    RosterSlot,
    SlotKind,
    apply_replacement,
    backfill_bench,
    replacement_candidates,
)
from teambuilder.pool import Metric

from tests.helpers import FIELD_POSITIONS, hitter, pitcher


SS_INDEX = FIELD_POSITIONS.index("SS")
DH_INDEX = len(FIELD_POSITIONS)


def _roster() -> RosterResult:
    starters = {pos: hitter(f"{pos.lower()}1", pos, 80) for pos in FIELD_POSITIONS}
    dh = hitter("dh1", "DH", 85)
    lineup = tuple(
        LineupSlot(slot=idx + 1, position=pos, card=card)
        for idx, (pos, card) in enumerate(list(starters.items()) + [("DH", dh)])
    )
    bench = BenchAssignment(
        pinch_runner=hitter("pr", "LF", 50, speed=99),
        defensive_sub=hitter("ds", "SS", 50, defense=99),
        platoon_vs_left=hitter("pvl", "1B", 55, vs_left=95),
        platoon_vs_right=hitter("pvr", "C", 55, vs_right=95),
    )
    return RosterResult(
        metric=Metric.META_OVR,
        starters=starters,
        dh=dh,
        lineup=lineup,
        bench=bench,
        rotation=tuple(pitcher(f"sp{idx}", "SP", 80 - idx) for idx in range(5)),
        bullpen=(
            BullpenSlot(card=pitcher("rp0", "RP", 85), assignment="closer", role=CLOSER_ROLE),
            BullpenSlot(card=pitcher("rp1", "RP", 80), assignment="setup"),
        ),
        lineup_score=8 * 80 + 85,
    )


def _catalog(result: RosterResult) -> list:
    rostered = [slot.card for slot in result.lineup] + result.bench.cards() + list(result.rotation)
    rostered += [slot.card for slot in result.bullpen]
    extras = [
        hitter("ss9", "SS", 90),
        hitter("ss8", "SS", 75),
        hitter("c9", "C", 99),
        hitter("ss1|alt", "SS", 99),
        hitter("of_fast", "LF", 40, speed=90),
        hitter("if_fast", "2B", 45, speed=90),
        hitter("glove", "CF", 30, defense=90),
        pitcher("sp9", "SP", 88),
        pitcher("sp8", "SP", 70),
        pitcher("sp0|v2", "SP", 99),
        pitcher("rp9", "RP", 80),
        pitcher("cp9", "CP", 85),
        pitcher("rp0|x", "RP", 99),
    ]
    return rostered + extras


def _ids(cards) -> list:
    return [card.id for card in cards]


def test_lineup_candidates_match_position_and_allow_bench_players():
    result = _roster()

    candidates = replacement_candidates(result, _catalog(result), RosterSlot(SlotKind.LINEUP, SS_INDEX))

    assert _ids(candidates) == ["ss9", "ss8", "ds"]


def test_dh_candidates_take_any_unrostered_hitter():
    result = _roster()
    lineup_ids = {slot.card.base_id for slot in result.lineup}

    candidates = replacement_candidates(result, _catalog(result), RosterSlot(SlotKind.LINEUP, DH_INDEX))

    assert candidates[0].id == "c9"
    assert not any(card.is_pitcher for card in candidates)
    assert not lineup_ids & {card.base_id for card in candidates}
    assert "pvl" in _ids(candidates)


def test_bench_candidates_exclude_the_whole_roster_and_prefer_outfielders_on_ties():
    result = _roster()

    candidates = replacement_candidates(
        result, _catalog(result), RosterSlot(SlotKind.BENCH, bench_role="pinch_runner")
    )

    assert _ids(candidates[:2]) == ["of_fast", "if_fast"]
    assert not {"pr", "ds", "pvl", "pvr", "ss1|alt"} & set(_ids(candidates))


def test_platoon_candidates_rank_by_split():
    result = _roster()
    catalog = _catalog(result) + [hitter("lefty_killer", "RF", 20, vs_left=97)]

    candidates = replacement_candidates(
        result, catalog, RosterSlot(SlotKind.BENCH, bench_role="platoon_vs_left")
    )

    assert candidates[0].id == "lefty_killer"


def test_pitching_candidates_skip_rostered_players_and_their_variants():
    result = _roster()
    catalog = _catalog(result)

    rotation = replacement_candidates(result, catalog, RosterSlot(SlotKind.ROTATION, 0))
    bullpen = replacement_candidates(result, catalog, RosterSlot(SlotKind.BULLPEN, 0))

    assert _ids(rotation) == ["sp9", "sp8"]
    assert _ids(bullpen) == ["cp9", "rp9"]


def test_candidates_filter_by_name_and_respect_limit():
    result = _roster()
    catalog = _catalog(result)
    slot = RosterSlot(SlotKind.LINEUP, SS_INDEX)

    assert _ids(replacement_candidates(result, catalog, slot, query="  SS9 ")) == ["ss9"]
    assert _ids(replacement_candidates(result, catalog, slot, limit=1)) == ["ss9"]


@pytest.mark.parametrize(
    "slot",
    [
        RosterSlot(SlotKind.BENCH, bench_role="closer"),
        RosterSlot(SlotKind.LINEUP, 9),
        RosterSlot(SlotKind.ROTATION, 5),
        RosterSlot(SlotKind.BULLPEN, -1),
    ],
)
def test_unknown_slots_are_rejected(slot):
    result = _roster()

    with pytest.raises(ReplacementError):
        replacement_candidates(result, _catalog(result), slot)


def test_promoting_a_bench_player_backfills_the_role():
    result = _roster()
    catalog = _catalog(result)
    promoted = next(card for card in catalog if card.id == "ds")

    updated = apply_replacement(result, catalog, RosterSlot(SlotKind.LINEUP, SS_INDEX), promoted)

    assert updated.starters["SS"].id == "ds"
    assert updated.lineup[SS_INDEX].card.id == "ds"
    assert updated.lineup[SS_INDEX].slot == result.lineup[SS_INDEX].slot
    assert updated.bench.defensive_sub.id == "glove"
    assert updated.bench.pinch_runner.id == "pr"
    assert updated.lineup_score == pytest.approx(7 * 80 + 50 + 85)
    assert result.starters["SS"].id == "ss1"


def test_replacing_the_dh_updates_the_dh_only():
    result = _roster()
    catalog = _catalog(result)
    pick = next(card for card in catalog if card.id == "c9")

    updated = apply_replacement(result, catalog, RosterSlot(SlotKind.LINEUP, DH_INDEX), pick)

    assert updated.dh.id == "c9"
    assert updated.starters == result.starters
    assert updated.lineup_score == pytest.approx(8 * 80 + 99)


def test_replacing_the_closer_keeps_the_closer_tag():
    result = _roster()
    catalog = _catalog(result)
    pick = next(card for card in catalog if card.id == "cp9")

    updated = apply_replacement(result, catalog, RosterSlot(SlotKind.BULLPEN, 0), pick)

    assert updated.bullpen[0] == BullpenSlot(card=pick, assignment="closer", role=CLOSER_ROLE)
    assert updated.closer.id == "cp9"
    assert [slot.role for slot in updated.bullpen].count(CLOSER_ROLE) == 1


def test_rotation_and_bench_replacements():
    result = _roster()
    catalog = _catalog(result)
    by_id = {card.id: card for card in catalog}

    updated = apply_replacement(result, catalog, RosterSlot(SlotKind.ROTATION, 2), by_id["sp9"])
    updated = apply_replacement(
        updated, catalog, RosterSlot(SlotKind.BENCH, bench_role="pinch_runner"), by_id["of_fast"]
    )

    assert _ids(updated.rotation) == ["sp0", "sp1", "sp9", "sp3", "sp4"]
    assert updated.bench.pinch_runner.id == "of_fast"


@pytest.mark.parametrize(
    "slot, pick_id",
    [
        (RosterSlot(SlotKind.LINEUP, SS_INDEX), "c9"),
        (RosterSlot(SlotKind.LINEUP, SS_INDEX), "ss1|alt"),
        (RosterSlot(SlotKind.ROTATION, 0), "sp1"),
        (RosterSlot(SlotKind.BULLPEN, 1), "sp9"),
    ],
)
def test_ineligible_picks_are_rejected(slot, pick_id):
    result = _roster()
    catalog = _catalog(result)
    pick = next(card for card in catalog if card.id == pick_id)

    with pytest.raises(ReplacementError):
        apply_replacement(result, catalog, slot, pick)


def test_backfill_leaves_filled_roles_alone():
    result = _roster()

    assert backfill_bench(result, _catalog(result), "pinch_runner") is result


def test_backfill_without_hitters_logs_and_keeps_the_roster(caplog):
    result = _roster()
    emptied = replace(result, bench=BenchAssignment())
    pitchers_only = list(result.rotation)

    with caplog.at_level(logging.WARNING, logger="teambuilder.optimizer.replacements"):
        updated = backfill_bench(emptied, pitchers_only, "defensive_sub")

    assert updated is emptied
    assert "defensive_sub" in caplog.text
