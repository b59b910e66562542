from teambuilder.optimizer.bench import select_bench
from teambuilder.pool import CardPool, Metric

from tests.helpers import full_pool, hitter


def test_bench_from_full_pool():
    pool = CardPool.from_cards(full_pool())
    starters = {card.base_id for card in pool.hitters if card.id.endswith("1")}

    bench = select_bench(pool, starters, Metric.META_OVR)

    assert bench.pinch_runner is not None and bench.pinch_runner.id == "rf2"
    assert bench.defensive_sub is not None and bench.defensive_sub.id == "cf2"
    assert bench.platoon_vs_left is not None and bench.platoon_vs_left.id == "lf2"
    assert bench.platoon_vs_right is not None and bench.platoon_vs_right.id == "c2"
    assert not starters & {card.base_id for card in bench.cards()}


def test_bench_roles_fall_back_to_infielders_and_metric():
    cards = [
        hitter("a", "1B", 60, speed=95),
        hitter("b", "C", 50, defense=90),
        hitter("c", "2B", 70),
    ]

    bench = select_bench(CardPool.from_cards(cards), set(), Metric.META_OVR)

    assert bench.pinch_runner.id == "a"
    assert bench.defensive_sub.id == "b"
    assert bench.platoon_vs_left.id == "c"
    assert bench.platoon_vs_right is None
    assert [card.id for card in bench.cards()] == ["a", "b", "c"]


def test_bench_skips_variants_of_starters():
    cards = [hitter("star|1", "CF", 90, speed=99), hitter("star|2", "LF", 90, speed=99), hitter("sub", "RF", 50)]

    bench = select_bench(CardPool.from_cards(cards), {"star"}, Metric.META_OVR)

    assert bench.pinch_runner.id == "sub"
    assert bench.cards() == [bench.pinch_runner]


def test_bench_never_repeats_a_player():
    cards = [hitter(f"h{idx}|{n}", "SS", 60 + idx) for idx in range(3) for n in range(2)]

    bench = select_bench(CardPool.from_cards(cards), set(), Metric.META_OVR)

    roots = [card.base_id for card in bench.cards()]
    assert len(roots) == 3
    assert len(set(roots)) == 3
