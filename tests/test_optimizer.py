import math

import pytest

from models import CurtainSpec, FoldAllowance, NetWidthRule, SearchLimits, Solution
from optimizer import (
    MIN_PART_COUNT, compute_net_width, enumerate_candidates,
    find_optimal_solution, panels_per_roll, part_count_upper_bound
)


def _inv(**counts):
    # _inv(w1900=4) -> {1900: 4}
    inv = {2100: 0, 2000: 0, 1900: 0, 1500: 0}
    for key, val in counts.items():
        inv[int(key[1:])] = val
    return inv


def test_picks_minimum_waste_across_widths():
    spec = CurtainSpec(width_mm=3000, height_mm=2500)
    sol = find_optimal_solution(spec, _inv(w2100=4, w1900=4, w1500=4))

    # 2 panels of net 1680: outer cut 1860, 40 mm left over on each 1900 roll
    assert sol == Solution(
        fabric_width_mm=1900,
        part_count=2,
        net_width_mm=1680,
        outer_panel_width_mm=1860,
        inner_panel_width_mm=1760,
        waste_mm=80,
    )


def test_gross_rule_rejects_fractional_net_width():
    allowance = FoldAllowance()
    assert compute_net_width(3000, 3, allowance) is None      # 3440 / 3
    assert compute_net_width(3000, 4, allowance) == 880       # 3520 / 4
    assert compute_net_width(5989, 3, allowance) == 2143      # 6429 / 3


def test_net_rule_rounds_to_tenth_of_mm():
    assert compute_net_width(1000, 3, FoldAllowance(), NetWidthRule.NET) == 333.3


def test_part_count_equal_to_available_rolls_is_searched():
    spec = CurtainSpec(width_mm=3000, height_mm=2500)

    sol = find_optimal_solution(spec, _inv(w1500=4))
    assert sol is not None
    assert sol.part_count == 4
    assert sol.waste_mm == 2 * (1500 - 1060) + 2 * (1500 - 960)

    assert find_optimal_solution(spec, _inv(w1500=3)) is None


def test_ties_keep_first_found_in_catalog_order():
    spec = CurtainSpec(width_mm=3200, height_mm=2500)
    bare = FoldAllowance(outer_edge_mm=0, seam_mm=0)
    inventory = {2000: 2, 1000: 4}

    # 2 x 2000 and 4 x 1000 both waste 800 mm
    first = find_optimal_solution(spec, inventory, (2000, 1000), bare)
    assert (first.fabric_width_mm, first.part_count, first.waste_mm) == (2000, 2, 800)

    swapped = find_optimal_solution(spec, inventory, (1000, 2000), bare)
    assert (swapped.fabric_width_mm, swapped.part_count, swapped.waste_mm) == (1000, 4, 800)


def test_infeasible_large_folds_return_none():
    spec = CurtainSpec(width_mm=59890, height_mm=2500)
    heavy = FoldAllowance(outer_edge_mm=1400, seam_mm=400)
    assert heavy.outer_fold_mm == 1800 and heavy.inner_fold_mm == 800

    for rule in NetWidthRule:
        assert find_optimal_solution(spec, _inv(w1900=4), allowance=heavy, rule=rule) is None


def test_no_layout_for_width_5989_with_four_1900_rolls():
    spec = CurtainSpec(width_mm=5989, height_mm=2500)
    assert list(enumerate_candidates(spec, _inv(w1900=4))) == []
    assert find_optimal_solution(spec, _inv(w1900=4)) is None


def test_net_rule_search():
    spec = CurtainSpec(width_mm=3000, height_mm=2500)
    sol = find_optimal_solution(spec, _inv(w2100=3), rule=NetWidthRule.NET)
    assert sol.part_count == 2
    assert sol.net_width_mm == 1500.0
    assert sol.outer_panel_width_mm == 1680.0
    assert sol.waste_mm == 840.0


@pytest.mark.parametrize("width", [0, -100, float("nan"), float("inf")])
def test_unusable_width_returns_none(width):
    spec = CurtainSpec(width_mm=width, height_mm=2500)
    assert find_optimal_solution(spec, _inv(w2100=10, w1500=10)) is None


def test_empty_inventory_returns_none():
    spec = CurtainSpec(width_mm=3000, height_mm=2500)
    assert find_optimal_solution(spec, _inv()) is None
    assert find_optimal_solution(spec, {}) is None


def test_negative_counts_are_skipped():
    spec = CurtainSpec(width_mm=3000, height_mm=2500)
    assert find_optimal_solution(spec, {1900: -3}) is None


# ------------------------------
# Search bounds
# ------------------------------

def test_simple_bound_is_roll_count():
    spec = CurtainSpec(width_mm=3000, height_mm=2500)
    limits = SearchLimits()
    assert part_count_upper_bound(spec, 1900, 4, limits) == 4
    assert part_count_upper_bound(spec, 1900, 50, limits) == 50
    assert part_count_upper_bound(spec, 1900, 50, SearchLimits(max_part_count=12)) == 50


def test_simple_mode_searches_past_thirty_panels():
    spec = CurtainSpec(width_mm=37620, height_mm=2500)

    # net = 37820 / p + 80 fits a 1500 roll (outer <= 1500) only from p = 31
    sol = find_optimal_solution(spec, _inv(w1500=40))
    assert sol is not None
    assert sol.part_count == 31
    assert sol.net_width_mm == 1300
    assert sol.outer_panel_width_mm == 1480
    assert sol.waste_mm == 2 * (1500 - 1480) + 29 * (1500 - 1380)

    assert find_optimal_solution(spec, _inv(w1500=30)) is None


def test_roll_length_bound():
    spec = CurtainSpec(width_mm=3000, height_mm=2500)
    limits = SearchLimits(roll_length_mm=5000)

    assert panels_per_roll(5000, 2500) == 2
    assert panels_per_roll(5000, 3000) == 1
    assert panels_per_roll(5000, 6000) == 0

    # 2 rolls x 2 panels, below ceil(3000/1500)+5 = 7
    assert part_count_upper_bound(spec, 1500, 2, limits) == 4
    # 10 rolls x 2 panels = 20, capped by ceil(3000/2100)+5 = 7
    assert part_count_upper_bound(spec, 2100, 10, limits) == 7

    too_tall = CurtainSpec(width_mm=3000, height_mm=6000)
    assert part_count_upper_bound(too_tall, 1500, 10, limits) < MIN_PART_COUNT


def test_roll_length_mode_cuts_several_panels_per_roll():
    spec = CurtainSpec(width_mm=3000, height_mm=2500)
    limits = SearchLimits(roll_length_mm=5000)

    sol = find_optimal_solution(spec, _inv(w1500=2), limits=limits)
    assert sol.part_count == 4
    assert sol.panels_per_roll == 2
    assert sol.rolls_needed == 2

    # without roll lengths two rolls give at most two panels
    assert find_optimal_solution(spec, _inv(w1500=2)) is None


def test_roll_length_mode_one_panel_per_roll():
    spec = CurtainSpec(width_mm=3000, height_mm=3000)
    limits = SearchLimits(roll_length_mm=5000)
    # one panel per roll and only two rolls: p=2 never fits 1500
    assert find_optimal_solution(spec, _inv(w1500=2), limits=limits) is None


# ------------------------------
# Properties over a range of inputs
# ------------------------------

@pytest.mark.parametrize("width", range(2000, 9001, 137))
def test_solution_invariants_and_optimality(width):
    spec = CurtainSpec(width_mm=width, height_mm=2600)
    allowance = FoldAllowance()
    inventory = _inv(w2100=6, w2000=5, w1900=7, w1500=8)

    sol = find_optimal_solution(spec, inventory, allowance=allowance)
    candidates = list(enumerate_candidates(spec, inventory, allowance=allowance))

    if not candidates:
        assert sol is None
        return

    assert sol.part_count >= 2
    assert sol.outer_panel_width_mm == sol.net_width_mm + allowance.outer_fold_mm
    assert sol.inner_panel_width_mm == sol.net_width_mm + allowance.inner_fold_mm
    assert sol.outer_panel_width_mm <= sol.fabric_width_mm
    assert sol.inner_panel_width_mm <= sol.fabric_width_mm
    assert sol.waste_mm >= 0
    assert all(sol.waste_mm <= c.waste_mm for c in candidates)
    assert sol.part_count <= inventory[sol.fabric_width_mm]

    # gross rule: cut widths add up to the target plus all hems
    hems = 2 * allowance.outer_fold_mm + sol.inner_count * allowance.inner_fold_mm
    assert math.isclose(sol.total_cut_width_mm, width + 2 * hems)


def test_repeat_calls_are_identical():
    spec = CurtainSpec(width_mm=4120, height_mm=2500)
    inventory = _inv(w2100=6, w2000=5, w1900=7, w1500=8)
    first = find_optimal_solution(spec, inventory)
    second = find_optimal_solution(spec, inventory)
    assert first is not None
    assert first == second
    assert inventory == _inv(w2100=6, w2000=5, w1900=7, w1500=8)
