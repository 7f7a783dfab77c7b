# optimizer.py — curtaincut ver1.0
#
# Brute-force layout search over (fabric width, panel count) pairs.
# Picks the feasible layout with the least fabric waste.

import logging
import math
from typing import Iterator, Optional

from models import (
    FABRIC_CATALOG, CurtainSpec, FoldAllowance, Inventory,
    NetWidthRule, SearchLimits, Solution
)

logger = logging.getLogger(__name__)

# A curtain is never cut as a single panel.
MIN_PART_COUNT = 2


# -------------------------------------------------------------
# Helpers
# -------------------------------------------------------------

def compute_net_width(
    curtain_width_mm: float,
    part_count: int,
    allowance: FoldAllowance,
    rule: NetWidthRule = NetWidthRule.GROSS
) -> Optional[float]:
    """
    Net (post-fold) width of each panel, or None if the rule rejects it.

    GROSS: net = (W + 2*outer_fold + (p-2)*inner_fold) / p, whole mm only
    NET:   net = W / p, rounded to 0.1 mm
    """
    if rule is NetWidthRule.NET:
        return round(curtain_width_mm / part_count, 1)

    total = (
        curtain_width_mm
        + 2 * allowance.outer_fold_mm
        + (part_count - 2) * allowance.inner_fold_mm
    )
    net = total / part_count
    if not float(net).is_integer():
        return None
    return net


def panels_per_roll(roll_length_mm: float, curtain_height_mm: float) -> int:
    """Full-height panels that can be cut from one roll."""
    if not (_positive_finite(roll_length_mm) and _positive_finite(curtain_height_mm)):
        return 0
    return int(math.floor(roll_length_mm / curtain_height_mm))


def part_count_upper_bound(
    spec: CurtainSpec,
    fabric_width_mm: int,
    available_rolls: int,
    limits: SearchLimits
) -> int:
    """
    Highest panel count tried for one fabric width (inclusive).
    Returns something below MIN_PART_COUNT when nothing can be tried.

    Without a roll length every panel takes its own roll, so the roll
    count is the only bound; slack and the ceiling apply to roll-length mode.
    """
    if limits.roll_length_mm is None:
        return available_rolls

    per_roll = panels_per_roll(limits.roll_length_mm, spec.height_mm)
    if per_roll == 0:
        return 0

    return min(
        available_rolls * per_roll,
        math.ceil(spec.width_mm / fabric_width_mm) + limits.slack,
        limits.max_part_count,
    )


def _positive_finite(value_mm) -> bool:
    try:
        return math.isfinite(value_mm) and value_mm > 0
    except TypeError:
        return False


# -------------------------------------------------------------
# Search
# -------------------------------------------------------------

def enumerate_candidates(
    spec: CurtainSpec,
    inventory: Inventory,
    catalog=FABRIC_CATALOG,
    allowance: FoldAllowance = FoldAllowance(),
    rule: NetWidthRule = NetWidthRule.GROSS,
    limits: SearchLimits = SearchLimits()
) -> Iterator[Solution]:
    """
    Yields every feasible layout in search order:
    fabric widths in catalog order, then panel counts ascending.
    """
    if not _positive_finite(spec.width_mm):
        return

    roll_aware = limits.roll_length_mm is not None

    for fabric_width in catalog:
        available = inventory.get(fabric_width, 0)
        if available <= 0:
            continue

        upper = part_count_upper_bound(spec, fabric_width, available, limits)
        per_roll = panels_per_roll(limits.roll_length_mm, spec.height_mm) if roll_aware else None

        for parts in range(MIN_PART_COUNT, upper + 1):
            net = compute_net_width(spec.width_mm, parts, allowance, rule)
            if net is None or net <= 0:
                continue

            outer = net + allowance.outer_fold_mm
            inner = net + allowance.inner_fold_mm

            # panels must be cuttable from the roll width
            if outer > fabric_width or inner > fabric_width:
                continue

            rolls_needed = None
            if roll_aware:
                rolls_needed = math.ceil(parts / per_roll)
                if rolls_needed > available:
                    continue

            waste = 2 * (fabric_width - outer) + (parts - 2) * (fabric_width - inner)
            if waste < 0:
                continue

            yield Solution(
                fabric_width_mm=fabric_width,
                part_count=parts,
                net_width_mm=net,
                outer_panel_width_mm=outer,
                inner_panel_width_mm=inner,
                waste_mm=waste,
                rolls_needed=rolls_needed,
                panels_per_roll=per_roll,
            )


def find_optimal_solution(
    spec: CurtainSpec,
    inventory: Inventory,
    catalog=FABRIC_CATALOG,
    allowance: FoldAllowance = FoldAllowance(),
    rule: NetWidthRule = NetWidthRule.GROSS,
    limits: SearchLimits = SearchLimits()
) -> Optional[Solution]:
    """
    Returns the layout with minimum total waste, or None if no
    (fabric width, panel count) pair is feasible. Ties keep the first found.
    """
    best: Optional[Solution] = None
    seen = 0

    for cand in enumerate_candidates(spec, inventory, catalog, allowance, rule, limits):
        seen += 1
        if best is None or cand.waste_mm < best.waste_mm:
            best = cand

    if best is None:
        logger.debug("no feasible layout for %s (rule=%s)", spec, rule.value)
    else:
        logger.debug(
            "picked %d x %dmm out of %d feasible layouts, waste %.1fmm",
            best.part_count, best.fabric_width_mm, seen, best.waste_mm
        )
    return best
