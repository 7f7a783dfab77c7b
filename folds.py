# folds.py — curtaincut ver1.0
#
# Hem rules per panel side. The two outer panels get the wide edge hem on the
# curtain side and a seam hem on the other; inner panels get seam hems on both.

import math
from typing import Tuple

from models import FoldAllowance


# ---------------------------------------
# Panel classification
# ---------------------------------------

def panel_kind(index: int, part_count: int) -> str:
    """
    Returns:
        'outer' → first or last panel
        'inner' → anything in between
    """
    if index == 0 or index == part_count - 1:
        return "outer"
    return "inner"


def panel_folds(index: int, part_count: int, allowance: FoldAllowance) -> Tuple[float, float]:
    """
    Returns (left_mm, right_mm) hem widths for panel `index`, counted left→right.
    The first panel has its edge hem on the left, the last one on the right.
    """
    if index < 0 or index >= part_count:
        raise IndexError(f"panel {index} out of range for {part_count} panels")

    edge = allowance.outer_edge_mm
    seam = allowance.seam_mm

    if index == 0:
        return edge, seam
    if index == part_count - 1:
        return seam, edge
    return seam, seam


# ---------------------------------------
# Global validation before optimizing
# ---------------------------------------

def validate_allowance(allowance: FoldAllowance) -> None:
    """
    Validates hem widths. If anything is off, raises ValueError listing
    all violations.
    """
    problems = []
    for name, value in (
        ("outer-edge-fold", allowance.outer_edge_mm),
        ("seam-fold", allowance.seam_mm),
    ):
        if not math.isfinite(value):
            problems.append(f"{name}: must be a finite number, got {value}")
        elif value < 0:
            problems.append(f"{name}: must not be negative, got {value}")

    if problems:
        msg = "Fold allowance is invalid:\n"
        msg += "\n".join(f"- {p}" for p in problems)
        raise ValueError(msg)
