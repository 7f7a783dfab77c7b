# summary.py — curtaincut ver1.0
#
# Derived totals for a chosen layout and the label/value rows shown to the user.
# Unit conversion (mm → cm) happens here; pdf_export.py and main.py only print rows.

from dataclasses import dataclass
from typing import List, Optional, Tuple

from models import CurtainSpec, Solution


UNITS = ("mm", "cm")


# -------------------------------------------------------------
# Data structures
# -------------------------------------------------------------

@dataclass
class LayoutSummary:
    solution: Solution
    total_cut_width_mm: float = 0.0      # sum of cut widths across panels
    total_net_width_mm: float = 0.0      # sum of net widths across panels
    fabric_width_used_mm: float = 0.0    # part_count * roll width
    utilization_pct: float = 0.0         # net / fabric width used
    fabric_length_mm: float = 0.0        # part_count * curtain height
    rolls_used: Optional[int] = None


# -------------------------------------------------------------
# Helpers
# -------------------------------------------------------------

def format_length(value_mm: float, unit: str = "cm") -> str:
    """
    mm → "1234 mm" (whole mm shown without decimals) or "123.4 cm".
    """
    if unit == "mm":
        if float(value_mm).is_integer():
            return f"{int(value_mm)} mm"
        return f"{value_mm:.1f} mm"
    if unit == "cm":
        return f"{value_mm / 10:.1f} cm"
    raise ValueError(f"unknown display unit '{unit}', expected one of {', '.join(UNITS)}")


# -------------------------------------------------------------
# Main summary computation
# -------------------------------------------------------------

def compute_summary(solution: Solution, spec: CurtainSpec) -> LayoutSummary:

    s = LayoutSummary(solution=solution)

    s.total_cut_width_mm = solution.total_cut_width_mm
    s.total_net_width_mm = solution.total_net_width_mm
    s.fabric_width_used_mm = solution.part_count * solution.fabric_width_mm

    if s.fabric_width_used_mm > 0:
        s.utilization_pct = 100.0 * s.total_net_width_mm / s.fabric_width_used_mm

    # every panel runs the full curtain drop
    s.fabric_length_mm = solution.part_count * spec.height_mm

    # without roll lengths each panel is its own roll
    if solution.rolls_needed is not None:
        s.rolls_used = solution.rolls_needed
    else:
        s.rolls_used = solution.part_count

    return s


def format_results(solution: Solution, spec: CurtainSpec, unit: str = "cm") -> List[Tuple[str, str]]:
    """
    Label/value rows for the results table, in display order.
    Fabric width stays in mm since rolls are sold by mm width.
    """
    summary = compute_summary(solution, spec)

    rows = [
        ("Selected fabric width", f"{solution.fabric_width_mm} mm"),
        ("Number of panels", f"{solution.part_count}"),
        ("Net width per panel", format_length(solution.net_width_mm, unit)),
        ("Outer panel width", format_length(solution.outer_panel_width_mm, unit)),
        ("Inner panel width", format_length(solution.inner_panel_width_mm, unit)),
        ("Total fabric waste", format_length(solution.waste_mm, unit)),
        ("Fabric utilization", f"{summary.utilization_pct:.1f} %"),
    ]

    if solution.panels_per_roll is not None:
        rows.append(("Panels per roll", f"{solution.panels_per_roll}"))
    rows.append(("Rolls used", f"{summary.rolls_used}"))

    return rows
