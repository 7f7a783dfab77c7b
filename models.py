# models.py — curtaincut ver1.0
# Data structures for the fabric catalog, curtain target, fold allowance and solutions.

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple


# ------------------------------
# Fabric catalog / inventory
# ------------------------------

# Standard roll widths in mm, widest first. The optimizer walks them in this order.
FABRIC_CATALOG: Tuple[int, ...] = (2100, 2000, 1900, 1500)

# fabric width (mm) -> available roll count
Inventory = Dict[int, int]


# ------------------------------
# Basic Specs
# ------------------------------

@dataclass(frozen=True)
class CurtainSpec:
    width_mm: float     # finished curtain width
    height_mm: float    # finished curtain height (drop)


@dataclass(frozen=True)
class FoldAllowance:
    """
    Hem allowance cut on top of the net panel width.

    Outer panels carry the wide edge hem on the curtain side and a seam hem
    toward their neighbour. Inner panels carry a seam hem on both sides.
    """
    outer_edge_mm: float = 140.0
    seam_mm: float = 40.0

    @property
    def outer_fold_mm(self) -> float:
        return self.outer_edge_mm + self.seam_mm

    @property
    def inner_fold_mm(self) -> float:
        return 2 * self.seam_mm


class NetWidthRule(Enum):
    # width is the finished width; hems are added on top and net must be whole mm
    GROSS = "gross"
    # width is already the sum of net widths; net is rounded to 0.1 mm
    NET = "net"


@dataclass(frozen=True)
class SearchLimits:
    """
    Bounds of the brute-force search.

    roll_length_mm: None = bound part counts by roll count only;
                    a length = bound by panels cuttable from the rolls,
                    capped by the two limits below
    slack:          part counts tried above ceil(width / fabric width)
    max_part_count: absolute ceiling on panels per curtain
    """
    slack: int = 5
    max_part_count: int = 30
    roll_length_mm: Optional[float] = None


# ------------------------------
# Result
# ------------------------------

@dataclass(frozen=True)
class Solution:
    fabric_width_mm: int
    part_count: int
    net_width_mm: float
    outer_panel_width_mm: float
    inner_panel_width_mm: float
    waste_mm: float
    rolls_needed: Optional[int] = None      # roll-length mode only
    panels_per_roll: Optional[int] = None   # roll-length mode only

    @property
    def inner_count(self) -> int:
        return self.part_count - 2

    @property
    def total_cut_width_mm(self) -> float:
        return 2 * self.outer_panel_width_mm + self.inner_count * self.inner_panel_width_mm

    @property
    def total_net_width_mm(self) -> float:
        return self.part_count * self.net_width_mm

    def panel_widths(self) -> List[float]:
        """Cut widths left→right."""
        widths = [self.outer_panel_width_mm]
        widths.extend([self.inner_panel_width_mm] * self.inner_count)
        widths.append(self.outer_panel_width_mm)
        return widths
