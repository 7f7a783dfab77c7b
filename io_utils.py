# io_utils.py — curtaincut ver1.0
# Reading the inventory CSV, parsing config, validating numeric inputs.

import csv
import math
from typing import Dict, Sequence, Tuple

from models import (
    FABRIC_CATALOG, FoldAllowance, Inventory, NetWidthRule, SearchLimits
)
from summary import UNITS


# ------------------------------
# Config parser (strict one key per line)
# ------------------------------

def parse_properties(path: str) -> Dict[str, str]:
    """
    Conservative parser:
    - One key=value per line
    - Lines without '=' are ignored
    - '#' at start of line = comment
    """
    props: Dict[str, str] = {}
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            key, val = line.split("=", 1)
            props[key.strip()] = val.strip()
    return props


# ------------------------------
# Numeric boundary checks
# ------------------------------

def parse_dimension(value, name: str) -> float:
    """
    Strict positive finite number. Raises ValueError naming the field otherwise.
    """
    try:
        num = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number, got '{value}'")

    if not math.isfinite(num):
        raise ValueError(f"{name} must be finite, got '{value}'")
    if num <= 0:
        raise ValueError(f"{name} must be greater than zero, got '{value}'")
    return num


def _parse_count(value, name: str) -> int:
    try:
        num = int(str(value).strip())
    except ValueError:
        raise ValueError(f"{name} must be a whole number, got '{value}'")
    if num < 0:
        raise ValueError(f"{name} must not be negative, got '{value}'")
    return num


# ------------------------------
# Inventory CSV
# ------------------------------

def parse_inventory(path: str, catalog: Sequence[int] = FABRIC_CATALOG) -> Inventory:
    """
    CSV with columns: width, rolls
    Catalog widths missing from the file count as 0 rolls.
    """
    inventory: Inventory = {w: 0 for w in catalog}
    seen = set()

    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        fields = set(reader.fieldnames or [])
        if "width" not in fields:
            raise ValueError("inventory.csv missing 'width' column")
        if "rolls" not in fields:
            raise ValueError("inventory.csv missing 'rolls' column")

        for line_no, row in enumerate(reader, start=2):
            raw_width = (row["width"] or "").strip()
            raw_rolls = (row["rolls"] or "").strip()
            if not raw_width:
                if raw_rolls:
                    raise ValueError(f"inventory.csv line {line_no}: rolls given without a width")
                continue

            width = _parse_count(raw_width, "width")
            if width not in inventory:
                raise ValueError(
                    f"fabric width {width} mm is not a standard roll width "
                    f"({', '.join(str(w) for w in catalog)})"
                )
            if width in seen:
                raise ValueError(f"fabric width {width} mm listed more than once")
            seen.add(width)

            inventory[width] = _parse_count(raw_rolls or "0", f"rolls for {width} mm")

    return inventory


# ------------------------------
# Settings from config.properties
# ------------------------------

def load_settings(cfg: Dict[str, str]) -> Tuple[FoldAllowance, NetWidthRule, SearchLimits]:
    """
    Builds optimizer settings from properties. Missing keys use defaults.
    """
    defaults = FoldAllowance()
    try:
        allowance = FoldAllowance(
            outer_edge_mm=float(cfg.get("outer-edge-fold", defaults.outer_edge_mm)),
            seam_mm=float(cfg.get("seam-fold", defaults.seam_mm)),
        )
    except ValueError:
        raise ValueError("outer-edge-fold and seam-fold must be numbers")

    rule_name = (cfg.get("net-width-rule", "gross") or "gross").strip().lower()
    try:
        rule = NetWidthRule(rule_name)
    except ValueError:
        raise ValueError(f"net-width-rule must be 'gross' or 'net', got '{rule_name}'")

    # 0 / empty = no roll length, part counts bounded by roll count only
    roll_length = None
    raw_roll = cfg.get("roll-length", "0").strip() or "0"
    try:
        roll_is_zero = float(raw_roll) == 0
    except ValueError:
        raise ValueError(f"roll-length must be a number, got '{raw_roll}'")
    if not roll_is_zero:
        roll_length = parse_dimension(raw_roll, "roll-length")

    limit_defaults = SearchLimits()
    limits = SearchLimits(
        slack=_parse_count(cfg.get("search-slack", limit_defaults.slack), "search-slack"),
        max_part_count=_parse_count(
            cfg.get("max-part-count", limit_defaults.max_part_count), "max-part-count"
        ),
        roll_length_mm=roll_length,
    )

    return allowance, rule, limits


def load_display_settings(cfg: Dict[str, str]) -> Tuple[str, int]:
    """
    Returns (display unit, number of runner-up layouts to list).
    Checked together with the optimizer settings, before any search runs.
    """
    unit = (cfg.get("display-unit", "cm") or "cm").strip().lower()
    if unit not in UNITS:
        raise ValueError(
            f"display-unit must be one of {', '.join(UNITS)}, got '{cfg.get('display-unit')}'"
        )

    alternatives = _parse_count(cfg.get("alternatives", "0") or "0", "alternatives")
    return unit, alternatives
