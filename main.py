# curtaincut ver1.0 — main entry
# - Inventory from CSV, fold/search settings from config.properties
# - Clean error reporting (no traceback)
# - PDF always written when a layout is found, SVG on request

import argparse
import logging
import sys

from io_utils import (
    parse_inventory, parse_properties, parse_dimension, load_settings, load_display_settings
)
from folds import validate_allowance
from models import FABRIC_CATALOG, CurtainSpec
from optimizer import enumerate_candidates, find_optimal_solution
from summary import format_length, format_results
from pdf_export import build_diagram, export_svg, generate_pdf, pdf_filename

logger = logging.getLogger("curtaincut")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="curtaincut 1.0: curtain panel cutting layout")
    parser.add_argument("inventory_csv", help="inventory.csv input (width,rolls)")
    parser.add_argument("config_properties", help="config.properties input")
    parser.add_argument("--width", required=True, help="finished curtain width in mm")
    parser.add_argument("--height", required=True, help="finished curtain height in mm")
    parser.add_argument("--curtain-name", default="", help="curtain name shown on the page")
    parser.add_argument("--project-name", default="", help="project name shown on the page")
    parser.add_argument("--output", help="output PDF path (default: generated from names)")
    parser.add_argument("--svg", help="also write the diagram as SVG")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def run(args) -> int:
    # --- LOAD INPUT FILES ---
    cfg = parse_properties(args.config_properties)
    inventory = parse_inventory(args.inventory_csv, FABRIC_CATALOG)

    spec = CurtainSpec(
        width_mm=parse_dimension(args.width, "width"),
        height_mm=parse_dimension(args.height, "height"),
    )

    # --- CONFIG ---
    allowance, rule, limits = load_settings(cfg)
    validate_allowance(allowance)
    unit, alternatives = load_display_settings(cfg)

    logger.debug("inventory: %s", inventory)
    logger.debug("allowance: %s, rule: %s, limits: %s", allowance, rule.value, limits)

    # --- PRECONDITIONS ---
    if sum(inventory.values()) == 0:
        print("\n[ERROR] No fabric inventory. Add rolls to the inventory file.\n")
        return 1

    # --- OPTIMIZE ---
    solution = find_optimal_solution(spec, inventory, FABRIC_CATALOG, allowance, rule, limits)
    if solution is None:
        print("\n[ERROR] No valid solution found. Please check your inventory and curtain dimensions.\n")
        return 1

    # --- RESULTS ---
    for label, value in format_results(solution, spec, unit):
        print(f"{label + ':':<24}{value}")

    if alternatives > 0:
        ranked = sorted(
            enumerate_candidates(spec, inventory, FABRIC_CATALOG, allowance, rule, limits),
            key=lambda s: s.waste_mm
        )
        print("\nAlternatives:")
        for alt in ranked[1:alternatives + 1]:
            print(f"  {alt.part_count} x {alt.fabric_width_mm} mm, "
                  f"net {format_length(alt.net_width_mm, unit)}, "
                  f"waste {format_length(alt.waste_mm, unit)}")

    # --- OUTPUT ---
    output_pdf = args.output or pdf_filename(args.project_name, args.curtain_name)
    generate_pdf(
        output_path=output_pdf,
        solution=solution,
        spec=spec,
        allowance=allowance,
        cfg=cfg,
        curtain_name=args.curtain_name,
        project_name=args.project_name,
        unit=unit
    )

    if args.svg:
        drawing = build_diagram(solution, spec, allowance, width_pt=800, max_height_pt=400, unit=unit)
        export_svg(drawing, args.svg)

    print(f"\nSuccess! PDF saved to {output_pdf}")
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        return run(args)
    except ValueError as ve:
        print("\n[ERROR] " + str(ve).strip() + "\n")
        return 1
    except OSError as oe:
        print(f"\n[ERROR] {oe}\n")
        return 1


if __name__ == "__main__":
    sys.exit(main())
