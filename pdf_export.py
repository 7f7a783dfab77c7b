# pdf_export.py — curtaincut ver1.0
#
# This file handles all diagram and PDF output:
# - Vector panel diagram (reportlab.graphics Drawing): panels, fold lines,
#   net/cut width labels, total width and height indicators
# - SVG export of the same drawing
# - Single PDF page: header, diagram, results table
# - Lucida Sans Unicode font with Helvetica fallback
# - Output file naming

from reportlab.pdfgen import canvas
from reportlab.lib.pagesizes import A4, portrait, landscape
from reportlab.lib.colors import Color, black
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.graphics import renderPDF, renderSVG
from reportlab.graphics.shapes import Drawing, Line, Rect, String

from typing import Dict, List, Optional, Tuple

from models import CurtainSpec, FoldAllowance, Solution
from folds import panel_folds, panel_kind
from summary import format_length, format_results

import logging
import os
import re

logger = logging.getLogger(__name__)


# ------------------------------------------------------------
# mm → pt
# ------------------------------------------------------------
def mm_to_pt(mm: float) -> float:
    return mm * 72.0 / 25.4


# ------------------------------------------------------------
# Parse hex RGB like "F00", "FF0000"
# ------------------------------------------------------------
def parse_rgb(hex_str: str) -> Color:
    s = hex_str.strip().lstrip("#")
    if len(s) == 3:
        s = "".join(ch * 2 for ch in s)
    if len(s) != 6:
        return black
    try:
        r = int(s[0:2], 16) / 255
        g = int(s[2:4], 16) / 255
        b = int(s[4:6], 16) / 255
    except ValueError:
        return black
    return Color(r, g, b)


# ------------------------------------------------------------
# FONT LOADING (Lucida Sans Unicode)
# ------------------------------------------------------------
# Curtain and project names may carry accents, so we try Lucida Sans Unicode.
# If unavailable on the system, we fall back to Helvetica.

LUCIDA_NAME = "LucidaSansUnicode_1_0"


def register_fonts() -> str:
    """
    Try to register Lucida Sans Unicode. Returns the font name to use.
    """
    global LUCIDA_NAME

    possible = [
        "/usr/share/fonts/truetype/lucida/LucidaSansUnicode.ttf",
        "/usr/share/fonts/truetype/LucidaSansUnicode.ttf",
        "/Library/Fonts/LucidaSansUnicode.ttf",
        "C:/Windows/Fonts/l_10646.ttf",
        "C:/Windows/Fonts/LSANS.TTF",
    ]

    lucida_path = None
    for p in possible:
        if os.path.isfile(p):
            lucida_path = p
            break

    if lucida_path:
        try:
            pdfmetrics.registerFont(TTFont(LUCIDA_NAME, lucida_path))
            return LUCIDA_NAME
        except Exception as exc:  # TTFError and friends on broken font files
            logger.warning("could not load %s (%s), using Helvetica", lucida_path, exc)

    LUCIDA_NAME = "Helvetica"
    return LUCIDA_NAME


# ------------------------------------------------------------
# Diagram colours
# ------------------------------------------------------------

def diagram_colors(cfg: Dict[str, str]) -> Dict[str, Color]:
    return {
        "panel": parse_rgb(cfg.get("panel-color", "000")),
        "fold": parse_rgb(cfg.get("fold-color", "F60")),
        "text": parse_rgb(cfg.get("text-color", "000")),
    }


# ------------------------------------------------------------
# PANEL DIAGRAM
# ------------------------------------------------------------

PAD_LEFT_PT = 48.0      # room for the height indicator
PAD_TOP_PT = 40.0       # total width line + panel kind labels
PAD_BOTTOM_PT = 24.0    # cut width labels
PANEL_GAP_PT = 6.0
MIN_PANEL_H_PT = 120.0


def _label(x: float, y: float, text: str, color: Color, font: str,
           size: float = 7, anchor: str = "middle") -> String:
    return String(x, y, text, fontName=font, fontSize=size,
                  fillColor=color, textAnchor=anchor)


def build_diagram(
    solution: Solution,
    spec: CurtainSpec,
    allowance: FoldAllowance,
    width_pt: float,
    max_height_pt: float,
    colors: Optional[Dict[str, Color]] = None,
    unit: str = "cm",
    font: str = "Helvetica"
) -> Drawing:
    """
    Draws:
      - one rectangle per panel, left→right, with its kind above it
      - dashed fold lines at every hem, labelled with the hem width
      - net width label inside, cut width label under each panel
      - total width dimension line above all panels
      - height indicator on the left
    Coordinates: reportlab graphics, origin bottom-left.
    """
    if colors is None:
        colors = diagram_colors({})
    panel_c, fold_c, text_c = colors["panel"], colors["fold"], colors["text"]

    widths = solution.panel_widths()
    n = len(widths)

    usable_w = width_pt - PAD_LEFT_PT - PANEL_GAP_PT * (n - 1)
    scale = usable_w / sum(widths)

    usable_h = max_height_pt - PAD_TOP_PT - PAD_BOTTOM_PT
    panel_h = min(max(spec.height_mm * scale, MIN_PANEL_H_PT), max(usable_h, MIN_PANEL_H_PT))

    d = Drawing(width_pt, PAD_BOTTOM_PT + panel_h + PAD_TOP_PT)
    y0 = PAD_BOTTOM_PT
    y_top = y0 + panel_h

    x = PAD_LEFT_PT
    for idx, w_mm in enumerate(widths):
        w = w_mm * scale
        left_mm, right_mm = panel_folds(idx, n, allowance)

        # panel outline
        d.add(Rect(x, y0, w, panel_h, strokeColor=panel_c, fillColor=None, strokeWidth=1))

        # fold lines
        for fold_x, fold_mm, anchor in (
            (x + left_mm * scale, left_mm, "start"),
            (x + w - right_mm * scale, right_mm, "end"),
        ):
            d.add(Line(fold_x, y0, fold_x, y_top, strokeColor=fold_c,
                       strokeWidth=0.8, strokeDashArray=[3, 2]))
            label_x = x + 1.5 if anchor == "start" else x + w - 1.5
            d.add(_label(label_x, y_top - 9, format_length(fold_mm, unit), fold_c, font,
                         size=5, anchor=anchor))

        cx = x + w / 2
        kind = "Outer" if panel_kind(idx, n) == "outer" else "Inner"
        d.add(_label(cx, y_top + 4, kind, text_c, font))
        d.add(_label(cx, y0 + panel_h / 2, format_length(solution.net_width_mm, unit),
                     text_c, font, size=6))
        d.add(_label(cx, y0 + panel_h / 2 - 8, "(net)", text_c, font, size=5))
        d.add(_label(cx, y0 - 10, format_length(w_mm, unit), text_c, font, size=6))

        x += w + PANEL_GAP_PT

    # total width dimension line
    x_end = x - PANEL_GAP_PT
    y_dim = y_top + 20
    d.add(Line(PAD_LEFT_PT, y_dim, x_end, y_dim, strokeColor=text_c, strokeWidth=0.8))
    d.add(Line(PAD_LEFT_PT, y_dim - 3, PAD_LEFT_PT, y_dim + 3, strokeColor=text_c))
    d.add(Line(x_end, y_dim - 3, x_end, y_dim + 3, strokeColor=text_c))
    d.add(_label((PAD_LEFT_PT + x_end) / 2, y_dim + 4,
                 f"Total width: {format_length(spec.width_mm, unit)}", text_c, font, size=8))

    # height indicator
    x_h = PAD_LEFT_PT - 12
    d.add(Line(x_h, y0, x_h, y_top, strokeColor=text_c, strokeWidth=1.5))
    d.add(_label(x_h - 3, y0 + panel_h / 2, format_length(spec.height_mm, unit),
                 text_c, font, size=6, anchor="end"))

    return d


def export_svg(drawing: Drawing, path: str) -> None:
    renderSVG.drawToFile(drawing, path)
    logger.info("SVG diagram written to %s", path)


# ------------------------------------------------------------
# TABLE DRAWING ENGINE
# ------------------------------------------------------------

def draw_table(
    c: canvas.Canvas,
    x0_pt: float, y0_pt: float,
    col_widths: List[float],
    row_height_pt: float,
    data: List[Tuple[str, str]],
    font_size: float = 10,
    numeric_cols: List[int] = None
):
    """
    Draws a grid table. (0,0) cell is top-left.
    x0_pt, y0_pt = top-left corner of table.
    Numeric columns are right aligned.
    """
    if numeric_cols is None:
        numeric_cols = []

    for r, row in enumerate(data):
        y_top = y0_pt - r * row_height_pt

        for c_idx, w in enumerate(col_widths):
            x_left = x0_pt + sum(col_widths[:c_idx])

            c.setStrokeColor(black)
            c.setLineWidth(1)
            c.rect(x_left, y_top - row_height_pt, w, row_height_pt, stroke=1, fill=0)

            text = row[c_idx] or ""
            c.setFillColor(black)
            c.setFont(LUCIDA_NAME, font_size)
            ty = y_top - row_height_pt + (row_height_pt * 0.33)

            if c_idx in numeric_cols:
                tw = pdfmetrics.stringWidth(text, LUCIDA_NAME, font_size)
                c.drawString(x_left + w - tw - 3, ty, text)
            else:
                c.drawString(x_left + 3, ty, text)


# ------------------------------------------------------------
# FILE NAMING
# ------------------------------------------------------------

def _slug(text: str) -> str:
    text = re.sub(r"[^\w\-]+", "_", (text or "").strip(), flags=re.UNICODE)
    return text.strip("_")


def pdf_filename(project_name: str = "", curtain_name: str = "") -> str:
    """
    curtain_<project>_<curtain>.pdf, empty parts dropped.
    """
    parts = ["curtain"] + [p for p in (_slug(project_name), _slug(curtain_name)) if p]
    return "_".join(parts) + ".pdf"


# ------------------------------------------------------------
# FINAL PDF GENERATOR
# ------------------------------------------------------------

def generate_pdf(
    output_path: str,
    solution: Solution,
    spec: CurtainSpec,
    allowance: FoldAllowance,
    cfg: Dict[str, str],
    curtain_name: str = "",
    project_name: str = "",
    unit: str = "cm"
):
    """
    Generates a one-page PDF:
      - header with project / curtain names and target size
      - panel diagram
      - results table
    """
    font = register_fonts()
    colors = diagram_colors(cfg)
    margin_mm = float(cfg.get("margin", "10"))

    orientation = (cfg.get("orientation", "h") or "h").lower()
    if orientation == "h":
        pagesize = landscape(A4)
    else:
        pagesize = portrait(A4)

    page_w_pt, page_h_pt = pagesize
    margin_pt = mm_to_pt(margin_mm)
    usable_w = page_w_pt - 2 * margin_pt

    c = canvas.Canvas(output_path, pagesize=pagesize)
    c.setTitle(pdf_filename(project_name, curtain_name)[:-4])

    # HEADER
    y = page_h_pt - margin_pt - 14
    c.setFillColor(black)
    c.setFont(font, 14)
    title = " / ".join(p for p in (project_name, curtain_name) if p) or "Curtain cutting layout"
    c.drawString(margin_pt, y, title)

    y -= 16
    c.setFont(font, 9)
    c.drawString(
        margin_pt, y,
        f"Target: {format_length(spec.width_mm, unit)} x {format_length(spec.height_mm, unit)}, "
        f"folds: edge {format_length(allowance.outer_edge_mm, unit)}, "
        f"seam {format_length(allowance.seam_mm, unit)}"
    )
    y -= mm_to_pt(6)

    # RESULTS TABLE (bottom of page, fixed size)
    rows = format_results(solution, spec, unit)
    row_h = mm_to_pt(6)
    table_h = row_h * len(rows)
    table_top = margin_pt + table_h

    # DIAGRAM fills the space between header and table
    diagram_h = y - table_top - mm_to_pt(8)
    drawing = build_diagram(solution, spec, allowance, usable_w, diagram_h,
                            colors=colors, unit=unit, font=font)
    renderPDF.draw(drawing, c, margin_pt, y - drawing.height)

    draw_table(c, margin_pt, table_top, [usable_w * 0.4, usable_w * 0.25], row_h,
               rows, font_size=9, numeric_cols=[1])

    c.showPage()
    c.save()
    logger.info("PDF written to %s", output_path)
