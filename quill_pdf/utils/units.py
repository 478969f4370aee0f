"""Measurement constants shared by the builders and the PDF backend."""
from __future__ import annotations

POINTS_PER_INCH = 72


def inches_to_points(value: float) -> float:
    """Convert inches to typographic points."""
    return value * POINTS_PER_INCH


PAGE_MARGIN_PT = inches_to_points(1.0)
TEXT_WIDTH_INCHES = 6.5
# Usable line width on a US Letter page with one inch margins.
TEXT_WIDTH_PT = inches_to_points(TEXT_WIDTH_INCHES)
DEFAULT_TEXT_X = 72
