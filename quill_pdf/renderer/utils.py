"""Common helpers shared by the run and paragraph builders."""
from __future__ import annotations

from typing import Dict, Optional

from quill_pdf.model.document_model import RunAttributes
from quill_pdf.renderer.backend import TextOptions

# Only these base fonts have a bold counterpart; any other font stays as is.
BOLD_FONTS: Dict[str, str] = {
    "Times-Roman": "Times-Bold",
    "Courier": "Courier-Bold",
    "Helvetica": "Helvetica-Bold",
}

# Size shifts relative to the style's base font size.
SIZE_OFFSETS: Dict[str, float] = {
    "small": -4,
    "large": 4,
    "huge": 6,
}

LINK_COLOR = "blue"
TEXT_COLOR = "black"


def bold_font_for(base_font: str) -> Optional[str]:
    return BOLD_FONTS.get(base_font)


def run_font_size(size: str, base_size: float) -> Optional[float]:
    offset = SIZE_OFFSETS.get(size)
    if offset is None:
        return None
    return base_size + offset


def run_fill_color(attributes: Optional[RunAttributes]) -> str:
    if attributes is None:
        return TEXT_COLOR
    if attributes.color:
        return attributes.color
    if attributes.link:
        return LINK_COLOR
    return TEXT_COLOR


def run_text_options(attributes: Optional[RunAttributes], last_run: bool) -> TextOptions:
    """Options passed with the text call; every run but the last continues the line."""
    if attributes is None:
        return TextOptions(continued=not last_run)
    return TextOptions(
        underline=attributes.underline,
        strike=attributes.strike,
        oblique=attributes.italic,
        link=attributes.link,
        continued=not last_run,
    )
