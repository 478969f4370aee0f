"""Emit one text instruction group per run."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from quill_pdf.model.document_model import Run, RunAttributes
from quill_pdf.model.style_model import StyleEntry
from quill_pdf.renderer.backend import DrawingBackend
from quill_pdf.renderer.utils import bold_font_for, run_fill_color, run_font_size, run_text_options
from quill_pdf.utils.units import DEFAULT_TEXT_X


@dataclass(frozen=True, slots=True)
class TextBase:
    """Font, size and left edge that runs of a paragraph start from."""

    font: str
    font_size: float
    indent: Optional[float] = None

    @classmethod
    def from_style(cls, style: StyleEntry, indent: Optional[float] = None) -> "TextBase":
        return cls(
            font=style.font,
            font_size=style.font_size,
            indent=style.base_indent if indent is None else indent,
        )


def emit_runs(backend: DrawingBackend, runs: Sequence[Run], base: TextBase) -> None:
    """Draw every run at the base indent, stitching all but the last onto one line."""
    x = base.indent if base.indent else DEFAULT_TEXT_X
    last_index = len(runs) - 1
    for index, run in enumerate(runs):
        backend.set_font(base.font)
        backend.set_font_size(base.font_size)
        _apply_pre_text_attributes(backend, run.attributes, base)
        backend.draw_text(run.content, x, None, run_text_options(run.attributes, index == last_index))


def _apply_pre_text_attributes(backend: DrawingBackend, attributes: Optional[RunAttributes], base: TextBase) -> None:
    if attributes is not None:
        if attributes.size:
            size = run_font_size(attributes.size, base.font_size)
            if size is not None:
                backend.set_font_size(size)
        if attributes.bold:
            bold = bold_font_for(base.font)
            if bold is not None:
                backend.set_font(bold)
    backend.set_fill_color(run_fill_color(attributes))
