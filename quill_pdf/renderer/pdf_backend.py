"""Render drawing instructions onto a ReportLab canvas."""
from __future__ import annotations

import io
import re
from concurrent.futures import Future
from typing import Any, Optional, Tuple

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from quill_pdf.errors import BackendError
from quill_pdf.renderer.backend import ImageOptions, TextOptions
from quill_pdf.renderer.media import resolve_image
from quill_pdf.utils.logger import get_logger
from quill_pdf.utils.units import PAGE_MARGIN_PT

LOGGER = get_logger(__name__)

DEFAULT_FONT = "Helvetica"
DEFAULT_FONT_SIZE = 12.0
OBLIQUE_SKEW_DEGREES = 12
_TOKEN_PATTERN = re.compile(r"\S+\s*|\s+")


class ReportLabBackend:
    """Flowing text cursor on top of a ReportLab canvas.

    The cursor is tracked top-down like a page-layout engine: ``_y`` is the
    distance from the top edge to the top of the current line. Text marked
    ``continued`` leaves the cursor at the end of the run so the next run is
    appended on the same line; anything else advances to a new line.
    """

    def __init__(
        self,
        pagesize: Tuple[float, float] = letter,
        margin: float = PAGE_MARGIN_PT,
        title: Optional[str] = None,
    ) -> None:
        self._buffer = io.BytesIO()
        self._canvas = canvas.Canvas(self._buffer, pagesize=pagesize)
        if title:
            self._canvas.setTitle(title)
        self._page_width, self._page_height = pagesize
        self._margin = margin

        self._font = DEFAULT_FONT
        self._font_size = DEFAULT_FONT_SIZE
        self._fill = colors.black

        self._y = margin
        self._line_x = margin
        self._continue_x: Optional[float] = None
        self._output: Optional["Future[bytes]"] = None
        self._finished = False

    @property
    def canvas(self) -> canvas.Canvas:
        return self._canvas

    @property
    def page_count(self) -> int:
        return self._canvas.getPageNumber()

    @property
    def cursor_y(self) -> float:
        """Distance from the top edge of the page to the current line."""
        return self._y

    def open_output(self) -> "Future[bytes]":
        if self._output is None:
            self._output = Future()
        return self._output

    # ------------------------------------------------------------------
    # State
    def set_font(self, name: str) -> None:
        if name not in pdfmetrics.standardFonts and name not in pdfmetrics.getRegisteredFontNames():
            raise BackendError(f"Unknown font: {name!r}")
        self._font = name

    def set_font_size(self, size: float) -> None:
        self._font_size = float(size)

    def set_fill_color(self, color: str) -> None:
        try:
            self._fill = colors.toColor(color)
        except ValueError as exc:
            raise BackendError(f"Unknown color: {color!r}") from exc

    def move_down(self, lines: float = 1) -> None:
        self._y += lines * self._line_height()
        self._continue_x = None

    def move_up(self, lines: float = 1) -> None:
        self._y -= lines * self._line_height()
        self._continue_x = None

    # ------------------------------------------------------------------
    # Drawing
    def draw_text(self, content: str, x: Optional[float], y: Optional[float], options: TextOptions) -> None:
        if y is not None:
            self._y = y
        if self._continue_x is None:
            self._line_x = x if x is not None else self._margin
            start = self._line_x
            self._ensure_room(self._line_height())
        else:
            start = self._continue_x

        right = self._line_x + options.width if options.width else self._page_width - self._margin
        current = ""
        for token in _TOKEN_PATTERN.findall(content):
            candidate = current + token
            if start + self._text_width(candidate.rstrip()) > right and (current or start > self._line_x):
                if current:
                    self._draw_segment(current, start, options)
                self._advance_line()
                start = self._line_x
                current = token.lstrip()
            else:
                current = candidate
        if current:
            self._draw_segment(current, start, options)

        end = start + self._text_width(current)
        if options.continued:
            self._continue_x = end
        else:
            self._continue_x = None
            self._y += self._line_height()

    def draw_image(self, data: Any, options: ImageOptions) -> None:
        reader = resolve_image(data)
        image_width, image_height = reader.getSize()
        if not image_width or not image_height:
            raise BackendError("Embedded image has no dimensions")
        fit_width, fit_height = options.fit
        scale = min(fit_width / image_width, fit_height / image_height)
        width, height = image_width * scale, image_height * scale

        self._ensure_room(height)
        if options.align == "center":
            x = self._margin + (self._content_width() - width) / 2
        elif options.align == "right":
            x = self._page_width - self._margin - width
        else:
            x = self._margin
        self._canvas.drawImage(reader, x, self._page_height - self._y - height, width=width, height=height, mask="auto")
        self._y += height
        self._continue_x = None

    def finish(self) -> None:
        output = self.open_output()
        if self._finished:
            return
        self._finished = True
        try:
            self._canvas.save()
        except Exception as exc:  # reported through the output handle
            LOGGER.error("Failed to write PDF: %s", exc)
            output.set_exception(BackendError(f"Failed to write PDF: {exc}"))
            return
        data = self._buffer.getvalue()
        LOGGER.debug("Wrote %d byte PDF", len(data))
        output.set_result(data)

    # ------------------------------------------------------------------
    # Internal helpers
    def _draw_segment(self, text: str, x: float, options: TextOptions) -> None:
        ascent, descent = pdfmetrics.getAscentDescent(self._font, self._font_size)
        baseline = self._page_height - self._y - ascent
        width = self._text_width(text.rstrip())
        pdf = self._canvas

        pdf.setFont(self._font, self._font_size)
        pdf.setFillColor(self._fill)
        pdf.setStrokeColor(self._fill)
        if options.oblique:
            pdf.saveState()
            pdf.translate(x, baseline)
            pdf.skew(0, OBLIQUE_SKEW_DEGREES)
            pdf.drawString(0, 0, text)
            pdf.restoreState()
        else:
            pdf.drawString(x, baseline, text)

        if options.underline or options.strike:
            pdf.setLineWidth(max(self._font_size / 20, 0.5))
        if options.underline:
            underline_y = baseline - self._font_size * 0.1
            pdf.line(x, underline_y, x + width, underline_y)
        if options.strike:
            strike_y = baseline + self._font_size * 0.3
            pdf.line(x, strike_y, x + width, strike_y)
        if options.link:
            pdf.linkURL(options.link, (x, baseline + descent, x + width, baseline + ascent), relative=0, thickness=0)

    def _advance_line(self) -> None:
        line_height = self._line_height()
        self._y += line_height
        self._ensure_room(line_height)

    def _ensure_room(self, height: float) -> None:
        if self._y + height > self._page_height - self._margin and self._y > self._margin:
            self._canvas.showPage()
            self._y = self._margin

    def _line_height(self) -> float:
        ascent, descent = pdfmetrics.getAscentDescent(self._font, self._font_size)
        return ascent - descent

    def _text_width(self, text: str) -> float:
        return pdfmetrics.stringWidth(text, self._font, self._font_size)

    def _content_width(self) -> float:
        return self._page_width - 2 * self._margin
