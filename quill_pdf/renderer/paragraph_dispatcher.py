"""Route each paragraph to the builder matching its kind and line attributes."""
from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from quill_pdf.errors import InvariantViolationError
from quill_pdf.model.document_model import (
    Embed,
    EmbedParagraph,
    FormattedParagraph,
    LineAttributes,
    Paragraph,
    PlainParagraph,
    Run,
    RunAttributes,
    TextRun,
)
from quill_pdf.renderer.backend import DrawingBackend, ImageOptions, TextOptions
from quill_pdf.renderer.run_emitter import TextBase, emit_runs
from quill_pdf.renderer.utils import TEXT_COLOR
from quill_pdf.utils.logger import get_logger
from quill_pdf.utils.units import TEXT_WIDTH_PT

if TYPE_CHECKING:
    from quill_pdf.renderer.document_driver import BuildContext

LOGGER = get_logger(__name__)

BULLET = "•"
EMBED_FIT = (200, 200)
# Gap between the list marker column and the item text.
MARKER_GAP = 3


class ParagraphDispatcher:
    """Issues the drawing instructions for one paragraph at a time."""

    def __init__(self, backend: DrawingBackend, context: "BuildContext") -> None:
        self._backend = backend
        self._context = context

    def dispatch(self, paragraph: Paragraph) -> None:
        self._backend.move_down()
        if isinstance(paragraph, EmbedParagraph):
            self._context.counters.reset()
            self._build_embed(paragraph.embed)
        elif isinstance(paragraph, FormattedParagraph):
            self._build_formatted(paragraph.runs, paragraph.attributes)
        elif isinstance(paragraph, PlainParagraph):
            self._context.counters.reset()
            self._build_with_style(paragraph.runs, "normal")
        else:
            raise InvariantViolationError(f"Unsupported paragraph type: {type(paragraph).__name__}")

    # ------------------------------------------------------------------
    # Embeds
    def _build_embed(self, embed: Embed) -> None:
        self._backend.move_down()
        if embed.image:
            LOGGER.debug("Embedding image")
            self._backend.draw_image(embed.image, ImageOptions(fit=EMBED_FIT, align="center"))
        elif embed.video:
            LOGGER.debug("Embedding video link %s", embed.video)
            video_run = TextRun(text=embed.video, attributes=RunAttributes(link=embed.video))
            self._build_with_style([video_run], "normal")

    # ------------------------------------------------------------------
    # Formatted paragraphs; every flag is checked, several may fire.
    def _build_formatted(self, runs: Sequence[Run], attributes: LineAttributes) -> None:
        if not attributes.has_recognized_flag():
            raise InvariantViolationError()

        if attributes.header:
            self._context.counters.reset()
            self._build_header(runs, attributes.header)
        if attributes.blockquote:
            self._context.counters.reset()
            self._build_with_style(runs, "block_quote")
        if attributes.code_block:
            self._context.counters.reset()
            self._build_with_style(runs, "code_block")
        if attributes.list:
            self._build_list(runs, attributes)
        if attributes.citation:
            self._context.counters.reset()
            self._build_with_style(runs, "citation")

    def _build_header(self, runs: Sequence[Run], level: int) -> None:
        if level < 1:
            raise InvariantViolationError(f"Header level must be positive, got {level}")
        if level > 2:
            LOGGER.warning("Header level %d rendered with the header_2 style", level)
        self._build_with_style(runs, "header_1" if level == 1 else "header_2")

    def _build_with_style(self, runs: Sequence[Run], style_name: str) -> None:
        style = self._context.styles[style_name]
        emit_runs(self._backend, runs, TextBase.from_style(style))

    # ------------------------------------------------------------------
    # Lists
    def _build_list(self, runs: Sequence[Run], attributes: LineAttributes) -> None:
        depth = attributes.indent or 0
        if attributes.list == "bullet":
            self._context.counters.reset()
            marker = BULLET
        else:
            marker = self._context.counters.next_indicator(depth) + "."
        self._build_list_item(runs, marker, depth)

    def _build_list_item(self, runs: Sequence[Run], marker: str, depth: int) -> None:
        style = self._context.styles["list_paragraph"]
        base_indent = style.base_indent
        level_indent = style.level_indent
        level = depth + 1
        marker_x = base_indent + level_indent * level

        self._backend.set_font(style.font)
        self._backend.set_font_size(style.font_size)
        self._backend.set_fill_color(TEXT_COLOR)
        self._backend.draw_text(
            marker,
            marker_x,
            None,
            TextOptions(width=TEXT_WIDTH_PT - (MARKER_GAP + marker_x), continued=False),
        )
        # Pull the cursor back so the item text shares the marker's line.
        self._backend.move_up()
        text_indent = base_indent + level_indent + MARKER_GAP + level_indent * level
        emit_runs(self._backend, runs, TextBase.from_style(style, indent=text_indent))
