"""Parse raw Quill delta operations into paragraphs of runs."""
from __future__ import annotations

from typing import Any, List, Mapping, Optional

from quill_pdf.errors import InvalidInputError
from quill_pdf.model.document_model import (
    Embed,
    EmbedParagraph,
    FormattedParagraph,
    FormulaRun,
    LineAttributes,
    Paragraph,
    ParsedDocument,
    PlainParagraph,
    Run,
    RunAttributes,
    TextRun,
)
from quill_pdf.utils.logger import get_logger

LOGGER = get_logger(__name__)


class DeltaParser:
    """Turns a delta's insert operations into a ParsedDocument.

    Text is split on newlines; each newline closes the pending paragraph and,
    when the newline op is a pure line break, carries the line attributes for
    that paragraph. Image and video embeds occupy a paragraph of their own.
    """

    def __init__(self, delta: Any) -> None:
        self._delta = delta
        self._paragraphs: List[Paragraph] = []
        self._runs: List[Run] = []
        self._after_embed = False

    def parse(self) -> ParsedDocument:
        ops = self._extract_ops(self._delta)
        self._paragraphs = []
        self._runs = []
        self._after_embed = False

        for op in ops:
            if not isinstance(op, Mapping) or "insert" not in op:
                LOGGER.warning("Skipping non-insert delta operation: %r", op)
                continue
            insert = op["insert"]
            attributes = op.get("attributes") or {}
            if isinstance(insert, str):
                self._parse_text(insert, attributes)
            elif isinstance(insert, Mapping):
                self._parse_embed(insert, attributes)
            else:
                LOGGER.warning("Skipping insert of unsupported type %s", type(insert).__name__)

        if self._runs:
            self._paragraphs.append(PlainParagraph(runs=self._runs))
            self._runs = []
        LOGGER.debug("Parsed delta into %d paragraphs", len(self._paragraphs))
        return ParsedDocument(paragraphs=self._paragraphs)

    # ------------------------------------------------------------------
    def _extract_ops(self, delta: Any) -> List[Any]:
        ops = delta.get("ops") if isinstance(delta, Mapping) else getattr(delta, "ops", None)
        if not isinstance(ops, (list, tuple)):
            raise InvalidInputError("Raw delta 'ops' must be a list of operations")
        return list(ops)

    def _parse_text(self, text: str, attributes: Mapping[str, Any]) -> None:
        line_break_only = text.strip("\n") == ""
        segments = text.split("\n")
        for index, segment in enumerate(segments):
            if segment:
                self._after_embed = False
                self._runs.append(TextRun(text=segment, attributes=RunAttributes.from_mapping(attributes)))
            if index < len(segments) - 1:
                self._close_paragraph(attributes if line_break_only else None)

    def _parse_embed(self, insert: Mapping[str, Any], attributes: Mapping[str, Any]) -> None:
        if "formula" in insert:
            self._after_embed = False
            self._runs.append(
                FormulaRun(formula=str(insert["formula"]), attributes=RunAttributes.from_mapping(attributes))
            )
            return
        if insert.get("image") or insert.get("video"):
            if self._runs:
                self._paragraphs.append(PlainParagraph(runs=self._runs))
                self._runs = []
            embed = Embed(image=insert.get("image"), video=insert.get("video"))
            self._paragraphs.append(EmbedParagraph(embed=embed))
            self._after_embed = True
            return
        LOGGER.warning("Skipping unsupported embed with keys %s", sorted(insert))

    def _close_paragraph(self, line_attributes: Optional[Mapping[str, Any]]) -> None:
        if self._after_embed and not self._runs:
            # The newline ending an embed's own line.
            self._after_embed = False
            return
        self._after_embed = False
        runs, self._runs = self._runs, []

        if line_attributes:
            parsed = LineAttributes.from_mapping(line_attributes)
            if parsed.has_recognized_flag():
                self._paragraphs.append(FormattedParagraph(runs=runs, attributes=parsed))
                return
            LOGGER.debug("Dropping unrecognized line attributes %s", sorted(line_attributes))
        self._paragraphs.append(PlainParagraph(runs=runs))


def parse_delta(delta: Any) -> ParsedDocument:
    """Parse a raw delta (mapping or object exposing ``ops``)."""
    return DeltaParser(delta).parse()
