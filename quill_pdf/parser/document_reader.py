"""Normalise caller input into a list of ParsedDocument instances."""
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
from quill_pdf.parser.delta_parser import parse_delta
from quill_pdf.utils.logger import get_logger

LOGGER = get_logger(__name__)

RAW = "raw"
PARSED = "parsed"


def classify(value: Any) -> Optional[str]:
    """Return ``"raw"``, ``"parsed"`` or None for an unrecognised shape."""
    if isinstance(value, ParsedDocument):
        return PARSED
    if isinstance(value, Mapping):
        if "ops" in value:
            return RAW
        if "paragraphs" in value:
            return PARSED
        return None
    if getattr(value, "ops", None) is not None:
        return RAW
    return None


def prepare_input(value: Any) -> List[ParsedDocument]:
    """Accept one raw/parsed document or a homogeneous list of them.

    Every list element is checked, not only the first one.
    """
    if isinstance(value, (list, tuple)):
        if not value:
            raise InvalidInputError("Array must contain at least one raw or parsed delta.")
        kinds = [classify(item) for item in value]
        if None in kinds:
            position = kinds.index(None)
            raise InvalidInputError(
                f"Array must contain raw or parsed deltas only; element {position} is unrecognised."
            )
        if len(set(kinds)) > 1:
            raise InvalidInputError("Array must not mix raw and parsed deltas.")
        LOGGER.debug("Reading %d %s deltas", len(value), kinds[0])
        return [_read_one(item, kind) for item, kind in zip(value, kinds)]

    kind = classify(value)
    if kind is None:
        raise InvalidInputError("Must provide a raw or parsed delta.")
    return [_read_one(value, kind)]


def _read_one(value: Any, kind: str) -> ParsedDocument:
    if kind == RAW:
        return parse_delta(value)
    if isinstance(value, ParsedDocument):
        return value
    return ParsedDocumentReader(value).read()


class ParsedDocumentReader:
    """Decode a parsed document given as plain JSON-like data."""

    def __init__(self, data: Mapping[str, Any]) -> None:
        self._data = data

    def read(self) -> ParsedDocument:
        paragraphs_data = self._data.get("paragraphs")
        if not isinstance(paragraphs_data, (list, tuple)):
            raise InvalidInputError("Parsed delta 'paragraphs' must be a list")
        paragraphs = [self._read_paragraph(index, item) for index, item in enumerate(paragraphs_data)]
        return ParsedDocument(paragraphs=paragraphs)

    def _read_paragraph(self, index: int, data: Any) -> Paragraph:
        if not isinstance(data, Mapping):
            raise InvalidInputError(f"Paragraph {index} must be a mapping")

        embed = data.get("embed")
        if embed:
            if not isinstance(embed, Mapping):
                raise InvalidInputError(f"Paragraph {index} embed must be a mapping")
            return EmbedParagraph(embed=Embed(image=embed.get("image"), video=embed.get("video")))

        runs = self._read_runs(index, data.get("textRuns", data.get("runs", [])))
        attributes = data.get("attributes")
        if attributes is not None:
            if not isinstance(attributes, Mapping):
                raise InvalidInputError(f"Paragraph {index} attributes must be a mapping")
            return FormattedParagraph(runs=runs, attributes=LineAttributes.from_mapping(attributes))
        return PlainParagraph(runs=runs)

    def _read_runs(self, index: int, data: Any) -> List[Run]:
        if not isinstance(data, (list, tuple)):
            raise InvalidInputError(f"Paragraph {index} textRuns must be a list")
        runs: List[Run] = []
        for run in data:
            if not isinstance(run, Mapping):
                raise InvalidInputError(f"Paragraph {index} contains a run that is not a mapping")
            attributes = RunAttributes.from_mapping(run.get("attributes"))
            if run.get("text"):
                runs.append(TextRun(text=str(run["text"]), attributes=attributes))
            elif "formula" in run:
                runs.append(FormulaRun(formula=str(run["formula"]), attributes=attributes))
            elif "text" in run:
                runs.append(TextRun(text="", attributes=attributes))
            else:
                raise InvalidInputError(f"Paragraph {index} contains a run without text or formula")
        return runs
