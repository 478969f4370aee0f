"""In-memory representation of a parsed rich-text document."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Union

from quill_pdf.errors import InvalidInputError


@dataclass(slots=True)
class RunAttributes:
    """Inline formatting carried by a single run."""

    bold: bool = False
    italic: bool = False
    underline: bool = False
    strike: bool = False
    color: Optional[str] = None
    link: Optional[str] = None
    size: Optional[str] = None

    @classmethod
    def from_mapping(cls, attributes: Optional[Mapping[str, object]]) -> Optional["RunAttributes"]:
        """Build run attributes from Quill keys, ignoring everything else."""
        if not attributes:
            return None
        return cls(
            bold=bool(attributes.get("bold")),
            italic=bool(attributes.get("italic")),
            underline=bool(attributes.get("underline")),
            strike=bool(attributes.get("strike")),
            color=_optional_str(attributes.get("color")),
            link=_optional_str(attributes.get("link")),
            size=_optional_str(attributes.get("size")),
        )


@dataclass(slots=True)
class TextRun:
    """Contiguous text sharing one set of inline attributes."""

    text: str
    attributes: Optional[RunAttributes] = None

    @property
    def content(self) -> str:
        return self.text


@dataclass(slots=True)
class FormulaRun:
    """Inline formula, rendered as its literal source text."""

    formula: str
    attributes: Optional[RunAttributes] = None

    @property
    def content(self) -> str:
        return self.formula


Run = Union[TextRun, FormulaRun]


@dataclass(slots=True)
class LineAttributes:
    """Paragraph-level flags. Several may be set on the same paragraph."""

    header: Optional[int] = None
    blockquote: bool = False
    code_block: bool = False
    list: Optional[str] = None
    indent: int = 0
    citation: bool = False

    @classmethod
    def from_mapping(cls, attributes: Mapping[str, object]) -> "LineAttributes":
        header = attributes.get("header")
        indent = attributes.get("indent")
        return cls(
            header=_line_int("header", header) if header else None,
            blockquote=bool(attributes.get("blockquote")),
            code_block=bool(attributes.get("code-block", attributes.get("code_block"))),
            list=_optional_str(attributes.get("list")),
            indent=_line_int("indent", indent) if indent else 0,
            citation=bool(attributes.get("citation")),
        )

    def has_recognized_flag(self) -> bool:
        return bool(self.header or self.blockquote or self.code_block or self.list or self.citation)


@dataclass(slots=True)
class Embed:
    """Reference to an image or a video. Exactly one is set."""

    image: Optional[str] = None
    video: Optional[str] = None

    def __post_init__(self) -> None:
        if bool(self.image) == bool(self.video):
            raise InvalidInputError("Embed must reference exactly one of image or video")


@dataclass(slots=True)
class EmbedParagraph:
    embed: Embed


@dataclass(slots=True)
class FormattedParagraph:
    """Paragraph whose rendering is driven by its line attributes."""

    runs: List[Run]
    attributes: LineAttributes


@dataclass(slots=True)
class PlainParagraph:
    runs: List[Run] = field(default_factory=list)


Paragraph = Union[EmbedParagraph, FormattedParagraph, PlainParagraph]


@dataclass(slots=True)
class ParsedDocument:
    """Ordered paragraphs ready for rendering."""

    paragraphs: List[Paragraph] = field(default_factory=list)


def _optional_str(value: object) -> Optional[str]:
    if value is None or value is False or value == "":
        return None
    return str(value)


def _line_int(name: str, value: object) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Line attribute {name!r} must be an integer, got {value!r}") from exc
