"""Drive the paragraph dispatcher over whole documents."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

from quill_pdf.model.document_model import ParsedDocument
from quill_pdf.model.numbering_model import ListCounters
from quill_pdf.model.style_model import StyleTable
from quill_pdf.parser.styles_parser import StylesParser
from quill_pdf.renderer.backend import DrawingBackend
from quill_pdf.renderer.paragraph_dispatcher import ParagraphDispatcher
from quill_pdf.utils.logger import get_logger

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class BuildContext:
    """Mutable state owned by exactly one build: styles and list counters."""

    styles: StyleTable = field(default_factory=StyleTable)
    counters: ListCounters = field(default_factory=ListCounters)

    @classmethod
    def create(cls, style_overrides: Optional[Mapping[str, Any]] = None) -> "BuildContext":
        styles = StyleTable()
        styles.configure(StylesParser(style_overrides).parse())
        return cls(styles=styles, counters=ListCounters())


class DocumentDriver:
    """Walks documents in order and dispatches every paragraph."""

    def __init__(self, backend: DrawingBackend, context: BuildContext) -> None:
        self._backend = backend
        self._context = context
        self._dispatcher = ParagraphDispatcher(backend, context)

    def build(self, documents: Sequence[ParsedDocument]) -> int:
        """Dispatch every paragraph; return how many were processed."""
        count = 0
        for document in documents:
            for paragraph in document.paragraphs:
                LOGGER.debug("Dispatching %s", type(paragraph).__name__)
                self._dispatcher.dispatch(paragraph)
                count += 1
        return count


def build_pdf(
    documents: Sequence[ParsedDocument],
    backend: DrawingBackend,
    style_overrides: Optional[Mapping[str, Any]] = None,
) -> BuildContext:
    """Run one complete build against ``backend`` and finish it.

    A fresh context is created on every call so sequential or overlapping
    builds never observe each other's styles or counters.
    """
    context = BuildContext.create(style_overrides)
    LOGGER.info("Building %d document(s)", len(documents))
    count = DocumentDriver(backend, context).build(documents)
    backend.finish()
    LOGGER.info("Issued instructions for %d paragraph(s)", count)
    return context
