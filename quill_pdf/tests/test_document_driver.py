"""Tests for whole-build orchestration and the public entry points."""
import asyncio
import unittest

from quill_pdf import PdfConfig, generate_pdf, generate_pdf_async
from quill_pdf.errors import InvalidInputError
from quill_pdf.model.document_model import FormattedParagraph, LineAttributes, ParsedDocument, PlainParagraph, TextRun
from quill_pdf.renderer.backend import RecordingBackend
from quill_pdf.renderer.document_driver import BuildContext, DocumentDriver, build_pdf


def ordered_document(*texts: str) -> ParsedDocument:
    return ParsedDocument(
        paragraphs=[FormattedParagraph([TextRun(text)], LineAttributes(list="ordered")) for text in texts]
    )


class DocumentDriverTest(unittest.TestCase):
    """Documents are walked in order and the backend is finished once."""

    def test_documents_processed_in_order(self) -> None:
        backend = RecordingBackend()
        documents = [
            ParsedDocument([PlainParagraph([TextRun("first")])]),
            ParsedDocument([PlainParagraph([TextRun("second")]), PlainParagraph([TextRun("third")])]),
        ]
        build_pdf(documents, backend)

        self.assertEqual([t.args[0] for t in backend.texts()], ["first", "second", "third"])
        self.assertEqual(backend.methods()[-1], "finish")
        self.assertEqual(backend.methods().count("finish"), 1)

    def test_driver_reports_paragraph_count(self) -> None:
        backend = RecordingBackend()
        driver = DocumentDriver(backend, BuildContext.create())
        count = driver.build([ordered_document("a", "b"), ParsedDocument([])])
        self.assertEqual(count, 2)
        self.assertNotIn("finish", backend.methods())

    def test_numbering_continues_across_documents(self) -> None:
        backend = RecordingBackend()
        build_pdf([ordered_document("a"), ordered_document("b")], backend)
        markers = [t.args[0] for t in backend.texts() if t.args[3].width is not None]
        self.assertEqual(markers, ["1.", "2."])

    def test_sequential_builds_are_isolated(self) -> None:
        first = RecordingBackend()
        first_context = build_pdf([ordered_document("a", "b")], first, {"normal": {"font": "Courier"}})
        self.assertEqual(first_context.styles["normal"].font, "Courier")
        self.assertEqual(first_context.counters.counters[0], 2)

        second = RecordingBackend()
        second_context = build_pdf([ordered_document("c")], second)
        self.assertEqual(second_context.styles["normal"].font, "Times-Roman")
        markers = [t.args[0] for t in second.texts() if t.args[3].width is not None]
        self.assertEqual(markers, ["1."])

    def test_context_accepts_camel_case_overrides(self) -> None:
        context = BuildContext.create({"list_paragraph": {"baseIndent": 10, "levelIndent": 5}})
        self.assertEqual(context.styles["list_paragraph"].base_indent, 10)
        self.assertEqual(context.styles["list_paragraph"].level_indent, 5)
        self.assertEqual(context.counters.counters, (0, 0, 0, 0, 0, 0))


class GeneratePdfTest(unittest.TestCase):
    """Entry points validate input, pick the export mode and await output."""

    RAW = {"ops": [{"insert": "Hello\n"}]}

    def test_returns_backend_output(self) -> None:
        backend = RecordingBackend()
        result = generate_pdf(self.RAW, backend=backend)
        self.assertEqual(result, backend.instructions)
        self.assertEqual(result[-1].method, "finish")

    def test_backend_export_mode_returns_backend(self) -> None:
        backend = RecordingBackend()
        self.assertIs(generate_pdf(self.RAW, {"exportAs": "pdfKit"}, backend=backend), backend)
        other = RecordingBackend()
        self.assertIs(generate_pdf(self.RAW, PdfConfig(export_as="backend"), backend=other), other)

    def test_invalid_input_rejected_before_drawing(self) -> None:
        backend = RecordingBackend()
        with self.assertRaises(InvalidInputError):
            generate_pdf({"not": "a delta"}, backend=backend)
        self.assertEqual(backend.instructions, [])
        with self.assertRaises(InvalidInputError):
            generate_pdf([self.RAW, "junk"], backend=backend)
        self.assertEqual(backend.instructions, [])

    def test_style_override_changes_font(self) -> None:
        backend = RecordingBackend()
        generate_pdf(self.RAW, {"styles": {"normal": {"font": "Helvetica"}}}, backend=backend)
        fonts = [i.args[0] for i in backend.instructions if i.method == "set_font"]
        self.assertEqual(fonts, ["Helvetica"])

    def test_async_entry_point(self) -> None:
        backend = RecordingBackend()
        result = asyncio.run(generate_pdf_async(self.RAW, backend=backend))
        self.assertEqual([i.method for i in result][-1], "finish")
        self.assertEqual([t.args[0] for t in backend.texts()], ["Hello"])

    def test_async_backend_export_mode(self) -> None:
        backend = RecordingBackend()
        result = asyncio.run(generate_pdf_async(self.RAW, {"exportAs": "backend"}, backend=backend))
        self.assertIs(result, backend)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
