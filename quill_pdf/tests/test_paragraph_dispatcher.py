"""Tests covering paragraph routing, list layout and counter resets."""
import unittest
from typing import List

from quill_pdf.errors import IndicatorExhaustedError, InvariantViolationError
from quill_pdf.model.document_model import (
    Embed,
    EmbedParagraph,
    FormattedParagraph,
    LineAttributes,
    PlainParagraph,
    RunAttributes,
    TextRun,
)
from quill_pdf.renderer.backend import ImageOptions, Instruction, RecordingBackend, TextOptions
from quill_pdf.renderer.document_driver import BuildContext
from quill_pdf.renderer.paragraph_dispatcher import ParagraphDispatcher
from quill_pdf.utils.units import TEXT_WIDTH_PT


def ordered(text: str, indent: int = 0) -> FormattedParagraph:
    return FormattedParagraph(runs=[TextRun(text)], attributes=LineAttributes(list="ordered", indent=indent))


def bullet(text: str, indent: int = 0) -> FormattedParagraph:
    return FormattedParagraph(runs=[TextRun(text)], attributes=LineAttributes(list="bullet", indent=indent))


def plain(text: str) -> PlainParagraph:
    return PlainParagraph(runs=[TextRun(text)])


class DispatcherTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.backend = RecordingBackend()
        self.context = BuildContext.create()
        self.dispatcher = ParagraphDispatcher(self.backend, self.context)

    def dispatch_all(self, *paragraphs) -> None:
        for paragraph in paragraphs:
            self.dispatcher.dispatch(paragraph)

    def markers(self) -> List[str]:
        """Text of every list marker drawn (marker calls carry a width)."""
        return [t.args[0] for t in self.backend.texts() if t.args[3].width is not None]


class PlainParagraphTest(DispatcherTestCase):
    """Plain paragraphs render in the normal style."""

    def test_single_run_plain_paragraph_sequence(self) -> None:
        self.dispatcher.dispatch(plain("hello"))
        self.assertEqual(
            self.backend.instructions,
            [
                Instruction("move_down", (1,)),
                Instruction("set_font", ("Times-Roman",)),
                Instruction("set_font_size", (12,)),
                Instruction("set_fill_color", ("black",)),
                Instruction("draw_text", ("hello", 72, None, TextOptions(continued=False))),
            ],
        )

    def test_empty_paragraph_only_moves_down(self) -> None:
        self.dispatcher.dispatch(PlainParagraph(runs=[]))
        self.assertEqual(self.backend.methods(), ["move_down"])

    def test_normal_style_override_applies(self) -> None:
        self.context = BuildContext.create({"normal": {"font": "Courier", "baseIndent": 90}})
        self.dispatcher = ParagraphDispatcher(self.backend, self.context)
        self.dispatcher.dispatch(plain("code-ish"))
        self.assertEqual(self.backend.instructions[1].args, ("Courier",))
        self.assertEqual(self.backend.texts()[0].args[1], 90)


class FormattedParagraphTest(DispatcherTestCase):
    """Line attributes select the style; several flags may fire together."""

    def _fonts_and_sizes(self):
        fonts = [i.args[0] for i in self.backend.instructions if i.method == "set_font"]
        sizes = [i.args[0] for i in self.backend.instructions if i.method == "set_font_size"]
        return fonts, sizes

    def test_header_levels(self) -> None:
        self.dispatch_all(
            FormattedParagraph([TextRun("H1")], LineAttributes(header=1)),
            FormattedParagraph([TextRun("H2")], LineAttributes(header=2)),
        )
        fonts, sizes = self._fonts_and_sizes()
        self.assertEqual(fonts, ["Helvetica-Bold", "Helvetica-Bold"])
        self.assertEqual(sizes, [16, 14])

    def test_deeper_header_levels_use_header_2(self) -> None:
        self.dispatcher.dispatch(FormattedParagraph([TextRun("H4")], LineAttributes(header=4)))
        _, sizes = self._fonts_and_sizes()
        self.assertEqual(sizes, [14])

    def test_non_positive_header_level_rejected(self) -> None:
        with self.assertRaises(InvariantViolationError):
            self.dispatcher.dispatch(FormattedParagraph([TextRun("H")], LineAttributes(header=-1)))

    def test_blockquote_code_block_and_citation_styles(self) -> None:
        self.dispatch_all(
            FormattedParagraph([TextRun("quote")], LineAttributes(blockquote=True)),
            FormattedParagraph([TextRun("code", RunAttributes(bold=True))], LineAttributes(code_block=True)),
            FormattedParagraph([TextRun("cite")], LineAttributes(citation=True)),
        )
        fonts, _ = self._fonts_and_sizes()
        self.assertEqual(fonts, ["Times-Italic", "Courier", "Courier-Bold", "Times-Roman"])
        self.assertEqual([t.args[1] for t in self.backend.texts()], [72, 72, 72])

    def test_multiple_flags_fire_in_order(self) -> None:
        attributes = LineAttributes(header=1, blockquote=True, citation=True)
        self.dispatcher.dispatch(FormattedParagraph([TextRun("twice")], attributes))
        fonts, _ = self._fonts_and_sizes()
        self.assertEqual(fonts, ["Helvetica-Bold", "Times-Italic", "Times-Roman"])
        self.assertEqual(self.backend.methods().count("move_down"), 1)
        self.assertEqual(len(self.backend.texts()), 3)

    def test_header_and_ordered_list_together(self) -> None:
        attributes = LineAttributes(header=2, list="ordered")
        self.dispatcher.dispatch(FormattedParagraph([TextRun("item")], attributes))
        self.assertEqual(self.markers(), ["1."])
        self.assertEqual([t.args[0] for t in self.backend.texts()], ["item", "1.", "item"])

    def test_attributes_without_recognized_flag_fail(self) -> None:
        with self.assertRaises(InvariantViolationError):
            self.dispatcher.dispatch(FormattedParagraph([TextRun("x")], LineAttributes(indent=2)))

    def test_unknown_paragraph_type_fails(self) -> None:
        with self.assertRaises(InvariantViolationError):
            self.dispatcher.dispatch(object())


class ListParagraphTest(DispatcherTestCase):
    """List markers, indentation arithmetic and numbering continuity."""

    def test_bullet_item_geometry(self) -> None:
        self.dispatcher.dispatch(bullet("point"))
        self.assertEqual(
            self.backend.instructions,
            [
                Instruction("move_down", (1,)),
                Instruction("set_font", ("Times-Roman",)),
                Instruction("set_font_size", (12,)),
                Instruction("set_fill_color", ("black",)),
                Instruction("draw_text", ("•", 75, None, TextOptions(continued=False, width=TEXT_WIDTH_PT - 78))),
                Instruction("move_up", (1,)),
                Instruction("set_font", ("Times-Roman",)),
                Instruction("set_font_size", (12,)),
                Instruction("set_fill_color", ("black",)),
                Instruction("draw_text", ("point", 103, None, TextOptions(continued=False))),
            ],
        )

    def test_nested_item_geometry(self) -> None:
        self.dispatcher.dispatch(ordered("deep", indent=2))
        marker, text = self.backend.texts()
        self.assertEqual(marker.args[0], "i.")
        self.assertEqual(marker.args[1], 50 + 25 * 3)
        self.assertEqual(marker.args[3].width, TEXT_WIDTH_PT - (3 + 50 + 25 * 3))
        self.assertEqual(text.args[1], 50 + 25 + 3 + 25 * 3)

    def test_list_style_override_moves_marker(self) -> None:
        self.context = BuildContext.create({"list_paragraph": {"baseIndent": 40, "levelIndent": 20}})
        self.dispatcher = ParagraphDispatcher(self.backend, self.context)
        self.dispatcher.dispatch(bullet("x"))
        marker, text = self.backend.texts()
        self.assertEqual(marker.args[1], 60)
        self.assertEqual(text.args[1], 83)

    def test_consecutive_ordered_items_number_sequentially(self) -> None:
        self.dispatch_all(ordered("a"), ordered("b"), ordered("c"))
        self.assertEqual(self.markers(), ["1.", "2.", "3."])

    def test_plain_paragraph_restarts_numbering(self) -> None:
        self.dispatch_all(ordered("a"), ordered("b"), ordered("c"), plain("break"), ordered("d"))
        self.assertEqual(self.markers(), ["1.", "2.", "3.", "1."])

    def test_bullet_item_restarts_numbering(self) -> None:
        self.dispatch_all(ordered("a"), ordered("b"), bullet("x"), ordered("c"))
        self.assertEqual(self.markers(), ["1.", "2.", "•", "1."])

    def test_header_restarts_numbering(self) -> None:
        self.dispatch_all(ordered("a"), FormattedParagraph([TextRun("H")], LineAttributes(header=1)), ordered("b"))
        self.assertEqual(self.markers(), ["1.", "1."])

    def test_blockquote_restarts_numbering(self) -> None:
        self.dispatch_all(ordered("a"), FormattedParagraph([TextRun("q")], LineAttributes(blockquote=True)), ordered("b"))
        self.assertEqual(self.markers(), ["1.", "1."])

    def test_code_block_restarts_numbering(self) -> None:
        self.dispatch_all(ordered("a"), FormattedParagraph([TextRun("c")], LineAttributes(code_block=True)), ordered("b"))
        self.assertEqual(self.markers(), ["1.", "1."])

    def test_citation_restarts_numbering(self) -> None:
        self.dispatch_all(ordered("a"), FormattedParagraph([TextRun("c")], LineAttributes(citation=True)), ordered("b"))
        self.assertEqual(self.markers(), ["1.", "1."])

    def test_embed_restarts_numbering(self) -> None:
        self.dispatch_all(ordered("a"), EmbedParagraph(Embed(image="img.png")), ordered("b"))
        self.assertEqual(self.markers(), ["1.", "1."])

    def test_nested_numbering(self) -> None:
        self.dispatch_all(
            ordered("one"),
            ordered("one-a", indent=1),
            ordered("one-b", indent=1),
            ordered("one-b-i", indent=2),
            ordered("two"),
            ordered("two-a", indent=1),
        )
        self.assertEqual(self.markers(), ["1.", "a.", "b.", "i.", "2.", "a."])

    def test_depth_beyond_supported_levels_fails(self) -> None:
        with self.assertRaises(IndicatorExhaustedError):
            self.dispatcher.dispatch(ordered("too deep", indent=6))

    def test_list_with_multiple_runs_stitches_line(self) -> None:
        paragraph = FormattedParagraph(
            runs=[TextRun("bold", RunAttributes(bold=True)), TextRun(" rest")],
            attributes=LineAttributes(list="bullet"),
        )
        self.dispatcher.dispatch(paragraph)
        flags = [t.args[3].continued for t in self.backend.texts()]
        self.assertEqual(flags, [False, True, False])


class EmbedParagraphTest(DispatcherTestCase):
    """Embeds get extra spacing and fixed rendering."""

    def test_image_embed(self) -> None:
        self.dispatcher.dispatch(EmbedParagraph(Embed(image="data:image/png;base64,AAAA")))
        self.assertEqual(
            self.backend.instructions,
            [
                Instruction("move_down", (1,)),
                Instruction("move_down", (1,)),
                Instruction("draw_image", ("data:image/png;base64,AAAA", ImageOptions(fit=(200, 200), align="center"))),
            ],
        )

    def test_video_embed_renders_blue_link(self) -> None:
        url = "https://video.example.com/watch"
        self.dispatcher.dispatch(EmbedParagraph(Embed(video=url)))
        self.assertEqual(
            self.backend.instructions,
            [
                Instruction("move_down", (1,)),
                Instruction("move_down", (1,)),
                Instruction("set_font", ("Times-Roman",)),
                Instruction("set_font_size", (12,)),
                Instruction("set_fill_color", ("blue",)),
                Instruction("draw_text", (url, 72, None, TextOptions(link=url, continued=False))),
            ],
        )


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
