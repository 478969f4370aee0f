"""Entry-point for the delta to PDF pipeline."""
from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Optional

from quill_pdf.config import EXPORT_BACKEND, PdfConfig
from quill_pdf.parser.document_reader import prepare_input
from quill_pdf.renderer.backend import DrawingBackend, RecordingBackend
from quill_pdf.renderer.document_driver import build_pdf
from quill_pdf.renderer.pdf_backend import ReportLabBackend
from quill_pdf.utils.debug import InstructionDumper
from quill_pdf.utils.logger import get_logger

LOGGER = get_logger(__name__)


def _start_build(delta: Any, config: Any, backend: Optional[DrawingBackend]):
    settings = PdfConfig.coerce(config)
    # Input errors surface here, before the backend sees any instruction.
    documents = prepare_input(delta)
    target = backend if backend is not None else ReportLabBackend()
    output = target.open_output()
    build_pdf(documents, target, settings.styles)
    return settings, target, output


def generate_pdf(delta: Any, config: Any = None, backend: Optional[DrawingBackend] = None) -> Any:
    """Build a PDF from raw or parsed delta(s).

    Returns the backend's output (PDF bytes for the default backend), or the
    finished backend itself when ``export_as`` is ``"backend"``. A failure
    while finishing is raised in both modes.
    """
    settings, target, output = _start_build(delta, config, backend)
    result = output.result()
    if settings.export_as == EXPORT_BACKEND:
        return target
    return result


async def generate_pdf_async(delta: Any, config: Any = None, backend: Optional[DrawingBackend] = None) -> Any:
    """Build synchronously, then await the backend's completion handle."""
    settings, target, output = _start_build(delta, config, backend)
    result = await asyncio.wrap_future(output)
    if settings.export_as == EXPORT_BACKEND:
        return target
    return result


def main(input_file: str, output_file: Optional[str] = None, styles_file: Optional[str] = None) -> Path:
    """Render a JSON delta file into a PDF next to it (or at ``output_file``)."""
    input_path = Path(input_file).resolve()
    if not input_path.exists():
        raise FileNotFoundError(f"Delta file not found: {input_path}")

    delta = json.loads(input_path.read_text(encoding="utf-8"))
    config = PdfConfig()
    if styles_file:
        config = PdfConfig(styles=json.loads(Path(styles_file).read_text(encoding="utf-8")))

    output_path = Path(output_file).resolve() if output_file else input_path.with_suffix(".pdf")
    LOGGER.info("Rendering %s into %s", input_path.name, output_path)
    output_path.write_bytes(generate_pdf(delta, config))
    return output_path


def dump_instructions(input_file: str, directory: str, styles_file: Optional[str] = None) -> Path:
    """Record the instruction stream for a delta file and write it as JSON."""
    delta = json.loads(Path(input_file).read_text(encoding="utf-8"))
    styles = json.loads(Path(styles_file).read_text(encoding="utf-8")) if styles_file else None
    recorder = RecordingBackend()
    generate_pdf(delta, PdfConfig(styles=styles), backend=recorder)
    return InstructionDumper(Path(directory)).dump(recorder.instructions)


if __name__ == "__main__":  # pragma: no cover
    import argparse

    parser = argparse.ArgumentParser(description="Render Quill delta JSON into a PDF document")
    parser.add_argument("input_file", help="Path to a raw or parsed delta JSON file (or a list of them)")
    parser.add_argument("--output", help="Path of the PDF to write")
    parser.add_argument("--styles", help="JSON file with style overrides")
    parser.add_argument("--dump-instructions", help="Directory to write the recorded instruction stream")

    args = parser.parse_args()
    main(args.input_file, args.output, args.styles)
    if args.dump_instructions:
        dump_instructions(args.input_file, args.dump_instructions, args.styles)
