"""Convert Quill deltas into PDF documents."""
from quill_pdf.config import PdfConfig
from quill_pdf.errors import (
    BackendError,
    ConfigurationError,
    IndicatorExhaustedError,
    InvalidInputError,
    InvariantViolationError,
    QuillPdfError,
    StyleConfigError,
)
from quill_pdf.main import generate_pdf, generate_pdf_async

__all__ = [
    "BackendError",
    "ConfigurationError",
    "IndicatorExhaustedError",
    "InvalidInputError",
    "InvariantViolationError",
    "PdfConfig",
    "QuillPdfError",
    "StyleConfigError",
    "generate_pdf",
    "generate_pdf_async",
]
