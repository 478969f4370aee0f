"""
Custom exceptions for the delta to PDF pipeline.

Every error raised by the library derives from ``QuillPdfError`` so callers
can catch the whole family at once.
"""


class QuillPdfError(Exception):
    """Base exception for all quill-pdf errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown quill-pdf error occurred."


class InvalidInputError(QuillPdfError, ValueError):
    """Raised when the input is neither a raw delta nor a parsed document."""

    @property
    def default_message(self) -> str:
        return "Must provide a raw or parsed delta."


class InvariantViolationError(QuillPdfError):
    """Raised when a paragraph breaks an internal rendering contract."""

    @property
    def default_message(self) -> str:
        return "Paragraph carries line attributes without a recognized flag."


class IndicatorExhaustedError(QuillPdfError, IndexError):
    """Raised when list nesting or item count exceeds the indicator alphabets."""

    @property
    def default_message(self) -> str:
        return "Ordered list indicator is out of range."


class StyleConfigError(QuillPdfError, ValueError):
    """Raised when a style override cannot be interpreted."""

    @property
    def default_message(self) -> str:
        return "Invalid style override."


class ConfigurationError(QuillPdfError, ValueError):
    """Raised when the build configuration is malformed."""

    @property
    def default_message(self) -> str:
        return "Invalid build configuration."


class BackendError(QuillPdfError):
    """Raised when the drawing backend cannot honour an instruction."""

    @property
    def default_message(self) -> str:
        return "The drawing backend failed."
