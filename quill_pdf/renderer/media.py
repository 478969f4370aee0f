"""
Image reference resolution for embeds.

Quill stores images as data URIs (``data:image/png;base64,...``) or as URLs;
callers building documents by hand may also pass raw bytes or a file path.
"""
from __future__ import annotations

import base64
import binascii
import io
import mimetypes
from pathlib import Path
from typing import Tuple, Union

from reportlab.lib.utils import ImageReader

from quill_pdf.errors import BackendError
from quill_pdf.utils.logger import get_logger

LOGGER = get_logger(__name__)

ImageSource = Union[str, bytes, bytearray, Path]


def decode_data_uri(uri: str) -> Tuple[str, bytes]:
    """Split a data URI into its media type and decoded payload."""
    header, separator, payload = uri.partition(",")
    if not uri.startswith("data:") or not separator:
        raise BackendError("Malformed data URI for embedded image")
    params = header[len("data:"):].split(";")
    media_type = params[0] or "text/plain"
    if "base64" in params[1:]:
        try:
            return media_type, base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise BackendError("Embedded image is not valid base64") from exc
    return media_type, payload.encode("latin-1")


def describe_source(source: ImageSource) -> str:
    """Best-effort media type used for log output."""
    if isinstance(source, (bytes, bytearray)):
        return "application/octet-stream"
    text = str(source)
    if text.startswith("data:"):
        return text[len("data:"):].split(";", 1)[0].split(",", 1)[0] or "text/plain"
    guessed, _ = mimetypes.guess_type(text)
    return guessed or "application/octet-stream"


def resolve_image(source: ImageSource) -> ImageReader:
    """Return a ReportLab image reader for any supported image reference."""
    LOGGER.debug("Resolving %s image", describe_source(source))
    try:
        if isinstance(source, (bytes, bytearray)):
            return ImageReader(io.BytesIO(bytes(source)))
        if isinstance(source, str) and source.startswith("data:"):
            _, data = decode_data_uri(source)
            return ImageReader(io.BytesIO(data))
        return ImageReader(str(source))
    except (OSError, ValueError) as exc:
        raise BackendError(f"Could not read embedded image: {exc}") from exc
