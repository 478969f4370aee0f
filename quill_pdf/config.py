"""Build configuration: export mode and style overrides."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from quill_pdf.errors import ConfigurationError

EXPORT_BYTES = "bytes"
EXPORT_BACKEND = "backend"

_EXPORT_ALIASES = {
    "bytes": EXPORT_BYTES,
    "blob": EXPORT_BYTES,
    "backend": EXPORT_BACKEND,
    "pdfKit": EXPORT_BACKEND,
}


@dataclass(slots=True)
class PdfConfig:
    """Options supplied once per build call."""

    export_as: str = EXPORT_BYTES
    styles: Optional[Mapping[str, Any]] = None

    def __post_init__(self) -> None:
        if self.export_as not in _EXPORT_ALIASES:
            raise ConfigurationError(f"Unknown export mode: {self.export_as!r}")
        self.export_as = _EXPORT_ALIASES[self.export_as]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PdfConfig":
        export_as = data.get("exportAs", data.get("export_as", EXPORT_BYTES))
        return cls(export_as=export_as, styles=data.get("styles"))

    @classmethod
    def coerce(cls, config: Any) -> "PdfConfig":
        """Accept None, a PdfConfig or a plain mapping."""
        if config is None:
            return cls()
        if isinstance(config, PdfConfig):
            return config
        if isinstance(config, Mapping):
            return cls.from_mapping(config)
        raise ConfigurationError(f"Config must be a mapping or PdfConfig, got {type(config).__name__}")
