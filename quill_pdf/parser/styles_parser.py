"""Normalise caller style overrides into StyleEntry field names."""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from quill_pdf.errors import StyleConfigError
from quill_pdf.model.style_model import Indent, StyleEntry

OverrideMap = Dict[str, Dict[str, Any]]

_FIELD_ALIASES = {
    "fontSize": "font_size",
    "baseIndent": "base_indent",
    "levelIndent": "level_indent",
}


class StylesParser:
    """Translate a partial style map into overrides the StyleTable can merge."""

    def __init__(self, overrides: Optional[Mapping[str, Any]]) -> None:
        self._overrides = overrides

    def parse(self) -> OverrideMap:
        if not self._overrides:
            return {}
        if not isinstance(self._overrides, Mapping):
            raise StyleConfigError(f"Style overrides must be a mapping, got {type(self._overrides).__name__}")

        parsed: OverrideMap = {}
        for name, override in self._overrides.items():
            if override is None:
                continue
            parsed[str(name)] = self._parse_entry(str(name), override)
        return parsed

    def _parse_entry(self, name: str, override: Any) -> Dict[str, Any]:
        if isinstance(override, StyleEntry):
            override = override.to_dict()
        if not isinstance(override, Mapping):
            raise StyleConfigError(f"Style {name!r} must be a mapping, got {type(override).__name__}")

        entry: Dict[str, Any] = {}
        for key, value in override.items():
            field_name = _FIELD_ALIASES.get(key, key)
            if field_name == "indent" and value is not None:
                value = self._parse_indent(name, value)
            entry[field_name] = value
        return entry

    def _parse_indent(self, name: str, value: Any) -> Indent:
        if isinstance(value, Indent):
            return Indent(left=value.left, right=value.right)
        if isinstance(value, Mapping):
            return Indent(left=value.get("left", 0), right=value.get("right", 0))
        raise StyleConfigError(f"Style {name!r} indent must be a mapping with left/right")
