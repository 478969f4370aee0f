"""Style model: named formatting parameters consulted by every builder."""
from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field, fields, replace
from typing import Dict, Iterator, Mapping, Optional

STYLE_FIELDS = ("font", "font_size", "base_indent", "level_indent", "italics", "indent")


@dataclass(slots=True)
class Indent:
    left: float = 0
    right: float = 0


@dataclass(slots=True)
class StyleEntry:
    """Resolved formatting parameters for one named style.

    Built-in entries always have every required field populated; entries added
    by callers under new names are kept exactly as given and may be partial.
    """

    font: Optional[str] = None
    font_size: Optional[float] = None
    base_indent: Optional[float] = None
    level_indent: Optional[float] = None
    italics: Optional[bool] = None
    indent: Optional[Indent] = None
    extras: Dict[str, object] = field(default_factory=dict)

    def merged(self, overrides: Mapping[str, object]) -> "StyleEntry":
        """Return a copy with the override fields applied on top of this entry."""
        known = {name: value for name, value in overrides.items() if name in STYLE_FIELDS and value is not None}
        extras = dict(self.extras)
        extras.update({name: value for name, value in overrides.items() if name not in STYLE_FIELDS})
        return replace(self, extras=extras, **known)

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if item.name == "extras":
                data.update(value)
            elif isinstance(value, Indent):
                data[item.name] = {"left": value.left, "right": value.right}
            elif value is not None:
                data[item.name] = value
        return data


DEFAULT_STYLES: Mapping[str, StyleEntry] = {
    "normal": StyleEntry(font="Times-Roman", font_size=12, base_indent=72, level_indent=0),
    "header_1": StyleEntry(font="Helvetica-Bold", font_size=16, base_indent=72, level_indent=0),
    "header_2": StyleEntry(font="Helvetica-Bold", font_size=14, base_indent=72, level_indent=0),
    "block_quote": StyleEntry(
        font="Times-Italic",
        font_size=12,
        base_indent=72,
        level_indent=0,
        italics=True,
        indent=Indent(left=0, right=0),
    ),
    "code_block": StyleEntry(font="Courier", font_size=12, base_indent=72, level_indent=0),
    "list_paragraph": StyleEntry(font="Times-Roman", font_size=12, base_indent=50, level_indent=25),
    "citation": StyleEntry(font="Times-Roman", font_size=12, base_indent=72, level_indent=0),
}


class StyleTable:
    """Mutable collection of named styles seeded with the built-in defaults."""

    def __init__(self, overrides: Optional[Mapping[str, Mapping[str, object]]] = None) -> None:
        self._styles: Dict[str, StyleEntry] = {}
        self.reset()
        if overrides:
            self.configure(overrides)

    def configure(self, overrides: Mapping[str, Mapping[str, object]]) -> None:
        """Merge normalised overrides onto the current styles.

        Known names are merged field by field; new names are inserted as given.
        """
        for name, override in overrides.items():
            if override is None:
                continue
            current = self._styles.get(name)
            if current is None:
                self._styles[name] = StyleEntry().merged(override)
            else:
                self._styles[name] = current.merged(override)

    def reset(self) -> None:
        self._styles = {name: deepcopy(entry) for name, entry in DEFAULT_STYLES.items()}

    def get(self, name: Optional[str]) -> Optional[StyleEntry]:
        if name is None:
            return None
        return self._styles.get(name)

    def names(self) -> Iterator[str]:
        return iter(self._styles)

    def __getitem__(self, name: str) -> StyleEntry:
        return self._styles[name]

    def __contains__(self, name: object) -> bool:
        return name in self._styles
