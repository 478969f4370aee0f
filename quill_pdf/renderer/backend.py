"""Backend protocol for drawing instructions, plus an in-memory recorder."""
from __future__ import annotations

from concurrent.futures import Future
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Protocol, Tuple


@dataclass(frozen=True, slots=True)
class TextOptions:
    """Formatting passed along with a drawText instruction."""

    underline: bool = False
    strike: bool = False
    oblique: bool = False
    link: Optional[str] = None
    continued: bool = False
    width: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if self.width is None:
            del data["width"]
        return data


@dataclass(frozen=True, slots=True)
class ImageOptions:
    fit: Tuple[float, float] = (200, 200)
    align: str = "center"

    def to_dict(self) -> Dict[str, Any]:
        return {"fit": list(self.fit), "align": self.align}


class DrawingBackend(Protocol):
    """Protocol for page-layout engines consuming drawing instructions."""

    def set_font(self, name: str) -> None:
        """Select the active font."""

    def set_font_size(self, size: float) -> None:
        """Select the active font size in points."""

    def set_fill_color(self, color: str) -> None:
        """Select the fill color used for subsequent text."""

    def move_down(self, lines: float = 1) -> None:
        """Advance the cursor by a number of lines."""

    def move_up(self, lines: float = 1) -> None:
        """Move the cursor back by a number of lines."""

    def draw_text(self, content: str, x: Optional[float], y: Optional[float], options: TextOptions) -> None:
        """Emit a text run at the given position."""

    def draw_image(self, data: Any, options: ImageOptions) -> None:
        """Embed an image."""

    def finish(self) -> None:
        """Flush every instruction; resolves the output handle."""

    def open_output(self) -> "Future[Any]":
        """Return the completion handle resolved by ``finish``."""


@dataclass(frozen=True, slots=True)
class Instruction:
    """One recorded backend call."""

    method: str
    args: Tuple[Any, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        args = [arg.to_dict() if hasattr(arg, "to_dict") else arg for arg in self.args]
        return {"method": self.method, "args": args}


class RecordingBackend:
    """Backend that records every instruction instead of drawing it."""

    def __init__(self) -> None:
        self.instructions: List[Instruction] = []
        self._output: Optional["Future[List[Instruction]]"] = None

    def open_output(self) -> "Future[List[Instruction]]":
        if self._output is None:
            self._output = Future()
        return self._output

    def set_font(self, name: str) -> None:
        self._record("set_font", name)

    def set_font_size(self, size: float) -> None:
        self._record("set_font_size", size)

    def set_fill_color(self, color: str) -> None:
        self._record("set_fill_color", color)

    def move_down(self, lines: float = 1) -> None:
        self._record("move_down", lines)

    def move_up(self, lines: float = 1) -> None:
        self._record("move_up", lines)

    def draw_text(self, content: str, x: Optional[float], y: Optional[float], options: TextOptions) -> None:
        self._record("draw_text", content, x, y, options)

    def draw_image(self, data: Any, options: ImageOptions) -> None:
        self._record("draw_image", data, options)

    def finish(self) -> None:
        self._record("finish")
        output = self.open_output()
        if not output.done():
            output.set_result(list(self.instructions))

    # ------------------------------------------------------------------
    def methods(self) -> List[str]:
        return [instruction.method for instruction in self.instructions]

    def texts(self) -> List[Instruction]:
        return [instruction for instruction in self.instructions if instruction.method == "draw_text"]

    def _record(self, method: str, *args: Any) -> None:
        self.instructions.append(Instruction(method=method, args=args))
