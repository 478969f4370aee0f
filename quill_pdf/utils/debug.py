"""Helpers to persist recorded instruction streams for debugging."""
from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Sequence

from quill_pdf.renderer.backend import Instruction


class InstructionDumper:
    """Writes recorded backend instructions onto disk for inspection."""

    FILENAME = "instructions.json"

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def dump(self, instructions: Sequence[Instruction]) -> Path:
        """Persist the instruction stream as JSON and return the file path."""
        self.directory.mkdir(parents=True, exist_ok=True)
        payload = [self._serialize(instruction) for instruction in instructions]
        target = self.directory / self.FILENAME
        target.write_text(json.dumps(payload, indent=2))
        return target

    def _serialize(self, value: Any) -> Any:
        if hasattr(value, "to_dict"):
            return self._serialize(value.to_dict())
        if is_dataclass(value):
            return {k: self._serialize(v) for k, v in asdict(value).items()}
        if isinstance(value, dict):
            return {k: self._serialize(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._serialize(v) for v in value]
        if isinstance(value, (bytes, bytearray)):
            return f"<{len(value)} bytes>"
        return value
