"""Ordered-list numbering: indicator alphabets and per-depth counters."""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from quill_pdf.errors import IndicatorExhaustedError

MAX_LIST_DEPTH = 6

_ROMAN_DIGITS = (
    (50, "l"),
    (40, "xl"),
    (10, "x"),
    (9, "ix"),
    (5, "v"),
    (4, "iv"),
    (1, "i"),
)


def to_roman(value: int) -> str:
    """Render a positive integer as a lowercase roman numeral."""
    parts: List[str] = []
    for amount, digits in _ROMAN_DIGITS:
        count, value = divmod(value, amount)
        parts.append(digits * count)
    return "".join(parts)


NUMERALS: Tuple[str, ...] = tuple(str(number) for number in range(1, 101))
LETTERS: Tuple[str, ...] = tuple(chr(code) for code in range(ord("a"), ord("z") + 1)) + tuple(
    chr(code) * 2 for code in range(ord("a"), ord("z") + 1)
)
ROMAN: Tuple[str, ...] = tuple(to_roman(number) for number in range(1, 51))

# Alphabet used at each nesting depth; the cycle is fixed, not repeated past depth 5.
LIST_ALPHABETS: Tuple[Tuple[str, ...], ...] = (NUMERALS, LETTERS, ROMAN, NUMERALS, LETTERS, ROMAN)


class ListCounters:
    """Tracks how many ordered items were seen at each nesting depth."""

    def __init__(self, counters: Optional[Sequence[int]] = None) -> None:
        if counters is None:
            counters = [0] * MAX_LIST_DEPTH
        if len(counters) != MAX_LIST_DEPTH:
            raise ValueError(f"Expected {MAX_LIST_DEPTH} counters, got {len(counters)}")
        self._counters: List[int] = list(counters)

    @property
    def counters(self) -> Tuple[int, ...]:
        return tuple(self._counters)

    def reset(self) -> None:
        for index in range(MAX_LIST_DEPTH):
            self._counters[index] = 0

    def next_indicator(self, depth: int) -> str:
        """Return the indicator for the next item at ``depth`` and advance."""
        if not 0 <= depth < MAX_LIST_DEPTH:
            raise IndicatorExhaustedError(
                f"List depth {depth} is outside the supported range 0-{MAX_LIST_DEPTH - 1}"
            )
        alphabet = LIST_ALPHABETS[depth]
        position = self._counters[depth]
        if position >= len(alphabet):
            raise IndicatorExhaustedError(
                f"List depth {depth} ran past its {len(alphabet)} available indicators"
            )
        indicator = alphabet[position]
        self._advance(depth)
        return indicator

    def _advance(self, depth: int) -> None:
        self._counters[depth] += 1
        for index in range(depth + 1, MAX_LIST_DEPTH):
            self._counters[index] = 0
