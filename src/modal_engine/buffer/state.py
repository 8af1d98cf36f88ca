"""Caret, caret shape, and selection state for buffers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

OffsetRange = Tuple[int, int]
LineRange = Tuple[int, int]


class CaretShape(str, Enum):
    """How the host renders the caret."""

    BLOCK = "block"
    INSERT = "insert"


@dataclass(slots=True)
class BufferState:
    """Mutable caret + selection info tied to a TextDocument version."""

    caret: int = 0
    caret_shape: CaretShape = CaretShape.BLOCK
    selection: Optional[OffsetRange] = None
    selected_lines: Optional[LineRange] = None

    def set_caret(self, offset: int) -> None:
        self.caret = offset

    def set_selection(self, span: OffsetRange, lines: Optional[LineRange] = None) -> None:
        self.selection = span
        self.selected_lines = lines

    def clear_selection(self) -> None:
        self.selection = None
        self.selected_lines = None
