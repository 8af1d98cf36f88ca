"""Adapter boundary types shared by the engine and host editors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Protocol

from .state import CaretShape, LineRange

if TYPE_CHECKING:  # pragma: no cover
    from modal_engine.keys import KeyInput


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    text: str
    caret: int
    caret_shape: CaretShape
    selected_lines: Optional[LineRange]
    attributes: dict[str, str] = field(default_factory=dict)


class HostEditor(Protocol):
    """Primitive operations the mode controller needs from a text editor.

    The controller never owns this state; it reads the caret at the start of
    every key event so external caret moves are picked up.
    """

    @property
    def caret_offset(self) -> int: ...

    @property
    def caret_line(self) -> int: ...

    @property
    def caret_column(self) -> int: ...

    def set_caret_offset(self, offset: int) -> None: ...

    def set_caret_shape(self, shape: CaretShape) -> None: ...

    def char_at(self, offset: int) -> str:
        """Return the character at ``offset`` or ``""`` past the end."""
        ...

    def move_left(self) -> bool: ...

    def move_right(self) -> bool: ...

    def page_up(self) -> None: ...

    def page_down(self) -> None: ...

    def select_lines(self, start: int, end: int) -> None:
        """Select whole lines from ``start`` to ``end`` (either order)."""
        ...

    def clear_selection(self) -> None: ...

    def cut_selection(self) -> str: ...

    def copy_selection(self) -> str: ...

    def handle_default_key(self, key: "KeyInput") -> bool:
        """Fallback handling for keys the active mode did not consume."""
        ...


class BufferValidationError(RuntimeError):
    """Raised when callers provide out-of-bounds offsets."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset
