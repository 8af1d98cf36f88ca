"""In-memory host editor combining document, caret state, and registers."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from modal_engine.keys import (
    BACKSPACE,
    DELETE,
    DOWN,
    END,
    ENTER,
    HOME,
    LEFT,
    PAGE_DOWN,
    PAGE_UP,
    RIGHT,
    SHIFT,
    UP,
    KeyInput,
)
from modal_engine.runtime import telemetry

from .document import TextDocument
from .registers import RegisterBank
from .state import BufferState, CaretShape
from .sync import BufferMirror
from .validation import ensure_offset, ensure_range

DEFAULT_PAGE_LINES = 20


class Buffer:
    """Reference ``HostEditor`` implementation backed by a ``TextDocument``."""

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[TextDocument] = None,
        state: Optional[BufferState] = None,
        registers: Optional[RegisterBank] = None,
        page_lines: int = DEFAULT_PAGE_LINES,
    ) -> None:
        self.name = name
        self.document = document or TextDocument()
        self.state = state or BufferState()
        self.registers = registers or RegisterBank()
        self.page_lines = max(1, page_lines)
        self._default_keys: Dict[str, Callable[[], object]] = {
            LEFT: self.move_left,
            RIGHT: self.move_right,
            UP: self.move_up,
            DOWN: self.move_down,
            HOME: self._move_home,
            END: self._move_end,
            PAGE_UP: self.page_up,
            PAGE_DOWN: self.page_down,
            BACKSPACE: self._backspace,
            DELETE: self._delete_forward,
            ENTER: lambda: self.insert_text("\n"),
        }

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        name: str = "default",
        caret: int = 0,
        page_lines: int = DEFAULT_PAGE_LINES,
    ) -> "Buffer":
        buffer = cls(name=name, document=TextDocument(text), page_lines=page_lines)
        buffer.set_caret_offset(caret)
        return buffer

    @property
    def text(self) -> str:
        return self.document.text

    # -- caret -----------------------------------------------------------

    @property
    def caret_offset(self) -> int:
        return self.state.caret

    @property
    def caret_line(self) -> int:
        return self.document.line_of(self.state.caret)

    @property
    def caret_column(self) -> int:
        return self.document.column_of(self.state.caret)

    def set_caret_offset(self, offset: int) -> None:
        self.state.set_caret(self.document.clamp(offset))

    def set_caret_shape(self, shape: CaretShape) -> None:
        self.state.caret_shape = shape

    def char_at(self, offset: int) -> str:
        return self.document.char_at(offset)

    def move_left(self) -> bool:
        if self.state.caret <= 0:
            return False
        self.state.set_caret(self.state.caret - 1)
        return True

    def move_right(self) -> bool:
        if self.state.caret >= len(self.document):
            return False
        self.state.set_caret(self.state.caret + 1)
        return True

    def move_up(self, lines: int = 1) -> bool:
        return self._move_lines(-lines)

    def move_down(self, lines: int = 1) -> bool:
        return self._move_lines(lines)

    def page_up(self) -> None:
        self._move_lines(-self.page_lines)

    def page_down(self) -> None:
        self._move_lines(self.page_lines)

    def _move_lines(self, delta: int) -> bool:
        line = self.caret_line
        target = self.document.clamp_line(line + delta)
        if target == line:
            return False
        column = self.caret_column
        start = self.document.line_start(target)
        end = self.document.line_end(target)
        self.state.set_caret(min(start + column, end))
        return True

    def _move_home(self) -> None:
        self.state.set_caret(self.document.line_start(self.caret_line))

    def _move_end(self) -> None:
        self.state.set_caret(self.document.line_end(self.caret_line))

    # -- selection + clipboard -------------------------------------------

    def select_lines(self, start: int, end: int) -> None:
        first, last = sorted((start, end))
        first = self.document.clamp_line(first)
        last = self.document.clamp_line(last)
        self.state.set_selection(
            self.document.line_span(first, last), lines=(first, last)
        )

    def clear_selection(self) -> None:
        self.state.clear_selection()

    def selected_text(self) -> str:
        if self.state.selection is None:
            return ""
        return self.document.get_text(*self.state.selection)

    def copy_selection(self) -> str:
        if self.state.selection is None:
            return ""
        text = self.selected_text()
        self._yank(text)
        return text

    def cut_selection(self) -> str:
        if self.state.selection is None:
            return ""
        start, end = self.state.selection
        text = self.selected_text()
        self._yank(text)
        self.state.clear_selection()
        self.delete_range(start, end)
        self.set_caret_offset(start)
        return text

    def _yank(self, text: str) -> None:
        register_type = "line" if self.state.selected_lines else "character"
        self.registers.yank_to('"', text, register_type=register_type)

    # -- editing ---------------------------------------------------------

    def replace_range(self, start: int, end: int, text: str, *, label: str) -> None:
        start, end = ensure_range(self.document, start, end)
        with telemetry.span(
            name=f"buffer::{label}",
            component=True,
            metadata={"buffer": self.name},
        ):
            self.document = self.document.replace(start, end, text)
            self.state.set_caret(start + len(text))

    def insert_text(self, text: str, *, offset: Optional[int] = None) -> None:
        position = ensure_offset(
            self.document, self.state.caret if offset is None else offset
        )
        self.replace_range(position, position, text, label="insert_text")

    def delete_range(self, start: int, end: int) -> None:
        self.replace_range(start, end, "", label="delete_range")

    def _backspace(self) -> bool:
        caret = self.state.caret
        if caret <= 0:
            return False
        start = caret - 1
        if self.document.get_text(start - 1, caret) == "\r\n":
            start -= 1
        self.delete_range(start, caret)
        return True

    def _delete_forward(self) -> bool:
        caret = self.state.caret
        if caret >= len(self.document):
            return False
        end = caret + 1
        if self.document.get_text(caret, caret + 2) == "\r\n":
            end += 1
        self.delete_range(caret, end)
        self.state.set_caret(caret)
        return True

    def handle_default_key(self, key: KeyInput) -> bool:
        """Plain-editor behaviour: navigation keys and text insertion."""

        if key.modifiers and key.modifiers != (SHIFT,):
            return False
        action = self._default_keys.get(key.key)
        if action is not None:
            action()
            return True
        char = key.char
        if char and char.isprintable():
            self.insert_text(char)
            return True
        return False

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.document.text,
            caret=self.state.caret,
            caret_shape=self.state.caret_shape,
            selected_lines=self.state.selected_lines,
            attributes=dict(attributes or {}),
        )


__all__ = ["Buffer", "DEFAULT_PAGE_LINES"]
