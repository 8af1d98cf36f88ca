from __future__ import annotations

import pytest

from modal_engine.buffer import (
    Buffer,
    BufferValidationError,
    CaretShape,
    TextDocument,
)
from modal_engine.keys import CTRL, KeyInput


def test_document_line_index_handles_crlf() -> None:
    document = TextDocument("ab\r\ncd\n\nef")

    assert document.line_count == 4
    assert document.line_of(3) == 0
    assert document.line_of(4) == 1
    assert document.line_end(0) == 2
    assert document.line_end(2) == document.line_start(2)
    assert document.column_of(5) == 1
    assert document.char_at(99) == ""


def test_document_line_span_includes_terminators() -> None:
    document = TextDocument("a\nbb\nccc")

    assert document.line_span(0, 1) == (0, 5)
    assert document.line_span(1, 5) == (2, 8)


def test_document_replace_bumps_version() -> None:
    document = TextDocument("abc")

    updated = document.replace(1, 2, "XY")

    assert updated.text == "aXYc"
    assert updated.version == document.version + 1
    assert document.text == "abc"


def test_select_lines_orders_and_clamps() -> None:
    buffer = Buffer.from_text("a\nb\nc\n")

    buffer.select_lines(9, 1)

    assert buffer.state.selected_lines == (1, 3)
    assert buffer.selected_text() == "b\nc\n"


def test_cut_and_copy_use_registers() -> None:
    buffer = Buffer.from_text("a\nb\nc\n")
    buffer.select_lines(0, 0)

    assert buffer.copy_selection() == "a\n"
    assert buffer.registers.get().type == "line"

    buffer.select_lines(1, 1)
    assert buffer.cut_selection() == "b\n"
    assert buffer.text == "a\nc\n"
    assert buffer.caret_offset == 2
    assert buffer.state.selection is None


def test_cut_without_selection_is_noop() -> None:
    buffer = Buffer.from_text("abc")

    assert buffer.cut_selection() == ""
    assert buffer.copy_selection() == ""
    assert buffer.text == "abc"


def test_default_keys_edit_text() -> None:
    buffer = Buffer.from_text("ac", caret=1)

    assert buffer.handle_default_key(KeyInput("b", text="b")) is True
    assert buffer.text == "abc"

    buffer.handle_default_key(KeyInput("enter"))
    assert buffer.text == "ab\nc"

    buffer.handle_default_key(KeyInput("backspace"))
    buffer.handle_default_key(KeyInput("delete"))
    assert buffer.text == "ab"


def test_default_keys_ignore_control_chords() -> None:
    buffer = Buffer.from_text("abc")

    assert buffer.handle_default_key(KeyInput("a", (CTRL,))) is False
    assert buffer.text == "abc"


def test_vertical_moves_keep_column_within_line() -> None:
    buffer = Buffer.from_text("long line\nab\nanother", caret=6)

    buffer.move_down()
    assert buffer.caret_offset == buffer.document.line_end(1)

    buffer.move_down()
    assert buffer.caret_line == 2
    assert buffer.caret_column == 2


def test_insert_text_validates_offsets() -> None:
    buffer = Buffer.from_text("abc")

    with pytest.raises(BufferValidationError):
        buffer.insert_text("x", offset=10)


def test_mirror_reports_caret_shape() -> None:
    buffer = Buffer.from_text("abc", caret=2)
    buffer.set_caret_shape(CaretShape.INSERT)

    mirror = buffer.mirror(attributes={"mode": "insert"})

    assert mirror.caret == 2
    assert mirror.caret_shape is CaretShape.INSERT
    assert mirror.attributes == {"mode": "insert"}
