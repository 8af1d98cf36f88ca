"""Default Normal-mode command handlers."""

from __future__ import annotations

from typing import Sequence

from modal_engine.buffer import HostEditor, is_eol
from modal_engine.config import ModeName
from modal_engine.modes.base_mode import ModeContext


def request_mode(context: ModeContext, mode: ModeName) -> None:
    context.bus.emit("mode.request", mode)


def _at_line_end(host: HostEditor, offset: int) -> bool:
    char = host.char_at(offset)
    return char == "" or is_eol(char)


def _to_line_start(host: HostEditor) -> None:
    host.set_caret_offset(host.caret_offset - host.caret_column)


def move_left(context: ModeContext, count: int, args: Sequence[str]) -> bool:
    del args
    host = context.host
    for _ in range(count):
        if host.caret_column == 0 or not host.move_left():
            break
    return True


def move_right(context: ModeContext, count: int, args: Sequence[str]) -> bool:
    del args
    host = context.host
    for _ in range(count):
        if _at_line_end(host, host.caret_offset + 1) or not host.move_right():
            break
    return True


def line_start(context: ModeContext, count: int, args: Sequence[str]) -> bool:
    del count, args
    _to_line_start(context.host)
    return True


def line_end(context: ModeContext, count: int, args: Sequence[str]) -> bool:
    del count, args
    host = context.host
    while not _at_line_end(host, host.caret_offset + 1):
        if not host.move_right():
            break
    return True


def enter_insert(context: ModeContext, count: int, args: Sequence[str]) -> bool:
    del count, args
    request_mode(context, ModeName.INSERT)
    return True


def insert_at_line_start(context: ModeContext, count: int, args: Sequence[str]) -> bool:
    del count, args
    _to_line_start(context.host)
    request_mode(context, ModeName.INSERT)
    return True


def append(context: ModeContext, count: int, args: Sequence[str]) -> bool:
    del count, args
    host = context.host
    if not _at_line_end(host, host.caret_offset):
        host.move_right()
    request_mode(context, ModeName.INSERT)
    return True


def append_at_line_end(context: ModeContext, count: int, args: Sequence[str]) -> bool:
    del count, args
    host = context.host
    while not _at_line_end(host, host.caret_offset):
        if not host.move_right():
            break
    request_mode(context, ModeName.INSERT)
    return True


def enter_visual(context: ModeContext, count: int, args: Sequence[str]) -> bool:
    del count, args
    request_mode(context, ModeName.VISUAL)
    return True


def delete_lines(context: ModeContext, count: int, args: Sequence[str]) -> bool:
    """``dd``: cut ``count`` lines starting at the caret line."""

    if list(args) != ["d"]:
        return False
    host = context.host
    line = host.caret_line
    host.select_lines(line, line + count - 1)
    host.cut_selection()
    host.clear_selection()
    return True


def yank_lines(context: ModeContext, count: int, args: Sequence[str]) -> bool:
    """``yy``: copy ``count`` lines starting at the caret line."""

    if list(args) != ["y"]:
        return False
    host = context.host
    caret = host.caret_offset
    line = host.caret_line
    host.select_lines(line, line + count - 1)
    host.copy_selection()
    host.clear_selection()
    host.set_caret_offset(caret)
    return True


__all__ = [
    "append",
    "append_at_line_end",
    "delete_lines",
    "enter_insert",
    "enter_visual",
    "insert_at_line_start",
    "line_end",
    "line_start",
    "move_left",
    "move_right",
    "request_mode",
    "yank_lines",
]
