from __future__ import annotations

from typing import Sequence, Tuple

import pytest

from modal_engine.buffer import Buffer
from modal_engine.commands import (
    DEFAULT_COMMANDS,
    CommandConflictError,
    CommandRegistry,
    CommandSpec,
    create_default_controller,
    load_default_commands,
)
from modal_engine.keys import KeyInput
from modal_engine.modes import CommandState, CommandStatus, ModeContext, ModeController, ModeName


def make_default(text: str, *, caret: int = 0) -> Tuple[ModeController, Buffer]:
    buffer = Buffer.from_text(text, caret=caret)
    return create_default_controller(buffer), buffer


def type_keys(controller: ModeController, keys: str) -> None:
    for key in keys:
        controller.handle_key(KeyInput(key, text=key))


def noop(context: ModeContext, count: int, args: Sequence[str]) -> bool:
    del context, count, args
    return True


def test_registry_rejects_unknown_verbs() -> None:
    registry = CommandRegistry(ModeContext(host=Buffer()))

    assert registry.execute(1, "z", ()) is CommandStatus.REJECTED


def test_registry_waits_for_arguments() -> None:
    registry = CommandRegistry(ModeContext(host=Buffer()))
    registry.register(CommandSpec("d", noop, arity=1))

    assert registry.execute(1, "d", ()) is CommandStatus.PENDING
    assert registry.execute(1, "d", ("d",)) is CommandStatus.EXECUTED


def test_registry_handler_false_is_rejection() -> None:
    registry = CommandRegistry(ModeContext(host=Buffer()))
    registry.register(CommandSpec("q", lambda context, count, args: False))

    assert registry.execute(1, "q", ()) is CommandStatus.REJECTED


def test_registry_conflicts_and_replace() -> None:
    registry = CommandRegistry(ModeContext(host=Buffer()))
    registry.register(CommandSpec("x", noop, description="first"))

    with pytest.raises(CommandConflictError):
        registry.register(CommandSpec("x", noop))

    replacement = CommandSpec("x", noop, description="second")
    registry.register(replacement, replace=True)
    assert registry.get("x") is replacement
    assert registry.unregister("x") is replacement
    assert "x" not in registry


def test_command_spec_validation() -> None:
    with pytest.raises(ValueError):
        CommandSpec("dd", noop)
    with pytest.raises(ValueError):
        CommandSpec("d", noop, arity=-1)
    with pytest.raises(TypeError):
        CommandSpec("d", "not callable")  # type: ignore[arg-type]


def test_load_default_commands_registers_all_verbs() -> None:
    registry = load_default_commands(CommandRegistry(ModeContext(host=Buffer())))

    assert len(registry) == len(DEFAULT_COMMANDS)
    assert {spec.verb for spec in registry} >= {"h", "l", "0", "$", "i", "V", "d", "y"}


def test_motions_stay_on_the_line() -> None:
    controller, buffer = make_default("hello\nworld\n", caret=1)

    type_keys(controller, "10l")
    assert buffer.caret_offset == 4

    type_keys(controller, "2h")
    assert buffer.caret_offset == 2

    type_keys(controller, "0")
    assert buffer.caret_offset == 0

    type_keys(controller, "$")
    assert buffer.caret_offset == 4


def test_insert_then_escape_round_trip() -> None:
    controller, buffer = make_default("abc\n", caret=1)

    type_keys(controller, "i")
    assert controller.mode is ModeName.INSERT

    type_keys(controller, "XY")
    controller.handle_key(KeyInput("escape"))

    assert buffer.text == "aXYbc\n"
    assert controller.mode is ModeName.NORMAL
    assert buffer.caret_offset == 2


def test_escape_at_line_start_settles_on_previous_line() -> None:
    controller, buffer = make_default("abc\ndef\n", caret=4)

    type_keys(controller, "i")
    controller.handle_key(KeyInput("escape"))

    assert controller.mode is ModeName.NORMAL
    assert buffer.caret_offset == 2
    assert buffer.caret_line == 0


def test_append_commands_move_before_inserting() -> None:
    controller, buffer = make_default("abc\n", caret=0)

    type_keys(controller, "A")
    type_keys(controller, "!")
    controller.handle_key(KeyInput("escape"))
    assert buffer.text == "abc!\n"

    type_keys(controller, "I")
    type_keys(controller, ">")
    assert buffer.text == ">abc!\n"


def test_dd_deletes_counted_lines() -> None:
    controller, buffer = make_default("one\ntwo\nthree\nfour\n")
    buffer.set_caret_offset(buffer.document.line_start(1))

    type_keys(controller, "2dd")

    assert buffer.text == "one\nfour\n"
    assert buffer.registers.clipboard == "two\nthree\n"
    assert buffer.state.selection is None
    assert controller.command_buffer.state is CommandState.IDLE


def test_yy_copies_without_moving() -> None:
    controller, buffer = make_default("one\ntwo\nthree\n", caret=1)

    type_keys(controller, "2yy")

    assert buffer.registers.clipboard == "one\ntwo\n"
    assert buffer.caret_offset == 1
    assert buffer.text == "one\ntwo\nthree\n"


def test_unsupported_argument_is_rejected() -> None:
    controller, buffer = make_default("one\ntwo\n")

    type_keys(controller, "dx")

    assert buffer.text == "one\ntwo\n"
    assert controller.command_buffer.state is CommandState.IDLE


def test_unknown_verb_does_not_block_later_commands() -> None:
    controller, buffer = make_default("abc\n")

    type_keys(controller, "zl")

    assert buffer.caret_offset == 1


def test_visual_line_mode_from_normal_command() -> None:
    controller, buffer = make_default("a\nb\nc\n")
    buffer.set_caret_offset(buffer.document.line_start(1))

    type_keys(controller, "V")
    assert controller.mode is ModeName.VISUAL
    assert controller.visual_selection == (1, 1)

    type_keys(controller, "jy")
    assert buffer.registers.clipboard == "b\nc\n"
    assert controller.mode is ModeName.NORMAL


def test_visual_entry_selects_caret_line() -> None:
    controller, buffer = make_default("a\nb\nc\n")
    buffer.set_caret_offset(buffer.document.line_start(1))

    type_keys(controller, "V")
    assert buffer.state.selected_lines == controller.visual_selection == (1, 1)

    type_keys(controller, "y")
    assert buffer.registers.clipboard == "b\n"
    assert buffer.text == "a\nb\nc\n"

    type_keys(controller, "Vd")
    assert buffer.text == "a\nc\n"
    assert buffer.registers.clipboard == "b\n"
    assert controller.mode is ModeName.NORMAL
