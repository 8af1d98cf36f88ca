from __future__ import annotations

import pytest

from modal_engine.modes import CommandBuffer, CommandState


def test_digits_accumulate_before_command() -> None:
    buffer = CommandBuffer()

    assert buffer.push("2") is False
    assert buffer.push("5") is False
    assert buffer.state is CommandState.ACCUMULATING_COUNT
    assert buffer.push("j") is True

    assert buffer.snapshot() == (25, "j", ())
    assert buffer.state is CommandState.AWAITING_ARGS


def test_leading_zero_becomes_command() -> None:
    buffer = CommandBuffer()

    assert buffer.push("0") is True
    assert buffer.pending_command == "0"
    assert buffer.count == 1


def test_characters_after_command_are_args() -> None:
    buffer = CommandBuffer()
    buffer.push("d")
    buffer.push("3")
    buffer.push("w")

    assert buffer.snapshot() == (1, "d", ("3", "w"))
    assert buffer.display == "d3w"


@pytest.mark.parametrize(
    "digits,expected",
    [("", 1), ("7", 7), ("042", 42), ("0", 1), ("99999999999999", 1)],
)
def test_count_falls_back_to_one(digits: str, expected: int) -> None:
    assert CommandBuffer(count_digits=digits).count == expected


def test_count_respects_custom_maximum() -> None:
    assert CommandBuffer(count_digits="50", max_count=10).count == 1
    assert CommandBuffer(count_digits="10", max_count=10).count == 10


def test_complete_clears_everything_for_regular_commands() -> None:
    buffer = CommandBuffer(count_digits="3", pending_command="d", args=["d"])

    buffer.complete()

    assert (buffer.count_digits, buffer.pending_command, buffer.args) == ("", None, [])
    assert buffer.state is CommandState.IDLE


def test_complete_keeps_count_after_zero_command() -> None:
    buffer = CommandBuffer(count_digits="3", pending_command="0")

    buffer.complete()

    assert buffer.count_digits == "3"
    assert buffer.pending_command is None
    assert buffer.state is CommandState.ACCUMULATING_COUNT


def test_clear_drops_count_too() -> None:
    buffer = CommandBuffer(count_digits="3", pending_command="0", args=["x"])

    buffer.clear()

    assert buffer.state is CommandState.IDLE
    assert buffer.display == ""


def test_push_requires_single_character() -> None:
    with pytest.raises(ValueError):
        CommandBuffer().push("ab")
