"""Pending count / command verb / argument accumulation for Normal mode."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from modal_engine.config import MAX_COUNT

COUNT_DIGITS = "0123456789"


class CommandState(str, Enum):
    IDLE = "idle"
    ACCUMULATING_COUNT = "accumulating_count"
    AWAITING_ARGS = "awaiting_args"


@dataclass(slots=True)
class CommandBuffer:
    """Collects ``[count] verb [args...]`` one keystroke at a time.

    ``0`` only extends the count once a non-zero digit has been seen; a
    leading ``0`` is a command verb of its own.
    """

    count_digits: str = ""
    pending_command: Optional[str] = None
    args: List[str] = field(default_factory=list)
    max_count: int = MAX_COUNT

    @property
    def state(self) -> CommandState:
        if self.pending_command is not None:
            return CommandState.AWAITING_ARGS
        if self.count_digits:
            return CommandState.ACCUMULATING_COUNT
        return CommandState.IDLE

    @property
    def count(self) -> int:
        """Repeat count; 1 when missing, malformed, zero, or too large."""

        try:
            value = int(self.count_digits)
        except ValueError:
            return 1
        if value < 1 or value > self.max_count:
            return 1
        return value

    @property
    def display(self) -> str:
        return self.count_digits + (self.pending_command or "") + "".join(self.args)

    def is_count_digit(self, char: str) -> bool:
        if self.pending_command is not None or char not in COUNT_DIGITS:
            return False
        return char != "0" or bool(self.count_digits)

    def push(self, char: str) -> bool:
        """Buffer ``char``; returns True when an execution attempt is due."""

        if len(char) != 1:
            raise ValueError(f"expected a single character, got {char!r}")
        if self.is_count_digit(char):
            self.count_digits += char
            return False
        if self.pending_command is None:
            self.pending_command = char
        else:
            self.args.append(char)
        return True

    def snapshot(self) -> Tuple[int, Optional[str], Tuple[str, ...]]:
        return self.count, self.pending_command, tuple(self.args)

    def complete(self) -> None:
        """Reset after an executed command, keeping the count after ``0``."""

        if self.pending_command != "0":
            self.count_digits = ""
        self.pending_command = None
        self.args.clear()

    def clear(self) -> None:
        self.count_digits = ""
        self.pending_command = None
        self.args.clear()


__all__ = ["CommandBuffer", "CommandState", "COUNT_DIGITS"]
