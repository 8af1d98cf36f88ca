"""Normal mode: count/verb/argument buffering on top of a command executor."""

from __future__ import annotations

from typing import Optional

from modal_engine.buffer import HostEditor, is_eol
from modal_engine.keys import PAGE_DOWN, PAGE_UP, KeyInput, is_cancel
from modal_engine.runtime import telemetry

from .base_mode import (
    CommandExecutor,
    CommandStatus,
    Mode,
    ModeContext,
    ModeName,
    ModeResult,
    consume,
    fallthrough,
)
from .command_buffer import CommandBuffer


def settle_caret(host: HostEditor) -> None:
    """Step the caret off line terminators while it has room on its line."""

    while is_eol(host.char_at(host.caret_offset)) and host.caret_column > 0:
        if not host.move_left():
            break


class NormalMode(Mode):
    name = ModeName.NORMAL

    def __init__(
        self,
        context: ModeContext,
        executor: CommandExecutor,
        *,
        command_buffer: Optional[CommandBuffer] = None,
    ) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("modal_engine.modes.normal")
        self.executor = executor
        self.command_buffer = command_buffer or CommandBuffer()

    def on_enter(self, previous: Optional[ModeName]) -> None:
        self.host.set_caret_shape(self.config.caret_shape)
        if previous is ModeName.INSERT:
            self.host.move_left()
            settle_caret(self.host)

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = self._dispatch(key)
        # a command may have switched modes
        if self.is_active():
            settle_caret(self.host)
        return result

    def _dispatch(self, key: KeyInput) -> ModeResult:
        if is_cancel(key):
            self.command_buffer.clear()
            return consume(status="cancel")

        if key.is_ctrl("f"):
            self.host.handle_default_key(KeyInput(PAGE_DOWN))
            return consume(status="page_down")

        if key.is_ctrl("b"):
            self.host.handle_default_key(KeyInput(PAGE_UP))
            return consume(status="page_up")

        if not key.unmodified or key.key in (PAGE_DOWN, PAGE_UP):
            return fallthrough()

        char = key.char
        if char is None or len(char) != 1:
            return consume(status="ignored")

        if not self.command_buffer.push(char):
            return consume(status="count", message=self.command_buffer.count_digits)

        return self._execute()

    def _execute(self) -> ModeResult:
        count, command, args = self.command_buffer.snapshot()
        if command is None:
            raise RuntimeError("no pending command to execute")
        try:
            outcome = self.executor.execute(count, command, args)
        except Exception as exc:
            telemetry.record_event(
                "commands.error",
                level="error",
                data={"verb": command, "count": count, "error": str(exc)},
                logger_name="modal_engine.modes.normal",
            )
            self.command_buffer.clear()
            return consume(status="command_error", message=str(exc))

        status = CommandStatus.coerce(outcome)
        if status is CommandStatus.EXECUTED:
            self.command_buffer.complete()
        elif status is CommandStatus.REJECTED:
            self.command_buffer.clear()
        return consume(status=status.value, message=command)


__all__ = ["NormalMode", "settle_caret"]
