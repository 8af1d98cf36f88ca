"""Insert mode: everything goes to the host except the exit keys."""

from __future__ import annotations

from typing import Optional

from modal_engine.keys import KeyInput, is_cancel

from .base_mode import Mode, ModeName, ModeResult, consume, fallthrough


class InsertMode(Mode):
    name = ModeName.INSERT

    def on_enter(self, previous: Optional[ModeName]) -> None:
        del previous
        self.host.set_caret_shape(self.config.caret_shape)

    def handle_key(self, key: KeyInput) -> ModeResult:
        if is_cancel(key):
            return consume(switch_to=ModeName.NORMAL, status="exit_insert")
        return fallthrough()
