"""Line-wise Visual mode: extend with j/k, then cut or copy."""

from __future__ import annotations

from typing import Optional

from modal_engine.keys import KeyInput, is_cancel

from .base_mode import Mode, ModeContext, ModeName, ModeResult, consume
from .visual_selection import VisualSelectionTracker


class VisualMode(Mode):
    name = ModeName.VISUAL

    def __init__(
        self,
        context: ModeContext,
        *,
        selection: Optional[VisualSelectionTracker] = None,
    ) -> None:
        super().__init__(context)
        self.selection = selection or VisualSelectionTracker()

    def on_enter(self, previous: Optional[ModeName]) -> None:
        del previous
        self.host.set_caret_shape(self.config.caret_shape)
        line = self.host.caret_line
        self.selection.begin(line)
        self.host.select_lines(line, line)

    def on_exit(self, next_mode: ModeName) -> None:
        del next_mode
        self.host.clear_selection()
        self.selection.reset()

    def handle_key(self, key: KeyInput) -> ModeResult:
        if is_cancel(key):
            self.host.clear_selection()
            return consume(switch_to=ModeName.NORMAL, status="exit_visual")

        char = key.char if key.unmodified else None
        if char in ("j", "k"):
            start, end = self.selection.extend(1 if char == "j" else -1)
            self.host.select_lines(start, end)
            self.context.bus.emit(
                "visual.selection",
                {"anchor": self.selection.anchor, "range": (start, end)},
            )
            return consume(status="visual_select")

        if char == "d":
            text = self.host.cut_selection()
            self.context.bus.emit("visual.delete", {"text": text})
            return consume(switch_to=ModeName.NORMAL, status="visual_delete")

        if char in ("y", "Y"):
            text = self.host.copy_selection()
            self.host.clear_selection()
            self.context.bus.emit("visual.yank", {"text": text})
            return consume(switch_to=ModeName.NORMAL, status="visual_yank")

        return consume(status="ignored")


__all__ = ["VisualMode"]
