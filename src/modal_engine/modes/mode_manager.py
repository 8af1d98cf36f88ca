"""Mode controller owning the active mode, transitions, and key dispatch."""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from modal_engine.config import EngineSettings
from modal_engine.keys import KeyInput
from modal_engine.runtime import telemetry

from .base_mode import CommandExecutor, Mode, ModeContext, ModeName, ModeResult
from .command_buffer import CommandBuffer
from .insert_mode import InsertMode
from .normal_mode import NormalMode, settle_caret
from .visual_mode import VisualMode
from .visual_selection import LineRange, VisualSelectionTracker


class ModeController:
    """Routes key events to the active mode and forwards what it leaves alone.

    One controller per editor: mode, command buffer and visual selection all
    live on the instance.
    """

    def __init__(
        self,
        context: ModeContext,
        executor: CommandExecutor,
        *,
        settings: EngineSettings | None = None,
        initial_mode: ModeName | str | None = None,
    ) -> None:
        self.context = context
        self.settings = settings or EngineSettings()
        self.logger = telemetry.get_logger("modal_engine.modes")
        self.command_buffer = CommandBuffer(max_count=self.settings.max_count)
        self.selection = VisualSelectionTracker()
        self._modes: Dict[ModeName, Mode] = {}
        self._active: Optional[ModeName] = None
        self._register(
            NormalMode(context, executor, command_buffer=self.command_buffer),
            InsertMode(context),
            VisualMode(context, selection=self.selection),
        )
        self.context.extras.setdefault("mode_controller", self)
        self.context.bus.subscribe("mode.request", self._on_mode_request)
        self.set_mode(initial_mode or self.settings.initial_mode)

    def _register(self, *modes: Mode) -> None:
        for mode in modes:
            if mode.name in self._modes:
                raise ValueError(f"Mode '{mode.name.value}' already registered")
            self._modes[mode.name] = mode

    @property
    def mode(self) -> ModeName:
        if self._active is None:
            raise RuntimeError("ModeController has no active mode")
        return self._active

    @property
    def active_mode(self) -> Mode:
        return self._modes[self.mode]

    @property
    def modes(self) -> Iterable[Mode]:
        return tuple(self._modes.values())

    @property
    def visual_selection(self) -> Optional[LineRange]:
        """Materialized ``(first, last)`` selected lines while in Visual mode."""

        if self._active is not ModeName.VISUAL:
            return None
        return self.selection.bounds

    def set_mode(self, name: ModeName | str) -> None:
        try:
            target = ModeName(name)
        except ValueError as exc:
            raise KeyError(f"Unknown mode '{name}'") from exc

        previous = self._active
        if previous is target:
            return
        if previous is not None:
            self._modes[previous].on_exit(target)
        self._active = target
        self.context.extras["active_mode"] = target
        self._modes[target].on_enter(previous)
        telemetry.record_event(
            "mode.switch",
            data={
                "mode": target.value,
                "previous": previous.value if previous else None,
            },
        )
        self.context.bus.emit(
            "mode.changed", {"mode": target, "previous": previous}
        )

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        with telemetry.span(
            name=f"mode::{mode.name.value}",
            component=True,
            metadata={"key": key.token, "mode": mode.name.value},
        ) as handle:
            result = mode.handle_key(key)
            handle.add_metadata("status", result.status)
            if result.switch_to:
                self.set_mode(result.switch_to)
            if not result.consumed:
                self._forward(key)
                result.forwarded = True
        return result

    def handle_key_event(
        self,
        key: str,
        char: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> bool:
        """Dispatch a raw key; True once the key is handled here or forwarded.

        Keys left alone by the active mode are already passed to
        ``host.handle_default_key``, so callers must not process them again.
        ``handle_key`` keeps the consumed/fallthrough detail on ``ModeResult``.
        """

        self.handle_key(KeyInput(key, modifiers=tuple(modifiers), text=char))
        return True

    def _forward(self, key: KeyInput) -> None:
        self.context.host.handle_default_key(key)
        if self._active is ModeName.NORMAL:
            settle_caret(self.context.host)

    def _on_mode_request(self, payload: object | None) -> None:
        if isinstance(payload, (ModeName, str)):
            self.set_mode(payload)


__all__ = ["ModeController"]
