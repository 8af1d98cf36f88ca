"""Textual adapter that wires ModeController results into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from modal_engine.buffer import Buffer, BufferMirror
from modal_engine.config import MODE_CONFIGS, ModeName
from modal_engine.keys import ALT, CTRL, SHIFT, KeyInput
from modal_engine.modes import ModeController, ModeResult


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def translate_textual_key(key: str, character: Optional[str] = None) -> KeyInput:
    """Turn a Textual key name (``"ctrl+f"``, ``"escape"``, ``"j"``) into a KeyInput.

    Printable characters typed with at most Shift held become plain keys, so
    ``"shift+y"``/``"Y"`` arrive as ``Y``.
    """

    parts = key.split("+") if len(key) > 1 else [key]
    base = parts[-1]
    modifiers = tuple(part for part in parts[:-1] if part)
    printable = bool(character) and len(character) == 1 and character.isprintable()
    if printable and set(modifiers) <= {SHIFT}:
        return KeyInput(character, text=character)
    if len(base) == 1 and modifiers and set(modifiers) & {CTRL, ALT}:
        base = base.lower()
    return KeyInput(base, modifiers=modifiers)


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # realtime debug lines
    log: Callable[[str], None] = _noop


class TextualModalAdapter:
    """Bridges ModeController + bus events to a Textual-friendly surface."""

    def __init__(self, controller: ModeController, hooks: TextualUIHooks) -> None:
        self.controller = controller
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_buffer()
        self._refresh_status()

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> ModeResult:
        """Translate a Textual key event and dispatch it through the controller."""

        key_input = translate_textual_key(key, character)
        self._log_state("key ->", key=key_input.token, text=key_input.text)
        result = self.controller.handle_key(key_input)
        self._refresh_buffer()
        self._refresh_status(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            forwarded=result.forwarded,
            status=result.status,
            message=result.message,
        )
        return result

    def status_text(self, result: Optional[ModeResult] = None) -> str:
        label = MODE_CONFIGS[self.controller.mode].label
        pending = self.controller.command_buffer.display
        parts = [f"-- {label} --"]
        if pending:
            parts.append(pending)
        if result is not None and result.status not in {"ok", "fallthrough"}:
            parts.append(f"[{result.status}]")
        return " ".join(parts)

    def _subscribe_events(self) -> None:
        bus = self.controller.context.bus
        for event in (
            "mode.changed",
            "visual.selection",
            "visual.yank",
            "visual.delete",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _refresh_buffer(self) -> None:
        host = self.controller.context.host
        if isinstance(host, Buffer):
            mode = self.controller.mode
            self.hooks.update_buffer(host.mirror(attributes={"mode": mode.value}))

    def _refresh_status(self, result: Optional[ModeResult] = None) -> None:
        self.hooks.update_status(self.status_text(result))

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        host = self.controller.context.host
        mode: ModeName = self.controller.mode
        return {
            "mode": mode.value,
            "caret": host.caret_offset,
            "pending": self.controller.command_buffer.display,
            "selection": self.controller.visual_selection,
        }


__all__ = ["TextualModalAdapter", "TextualUIHooks", "translate_textual_key"]
