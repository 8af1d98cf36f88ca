"""Executable Textual app that hosts the modal engine over an in-memory buffer."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when the demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use modal_engine.adapters.textual.app"
    ) from exc

from modal_engine.buffer import Buffer, BufferMirror, CaretShape
from modal_engine.commands import create_default_controller
from modal_engine.config import MODE_CONFIGS, EngineSettings, ModeName
from modal_engine.runtime import telemetry

from .controller import TextualModalAdapter, TextualUIHooks

SAMPLE_TEXT = """modal_engine demo

Normal mode: h l 0 $ move, i a I A insert, V selects lines, dd / yy.
Visual mode: j k extend, d cuts, y copies, Escape leaves.
Ctrl+f / Ctrl+b page down and up. Ctrl+q quits.
"""


def render_mirror(mirror: BufferMirror) -> str:
    """Plain-text rendering: ``>`` marks selected lines, the caret is inlined."""

    marker = "█" if mirror.caret_shape is CaretShape.BLOCK else "|"
    text = mirror.text
    caret = mirror.caret
    if mirror.caret_shape is CaretShape.BLOCK and caret < len(text) and text[caret] != "\n":
        rendered = text[:caret] + marker + text[caret + 1 :]
    else:
        rendered = text[:caret] + marker + text[caret:]

    selected = mirror.selected_lines
    lines = rendered.split("\n")
    if selected is not None:
        first, last = selected
        lines = [
            ("> " if first <= index <= last else "  ") + line
            for index, line in enumerate(lines)
        ]
    return "\n".join(lines)


@dataclass
class UIState:
    buffer_text: str = ""
    status_text: str = ""


class ModalEngineApp(App[None]):
    """Minimal Textual UI embedding the modal engine."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        text: str = SAMPLE_TEXT,
        settings: Optional[EngineSettings] = None,
    ) -> None:
        super().__init__()
        self._state = UIState()
        self._text = text
        self._settings = settings or EngineSettings.from_env()
        self.adapter: TextualModalAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view", markup=False)
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line", markup=False)
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        buffer = Buffer.from_text(
            self._text, name="demo", page_lines=self._settings.page_lines
        )
        controller = create_default_controller(buffer, settings=self._settings)
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            handle_event=self._handle_event,
            log=self._log_line,
        )
        self.adapter = TextualModalAdapter(controller, hooks)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key == "ctrl+q":
            return
        self.adapter.handle_textual_key(event.key, character=event.character)
        event.stop()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        self._state.buffer_text = render_mirror(mirror)
        if self._buffer_widget:
            self._buffer_widget.update(self._state.buffer_text)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "mode.changed" and isinstance(payload, dict):
            mode = payload.get("mode")
            if isinstance(mode, ModeName):
                self.sub_title = MODE_CONFIGS[mode].label

    def _log_line(self, line: str) -> None:
        self.log(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the modal engine Textual demo.")
    parser.add_argument(
        "path",
        nargs="?",
        help="Text file to load into the demo buffer (not written back)",
    )
    parser.add_argument(
        "--log-preset",
        default=os.environ.get("MODAL_ENGINE_LOG_PRESET", "quiet"),
        choices=("development", "production", "quiet"),
        help="telelog preset used while the UI is running (default: quiet)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    text = Path(args.path).read_text(encoding="utf-8") if args.path else SAMPLE_TEXT
    app = ModalEngineApp(text=text)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
