"""Normalized key events and the symbolic key names the engine understands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

ESCAPE = "escape"
ENTER = "enter"
BACKSPACE = "backspace"
DELETE = "delete"
LEFT = "left"
RIGHT = "right"
UP = "up"
DOWN = "down"
HOME = "home"
END = "end"
PAGE_UP = "pageup"
PAGE_DOWN = "pagedown"

CTRL = "ctrl"
ALT = "alt"
SHIFT = "shift"

MODIFIER_ALIASES = {
    "c": CTRL,
    "ctrl": CTRL,
    "control": CTRL,
    "m": ALT,
    "alt": ALT,
    "meta": ALT,
    "s": SHIFT,
    "shift": SHIFT,
}

KEY_ALIASES = {
    "esc": ESCAPE,
    "<esc>": ESCAPE,
    "return": ENTER,
    "page_up": PAGE_UP,
    "page_down": PAGE_DOWN,
    "prior": PAGE_UP,
    "next": PAGE_DOWN,
}


def normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = []
    for raw in modifiers:
        cleaned = str(raw).strip().lower()
        if not cleaned:
            continue
        values.append(MODIFIER_ALIASES.get(cleaned, cleaned))
    return tuple(sorted(dict.fromkeys(values)))


def normalize_key(key: str) -> str:
    if len(key) == 1:
        return key
    lowered = key.strip().lower()
    return KEY_ALIASES.get(lowered, lowered)


@dataclass(frozen=True, slots=True)
class KeyInput:
    """Single logical key press: symbolic code, resolved character, modifiers."""

    key: str
    modifiers: tuple[str, ...] = ()
    text: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "key", normalize_key(self.key))
        object.__setattr__(self, "modifiers", normalize_modifiers(self.modifiers))

    @property
    def char(self) -> Optional[str]:
        """Resolved character, falling back to single-character key codes."""

        if self.text:
            return self.text
        if len(self.key) == 1:
            return self.key
        return None

    @property
    def unmodified(self) -> bool:
        return not self.modifiers

    def is_ctrl(self, key: str) -> bool:
        return self.modifiers == (CTRL,) and self.key.lower() == key

    def is_plain(self, key: str) -> bool:
        return self.unmodified and self.key == key

    @property
    def token(self) -> str:
        if self.modifiers:
            return "+".join(self.modifiers) + "+" + self.key
        return self.key


def is_cancel(key: KeyInput) -> bool:
    """Unmodified Escape or Ctrl+c."""

    return key.is_plain(ESCAPE) or key.is_ctrl("c")


__all__ = [
    "KeyInput",
    "normalize_key",
    "normalize_modifiers",
    "is_cancel",
    "ESCAPE",
    "ENTER",
    "BACKSPACE",
    "DELETE",
    "LEFT",
    "RIGHT",
    "UP",
    "DOWN",
    "HOME",
    "END",
    "PAGE_UP",
    "PAGE_DOWN",
    "CTRL",
    "ALT",
    "SHIFT",
]
