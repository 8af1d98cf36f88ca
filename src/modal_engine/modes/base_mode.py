"""Base classes and shared result types for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional, Protocol, Sequence, Union

from modal_engine.buffer import HostEditor
from modal_engine.config import MODE_CONFIGS, ModeConfig, ModeName
from modal_engine.keys import KeyInput


class Disposition(str, Enum):
    """Whether a mode consumed a key or wants it forwarded to the host."""

    CONSUMED = "consumed"
    FALLTHROUGH = "fallthrough"


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``."""

    disposition: Disposition
    switch_to: Optional[ModeName] = None
    status: str = "ok"
    message: Optional[str] = None
    forwarded: bool = False

    @property
    def consumed(self) -> bool:
        return self.disposition is Disposition.CONSUMED


def consume(
    *,
    switch_to: Optional[ModeName] = None,
    status: str = "ok",
    message: Optional[str] = None,
) -> ModeResult:
    return ModeResult(
        Disposition.CONSUMED, switch_to=switch_to, status=status, message=message
    )


def fallthrough(*, status: str = "fallthrough") -> ModeResult:
    return ModeResult(Disposition.FALLTHROUGH, status=status)


class CommandStatus(str, Enum):
    """Outcome of a command execution attempt.

    Executors may also answer with a plain bool: ``True`` means
    ``EXECUTED`` and ``False`` means ``PENDING`` (keep collecting arguments).
    """

    EXECUTED = "executed"
    PENDING = "pending"
    REJECTED = "rejected"

    @classmethod
    def coerce(cls, value: Union[bool, "CommandStatus"]) -> "CommandStatus":
        if isinstance(value, CommandStatus):
            return value
        return cls.EXECUTED if value else cls.PENDING


class CommandExecutor(Protocol):
    """Performs a buffered ``(count, command, args)`` triple against the host."""

    def execute(
        self, count: int, command: str, args: Sequence[str]
    ) -> Union[bool, CommandStatus]: ...


class ModeBus:
    """Minimal event bus letting modes, commands and adapters exchange signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode can access."""

    host: HostEditor
    bus: ModeBus = field(default_factory=ModeBus)
    extras: Dict[str, object] = field(default_factory=dict)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: ModeName

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    @property
    def config(self) -> ModeConfig:
        return MODE_CONFIGS[self.name]

    @property
    def host(self) -> HostEditor:
        return self.context.host

    def is_active(self) -> bool:
        return self.context.extras.get("active_mode") is self.name

    def on_enter(
        self, previous: Optional[ModeName]
    ) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(
        self, next_mode: ModeName
    ) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_key(
        self, key: KeyInput
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError


__all__ = [
    "CommandExecutor",
    "CommandStatus",
    "Disposition",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeName",
    "ModeResult",
    "consume",
    "fallthrough",
]
