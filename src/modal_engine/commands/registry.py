"""Command registry mapping Normal-mode verbs to handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterator, Optional, Sequence

from modal_engine.modes.base_mode import CommandStatus, ModeContext
from modal_engine.runtime.telemetry import record_event, span

CommandHandler = Callable[[ModeContext, int, Sequence[str]], bool]


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """A verb, the handler that runs it, and how many argument keys it needs."""

    verb: str
    handler: CommandHandler
    arity: int = 0
    description: str = ""

    def __post_init__(self) -> None:
        if len(self.verb) != 1:
            raise ValueError(f"command verb must be one character, got {self.verb!r}")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        if self.arity < 0:
            raise ValueError("arity cannot be negative")


class CommandConflictError(RuntimeError):
    """Raised when a verb is registered twice without ``replace=True``."""

    def __init__(self, spec: CommandSpec, existing: CommandSpec) -> None:
        super().__init__(
            f"Command '{spec.verb}' already registered ({existing.description or 'no description'})"
        )
        self.spec = spec
        self.existing = existing


class CommandRegistry:
    """``CommandExecutor`` backed by registered ``CommandSpec`` entries.

    Unknown verbs and handlers returning False are ``REJECTED``; a verb still
    short of its arity is ``PENDING`` so Normal mode keeps collecting keys.
    """

    def __init__(self, context: ModeContext, *, logger_name: str | None = None) -> None:
        self.context = context
        self._commands: Dict[str, CommandSpec] = {}
        self._logger_name = logger_name

    def __contains__(self, verb: object) -> bool:
        return verb in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[CommandSpec]:
        return iter(self._commands.values())

    def get(self, verb: str) -> Optional[CommandSpec]:
        return self._commands.get(verb)

    def register(self, spec: CommandSpec, *, replace: bool = False) -> CommandSpec:
        existing = self._commands.get(spec.verb)
        if existing is not None and not replace:
            raise CommandConflictError(spec, existing)
        self._commands[spec.verb] = spec
        return spec

    def unregister(self, verb: str) -> Optional[CommandSpec]:
        return self._commands.pop(verb, None)

    def execute(self, count: int, command: str, args: Sequence[str]) -> CommandStatus:
        with span(
            "commands::execute",
            logger_name=self._logger_name,
            component="commands",
            metadata={"verb": command, "count": count, "args": "".join(args)},
        ) as handle:
            spec = self._commands.get(command)
            if spec is None:
                handle.add_metadata("status", "unknown")
                return self._reject(command, args, reason="unknown")

            if len(args) < spec.arity:
                handle.add_metadata("status", "pending")
                return CommandStatus.PENDING

            if not spec.handler(self.context, count, tuple(args)):
                handle.add_metadata("status", "rejected")
                return self._reject(command, args, reason="handler")

            handle.add_metadata("status", "executed")
            return CommandStatus.EXECUTED

    def _reject(self, command: str, args: Sequence[str], *, reason: str) -> CommandStatus:
        record_event(
            "commands.rejected",
            level="warning",
            data={"verb": command, "args": "".join(args), "reason": reason},
            logger_name=self._logger_name,
        )
        return CommandStatus.REJECTED


__all__ = [
    "CommandConflictError",
    "CommandHandler",
    "CommandRegistry",
    "CommandSpec",
]
