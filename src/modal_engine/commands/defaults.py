"""Built-in commands and the stock controller wiring."""

from __future__ import annotations

from typing import Iterable, Optional

from modal_engine.buffer import HostEditor
from modal_engine.config import EngineSettings
from modal_engine.modes import ModeBus, ModeContext, ModeController

from . import actions
from .registry import CommandRegistry, CommandSpec

DEFAULT_COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec("h", actions.move_left, description="Move left"),
    CommandSpec("l", actions.move_right, description="Move right"),
    CommandSpec("0", actions.line_start, description="Go to line start"),
    CommandSpec("$", actions.line_end, description="Go to last character"),
    CommandSpec("i", actions.enter_insert, description="Insert before caret"),
    CommandSpec("I", actions.insert_at_line_start, description="Insert at line start"),
    CommandSpec("a", actions.append, description="Append after caret"),
    CommandSpec("A", actions.append_at_line_end, description="Append at line end"),
    CommandSpec("V", actions.enter_visual, description="Line-wise visual mode"),
    CommandSpec("d", actions.delete_lines, arity=1, description="Delete lines (dd)"),
    CommandSpec("y", actions.yank_lines, arity=1, description="Yank lines (yy)"),
)


def load_default_commands(
    registry: CommandRegistry,
    *,
    commands: Iterable[CommandSpec] = DEFAULT_COMMANDS,
    replace: bool = False,
) -> CommandRegistry:
    for spec in commands:
        registry.register(spec, replace=replace)
    return registry


def create_default_controller(
    host: HostEditor,
    *,
    settings: Optional[EngineSettings] = None,
    bus: Optional[ModeBus] = None,
) -> ModeController:
    """Build a controller over ``host`` with the default command set."""

    context = ModeContext(host=host, bus=bus or ModeBus())
    registry = load_default_commands(
        CommandRegistry(context, logger_name="modal_engine.commands")
    )
    context.extras["command_registry"] = registry
    return ModeController(context, registry, settings=settings)


__all__ = ["DEFAULT_COMMANDS", "load_default_commands", "create_default_controller"]
