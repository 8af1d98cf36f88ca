"""Normal-mode command registry and the built-in command set."""

from .defaults import DEFAULT_COMMANDS, create_default_controller, load_default_commands
from .registry import CommandConflictError, CommandHandler, CommandRegistry, CommandSpec

__all__ = [
    "CommandConflictError",
    "CommandHandler",
    "CommandRegistry",
    "CommandSpec",
    "DEFAULT_COMMANDS",
    "create_default_controller",
    "load_default_commands",
]
