"""Mode controller, per-mode handlers, and dispatch state."""

from .base_mode import (
    CommandExecutor,
    CommandStatus,
    Disposition,
    KeyInput,
    Mode,
    ModeBus,
    ModeContext,
    ModeName,
    ModeResult,
    consume,
    fallthrough,
)
from .command_buffer import CommandBuffer, CommandState
from .insert_mode import InsertMode
from .mode_manager import ModeController
from .normal_mode import NormalMode, settle_caret
from .visual_mode import VisualMode
from .visual_selection import VisualSelectionTracker

__all__ = [
    "CommandBuffer",
    "CommandExecutor",
    "CommandState",
    "CommandStatus",
    "Disposition",
    "InsertMode",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeController",
    "ModeName",
    "ModeResult",
    "NormalMode",
    "VisualMode",
    "VisualSelectionTracker",
    "consume",
    "fallthrough",
    "settle_caret",
]
