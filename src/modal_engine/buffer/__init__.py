"""Host editor protocol and the in-memory buffer that implements it."""

from .buffer import DEFAULT_PAGE_LINES, Buffer
from .document import EOL_CHARS, TextDocument, is_eol
from .registers import RegisterBank, RegisterValue
from .state import BufferState, CaretShape
from .sync import BufferMirror, BufferValidationError, HostEditor
from .validation import ensure_offset, ensure_range

__all__ = [
    "Buffer",
    "BufferMirror",
    "BufferState",
    "BufferValidationError",
    "CaretShape",
    "DEFAULT_PAGE_LINES",
    "EOL_CHARS",
    "HostEditor",
    "RegisterBank",
    "RegisterValue",
    "TextDocument",
    "ensure_offset",
    "ensure_range",
    "is_eol",
]
