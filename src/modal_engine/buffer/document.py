"""Offset-addressed text storage for modal_engine buffers."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field

EOL_CHARS = frozenset("\r\n")


def is_eol(char: str) -> bool:
    return char in EOL_CHARS


@dataclass(slots=True)
class TextDocument:
    """Immutable-ish text with a line index.

    Lines are separated by ``\\n``; a ``\\r`` directly before it belongs to the
    terminator, so ``"ab\\r\\n"`` has a first line whose content ends at 2.
    Edits return a new document with a bumped version.
    """

    text: str = ""
    version: int = 0
    _line_starts: tuple[int, ...] = field(
        default=(0,), init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        starts = [0]
        starts.extend(index + 1 for index, char in enumerate(self.text) if char == "\n")
        self._line_starts = tuple(starts)

    def __len__(self) -> int:
        return len(self.text)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def char_at(self, offset: int) -> str:
        if 0 <= offset < len(self.text):
            return self.text[offset]
        return ""

    def clamp(self, offset: int) -> int:
        return max(0, min(offset, len(self.text)))

    def clamp_line(self, line: int) -> int:
        return max(0, min(line, self.line_count - 1))

    def line_of(self, offset: int) -> int:
        return bisect_right(self._line_starts, self.clamp(offset)) - 1

    def line_start(self, line: int) -> int:
        return self._line_starts[self.clamp_line(line)]

    def line_end(self, line: int) -> int:
        """Offset just past the last content character of ``line``."""

        line = self.clamp_line(line)
        if line + 1 >= self.line_count:
            end = len(self.text)
        else:
            end = self._line_starts[line + 1] - 1
        start = self._line_starts[line]
        while end > start and is_eol(self.text[end - 1]):
            end -= 1
        return end

    def column_of(self, offset: int) -> int:
        offset = self.clamp(offset)
        return offset - self.line_start(self.line_of(offset))

    def line_span(self, first: int, last: int) -> tuple[int, int]:
        """Half-open offset range covering whole lines, terminators included."""

        first = self.clamp_line(first)
        last = self.clamp_line(last)
        start = self._line_starts[first]
        if last + 1 < self.line_count:
            return start, self._line_starts[last + 1]
        return start, len(self.text)

    def get_text(self, start: int, end: int) -> str:
        return self.text[self.clamp(start) : self.clamp(end)]

    def replace(self, start: int, end: int, text: str) -> "TextDocument":
        start, end = self.clamp(start), self.clamp(end)
        updated = self.text[:start] + text + self.text[end:]
        return TextDocument(text=updated, version=self.version + 1)


__all__ = ["TextDocument", "EOL_CHARS", "is_eol"]
