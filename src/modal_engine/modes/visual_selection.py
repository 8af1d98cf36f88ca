"""Line-wise visual selection anchored where Visual mode was entered."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

LineRange = Tuple[int, int]


@dataclass(slots=True)
class VisualSelectionTracker:
    anchor: Optional[int] = None
    endpoint: Optional[int] = None

    @property
    def active(self) -> bool:
        return self.anchor is not None

    def begin(self, line: int) -> None:
        self.anchor = line
        self.endpoint = line

    def reset(self) -> None:
        self.anchor = None
        self.endpoint = None

    def extend(self, delta: int) -> LineRange:
        if self.anchor is None or self.endpoint is None:
            raise RuntimeError("visual selection has no anchor")
        self.endpoint += delta
        return self.range

    @property
    def range(self) -> LineRange:
        """``(start, end)`` handed to ``HostEditor.select_lines``.

        Once the endpoint moves above the anchor both ends shift one line
        outward: ``start`` goes to ``anchor + 1`` and ``end`` to
        ``endpoint - 1``.
        """

        if self.anchor is None or self.endpoint is None:
            raise RuntimeError("visual selection has no anchor")
        start, end = self.anchor, self.endpoint
        if end < start:
            end -= 1
            start += 1
        return start, end

    @property
    def bounds(self) -> Optional[LineRange]:
        if not self.active:
            return None
        start, end = self.range
        return min(start, end), max(start, end)


__all__ = ["VisualSelectionTracker", "LineRange"]
