from __future__ import annotations

import pytest

from modal_engine.modes import VisualSelectionTracker


def test_tracker_starts_collapsed_on_anchor() -> None:
    tracker = VisualSelectionTracker()
    tracker.begin(4)

    assert tracker.range == (4, 4)
    assert tracker.bounds == (4, 4)


def test_extending_down_keeps_anchor_first() -> None:
    tracker = VisualSelectionTracker()
    tracker.begin(10)

    for _ in range(5):
        tracker.extend(1)

    assert tracker.endpoint == 15
    assert tracker.range == (10, 15)


def test_crossing_above_anchor_shifts_both_ends() -> None:
    tracker = VisualSelectionTracker()
    tracker.begin(10)

    assert tracker.extend(-1) == (11, 8)
    for _ in range(6):
        tracker.extend(-1)

    assert tracker.endpoint == 3
    assert tracker.range == (11, 2)
    assert tracker.bounds == (2, 11)


def test_reset_discards_selection() -> None:
    tracker = VisualSelectionTracker()
    tracker.begin(1)
    tracker.reset()

    assert tracker.active is False
    assert tracker.bounds is None
    with pytest.raises(RuntimeError):
        tracker.extend(1)
