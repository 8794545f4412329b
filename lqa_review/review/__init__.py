"""Review bookkeeping: reviewed flags and review timers."""

from .timers import PageTiming, ReviewTimers, SegmentTimerState
from .tracker import ReviewTracker, mark_all_visible, set_reviewed

__all__ = [
    "ReviewTracker",
    "mark_all_visible",
    "set_reviewed",
    "ReviewTimers",
    "PageTiming",
    "SegmentTimerState",
]
