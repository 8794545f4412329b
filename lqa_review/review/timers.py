"""Review timers: segment time-to-review and page time-to-review.

Segment timers start when a unit gains focus and stop when it loses focus.
Time spent on a unit that was neither edited nor approved is discarded.
The page timer measures how long one page of units stayed on screen.
"""

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional


@dataclass
class SegmentTimerState:
    started_at: float
    has_edits: bool = False


@dataclass
class PageTiming:
    """Elapsed time (seconds) a page was shown."""

    page_index: int
    elapsed: float


class ReviewTimers:
    """Per-unit and per-page review timers driven by a monotonic clock."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._segments: Dict[str, SegmentTimerState] = {}
        self._page: Optional[tuple] = None

    def start_segment(self, guid: str) -> None:
        """Start (or restart) the timer for a unit gaining focus."""
        self._segments[guid] = SegmentTimerState(started_at=self.clock())

    def mark_segment_edited(self, guid: str) -> None:
        state = self._segments.get(guid)
        if state is not None:
            state.has_edits = True

    def stop_segment(self, guid: str, was_approved: bool) -> Optional[float]:
        """Stop a unit's timer.

        Returns:
            Elapsed seconds, or None when no timer ran or the unit was left
            without edits and without approval
        """
        state = self._segments.pop(guid, None)
        if state is None:
            return None
        if not was_approved and not state.has_edits:
            return None
        return self.clock() - state.started_at

    def start_page(self, page_index: int) -> None:
        self._page = (page_index, self.clock())

    def stop_page(self) -> Optional[PageTiming]:
        if self._page is None:
            return None
        page_index, started_at = self._page
        self._page = None
        return PageTiming(page_index=page_index, elapsed=self.clock() - started_at)
