"""Review tracking: the per-unit ``reviewed_at`` flag and its transitions.

Transitions implemented here:

- Editing a unit never marks it reviewed.
- An edit that brings a unit back to its original content clears a previous
  review, so a review that has effectively been undone earns no credit.
- ``set_reviewed`` is always honored and stamps the current time (or clears).
- When focus leaves a unit whose content differs from the original and that
  is still unreviewed, the unit is marked reviewed automatically. A unit whose
  content equals the original is never marked by this path.
- ``mark_all_visible`` marks a batch of units, keeping existing timestamps.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Iterable, List, Optional

from lqa_review.domain.models import TranslationUnit
from lqa_review.logging import get_logger
from lqa_review.utils.timestamps import utc_now
from lqa_review.versioning import Snapshot, VersionedJob

logger = get_logger(__name__, component="review")

Clock = Callable[[], datetime]


def set_reviewed(
    job: VersionedJob, guid: str, reviewed: bool, clock: Clock = utc_now
) -> TranslationUnit:
    """Explicitly mark or unmark a unit, regardless of its content state.

    Marking always stamps ``clock()``; unmarking clears the timestamp.
    """
    return job.update_unit(guid, reviewed_at=clock() if reviewed else None)


def mark_all_visible(
    job: VersionedJob, guids: Iterable[str], clock: Clock = utc_now
) -> List[str]:
    """Mark every listed unit reviewed.

    Units that are already reviewed keep their existing timestamp, so the call
    is idempotent. Guids the job does not hold are logged and skipped; the
    rest of the batch is still marked.

    Returns:
        Guids that were newly marked
    """
    now = clock()
    newly_marked = []
    for guid in guids:
        if not job.has_unit(guid):
            logger.warning(
                f"Skipping unknown unit {guid} in batch review",
                extra={"event": "review.unit.missing", "guid": guid},
            )
            continue
        if job.unit(guid).is_reviewed:
            continue
        job.update_unit(guid, reviewed_at=now)
        newly_marked.append(guid)

    logger.info(
        f"Marked {len(newly_marked)} visible units reviewed",
        extra={"event": "review.batch.marked", "marked": len(newly_marked)},
    )
    return newly_marked


class ReviewTracker:
    """Applies the review state machine to a :class:`VersionedJob`.

    The tracker also remembers which unit has focus so that moving focus can
    auto-mark the unit that was left.
    """

    def __init__(
        self,
        job: VersionedJob,
        clock: Clock = utc_now,
        auto_mark_on_focus_loss: bool = True,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize ReviewTracker.

        Args:
            job: Versioned job whose current snapshot is tracked
            clock: Time source for review stamps (defaults to utc_now)
            auto_mark_on_focus_loss: Whether leaving an edited unit marks it reviewed
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.job = job
        self.clock = clock
        self.auto_mark_on_focus_loss = auto_mark_on_focus_loss
        self.logger = logger_instance or logger
        self.focused_guid: Optional[str] = None

    def is_reviewed(self, guid: str) -> bool:
        return self.job.unit(guid).is_reviewed

    def record_edit(self, guid: str, target_content: List[Any]) -> TranslationUnit:
        """Apply a target edit and the review transitions that follow from it."""
        was_original = self.job.is_original(guid)
        unit = self.job.update_unit(guid, target_content=target_content)

        if not was_original and unit.is_reviewed and self.job.is_original(guid):
            unit = self.job.update_unit(guid, reviewed_at=None)
            self.logger.info(
                f"Unit {guid} reverted to original; review cleared",
                extra={"event": "review.unit.unreviewed", "guid": guid},
            )
        return unit

    def set_reviewed(self, guid: str, reviewed: bool) -> TranslationUnit:
        unit = set_reviewed(self.job, guid, reviewed, clock=self.clock)
        self.logger.debug(
            f"Unit {guid} {'marked' if reviewed else 'unmarked'} reviewed",
            extra={"event": "review.unit.set", "guid": guid, "reviewed": reviewed},
        )
        return unit

    def mark_all_visible(self, guids: Iterable[str]) -> List[str]:
        return mark_all_visible(self.job, guids, clock=self.clock)

    def focus_changed(self, new_guid: Optional[str]) -> Optional[str]:
        """Move focus to ``new_guid`` (None when nothing is focused).

        Returns:
            The guid that was auto-marked reviewed, if any
        """
        previous = self.focused_guid
        self.focused_guid = new_guid

        if previous is None or previous == new_guid or not self.auto_mark_on_focus_loss:
            return None
        if not self.job.has_unit(previous):
            return None

        if not self.job.has_unit(previous, Snapshot.ORIGINAL):
            self.logger.warning(
                f"Unit {previous} has no original; not auto-marked",
                extra={"event": "review.unit.missing", "guid": previous, "snapshot": "original"},
            )
            return None

        unit = self.job.unit(previous)
        # Content equal to the original takes priority over auto-marking.
        if unit.is_reviewed or self.job.is_original(previous):
            return None

        self.job.update_unit(previous, reviewed_at=self.clock())
        self.logger.info(
            f"Auto-marked unit {previous} reviewed on focus loss",
            extra={"event": "review.unit.auto_marked", "guid": previous},
        )
        return previous
