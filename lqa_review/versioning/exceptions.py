"""Exceptions raised by the versioning engine."""

from typing import Optional

from lqa_review.domain.exceptions import ReviewCoreError


class VersioningError(ReviewCoreError):
    """Base class for versioning failures."""

    def __init__(self, message: str, guid: Optional[str] = None, **kwargs):
        self.guid = guid
        super().__init__(message, **kwargs)


class MissingUnitError(VersioningError):
    """A guid is absent from one of the snapshot collections.

    This is a data-integrity problem: the caller decides whether to skip the
    unit or abort.
    """

    def __init__(self, guid: str, snapshot: str):
        self.snapshot = snapshot
        super().__init__(
            f"Translation unit {guid!r} is missing from the {snapshot} snapshot",
            guid=guid,
            suggestions=[
                "Ensure the saved translations belong to the same job",
                "Reload the job so all snapshots share the same units",
            ],
        )
