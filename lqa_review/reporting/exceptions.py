"""Exceptions for report rendering."""

from lqa_review.domain.exceptions import ReviewCoreError


class ReportRenderError(ReviewCoreError):
    """Raised when summary rendering fails due to a template or missing variables."""
