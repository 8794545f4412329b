"""Translation review core.

Normalized content comparison, placeholder protection, three-snapshot
versioning, review tracking and TER/EPT quality metrics.
"""

from lqa_review.content.normalized import equivalent
from lqa_review.metrics import calculate_ept, calculate_segment_word_counts, calculate_ter
from lqa_review.quality.validator import validate_qa
from lqa_review.review.tracker import mark_all_visible, set_reviewed
from lqa_review.session import ReviewSession, filter_units, open_session
from lqa_review.versioning.engine import classify

__version__ = "0.1.0"

__all__ = [
    "calculate_ept",
    "calculate_segment_word_counts",
    "calculate_ter",
    "classify",
    "equivalent",
    "filter_units",
    "mark_all_visible",
    "open_session",
    "ReviewSession",
    "set_reviewed",
    "validate_qa",
]
