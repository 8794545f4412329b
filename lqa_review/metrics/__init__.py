"""Quality metrics computed from the versioning and review state.

This module provides:
- TER: word-level edit distance ratio between original and current targets
- EPT: severity-weighted errors per thousand reviewed words
- Segment/word progress counters
- QA breakdown by severity and category
"""

from .ept import (
    calculate_ept,
    calculate_ept_statistics,
    calculate_qa_summary,
    calculate_segment_word_counts,
)
from .models import EPTStatistics, QASummary, SegmentWordCounts, TERStatistics
from .ter import calculate_ter, calculate_ter_statistics, edit_distance, is_ter_eligible

__all__ = [
    "calculate_ept",
    "calculate_ept_statistics",
    "calculate_qa_summary",
    "calculate_segment_word_counts",
    "calculate_ter",
    "calculate_ter_statistics",
    "edit_distance",
    "is_ter_eligible",
    "EPTStatistics",
    "QASummary",
    "SegmentWordCounts",
    "TERStatistics",
]
