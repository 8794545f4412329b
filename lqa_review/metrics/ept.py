"""Errors Per Thousand words (EPT), progress counters and the QA breakdown."""

from typing import Optional

from lqa_review.content.normalized import count_words, equivalent
from lqa_review.logging import get_logger

from .models import EPTStatistics, QASummary, SegmentWordCounts
from .units import Units, as_unit_list, resolve_snapshots

logger = get_logger(__name__, component="metrics")


def calculate_ept_statistics(current: Units) -> EPTStatistics:
    """Severity-weighted error density over reviewed units.

    ``ept = total_weight / total_words * 1000`` where words are counted on the
    current target; 0 when no reviewed words exist.
    """
    stats = EPTStatistics()
    for unit in as_unit_list(current):
        if not unit.is_reviewed:
            continue
        stats.reviewed_segments += 1
        stats.total_words += count_words(unit.target_content)
        if unit.quality_assessment is not None:
            stats.total_weight += unit.quality_assessment.weight

    stats.ept = (stats.total_weight / stats.total_words) * 1000 if stats.total_words else 0.0

    logger.debug(
        "Calculated EPT",
        extra={
            "event": "metrics.ept.calculated",
            "segments": stats.reviewed_segments,
            "words": stats.total_words,
            "weight": stats.total_weight,
            "ept": stats.ept,
        },
    )
    return stats


def calculate_ept(current: Units) -> float:
    return calculate_ept_statistics(current).ept


def calculate_segment_word_counts(current: Units) -> SegmentWordCounts:
    """One-pass progress counters over all units, reviewed or not."""
    counts = SegmentWordCounts()
    for unit in as_unit_list(current):
        words = count_words(unit.target_content)
        counts.total_segments += 1
        counts.total_words += words
        if unit.is_reviewed:
            counts.reviewed_segments += 1
            counts.reviewed_words += words
    return counts


def calculate_qa_summary(current: Units, original: Optional[Units] = None) -> QASummary:
    """Group reviewed units by severity and category.

    Corrected units (content differs from the original and was not picked from
    candidates) that lack a severity or a category are tallied as unassessed.
    """
    units, original_index = resolve_snapshots(current, original)
    summary = QASummary()

    for unit in units:
        if not unit.is_reviewed:
            continue

        qa = unit.quality_assessment
        severity_id = qa.severity_id if qa else None
        category_id = qa.category_id if qa else None

        if qa is not None and qa.is_assessed:
            summary.total_errors += 1
            summary.total_weight += qa.weight
        if severity_id:
            summary.severity_breakdown[severity_id] = summary.severity_breakdown.get(severity_id, 0) + 1
        if category_id:
            summary.category_breakdown[category_id] = summary.category_breakdown.get(category_id, 0) + 1

        original_unit = original_index.get(unit.guid)
        corrected = not unit.candidate_selected and (
            original_unit is None
            or not equivalent(unit.target_content, original_unit.target_content)
        )
        if corrected:
            if not severity_id:
                summary.unassessed_severity += 1
            if not category_id:
                summary.unassessed_category += 1

    return summary
