"""Translation Error Rate (TER).

TER measures how much reviewers had to change the machine translation:
the word-level edit distance between the original target (reference) and the
current target (hypothesis), divided by the number of reference words.

Only reviewed units count. Units that still have unresolved candidates, or
whose text was picked from candidates, are excluded: choosing an alternative
is not a correction.
"""

from typing import List, Optional, Sequence

from lqa_review.content.normalized import words_of
from lqa_review.domain.models import TranslationUnit
from lqa_review.logging import get_logger

from .models import TERStatistics
from .units import Units, resolve_snapshots

logger = get_logger(__name__, component="metrics")


def edit_distance(reference: Sequence[str], hypothesis: Sequence[str]) -> int:
    """Word-level Levenshtein distance with unit costs, case-insensitive.

    Example:
        >>> edit_distance(["a", "b", "c"], ["a", "x", "c"])
        1
    """
    ref = [word.lower() for word in reference]
    hyp = [word.lower() for word in hypothesis]

    if not ref:
        return len(hyp)
    if not hyp:
        return len(ref)

    previous: List[int] = list(range(len(hyp) + 1))
    for i, ref_word in enumerate(ref, 1):
        current = [i] + [0] * len(hyp)
        for j, hyp_word in enumerate(hyp, 1):
            substitution = previous[j - 1] + (0 if ref_word == hyp_word else 1)
            current[j] = min(previous[j] + 1, current[j - 1] + 1, substitution)
        previous = current
    return previous[-1]


def is_ter_eligible(unit: TranslationUnit) -> bool:
    """Reviewed, with a single accepted translation that was not picked from candidates."""
    return unit.is_reviewed and not unit.has_pending_candidates and not unit.candidate_selected


def calculate_ter_statistics(current: Units, original: Optional[Units] = None) -> TERStatistics:
    """Accumulate edit distance and reference words over eligible units.

    Args:
        current: Current units, or a VersionedJob
        original: Original units looked up by guid (defaults to the job's own)

    Returns:
        TERStatistics; ``ter`` is 0 when there are no reference words
    """
    units, original_index = resolve_snapshots(current, original)
    stats = TERStatistics()

    for unit in units:
        if not is_ter_eligible(unit):
            continue
        original_unit = original_index.get(unit.guid)
        if original_unit is None:
            logger.warning(
                f"No original for unit {unit.guid}; excluded from TER",
                extra={"event": "metrics.ter.missing_original", "guid": unit.guid},
            )
            continue

        reference = words_of(original_unit.target_content)
        hypothesis = words_of(unit.target_content)
        distance = edit_distance(reference, hypothesis)

        stats.total_segments += 1
        stats.total_words += len(reference)
        stats.edit_distance += distance
        if distance > 0:
            stats.changed_segments += 1

    stats.ter = stats.edit_distance / stats.total_words if stats.total_words else 0.0

    logger.debug(
        "Calculated TER",
        extra={
            "event": "metrics.ter.calculated",
            "segments": stats.total_segments,
            "reference_words": stats.total_words,
            "edit_distance": stats.edit_distance,
            "ter": stats.ter,
        },
    )
    return stats


def calculate_ter(current: Units, original: Optional[Units] = None) -> float:
    """TER as a ratio (may exceed 1.0 when the hypothesis is much longer)."""
    return calculate_ter_statistics(current, original).ter
