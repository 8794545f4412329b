"""Result models for the metrics engine."""

from dataclasses import dataclass, field
from typing import Dict


@dataclass
class TERStatistics:
    """Translation Error Rate over the eligible reviewed units.

    Attributes:
        total_segments: Units that entered the calculation
        total_words: Reference (original target) words across those units
        changed_segments: Units with a non-zero edit distance
        edit_distance: Summed word-level edit distance
        ter: edit_distance / total_words (0 when there are no reference words)
    """

    total_segments: int = 0
    total_words: int = 0
    changed_segments: int = 0
    edit_distance: int = 0
    ter: float = 0.0


@dataclass
class EPTStatistics:
    """Severity-weighted errors per thousand words over reviewed units."""

    reviewed_segments: int = 0
    total_words: int = 0
    total_weight: float = 0.0
    ept: float = 0.0


@dataclass
class SegmentWordCounts:
    """Progress counters over all units (words counted on the current target)."""

    total_segments: int = 0
    total_words: int = 0
    reviewed_segments: int = 0
    reviewed_words: int = 0

    @property
    def reviewed_percentage(self) -> float:
        if self.total_segments == 0:
            return 0.0
        return self.reviewed_segments / self.total_segments * 100


@dataclass
class QASummary:
    """Breakdown of quality assessments on reviewed units.

    Attributes:
        total_errors: Reviewed units carrying an assessment
        total_weight: Summed assessment weights
        severity_breakdown: Count per severity id
        category_breakdown: Count per 'category.subcategory' id
        unassessed_severity: Corrected units with no severity
        unassessed_category: Corrected units with no category
    """

    total_errors: int = 0
    total_weight: float = 0.0
    severity_breakdown: Dict[str, int] = field(default_factory=dict)
    category_breakdown: Dict[str, int] = field(default_factory=dict)
    unassessed_severity: int = 0
    unassessed_category: int = 0

    @property
    def has_findings(self) -> bool:
        return bool(self.total_errors or self.unassessed_severity or self.unassessed_category)

    def share(self, count: int) -> float:
        """Percentage of total_errors represented by ``count``."""
        if self.total_errors == 0:
            return 0.0
        return count / self.total_errors * 100
