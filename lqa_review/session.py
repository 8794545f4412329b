"""Review session: one job under review with its tracker, timers and quality model.

The session is the entry point used by a host editor. It keeps the pieces of
the review core consistent with each other:

- edits go through the ReviewTracker so review transitions apply
- focus moves drive both auto-marking and the segment timers
- assessments take their weight from the active quality model
- statistics, validation and the summary report read the same snapshots
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from lqa_review.config.models import AppConfig
from lqa_review.content.normalized import to_plain_string
from lqa_review.domain.models import JobData, QualityAssessment, TranslationUnit
from lqa_review.domain.wire import job_from_wire, job_to_wire
from lqa_review.logging import get_logger
from lqa_review.logging.context import log_context
from lqa_review.metrics import (
    calculate_ept_statistics,
    calculate_qa_summary,
    calculate_segment_word_counts,
    calculate_ter_statistics,
)
from lqa_review.metrics.models import EPTStatistics, QASummary, SegmentWordCounts, TERStatistics
from lqa_review.quality.loader import load_quality_model
from lqa_review.quality.models import QualityModel
from lqa_review.quality.validator import QAValidationResult, validate_job_qa
from lqa_review.reporting import SummaryRenderer, build_summary_context
from lqa_review.review.timers import PageTiming, ReviewTimers
from lqa_review.review.tracker import Clock, ReviewTracker
from lqa_review.utils.timestamps import utc_now
from lqa_review.versioning.engine import VersionedJob

logger = get_logger(__name__, component="session")

SEARCHABLE_FIELDS = ("source", "target", "notes", "rid", "sid", "guid")


def _searchable_text(unit: TranslationUnit, field: str) -> str:
    if field == "source":
        return to_plain_string(unit.source_content)
    if field == "target":
        return to_plain_string(unit.target_content)
    if field == "notes":
        return unit.notes_text
    value = getattr(unit, field, None)
    return "" if value is None else str(value)


def filter_units(
    units: Iterable[TranslationUnit],
    query: Optional[str],
    fields: Sequence[str] = SEARCHABLE_FIELDS,
) -> List[TranslationUnit]:
    """Case-insensitive substring search over the selected unit fields.

    A blank query keeps every unit.

    Example:
        >>> filter_units(job.current_units(), "checkout", fields=("rid",))
    """
    units = list(units)
    if not query or not query.strip():
        return units

    unknown = set(fields) - set(SEARCHABLE_FIELDS)
    if unknown:
        raise ValueError(f"Unknown search fields: {', '.join(sorted(unknown))}")

    needle = query.lower()
    return [
        unit
        for unit in units
        if any(needle in _searchable_text(unit, field).lower() for field in fields)
    ]


@dataclass
class SessionStatistics:
    """All metrics of a session, computed from one pass over the snapshots."""

    ter: TERStatistics
    ept: EPTStatistics
    counts: SegmentWordCounts
    qa: QASummary


class ReviewSession:
    """A job under review."""

    def __init__(
        self,
        job: VersionedJob,
        config: Optional[AppConfig] = None,
        quality_model: Optional[QualityModel] = None,
        clock: Clock = utc_now,
        timer_clock: Callable[[], float] = time.monotonic,
    ):
        self.job = job
        self.config = config or AppConfig()
        self.quality_model = quality_model
        self.tracker = ReviewTracker(
            job,
            clock=clock,
            auto_mark_on_focus_loss=self.config.review.auto_mark_on_focus_loss,
        )
        self.timers: Optional[ReviewTimers] = (
            ReviewTimers(clock=timer_clock) if self.config.review.track_review_time else None
        )
        self.segment_times: Dict[str, float] = {}
        self.page_times: List[PageTiming] = []

    # Editing

    def edit(self, guid: str, target_content: List[Any]) -> TranslationUnit:
        """Apply a target edit through the review tracker."""
        unit = self.tracker.record_edit(guid, target_content)
        if self.timers is not None:
            self.timers.mark_segment_edited(guid)
        return unit

    def select_candidate(self, guid: str, candidate_index: int) -> Optional[TranslationUnit]:
        return self.job.select_candidate(guid, candidate_index)

    def set_reviewed(self, guid: str, reviewed: bool = True) -> TranslationUnit:
        return self.tracker.set_reviewed(guid, reviewed)

    def mark_all_visible(self, guids: Iterable[str]) -> List[str]:
        return self.tracker.mark_all_visible(guids)

    def focus(self, guid: Optional[str]) -> Optional[str]:
        """Move focus to ``guid``, stopping and starting segment timers.

        Returns:
            The guid auto-marked reviewed by the focus move, if any
        """
        previous = self.tracker.focused_guid
        auto_marked = self.tracker.focus_changed(guid)

        if self.timers is not None and previous != guid:
            if previous is not None and previous in self.job.current:
                elapsed = self.timers.stop_segment(
                    previous, was_approved=self.job.unit(previous).is_reviewed
                )
                if elapsed is not None:
                    self.segment_times[previous] = self.segment_times.get(previous, 0.0) + elapsed
            if guid is not None:
                self.timers.start_segment(guid)
        return auto_marked

    def start_page(self, page_index: int) -> None:
        if self.timers is not None:
            self.timers.start_page(page_index)

    def stop_page(self) -> Optional[PageTiming]:
        if self.timers is None:
            return None
        timing = self.timers.stop_page()
        if timing is not None:
            self.page_times.append(timing)
        return timing

    # Quality assessment

    def assess(
        self,
        guid: str,
        severity_id: Optional[str],
        category_id: Optional[str],
        notes: Optional[str] = None,
    ) -> TranslationUnit:
        """Attach an assessment, taking the weight from the active model."""
        weight = self.quality_model.severity_weight(severity_id) if self.quality_model and severity_id else 0.0
        assessment = QualityAssessment(
            severity_id=severity_id, category_id=category_id, weight=weight, notes=notes
        )
        return self.job.update_unit(guid, quality_assessment=assessment)

    def clear_assessment(self, guid: str) -> TranslationUnit:
        return self.job.update_unit(guid, quality_assessment=None)

    def set_quality_model(self, model: Optional[QualityModel]) -> None:
        """Swap the active model; existing assessments are kept as they are."""
        self.quality_model = model
        logger.info(
            "Quality model changed",
            extra={"event": "session.model.changed", "model_id": model.id if model else None},
        )

    def validation(self) -> Dict[str, QAValidationResult]:
        """Assessment validity per unit; empty without a quality model."""
        if self.quality_model is None:
            return {}
        return validate_job_qa(self.job, self.quality_model)

    def invalid_units(self) -> List[str]:
        return [guid for guid, result in self.validation().items() if not result.valid]

    # Reporting

    def statistics(self) -> SessionStatistics:
        return SessionStatistics(
            ter=calculate_ter_statistics(self.job),
            ept=calculate_ept_statistics(self.job),
            counts=calculate_segment_word_counts(self.job),
            qa=calculate_qa_summary(self.job),
        )

    def render_summary(self, renderer: Optional[SummaryRenderer] = None) -> Dict[str, str]:
        renderer = renderer or SummaryRenderer()
        return renderer.render(build_summary_context(self.job, self.quality_model))

    def search(self, query: str, fields: Sequence[str] = SEARCHABLE_FIELDS) -> List[TranslationUnit]:
        return filter_units(self.job.current_units(), query, fields)

    # Persistence boundary

    def save(self) -> None:
        self.job.save()

    def export(self) -> Dict[str, Any]:
        """Wire document holding only the units worth persisting."""
        return job_to_wire(self.job.to_job_data(export_only=True))


def _as_job(data: Union[JobData, Mapping[str, Any]]) -> JobData:
    if isinstance(data, JobData):
        return data
    return job_from_wire(data)


def open_session(
    job: Union[JobData, Mapping[str, Any]],
    saved: Optional[Union[JobData, Mapping[str, Any]]] = None,
    *,
    config: Optional[AppConfig] = None,
    quality_model: Optional[QualityModel] = None,
    clock: Clock = utc_now,
) -> ReviewSession:
    """
    Open a review session for a job.

    Args:
        job: The job as first loaded (JobData or its wire document)
        saved: Previously saved translations to overlay, if any
        config: Application configuration (defaults apply when omitted)
        quality_model: Active model; loaded from config.quality_model_path
            when omitted and a path is configured
        clock: Time source for review stamps

    Returns:
        A ReviewSession

    Raises:
        JobDataError: If a wire document cannot be parsed
        QualityModelError: If the configured quality model cannot be loaded
    """
    config = config or AppConfig()
    base = _as_job(job)

    with log_context(source_lang=base.source_lang, target_lang=base.target_lang):
        if saved is not None:
            versioned = VersionedJob.from_job_with_saved(base, _as_job(saved))
        else:
            versioned = VersionedJob.from_job(base)

        if quality_model is None and config.quality_model_path:
            quality_model = load_quality_model(config.quality_model_path)

        logger.info(
            f"Opened review session with {len(versioned.guids)} units",
            extra={
                "event": "session.opened",
                "units": len(versioned.guids),
                "file_status": versioned.status.value,
                "quality_model": quality_model.id if quality_model else None,
            },
        )

    return ReviewSession(versioned, config=config, quality_model=quality_model, clock=clock)
