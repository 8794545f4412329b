"""Three-snapshot versioning of a translation job.

A :class:`VersionedJob` keeps three guid-keyed collections of units:

- ``original``: the job as first loaded; never changes
- ``saved``: the last saved (or auto-saved) working copy; replaced as a whole
  by :meth:`VersionedJob.save`, never edited in place
- ``current``: the live working copy, edited unit by unit

Every unit is classified against these snapshots (see :func:`classify`); the
classification drives colour coding, review bookkeeping and metric filters.
"""

import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from lqa_review.content.normalized import content_hash, equivalent
from lqa_review.domain.models import JobData, QualityAssessment, TranslationUnit
from lqa_review.domain.wire import sequence_from_wire
from lqa_review.logging import get_logger
from lqa_review.utils.timestamps import ensure_utc

from .exceptions import MissingUnitError
from .models import FileStatus, Snapshot, VersionState

logger = get_logger(__name__, component="versioning")

_UNSET: Any = object()


def classify(
    guid: str,
    original: Mapping[str, TranslationUnit],
    saved: Mapping[str, TranslationUnit],
    current: Mapping[str, TranslationUnit],
) -> VersionState:
    """Classify one unit's current target content.

    Priority is Original, then Saved, then Modified: a unit equal to both the
    original and the saved content is reported as ORIGINAL.

    Raises:
        MissingUnitError: If ``guid`` is absent from any of the collections
    """
    current_unit = _require(current, guid, Snapshot.CURRENT)
    original_unit = _require(original, guid, Snapshot.ORIGINAL)
    saved_unit = _require(saved, guid, Snapshot.SAVED)

    if equivalent(current_unit.target_content, original_unit.target_content):
        return VersionState.ORIGINAL
    if equivalent(current_unit.target_content, saved_unit.target_content):
        return VersionState.SAVED
    return VersionState.MODIFIED


def _require(units: Mapping[str, TranslationUnit], guid: str, snapshot: Snapshot) -> TranslationUnit:
    unit = units.get(guid)
    if unit is None:
        raise MissingUnitError(guid, snapshot.value)
    return unit


def apply_loaded_translations(base: JobData, saved: JobData) -> Tuple[JobData, int]:
    """Overlay previously saved translations onto a freshly loaded job.

    For every base unit with a saved counterpart carrying target content, the
    saved target and review state (``reviewed_at``, quality assessment,
    candidate selection) replace the base values. Units whose saved target
    differs from the base target are counted as edited.

    Job-level fields: ``updatedAt`` comes from the saved document when present,
    ``translationProvider`` always from the base job.

    Returns:
        ``(merged_job, edited_count)``
    """
    saved_by_guid = saved.units_by_guid()
    edited_count = 0
    merged_units: List[TranslationUnit] = []

    for tu in base.tus:
        saved_tu = saved_by_guid.get(tu.guid)
        if saved_tu is None or not saved_tu.target_content:
            merged_units.append(tu.model_copy(deep=True))
            continue

        if not equivalent(saved_tu.target_content, tu.target_content):
            edited_count += 1

        update: Dict[str, Any] = {
            "target_content": list(saved_tu.target_content),
            "reviewed_at": saved_tu.reviewed_at,
            "quality_assessment": saved_tu.quality_assessment,
        }
        if saved_tu.candidate_selected:
            update["candidate_selected"] = True
            update["candidates"] = None
        merged_units.append(tu.model_copy(update=update, deep=True))

    extra = dict(base.extra)
    if "updatedAt" in saved.extra:
        extra["updatedAt"] = saved.extra["updatedAt"]

    merged = base.model_copy(update={"tus": merged_units, "extra": extra})
    return merged, edited_count


def _frozen(units: Iterable[TranslationUnit]) -> Mapping[str, TranslationUnit]:
    return MappingProxyType({tu.guid: tu.model_copy(deep=True) for tu in units})


def _copies(units: Mapping[str, TranslationUnit]) -> Mapping[str, TranslationUnit]:
    """Read-only map of deep copies, so callers cannot reach the stored units."""
    return MappingProxyType({guid: tu.model_copy(deep=True) for guid, tu in units.items()})


class VersionedJob:
    """A translation job with original, saved and current snapshots.

    Responsibilities:
    - Classify units (ORIGINAL / SAVED / MODIFIED)
    - Apply edits to the current snapshot
    - Track the job-level FileStatus
    - Save (current becomes the new saved snapshot)
    - Select which units to export
    """

    def __init__(
        self,
        original: JobData,
        saved: Optional[JobData] = None,
        status: FileStatus = FileStatus.NEW,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize VersionedJob.

        Args:
            original: Job as first loaded
            saved: Saved snapshot; defaults to a copy of ``original``
            status: Initial file status (NEW or LOADED)
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.logger = logger_instance or logger
        self._metadata = (saved if saved is not None else original).model_copy(update={"tus": []}, deep=True)
        self._order: List[str] = [tu.guid for tu in original.tus]
        self._original = _frozen(original.tus)
        self._saved = _frozen((saved if saved is not None else original).tus)
        self._current: Dict[str, TranslationUnit] = {
            guid: tu.model_copy(deep=True) for guid, tu in self._saved.items()
        }
        self._status = status
        self._baseline = status
        self.loaded_edit_count = 0

    @classmethod
    def from_job(cls, job: JobData) -> "VersionedJob":
        """Two-state setup: original, saved and current all equal ``job``."""
        return cls(job, status=FileStatus.NEW)

    @classmethod
    def from_job_with_saved(cls, job: JobData, saved_translations: JobData) -> "VersionedJob":
        """Three-state setup: ``job`` is the original, saved translations overlay it."""
        merged, edited_count = apply_loaded_translations(job, saved_translations)
        versioned = cls(job, saved=merged, status=FileStatus.LOADED)
        versioned.loaded_edit_count = edited_count
        versioned.logger.info(
            f"Loaded saved translations ({edited_count} edited units)",
            extra={
                "event": "versioning.job.loaded",
                "units": len(versioned._order),
                "edited_units": edited_count,
            },
        )
        return versioned

    # Snapshot access

    @property
    def metadata(self) -> JobData:
        """Job-level fields (languages, extras) without units."""
        return self._metadata

    @property
    def original(self) -> Mapping[str, TranslationUnit]:
        """Copies of the original units; the snapshot itself never changes."""
        return _copies(self._original)

    @property
    def saved(self) -> Mapping[str, TranslationUnit]:
        """Copies of the saved units; replaced only by :meth:`save`."""
        return _copies(self._saved)

    @property
    def current(self) -> Mapping[str, TranslationUnit]:
        """Read-only view of the working copy; edit through :meth:`update_unit`."""
        return MappingProxyType(self._current)

    @property
    def guids(self) -> List[str]:
        """Unit guids in job order."""
        return list(self._order)

    @property
    def status(self) -> FileStatus:
        return self._status

    @property
    def has_unsaved_changes(self) -> bool:
        return self._status == FileStatus.CHANGED

    def unit(self, guid: str, snapshot: Snapshot = Snapshot.CURRENT) -> TranslationUnit:
        """Get a unit from one snapshot.

        Original and saved units are returned as copies.

        Raises:
            MissingUnitError: If the unit is not in that snapshot
        """
        snapshot = Snapshot(snapshot)
        if snapshot == Snapshot.CURRENT:
            return _require(self._current, guid, snapshot)
        units = self._original if snapshot == Snapshot.ORIGINAL else self._saved
        return _require(units, guid, snapshot).model_copy(deep=True)

    def has_unit(self, guid: str, snapshot: Snapshot = Snapshot.CURRENT) -> bool:
        units = {
            Snapshot.ORIGINAL: self._original,
            Snapshot.SAVED: self._saved,
            Snapshot.CURRENT: self._current,
        }[Snapshot(snapshot)]
        return guid in units

    def current_units(self) -> List[TranslationUnit]:
        """Current units in job order."""
        return [self._current[guid] for guid in self._order if guid in self._current]

    # Classification

    def classify(self, guid: str) -> VersionState:
        return classify(guid, self._original, self._saved, self._current)

    def classify_all(self) -> Dict[str, VersionState]:
        """Classify every unit; units missing from a snapshot are logged and skipped."""
        states: Dict[str, VersionState] = {}
        for guid in self._order:
            try:
                states[guid] = self.classify(guid)
            except MissingUnitError as e:
                self.logger.warning(
                    f"Skipping unit during classification: {e.message}",
                    extra={
                        "event": "versioning.unit.missing",
                        "guid": guid,
                        "snapshot": e.snapshot,
                    },
                )
        return states

    def is_original(self, guid: str) -> bool:
        """True when the current target is equivalent to the original target."""
        return equivalent(
            self.unit(guid).target_content,
            _require(self._original, guid, Snapshot.ORIGINAL).target_content,
        )

    def content_version(self, guid: str) -> str:
        """Hash of the current target, stable across text-run segmentation."""
        return content_hash(self.unit(guid).target_content)

    # Edits

    def update_unit(
        self,
        guid: str,
        *,
        target_content: Any = _UNSET,
        quality_assessment: Any = _UNSET,
        reviewed_at: Any = _UNSET,
    ) -> TranslationUnit:
        """Apply an edit to the current snapshot.

        A target edit that changes the content clears ``candidate_selected``:
        the unit is now a manual correction rather than a picked alternative.
        Target items may be domain items or their wire form; placeholder
        objects such as ``{"t": "x", "v": "{0}"}`` are converted before storing.
        Passing ``None`` for ``quality_assessment`` or ``reviewed_at`` clears it.

        Returns:
            The updated (or unchanged) current unit

        Raises:
            MissingUnitError: If the unit is not in the current snapshot
        """
        unit = self.unit(guid)
        updates: Dict[str, Any] = {}

        if target_content is not _UNSET:
            new_target = sequence_from_wire(list(target_content or []))
            if new_target != unit.target_content:
                updates["target_content"] = new_target
            if not equivalent(unit.target_content, new_target):
                updates["candidate_selected"] = None

        if quality_assessment is not _UNSET:
            if isinstance(quality_assessment, dict):
                quality_assessment = QualityAssessment(**quality_assessment)
            if quality_assessment != unit.quality_assessment:
                updates["quality_assessment"] = quality_assessment

        if reviewed_at is not _UNSET and reviewed_at != unit.reviewed_at:
            updates["reviewed_at"] = ensure_utc(reviewed_at)

        if not updates:
            return unit

        updated = unit.model_copy(update=updates)
        self._current[guid] = updated
        self._refresh_status()

        self.logger.debug(
            f"Updated unit {guid}",
            extra={
                "event": "versioning.unit.updated",
                "guid": guid,
                "fields": sorted(updates),
                "file_status": self._status.value,
            },
        )
        return updated

    def select_candidate(self, guid: str, candidate_index: int) -> Optional[TranslationUnit]:
        """Accept one of a unit's candidate translations.

        The candidate becomes the current target, pending candidates are
        cleared and the unit is flagged ``candidate_selected``. The original
        and saved snapshots are left untouched.

        Returns:
            The updated unit, or None if the unit has no such candidate
        """
        unit = self.unit(guid)
        candidates = unit.candidates or []
        if not 0 <= candidate_index < len(candidates):
            self.logger.warning(
                f"No candidate {candidate_index} for unit {guid}",
                extra={
                    "event": "versioning.candidate.invalid",
                    "guid": guid,
                    "candidate_index": candidate_index,
                    "candidate_count": len(candidates),
                },
            )
            return None

        updated = unit.model_copy(
            update={
                "target_content": list(candidates[candidate_index]),
                "candidates": None,
                "candidate_selected": True,
            },
            deep=True,
        )
        self._current[guid] = updated
        self._status = FileStatus.CHANGED

        self.logger.info(
            f"Selected candidate {candidate_index} for unit {guid}",
            extra={
                "event": "versioning.candidate.selected",
                "guid": guid,
                "candidate_index": candidate_index,
            },
        )
        return updated

    def save(self) -> None:
        """Replace the saved snapshot with a copy of the current one."""
        self._saved = _frozen(self.current_units())
        self._status = FileStatus.SAVED
        self._baseline = FileStatus.SAVED
        self.logger.info(
            "Saved working copy",
            extra={"event": "versioning.job.saved", "units": len(self._saved)},
        )

    def _refresh_status(self) -> None:
        """Recompute CHANGED vs the baseline status after an edit.

        A freshly loaded job compares against the original; a job loaded with
        saved translations, or saved since, compares against the saved snapshot.
        """
        reference = self._original if self._baseline == FileStatus.NEW else self._saved
        changed = False
        for guid, unit in self._current.items():
            ref_unit = reference.get(guid)
            if ref_unit is None:
                continue
            if not equivalent(unit.target_content, ref_unit.target_content) or (
                unit.quality_assessment != ref_unit.quality_assessment
            ):
                changed = True
                break
        self._status = FileStatus.CHANGED if changed else self._baseline

    # Export selection

    def changed_units(self) -> List[TranslationUnit]:
        """Current units whose target differs from the original (or that have no original)."""
        changed = []
        for unit in self.current_units():
            original_unit = self._original.get(unit.guid)
            if original_unit is None or not equivalent(
                unit.target_content, original_unit.target_content
            ):
                changed.append(unit)
        return changed

    def units_to_export(self) -> List[TranslationUnit]:
        """Units worth persisting: changed from the original or reviewed."""
        changed = {tu.guid for tu in self.changed_units()}
        return [tu for tu in self.current_units() if tu.guid in changed or tu.is_reviewed]

    def to_job_data(self, snapshot: Snapshot = Snapshot.CURRENT, export_only: bool = False) -> JobData:
        """Assemble a JobData from one snapshot.

        Args:
            snapshot: Which snapshot to assemble
            export_only: Limit the current snapshot to :meth:`units_to_export`
        """
        snapshot = Snapshot(snapshot)
        if snapshot == Snapshot.CURRENT:
            units = self.units_to_export() if export_only else self.current_units()
        else:
            source = self._original if snapshot == Snapshot.ORIGINAL else self._saved
            units = [source[guid] for guid in self._order if guid in source]
        return self._metadata.model_copy(
            update={"tus": [tu.model_copy(deep=True) for tu in units]}, deep=True
        )
