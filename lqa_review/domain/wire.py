"""Conversion between the persisted JSON shapes and the domain models.

Wire formats handled here:

- Normalized item: a bare string, or ``{"t": "bx"|"ex"|"x", "v": str, "v1"?: str, "s"?: str}``
- Translation unit: ``{guid, rid, sid, nsrc, ntgt, ts?, qa?: {sev, cat, w, notes},
  candidates?, candidateSelected?, notes?}`` where ``ts`` is epoch milliseconds
- Job: ``{sourceLang, targetLang, tus: [...]}``

Unknown keys are preserved in ``extra`` and written back unchanged. Item
shapes that are not recognized stay as opaque values in the sequence.
"""

from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from lqa_review.utils.timestamps import coerce_review_timestamp, timestamp_to_unix_ms

from .exceptions import JobDataError
from .models import JobData, Placeholder, PlaceholderKind, QualityAssessment, TranslationUnit

_PLACEHOLDER_KINDS = {kind.value for kind in PlaceholderKind}

_UNIT_KEYS = {
    "guid", "rid", "sid", "nsrc", "ntgt", "ts", "qa", "candidates", "candidateSelected", "notes",
}
_JOB_KEYS = {"sourceLang", "targetLang", "tus"}


def item_from_wire(raw: Any) -> Any:
    """Convert one wire item to a domain item.

    Strings pass through, well-formed placeholder objects become
    :class:`Placeholder`, anything else is returned unchanged.
    """
    if isinstance(raw, str):
        return raw
    if not isinstance(raw, Mapping):
        return raw

    kind = raw.get("t")
    code = raw.get("v")
    alt_code = raw.get("v1")
    sample = raw.get("s")
    if kind not in _PLACEHOLDER_KINDS or not isinstance(code, str):
        return raw
    if alt_code is not None and not isinstance(alt_code, str):
        return raw
    if sample is not None and not isinstance(sample, str):
        return raw

    return Placeholder(kind=kind, code=code, alt_code=alt_code, sample=sample)


def item_to_wire(item: Any) -> Any:
    """Convert one domain item back to its wire form."""
    if isinstance(item, Placeholder):
        wire: Dict[str, Any] = {"t": item.kind.value, "v": item.code}
        if item.alt_code is not None:
            wire["v1"] = item.alt_code
        if item.sample is not None:
            wire["s"] = item.sample
        return wire
    return item


def sequence_from_wire(raw: Any) -> List[Any]:
    """Convert a wire sequence; a missing or non-list value becomes empty."""
    if not isinstance(raw, list):
        return []
    return [item_from_wire(item) for item in raw]


def sequence_to_wire(items: List[Any]) -> List[Any]:
    return [item_to_wire(item) for item in items]


def _assessment_from_wire(raw: Any) -> Optional[QualityAssessment]:
    if not isinstance(raw, Mapping):
        return None
    return QualityAssessment(
        severity_id=raw.get("sev"),
        category_id=raw.get("cat"),
        weight=raw.get("w"),
        notes=raw.get("notes"),
    )


def _assessment_to_wire(qa: QualityAssessment) -> Dict[str, Any]:
    wire: Dict[str, Any] = {"sev": qa.severity_id, "cat": qa.category_id, "w": qa.weight}
    if qa.notes is not None:
        wire["notes"] = qa.notes
    return wire


def unit_from_wire(record: Mapping[str, Any]) -> TranslationUnit:
    """Build a :class:`TranslationUnit` from a persisted record.

    Raises:
        JobDataError: If the record is not a mapping or fails validation
    """
    if not isinstance(record, Mapping):
        raise JobDataError(
            "Translation unit record must be an object",
            errors=[f"Got {type(record).__name__}"],
        )

    candidates = record.get("candidates")
    try:
        return TranslationUnit(
            guid=record.get("guid"),
            rid=record.get("rid"),
            sid=record.get("sid"),
            source_content=sequence_from_wire(record.get("nsrc")),
            target_content=sequence_from_wire(record.get("ntgt")),
            reviewed_at=coerce_review_timestamp(record.get("ts")),
            quality_assessment=_assessment_from_wire(record.get("qa")),
            candidates=(
                [sequence_from_wire(c) for c in candidates]
                if isinstance(candidates, list)
                else None
            ),
            candidate_selected=record.get("candidateSelected"),
            notes=record.get("notes"),
            extra={k: v for k, v in record.items() if k not in _UNIT_KEYS},
        )
    except ValidationError as e:
        raise JobDataError.from_validation_error(
            f"Invalid translation unit {record.get('guid')!r}", e
        ) from e


def unit_to_wire(unit: TranslationUnit) -> Dict[str, Any]:
    """Serialize a unit to its persisted record shape."""
    record: Dict[str, Any] = dict(unit.extra)
    record["guid"] = unit.guid
    if unit.rid is not None:
        record["rid"] = unit.rid
    if unit.sid is not None:
        record["sid"] = unit.sid
    record["nsrc"] = sequence_to_wire(unit.source_content)
    record["ntgt"] = sequence_to_wire(unit.target_content)
    if unit.reviewed_at is not None:
        record["ts"] = timestamp_to_unix_ms(unit.reviewed_at)
    if unit.quality_assessment is not None:
        record["qa"] = _assessment_to_wire(unit.quality_assessment)
    if unit.candidates is not None:
        record["candidates"] = [sequence_to_wire(c) for c in unit.candidates]
    if unit.candidate_selected is not None:
        record["candidateSelected"] = unit.candidate_selected
    if unit.notes is not None:
        record["notes"] = unit.notes
    return record


def job_from_wire(data: Mapping[str, Any]) -> JobData:
    """Build a :class:`JobData` from a persisted job document.

    Raises:
        JobDataError: If the document or any unit is malformed
    """
    if not isinstance(data, Mapping):
        raise JobDataError(
            "Job document must be an object",
            errors=[f"Got {type(data).__name__}"],
        )

    raw_tus = data.get("tus", [])
    if not isinstance(raw_tus, list):
        raise JobDataError(
            "Job document field 'tus' must be a list",
            suggestions=["Check that the file is a translation job export"],
        )

    units = [unit_from_wire(record) for record in raw_tus]
    try:
        return JobData(
            source_lang=data.get("sourceLang"),
            target_lang=data.get("targetLang"),
            tus=units,
            extra={k: v for k, v in data.items() if k not in _JOB_KEYS},
        )
    except ValidationError as e:
        raise JobDataError.from_validation_error("Invalid job document", e) from e


def job_to_wire(job: JobData, units: Optional[List[TranslationUnit]] = None) -> Dict[str, Any]:
    """Serialize a job; ``units`` overrides ``job.tus`` (e.g. an export subset)."""
    document: Dict[str, Any] = dict(job.extra)
    if job.source_lang is not None:
        document["sourceLang"] = job.source_lang
    if job.target_lang is not None:
        document["targetLang"] = job.target_lang
    document["tus"] = [unit_to_wire(tu) for tu in (job.tus if units is None else units)]
    return document
