"""Core domain models for translation jobs.

This module defines the data structures used throughout the review core:
- Placeholder: an inline tag or variable embedded in normalized content
- TranslationUnit: the atomic reviewable item (source + target sequences)
- QualityAssessment: a reviewer's severity/category judgment on a correction
- JobData: a translation job (language pair + ordered units)

A normalized sequence is a plain ``list`` whose items are ``str`` (literal
text) or :class:`Placeholder`. Items of any other shape are tolerated and
carried through unchanged so that comparison and counting stay total.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PlaceholderKind(str, Enum):
    """Placeholder kinds, valued with their wire codes."""

    START_TAG = "bx"
    END_TAG = "ex"
    STANDALONE = "x"


class Placeholder(BaseModel):
    """A non-text element (tag or variable) inside a normalized sequence.

    Placeholders are values: two placeholders are equal only when kind, code,
    alt_code and sample all match.
    """

    kind: PlaceholderKind = Field(..., description="Start tag, end tag or standalone")
    code: str = Field(..., description="Placeholder value/code, e.g. '<a href=...>' or '{0}'")
    alt_code: Optional[str] = Field(None, description="Optional alternate value")
    sample: Optional[str] = Field(None, description="Sample rendering for standalone variables")

    model_config = ConfigDict(frozen=True)

    @property
    def is_tag(self) -> bool:
        return self.kind in (PlaceholderKind.START_TAG, PlaceholderKind.END_TAG)


NormalizedItem = Union[str, Placeholder]
NormalizedSequence = List[NormalizedItem]


class QualityAssessment(BaseModel):
    """Quality judgment attached to a corrected unit.

    ``category_id`` uses the ``"category.subcategory"`` format. Both ids are
    optional at the model level so that incomplete assessments can be loaded
    and reported as invalid by the validator instead of failing to parse.
    """

    severity_id: Optional[str] = Field(None, description="Severity id from the quality model")
    category_id: Optional[str] = Field(None, description="'category.subcategory' id")
    weight: float = Field(0.0, description="Severity weight at assessment time")
    notes: Optional[str] = Field(None, description="Free-form reviewer notes")

    @field_validator("severity_id", "category_id", "notes")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty or whitespace-only strings as absent."""
        if v is None:
            return None
        stripped = v.strip()
        return stripped if stripped else None

    @field_validator("weight", mode="before")
    @classmethod
    def coerce_weight(cls, v: Any) -> float:
        """Missing or non-numeric weights count as zero."""
        if v is None or isinstance(v, bool):
            return 0.0
        try:
            return float(v)
        except (TypeError, ValueError):
            return 0.0

    @property
    def is_assessed(self) -> bool:
        return self.severity_id is not None or self.category_id is not None


class TranslationUnit(BaseModel):
    """A translation unit: source and target normalized content plus review state.

    ``guid`` is the identity key across the original, saved and current
    snapshots of a job and never changes. Fields not modelled here are kept
    in ``extra`` so a unit survives a load/save round trip unchanged.
    """

    guid: str = Field(..., min_length=1, description="Unique id within the job")
    rid: Optional[Union[str, int]] = Field(None, description="Resource id")
    sid: Optional[Union[str, int]] = Field(None, description="Segment id")
    source_content: List[Any] = Field(default_factory=list, description="Normalized source")
    target_content: List[Any] = Field(default_factory=list, description="Normalized target")
    reviewed_at: Optional[datetime] = Field(None, description="When the unit was reviewed (UTC)")
    quality_assessment: Optional[QualityAssessment] = None
    candidates: Optional[List[List[Any]]] = Field(
        None, description="Alternative translations awaiting selection"
    )
    candidate_selected: Optional[bool] = Field(
        None, description="True when the target was picked from candidates"
    )
    notes: Optional[Any] = Field(None, description="Translator notes (string or {'desc': ...})")
    extra: Dict[str, Any] = Field(default_factory=dict, description="Unmodelled wire fields")

    @field_validator("reviewed_at")
    @classmethod
    def ensure_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Ensure datetime is timezone-aware and in UTC."""
        if v is None:
            return None
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @property
    def is_reviewed(self) -> bool:
        return self.reviewed_at is not None

    @property
    def has_pending_candidates(self) -> bool:
        """True while alternatives exist and none has been accepted."""
        return bool(self.candidates)

    @property
    def notes_text(self) -> str:
        """Notes flattened to text for searching and display."""
        if isinstance(self.notes, str):
            return self.notes
        if isinstance(self.notes, dict):
            desc = self.notes.get("desc")
            return desc if isinstance(desc, str) else ""
        return ""

    model_config = {"json_schema_extra": {"example": {
        "guid": "b1946ac9",
        "rid": "home.json",
        "sid": "greeting",
        "source_content": ["Hello ", {"kind": "x", "code": "{0}", "sample": "World"}, "!"],
        "target_content": ["Bonjour ", {"kind": "x", "code": "{0}", "sample": "World"}, " !"],
        "reviewed_at": None,
    }}}


class JobData(BaseModel):
    """A translation job: language pair plus ordered translation units."""

    source_lang: Optional[str] = Field(None, description="Source language tag")
    target_lang: Optional[str] = Field(None, description="Target language tag")
    tus: List[TranslationUnit] = Field(default_factory=list, description="Translation units")
    extra: Dict[str, Any] = Field(default_factory=dict, description="Unmodelled wire fields")

    @field_validator("tus")
    @classmethod
    def unique_guids(cls, v: List[TranslationUnit]) -> List[TranslationUnit]:
        """Reject jobs where two units share a guid."""
        seen = set()
        duplicates = set()
        for tu in v:
            if tu.guid in seen:
                duplicates.add(tu.guid)
            seen.add(tu.guid)
        if duplicates:
            raise ValueError(f"Duplicate translation unit guids: {', '.join(sorted(duplicates))}")
        return v

    def get_unit(self, guid: str) -> Optional[TranslationUnit]:
        """Get a unit by guid."""
        for tu in self.tus:
            if tu.guid == guid:
                return tu
        return None

    def units_by_guid(self) -> Dict[str, TranslationUnit]:
        return {tu.guid: tu for tu in self.tus}
