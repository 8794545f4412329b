"""Domain models for translation review."""

from .exceptions import JobDataError, ReviewCoreError
from .models import (
    JobData,
    NormalizedItem,
    NormalizedSequence,
    Placeholder,
    PlaceholderKind,
    QualityAssessment,
    TranslationUnit,
)
from .wire import (
    item_from_wire,
    item_to_wire,
    job_from_wire,
    job_to_wire,
    sequence_from_wire,
    sequence_to_wire,
    unit_from_wire,
    unit_to_wire,
)

__all__ = [
    "JobData",
    "NormalizedItem",
    "NormalizedSequence",
    "Placeholder",
    "PlaceholderKind",
    "QualityAssessment",
    "TranslationUnit",
    "JobDataError",
    "ReviewCoreError",
    "item_from_wire",
    "item_to_wire",
    "sequence_from_wire",
    "sequence_to_wire",
    "unit_from_wire",
    "unit_to_wire",
    "job_from_wire",
    "job_to_wire",
]
