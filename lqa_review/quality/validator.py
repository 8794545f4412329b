"""Validation of quality assessments against a quality model.

Validation is pure: results depend only on the unit, the model and the
original content, and are recomputed whenever they are needed.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from lqa_review.content.normalized import equivalent
from lqa_review.domain.models import TranslationUnit
from lqa_review.versioning.engine import VersionedJob

from .models import QualityModel

MISSING_ASSESSMENT = "missing assessment"
SEVERITY_NOT_IN_MODEL = "severity not in current model"
CATEGORY_NOT_FOUND = "category not found"


@dataclass(frozen=True)
class QAValidationResult:
    """Outcome of validating one unit's assessment."""

    valid: bool
    message: Optional[str] = None

    def __bool__(self) -> bool:
        return self.valid


_VALID = QAValidationResult(valid=True)


def validate_qa(
    unit: TranslationUnit,
    model: QualityModel,
    original_content: Optional[Sequence] = None,
) -> QAValidationResult:
    """
    Check that a corrected unit carries an assessment the model recognises.

    Units whose content equals ``original_content`` need no assessment, nor do
    units whose text was picked from candidates. When no original content is
    given the unit is treated as corrected.

    Args:
        unit: Current state of the unit
        model: Active quality model
        original_content: Original target sequence of the unit

    Returns:
        QAValidationResult with a message when invalid
    """
    if unit.candidate_selected:
        return _VALID
    if original_content is not None and equivalent(unit.target_content, original_content):
        return _VALID

    qa = unit.quality_assessment
    if qa is None or not qa.severity_id or not qa.category_id:
        return QAValidationResult(False, MISSING_ASSESSMENT)

    if model.find_severity(qa.severity_id) is None:
        return QAValidationResult(False, f"{SEVERITY_NOT_IN_MODEL}: '{qa.severity_id}'")

    if model.find_subcategory(qa.category_id) is None:
        return QAValidationResult(False, f"{CATEGORY_NOT_FOUND}: '{qa.category_id}'")

    return _VALID


def validate_job_qa(job: VersionedJob, model: QualityModel) -> Dict[str, QAValidationResult]:
    """Validate every current unit against its original content, keyed by guid."""
    results = {}
    originals = job.original
    for unit in job.current_units():
        original = originals.get(unit.guid)
        original_content = original.target_content if original is not None else None
        results[unit.guid] = validate_qa(unit, model, original_content)
    return results


def check_model_structure(model: QualityModel) -> List[str]:
    """
    Check a quality model for missing or invalid entries.

    Returns:
        Human-readable problems, empty when the model is complete
    """
    errors = []

    if not model.id:
        errors.append("Model ID is required")
    if not model.name:
        errors.append("Model name is required")
    if not model.version:
        errors.append("Version is required")
    if not model.description:
        errors.append("Description is required")

    if not model.severities:
        errors.append("At least one severity is required")
    for idx, severity in enumerate(model.severities, 1):
        if not severity.id:
            errors.append(f"Severity {idx}: ID is required")
        if not severity.label:
            errors.append(f"Severity {idx}: Label is required")
        if not severity.description:
            errors.append(f"Severity {idx}: Description is required")
        if severity.weight < 0 or severity.weight != severity.weight:
            errors.append(f"Severity {idx}: Weight must be a non-negative number")

    if not model.categories:
        errors.append("At least one error category is required")
    for cat_idx, category in enumerate(model.categories, 1):
        if not category.id:
            errors.append(f"Category {cat_idx}: ID is required")
        if not category.label:
            errors.append(f"Category {cat_idx}: Label is required")
        if not category.description:
            errors.append(f"Category {cat_idx}: Description is required")
        if not category.subcategories:
            errors.append(f"Category {cat_idx}: At least one subcategory is required")
        for sub_idx, subcategory in enumerate(category.subcategories, 1):
            prefix = f"Category {cat_idx}, Subcategory {sub_idx}"
            if not subcategory.id:
                errors.append(f"{prefix}: ID is required")
            if not subcategory.label:
                errors.append(f"{prefix}: Label is required")
            if not subcategory.description:
                errors.append(f"{prefix}: Description is required")

    return errors
