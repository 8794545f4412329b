"""Quality model taxonomy, loading and assessment validation."""

from .exceptions import QualityModelError
from .loader import load_quality_model, parse_quality_model
from .models import ErrorCategory, ErrorSubcategory, QualityModel, Severity
from .validator import (
    CATEGORY_NOT_FOUND,
    MISSING_ASSESSMENT,
    SEVERITY_NOT_IN_MODEL,
    QAValidationResult,
    check_model_structure,
    validate_job_qa,
    validate_qa,
)

__all__ = [
    "QualityModelError",
    "load_quality_model",
    "parse_quality_model",
    "ErrorCategory",
    "ErrorSubcategory",
    "QualityModel",
    "Severity",
    "CATEGORY_NOT_FOUND",
    "MISSING_ASSESSMENT",
    "SEVERITY_NOT_IN_MODEL",
    "QAValidationResult",
    "check_model_structure",
    "validate_job_qa",
    "validate_qa",
]
