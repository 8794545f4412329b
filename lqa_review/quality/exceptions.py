"""Exceptions for quality model handling."""

from lqa_review.config.exceptions import ConfigurationError


class QualityModelError(ConfigurationError):
    """Raised when a quality model file cannot be read, parsed or validated."""
