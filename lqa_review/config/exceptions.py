"""Custom exceptions for configuration management."""

from lqa_review.domain.exceptions import ReviewCoreError


class ConfigurationError(ReviewCoreError):
    """
    Exception raised when configuration validation fails.

    This exception can store multiple validation errors and format them
    in a human-readable way with helpful suggestions.
    """

    def add_error(self, error: str) -> None:
        """Add a validation error to the list."""
        self.errors.append(error)
        self.args = (self._format_message(),)

    def add_suggestion(self, suggestion: str) -> None:
        """Add a helpful suggestion to the list."""
        self.suggestions.append(suggestion)
        self.args = (self._format_message(),)
