"""Exceptions shared by the review core packages."""

from typing import List, Optional

from pydantic import ValidationError


class ReviewCoreError(Exception):
    """
    Base exception for review core errors.

    Carries a primary message plus optional lists of specific errors and
    suggestions, formatted into a readable multi-line message.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.errors = errors or []
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]

        if self.errors:
            parts.append("\nErrors:")
            for i, error in enumerate(self.errors, 1):
                parts.append(f"  {i}. {error}")

        if self.suggestions:
            parts.append("\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"  - {suggestion}")

        return "\n".join(parts)

    @staticmethod
    def describe_validation_error(error: ValidationError) -> List[str]:
        """Flatten a pydantic ValidationError into ``path: message`` strings."""
        described = []
        for detail in error.errors():
            field_path = " -> ".join(str(loc) for loc in detail["loc"])
            if detail["type"] == "missing":
                described.append(f"Missing required field: {field_path}")
            elif field_path:
                described.append(f"{field_path}: {detail['msg']}")
            else:
                described.append(detail["msg"])
        return described

    @classmethod
    def from_validation_error(cls, message: str, error: ValidationError, **kwargs):
        return cls(message, errors=cls.describe_validation_error(error), **kwargs)


class JobDataError(ReviewCoreError):
    """Raised when a persisted job document or unit record cannot be parsed."""
