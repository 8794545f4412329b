"""Quality model (LQA taxonomy) schema using Pydantic.

A quality model lists the severities a correction can carry, each with a
weight used by EPT, and the error categories with their subcategories.
Assessments reference a subcategory as ``"category.subcategory"``.

Models are frozen once loaded. Swapping the model for a session does not
touch existing assessments; it only changes whether they validate.
"""

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _ModelEntry(BaseModel):
    """Shared behaviour for taxonomy entries."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @field_validator("id", "label", "description", mode="before", check_fields=False)
    @classmethod
    def strip_text(cls, v):
        """Strip whitespace from text fields; None becomes empty."""
        if v is None:
            return ""
        if isinstance(v, str):
            return v.strip()
        return v


class Severity(_ModelEntry):
    """A severity level and its weight."""

    id: str = Field("", description="Severity id referenced by assessments")
    label: str = Field("", description="Display label")
    weight: float = Field(1.0, description="Weight contributed to EPT per error")
    description: str = Field("", description="Guidance for reviewers")


class ErrorSubcategory(_ModelEntry):
    """A subcategory within an error category."""

    id: str = Field("", description="Subcategory id")
    label: str = Field("", description="Display label")
    description: str = Field("", description="Guidance for reviewers")


class ErrorCategory(_ModelEntry):
    """An error category with its subcategories."""

    id: str = Field("", description="Category id")
    label: str = Field("", description="Display label")
    description: str = Field("", description="Guidance for reviewers")
    subcategories: Tuple[ErrorSubcategory, ...] = Field(default_factory=tuple)

    def find_subcategory(self, subcategory_id: str) -> Optional[ErrorSubcategory]:
        for subcategory in self.subcategories:
            if subcategory.id == subcategory_id:
                return subcategory
        return None


class QualityModel(_ModelEntry):
    """A complete quality taxonomy.

    On the wire the categories are stored under ``errorCategories``; both the
    alias and the field name are accepted.
    """

    id: str = Field("", description="Model id")
    name: str = Field("", description="Model name")
    version: str = Field("", description="Model version")
    description: str = Field("", description="Model description")
    severities: Tuple[Severity, ...] = Field(default_factory=tuple)
    categories: Tuple[ErrorCategory, ...] = Field(default_factory=tuple, alias="errorCategories")

    @field_validator("name", "version", mode="before")
    @classmethod
    def coerce_text(cls, v):
        if v is None:
            return ""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        if isinstance(v, str):
            return v.strip()
        return v

    def find_severity(self, severity_id: str) -> Optional[Severity]:
        """Get a severity by id."""
        for severity in self.severities:
            if severity.id == severity_id:
                return severity
        return None

    def find_category(self, category_id: str) -> Optional[ErrorCategory]:
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    def find_subcategory(self, qualified_id: str) -> Optional[ErrorSubcategory]:
        """Resolve a ``"category.subcategory"`` id.

        Ids without a ``.`` never resolve. Only the first ``.`` separates the
        category from the subcategory.
        """
        if not qualified_id or "." not in qualified_id:
            return None
        category_id, subcategory_id = qualified_id.split(".", 1)
        category = self.find_category(category_id)
        if category is None:
            return None
        return category.find_subcategory(subcategory_id)

    def severity_weight(self, severity_id: str) -> float:
        """Weight of a severity, 0 when the id is unknown."""
        severity = self.find_severity(severity_id)
        return severity.weight if severity is not None else 0.0

    def qualified_category_ids(self) -> List[str]:
        """All ``"category.subcategory"`` ids in model order."""
        return [
            f"{category.id}.{subcategory.id}"
            for category in self.categories
            for subcategory in category.subcategories
        ]

    def category_labels(self) -> Dict[str, str]:
        """Map of qualified subcategory id to ``"Category / Subcategory"`` label."""
        labels = {}
        for category in self.categories:
            for subcategory in category.subcategories:
                labels[f"{category.id}.{subcategory.id}"] = f"{category.label} / {subcategory.label}"
        return labels

    def to_wire(self) -> dict:
        """Serialize using the file format field names."""
        return self.model_dump(mode="json", by_alias=True)
