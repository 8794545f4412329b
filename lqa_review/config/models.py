"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class ReviewConfig(BaseModel):
    """Review bookkeeping behaviour."""

    auto_mark_on_focus_loss: bool = Field(
        True, description="Mark an edited, unreviewed unit as reviewed when focus leaves it"
    )
    track_review_time: bool = Field(
        True, description="Collect per-segment and per-page review timings"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    @field_validator("level", mode="before")
    @classmethod
    def uppercase_level(cls, v):
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for the review core."""

    review: ReviewConfig = Field(default_factory=ReviewConfig, description="Review settings")
    quality_model_path: Optional[str] = Field(
        None, description="Quality model file (JSON or YAML) loaded for new sessions"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    @field_validator("quality_model_path")
    @classmethod
    def blank_path_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Strip whitespace; an empty path means no model."""
        if v is None:
            return None
        stripped = v.strip()
        return stripped or None
