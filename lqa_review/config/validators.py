"""Additional validation utilities for configuration."""

import warnings
from pathlib import Path
from typing import Any, Dict, List

KNOWN_SECTIONS = {"review", "quality_model_path", "logging"}


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    # Unknown top-level keys are ignored by the schema
    for key in sorted(set(config_dict) - KNOWN_SECTIONS):
        warning_messages.append(f"Unknown configuration key '{key}' will be ignored")

    review = config_dict.get("review", {})
    if isinstance(review, dict) and review.get("auto_mark_on_focus_loss") is False:
        warning_messages.append(
            "auto_mark_on_focus_loss is disabled; edited units must be marked reviewed explicitly"
        )

    model_path = config_dict.get("quality_model_path")
    if isinstance(model_path, str) and model_path.strip():
        path = Path(model_path.strip())
        if not path.exists():
            warning_messages.append(
                f"quality_model_path '{model_path}' does not exist yet; loading it will fail"
            )
        elif path.suffix.lower() not in {".json", ".yaml", ".yml"}:
            warning_messages.append(
                f"quality_model_path '{model_path}' has an unexpected extension; it will be read as JSON"
            )

    logging_section = config_dict.get("logging", {})
    if isinstance(logging_section, dict):
        level = logging_section.get("level")
        if isinstance(level, str) and level.strip().upper() == "DEBUG":
            warning_messages.append("DEBUG logging records every unit edit and may be verbose")

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
