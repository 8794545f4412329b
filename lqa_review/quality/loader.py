"""Quality model loading from JSON or YAML files."""

import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import ValidationError

from lqa_review.logging import get_logger

from .exceptions import QualityModelError
from .models import QualityModel

logger = get_logger(__name__, component="quality")

_YAML_SUFFIXES = {".yaml", ".yml"}


def parse_quality_model(data: Dict[str, Any], source: str = "<data>") -> QualityModel:
    """
    Validate a quality model document.

    Args:
        data: Decoded model document
        source: Where the document came from, used in error messages

    Returns:
        Validated QualityModel

    Raises:
        QualityModelError: If the document does not match the model schema
    """
    if not isinstance(data, dict):
        raise QualityModelError(
            f"Quality model in {source} must be a mapping, got {type(data).__name__}",
            suggestions=["The top level must contain id, name, version, severities and errorCategories"],
        )

    try:
        model = QualityModel.model_validate(data)
    except ValidationError as e:
        raise QualityModelError.from_validation_error(
            f"Quality model validation failed for {source}",
            e,
            suggestions=[
                "Check that every severity has a numeric weight",
                "Check that errorCategories is a list of categories with subcategories",
            ],
        ) from e

    logger.info(
        f"Loaded quality model '{model.name}' {model.version}",
        extra={
            "event": "quality.model.loaded",
            "model_id": model.id,
            "severities": len(model.severities),
            "categories": len(model.categories),
        },
    )
    return model


def load_quality_model(path: Union[str, Path]) -> QualityModel:
    """
    Load a quality model file.

    ``.yaml``/``.yml`` files are read with PyYAML; anything else is read as
    JSON.

    Raises:
        QualityModelError: If the file is missing, unparseable or invalid
    """
    model_path = Path(path)

    try:
        text = model_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise QualityModelError(
            f"Quality model file not found: {model_path}",
            suggestions=[
                f"Ensure {model_path} exists and is readable",
                "Set quality_model_path in config.yaml or LQA_QUALITY_MODEL_PATH",
            ],
        )
    except OSError as e:
        raise QualityModelError(
            f"Failed to read quality model file: {e}",
            suggestions=[f"Ensure {model_path} is readable", "Check file permissions"],
        ) from e

    try:
        if model_path.suffix.lower() in _YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise QualityModelError(
            f"Failed to parse quality model {model_path}: {e}",
            suggestions=["Check the file syntax", "Validate the file with a JSON/YAML validator"],
        ) from e

    return parse_quality_model(data, source=str(model_path))
