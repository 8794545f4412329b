"""Environment variable loading and validation."""

import os
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        log_level: Optional[str] = None,
        quality_model_path: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        """Initialize environment configuration."""
        self.log_level = log_level
        self.quality_model_path = quality_model_path
        self.environment = environment or "local"


def load_environment_config(
    dotenv_path: Optional[Union[str, Path]] = None, load_env_file: bool = True
) -> EnvironmentConfig:
    """
    Load and validate environment variables.

    A ``.env`` file is read first (variables already set in the process
    environment win).

    Optional environment variables:
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - LQA_QUALITY_MODEL_PATH: Override the configured quality model file
    - LQA_ENVIRONMENT: Deployment environment name (default: local)

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If variables are invalid
    """
    if load_env_file:
        load_dotenv(dotenv_path=dotenv_path, override=False)

    errors = []

    log_level = os.getenv("LOG_LEVEL")
    quality_model_path = os.getenv("LQA_QUALITY_MODEL_PATH")
    environment = os.getenv("LQA_ENVIRONMENT")

    if log_level:
        log_level = log_level.strip().upper()
        if log_level not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )
    else:
        log_level = None

    if quality_model_path is not None:
        quality_model_path = quality_model_path.strip() or None

    if environment is not None:
        environment = environment.strip()
        if not environment:
            errors.append("LQA_ENVIRONMENT is set but empty")

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and adjust the values",
                "Unset variables you do not need; all of them are optional",
            ],
        )

    return EnvironmentConfig(
        log_level=log_level,
        quality_model_path=quality_model_path,
        environment=environment,
    )
