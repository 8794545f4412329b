"""Configuration loader for the review core."""

from pathlib import Path
from typing import Optional, Tuple, Union

import yaml
from pydantic import ValidationError

from lqa_review.logging import get_logger

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .models import AppConfig
from .validators import check_for_warnings, emit_warnings

logger = get_logger(__name__, component="config")

DEFAULT_CONFIG_LOCATIONS = (Path("config.yaml"), Path("config") / "config.yaml")


def load_config(
    config_path: Optional[Union[str, Path]] = None, load_env_file: bool = True
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load the review core settings file and the environment overrides.

    Without an explicit ``config_path`` the locations in
    DEFAULT_CONFIG_LOCATIONS are tried in order.

    Args:
        config_path: Settings file to read
        load_env_file: Whether to read a .env file before the environment

    Returns:
        (AppConfig, EnvironmentConfig); apply the overrides with
        resolve_runtime_config

    Raises:
        ConfigurationError: If no file is found or any value is invalid
    """
    config_file = _find_config_file(Path(config_path) if config_path else None)
    app_config = parse_config_file(config_file)

    try:
        env_config = load_environment_config(load_env_file=load_env_file)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(
            f"Failed to load environment configuration: {e}",
            suggestions=[
                "Copy .env.example to .env and adjust the values",
                "Check the .env file syntax",
            ],
        ) from e

    return app_config, env_config


def parse_config_file(config_file: Path) -> AppConfig:
    """
    Read and validate one YAML configuration file.

    Raises:
        ConfigurationError: If the file cannot be read, parsed or validated
    """
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(
            f"Configuration file not found: {config_file}",
            suggestions=[
                "Copy config.example.yaml to config.yaml",
                f"Ensure {config_file} exists and is readable",
            ],
        )
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            suggestions=[
                "Check YAML syntax in your config file",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            suggestions=[
                f"Ensure {config_file} is readable",
                "Check file permissions",
            ],
        ) from e

    if config_dict is None:
        # An empty file selects every default
        config_dict = {}

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            "Configuration file must contain a mapping at the top level",
            suggestions=["Review config.example.yaml for correct format"],
        )

    warnings = check_for_warnings(config_dict)
    if warnings:
        emit_warnings(warnings)

    try:
        app_config = AppConfig.model_validate(config_dict)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"])
            error_type = error["type"]

            if error_type in ["string_type", "bool_type", "bool_parsing"]:
                expected_type = error_type.split("_")[0]
                errors.append(
                    f"Invalid type for '{field_path}': expected {expected_type}, got {error.get('input')!r}"
                )
            elif "enum" in error_type:
                errors.append(f"Invalid value for '{field_path}': {error['msg']}")
            else:
                errors.append(f"{field_path}: {error['msg']}")

        raise ConfigurationError(
            "Configuration validation failed",
            errors=errors,
            suggestions=[
                "Review config.example.yaml for correct format",
                "Verify field types match the expected schema",
            ],
        ) from e

    logger.debug(
        "Configuration file parsed",
        extra={"event": "config.parsed", "config_path": str(config_file)},
    )
    return app_config


def resolve_runtime_config(
    app_config: AppConfig,
    env_config: EnvironmentConfig,
    log_level_override: Optional[str] = None,
) -> AppConfig:
    """
    Apply environment overrides to a loaded configuration.

    Log level priority: explicit override > LOG_LEVEL > config file.
    Quality model priority: LQA_QUALITY_MODEL_PATH > config file.

    Returns:
        A new AppConfig; the inputs are not modified
    """
    log_level = log_level_override or env_config.log_level or app_config.logging.level
    quality_model_path = env_config.quality_model_path or app_config.quality_model_path

    try:
        return AppConfig.model_validate(
            {
                "review": app_config.review.model_dump(),
                "quality_model_path": quality_model_path,
                "logging": {"level": log_level, "format": app_config.logging.format},
            }
        )
    except ValidationError as e:
        raise ConfigurationError.from_validation_error(
            "Invalid configuration override", e,
            suggestions=["Check LOG_LEVEL and LQA_QUALITY_MODEL_PATH"],
        ) from e


def _find_config_file(config_path: Optional[Path] = None) -> Path:
    """Return ``config_path`` if it exists, else the first default location found."""
    if config_path:
        if not config_path.exists():
            raise ConfigurationError(
                f"Specified configuration file not found: {config_path}",
                suggestions=[
                    f"Ensure {config_path} exists",
                    "Check the path and try again",
                ],
            )
        return config_path

    for candidate in DEFAULT_CONFIG_LOCATIONS:
        if candidate.exists():
            return candidate

    raise ConfigurationError(
        "Configuration file not found",
        errors=[f"Tried: {candidate}" for candidate in DEFAULT_CONFIG_LOCATIONS],
        suggestions=[
            "Copy config.example.yaml to config.yaml",
            "Pass an explicit config_path",
        ],
    )


def validate_config_file(config_path: Union[str, Path]) -> bool:
    """
    Check a settings file on its own, ignoring the environment.

    Returns:
        True if valid, False otherwise (the error is logged)
    """
    try:
        parse_config_file(Path(config_path))
    except ConfigurationError as e:
        logger.error(
            f"Configuration validation failed:\n{e}",
            extra={"event": "config.invalid", "config_path": str(config_path)},
        )
        return False
    return True
