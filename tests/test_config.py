"""Integration tests for configuration module."""

from pathlib import Path

import pytest

from lqa_review.config import (
    AppConfig,
    ConfigurationError,
    EnvironmentConfig,
    load_config,
    load_environment_config,
    parse_config_file,
    resolve_runtime_config,
    validate_config_file,
)


@pytest.fixture
def write_config(tmp_path):
    """Write YAML text to config.yaml in a temporary directory."""

    def _write(text: str, name: str = "config.yaml") -> Path:
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write


@pytest.fixture
def model_file(tmp_path):
    path = tmp_path / "model.json"
    path.write_text('{"id": "m"}')
    return path


class TestConfigurationLoading:
    """Test configuration loading from YAML files."""

    def test_load_valid_config(self, write_config, model_file, clean_env):
        """Test loading a complete configuration file."""
        config_path = write_config(
            "review:\n"
            "  auto_mark_on_focus_loss: true\n"
            "  track_review_time: false\n"
            f"quality_model_path: {model_file}\n"
            "logging:\n"
            "  level: warning\n"
            "  format: json\n"
        )

        app_config, env_config = load_config(config_path, load_env_file=False)

        assert app_config.review.auto_mark_on_focus_loss is True
        assert app_config.review.track_review_time is False
        assert app_config.quality_model_path == str(model_file)
        assert app_config.logging.level == "WARNING"
        assert app_config.logging.format == "json"
        assert env_config.environment == "local"

    def test_load_minimal_config(self, write_config, clean_env):
        """Test that omitted sections take their defaults."""
        config_path = write_config("review: {}\n")

        app_config, _ = load_config(config_path, load_env_file=False)

        assert app_config.review.auto_mark_on_focus_loss is True
        assert app_config.review.track_review_time is True
        assert app_config.quality_model_path is None
        assert app_config.logging.level == "INFO"
        assert app_config.logging.format == "key-value"

    def test_empty_file_uses_defaults(self, write_config):
        app_config = parse_config_file(write_config(""))

        assert app_config == AppConfig()

    def test_blank_model_path_is_none(self, write_config):
        app_config = parse_config_file(write_config("quality_model_path: '   '\n"))

        assert app_config.quality_model_path is None

    def test_default_location(self, tmp_path, write_config, clean_env):
        """Test config.yaml is found in the working directory."""
        write_config("logging:\n  level: ERROR\n")
        clean_env.chdir(tmp_path)

        app_config, _ = load_config(load_env_file=False)

        assert app_config.logging.level == "ERROR"

    def test_no_config_anywhere(self, tmp_path, clean_env):
        clean_env.chdir(tmp_path)

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(load_env_file=False)

        assert "Configuration file not found" in str(exc_info.value)

    def test_config_file_not_found(self, clean_env):
        """Test error when config file doesn't exist."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(Path("nonexistent.yaml"), load_env_file=False)

        assert "not found" in str(exc_info.value)

    def test_invalid_yaml_syntax(self, write_config):
        """Test error on malformed YAML."""
        config_path = write_config("review:\n  auto_mark_on_focus_loss: [unclosed\n")

        with pytest.raises(ConfigurationError) as exc_info:
            parse_config_file(config_path)

        assert "Failed to parse YAML" in str(exc_info.value)


class TestConfigurationValidation:
    """Test schema validation errors."""

    def test_top_level_must_be_mapping(self, write_config):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_config_file(write_config("- one\n- two\n"))

        assert "mapping" in str(exc_info.value)

    def test_invalid_bool(self, write_config):
        config_path = write_config("review:\n  auto_mark_on_focus_loss: sometimes\n")

        with pytest.raises(ConfigurationError) as exc_info:
            parse_config_file(config_path)

        error_msg = str(exc_info.value)
        assert "Configuration validation failed" in error_msg
        assert "review -> auto_mark_on_focus_loss" in error_msg
        assert "expected bool" in error_msg

    def test_invalid_log_level(self, write_config):
        config_path = write_config("logging:\n  level: VERBOSE\n")

        with pytest.raises(ConfigurationError) as exc_info:
            parse_config_file(config_path)

        assert "Invalid value for 'logging -> level'" in str(exc_info.value)

    def test_validate_config_file_utility(self, write_config):
        assert validate_config_file(write_config("review: {}\n")) is True
        assert validate_config_file(write_config("logging:\n  format: xml\n", name="bad.yaml")) is False


class TestConfigurationWarnings:
    """Test non-fatal configuration warnings."""

    def test_unknown_key(self, write_config):
        with pytest.warns(UserWarning, match="Unknown configuration key 'sources'"):
            parse_config_file(write_config("sources: []\n"))

    def test_auto_mark_disabled(self, write_config):
        with pytest.warns(UserWarning, match="auto_mark_on_focus_loss is disabled"):
            config = parse_config_file(write_config("review:\n  auto_mark_on_focus_loss: false\n"))

        assert config.review.auto_mark_on_focus_loss is False

    def test_missing_model_file(self, write_config):
        with pytest.warns(UserWarning, match="does not exist yet"):
            parse_config_file(write_config("quality_model_path: missing/model.json\n"))

    def test_unexpected_model_extension(self, tmp_path, write_config):
        model_path = tmp_path / "model.txt"
        model_path.write_text("{}")

        with pytest.warns(UserWarning, match="unexpected extension"):
            parse_config_file(write_config(f"quality_model_path: {model_path}\n"))

    def test_debug_logging(self, write_config):
        with pytest.warns(UserWarning, match="DEBUG logging"):
            parse_config_file(write_config("logging:\n  level: debug\n"))


class TestEnvironmentVariables:
    """Test environment variable loading."""

    def test_defaults(self, clean_env):
        env_config = load_environment_config(load_env_file=False)

        assert env_config.log_level is None
        assert env_config.quality_model_path is None
        assert env_config.environment == "local"

    def test_values_are_normalized(self, clean_env):
        clean_env.setenv("LOG_LEVEL", " debug ")
        clean_env.setenv("LQA_QUALITY_MODEL_PATH", " models/mqm.yaml ")
        clean_env.setenv("LQA_ENVIRONMENT", "staging")

        env_config = load_environment_config(load_env_file=False)

        assert env_config.log_level == "DEBUG"
        assert env_config.quality_model_path == "models/mqm.yaml"
        assert env_config.environment == "staging"

    def test_invalid_log_level(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config(load_env_file=False)

        assert "Invalid LOG_LEVEL: 'LOUD'" in str(exc_info.value)

    def test_empty_environment_name(self, clean_env):
        clean_env.setenv("LQA_ENVIRONMENT", "  ")

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config(load_env_file=False)

        assert "LQA_ENVIRONMENT is set but empty" in str(exc_info.value)

    def test_dotenv_file(self, tmp_path, clean_env):
        dotenv_path = tmp_path / ".env"
        dotenv_path.write_text("LOG_LEVEL=ERROR\n")

        env_config = load_environment_config(dotenv_path=dotenv_path)

        assert env_config.log_level == "ERROR"

    def test_process_environment_wins_over_dotenv(self, tmp_path, clean_env):
        dotenv_path = tmp_path / ".env"
        dotenv_path.write_text("LOG_LEVEL=ERROR\n")
        clean_env.setenv("LOG_LEVEL", "WARNING")

        env_config = load_environment_config(dotenv_path=dotenv_path)

        assert env_config.log_level == "WARNING"


class TestRuntimeResolution:
    """Test environment overrides applied to file configuration."""

    def test_env_overrides_file(self):
        app_config = AppConfig.model_validate(
            {"quality_model_path": "file.json", "logging": {"level": "WARNING"}}
        )
        env_config = EnvironmentConfig(log_level="DEBUG", quality_model_path="env.json")

        resolved = resolve_runtime_config(app_config, env_config)

        assert resolved.logging.level == "DEBUG"
        assert resolved.quality_model_path == "env.json"
        assert app_config.logging.level == "WARNING"

    def test_explicit_override_wins(self):
        app_config = AppConfig.model_validate({"logging": {"level": "WARNING"}})
        env_config = EnvironmentConfig(log_level="DEBUG")

        resolved = resolve_runtime_config(app_config, env_config, log_level_override="error")

        assert resolved.logging.level == "ERROR"

    def test_file_values_kept_without_env(self):
        app_config = AppConfig.model_validate(
            {"review": {"track_review_time": False}, "quality_model_path": "file.json"}
        )

        resolved = resolve_runtime_config(app_config, EnvironmentConfig())

        assert resolved.quality_model_path == "file.json"
        assert resolved.review.track_review_time is False
        assert resolved.logging.level == "INFO"

    def test_invalid_override(self):
        with pytest.raises(ConfigurationError):
            resolve_runtime_config(AppConfig(), EnvironmentConfig(), log_level_override="LOUD")
