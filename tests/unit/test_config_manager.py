"""Unit tests for configuration management functionality."""

from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from tradesatoshi_client.api.client import TradeSatoshiClient
from tradesatoshi_client.api.errors import ConfigurationError
from tradesatoshi_client.config.manager import ConfigManager, ConfigValidationError


PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_CONFIG = PROJECT_ROOT / "config" / "default.yaml"


def write_config(directory: Path, data, name: str = "config.yaml") -> str:
    path = directory / name
    with open(path, "w", encoding="utf-8") as f:
        if isinstance(data, str):
            f.write(data)
        else:
            yaml.dump(data, f)
    return str(path)


class TestConfigManager:
    """Test cases for ConfigManager."""

    def test_load_default_config(self):
        manager = ConfigManager(str(DEFAULT_CONFIG))
        config = manager.load_config()

        assert isinstance(config, dict)
        assert config["api"]["base_url"] == "https://tradesatoshi.com/api/"
        assert config["api"]["log_requests"] is False

    def test_api_settings_defaults_filled(self, temp_config_dir):
        path = write_config(temp_config_dir, {"api": {"base_url": "https://example.test/api/"}})
        settings = ConfigManager(path).get_api_settings()

        assert settings["base_url"] == "https://example.test/api/"
        assert settings["timeout"] == 30.0
        assert settings["log_requests"] is False
        assert settings["user_agent"]

    def test_logging_settings_defaults_filled(self, temp_config_dir):
        path = write_config(temp_config_dir, {"api": {"base_url": "https://x.test/"},
                                              "logging": {"level": "DEBUG"}})
        settings = ConfigManager(path).get_logging_settings()
        assert settings["level"] == "DEBUG"
        assert settings["file"] is False

    def test_path_from_environment(self, temp_config_dir, monkeypatch):
        path = write_config(temp_config_dir, {"api": {"base_url": "https://env.test/api/"}})
        monkeypatch.setenv("TRADESATOSHI_CONFIG", path)
        assert ConfigManager().get_api_settings()["base_url"] == "https://env.test/api/"

    def test_missing_file(self):
        manager = ConfigManager("nonexistent.yaml")
        with pytest.raises(ConfigValidationError) as exc_info:
            manager.load_config()
        assert "not found" in exc_info.value.message

    def test_invalid_yaml(self, temp_config_dir):
        path = write_config(temp_config_dir, "invalid: yaml: content: [")
        with pytest.raises(ConfigValidationError) as exc_info:
            ConfigManager(path).load_config()
        assert "Invalid YAML syntax" in exc_info.value.message

    def test_empty_file(self, temp_config_dir):
        path = write_config(temp_config_dir, "")
        with pytest.raises(ConfigValidationError) as exc_info:
            ConfigManager(path).load_config()
        assert "empty" in exc_info.value.message

    def test_not_a_mapping(self, temp_config_dir):
        path = write_config(temp_config_dir, "- a\n- b\n")
        with pytest.raises(ConfigValidationError) as exc_info:
            ConfigManager(path).load_config()
        assert exc_info.value.expected_type == "dict"

    def test_missing_api_section(self, temp_config_dir):
        path = write_config(temp_config_dir, {"logging": {"level": "INFO"}})
        with pytest.raises(ConfigValidationError) as exc_info:
            ConfigManager(path).load_config()
        assert exc_info.value.field_path == "api"

    @pytest.mark.parametrize("api,field_path", [
        ({"timeout": 30}, "api.base_url"),
        ({"base_url": 42}, "api.base_url"),
        ({"base_url": "ftp://x"}, "api.base_url"),
        ({"base_url": "https://x", "timeout": "slow"}, "api.timeout"),
        ({"base_url": "https://x", "timeout": True}, "api.timeout"),
        ({"base_url": "https://x", "timeout": 0}, "api.timeout"),
        ({"base_url": "https://x", "log_requests": "yes"}, "api.log_requests"),
        ({"base_url": "https://x", "api_secret": "c2VjcmV0"}, "api.api_secret"),
    ])
    def test_invalid_api_fields(self, temp_config_dir, api, field_path):
        path = write_config(temp_config_dir, {"api": api})
        with pytest.raises(ConfigValidationError) as exc_info:
            ConfigManager(path).load_config()
        assert exc_info.value.field_path == field_path

    def test_invalid_log_level(self, temp_config_dir):
        path = write_config(temp_config_dir, {"api": {"base_url": "https://x"},
                                              "logging": {"level": "LOUD"}})
        with pytest.raises(ConfigValidationError) as exc_info:
            ConfigManager(path).load_config()
        assert exc_info.value.field_path == "logging.level"

    def test_validation_error_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            ConfigManager("nonexistent.yaml").load_config()

    def test_get_missing_section(self, temp_config_dir):
        path = write_config(temp_config_dir, {"api": {"base_url": "https://x"}})
        with pytest.raises(ConfigValidationError):
            ConfigManager(path).get_section("logging")

    def test_validate_config_file(self, temp_config_dir):
        good = write_config(temp_config_dir, {"api": {"base_url": "https://x"}}, "good.yaml")
        bad = write_config(temp_config_dir, {"api": {"timeout": 1}}, "bad.yaml")
        manager = ConfigManager(str(DEFAULT_CONFIG))

        assert manager.validate_config_file(good) is True
        assert manager.validate_config_file(bad) is False

    def test_credentials_from_environment(self, monkeypatch):
        monkeypatch.setenv("TRADESATOSHI_API_KEY", "key")
        monkeypatch.setenv("TRADESATOSHI_API_SECRET", "dG95LXNlY3JldA==")
        credentials = ConfigManager(str(DEFAULT_CONFIG)).get_credentials()
        assert credentials.api_key == "key"

    def test_no_credentials(self):
        assert ConfigManager(str(DEFAULT_CONFIG)).get_credentials() is None


class TestClientFromConfig:

    def test_client_uses_config(self, temp_config_dir):
        path = write_config(temp_config_dir, {"api": {
            "base_url": "https://staging.test/api/",
            "timeout": 5,
            "user_agent": "tests/1.0",
            "log_requests": True,
        }})
        client = TradeSatoshiClient.from_config(ConfigManager(path))

        assert client.base_url == "https://staging.test/api/"
        assert client.transport.timeout == 5
        assert client.transport.user_agent == "tests/1.0"
        assert client.transport.log_requests is True
        assert not client.has_credentials

    def test_client_picks_up_env_credentials(self, monkeypatch):
        monkeypatch.setenv("TRADESATOSHI_API_KEY", "key")
        monkeypatch.setenv("TRADESATOSHI_API_SECRET", "dG95LXNlY3JldA==")
        client = TradeSatoshiClient.from_config(ConfigManager(str(DEFAULT_CONFIG)))
        assert client.has_credentials

    def test_bad_env_secret_fails_before_network(self, monkeypatch):
        monkeypatch.setenv("TRADESATOSHI_API_KEY", "key")
        monkeypatch.setenv("TRADESATOSHI_API_SECRET", "not base64!")
        with patch("tradesatoshi_client.api.transport.requests.post") as mock_post:
            with pytest.raises(ConfigurationError):
                TradeSatoshiClient.from_config(ConfigManager(str(DEFAULT_CONFIG))).get_balances()
            mock_post.assert_not_called()
