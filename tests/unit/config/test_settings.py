"""Tests for settings resolution.

This module tests the SettingsResolver class which resolves client settings
from explicit values, environment variables, .env files and defaults.
"""

import logging

import pytest

from catalog_client_core.config import ClientSettings, SettingsResolver
from catalog_client_core.config.exceptions import SettingNotFoundError, SettingValueError


class TestSettingsResolverInit:
    """Test SettingsResolver initialization."""

    def test_init_default(self):
        """Test default initialization."""
        resolver = SettingsResolver()
        assert resolver._dotenv_loaded  # Should load dotenv by default

    def test_init_skip_dotenv(self):
        """Test initialization with dotenv loading disabled."""
        resolver = SettingsResolver(load_dotenv=False)
        assert not resolver._dotenv_loaded

    def test_init_with_custom_dotenv_path(self, tmp_path, monkeypatch):
        """Test initialization with custom dotenv path loads its values."""
        dotenv_file = tmp_path / ".env"
        dotenv_file.write_text("TEST_DOTENV_VAR=from-dotenv\n")
        # Registered with monkeypatch so the loaded value is removed afterwards
        monkeypatch.setenv("TEST_DOTENV_VAR", "placeholder")
        monkeypatch.delenv("TEST_DOTENV_VAR")

        resolver = SettingsResolver(dotenv_path=str(dotenv_file))

        assert resolver._dotenv_loaded
        assert resolver.resolve(env_var_name="TEST_DOTENV_VAR") == "from-dotenv"

    def test_dotenv_loaded_only_once(self, tmp_path):
        """Test that .env file is loaded only once even with multiple calls."""
        dotenv_file = tmp_path / ".env"
        dotenv_file.write_text("# no settings\n")

        resolver = SettingsResolver(dotenv_path=str(dotenv_file))
        resolver._ensure_dotenv_loaded()
        resolver._ensure_dotenv_loaded()

        assert resolver._dotenv_loaded is True

    def test_dotenv_path_that_is_a_directory(self, tmp_path):
        """Test that an unusable .env path does not prevent resolution."""
        dotenv_path = tmp_path / "not_a_file"
        dotenv_path.mkdir()

        resolver = SettingsResolver(dotenv_path=str(dotenv_path))

        assert resolver._dotenv_loaded is True
        assert resolver.resolve(value="works") == "works"


class TestSettingsResolverResolve:
    """Test basic setting resolution and priority."""

    def test_resolve_from_explicit_value(self):
        resolver = SettingsResolver(load_dotenv=False)

        assert resolver.resolve(value="explicit-value-123") == "explicit-value-123"

    def test_resolve_from_environment_variable(self, monkeypatch):
        monkeypatch.setenv("TEST_SETTING", "env-value-456")
        resolver = SettingsResolver(load_dotenv=False)

        assert resolver.resolve(env_var_name="TEST_SETTING") == "env-value-456"

    def test_explicit_value_overrides_all(self, monkeypatch):
        monkeypatch.setenv("TEST_PRIORITY_KEY", "env-value")
        resolver = SettingsResolver(load_dotenv=False)

        result = resolver.resolve(value="explicit-value", env_var_name="TEST_PRIORITY_KEY", default="default-value")

        assert result == "explicit-value"

    def test_environment_overrides_default(self, monkeypatch):
        monkeypatch.setenv("TEST_PRIORITY_KEY2", "env-value")
        resolver = SettingsResolver(load_dotenv=False)

        assert resolver.resolve(env_var_name="TEST_PRIORITY_KEY2", default="default-value") == "env-value"

    def test_default_used_when_nothing_else_set(self):
        resolver = SettingsResolver(load_dotenv=False)

        assert resolver.resolve(env_var_name="NONEXISTENT_VAR", default="default-value") == "default-value"

    def test_resolve_returns_none_when_not_found(self):
        resolver = SettingsResolver(load_dotenv=False)

        assert resolver.resolve(env_var_name="NONEXISTENT_VAR") is None

    def test_resolve_raises_when_required_and_not_found(self):
        resolver = SettingsResolver(load_dotenv=False)

        with pytest.raises(SettingNotFoundError) as exc_info:
            resolver.resolve(env_var_name="NONEXISTENT_VAR", required=True)

        assert "Required setting not found" in str(exc_info.value)
        assert exc_info.value.env_var_name == "NONEXISTENT_VAR"


class TestSettingsResolverConversion:
    """Test typed resolution."""

    def test_resolve_float_from_env(self, monkeypatch):
        monkeypatch.setenv("TEST_INTERVAL", "0.5")
        resolver = SettingsResolver(load_dotenv=False)

        assert resolver.resolve_float(env_var_name="TEST_INTERVAL", default=1.0) == 0.5

    def test_resolve_float_default(self):
        resolver = SettingsResolver(load_dotenv=False)

        assert resolver.resolve_float(env_var_name="TEST_INTERVAL", default=1.0) == 1.0

    def test_resolve_float_invalid(self, monkeypatch):
        monkeypatch.setenv("TEST_INTERVAL", "fast")
        resolver = SettingsResolver(load_dotenv=False)

        with pytest.raises(SettingValueError) as exc_info:
            resolver.resolve_float(env_var_name="TEST_INTERVAL")

        assert exc_info.value.env_var_name == "TEST_INTERVAL"
        assert "fast" in str(exc_info.value)

    def test_resolve_int_explicit_value(self, monkeypatch):
        monkeypatch.setenv("TEST_PAGE_SIZE", "10")
        resolver = SettingsResolver(load_dotenv=False)

        assert resolver.resolve_int(value=25, env_var_name="TEST_PAGE_SIZE") == 25

    def test_resolve_int_invalid(self, monkeypatch):
        monkeypatch.setenv("TEST_PAGE_SIZE", "1.5")
        resolver = SettingsResolver(load_dotenv=False)

        with pytest.raises(SettingValueError):
            resolver.resolve_int(env_var_name="TEST_PAGE_SIZE")


class TestLoadSettings:
    """Test building ClientSettings from the environment."""

    def test_defaults(self):
        resolver = SettingsResolver(load_dotenv=False)

        assert resolver.load_settings() == ClientSettings()

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("CATALOG_AUTH_TOKEN", "secret-token")
        monkeypatch.setenv("CATALOG_ENDPOINT_COMPUTE", "https://compute.example.com/v2.1")
        monkeypatch.setenv("CATALOG_ENDPOINT_BLOCK_STORAGE", "https://volume.example.com/v3")
        monkeypatch.setenv("CATALOG_REQUEST_TIMEOUT", "10")
        monkeypatch.setenv("CATALOG_POLL_INTERVAL", "0.25")
        monkeypatch.setenv("CATALOG_WAIT_TIMEOUT", "60")
        monkeypatch.setenv("CATALOG_PAGE_SIZE", "100")
        resolver = SettingsResolver(load_dotenv=False)

        settings = resolver.load_settings()

        assert settings.token == "secret-token"
        assert settings.endpoints == {
            "compute": "https://compute.example.com/v2.1",
            "block-storage": "https://volume.example.com/v3",
        }
        assert settings.request_timeout == 10.0
        assert settings.poll_interval == 0.25
        assert settings.wait_timeout == 60.0
        assert settings.page_size == 100

    def test_custom_prefix(self, monkeypatch):
        monkeypatch.setenv("TEST_ENDPOINT_IMAGE", "https://image.example.com")
        resolver = SettingsResolver(load_dotenv=False)

        settings = resolver.load_settings(prefix="TEST_")

        assert settings.endpoints == {"image": "https://image.example.com"}

    def test_empty_endpoint_is_ignored(self, monkeypatch):
        monkeypatch.setenv("CATALOG_ENDPOINT_COMPUTE", "")
        resolver = SettingsResolver(load_dotenv=False)

        assert resolver.resolve_endpoints() == {}


class TestMasking:
    """Test secret masking in logs."""

    def test_token_is_masked_in_debug_logs(self, monkeypatch, caplog):
        caplog.set_level(logging.DEBUG)
        monkeypatch.setenv("CATALOG_AUTH_TOKEN", "super-secret-token-123")

        SettingsResolver(load_dotenv=False).load_settings()

        assert "super-secret-token-123" not in caplog.text
        assert "***" in caplog.text

    def test_non_secret_values_are_logged(self, caplog):
        caplog.set_level(logging.DEBUG)

        SettingsResolver(load_dotenv=False).resolve(value="public-value")

        assert "public-value" in caplog.text
