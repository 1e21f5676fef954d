"""Tests for environment configuration interface."""

import pytest

from common.env import Environment, env


class TestEnvironment:
    """Tests for Environment class."""

    def test_max_retries_default(self, monkeypatch):
        """Test max_retries returns default value."""
        monkeypatch.delenv("AUDIT_MAX_RETRIES", raising=False)
        assert Environment.max_retries() == 2

    def test_max_retries_from_env(self, monkeypatch):
        """Test max_retries reads from environment."""
        monkeypatch.setenv("AUDIT_MAX_RETRIES", "5")
        assert Environment.max_retries() == 5

    def test_max_retries_invalid(self, monkeypatch):
        """Test that a non-numeric value is rejected."""
        monkeypatch.setenv("AUDIT_MAX_RETRIES", "lots")
        with pytest.raises(ValueError):
            Environment.max_retries()

    def test_build_timeout_default(self, monkeypatch):
        """Test build_timeout returns default value."""
        monkeypatch.delenv("AUDIT_BUILD_TIMEOUT", raising=False)
        assert Environment.build_timeout() == 120.0

    def test_build_timeout_from_env(self, monkeypatch):
        """Test build_timeout reads fractional seconds."""
        monkeypatch.setenv("AUDIT_BUILD_TIMEOUT", "90.5")
        assert Environment.build_timeout() == 90.5

    def test_incremental_timeout_default(self, monkeypatch):
        """Test incremental_timeout returns default value."""
        monkeypatch.delenv("AUDIT_INCREMENTAL_TIMEOUT", raising=False)
        assert Environment.incremental_timeout() == 60.0

    def test_install_timeout_default(self, monkeypatch):
        """Test install_timeout returns default value."""
        monkeypatch.delenv("AUDIT_INSTALL_TIMEOUT", raising=False)
        assert Environment.install_timeout() == 120.0

    def test_max_cache_age_default(self, monkeypatch):
        """Test max_cache_age defaults to one day."""
        monkeypatch.delenv("AUDIT_MAX_CACHE_AGE", raising=False)
        assert Environment.max_cache_age() == 86400.0

    def test_health_settings_default(self, monkeypatch):
        """Test health check settings return default values."""
        for name in ("AUDIT_HEALTH_RETRIES", "AUDIT_HEALTH_RETRY_DELAY", "AUDIT_HEALTH_TIMEOUT"):
            monkeypatch.delenv(name, raising=False)
        assert Environment.health_retries() == 3
        assert Environment.health_retry_delay() == 5.0
        assert Environment.health_timeout() == 10.0

    def test_health_retries_from_env(self, monkeypatch):
        """Test health_retries reads from environment."""
        monkeypatch.setenv("AUDIT_HEALTH_RETRIES", "1")
        assert Environment.health_retries() == 1

    def test_build_command_default(self, monkeypatch):
        """Test build_command returns default value."""
        monkeypatch.delenv("AUDIT_BUILD_COMMAND", raising=False)
        assert Environment.build_command() == ("npm", "run", "build")

    def test_build_command_from_env(self, monkeypatch):
        """Test build_command is shell-split."""
        monkeypatch.setenv("AUDIT_BUILD_COMMAND", "pnpm run 'build:prod' --silent")
        assert Environment.build_command() == ("pnpm", "run", "build:prod", "--silent")

    def test_install_command_default(self, monkeypatch):
        """Test install_command returns default value."""
        monkeypatch.delenv("AUDIT_INSTALL_COMMAND", raising=False)
        assert Environment.install_command() == ("npm", "install", "--legacy-peer-deps")

    def test_empty_command_uses_default(self, monkeypatch):
        """Test that an empty command variable falls back to the default."""
        monkeypatch.setenv("AUDIT_INSTALL_COMMAND", "")
        assert Environment.install_command() == ("npm", "install", "--legacy-peer-deps")


class TestEnvSingleton:
    """Tests for env singleton instance."""

    def test_env_is_environment_instance(self):
        """Test that env is an instance of Environment."""
        assert isinstance(env, Environment)

    def test_env_singleton_methods_work(self, monkeypatch):
        """Test that env singleton methods work."""
        monkeypatch.setenv("AUDIT_MAX_RETRIES", "0")
        assert env.max_retries() == 0
