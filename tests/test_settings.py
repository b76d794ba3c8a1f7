"""Tests for configuration settings."""
import pytest
from pydantic import ValidationError

from fetias_nodes.config import Settings, get_settings, reset_settings


class TestSettings:
    """Test Settings configuration."""

    def test_settings_default_values(self, monkeypatch):
        """Test default values are set correctly."""
        monkeypatch.delenv("FETIAS_NODES_LOG_LEVEL", raising=False)

        settings = Settings()

        # env might be 'test' in test environment
        assert settings.env in ("development", "test")
        assert settings.log_level == "INFO"
        assert settings.http_timeout_s == 30.0
        assert settings.fetias_base_url == "https://app01.fetias.com/api"
        assert settings.fetias_auth_prefix == "fsk"
        assert settings.fetias_page_size == 200
        assert settings.fetias_max_pages is None
        assert settings.friendgrid_base_url == "https://app01.fetias.com/api/profile"

    def test_settings_from_environment(self, monkeypatch):
        """Test that FETIAS_NODES_* variables override defaults."""
        monkeypatch.setenv("FETIAS_NODES_FETIAS_AUTH_PREFIX", "Token")
        monkeypatch.setenv("FETIAS_NODES_FETIAS_MAX_PAGES", "5")
        monkeypatch.setenv("FETIAS_NODES_HTTP_TIMEOUT_S", "12.5")

        settings = Settings()

        assert settings.fetias_auth_prefix == "Token"
        assert settings.fetias_max_pages == 5
        assert settings.http_timeout_s == 12.5

    def test_invalid_page_size(self):
        """Test that a non-positive page size is rejected."""
        with pytest.raises(ValidationError):
            Settings(fetias_page_size=0)

    def test_invalid_max_pages(self):
        """Test that a non-positive page cap is rejected."""
        with pytest.raises(ValidationError):
            Settings(fetias_max_pages=-1)

    def test_get_settings_is_cached(self):
        """Test that get_settings returns the same instance until reset."""
        first = get_settings()

        assert get_settings() is first

        reset_settings()
        assert get_settings() is not first
