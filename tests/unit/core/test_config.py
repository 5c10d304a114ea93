"""Tests for sequencer.core.config module."""

import pytest
from pydantic import ValidationError

from sequencer.core.config import Config, get_config


@pytest.mark.unit
def test_config_default_values(monkeypatch):
    """Test that config has correct default values."""
    for name in ("DEBUG", "APP_NAME", "APP_ENV", "LOG_LEVEL", "MAX_ITEMS", "PROXY_BASE"):
        monkeypatch.delenv(name, raising=False)

    config = Config(_env_file=None)

    assert config.app_name == "Sequencer"
    assert config.app_env == "development"
    assert config.debug is False
    assert config.log_level == "INFO"
    assert config.max_items == 50
    assert config.max_hashtags == 5
    assert config.proxy_base == "/api/proxy-image"
    assert config.draft_key == "sequence-draft"
    assert config.draft_max_age_days == 30


@pytest.mark.unit
def test_config_is_development():
    """Test is_development property."""
    config = Config(app_env="development")
    assert config.is_development is True

    config = Config(app_env="production")
    assert config.is_development is False


@pytest.mark.unit
def test_config_is_production():
    """Test is_production property."""
    config = Config(app_env="production")
    assert config.is_production is True

    config = Config(app_env="development")
    assert config.is_production is False


@pytest.mark.unit
def test_base_urls_strip_trailing_slash():
    """Test base URLs are normalized."""
    config = Config(
        public_base_url="https://viewer.example/",
        channels_base_url="https://channels.example///",
    )
    assert config.public_base_url == "https://viewer.example"
    assert config.channels_base_url == "https://channels.example"


@pytest.mark.unit
def test_config_limit_constraints():
    """Test numeric limits are bounded."""
    assert Config(max_items=10).max_items == 10

    with pytest.raises(ValidationError):
        Config(max_items=0)

    with pytest.raises(ValidationError):
        Config(import_page_limit=51)

    with pytest.raises(ValidationError):
        Config(draft_max_age_days=0)


@pytest.mark.unit
def test_config_env_literal():
    """Test that app_env only accepts valid values."""
    for env in ["development", "staging", "production"]:
        config = Config(app_env=env)
        assert config.app_env == env

    with pytest.raises(ValidationError):
        Config(app_env="invalid")


@pytest.mark.unit
def test_config_log_level_literal():
    """Test that log_level only accepts valid values."""
    for level in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
        config = Config(log_level=level)
        assert config.log_level == level

    with pytest.raises(ValidationError):
        Config(log_level="INVALID")


@pytest.mark.unit
def test_config_from_env(monkeypatch):
    """Test loading config from environment variables."""
    monkeypatch.setenv("APP_NAME", "TestApp")
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("DEBUG", "true")
    monkeypatch.setenv("GOOGLE_API_KEY", "abc")

    config = Config()

    assert config.app_name == "TestApp"
    assert config.app_env == "production"
    assert config.debug is True
    assert config.google_api_key == "abc"


@pytest.mark.unit
def test_get_config_is_singleton():
    """Test get_config returns the same instance."""
    assert get_config() is get_config()
