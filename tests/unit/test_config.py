"""Test configuration module."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from searchcache.config import AppConfig


class TestAppConfig:
    """Test application configuration."""

    def test_should_load_default_values(self, monkeypatch):
        """Test default configuration."""
        for name in ("CACHE_TTL_SECONDS", "CACHE_BACKEND", "APP_NAME", "DEBUG"):
            monkeypatch.delenv(name, raising=False)
        config = AppConfig(_env_file=None)
        assert config.app_name == "SearchCache"
        assert config.cache_ttl_seconds == 3600
        assert config.cache_backend == "file"
        assert config.search_max_attempts == 1

    def test_should_read_environment(self, monkeypatch):
        """Test environment overrides."""
        monkeypatch.setenv("CACHE_TTL_SECONDS", "120")
        monkeypatch.setenv("CACHE_BACKEND", "memory")
        config = AppConfig(_env_file=None)
        assert config.cache_ttl_seconds == 120
        assert config.cache_backend == "memory"

    def test_should_reject_non_positive_ttl(self):
        """Test TTL validation."""
        with pytest.raises(ValidationError):
            AppConfig(_env_file=None, cache_ttl_seconds=0)

    def test_should_reject_unknown_log_level(self):
        """Test log level validation."""
        with pytest.raises(ValidationError):
            AppConfig(_env_file=None, log_level="chatty")

    def test_should_force_debug_log_level(self):
        """Test debug toggle overrides log level."""
        config = AppConfig(_env_file=None, log_level="warning", debug=True)
        assert config.log_level == "WARNING"
        assert config.effective_log_level == "DEBUG"

    def test_should_split_search_command(self):
        """Test search command parsing."""
        config = AppConfig(_env_file=None, search_command='agent --prompt "web search"')
        assert config.search_command_args == ["agent", "--prompt", "web search"]

    def test_should_resolve_analytics_path_inside_cache_dir(self, tmp_path):
        """Test relative analytics file resolution."""
        config = AppConfig(
            _env_file=None, cache_dir=str(tmp_path), analytics_file="stats.jsonl"
        )
        assert config.analytics_path == tmp_path / "stats.jsonl"

    def test_should_keep_absolute_analytics_path(self, tmp_path):
        """Test absolute analytics file."""
        target = tmp_path / "elsewhere" / "a.jsonl"
        config = AppConfig(_env_file=None, analytics_file=str(target))
        assert config.analytics_path == Path(target)

    def test_should_build_redis_url_with_password(self):
        """Test Redis URL with password."""
        config = AppConfig(
            _env_file=None,
            redis_host="localhost",
            redis_port=6379,
            redis_db=0,
            redis_password="secret",
        )
        assert config.redis_url == "redis://:secret@localhost:6379/0"
