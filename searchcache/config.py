"""
Application configuration management.

Following Sandi Metz principles:
- Single Responsibility: Configuration loading and validation
- Small class: < 100 lines
- Clear naming: Descriptive property names
"""

import shlex
from pathlib import Path
from typing import List, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """
    Application configuration with validation.

    Loads from environment variables with fallback to .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Application settings
    app_name: str = Field(default="SearchCache", description="Application name")
    app_env: Literal["development", "staging", "production"] = Field(
        default="development", description="Environment"
    )
    log_level: str = Field(default="INFO", description="Logging level")
    debug: bool = Field(default=False, description="Debug mode")

    # API settings
    api_host: str = Field(default="127.0.0.1", description="API host")
    api_port: int = Field(default=8000, ge=1, le=65535, description="API port")

    # Cache settings
    cache_backend: Literal["memory", "file", "redis"] = Field(
        default="file", description="Cache store backend"
    )
    cache_dir: str = Field(default=".search_cache", description="Cache directory")
    cache_namespace: str = Field(
        default="search", min_length=1, description="Cache key namespace"
    )
    cache_ttl_seconds: int = Field(default=3600, gt=0, description="TTL seconds")
    cache_max_entries: int = Field(
        default=0, ge=0, description="Max in-memory entries (0 = unbounded)"
    )

    # Redis settings
    redis_host: str = Field(default="localhost", description="Redis host")
    redis_port: int = Field(default=6379, ge=1, le=65535, description="Redis port")
    redis_db: int = Field(default=0, ge=0, le=15, description="Redis database")
    redis_password: str = Field(default="", description="Redis password")
    redis_max_connections: int = Field(default=10, ge=1, description="Max connections")

    # External search settings
    search_command: str = Field(
        default="", description="Search agent command; query is appended"
    )
    search_timeout_seconds: float = Field(
        default=60.0, gt=0, description="Search timeout"
    )
    search_max_attempts: int = Field(default=1, ge=1, description="Search attempts")
    search_retry_initial_delay: float = Field(
        default=1.0, ge=0.0, description="First retry delay"
    )
    search_retry_max_delay: float = Field(
        default=30.0, ge=0.0, description="Max retry delay"
    )

    # Analytics settings
    analytics_backend: Literal["memory", "file"] = Field(
        default="file", description="Analytics recorder backend"
    )
    analytics_file: str = Field(
        default="analytics.jsonl", description="Analytics log (relative to cache_dir)"
    )
    analytics_max_records: int = Field(
        default=10000, ge=1, description="Records kept for summaries"
    )
    top_queries_limit: int = Field(default=10, ge=1, description="Top queries shown")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def effective_log_level(self) -> str:
        """Get log level, forced to DEBUG in debug mode."""
        return "DEBUG" if self.debug else self.log_level

    @property
    def search_command_args(self) -> List[str]:
        """Get search command split into arguments."""
        return shlex.split(self.search_command)

    @property
    def cache_path(self) -> Path:
        """Get cache directory path."""
        return Path(self.cache_dir).expanduser()

    @property
    def analytics_path(self) -> Path:
        """Resolve analytics log path."""
        path = Path(self.analytics_file).expanduser()
        if path.is_absolute():
            return path
        return self.cache_path / path

    @property
    def redis_url(self) -> str:
        """Build Redis URL."""
        if self.redis_password:
            return (
                f"redis://:{self.redis_password}@"
                f"{self.redis_host}:{self.redis_port}/{self.redis_db}"
            )
        return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"


# Global configuration instance
config = AppConfig()
