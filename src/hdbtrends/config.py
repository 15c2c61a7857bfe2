"""
Centralized Configuration Module

Provides configuration classes and environment variable loading for all components.

Usage:
    from hdbtrends.config import get_config

    config = get_config()
    dataset_id = config.data_source.dataset_id
    api_port = config.api.port
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional

from dotenv import load_dotenv

from hdbtrends.exceptions import ConfigurationError

# Load .env file if present
load_dotenv()


def _env_number(cast: Callable[[str], Any], name: str, default: str) -> Any:
    """Read a numeric environment variable.

    Raises:
        ConfigurationError: If the variable is set but is not a number.
    """
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")


def _get_project_root() -> Path:
    """Get the project root directory."""
    # Go up: config.py -> hdbtrends -> src -> project_root
    current = Path(__file__).resolve()
    return current.parent.parent.parent


@dataclass
class DataSourceConfig:
    """data.gov.sg resale dataset configuration."""

    base_url: str = field(default_factory=lambda: os.getenv(
        "HDBTRENDS_BASE_URL",
        "https://data.gov.sg/api/action/datastore_search",
    ))
    dataset_id: str = field(default_factory=lambda: os.getenv(
        "HDBTRENDS_DATASET_ID", "f1765b54-a209-4718-8d38-a39237f502b3"
    ))
    months_to_fetch: int = field(default_factory=lambda: _env_number(int, "HDBTRENDS_MONTHS_TO_FETCH", "24"))
    chunk_size: int = field(default_factory=lambda: _env_number(int, "HDBTRENDS_CHUNK_SIZE", "4"))
    request_delay: float = field(default_factory=lambda: _env_number(float, "HDBTRENDS_REQUEST_DELAY", "0.2"))
    request_timeout: float = field(default_factory=lambda: _env_number(float, "HDBTRENDS_REQUEST_TIMEOUT", "30"))
    max_retries: int = field(default_factory=lambda: _env_number(int, "HDBTRENDS_MAX_RETRIES", "2"))
    snapshot_path: Optional[str] = field(default_factory=lambda: os.getenv(
        "HDBTRENDS_SNAPSHOT_PATH"
    ))

    def __post_init__(self):
        if self.months_to_fetch < 1:
            self.months_to_fetch = 1
        if self.chunk_size < 1:
            self.chunk_size = 1
        if self.max_retries < 0:
            self.max_retries = 0
        # Resolve relative paths
        if self.snapshot_path and not os.path.isabs(self.snapshot_path):
            self.snapshot_path = str(_get_project_root() / self.snapshot_path)


@dataclass
class APIConfig:
    """API server configuration."""

    host: str = field(default_factory=lambda: os.getenv(
        "HDBTRENDS_API_HOST", "127.0.0.1"
    ))
    port: int = field(default_factory=lambda: _env_number(int, "HDBTRENDS_API_PORT", "5000"))
    debug: bool = field(default_factory=lambda: os.getenv(
        "HDBTRENDS_DEBUG", "false"
    ).lower() in ("true", "1", "yes"))
    cache_max_age: int = field(default_factory=lambda: _env_number(int, "HDBTRENDS_CACHE_MAX_AGE", "86400"))


@dataclass
class DashboardConfig:
    """Dashboard orchestration defaults."""

    default_window_months: int = field(default_factory=lambda: _env_number(
        int, "HDBTRENDS_DEFAULT_WINDOW_MONTHS", "12"
    ))
    cache_size: int = field(default_factory=lambda: _env_number(int, "HDBTRENDS_CACHE_SIZE", "32"))

    def __post_init__(self):
        if self.default_window_months < 1:
            self.default_window_months = 1
        if self.cache_size < 0:
            self.cache_size = 0


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: os.getenv(
        "HDBTRENDS_LOG_LEVEL", "INFO"
    ).upper())
    log_file: Optional[str] = field(default_factory=lambda: os.getenv(
        "HDBTRENDS_LOG_FILE"
    ))

    def __post_init__(self):
        # Validate log level
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.level not in valid_levels:
            self.level = "INFO"


@dataclass
class Config:
    """Main configuration container."""

    data_source: DataSourceConfig = field(default_factory=DataSourceConfig)
    api: APIConfig = field(default_factory=APIConfig)
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Singleton instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance.

    Returns:
        Config: The application configuration.
    """
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Reset the configuration (useful for testing)."""
    global _config
    _config = None
