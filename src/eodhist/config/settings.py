"""
Centralized configuration management for eodhist.

This module provides configuration settings for:
- The vendor API (base URL, token, timeout)
- Logging configuration
- Quote validation thresholds

Configuration priority (highest to lowest):
1. Explicit parameters (e.g., client constructor arguments)
2. Environment variables (EODHD_API_TOKEN, EODHIST_*)
3. User config file (~/.eodhistrc)
4. Default values
"""

from dataclasses import dataclass, field
from typing import Any, Optional
import math
import os

from .user_config import UserConfig
from ..utils.logging import get_logger, LOG_LEVELS

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://eodhistoricaldata.com/api"


def _parse_timeout(value: Any, source: str) -> Optional[float]:
    """
    Convert a configured timeout to seconds.

    Returns:
        Positive finite float, or None (with a warning) if the value is unusable
    """
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        timeout = None

    if timeout is None or not math.isfinite(timeout) or timeout <= 0:
        logger.warning(f"Ignoring invalid timeout {value!r} from {source}, keeping default")
        return None

    return timeout


@dataclass
class ApiConfig:
    """Vendor API settings."""

    base_url: str = DEFAULT_BASE_URL
    token: Optional[str] = None
    timeout: float = 30.0


@dataclass
class LoggingConfig:
    """Logging configuration settings."""

    log_dir: str = "logs"
    log_level: str = "WARNING"
    console_output: bool = True
    file_output: bool = False
    max_log_size_mb: int = 10
    backup_count: int = 5

    @property
    def max_bytes(self) -> int:
        """Get max log size in bytes."""
        return self.max_log_size_mb * 1_000_000


@dataclass
class ValidationConfig:
    """Quote validation configuration settings."""

    # Minimum rows before a history is considered complete
    min_data_points: int = 5

    # Maximum single-day adjusted close move (absolute value)
    max_single_day_return: float = 0.50  # 50%

    # Require OHLC consistency
    validate_ohlc: bool = True

    # Share of zero-volume days that triggers a warning
    max_zero_volume_pct: float = 0.05


@dataclass
class Settings:
    """Main application settings."""

    api: ApiConfig = field(default_factory=ApiConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)

    @classmethod
    def load_from_env(cls, user_config: Optional[UserConfig] = None) -> 'Settings':
        """
        Load settings from the user config file and environment variables.

        Environment variables:
            EODHD_API_TOKEN: API token (overrides ~/.eodhistrc)
            EODHIST_BASE_URL: API base URL
            EODHIST_TIMEOUT: Request timeout in seconds
            EODHIST_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
            EODHIST_LOG_DIR: Log directory

        Unusable timeout or log level values are logged and ignored.

        Args:
            user_config: UserConfig to read from (defaults to ~/.eodhistrc)

        Returns:
            Settings instance
        """
        settings = cls()
        user_config = user_config or UserConfig()

        # User config file
        if token := user_config.get_api_token():
            settings.api.token = token

        if base_url := user_config.get('api.base_url'):
            settings.api.base_url = str(base_url)

        if (timeout := user_config.get('api.timeout')) is not None:
            if (seconds := _parse_timeout(timeout, str(user_config.config_path))) is not None:
                settings.api.timeout = seconds

        # Environment variables
        if token := os.getenv('EODHD_API_TOKEN'):
            settings.api.token = token

        if base_url := os.getenv('EODHIST_BASE_URL'):
            settings.api.base_url = base_url

        if timeout := os.getenv('EODHIST_TIMEOUT'):
            if (seconds := _parse_timeout(timeout, 'EODHIST_TIMEOUT')) is not None:
                settings.api.timeout = seconds

        if log_level := os.getenv('EODHIST_LOG_LEVEL'):
            if log_level.strip().upper() in LOG_LEVELS:
                settings.logging.log_level = log_level.strip().upper()
            else:
                logger.warning(
                    f"Ignoring unknown EODHIST_LOG_LEVEL {log_level!r}, "
                    f"keeping {settings.logging.log_level}"
                )

        if log_dir := os.getenv('EODHIST_LOG_DIR'):
            settings.logging.log_dir = log_dir
            settings.logging.file_output = True

        return settings

    @classmethod
    def for_testing(cls) -> 'Settings':
        """
        Create settings for offline tests.

        Returns:
            Settings instance with a dummy token and no log output
        """
        settings = cls()
        settings.api.token = 'test-token'
        settings.api.base_url = 'https://eodhistoricaldata.test/api'
        settings.api.timeout = 5.0
        settings.logging.console_output = False
        settings.logging.file_output = False

        return settings


# Global settings instance
_settings: Optional[Settings] = None


def get_settings(reload: bool = False) -> Settings:
    """
    Get the global settings instance.

    The first call loads and caches settings; later changes to the
    environment are seen only with reload=True.

    Args:
        reload: Force reload settings from environment

    Returns:
        Global Settings instance
    """
    global _settings

    if _settings is None or reload:
        _settings = Settings.load_from_env()

    return _settings
