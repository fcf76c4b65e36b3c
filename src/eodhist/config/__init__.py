"""Configuration for eodhist."""

from .settings import Settings, ApiConfig, LoggingConfig, ValidationConfig, get_settings
from .user_config import UserConfig

__all__ = [
    'Settings',
    'ApiConfig',
    'LoggingConfig',
    'ValidationConfig',
    'UserConfig',
    'get_settings',
]
