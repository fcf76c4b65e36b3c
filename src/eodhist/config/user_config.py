"""
User configuration management for eodhist.

Reads user configuration from ~/.eodhistrc (YAML format), most notably
the eodhistoricaldata API token. The file is edited by the user; the
library never writes it.
"""

import copy
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from eodhist.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".eodhistrc"


class UserConfig:
    """Read-only view of the user configuration in ~/.eodhistrc (YAML format)."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize user configuration.

        Args:
            config_path: Path to config file (defaults to ~/.eodhistrc)
        """
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._config = self._load()

    def _load(self) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Returns:
            Dict containing configuration, or empty dict if file doesn't exist
        """
        if not self.config_path.exists():
            logger.debug(f"Config file not found at {self.config_path}, using defaults")
            return {}

        try:
            with open(self.config_path, 'r') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config file {self.config_path}: {e}")
            return {}
        except OSError as e:
            logger.error(f"Failed to read config file {self.config_path}: {e}")
            return {}

        if config is None:
            logger.warning(f"Config file {self.config_path} is empty")
            return {}

        if not isinstance(config, dict):
            logger.error(f"Config file {self.config_path} must contain a mapping")
            return {}

        logger.debug(f"Loaded config from {self.config_path}")
        return config

    def get_api_token(self) -> Optional[str]:
        """
        Get the API token from configuration.

        Returns:
            Token string, or None if not configured
        """
        token = self.get('api.token')
        return str(token) if token else None

    def get_all(self) -> Dict[str, Any]:
        """Return a copy of the whole configuration."""
        return copy.deepcopy(self._config)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Configuration key (supports nested keys with dots, e.g. 'api.token')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        current = self._config

        try:
            for k in key.split('.'):
                current = current[k]
            return current
        except (KeyError, TypeError):
            return default
