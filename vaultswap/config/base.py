"""
Base configuration for vaultswap.

Settings are read from the process environment, with a local .env file
loaded first. Subclasses declare their fields as dataclass defaults and
validate them in __post_init__.
"""

import os
import logging
from typing import Any, Dict, Optional
from dataclasses import dataclass
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

VALID_ENVIRONMENTS = ("local", "dev", "staging", "production", "test")


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


@dataclass
class BaseConfig:
    """Environment and logging settings shared by every config section."""

    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "local")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    def __post_init__(self):
        self._setup_logging()
        self._validate_config()

    def _setup_logging(self):
        logging.basicConfig(
            level=getattr(logging, self.LOG_LEVEL.upper(), logging.INFO),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    def _validate_config(self):
        if self.ENVIRONMENT not in VALID_ENVIRONMENTS:
            raise ConfigError(f"Invalid environment: {self.ENVIRONMENT}")

    @staticmethod
    def get_env(key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
        """
        Read an environment variable.

        Args:
            key: Environment variable name
            default: Value used when the variable is unset
            required: Fail instead of returning None when unset

        Raises:
            ConfigError: If a required variable is missing
        """
        value = os.getenv(key, default)
        if required and value is None:
            raise ConfigError(f"Required environment variable '{key}' is not set")
        return value

    @staticmethod
    def get_env_int(key: str, default: Optional[int] = None, required: bool = False) -> int:
        """Read an environment variable as an integer (chain ids, fee rates, decimals)."""
        value = BaseConfig.get_env(key, str(default) if default is not None else None, required)
        try:
            return int(value)
        except (ValueError, TypeError):
            raise ConfigError(f"Environment variable '{key}' must be an integer, got: {value}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            field: getattr(self, field)
            for field in self.__dataclass_fields__
            if not field.startswith('_')
        }
