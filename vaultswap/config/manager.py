"""
Configuration manager for vaultswap.

This module provides a centralized way to access all configuration settings
across the application. It combines all configuration classes into a single
easy-to-use interface.
"""

import logging
from typing import Dict, Any
from .base import BaseConfig, ConfigError
from .chains import ChainConfig
from .pricing import PricingConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Centralized configuration manager that combines all configuration classes.

    This class provides easy access to all configuration settings and ensures
    that configurations are properly initialized and validated.
    """

    def __init__(self, environment: str = None):
        """
        Initialize the configuration manager.

        Args:
            environment: Override the environment (local, dev, staging, production, test)
        """
        self._environment = environment
        self._base_config = None
        self._chain_config = None
        self._pricing_config = None
        self._initialize_configs()

    def _initialize_configs(self):
        """Initialize all configuration objects."""
        try:
            self._base_config = BaseConfig()
            if self._environment:
                self._base_config.ENVIRONMENT = self._environment
                self._base_config._validate_config()

            self._chain_config = ChainConfig()
            self._pricing_config = PricingConfig()

            logger.info(f"Configuration initialized for environment: {self.environment}")

        except Exception as e:
            logger.error(f"Failed to initialize configuration: {e}")
            raise ConfigError(f"Configuration initialization failed: {e}")

    @property
    def environment(self) -> str:
        """Get current environment."""
        return self._base_config.ENVIRONMENT

    @property
    def base(self) -> BaseConfig:
        """Get base configuration."""
        return self._base_config

    @property
    def chains(self) -> ChainConfig:
        """Get chain configuration."""
        return self._chain_config

    @property
    def pricing(self) -> PricingConfig:
        """Get pricing configuration."""
        return self._pricing_config

    def validate_configuration(self) -> bool:
        """
        Validate all configuration settings.

        Returns:
            True if all configurations are valid

        Raises:
            ConfigError: If any configuration is invalid
        """
        try:
            if not self.chains.RPC_URL.startswith(("http://", "https://", "ws://", "wss://")):
                raise ConfigError(f"Unsupported RPC URL scheme: {self.chains.RPC_URL}")

            if not 0 <= self.chains.NATIVE_DECIMALS <= 255:
                raise ConfigError(
                    f"Native decimals must fit in uint8, got: {self.chains.NATIVE_DECIMALS}"
                )

            if self.chains.VAULT_ADDRESS is None:
                logger.warning("VAULT_ADDRESS not set; settlement requires an explicit address")

            logger.info("Configuration validation successful")
            return True

        except ConfigError as e:
            logger.error(f"Configuration validation failed: {e}")
            raise

    def to_dict(self) -> Dict[str, Any]:
        """Convert all configurations to dictionary format."""
        return {
            "environment": self.environment,
            "base": self.base.to_dict() if self.base else {},
            "chains": self.chains.to_dict() if self.chains else {},
            "pricing": self.pricing.to_dict() if self.pricing else {},
        }

    def __repr__(self) -> str:
        """String representation of the configuration manager."""
        return f"ConfigManager(environment={self.environment})"


# Global configuration manager instance
_config_manager = None


def get_config(environment: str = None, force_reload: bool = False) -> ConfigManager:
    """
    Get the global configuration manager instance.

    Args:
        environment: Override environment
        force_reload: Force reload of configuration

    Returns:
        ConfigManager instance
    """
    global _config_manager

    if _config_manager is None or force_reload:
        _config_manager = ConfigManager(environment=environment)
        _config_manager.validate_configuration()

    return _config_manager


def reload_config(environment: str = None) -> ConfigManager:
    """
    Reload the global configuration manager.

    Args:
        environment: Override environment

    Returns:
        New ConfigManager instance
    """
    return get_config(environment=environment, force_reload=True)
